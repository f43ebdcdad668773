"""Verbosity management for the btclient CLI.

Maps the number of -v flags to a logging level.
"""

from __future__ import annotations

from enum import IntEnum

from btclient.models import LogLevel


class VerbosityLevel(IntEnum):
    """Verbosity levels for the CLI."""

    NORMAL = 0  # Default: errors, warnings, info
    VERBOSE = 1  # -v: same levels, kept for symmetry with -vv
    DEBUG = 2  # -vv: All above + debug messages


class VerbosityManager:
    """Manages verbosity levels and maps them to logging levels."""

    LEVEL_TO_LOGGING: dict[VerbosityLevel, LogLevel] = {
        VerbosityLevel.NORMAL: LogLevel.INFO,
        VerbosityLevel.VERBOSE: LogLevel.INFO,
        VerbosityLevel.DEBUG: LogLevel.DEBUG,
    }

    def __init__(self, verbosity_count: int = 0):
        """Initialize verbosity manager.

        Args:
            verbosity_count: Number of -v flags

        """
        self.verbosity_count = max(0, min(int(VerbosityLevel.DEBUG), verbosity_count))
        self.level = VerbosityLevel(self.verbosity_count)
        self.log_level = self.LEVEL_TO_LOGGING[self.level]

