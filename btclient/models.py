"""Pydantic models for btclient.

Provides the validated invocation configuration and the enums describing a
single launcher run.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

DEFAULT_OUTPUT_DIRECTORY = Path("/tmp")  # nosec B108 - historical default


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    USAGE = 1
    FAULT = 2


class RunState(Enum):
    """Lifecycle states of a single run."""

    NOT_STARTED = "not_started"
    RESOLVING = "resolving"
    STARTING = "starting"
    AWAITING_COMPLETION = "awaiting_completion"
    SEEDING = "seeding"
    STOPPED = "stopped"


class InvocationConfig(BaseModel):
    """Validated command-line configuration for one run."""

    model_config = {"frozen": True}

    torrent_file: Path = Field(..., description="Path to the .torrent file")
    output_directory: Path = Field(
        DEFAULT_OUTPUT_DIRECTORY,
        description="Directory data is read from and written to",
    )
    interface_name: str | None = Field(
        None,
        description="Network interface to bind on",
    )
    seed_seconds: int | None = Field(
        None,
        description="Seconds to keep seeding after completion",
    )
    max_upload_rate: float | None = Field(
        None,
        ge=0.0,
        description="Maximum upload rate in KB/s (0 or unset: unlimited)",
    )
    max_download_rate: float | None = Field(
        None,
        ge=0.0,
        description="Maximum download rate in KB/s (0 or unset: unlimited)",
    )
    engine: str | None = Field(
        None,
        description="Transfer engine reference as 'module:attribute'",
    )
    verbosity: int = Field(0, ge=0, description="Number of -v flags")

    @field_validator("interface_name")
    @classmethod
    def validate_interface_name(cls, v: str | None) -> str | None:
        """Reject empty interface names and trim surrounding whitespace."""
        if v is not None and not v.strip():
            msg = "Interface name must not be empty"
            raise ValueError(msg)
        return v if v is None else v.strip()

    @field_validator("seed_seconds")
    @classmethod
    def normalize_seed_seconds(cls, v: int | None) -> int | None:
        """Map the negative 'unset' sentinel to None."""
        if v is not None and v < 0:
            return None
        return v

    @property
    def seeds_after_completion(self) -> bool:
        """Whether the run keeps seeding once the download completes."""
        return self.seed_seconds is not None and self.seed_seconds > 0
