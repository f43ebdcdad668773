"""Rich logging integration for btclient.

Provides the Rich console handler and the plain-text layout used for log
files.
"""

from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

PLAIN_FORMAT = "%(asctime)s [%(threadName)-25s] %(levelname)-5s: %(message)s"


def create_rich_handler(
    console: Console | None = None,
    level: int = logging.INFO,
    show_path: bool = False,
    rich_tracebacks: bool = True,
) -> logging.Handler:
    """Create a RichHandler writing to standard error.

    Args:
        console: Optional Rich Console instance
        level: Log level
        show_path: Whether to show file paths in log output
        rich_tracebacks: Whether to use rich tracebacks

    Returns:
        Configured RichHandler instance

    Note:
        Markup is disabled: messages carry file paths and addresses, whose
        square brackets Rich would otherwise try to interpret.

    """
    if console is None:
        console = Console(file=sys.stderr)

    handler = RichHandler(
        console=console,
        level=level,
        show_path=show_path,
        rich_tracebacks=rich_tracebacks,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    return handler
