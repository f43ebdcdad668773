"""Global shutdown state management.

Provides a global flag to track shutdown state and a context manager that
turns termination signals into an interruption of the main thread.
"""

from __future__ import annotations

import contextlib
import signal
import threading
from typing import Any, Iterator

# Global shutdown flag (thread-safe)
_shutdown_flag: threading.Event = threading.Event()
_shutdown_lock: threading.Lock = threading.Lock()


class ShutdownRequested(KeyboardInterrupt):
    """Raised in the main thread when a termination signal arrives."""

    def __init__(self, signum: int):
        """Initialize with the received signal number."""
        try:
            name = signal.Signals(signum).name
        except ValueError:
            name = str(signum)
        super().__init__(f"Interrupted by {name}")
        self.signum = signum


def is_shutting_down() -> bool:
    """Check if shutdown is in progress.

    Returns:
        True if shutdown has been initiated, False otherwise
    """
    return _shutdown_flag.is_set()


def set_shutdown() -> None:
    """Mark that shutdown has been initiated."""
    with _shutdown_lock:
        _shutdown_flag.set()


def clear_shutdown() -> None:
    """Clear shutdown flag (for testing)."""
    with _shutdown_lock:
        _shutdown_flag.clear()


def _handle_signal(signum: int, _frame: Any) -> None:
    set_shutdown()
    raise ShutdownRequested(signum)


@contextlib.contextmanager
def interrupt_on_signals(
    signums: tuple[int, ...] = (signal.SIGINT, signal.SIGTERM),
) -> Iterator[None]:
    """Raise ShutdownRequested in the main thread on the given signals.

    Previous handlers are restored on exit. Outside the main thread this is
    a no-op, since Python only delivers signals to the main thread.
    """
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    previous: dict[int, Any] = {}
    for signum in signums:
        previous[signum] = signal.signal(signum, _handle_signal)
    try:
        yield
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
