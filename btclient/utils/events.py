"""One-shot completion signalling between engine callbacks and the launcher."""

from __future__ import annotations

import threading


class CompletionSignal:
    """One-shot notification with two states, pending and signaled.

    ``set`` may be called any number of times from any thread; only the
    first call has an effect. Waiters block while pending and return
    immediately once signaled, including waiters that arrive late.
    """

    def __init__(self) -> None:
        self._condition = threading.Condition(threading.Lock())
        self._signaled = False

    def set(self) -> None:
        """Transition to signaled and wake every waiter."""
        with self._condition:
            if self._signaled:
                return
            self._signaled = True
            self._condition.notify_all()

    def is_set(self) -> bool:
        """Return True once the signal has fired."""
        with self._condition:
            return self._signaled

    def wait(self, timeout: float | None = None) -> bool:
        """Block until signaled or until ``timeout`` seconds have passed.

        Returns:
            True if the signal fired, False on timeout

        """
        with self._condition:
            return self._condition.wait_for(lambda: self._signaled, timeout)
