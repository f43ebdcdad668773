"""Pytest configuration and shared fixtures for btclient tests."""

from __future__ import annotations

import ipaddress
import logging
import threading
from pathlib import Path
from typing import Any, Callable

import pytest

from btclient.engine.base import RateLimits
from btclient.utils.shutdown import clear_shutdown


class FakeJob:
    """Transfer job double that completes on demand."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._callbacks: list[Callable[[], None]] = []
        self.completed = False

    def on_completion(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if not self.completed:
                self._callbacks.append(callback)
                return
        callback()

    def complete(self) -> None:
        with self._lock:
            if self.completed:
                return
            self.completed = True
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()


class FakeEngine:
    """Engine double counting lifecycle calls, with fault injection.

    ``complete`` controls when the job finishes: ``"immediately"`` (before
    the observer is attached), ``"later"`` (from a timer thread) or
    ``"never"``.
    """

    def __init__(
        self,
        complete: str = "immediately",
        fail_on: str | None = None,
        events: list[str] | None = None,
    ) -> None:
        self.complete = complete
        self.fail_on = fail_on
        self.events = events if events is not None else []
        self.start_calls = 0
        self.stop_calls = 0
        self.bind_address: ipaddress.IPv4Address | None = None
        self.jobs: list[tuple[Path, Path]] = []
        self.limits: RateLimits | None = None
        self.job: FakeJob | None = None

    def __call__(self, limits: RateLimits) -> FakeEngine:
        self.limits = limits
        return self

    def start(self, bind_address: ipaddress.IPv4Address) -> None:
        self.start_calls += 1
        self.events.append("start")
        if self.fail_on == "start":
            msg = "address already in use"
            raise OSError(msg)
        self.bind_address = bind_address

    def add_transfer_job(self, descriptor_path: Path, output_path: Path) -> FakeJob:
        self.events.append("add")
        if self.fail_on == "add":
            msg = "not a torrent file"
            raise ValueError(msg)
        self.jobs.append((descriptor_path, output_path))
        self.job = FakeJob()
        if self.complete == "immediately":
            self.job.complete()
        elif self.complete == "later":
            timer = threading.Timer(0.05, self.job.complete)
            timer.daemon = True
            timer.start()
        return self.job

    def stop(self) -> None:
        self.stop_calls += 1
        self.events.append("stop")
        if self.fail_on == "stop":
            msg = "socket close failed"
            raise OSError(msg)


class FakeResolver:
    """Resolver double returning a fixed address or raising."""

    def __init__(
        self,
        address: str = "192.0.2.10",
        error: Exception | None = None,
    ) -> None:
        self.address = ipaddress.IPv4Address(address)
        self.error = error
        self.requested: list[str | None] = []

    def resolve(self, interface_name: str | None = None) -> ipaddress.IPv4Address:
        self.requested.append(interface_name)
        if self.error is not None:
            raise self.error
        return self.address


class FakeClock:
    """Simulated sleep that records requested delays."""

    def __init__(self, events: list[str] | None = None) -> None:
        self.sleeps: list[float] = []
        self.events = events if events is not None else []

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.events.append(f"sleep:{seconds}")

    @property
    def elapsed(self) -> float:
        return sum(self.sleeps)


@pytest.fixture
def events() -> list[str]:
    return []


@pytest.fixture
def engine(events: list[str]) -> FakeEngine:
    return FakeEngine(events=events)


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def make_engine(events: list[str]) -> Callable[..., FakeEngine]:
    """Build engines sharing the test's event log."""

    def factory(**kwargs: Any) -> FakeEngine:
        return FakeEngine(events=events, **kwargs)

    return factory


@pytest.fixture
def make_resolver() -> type[FakeResolver]:
    return FakeResolver


@pytest.fixture
def clock(events: list[str]) -> FakeClock:
    return FakeClock(events=events)


@pytest.fixture
def cli_obj(engine: FakeEngine, resolver: FakeResolver, clock: FakeClock) -> dict[str, Any]:
    """Collaborator overrides passed to the click command as ctx.obj."""
    return {"engine_factory": engine, "resolver": resolver, "sleep": clock.sleep}


@pytest.fixture(autouse=True)
def reset_shutdown_flag():
    """Each test starts with the process shutdown flag cleared."""
    clear_shutdown()
    yield
    clear_shutdown()


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Clean up logging handlers after each test to prevent closed file errors."""
    yield
    for logger_name in list(logging.Logger.manager.loggerDict.keys()):
        logger = logging.getLogger(logger_name)
        for handler in logger.handlers[:]:
            handler.close()
            logger.removeHandler(handler)

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)

    # setup_logging stops propagation; restore it so caplog sees later records
    btclient_logger = logging.getLogger("btclient")
    btclient_logger.propagate = True
    btclient_logger.setLevel(logging.NOTSET)
