"""Run lifecycle of the launcher.

A run walks ``NOT_STARTED -> RESOLVING -> STARTING -> AWAITING_COMPLETION
-> SEEDING -> STOPPED``. A fault in any state jumps straight to ``STOPPED``;
once the engine exists it is stopped exactly once on every path.
"""

from __future__ import annotations

import contextlib
import time
from typing import TYPE_CHECKING, Callable, Iterator

from btclient.engine.base import EngineFactory, RateLimits, TransferEngine
from btclient.models import ExitCode, InvocationConfig, RunState
from btclient.net.address import AddressResolver
from btclient.utils.events import CompletionSignal
from btclient.utils.exceptions import EngineError
from btclient.utils.logging_config import get_logger, log_exception
from btclient.utils.shutdown import is_shutting_down, set_shutdown

if TYPE_CHECKING:
    from ipaddress import IPv4Address

logger = get_logger(__name__)


@contextlib.contextmanager
def engine_session(engine: TransferEngine) -> Iterator[TransferEngine]:
    """Own ``engine`` for the duration of the block and stop it on exit.

    A failure while stopping is logged and never replaces the exception
    (or result) of the block itself.
    """
    try:
        yield engine
    except KeyboardInterrupt:
        set_shutdown()
        raise
    finally:
        if is_shutting_down():
            logger.info("Shutdown requested, stopping transfer engine")
        try:
            engine.stop()
        except Exception:
            logger.exception("Error stopping transfer engine")
        else:
            logger.debug("Transfer engine stopped")


class LifecycleOrchestrator:
    """Drives one download from engine start to guaranteed teardown."""

    def __init__(
        self,
        engine_factory: EngineFactory,
        resolver: AddressResolver | None = None,
        sleep: Callable[[float], None] | None = None,
        signal_factory: Callable[[], CompletionSignal] = CompletionSignal,
    ) -> None:
        """Initialize the orchestrator.

        Args:
            engine_factory: Builds an engine from the configured rate limits
            resolver: Bind address resolver
            sleep: Used for the post-completion seeding delay
            signal_factory: Builds the completion signal for each run

        """
        self._engine_factory = engine_factory
        self._resolver = resolver or AddressResolver()
        self._sleep = sleep or time.sleep
        self._signal_factory = signal_factory
        self.state = RunState.NOT_STARTED

    def run(self, config: InvocationConfig) -> ExitCode:
        """Execute one run and map its outcome to an exit code.

        No exception escapes: every fault is logged and reported as
        ExitCode.FAULT.
        """
        self.state = RunState.NOT_STARTED
        try:
            engine = self._create_engine(config)
            with engine_session(engine):
                self._drive(engine, config)
        except KeyboardInterrupt as e:
            set_shutdown()
            log_exception(logger, e, "Fatal error")
            return ExitCode.FAULT
        except Exception as e:
            log_exception(logger, e, "Fatal error")
            return ExitCode.FAULT
        finally:
            self._transition(RunState.STOPPED)

        return ExitCode.SUCCESS

    def _create_engine(self, config: InvocationConfig) -> TransferEngine:
        limits = RateLimits(
            max_upload_rate=config.max_upload_rate,
            max_download_rate=config.max_download_rate,
        )
        try:
            return self._engine_factory(limits)
        except EngineError:
            raise
        except Exception as e:
            msg = f"Failed to create transfer engine: {e}"
            raise EngineError(msg) from e

    def _drive(self, engine: TransferEngine, config: InvocationConfig) -> None:
        self._transition(RunState.RESOLVING)
        address = self._resolver.resolve(config.interface_name)

        self._transition(RunState.STARTING)
        self._start(engine, address)

        torrent_path = config.torrent_file.absolute()
        output_path = config.output_directory.absolute()
        try:
            job = engine.add_transfer_job(torrent_path, output_path)
        except Exception as e:
            msg = f"Failed to add torrent {torrent_path}: {e}"
            raise EngineError(msg, {"output": str(output_path)}) from e

        completed = self._signal_factory()
        # Attached before waiting; the signal remembers an early completion
        job.on_completion(completed.set)

        self._transition(RunState.AWAITING_COMPLETION)
        completed.wait()
        logger.info("Download of %s complete", torrent_path.name)

        if config.seeds_after_completion:
            self._transition(RunState.SEEDING)
            logger.info("Seeding for %d seconds", config.seed_seconds)
            self._sleep(config.seed_seconds)

    def _start(self, engine: TransferEngine, address: IPv4Address) -> None:
        logger.info("Starting transfer engine on %s", address)
        try:
            engine.start(address)
        except Exception as e:
            msg = f"Failed to start transfer engine on {address}: {e}"
            raise EngineError(msg, {"bind_address": str(address)}) from e

    def _transition(self, state: RunState) -> None:
        logger.debug("Run state transition: %s -> %s", self.state.value, state.value)
        self.state = state
