"""btclient - command-line launcher for a BitTorrent transfer engine."""

from __future__ import annotations

__version__ = "0.1.0"

from btclient.models import ExitCode, InvocationConfig, RunState
from btclient.net.address import AddressResolver
from btclient.session.lifecycle import LifecycleOrchestrator
from btclient.utils.events import CompletionSignal

__all__ = [
    "AddressResolver",
    "CompletionSignal",
    "ExitCode",
    "InvocationConfig",
    "LifecycleOrchestrator",
    "RunState",
    "__version__",
]
