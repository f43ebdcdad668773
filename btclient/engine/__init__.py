"""Transfer engine interface and loading."""

from __future__ import annotations

from btclient.engine.base import EngineFactory, RateLimits, TransferEngine, TransferJob
from btclient.engine.loader import load_engine_factory

__all__ = [
    "EngineFactory",
    "RateLimits",
    "TransferEngine",
    "TransferJob",
    "load_engine_factory",
]
