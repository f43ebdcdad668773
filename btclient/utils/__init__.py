"""Shared utilities and infrastructure."""

from __future__ import annotations

from btclient.utils.events import CompletionSignal
from btclient.utils.exceptions import (
    BTClientError,
    EngineError,
    InterfaceNotFoundError,
    NetworkError,
    NoIPv4AddressError,
    NoUsableAddressError,
)
from btclient.utils.logging_config import get_logger, setup_logging

__all__ = [
    "BTClientError",
    "CompletionSignal",
    "EngineError",
    "InterfaceNotFoundError",
    "NetworkError",
    "NoIPv4AddressError",
    "NoUsableAddressError",
    "get_logger",
    "setup_logging",
]
