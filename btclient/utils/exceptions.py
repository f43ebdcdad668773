"""Exception hierarchy for btclient.

Every fault the launcher can report derives from BTClientError so the
orchestration boundary can catch, log and map it to an exit code.
"""

from __future__ import annotations

from typing import Any


class BTClientError(Exception):
    """Base exception for all btclient errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """Initialize btclient error."""
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class NetworkError(BTClientError):
    """Network-related errors."""


class NoUsableAddressError(NetworkError):
    """No IPv4 address could be determined to bind on."""


class InterfaceNotFoundError(NoUsableAddressError):
    """The requested network interface does not exist."""

    def __init__(self, interface_name: str):
        """Initialize with the missing interface name."""
        super().__init__(
            f"Network interface '{interface_name}' not found",
            {"interface": interface_name},
        )
        self.interface_name = interface_name


class NoIPv4AddressError(NoUsableAddressError):
    """Neither the interface nor the local host exposes an IPv4 address."""


class EngineError(BTClientError):
    """Transfer engine load, start, registration or runtime errors."""
