"""Local network address discovery."""

from __future__ import annotations

from btclient.net.address import AddressResolver

__all__ = ["AddressResolver"]
