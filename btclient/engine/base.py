"""Interface of the external transfer engine.

The launcher never implements the BitTorrent protocol itself; it drives an
engine through the narrow surface below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ipaddress import IPv4Address
    from pathlib import Path


@dataclass(frozen=True)
class RateLimits:
    """Transfer rate caps in KB/s; None means unlimited."""

    max_upload_rate: float | None = None
    max_download_rate: float | None = None


@runtime_checkable
class TransferJob(Protocol):
    """A single torrent registered with the engine."""

    def on_completion(self, callback: Callable[[], None]) -> None:
        """Call ``callback`` once when the download completes.

        Registering after completion must still invoke the callback.
        """


@runtime_checkable
class TransferEngine(Protocol):
    """A running BitTorrent engine bound to one local address."""

    def start(self, bind_address: IPv4Address) -> None:
        """Open listeners on ``bind_address`` and begin serving."""

    def add_transfer_job(self, descriptor_path: Path, output_path: Path) -> TransferJob:
        """Register the torrent at ``descriptor_path``, storing data in ``output_path``."""

    def stop(self) -> None:
        """Release every resource; safe to call after a failed or missing start."""


EngineFactory = Callable[[RateLimits], TransferEngine]
