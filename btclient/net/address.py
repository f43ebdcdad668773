"""Bind address resolution.

Picks the single IPv4 address the transfer engine binds its listener to.

The launcher is IPv4 only on purpose: compact peer lists from trackers, UDP
tracker announces and peer exchange all carry IPv4 addresses, so an IPv6
bind address would leave the engine unreachable through those extensions.
"""

from __future__ import annotations

import ipaddress
import socket
from typing import Any, Callable, Mapping, Sequence

import psutil

from btclient.utils.exceptions import InterfaceNotFoundError, NoIPv4AddressError
from btclient.utils.logging_config import get_logger

logger = get_logger(__name__)

InterfaceTable = Callable[[], Mapping[str, Sequence[Any]]]


class AddressResolver:
    """Resolve a usable IPv4 bind address, optionally for a named interface."""

    def __init__(
        self,
        interfaces: InterfaceTable = psutil.net_if_addrs,
        hostname: Callable[[], str] = socket.gethostname,
        getaddrinfo: Callable[..., list[Any]] = socket.getaddrinfo,
    ) -> None:
        """Initialize the resolver.

        Args:
            interfaces: Returns interface name -> addresses in platform order
                (entries expose ``family`` and ``address``, as psutil's do)
            hostname: Returns the local host name
            getaddrinfo: Host name lookup, same signature as socket.getaddrinfo

        """
        self._interfaces = interfaces
        self._hostname = hostname
        self._getaddrinfo = getaddrinfo

    def resolve(self, interface_name: str | None = None) -> ipaddress.IPv4Address:
        """Return the first IPv4 address of ``interface_name`` or of the local host.

        Raises:
            InterfaceNotFoundError: ``interface_name`` names no interface
            NoIPv4AddressError: no IPv4 address is available to bind on

        """
        if interface_name is not None:
            address = self._interface_address(interface_name)
            if address is not None:
                logger.debug("Using %s from interface %s", address, interface_name)
                return address
            logger.info(
                "Interface %s has no IPv4 address, falling back to local host",
                interface_name,
            )

        address = self._local_host_address()
        if address is not None:
            logger.debug("Using local host address %s", address)
            return address

        msg = "No IPv4 address available to bind on"
        raise NoIPv4AddressError(
            msg,
            {"interface": interface_name} if interface_name else None,
        )

    def _interface_address(self, interface_name: str) -> ipaddress.IPv4Address | None:
        table = self._interfaces()
        if interface_name not in table:
            raise InterfaceNotFoundError(interface_name)

        for addr in table[interface_name]:
            if addr.family == socket.AF_INET:
                return ipaddress.IPv4Address(addr.address)
        return None

    def _local_host_address(self) -> ipaddress.IPv4Address | None:
        hostname = self._hostname()
        try:
            infos = self._getaddrinfo(hostname, None)
        except OSError as e:
            msg = f"Cannot resolve local host name '{hostname}'"
            raise NoIPv4AddressError(msg, {"hostname": hostname}) from e

        # Dual-stack hosts often list IPv6 first; take the first IPv4 entry
        for family, _type, _proto, _canonname, sockaddr in infos:
            if family == socket.AF_INET:
                return ipaddress.IPv4Address(sockaddr[0])
        return None
