"""Local network address resolution using psutil."""

from __future__ import annotations

import socket

import psutil

from ..ports.address_resolver import AddressResolverPort

LOOPBACK = "127.0.0.1"


class NetworkAddressResolver(AddressResolverPort):
    """Resolves the first external IPv4 address of this machine.

    When an interface name is given only that interface is considered.
    Falls back to the loopback address when nothing suitable is found.
    """

    def resolve(self, iface: str | None = None) -> str:
        """Return the local IPv4 address used to build registry addresses."""
        interfaces = psutil.net_if_addrs()
        names = [iface] if iface else list(interfaces)

        for name in names:
            for addr in interfaces.get(name, ()):
                if addr.family != socket.AF_INET:
                    continue
                if addr.address.startswith("127."):
                    continue
                return addr.address

        return LOOPBACK


class StaticAddressResolver(AddressResolverPort):
    """Resolver that always returns a fixed host."""

    def __init__(self, host: str = LOOPBACK):
        self._host = host

    def resolve(self, iface: str | None = None) -> str:
        return self._host
