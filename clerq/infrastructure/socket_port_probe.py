"""Socket based free-port probe."""

from __future__ import annotations

import asyncio
import socket

from ..domain.exceptions import PortAllocationError
from ..ports.port_probe import PortProbePort

MAX_PORT = 65535


class SocketPortProbe(PortProbePort):
    """Finds free TCP ports by attempting to bind them.

    A port is reported free if a bind succeeds at probe time; nothing is
    held afterwards, so the caller still races other processes for it.
    """

    def __init__(self, host: str = ""):
        """Initialize the probe.

        Args:
            host: Address to bind while probing (all interfaces by default)
        """
        self._host = host

    def _can_bind(self, port: int) -> bool:
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
                s.bind((self._host, port))
                return True
        except OSError:
            return False

    def _any_port(self) -> int:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind((self._host, 0))
            return s.getsockname()[1]

    def _scan(self, start: int) -> int:
        for port in range(max(start, 1), MAX_PORT + 1):
            if self._can_bind(port):
                return port

        raise PortAllocationError(f"No free port available from {start}", start_port=start)

    async def find_free_port(self, start: int | None = None) -> int:
        """Return the first bindable port at or above ``start``.

        Binding runs in a worker thread so a long scan does not stall the loop.
        """
        if start is None:
            return await asyncio.to_thread(self._any_port)
        return await asyncio.to_thread(self._scan, start)
