"""Unit tests for the socket based free-port probe."""

import socket
import threading

import pytest

from clerq.domain.exceptions import PortAllocationError
from clerq.infrastructure.socket_port_probe import MAX_PORT, SocketPortProbe


class TestSocketPortProbe:
    """Test cases for SocketPortProbe."""

    @pytest.mark.asyncio
    async def test_any_port(self):
        probe = SocketPortProbe("127.0.0.1")

        port = await probe.find_free_port()

        assert 0 < port <= MAX_PORT

    @pytest.mark.asyncio
    async def test_skips_bound_port(self):
        probe = SocketPortProbe("127.0.0.1")

        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as held:
            held.bind(("127.0.0.1", 0))
            held.listen()
            taken = held.getsockname()[1]

            port = await probe.find_free_port(taken)

        assert port > taken

    @pytest.mark.asyncio
    async def test_start_is_returned_when_free(self, monkeypatch):
        probe = SocketPortProbe()
        monkeypatch.setattr(probe, "_can_bind", lambda port: True)

        assert await probe.find_free_port(8688) == 8688

    @pytest.mark.asyncio
    async def test_exhausted_range(self, monkeypatch):
        probe = SocketPortProbe()
        monkeypatch.setattr(probe, "_can_bind", lambda port: False)

        with pytest.raises(PortAllocationError) as exc_info:
            await probe.find_free_port(MAX_PORT - 2)

        assert exc_info.value.start_port == MAX_PORT - 2

    @pytest.mark.asyncio
    async def test_scan_runs_off_the_event_loop(self, monkeypatch):
        probe = SocketPortProbe()
        loop_thread = threading.get_ident()
        seen = []

        def can_bind(port):
            seen.append(threading.get_ident())
            return True

        monkeypatch.setattr(probe, "_can_bind", can_bind)

        assert await probe.find_free_port(9000) == 9000
        assert seen and loop_thread not in seen
