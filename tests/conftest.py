"""Pytest configuration and shared fixtures."""

from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest

from clerq.application.registry import ServiceRegistry
from clerq.infrastructure.in_memory_set_store import InMemorySetStore
from clerq.infrastructure.network_address import StaticAddressResolver
from clerq.ports.clock import ClockPort
from clerq.ports.port_probe import PortProbePort

LOCAL_HOST = "10.0.0.5"


class ManualClock(ClockPort):
    """Clock that only moves when told to."""

    def __init__(self, start: datetime | None = None):
        self._now = start or datetime(2024, 1, 1, tzinfo=UTC)

    def now(self) -> datetime:
        return self._now

    def advance(self, seconds: float = 0.0, milliseconds: float = 0.0) -> None:
        self._now += timedelta(seconds=seconds, milliseconds=milliseconds)


class FakePortProbe(PortProbePort):
    """Probe that treats every port as free except the ones marked busy."""

    def __init__(self, default: int = 40000):
        self.default = default
        self.busy: set[int] = set()
        self.calls: list[int | None] = []

    async def find_free_port(self, start: int | None = None) -> int:
        self.calls.append(start)
        port = self.default if start is None else start
        while port in self.busy:
            port += 1
        return port


@pytest.fixture
def clock():
    """Create a controllable clock."""
    return ManualClock()


@pytest.fixture
def store(clock):
    """Create an in-memory set store driven by the manual clock."""
    return InMemorySetStore(clock=clock)


@pytest.fixture
def port_probe():
    """Create a fake free-port probe."""
    return FakePortProbe()


@pytest.fixture
def resolver():
    """Create a resolver pinned to a fixed local address."""
    return StaticAddressResolver(LOCAL_HOST)


@pytest.fixture
def mock_logger():
    """Create a mock logger for testing."""
    mock = MagicMock()
    mock.debug = MagicMock()
    mock.info = MagicMock()
    mock.warning = MagicMock()
    mock.error = MagicMock()
    return mock


@pytest.fixture
def make_registry(store, port_probe, resolver, clock, mock_logger):
    """Build registries sharing the same in-memory store."""

    def factory(**options):
        return ServiceRegistry(
            options,
            store=store,
            port_probe=port_probe,
            address_resolver=resolver,
            clock=clock,
            logger=mock_logger,
        )

    return factory


@pytest.fixture
def local_host():
    """The address the static resolver hands out."""
    return LOCAL_HOST
