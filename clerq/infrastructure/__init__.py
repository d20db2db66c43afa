"""Infrastructure layer - Concrete implementations of ports."""

from .config import RedisConnectionConfig, RegistryConfig
from .in_memory_set_store import InMemorySetStore
from .network_address import NetworkAddressResolver, StaticAddressResolver
from .redis_set_store import RedisSetStore
from .simple_logger import SimpleLogger
from .socket_port_probe import SocketPortProbe
from .system_clock import SystemClock

__all__ = [
    "InMemorySetStore",
    "NetworkAddressResolver",
    "RedisConnectionConfig",
    "RedisSetStore",
    "RegistryConfig",
    "SimpleLogger",
    "SocketPortProbe",
    "StaticAddressResolver",
    "SystemClock",
]
