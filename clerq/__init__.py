"""
clerq - Redis backed service registry and discovery.

Services register ``host:port`` addresses under a shared key prefix, clients
look them up, and registrations that stop being refreshed expire on their own.
"""

__version__ = "0.1.0"

from .application.registry import ServiceRegistry
from .domain.exceptions import (
    ClerqError,
    InvalidOptionsError,
    InvalidServiceError,
    PortAllocationError,
    StoreError,
    StoreNotConnectedError,
)
from .infrastructure.config import RedisConnectionConfig, RegistryConfig

__all__ = [
    "ClerqError",
    "InvalidOptionsError",
    "InvalidServiceError",
    "PortAllocationError",
    "RedisConnectionConfig",
    "RegistryConfig",
    "ServiceRegistry",
    "StoreError",
    "StoreNotConnectedError",
]
