"""Application layer - registry, read cache and port allocation."""

from .port_allocator import PortAllocator
from .read_cache import CacheEntry, ReadCache
from .registry import ServiceRegistry

__all__ = [
    "CacheEntry",
    "PortAllocator",
    "ReadCache",
    "ServiceRegistry",
]
