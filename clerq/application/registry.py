"""Service registry and discovery client over a key/set store."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from ..domain.exceptions import InvalidServiceError
from ..domain.keys import build_key, normalize_address, strip_prefix
from ..infrastructure.config import RegistryConfig
from ..ports.address_resolver import AddressResolverPort
from ..ports.clock import ClockPort
from ..ports.logger import LoggerPort
from ..ports.port_probe import PortProbePort
from ..ports.set_store import SetStorePort
from .port_allocator import PortAllocator
from .read_cache import ReadCache

# EXPIRE duration used by destroy(); readers still see the key briefly
DESTROY_EXPIRE_SECONDS = 1


class ServiceRegistry:
    """Registers service addresses and discovers them again.

    Each service maps to one set in the store holding its ``host:port``
    addresses. When ``expire`` is configured every access refreshes the key
    TTL, so services that stop refreshing their registration disappear.

    Each instance owns its store connection, read cache and port allocator;
    several registries can live side by side and be stopped independently.
    """

    def __init__(
        self,
        options: RegistryConfig | Mapping[str, Any] | None = None,
        *,
        store: SetStorePort | None = None,
        port_probe: PortProbePort | None = None,
        address_resolver: AddressResolverPort | None = None,
        clock: ClockPort | None = None,
        logger: LoggerPort | None = None,
    ):
        """Initialize the registry.

        Args:
            options: Registry options (prefix, delimiter, expire, cache, iface, redis)
            store: Set store to use. A Redis store is created from options if absent.
            port_probe: Local free-port probe. Socket probing is used if absent.
            address_resolver: Local address resolver. Interface lookup is used if absent.
            clock: Time source for the read cache. System time is used if absent.
            logger: Logger port. A simple logger is used if absent.

        Raises:
            InvalidOptionsError: If options is not a mapping or fails validation
        """
        self._config = RegistryConfig.parse(options)

        if logger is None:
            from ..infrastructure.simple_logger import SimpleLogger

            level = logging.DEBUG if self._config.debug else logging.INFO
            logger = SimpleLogger("clerq.registry", level=level)
        if store is None:
            from ..infrastructure.redis_set_store import RedisSetStore

            store = RedisSetStore(config=self._config.redis, logger=logger)
        if port_probe is None:
            from ..infrastructure.socket_port_probe import SocketPortProbe

            port_probe = SocketPortProbe()
        if address_resolver is None:
            from ..infrastructure.network_address import NetworkAddressResolver

            address_resolver = NetworkAddressResolver()
        if clock is None:
            from ..infrastructure.system_clock import SystemClock

            clock = SystemClock()

        self._logger = logger
        self._store = store
        self._resolver = address_resolver
        self._cache = ReadCache(self._config.cache, clock, logger)
        self._ports = PortAllocator(
            store=store,
            probe=port_probe,
            prefix=self._config.prefix,
            delimiter=self._config.delimiter,
            expire=self._config.expire,
            logger=logger,
        )

    @property
    def config(self) -> RegistryConfig:
        """The effective registry configuration."""
        return self._config

    async def __aenter__(self) -> ServiceRegistry:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()

    # Helpers

    @staticmethod
    def _validate(service: Any) -> None:
        if not isinstance(service, str) or not service:
            raise InvalidServiceError(service)

    def _key(self, service: str | None = None) -> str:
        return build_key(self._config.prefix, self._config.delimiter, service)

    def _address(self, target: Any) -> str | None:
        return normalize_address(target, lambda: self._resolver.resolve(self._config.iface))

    async def _refresh(self, key: str) -> None:
        if self._config.ttl_enabled:
            await self._store.expire(key, self._config.expire)

    # Registration

    async def up(self, service: str, target: int | str) -> int:
        """Register an address for a service.

        Args:
            service: Service name
            target: Port number (bound to the local address) or ``host:port``

        Returns:
            1 if the address was newly added, 0 if it was already registered

        Raises:
            InvalidServiceError: If service is not a non-empty string
            StoreError: If the store fails
        """
        self._validate(service)
        address, key = self._address(target), self._key(service)

        try:
            added = await self._store.add(key, address or "")
            await self._refresh(key)
        except Exception as e:
            self._logger.error("Failed to register service", service=service, error=str(e))
            raise

        self._logger.info("Service registered", service=service, address=address, added=added)
        return added

    async def down(self, service: str, target: int | str) -> int:
        """Remove an address from a service.

        Returns:
            1 if the address was removed, 0 if it was not registered
        """
        self._validate(service)
        address, key = self._address(target), self._key(service)

        try:
            removed = await self._store.remove(key, address or "")
            await self._refresh(key)
        except Exception as e:
            self._logger.error("Failed to deregister service", service=service, error=str(e))
            raise

        self._logger.info("Service deregistered", service=service, address=address, removed=removed)
        return removed

    async def destroy(self, service: str) -> bool:
        """Expire a whole service almost immediately.

        The key is given a one second TTL rather than deleted, so readers in
        flight may still see it briefly.

        Returns:
            True once the expiry was set, whether or not the key existed
        """
        self._validate(service)
        key = self._key(service)

        try:
            await self._store.expire(key, DESTROY_EXPIRE_SECONDS)
        except Exception as e:
            self._logger.error("Failed to destroy service", service=service, error=str(e))
            raise

        self._logger.info("Service destroyed", service=service)
        return True

    # Discovery

    async def get(self, service: str) -> str | None:
        """Return one address of a service, picked at random by the store.

        A fresh read cache entry is returned without touching the store.

        Returns:
            An address, or None if the service has none
        """
        self._validate(service)
        cached = self._cache.get(service)
        if cached is not None:
            return cached

        key = self._key(service)
        try:
            address = await self._store.random_member(key)
            await self._refresh(key)
        except Exception as e:
            self._logger.error("Failed to get service", service=service, error=str(e))
            raise

        if address:
            self._cache.put(service, address)
        self._logger.debug("Service resolved", service=service, address=address)
        return address

    async def all(self, service: str) -> list[str]:
        """Return every registered address of a service (unordered)."""
        self._validate(service)
        key = self._key(service)

        try:
            addresses = await self._store.members(key)
            await self._refresh(key)
        except Exception as e:
            self._logger.error("Failed to list service", service=service, error=str(e))
            raise

        self._cache.put_random(service, addresses)
        self._logger.debug("Service listed", service=service, count=len(addresses))
        return addresses

    async def services(self) -> list[str]:
        """Return the names of all services with a live key."""
        try:
            keys = await self._store.keys(f"{self._config.prefix}*")
        except Exception as e:
            self._logger.error("Failed to list services", error=str(e))
            raise

        common = self._key()
        return [strip_prefix(key, common) for key in keys]

    def is_cached(self, service: str) -> bool:
        """Whether a fresh read cache entry exists for ``service``."""
        return self._cache.is_fresh(service)

    def cache_stats(self) -> dict[str, Any]:
        """Read cache statistics."""
        return self._cache.stats()

    # Ports

    async def find_port(self, start_port: int | None = None, host: str | None = None) -> int:
        """Find a free port, claiming it for ``host`` when one is given."""
        return await self._ports.find_port(start_port, host)

    async def release_port(self, port: int, host: str) -> int:
        """Release a port claimed for ``host``; returns 1 if it was claimed."""
        return await self._ports.release_port(port, host)

    # Lifecycle

    async def stop(self) -> None:
        """Release the store connection."""
        await self._store.close()
        self._logger.info("Service registry is down")
