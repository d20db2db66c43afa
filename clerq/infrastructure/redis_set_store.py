"""Redis set store adapter - Concrete implementation of SetStorePort."""

from __future__ import annotations

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..domain.exceptions import StoreError, StoreNotConnectedError
from ..ports.logger import LoggerPort
from ..ports.set_store import SetStorePort
from .config import RedisConnectionConfig
from .simple_logger import SimpleLogger


class RedisSetStore(SetStorePort):
    """Redis implementation of the set store port.

    Each registry key is a Redis set; expiry uses the native key TTL so a
    refresh simply re-issues EXPIRE.
    """

    def __init__(
        self,
        client: redis.Redis | None = None,
        config: RedisConnectionConfig | None = None,
        logger: LoggerPort | None = None,
    ):
        """Initialize the Redis set store.

        Args:
            client: Optional pre-built Redis client. Created from config if absent.
            config: Optional connection configuration. Defaults are used if absent.
            logger: Optional logger port. Uses a simple logger if absent.
        """
        self._config = config or RedisConnectionConfig()
        self._client: redis.Redis | None = (
            client if client is not None else self._create_client(self._config)
        )
        self._logger = logger or SimpleLogger("clerq.redis_set_store")

    @staticmethod
    def _create_client(config: RedisConnectionConfig) -> redis.Redis:
        if config.url:
            return redis.from_url(config.url, decode_responses=True)
        return redis.Redis(**config.to_connection_params())

    def _require_client(self, operation: str) -> redis.Redis:
        if self._client is None:
            raise StoreNotConnectedError(operation)
        return self._client

    @staticmethod
    def _require_member(key: str, member: str, operation: str) -> None:
        if not member:
            raise StoreError(
                f"Refusing to {operation} an empty member",
                key=key,
                operation=operation,
            )

    def _wrap(self, error: Exception, key: str | None, operation: str) -> StoreError:
        self._logger.error(
            "Redis operation failed",
            operation=operation,
            key=key,
            error=str(error),
        )
        return StoreError(f"Redis {operation} failed: {error}", key=key, operation=operation)

    async def add(self, key: str, member: str) -> int:
        """Add a member with SADD."""
        client = self._require_client("add")
        self._require_member(key, member, "add")
        try:
            return int(await client.sadd(key, member))
        except RedisError as e:
            raise self._wrap(e, key, "add") from e

    async def remove(self, key: str, member: str) -> int:
        """Remove a member with SREM."""
        client = self._require_client("remove")
        self._require_member(key, member, "remove")
        try:
            return int(await client.srem(key, member))
        except RedisError as e:
            raise self._wrap(e, key, "remove") from e

    async def members(self, key: str) -> list[str]:
        """Return the set members with SMEMBERS."""
        client = self._require_client("members")
        try:
            return list(await client.smembers(key))
        except RedisError as e:
            raise self._wrap(e, key, "members") from e

    async def random_member(self, key: str) -> str | None:
        """Return one member with SRANDMEMBER."""
        client = self._require_client("random_member")
        try:
            return await client.srandmember(key)
        except RedisError as e:
            raise self._wrap(e, key, "random_member") from e

    async def keys(self, pattern: str) -> list[str]:
        """List matching keys with an incremental SCAN."""
        client = self._require_client("keys")
        try:
            # SCAN may report a key more than once
            return list(dict.fromkeys([key async for key in client.scan_iter(match=pattern)]))
        except RedisError as e:
            raise self._wrap(e, pattern, "keys") from e

    async def expire(self, key: str, seconds: int) -> bool:
        """Set the key TTL with EXPIRE."""
        client = self._require_client("expire")
        try:
            return bool(await client.expire(key, seconds))
        except RedisError as e:
            raise self._wrap(e, key, "expire") from e

    async def close(self) -> None:
        """Close the client connection pool."""
        if self._client is None:
            return
        client, self._client = self._client, None
        try:
            await client.aclose()
        except RedisError as e:
            raise self._wrap(e, None, "close") from e
        self._logger.debug("Redis connection closed")
