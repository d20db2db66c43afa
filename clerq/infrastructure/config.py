"""Configuration objects for the registry and its store connection."""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..domain.exceptions import InvalidOptionsError
from ..domain.keys import DEFAULT_DELIMITER, DEFAULT_PREFIX


class RedisConnectionConfig(BaseModel):
    """Connection settings for the Redis set store."""

    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        strict=True,
        validate_assignment=True,
    )

    host: str = Field(default="localhost", min_length=1, description="Redis host")
    port: int = Field(default=6379, ge=1, le=65535, description="Redis port")
    db: int = Field(default=0, ge=0, description="Redis logical database")
    password: str | None = Field(default=None, description="Redis password")
    url: str | None = Field(
        default=None,
        description="Connection URL, takes precedence over host/port/db",
    )
    socket_timeout: float | None = Field(
        default=None,
        gt=0,
        description="Socket timeout in seconds",
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str | None) -> str | None:
        """Validate the Redis URL scheme."""
        if v is not None and not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError(
                f"Invalid Redis URL: {v}. Must start with redis://, rediss://, or unix://"
            )
        return v

    def to_connection_params(self) -> dict[str, Any]:
        """Convert to keyword arguments for a Redis client."""
        params: dict[str, Any] = {
            "host": self.host,
            "port": self.port,
            "db": self.db,
            "decode_responses": True,
        }
        if self.password is not None:
            params["password"] = self.password
        if self.socket_timeout is not None:
            params["socket_timeout"] = self.socket_timeout
        return params


class RegistryConfig(BaseModel):
    """Options recognised by the service registry.

    ``expire`` is in seconds and ``cache`` in milliseconds; a falsy value
    disables TTL refresh and the read cache respectively.
    """

    model_config = ConfigDict(
        extra="forbid",
        strict=True,
        validate_assignment=True,
    )

    prefix: str = Field(default=DEFAULT_PREFIX, min_length=1, description="Key prefix")
    delimiter: str = Field(
        default=DEFAULT_DELIMITER,
        min_length=1,
        description="Separator between prefix and service name",
    )
    expire: int | None = Field(
        default=None,
        ge=0,
        description="Key TTL in seconds, refreshed on every access",
    )
    cache: int | float | None = Field(
        default=None,
        description="Read cache window in milliseconds",
    )
    iface: str | None = Field(
        default=None,
        description="Network interface used to resolve the local address",
    )
    debug: bool = Field(default=False, description="Enable debug logging")
    redis: RedisConnectionConfig = Field(default_factory=RedisConnectionConfig)

    @field_validator("redis", mode="before")
    @classmethod
    def parse_redis(cls, v: Any) -> RedisConnectionConfig:
        """Parse the store connection from a mapping or a config object."""
        if isinstance(v, RedisConnectionConfig):
            return v
        if isinstance(v, Mapping):
            return RedisConnectionConfig(**v)
        raise ValueError(f"Invalid redis options type: {type(v)}")

    @property
    def ttl_enabled(self) -> bool:
        """Whether keys get their expiry refreshed on access."""
        return bool(self.expire)

    @property
    def cache_enabled(self) -> bool:
        """Whether the read cache is active."""
        return self.cache is not None and self.cache > 0

    @classmethod
    def parse(cls, options: RegistryConfig | Mapping[str, Any] | None = None) -> RegistryConfig:
        """Build a configuration from user supplied options.

        Raises:
            InvalidOptionsError: If options is not a mapping or fails validation
        """
        if options is None:
            return cls()
        if isinstance(options, RegistryConfig):
            return options.model_copy(deep=True)
        if not isinstance(options, Mapping):
            raise InvalidOptionsError(
                "invalid options",
                details={"type": type(options).__name__},
            )
        try:
            return cls.model_validate(dict(options))
        except ValidationError as e:
            raise InvalidOptionsError("invalid options", details={"errors": e.errors()}) from e

    @classmethod
    def from_env(cls, **overrides: Any) -> RegistryConfig:
        """Build a configuration from ``CLERQ_*`` and ``REDIS_URL`` variables.

        Keyword overrides win over the environment.
        """
        options: dict[str, Any] = {}
        if prefix := os.getenv("CLERQ_PREFIX"):
            options["prefix"] = prefix
        if delimiter := os.getenv("CLERQ_DELIMITER"):
            options["delimiter"] = delimiter
        if expire := os.getenv("CLERQ_EXPIRE"):
            options["expire"] = _env_number(expire, int, "CLERQ_EXPIRE")
        if cache := os.getenv("CLERQ_CACHE"):
            options["cache"] = _env_number(cache, float, "CLERQ_CACHE")
        if iface := os.getenv("CLERQ_IFACE"):
            options["iface"] = iface
        if os.getenv("CLERQ_DEBUG", "").lower() in ("1", "true", "yes"):
            options["debug"] = True
        if redis_url := os.getenv("REDIS_URL"):
            options["redis"] = {"url": redis_url}

        options.update({k: v for k, v in overrides.items() if v is not None})
        return cls.parse(options)


def _env_number(raw: str, kind: type, name: str) -> Any:
    try:
        return kind(raw)
    except ValueError as e:
        raise InvalidOptionsError(f"{name} must be a number, got {raw!r}") from e
