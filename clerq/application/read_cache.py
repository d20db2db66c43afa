"""Bounded-freshness read cache for discovery lookups."""

from __future__ import annotations

import random
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..ports.clock import ClockPort
from ..ports.logger import LoggerPort


class CacheEntry(BaseModel):
    """Address observed for a service and when it was captured."""

    model_config = ConfigDict(
        extra="forbid",
        strict=True,
        validate_assignment=True,
    )

    address: str = Field(min_length=1)
    timestamp: datetime
    hits: int = Field(default=0, ge=0)

    def age_ms(self, now: datetime) -> float:
        """Milliseconds elapsed since the entry was captured."""
        return (now - self.timestamp).total_seconds() * 1000

    def increment_hits(self) -> None:
        """Increment the hit counter for this entry."""
        self.hits += 1


class ReadCache:
    """Per-registry memo of the last address seen for each service.

    An entry is fresh while its age is strictly below the window. Entries are
    overwritten, never merged, and never removed: a stale entry simply stops
    being served. A window of zero or less (or None) disables the cache.
    """

    def __init__(
        self,
        window_ms: float | None,
        clock: ClockPort,
        logger: LoggerPort | None = None,
    ):
        """Initialize the cache.

        Args:
            window_ms: Freshness window in milliseconds
            clock: Time source for capture stamps and freshness checks
            logger: Optional logger for debugging
        """
        self._window_ms = window_ms
        self._clock = clock
        self._logger = logger
        self._entries: dict[str, CacheEntry] = {}
        self._hits = 0
        self._misses = 0

    @property
    def should_cache(self) -> bool:
        """True iff a positive window is configured."""
        return self._window_ms is not None and self._window_ms > 0

    def is_fresh(self, service: str) -> bool:
        """Check whether a fresh entry exists for ``service``."""
        if not self.should_cache:
            return False
        entry = self._entries.get(service)
        if entry is None:
            return False
        return entry.age_ms(self._clock.now()) < self._window_ms

    def get(self, service: str) -> str | None:
        """Return the cached address if fresh, recording a hit or a miss."""
        if not self.is_fresh(service):
            if self.should_cache:
                self._misses += 1
            return None

        entry = self._entries[service]
        entry.increment_hits()
        self._hits += 1
        if self._logger:
            self._logger.debug("Read cache hit", service=service, address=entry.address)
        return entry.address

    def put(self, service: str, address: str) -> None:
        """Overwrite the entry for ``service`` stamped with the current time."""
        if not self.should_cache:
            return
        self._entries[service] = CacheEntry(address=address, timestamp=self._clock.now())

    def put_random(self, service: str, addresses: list[str]) -> None:
        """Seed the entry with one address picked uniformly at random."""
        if not self.should_cache or not addresses:
            return
        self.put(service, random.choice(addresses))

    def stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        total = self._hits + self._misses
        return {
            "enabled": self.should_cache,
            "window_ms": self._window_ms,
            "size": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": self._hits / total if total else 0.0,
        }
