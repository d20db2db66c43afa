"""In-memory implementation of the SetStorePort.

This adapter mimics the Redis set semantics the registry relies on (empty
sets disappear, EXPIRE on a missing key is a no-op) for testing and
single-process development.
"""

from __future__ import annotations

import random
from datetime import datetime, timedelta
from fnmatch import fnmatchcase

from ..domain.exceptions import StoreError, StoreNotConnectedError
from ..ports.clock import ClockPort
from ..ports.set_store import SetStorePort
from .system_clock import SystemClock


class InMemorySetStore(SetStorePort):
    """Dict-backed set store with lazy key expiry."""

    def __init__(self, clock: ClockPort | None = None) -> None:
        """Initialize the in-memory storage.

        Args:
            clock: Time source used for key expiry (defaults to the system clock)
        """
        self._clock = clock or SystemClock()
        self._sets: dict[str, set[str]] = {}
        self._expires_at: dict[str, datetime] = {}
        self._closed = False

    def _check_open(self, operation: str) -> None:
        if self._closed:
            raise StoreNotConnectedError(operation)

    def _evict_expired(self) -> None:
        now = self._clock.now()
        expired = [key for key, deadline in self._expires_at.items() if deadline <= now]
        for key in expired:
            self._drop(key)

    def _drop(self, key: str) -> None:
        self._sets.pop(key, None)
        self._expires_at.pop(key, None)

    async def add(self, key: str, member: str) -> int:
        """Add a member, creating the set if needed."""
        self._check_open("add")
        if not member:
            raise StoreError("Refusing to add an empty member", key=key, operation="add")
        self._evict_expired()
        members = self._sets.setdefault(key, set())
        if member in members:
            return 0
        members.add(member)
        return 1

    async def remove(self, key: str, member: str) -> int:
        """Remove a member; an emptied set is deleted with its TTL."""
        self._check_open("remove")
        if not member:
            raise StoreError("Refusing to remove an empty member", key=key, operation="remove")
        self._evict_expired()
        members = self._sets.get(key)
        if not members or member not in members:
            return 0
        members.discard(member)
        if not members:
            self._drop(key)
        return 1

    async def members(self, key: str) -> list[str]:
        """Return a snapshot of the set members."""
        self._check_open("members")
        self._evict_expired()
        return list(self._sets.get(key, ()))

    async def random_member(self, key: str) -> str | None:
        """Return a random member, or None if the set is absent."""
        self._check_open("random_member")
        self._evict_expired()
        members = self._sets.get(key)
        if not members:
            return None
        return random.choice(list(members))

    async def keys(self, pattern: str) -> list[str]:
        """List keys matching a glob pattern."""
        self._check_open("keys")
        self._evict_expired()
        return [key for key in self._sets if fnmatchcase(key, pattern)]

    async def expire(self, key: str, seconds: int) -> bool:
        """Schedule key removal; non-positive durations delete immediately."""
        self._check_open("expire")
        self._evict_expired()
        if key not in self._sets:
            return False
        if seconds <= 0:
            self._drop(key)
        else:
            self._expires_at[key] = self._clock.now() + timedelta(seconds=seconds)
        return True

    async def close(self) -> None:
        """Mark the store closed; later operations raise StoreNotConnectedError."""
        self._closed = True

    def ttl(self, key: str) -> float | None:
        """Remaining lifetime of a key in seconds (useful for testing)."""
        deadline = self._expires_at.get(key)
        if deadline is None:
            return None
        return (deadline - self._clock.now()).total_seconds()

    def clear(self) -> None:
        """Drop every key (useful for testing)."""
        self._sets.clear()
        self._expires_at.clear()
