"""Set store interface - Port definition for the key/set storage backend."""

from abc import ABC, abstractmethod


class SetStorePort(ABC):
    """Abstract interface for a key/value store whose values are sets.

    Every operation is atomic on a single key. Registry entries and port
    claims are both modelled as sets of strings under one key each.
    """

    @abstractmethod
    async def add(self, key: str, member: str) -> int:
        """Add a member to the set stored at key.

        Args:
            key: The set key
            member: The member to add

        Returns:
            Number of members newly added (0 if already present, 1 otherwise)
        """
        ...

    @abstractmethod
    async def remove(self, key: str, member: str) -> int:
        """Remove a member from the set stored at key.

        Returns:
            Number of members removed (0 or 1)
        """
        ...

    @abstractmethod
    async def members(self, key: str) -> list[str]:
        """Return every member of the set, empty if the key is absent."""
        ...

    @abstractmethod
    async def random_member(self, key: str) -> str | None:
        """Return one member picked by the store, or None if absent or empty."""
        ...

    @abstractmethod
    async def keys(self, pattern: str) -> list[str]:
        """List keys matching a glob-style pattern."""
        ...

    @abstractmethod
    async def expire(self, key: str, seconds: int) -> bool:
        """Schedule key deletion after the given number of seconds.

        Refreshing an existing countdown resets it.

        Returns:
            True if a timeout was set, False if the key does not exist
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Release the connection. Calling it twice is harmless."""
        ...
