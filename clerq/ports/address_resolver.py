"""Address resolver interface - resolves this machine's network address."""

from abc import ABC, abstractmethod


class AddressResolverPort(ABC):
    """Abstract interface for resolving the local host used in addresses."""

    @abstractmethod
    def resolve(self, iface: str | None = None) -> str:
        """Return the local address, optionally restricted to one interface."""
        ...
