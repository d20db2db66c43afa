"""Port probe interface - finds ports that are free on this machine."""

from abc import ABC, abstractmethod


class PortProbePort(ABC):
    """Abstract interface for locating a locally bindable TCP port."""

    @abstractmethod
    async def find_free_port(self, start: int | None = None) -> int:
        """Find a free port.

        Args:
            start: Lowest acceptable port, any port when None

        Returns:
            A port that was available at probe time

        Raises:
            PortAllocationError: If no port could be found
        """
        ...
