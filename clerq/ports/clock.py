"""Clock port abstraction for time handling.

Cache freshness and in-memory key expiry are computed against this clock so
tests can move time forward without sleeping.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class ClockPort(ABC):
    """Abstract clock interface for time operations."""

    @abstractmethod
    def now(self) -> datetime:
        """Get the current time as a timezone-aware datetime.

        Note:
            Implementations MUST return timezone-aware datetimes.
        """
        ...
