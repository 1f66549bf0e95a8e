"""Clock abstraction for testing.

Staleness rules compare producer timestamps against "now"; injecting the clock
keeps those rules deterministic under test.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Time(ABC):
    """Abstract clock for dependency injection."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time as a timezone-aware datetime."""
        ...
