"""Time abstraction for testing.

Anything that sleeps or measures elapsed wall time goes through this interface
so retry loops can be exercised without real waiting.
"""

from abc import ABC, abstractmethod
from datetime import datetime


class Time(ABC):
    """Abstract time operations."""

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        """Block for the given number of seconds."""
        ...

    @abstractmethod
    def now(self) -> datetime:
        """Current wall-clock time."""
        ...
