from abc import ABC, abstractmethod
from datetime import datetime

from shortlink.domain.base import utcnow


class Clock(ABC):
    """Source of the current time, injectable for tests"""

    @abstractmethod
    def now(self) -> datetime:
        """Current naive UTC time"""
        pass


class SystemClock(Clock):
    def now(self) -> datetime:
        return utcnow()
