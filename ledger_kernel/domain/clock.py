"""
Time source for payment timestamps.

PaymentService stamps ``payment_date`` from an injected Clock rather than
reading the wall clock, so a test can pin the timestamp and then query the
reports for exactly that instant.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone

_DEFAULT_PINNED_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class Clock(ABC):
    """Returns timezone-aware UTC datetimes."""

    @abstractmethod
    def now(self) -> datetime: ...


class SystemClock(Clock):
    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """Clock pinned to one instant until moved with ``set_time``."""

    def __init__(self, fixed_time: datetime | None = None):
        self._pinned = fixed_time or _DEFAULT_PINNED_TIME

    def now(self) -> datetime:
        return self._pinned

    def set_time(self, when: datetime) -> None:
        self._pinned = when
