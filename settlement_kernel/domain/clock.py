"""
Clock -- where "now" comes from.

Engines never read the wall clock; they take ``now`` as an argument.
``RevenueService`` holds a Clock and reads it once per call, so a whole
statement is classified against a single instant.  Tests substitute
``DeterministicClock`` to pin that instant exactly on a boundary.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone

_DEFAULT_TEST_INSTANT = datetime(2026, 1, 1, tzinfo=timezone.utc)


class Clock(ABC):
    """Source of timezone-aware instants."""

    @abstractmethod
    def now(self) -> datetime:
        ...


class SystemClock(Clock):
    """Server time, in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class DeterministicClock(Clock):
    """
    Manually driven clock for tests.

    ``now()`` keeps returning the same instant until ``set_time`` or
    ``advance`` moves it.
    """

    def __init__(self, fixed_time: datetime | None = None):
        self._current = fixed_time or _DEFAULT_TEST_INSTANT

    def now(self) -> datetime:
        return self._current

    def set_time(self, time: datetime) -> None:
        self._current = time

    def advance(self, milliseconds: int = 1000) -> None:
        self._current += timedelta(milliseconds=milliseconds)
