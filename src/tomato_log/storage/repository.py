"""Repository contract for interval records."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date

from tomato_log.core.interval import Category, Interval


class IntervalRepository(ABC):
    """Durable store of interval records.

    Implementations serialize conflicting access to a single record and
    raise StorageError (or a subclass) for any backend failure.
    """

    @abstractmethod
    async def create(self, interval: Interval) -> int:
        """Store a new interval and return its assigned identifier."""

    @abstractmethod
    async def update(self, interval: Interval) -> None:
        """Overwrite start time, actual duration and state of a record.

        The write is accepted only if ``interval.revision`` matches the
        stored revision; on success the stored revision and
        ``interval.revision`` both advance by one. Raises
        StaleIntervalError on mismatch and IntervalNotFoundError for an
        unknown id.
        """

    @abstractmethod
    async def get_by_id(self, interval_id: int) -> Interval:
        """Return the interval with the given id or raise IntervalNotFoundError."""

    @abstractmethod
    async def get_last(self) -> Interval:
        """Return the most recently created interval or raise NoIntervalsError."""

    @abstractmethod
    async def get_recent_breaks(self, n: int) -> list[Interval]:
        """Return up to ``n`` most recent break intervals, most recent first."""

    @abstractmethod
    async def category_summary(self, day: date, categories: Iterable[Category]) -> int:
        """Total actual seconds of intervals of ``categories`` started on ``day``."""
