"""In-process interval repository, used by tests and throwaway sessions."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from datetime import date

from tomato_log.core.errors import IntervalNotFoundError, NoIntervalsError, StaleIntervalError
from tomato_log.core.interval import Category, Interval
from tomato_log.storage.repository import IntervalRepository


class InMemoryIntervalRepository(IntervalRepository):
    """Keeps intervals in a dict keyed by id.

    Records are copied on the way in and out so callers never share state
    with the store.
    """

    def __init__(self) -> None:
        self._intervals: dict[int, Interval] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def create(self, interval: Interval) -> int:
        async with self._lock:
            interval.id = self._next_id
            interval.revision = 0
            self._next_id += 1
            self._intervals[interval.id] = interval.snapshot()
            return interval.id

    async def update(self, interval: Interval) -> None:
        async with self._lock:
            stored = self._intervals.get(interval.id)
            if stored is None:
                raise IntervalNotFoundError(interval.id)
            if stored.revision != interval.revision:
                raise StaleIntervalError(
                    interval.id, interval.revision, context={"stored_revision": stored.revision}
                )
            stored.start_time = interval.start_time
            stored.actual_duration = interval.actual_duration
            stored.state = interval.state
            stored.revision += 1
            interval.revision = stored.revision

    async def get_by_id(self, interval_id: int) -> Interval:
        async with self._lock:
            stored = self._intervals.get(interval_id)
            if stored is None:
                raise IntervalNotFoundError(interval_id)
            return stored.snapshot()

    async def get_last(self) -> Interval:
        async with self._lock:
            if not self._intervals:
                raise NoIntervalsError()
            return self._intervals[max(self._intervals)].snapshot()

    async def get_recent_breaks(self, n: int) -> list[Interval]:
        async with self._lock:
            breaks = [
                self._intervals[i].snapshot()
                for i in sorted(self._intervals, reverse=True)
                if self._intervals[i].category.is_break
            ]
            return breaks[:n]

    async def category_summary(self, day: date, categories: Iterable[Category]) -> int:
        wanted = set(categories)
        async with self._lock:
            return sum(
                i.actual_duration
                for i in self._intervals.values()
                if i.category in wanted
                and i.start_time is not None
                and i.start_time.date() == day
            )
