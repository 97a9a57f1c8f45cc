"""Daily and weekly totals of focused and break time."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from tomato_log.core.interval import BREAK_CATEGORIES, Category
from tomato_log.storage.repository import IntervalRepository


@dataclass
class DailySummary:
    """Time credited on one day."""
    day: date
    work: timedelta
    breaks: timedelta

    @property
    def work_minutes(self) -> float:
        return round(self.work.total_seconds() / 60, 1)

    @property
    def break_minutes(self) -> float:
        return round(self.breaks.total_seconds() / 60, 1)


async def daily_summary(repo: IntervalRepository, day: date) -> DailySummary:
    """Work and break totals for intervals started on ``day``."""
    work = await repo.category_summary(day, (Category.WORK,))
    breaks = await repo.category_summary(day, BREAK_CATEGORIES)
    return DailySummary(day=day, work=timedelta(seconds=work), breaks=timedelta(seconds=breaks))


async def range_summary(
    repo: IntervalRepository, end: date, days: int = 7
) -> list[DailySummary]:
    """Summaries for ``days`` consecutive days ending on ``end``, oldest first."""
    if days < 1:
        raise ValueError("days must be at least 1")
    start = end - timedelta(days=days - 1)
    return [
        await daily_summary(repo, start + timedelta(days=offset))
        for offset in range(days)
    ]
