"""Interval record: one timed unit of work or break."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any

from tomato_log.core.errors import InvalidStateError


class Category(Enum):
    """Kind of interval."""
    WORK = "work"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"

    @property
    def is_break(self) -> bool:
        return self is not Category.WORK


BREAK_CATEGORIES = (Category.SHORT_BREAK, Category.LONG_BREAK)


class IntervalState(IntEnum):
    """Lifecycle state of an interval."""
    NOT_STARTED = 0
    RUNNING = 1
    PAUSED = 2
    DONE = 3
    CANCELLED = 4

    @property
    def is_terminal(self) -> bool:
        return self in (IntervalState.DONE, IntervalState.CANCELLED)


@dataclass
class Interval:
    """A single Work, ShortBreak or LongBreak interval.

    Durations are whole seconds. ``revision`` is the store's version
    counter used to reject updates based on a stale read.
    """
    id: int | None = None
    start_time: datetime | None = None
    planned_duration: int = 0
    actual_duration: int = 0
    category: Category = Category.WORK
    state: IntervalState = IntervalState.NOT_STARTED
    revision: int = 0

    @property
    def is_terminal(self) -> bool:
        return self.state.is_terminal

    @property
    def remaining_seconds(self) -> int:
        return max(0, self.planned_duration - self.actual_duration)

    @property
    def time_remaining_display(self) -> str:
        """Format time remaining as MM:SS."""
        minutes, seconds = divmod(self.remaining_seconds, 60)
        return f"{minutes:02d}:{seconds:02d}"

    @property
    def progress_percent(self) -> float:
        """Progress through the interval (0-100)."""
        if self.planned_duration <= 0:
            return 100.0
        return min(100.0, max(0.0, self.actual_duration / self.planned_duration * 100))

    def snapshot(self) -> Interval:
        """Independent copy handed to callbacks and callers."""
        return dataclasses.replace(self)

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> Interval:
        """Create from database row.

        Raises InvalidStateError when the stored category or state is unknown.
        """
        try:
            category = Category(row["category"])
        except ValueError:
            raise InvalidStateError(
                f"unknown category: {row['category']!r}", value=row["category"]
            ) from None
        try:
            state = IntervalState(row["state"])
        except ValueError:
            raise InvalidStateError(
                f"unknown state: {row['state']!r}", value=row["state"]
            ) from None

        start_time = row.get("start_time")
        return cls(
            id=row["id"],
            start_time=datetime.fromisoformat(start_time) if start_time else None,
            planned_duration=row["planned_duration"],
            actual_duration=row["actual_duration"],
            category=category,
            state=state,
            revision=row.get("revision", 0),
        )

    def to_db_dict(self) -> dict[str, Any]:
        """Convert to dictionary for database storage."""
        return {
            "start_time": self.start_time.isoformat() if self.start_time else None,
            "planned_duration": self.planned_duration,
            "actual_duration": self.actual_duration,
            "category": self.category.value,
            "state": int(self.state),
            "revision": self.revision,
        }
