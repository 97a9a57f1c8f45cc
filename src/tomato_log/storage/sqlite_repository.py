"""Interval repository backed by the SQLite database."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from datetime import date

from tomato_log.core.errors import (
    IntervalNotFoundError,
    NoIntervalsError,
    StaleIntervalError,
    StorageError,
)
from tomato_log.core.interval import BREAK_CATEGORIES, Category, Interval
from tomato_log.storage.database import Database
from tomato_log.storage.repository import IntervalRepository

logger = logging.getLogger(__name__)


@contextmanager
def _storage_errors(operation: str) -> Iterator[None]:
    """Translate SQLite failures into StorageError."""
    try:
        yield
    except sqlite3.Error as e:
        raise StorageError(f"{operation} failed: {e}", operation=operation) from e


class SQLiteIntervalRepository(IntervalRepository):
    """Stores intervals in the ``intervals`` table.

    Usage:
        db = await init_database(config.db_path)
        repo = SQLiteIntervalRepository(db)
        interval_id = await repo.create(Interval(planned_duration=1500))
    """

    def __init__(self, db: Database):
        self.db = db

    async def create(self, interval: Interval) -> int:
        data = interval.to_db_dict()
        data["revision"] = 0
        with _storage_errors("create"):
            interval_id = await self.db.insert("intervals", data)
        interval.id = interval_id
        interval.revision = 0
        logger.debug(f"Created interval {interval_id} ({interval.category.value})")
        return interval_id

    async def update(self, interval: Interval) -> None:
        data = interval.to_db_dict()
        with _storage_errors("update"):
            count = await self.db.execute_count(
                """UPDATE intervals
                   SET start_time = ?, actual_duration = ?, state = ?, revision = revision + 1
                   WHERE id = ? AND revision = ?""",
                (
                    data["start_time"],
                    data["actual_duration"],
                    data["state"],
                    interval.id,
                    interval.revision,
                ),
            )
            if count == 0:
                row = await self.db.fetch_one(
                    "SELECT revision FROM intervals WHERE id = ?", (interval.id,)
                )
        if count == 0:
            if row is None:
                raise IntervalNotFoundError(interval.id)
            raise StaleIntervalError(
                interval.id, interval.revision, context={"stored_revision": row["revision"]}
            )
        interval.revision += 1

    async def get_by_id(self, interval_id: int) -> Interval:
        with _storage_errors("get_by_id"):
            row = await self.db.fetch_one(
                "SELECT * FROM intervals WHERE id = ?", (interval_id,)
            )
        if row is None:
            raise IntervalNotFoundError(interval_id)
        return Interval.from_db_row(row)

    async def get_last(self) -> Interval:
        with _storage_errors("get_last"):
            row = await self.db.fetch_one(
                "SELECT * FROM intervals ORDER BY id DESC LIMIT 1"
            )
        if row is None:
            raise NoIntervalsError()
        return Interval.from_db_row(row)

    async def get_recent_breaks(self, n: int) -> list[Interval]:
        with _storage_errors("get_recent_breaks"):
            rows = await self.db.fetch_all(
                "SELECT * FROM intervals WHERE category IN (?, ?) ORDER BY id DESC LIMIT ?",
                (*(c.value for c in BREAK_CATEGORIES), n),
            )
        return [Interval.from_db_row(row) for row in rows]

    async def category_summary(self, day: date, categories: Iterable[Category]) -> int:
        values = [c.value for c in categories]
        if not values:
            return 0
        placeholders = ", ".join("?" * len(values))
        with _storage_errors("category_summary"):
            row = await self.db.fetch_one(
                f"""SELECT COALESCE(SUM(actual_duration), 0) AS total FROM intervals
                    WHERE category IN ({placeholders}) AND date(start_time) = ?""",
                (*values, day.isoformat()),
            )
        return int(row["total"]) if row else 0
