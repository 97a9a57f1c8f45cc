"""Storage layer: database and interval repositories."""

from tomato_log.storage.database import Database, init_database
from tomato_log.storage.memory_repository import InMemoryIntervalRepository
from tomato_log.storage.repository import IntervalRepository
from tomato_log.storage.sqlite_repository import SQLiteIntervalRepository

__all__ = [
    "Database",
    "init_database",
    "IntervalRepository",
    "InMemoryIntervalRepository",
    "SQLiteIntervalRepository",
]
