"""Pytest configuration and shared fixtures."""

from datetime import timedelta

import pytest
import pytest_asyncio

from tomato_log.core.config import IntervalConfig
from tomato_log.storage.database import init_database
from tomato_log.storage.memory_repository import InMemoryIntervalRepository
from tomato_log.storage.sqlite_repository import SQLiteIntervalRepository


@pytest.fixture
def fast_config() -> IntervalConfig:
    """Work 3s, short break 1s, long break 2s, ticking every 10ms."""
    return IntervalConfig(
        work=timedelta(seconds=3),
        short_break=timedelta(seconds=1),
        long_break=timedelta(seconds=2),
        tick_seconds=0.01,
    )


@pytest_asyncio.fixture
async def db(tmp_path):
    """Connected SQLite database in a temp directory."""
    database = await init_database(tmp_path / "test.db")
    try:
        yield database
    finally:
        await database.close()


@pytest_asyncio.fixture
async def sqlite_repo(db):
    return SQLiteIntervalRepository(db)


@pytest.fixture
def memory_repo():
    return InMemoryIntervalRepository()


@pytest_asyncio.fixture(params=["memory", "sqlite"])
async def repo(request, tmp_path):
    """Each repository backend in turn."""
    if request.param == "memory":
        yield InMemoryIntervalRepository()
        return

    database = await init_database(tmp_path / "repo.db")
    try:
        yield SQLiteIntervalRepository(database)
    finally:
        await database.close()
