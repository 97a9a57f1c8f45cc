"""Tests for the SQLite database manager and its error translation."""

import pytest

from tomato_log.core.errors import InvalidStateError, StorageError
from tomato_log.core.interval import Interval
from tomato_log.storage.database import SCHEMA_VERSION, Database
from tomato_log.storage.sqlite_repository import SQLiteIntervalRepository


class TestDatabase:
    """Test connection setup and helpers."""

    @pytest.mark.asyncio
    async def test_connect_creates_schema(self, db):
        row = await db.fetch_one("SELECT MAX(version) AS version FROM schema_version")
        assert row["version"] == SCHEMA_VERSION

        tables = await db.fetch_all("SELECT name FROM sqlite_master WHERE type = 'table'")
        assert "intervals" in {t["name"] for t in tables}

    @pytest.mark.asyncio
    async def test_reconnect_keeps_single_schema_version(self, tmp_path):
        path = tmp_path / "again.db"
        for _ in range(2):
            database = Database(path)
            await database.connect()
            await database.close()

        database = Database(path)
        await database.connect()
        try:
            rows = await database.fetch_all("SELECT version FROM schema_version")
            assert len(rows) == 1
        finally:
            await database.close()

    @pytest.mark.asyncio
    async def test_wal_mode_enabled(self, db):
        row = await db.fetch_one("PRAGMA journal_mode")
        assert row["journal_mode"] == "wal"

    @pytest.mark.asyncio
    async def test_integrity_and_size(self, db):
        assert await db.check_integrity() is True
        assert await db.get_size_mb() >= 0.0

    @pytest.mark.asyncio
    async def test_execute_count_reports_rows(self, db):
        await db.insert("intervals", {"planned_duration": 60, "category": "work"})
        await db.insert("intervals", {"planned_duration": 60, "category": "work"})

        count = await db.execute_count("UPDATE intervals SET state = 1")

        assert count == 2

    @pytest.mark.asyncio
    async def test_not_connected(self, tmp_path):
        database = Database(tmp_path / "never.db")
        with pytest.raises(RuntimeError):
            await database.fetch_one("SELECT 1")


class TestSQLiteErrors:
    """Test that SQLite failures surface as StorageError."""

    @pytest.mark.asyncio
    async def test_sqlite_error_wrapped(self, db):
        repo = SQLiteIntervalRepository(db)
        await db.execute("DROP TABLE intervals")

        with pytest.raises(StorageError) as exc_info:
            await repo.create(Interval(planned_duration=60))

        assert exc_info.value.operation == "create"
        assert exc_info.value.__cause__ is not None

    @pytest.mark.asyncio
    async def test_corrupt_state_surfaces(self, db):
        await db.insert("intervals", {"planned_duration": 60, "category": "work", "state": 9})
        repo = SQLiteIntervalRepository(db)

        with pytest.raises(InvalidStateError):
            await repo.get_last()
