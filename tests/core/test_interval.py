"""Tests for the interval record."""

from datetime import datetime

import pytest

from tomato_log.core.errors import InvalidStateError
from tomato_log.core.interval import Category, Interval, IntervalState


class TestInterval:
    """Test derived properties and row decoding."""

    def test_terminal_states(self):
        assert IntervalState.DONE.is_terminal
        assert IntervalState.CANCELLED.is_terminal
        assert not IntervalState.PAUSED.is_terminal
        assert not IntervalState.RUNNING.is_terminal
        assert not IntervalState.NOT_STARTED.is_terminal

    def test_break_categories(self):
        assert not Category.WORK.is_break
        assert Category.SHORT_BREAK.is_break
        assert Category.LONG_BREAK.is_break

    def test_time_remaining_display(self):
        interval = Interval(planned_duration=1500, actual_duration=61)
        assert interval.remaining_seconds == 1439
        assert interval.time_remaining_display == "23:59"

    def test_progress_percent(self):
        assert Interval(planned_duration=200, actual_duration=50).progress_percent == 25.0
        assert Interval(planned_duration=0).progress_percent == 100.0

    def test_snapshot_is_independent(self):
        interval = Interval(id=1, planned_duration=60)
        copy = interval.snapshot()
        copy.actual_duration = 30
        assert interval.actual_duration == 0

    def test_from_db_row(self):
        interval = Interval.from_db_row({
            "id": 7,
            "start_time": "2024-05-06T09:00:00",
            "planned_duration": 1500,
            "actual_duration": 10,
            "category": "short_break",
            "state": 2,
            "revision": 4,
        })
        assert interval.id == 7
        assert interval.start_time == datetime(2024, 5, 6, 9, 0)
        assert interval.category == Category.SHORT_BREAK
        assert interval.state == IntervalState.PAUSED
        assert interval.revision == 4

    def test_from_db_row_without_start_time(self):
        interval = Interval.from_db_row({
            "id": 1, "start_time": None, "planned_duration": 60,
            "actual_duration": 0, "category": "work", "state": 0,
        })
        assert interval.start_time is None
        assert interval.revision == 0

    def test_unknown_state_rejected(self):
        with pytest.raises(InvalidStateError) as exc_info:
            Interval.from_db_row({
                "id": 1, "start_time": None, "planned_duration": 60,
                "actual_duration": 0, "category": "work", "state": 7,
            })
        assert exc_info.value.value == 7

    def test_unknown_category_rejected(self):
        with pytest.raises(InvalidStateError):
            Interval.from_db_row({
                "id": 1, "start_time": None, "planned_duration": 60,
                "actual_duration": 0, "category": "nap", "state": 0,
            })
