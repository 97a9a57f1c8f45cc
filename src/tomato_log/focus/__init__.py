"""Pomodoro interval engine, category rotation and time summaries."""

from tomato_log.focus.engine import IntervalEngine
from tomato_log.focus.rotation import next_category
from tomato_log.focus.summary import DailySummary, daily_summary, range_summary

__all__ = [
    "IntervalEngine",
    "next_category",
    "DailySummary",
    "daily_summary",
    "range_summary",
]
