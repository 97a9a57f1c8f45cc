"""Core configuration, data model and error types."""

from tomato_log.core.config import Config, IntervalConfig, get_config
from tomato_log.core.errors import (
    IntervalCompletedError,
    IntervalNotFoundError,
    IntervalNotRunningError,
    InvalidStateError,
    NoIntervalsError,
    PomodoroError,
    StaleIntervalError,
    StorageError,
)
from tomato_log.core.interval import BREAK_CATEGORIES, Category, Interval, IntervalState

__all__ = [
    "Config",
    "IntervalConfig",
    "get_config",
    "PomodoroError",
    "NoIntervalsError",
    "IntervalNotFoundError",
    "IntervalNotRunningError",
    "IntervalCompletedError",
    "InvalidStateError",
    "StorageError",
    "StaleIntervalError",
    "Interval",
    "IntervalState",
    "Category",
    "BREAK_CATEGORIES",
]
