"""Error hierarchy for interval tracking.

Every error raised by the engine or a repository derives from
PomodoroError so callers can handle the whole family in one place.
"""

from __future__ import annotations

from typing import Any


class PomodoroError(Exception):
    """Base class for interval tracking errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class NoIntervalsError(PomodoroError):
    """The repository holds no intervals yet."""

    def __init__(self, message: str = "no intervals", **kwargs: Any):
        super().__init__(message, **kwargs)


class IntervalNotFoundError(PomodoroError):
    """No interval is stored under the requested identifier."""

    def __init__(self, interval_id: int, **kwargs: Any):
        super().__init__(f"interval {interval_id} not found", **kwargs)
        self.interval_id = interval_id


class IntervalNotRunningError(PomodoroError):
    """Pause was requested for an interval that is not running."""

    def __init__(self, message: str = "interval not running", **kwargs: Any):
        super().__init__(message, **kwargs)


class IntervalCompletedError(PomodoroError):
    """Start was requested for a done or cancelled interval."""

    def __init__(
        self, message: str = "interval is completed or cancelled", **kwargs: Any
    ):
        super().__init__(message, **kwargs)


class InvalidStateError(PomodoroError):
    """A stored value falls outside the known states or categories."""

    def __init__(self, message: str, value: Any = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.value = value


class StorageError(PomodoroError):
    """A repository operation failed in the backing store."""

    def __init__(self, message: str, operation: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.operation = operation


class StaleIntervalError(StorageError):
    """An update was based on an outdated revision of the record."""

    def __init__(self, interval_id: int, revision: int, **kwargs: Any):
        super().__init__(
            f"interval {interval_id} changed since revision {revision}",
            operation="update",
            **kwargs,
        )
        self.interval_id = interval_id
        self.revision = revision
