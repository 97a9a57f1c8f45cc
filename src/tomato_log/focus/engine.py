"""Interval engine: creates intervals and drives them tick by tick."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Awaitable, Callable

from tomato_log.core.config import IntervalConfig
from tomato_log.core.errors import (
    IntervalCompletedError,
    IntervalNotRunningError,
    NoIntervalsError,
    StaleIntervalError,
)
from tomato_log.core.interval import Category, Interval, IntervalState
from tomato_log.focus.rotation import next_category
from tomato_log.storage.repository import IntervalRepository

logger = logging.getLogger(__name__)

Callback = Callable[[Interval], Awaitable[None] | None]


async def _notify(callback: Callback | None, interval: Interval) -> None:
    """Invoke a lifecycle callback with a snapshot, awaiting it if needed."""
    if callback is None:
        return
    result = callback(interval.snapshot())
    if asyncio.iscoroutine(result):
        await result


class IntervalEngine:
    """Pomodoro interval lifecycle over a repository.

    The repository owns the record; the engine re-reads it before every
    mutation and never trusts an in-memory copy across ticks.

    Usage:
        engine = IntervalEngine(repo, IntervalConfig())
        interval = await engine.get_interval()

        cancel = asyncio.Event()
        await engine.start(
            interval,
            cancel,
            on_start=lambda i: print("started", i.category.value),
            on_tick=lambda i: print(i.time_remaining_display),
            on_end=lambda i: print("done"),
        )

        # From elsewhere, while it runs:
        await engine.pause(interval)   # loop exits at its next tick
        cancel.set()                   # loop marks it cancelled at its next tick
    """

    def __init__(self, repo: IntervalRepository, config: IntervalConfig | None = None):
        self.repo = repo
        self.config = config or IntervalConfig()

    def planned_duration(self, category: Category) -> int:
        """Planned seconds for a category."""
        if category == Category.WORK:
            duration = self.config.work
        elif category == Category.SHORT_BREAK:
            duration = self.config.short_break
        else:
            duration = self.config.long_break
        return int(duration.total_seconds())

    async def get_interval(self) -> Interval:
        """Return the active interval, creating the next one if there is none."""
        try:
            last = await self.repo.get_last()
        except NoIntervalsError:
            last = None

        if last is not None and not last.is_terminal:
            return last

        return await self._new_interval()

    async def _new_interval(self) -> Interval:
        category = await next_category(self.repo)
        interval = Interval(
            planned_duration=self.planned_duration(category),
            category=category,
            state=IntervalState.NOT_STARTED,
        )
        await self.repo.create(interval)
        logger.info(f"New {category.value} interval {interval.id} ({interval.planned_duration}s)")
        return interval

    async def start(
        self,
        interval: Interval,
        cancel: asyncio.Event,
        on_start: Callback | None = None,
        on_tick: Callback | None = None,
        on_end: Callback | None = None,
    ) -> Interval:
        """Run an interval until it expires, is paused, or ``cancel`` is set.

        Starting a running interval is a no-op. ``on_start`` fires on every
        call that enters the loop, including a resume from pause.

        Returns the last persisted state of the interval.
        """
        current = await self.repo.get_by_id(interval.id)

        if current.state == IntervalState.RUNNING:
            return current
        if current.state.is_terminal:
            raise IntervalCompletedError(
                f"interval {current.id} is {current.state.name.lower()}: cannot start"
            )

        if current.state == IntervalState.NOT_STARTED:
            current.start_time = datetime.now()
        current.state = IntervalState.RUNNING
        await self.repo.update(current)
        logger.info(f"Interval {current.id} running ({current.category.value})")

        return await self._tick_loop(current.id, cancel, on_start, on_tick, on_end)

    async def pause(self, interval: Interval) -> Interval:
        """Pause a running interval.

        The running loop notices at its next tick and exits without
        crediting further time. A tick written between the read and the
        write makes the pause retry against the fresh record.
        """
        while True:
            current = await self.repo.get_by_id(interval.id)
            if current.state != IntervalState.RUNNING:
                raise IntervalNotRunningError(
                    f"interval {current.id} is {current.state.name.lower()}: cannot pause"
                )
            current.state = IntervalState.PAUSED
            try:
                await self.repo.update(current)
            except StaleIntervalError:
                logger.debug(f"Interval {current.id} ticked during pause, retrying")
                continue
            logger.info(f"Interval {current.id} paused at {current.actual_duration}s")
            return current

    async def _tick_loop(
        self,
        interval_id: int,
        cancel: asyncio.Event,
        on_start: Callback | None,
        on_tick: Callback | None,
        on_end: Callback | None,
    ) -> Interval:
        interval = await self.repo.get_by_id(interval_id)
        # Fixed at entry so a resumed interval only runs its remainder.
        expire_after = interval.planned_duration - interval.actual_duration
        credited = 0

        await _notify(on_start, interval)

        loop = asyncio.get_running_loop()
        deadline = loop.time()

        while True:
            if credited >= expire_after:
                return await self._finish(interval_id, on_end)

            deadline += self.config.tick_seconds
            if await self._wait_tick(cancel, deadline - loop.time()):
                return await self._cancel(interval_id)

            interval = await self.repo.get_by_id(interval_id)
            if interval.state != IntervalState.RUNNING:
                logger.debug(f"Interval {interval_id} left the loop as {interval.state.name}")
                return interval

            interval.actual_duration += 1
            credited += 1
            if interval.actual_duration >= interval.planned_duration:
                interval.state = IntervalState.DONE
            latest = await self._save(interval)
            if latest is not None:
                return latest

            await _notify(on_tick, interval)

            if interval.state == IntervalState.DONE:
                logger.info(f"Interval {interval_id} done")
                await _notify(on_end, interval)
                return interval

    async def _wait_tick(self, cancel: asyncio.Event, timeout: float) -> bool:
        """Wait for the next tick; True if cancellation was signalled first."""
        if cancel.is_set():
            return True
        if timeout <= 0:
            return False
        try:
            await asyncio.wait_for(cancel.wait(), timeout)
        except asyncio.TimeoutError:
            return False
        return True

    async def _cancel(self, interval_id: int) -> Interval:
        interval = await self.repo.get_by_id(interval_id)
        if interval.state != IntervalState.RUNNING:
            return interval
        interval.state = IntervalState.CANCELLED
        latest = await self._save(interval)
        if latest is not None:
            return latest
        logger.info(f"Interval {interval_id} cancelled at {interval.actual_duration}s")
        return interval

    async def _finish(self, interval_id: int, on_end: Callback | None) -> Interval:
        # Reached when a resumed interval had no time left to credit.
        interval = await self.repo.get_by_id(interval_id)
        if interval.state != IntervalState.RUNNING:
            return interval
        interval.state = IntervalState.DONE
        latest = await self._save(interval)
        if latest is not None:
            return latest
        logger.info(f"Interval {interval_id} done")
        await _notify(on_end, interval)
        return interval

    async def _save(self, interval: Interval) -> Interval | None:
        """Persist a loop write.

        Returns None on success. If a concurrent writer moved the record out
        of RUNNING since it was read, the write is dropped and the stored
        record is returned instead.
        """
        try:
            await self.repo.update(interval)
        except StaleIntervalError:
            latest = await self.repo.get_by_id(interval.id)
            if latest.state == IntervalState.RUNNING:
                raise
            logger.debug(f"Interval {interval.id} changed to {latest.state.name} concurrently")
            return latest
        return None
