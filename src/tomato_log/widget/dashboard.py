"""Terminal dashboard that follows a running interval."""

from __future__ import annotations

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.progress_bar import ProgressBar
from rich.text import Text

from tomato_log.core.interval import Category, Interval, IntervalState

CATEGORY_STYLES = {
    Category.WORK: ("Work", "red"),
    Category.SHORT_BREAK: ("Short Break", "green"),
    Category.LONG_BREAK: ("Long Break", "blue"),
}


def render_interval(interval: Interval) -> Panel:
    """Build the panel shown for an interval snapshot."""
    title, color = CATEGORY_STYLES[interval.category]
    status = Text(
        f"{interval.state.name.replace('_', ' ').title()}  {interval.progress_percent:.0f}%",
        style="bold",
    )
    clock = Text(interval.time_remaining_display, style=f"bold {color}", justify="center")
    bar = ProgressBar(
        total=max(interval.planned_duration, 1),
        completed=interval.actual_duration,
        complete_style=color,
    )
    return Panel(
        Group(clock, bar, status),
        title=f"#{interval.id} {title}",
        border_style=color,
    )


class TerminalDashboard:
    """Passive consumer of interval lifecycle callbacks.

    Usage:
        dashboard = TerminalDashboard(console)
        try:
            await engine.start(interval, cancel,
                               dashboard.on_start, dashboard.on_tick, dashboard.on_end)
        finally:
            dashboard.close()
    """

    def __init__(self, console: Console | None = None):
        self.console = console or Console()
        self._live: Live | None = None
        self.last_seen: Interval | None = None

    def on_start(self, interval: Interval) -> None:
        self.last_seen = interval
        if self._live is None:
            self._live = Live(
                render_interval(interval), console=self.console, refresh_per_second=4
            )
            self._live.start()
        else:
            self._live.update(render_interval(interval))

    def on_tick(self, interval: Interval) -> None:
        self.last_seen = interval
        if self._live is not None:
            self._live.update(render_interval(interval))

    def on_end(self, interval: Interval) -> None:
        self.last_seen = interval
        if self._live is not None:
            self._live.update(render_interval(interval), refresh=True)
        self.close()
        title, color = CATEGORY_STYLES[interval.category]
        if interval.state == IntervalState.DONE:
            self.console.print(f"[{color}]{title} finished[/{color}]")

    def close(self) -> None:
        """Stop live rendering; safe to call more than once."""
        if self._live is not None:
            self._live.stop()
            self._live = None
