"""Tests for the terminal dashboard."""

import io

from rich.console import Console

from tomato_log.core.interval import Category, Interval, IntervalState
from tomato_log.widget.dashboard import TerminalDashboard, render_interval


def make_console():
    return Console(file=io.StringIO(), force_terminal=False, width=60)


class TestTerminalDashboard:
    """Test callback handling."""

    def test_render_shows_remaining_time(self):
        console = make_console()
        interval = Interval(id=3, planned_duration=300, actual_duration=60,
                            category=Category.SHORT_BREAK, state=IntervalState.RUNNING)

        console.print(render_interval(interval))

        output = console.file.getvalue()
        assert "04:00" in output
        assert "Short Break" in output
        assert "Running  20%" in output

    def test_lifecycle_tracks_last_snapshot(self):
        console = make_console()
        dashboard = TerminalDashboard(console)
        interval = Interval(id=1, planned_duration=2, category=Category.WORK,
                            state=IntervalState.RUNNING)

        dashboard.on_start(interval)
        interval.actual_duration = 1
        dashboard.on_tick(interval)
        interval.actual_duration = 2
        interval.state = IntervalState.DONE
        dashboard.on_end(interval)

        assert dashboard.last_seen.state == IntervalState.DONE
        assert "Work finished" in console.file.getvalue()

    def test_close_is_idempotent(self):
        dashboard = TerminalDashboard(make_console())
        dashboard.on_start(Interval(id=1, planned_duration=5, state=IntervalState.RUNNING))
        dashboard.close()
        dashboard.close()
