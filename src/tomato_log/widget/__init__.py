"""Terminal display for running intervals."""

from tomato_log.widget.dashboard import TerminalDashboard, render_interval

__all__ = ["TerminalDashboard", "render_interval"]
