"""CLI commands for Tomato Log using Typer."""

from __future__ import annotations

import asyncio
import logging
import signal
from datetime import date, timedelta
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from tomato_log import __version__
from tomato_log.core.config import Config, IntervalConfig, get_config
from tomato_log.core.errors import NoIntervalsError, PomodoroError
from tomato_log.core.interval import Interval
from tomato_log.focus.engine import IntervalEngine
from tomato_log.focus.summary import daily_summary, range_summary
from tomato_log.storage.database import init_database
from tomato_log.storage.sqlite_repository import SQLiteIntervalRepository
from tomato_log.widget.dashboard import TerminalDashboard, render_interval

app = typer.Typer(
    name="tomato-log",
    help="Pomodoro interval tracker with a persistent history.",
    add_completion=False,
)

console = Console()


def setup_logging(log_level: str, log_file: Path | None = None) -> None:
    """Configure logging for the application."""
    level = getattr(logging, log_level.upper(), logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )

    # Reduce noise from external libraries
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def format_duration(seconds: float) -> str:
    """Format seconds as e.g. 1h 05m or 12m."""
    minutes = int(seconds // 60)
    hours, minutes = divmod(minutes, 60)
    if hours:
        return f"{hours}h {minutes:02d}m"
    return f"{minutes}m"


def _minutes(value: int | None) -> timedelta | None:
    return timedelta(minutes=value) if value else None


async def _run_interval(config: Config, intervals: IntervalConfig) -> Interval:
    db = await init_database(config.db_path)
    try:
        engine = IntervalEngine(SQLiteIntervalRepository(db), intervals)
        interval = await engine.get_interval()

        cancel = asyncio.Event()
        loop = asyncio.get_running_loop()
        loop.add_signal_handler(signal.SIGINT, cancel.set)

        dashboard = TerminalDashboard(console)
        try:
            return await engine.start(
                interval, cancel, dashboard.on_start, dashboard.on_tick, dashboard.on_end
            )
        finally:
            dashboard.close()
            loop.remove_signal_handler(signal.SIGINT)
    finally:
        await db.close()


async def _pause_current(config: Config) -> Interval:
    db = await init_database(config.db_path)
    try:
        repo = SQLiteIntervalRepository(db)
        engine = IntervalEngine(repo, config.intervals)
        return await engine.pause(await repo.get_last())
    finally:
        await db.close()


@app.command()
def start(
    work: int = typer.Option(None, "--work", "-w", help="Work interval length in minutes"),
    short_break: int = typer.Option(
        None, "--short-break", "-s", help="Short break length in minutes"
    ),
    long_break: int = typer.Option(
        None, "--long-break", "-l", help="Long break length in minutes"
    ),
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Log level (DEBUG, INFO, WARNING, ERROR)",
    ),
) -> None:
    """Start or resume the current interval, creating the next one if needed.

    Press Ctrl+C to cancel the running interval. Use 'tomato-log pause' from
    another terminal to pause it.
    """
    config = get_config()
    config.ensure_directories()
    setup_logging(log_level or config.log_level, config.log_dir / "tomato-log.log")

    intervals = config.intervals.with_overrides(
        work=_minutes(work),
        short_break=_minutes(short_break),
        long_break=_minutes(long_break),
    )

    try:
        result = asyncio.run(_run_interval(config, intervals))
    except PomodoroError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        f"Interval #{result.id} {result.state.name.lower()} "
        f"after {format_duration(result.actual_duration)}"
    )


@app.command()
def pause() -> None:
    """Pause the running interval."""
    config = get_config()

    try:
        interval = asyncio.run(_pause_current(config))
    except NoIntervalsError:
        console.print("[yellow]No interval to pause[/yellow]")
        raise typer.Exit(1)
    except PomodoroError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(
        f"[yellow]Paused interval #{interval.id} with "
        f"{interval.time_remaining_display} remaining[/yellow]"
    )


@app.command()
def status() -> None:
    """Show the most recent interval and database health."""
    config = get_config()

    async def gather_status() -> tuple[Interval | None, float, bool]:
        db = await init_database(config.db_path)
        try:
            db_size = await db.get_size_mb()
            integrity_ok = await db.check_integrity()
            try:
                interval = await SQLiteIntervalRepository(db).get_last()
            except NoIntervalsError:
                interval = None
            return interval, db_size, integrity_ok
        finally:
            await db.close()

    try:
        interval, db_size, integrity_ok = asyncio.run(gather_status())
    except PomodoroError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if interval is None:
        console.print(Panel(
            "No intervals yet.\nUse 'tomato-log start' to begin.",
            title="Tomato Log Status",
            border_style="yellow",
        ))
    else:
        console.print(render_interval(interval))

    integrity = "[green]OK[/green]" if integrity_ok else "[red]FAILED[/red]"
    console.print(f"Database: {db_size:.2f} MB, integrity {integrity}")
    if not integrity_ok:
        raise typer.Exit(1)


@app.command()
def summary(
    days: int = typer.Option(7, "--days", "-d", help="Number of days to show"),
) -> None:
    """Show work and break totals for today and recent days."""
    config = get_config()

    async def collect():
        db = await init_database(config.db_path)
        try:
            repo = SQLiteIntervalRepository(db)
            today = await daily_summary(repo, date.today())
            history = await range_summary(repo, date.today(), days)
            return today, history
        finally:
            await db.close()

    try:
        today, history = asyncio.run(collect())
    except PomodoroError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(Panel(
        f"[red]Work:[/red] {format_duration(today.work.total_seconds())}    "
        f"[green]Breaks:[/green] {format_duration(today.breaks.total_seconds())}",
        title="Today",
        border_style="cyan",
    ))

    table = Table(title=f"Last {days} Days", show_header=True, header_style="bold cyan")
    table.add_column("Day")
    table.add_column("Work", justify="right")
    table.add_column("Breaks", justify="right")

    for day in history:
        table.add_row(
            day.day.strftime("%a %Y-%m-%d"),
            format_duration(day.work.total_seconds()),
            format_duration(day.breaks.total_seconds()),
        )

    console.print(table)


@app.command()
def config_show() -> None:
    """Show current configuration."""
    config = get_config()

    table = Table(title="Tomato Log Configuration", show_header=True, header_style="bold cyan")
    table.add_column("Setting")
    table.add_column("Value")

    table.add_row("[bold]Paths[/bold]", "")
    table.add_row("  Data Directory", str(config.data_dir))
    table.add_row("  Log Directory", str(config.log_dir))
    table.add_row("  Config File", str(config.config_file))
    table.add_row("  Database", str(config.db_path))

    table.add_row("[bold]Intervals[/bold]", "")
    table.add_row("  Work", format_duration(config.intervals.work.total_seconds()))
    table.add_row("  Short Break", format_duration(config.intervals.short_break.total_seconds()))
    table.add_row("  Long Break", format_duration(config.intervals.long_break.total_seconds()))

    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"Tomato Log v{__version__}")


@app.callback()
def main_callback() -> None:
    """Tomato Log - Pomodoro interval tracker."""
    pass


if __name__ == "__main__":
    app()
