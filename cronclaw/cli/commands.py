"""CLI commands for cronclaw."""

from __future__ import annotations

import sys
from pathlib import Path

import typer
from loguru import logger
from pydantic import ValidationError as ModelValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cronclaw import __version__
from cronclaw.config.loader import get_config_path, load_config, save_config
from cronclaw.config.schema import Config, EveryXConfig, ScheduleConfig
from cronclaw.errors import ValidationError
from cronclaw.scheduler.preview import next_run_times

app = typer.Typer(
    name="cronclaw",
    help="cronclaw - build cron expressions from plain scheduling intent",
    no_args_is_help=True,
)

console = Console()

_EVERY_HELP = "Run once per unit: minute, hour, day, month or week."
_EVERY_X_HELP = "Step as N:UNIT, e.g. 15:minute (units: minute, hour, dayOfMonth, month, dayOfWeek)."


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        console.print(f"cronclaw v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log every directive to stderr.",
    ),
) -> None:
    """cronclaw CLI entry point."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _parse_ints(value: str | None, option: str) -> list[int] | None:
    if value is None:
        return None
    try:
        return [int(part) for part in value.split(",") if part.strip()]
    except ValueError:
        raise ValidationError(f"{option} expects comma-separated integers, got {value!r}") from None


def _parse_every_x(value: str | None) -> EveryXConfig | None:
    if value is None:
        return None
    interval, sep, unit = value.partition(":")
    if not sep:
        raise ValidationError(f"--every-x expects N:UNIT, got {value!r}")
    try:
        step = int(interval)
    except ValueError:
        raise ValidationError(f"--every-x expects an integer interval, got {interval!r}") from None
    return EveryXConfig(interval=step, unit=unit.strip())


def _schedule_from_options(
    every: str | None,
    every_x: str | None,
    at: str | None,
    hours: str | None,
    minutes: str | None,
    days: str | None,
    weekdays: str | None,
    months: str | None,
    description: str = "",
) -> ScheduleConfig:
    return ScheduleConfig(
        description=description,
        every=every,
        every_x=_parse_every_x(every_x),
        at=at,
        hours=_parse_ints(hours, "--hours"),
        minutes=_parse_ints(minutes, "--minutes"),
        days_of_month=_parse_ints(days, "--days"),
        weekdays=_parse_ints(weekdays, "--weekdays"),
        months=_parse_ints(months, "--months"),
    )


def _error_message(e: ValueError) -> str:
    if isinstance(e, ModelValidationError):
        return "; ".join(err["msg"].removeprefix("Value error, ") for err in e.errors())
    return str(e)


def _fail(e: ValueError) -> typer.Exit:
    console.print(f"[red]Error:[/red] {escape(_error_message(e))}")
    return typer.Exit(code=1)


def _print_preview(expression: str, config: Config, count: int | None) -> None:
    table = Table(title=f"Next runs ({config.preview.timezone})")
    table.add_column("#", justify="right")
    table.add_column("Time")
    times = next_run_times(
        expression,
        count=count or config.preview.count,
        timezone=config.preview.timezone,
    )
    for i, when in enumerate(times, start=1):
        table.add_row(str(i), when.strftime("%Y-%m-%d %H:%M %a"))
    console.print(table)


@app.command()
def build(
    every: str | None = typer.Option(None, "--every", "-e", help=_EVERY_HELP),
    every_x: str | None = typer.Option(None, "--every-x", "-x", help=_EVERY_X_HELP),
    at: str | None = typer.Option(None, "--at", "-a", help="Time of day as HH:MM."),
    hours: str | None = typer.Option(None, "--hours", help="Hours, e.g. 9,12,15."),
    minutes: str | None = typer.Option(None, "--minutes", help="Minutes, e.g. 0,30."),
    days: str | None = typer.Option(None, "--days", help="Days of month, e.g. 1,15."),
    weekdays: str | None = typer.Option(None, "--weekdays", help="Weekdays, 0=Sunday, e.g. 1,2,3,4,5."),
    months: str | None = typer.Option(None, "--months", help="Months, e.g. 1,7."),
    preview: bool = typer.Option(False, "--preview", "-p", help="Also show upcoming run times."),
    count: int | None = typer.Option(None, "--count", "-n", help="Number of run times to preview."),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Custom config path (default: ~/.cronclaw/config.json).",
    ),
) -> None:
    """Build a cron expression from scheduling directives."""
    try:
        schedule = _schedule_from_options(every, every_x, at, hours, minutes, days, weekdays, months)
        expression = schedule.compile()
        console.print(expression, markup=False, highlight=False)
        if preview:
            _print_preview(expression, load_config(config_path), count)
    except ValueError as e:
        raise _fail(e) from e


@app.command()
def save(
    name: str = typer.Argument(..., help="Name to store the schedule under."),
    every: str | None = typer.Option(None, "--every", "-e", help=_EVERY_HELP),
    every_x: str | None = typer.Option(None, "--every-x", "-x", help=_EVERY_X_HELP),
    at: str | None = typer.Option(None, "--at", "-a", help="Time of day as HH:MM."),
    hours: str | None = typer.Option(None, "--hours", help="Hours, e.g. 9,12,15."),
    minutes: str | None = typer.Option(None, "--minutes", help="Minutes, e.g. 0,30."),
    days: str | None = typer.Option(None, "--days", help="Days of month, e.g. 1,15."),
    weekdays: str | None = typer.Option(None, "--weekdays", help="Weekdays, 0=Sunday, e.g. 1,2,3,4,5."),
    months: str | None = typer.Option(None, "--months", help="Months, e.g. 1,7."),
    description: str = typer.Option("", "--description", "-d", help="Free-form note."),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Custom config path (default: ~/.cronclaw/config.json).",
    ),
) -> None:
    """Store a named schedule in the config file."""
    try:
        schedule = _schedule_from_options(
            every, every_x, at, hours, minutes, days, weekdays, months, description
        )
        expression = schedule.compile()
    except ValueError as e:
        raise _fail(e) from e

    config = load_config(config_path)
    replaced = name in config.schedules
    config.schedules[name] = schedule
    save_config(config, config_path)
    logger.info("Saved schedule {}: {}", name, expression)
    verb = "Updated" if replaced else "Saved"
    console.print(f"[green]{verb}[/green] {escape(name)}: {escape(expression)}")


@app.command()
def show(
    name: str = typer.Argument(..., help="Stored schedule name."),
    preview: bool = typer.Option(False, "--preview", "-p", help="Also show upcoming run times."),
    count: int | None = typer.Option(None, "--count", "-n", help="Number of run times to preview."),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Custom config path (default: ~/.cronclaw/config.json).",
    ),
) -> None:
    """Print the cron expression of a stored schedule."""
    config = load_config(config_path)
    schedule = config.schedules.get(name)
    if schedule is None:
        console.print(f"[red]Error:[/red] No schedule named {escape(name)!r}")
        raise typer.Exit(code=1)

    try:
        expression = schedule.compile()
        console.print(expression, markup=False, highlight=False)
        if preview:
            _print_preview(expression, config, count)
    except ValueError as e:
        raise _fail(e) from e


@app.command("list")
def list_schedules(
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Custom config path (default: ~/.cronclaw/config.json).",
    ),
) -> None:
    """List stored schedules with their cron expressions."""
    config = load_config(config_path)
    if not config.schedules:
        console.print("No schedules stored. Add one with `cronclaw save NAME ...`")
        return

    table = Table(title="Schedules")
    table.add_column("Name")
    table.add_column("Expression")
    table.add_column("Description")
    for name, schedule in sorted(config.schedules.items()):
        table.add_row(escape(name), schedule.compile(), escape(schedule.description))
    console.print(table)


@app.command()
def onboard(
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Custom config path (default: ~/.cronclaw/config.json).",
    ),
    overwrite: bool = typer.Option(
        False,
        "--overwrite",
        help="Overwrite existing config with defaults.",
    ),
) -> None:
    """Initialize the cronclaw configuration file."""
    path = config_path or get_config_path()

    if path.exists() and not overwrite:
        config = load_config(path)
        save_config(config, path)
        console.print(f"[green]Config refreshed:[/green] {path}")
        console.print("Existing values are preserved; missing fields are added.")
        return

    save_config(Config(), path)
    if overwrite:
        console.print(f"[green]Config reset:[/green] {path}")
    else:
        console.print(f"[green]Config created:[/green] {path}")

    console.print("\nNext steps:")
    console.print("- Try it: `cronclaw build --at 09:00 --weekdays 1,2,3,4,5`")
    console.print("- Store it: `cronclaw save standup --at 09:00 --weekdays 1,2,3,4,5`")
    console.print("- Review stored schedules: `cronclaw list`")
