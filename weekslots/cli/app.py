"""
Main CLI application using Typer.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional, Annotated

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.memory_event_source import SAMPLE_EVENTS_FILE, InMemoryEventSource
from ..adapters.sqlite_event_source import SqliteEventSource
from ..config import AppConfig, load_config
from ..domain.availability_calculator import AvailabilityCalculator
from ..domain.exceptions import AvailabilityError
from ..domain.models import EventKind
from ..services.availability_finder import AvailabilityService

app = typer.Typer(
    name="weekslots",
    help="Resolve free 30-minute slots per day from openings and appointments",
    add_completion=False
)

console = Console()
error_console = Console(stderr=True)

TIMESTAMP_FORMAT = "YYYY-MM-DD HH:mm"

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")
]


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_path=False)],
        force=True,
    )


def _load(ctx: typer.Context, config_file: Optional[Path]) -> AppConfig:
    """Load configuration and set up logging for a command."""
    config = load_config(config_file)
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    _configure_logging("DEBUG" if verbose else config.log_level)
    return config


def _open_event_source(config: AppConfig, mock: bool):
    if mock:
        return InMemoryEventSource.from_json(config.sample_data or SAMPLE_EVENTS_FILE)

    source = SqliteEventSource(config.database)
    source.migrate()
    return source


def _parse_timestamp(value: str, label: str) -> pendulum.DateTime:
    try:
        return pendulum.from_format(value, TIMESTAMP_FORMAT)
    except ValueError as e:
        console.print(f"[red]Could not parse {label} '{value}' (expected {TIMESTAMP_FORMAT}): {e}[/red]")
        raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Weekly availability resolver.
    """
    ctx.obj = {"verbose": verbose}


@app.command()
def availabilities(
    ctx: typer.Context,
    date: Annotated[str, typer.Argument(help="First day of the week (YYYY-MM-DD)")],
    config_file: ConfigOption = None,
    mock: Annotated[bool, typer.Option("--mock", help="Use the bundled sample events instead of the database.")] = False,
    as_json: Annotated[bool, typer.Option("--json", help="Print the result as JSON.")] = False,
):
    """
    Show the free slots for the 7 days starting at DATE.

    Examples:

        weekslots availabilities 2014-08-10

        weekslots availabilities 2014-08-10 --mock --json
    """
    try:
        config = _load(ctx, config_file)
        source = _open_event_source(config, mock)

        try:
            service = AvailabilityService(
                event_source=source,
                calculator=AvailabilityCalculator(slot_minutes=config.slot_minutes),
            )
            result = asyncio.run(service.get_availabilities(date))
        finally:
            source.close()

    except (AvailabilityError, FileNotFoundError, ValueError) as e:
        error_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result, indent=2))
        return

    table = Table(
        title=f"Availabilities from {date}",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("Date", style="bold yellow")
    table.add_column("Day")
    table.add_column("Free slots")

    for day, slots in result.items():
        weekday = pendulum.parse(day).format("dddd")
        table.add_row(day, weekday, ", ".join(slots) if slots else "[dim]-[/dim]")

    console.print()
    console.print(table)
    console.print()


@app.command()
def migrate(
    ctx: typer.Context,
    config_file: ConfigOption = None,
):
    """
    Create the events table in the configured database.
    """
    try:
        config = _load(ctx, config_file)
        with SqliteEventSource(config.database) as source:
            source.migrate()
    except (AvailabilityError, FileNotFoundError, ValueError) as e:
        error_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓ Events table ready in {config.database}[/green]")


@app.command("add-event")
def add_event(
    ctx: typer.Context,
    kind: Annotated[EventKind, typer.Argument(help="opening or appointment")],
    start: Annotated[str, typer.Argument(help=f"Start ({TIMESTAMP_FORMAT})")],
    end: Annotated[str, typer.Argument(help=f"End ({TIMESTAMP_FORMAT})")],
    recurring: Annotated[bool, typer.Option("--recurring", help="Repeat an opening every week.")] = False,
    config_file: ConfigOption = None,
):
    """
    Store an opening or an appointment.
    """
    starts_at = _parse_timestamp(start, "start")
    ends_at = _parse_timestamp(end, "end")

    try:
        config = _load(ctx, config_file)
        with SqliteEventSource(config.database) as source:
            source.migrate()
            event_id = source.add_event(
                starts_at=starts_at,
                ends_at=ends_at,
                kind=kind,
                weekly_recurring=recurring,
            )
    except (AvailabilityError, FileNotFoundError, ValueError) as e:
        error_console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓ Stored {kind.value} #{event_id}[/green]")


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]weekslots[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
