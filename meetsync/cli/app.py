"""
Main CLI application using Typer.
"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from ..adapters.json_contract import load_snapshot, report_to_payload
from ..config import AppConfig, load_config
from ..domain.analytics import AnalyticsReporter
from ..domain.exceptions import MeetSyncError
from ..domain.suggestions import suggest_time_slots
from ..domain.time_normalizer import resolve_timezone

app = typer.Typer(
    name="meetsync",
    help="Rank candidate meeting times from group availability polls",
    add_completion=False
)

console = Console()

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml if present"),
]
VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")]


def _setup(config_file: Optional[Path], verbose: bool) -> AppConfig:
    """Load configuration and configure logging."""
    try:
        config = load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    logging.basicConfig(
        level=logging.DEBUG if verbose else config.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    return config


def _load(snapshot: Path, config: AppConfig):
    try:
        return load_snapshot(snapshot, default_timezone=config.default_timezone)
    except (FileNotFoundError, ValueError, MeetSyncError) as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def analyze(
    snapshot: Annotated[Path, typer.Argument(help="JSON file with a poll and its responses")],
    config_file: ConfigOption = None,
    json_output: Annotated[bool, typer.Option("--json", help="Print the analytics payload as JSON.")] = False,
    top: Annotated[Optional[int], typer.Option("--top", "-n", min=1, help="Number of best slots to report.")] = None,
    verbose: VerboseOption = False,
):
    """
    Rank the time slots of a poll snapshot.

    Examples:

        meetsync analyze poll.json

        meetsync analyze poll.json --top 5 --json
    """
    config = _setup(config_file, verbose)
    poll, responses, unreadable = _load(snapshot, config)

    reporter = config.build_reporter()
    if top is not None:
        reporter = AnalyticsReporter(ranker=reporter.ranker, best_slot_count=top)

    report = reporter.summarize(poll, responses, rejected=unreadable)

    if json_output:
        typer.echo(json.dumps(report_to_payload(poll, report), indent=2))
        return

    console.print()
    console.print(f"[bold cyan]{escape(poll.title or poll.id)}[/bold cyan] ({poll.reference_timezone})")
    console.print(f"   Responses: {report.total_responses}")
    if report.timezone_distribution:
        zones = ", ".join(f"{zone} ({count})" for zone, count in report.timezone_distribution.items())
        console.print(f"   Time zones: {zones}")
    console.print()

    if not report.all_slot_scores:
        console.print("[yellow]⚠ This poll has no time slots.[/yellow]\n")
    else:
        best_indexes = {score.slot_index for score in report.best_slots}
        table = Table(title="Ranked time slots", show_header=True, header_style="bold cyan")
        table.add_column("Rank", justify="right", no_wrap=True)
        table.add_column("Slot", no_wrap=True)
        table.add_column("Votes", justify="right", no_wrap=True)
        table.add_column("Fitness", justify="right", no_wrap=True)
        table.add_column("Score", justify="right", no_wrap=True)
        table.add_column("Available", style="dim")

        for score in report.all_slot_scores:
            slot = poll.time_slots[score.slot_index]
            voters = report.slot_tallies[score.slot_index].voter_names
            table.add_row(
                str(score.rank),
                str(slot),
                str(score.vote_count),
                f"{score.working_hours_fitness:.2f}",
                f"{score.composite_score:.2f}",
                ", ".join(voters),
                style="bold green" if score.slot_index in best_indexes else None,
            )

        console.print(table)
        console.print()

    for rejected in report.rejected:
        console.print(f"[yellow]⚠ Skipped response from {escape(rejected.name)}: {escape(rejected.message)}[/yellow]")


@app.command()
def local_times(
    snapshot: Annotated[Path, typer.Argument(help="JSON file with a poll")],
    timezone: Annotated[str, typer.Option("--timezone", "-t", help="Zone to show the slots in.")],
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Show a poll's time slots on another time zone's clock.
    """
    config = _setup(config_file, verbose)
    poll, _, _ = _load(snapshot, config)

    try:
        resolve_timezone(timezone)
    except MeetSyncError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    table = Table(title=f"Time slots in {timezone}", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right")
    table.add_column(f"Poll time ({poll.reference_timezone})", style="dim", no_wrap=True)
    table.add_column("Local time", style="bold yellow", no_wrap=True)

    for index, slot in enumerate(poll.time_slots):
        start, end = slot.in_timezone(poll.reference_timezone, timezone)
        table.add_row(
            str(index),
            str(slot),
            f"{start.format('ddd YYYY-MM-DD HH:mm')} - {end.format('HH:mm')}",
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def suggest(
    start: Annotated[Optional[str], typer.Option("--start", help="Day before the first suggestion (YYYY-MM-DD). Defaults to today.")] = None,
    days: Annotated[int, typer.Option("--days", "-d", min=1, help="Number of days to suggest.")] = 5,
    timezone: Annotated[Optional[str], typer.Option("--timezone", "-t", help="Zone used to determine today.")] = None,
    json_output: Annotated[bool, typer.Option("--json", help="Print the slots as JSON.")] = False,
    config_file: ConfigOption = None,
    verbose: VerboseOption = False,
):
    """
    Suggest candidate time slots for a new poll.
    """
    config = _setup(config_file, verbose)
    tz = timezone or config.default_timezone

    try:
        resolve_timezone(tz)
        if start:
            today = pendulum.from_format(start, "YYYY-MM-DD", tz=tz).date()
        else:
            today = pendulum.today(tz).date()
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)

    slots = suggest_time_slots(today, days=days)

    if json_output:
        typer.echo(json.dumps(
            [
                {
                    "date": slot.date.isoformat(),
                    "startTime": slot.start_time.strftime("%H:%M"),
                    "endTime": slot.end_time.strftime("%H:%M"),
                }
                for slot in slots
            ],
            indent=2,
        ))
        return

    console.print()
    for slot in slots:
        console.print(f"  {slot}")
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]meetsync[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
