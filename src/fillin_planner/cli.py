"""CLI entry point for the fill-in planner."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from .adapters import BatchFillInAdapter, SingleSlotAdapter
from .availability import format_availability, is_available, parse_availability
from .config import DataLoader
from .exceptions import FillInError
from .exporters import get_exporter
from .models import Student
from .normalization import normalize_id
from .utils import group_size_text, normalize_day, normalize_time

app = typer.Typer(
    name="fillin-planner",
    help="Recommend fill-in students for coaching lesson slots",
    add_completion=False,
)
console = Console()


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


OUTPUT_SUFFIXES = {
    OutputFormat.json: ".json",
    OutputFormat.csv: ".csv",
    OutputFormat.excel: ".xlsx",
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(data_dir: Path) -> DataLoader:
    """Load sources, exiting with an error message if core files are missing."""
    if not data_dir.exists():
        console.print(f"[bold red]Error:[/bold red] Data directory not found: {data_dir}")
        raise typer.Exit(1)

    with console.status("[bold green]Loading data..."):
        try:
            loader = DataLoader(data_dir)
            loader.require_core_sources()
        except FillInError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(1)
    return loader


@app.command()
def recommend(
    data_dir: Annotated[
        Path,
        typer.Argument(help="Directory with students, slots and blocks files"),
    ],
    coach: Annotated[
        Optional[int],
        typer.Option("--coach", "-c", help="Only slots of this coach id"),
    ] = None,
    day: Annotated[
        Optional[str],
        typer.Option("--day", "-d", help="Only slots on this day (e.g. Monday)"),
    ] = None,
    include_partial: Annotated[
        bool,
        typer.Option("--include-partial", help="Also fill slots that still have students"),
    ] = False,
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output file path"),
    ] = None,
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.json,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Recommend fill-in groups for every slot needing fill-ins."""
    _configure_logging(verbose)

    if day and normalize_day(day) is None:
        console.print(f"[bold red]Error:[/bold red] Invalid day: {day}")
        raise typer.Exit(1)

    loader = _load(data_dir)
    adapter = BatchFillInAdapter(
        loader.roster.students,
        loader.blocks.blocks,
        loader.statuses.statuses,
    )

    with console.status("[bold green]Finding fill-ins..."):
        try:
            report = adapter.run(
                loader.slots.slots,
                coach_id=coach,
                day=day,
                include_partial=include_partial,
            )
        except FillInError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(1)

    console.print(f"\n[bold]Fill-in Recommendations for:[/bold] {data_dir}")
    console.print(f"  Slots considered: {report.statistics.slots_considered}")
    console.print(f"  Slots processed: {report.statistics.slots_processed}")
    console.print(f"  Students recommended: {report.statistics.total_recommended}")

    if report.results:
        table = Table(title="Recommendations")
        table.add_column("Slot", style="cyan")
        table.add_column("Date", style="blue")
        table.add_column("Day / Time", style="blue")
        table.add_column("Coach", style="magenta")
        table.add_column("Places", style="yellow")
        table.add_column("Recommended", style="green")

        for result in report.results:
            slot = result.slot
            members = ", ".join(
                f"{m.name} ({m.lessons_owed} owed)" for m in result.recommended_group
            )
            table.add_row(
                str(slot.schedule_id),
                slot.slot_date or "",
                f"{slot.day_of_week} {slot.start_time}",
                slot.coach_name or str(slot.coach_id),
                f"{result.needed_count}/{result.effective_capacity}",
                members or "[dim]none[/dim]",
            )
        console.print(table)
    else:
        console.print("[bold yellow]No slots found needing fill-ins.[/bold yellow]")

    if output:
        if not output.suffix:
            output = output.with_suffix(OUTPUT_SUFFIXES[format])
        exporter = get_exporter(format.value)
        with console.status(f"[bold green]Exporting to {format.value}..."):
            exporter.export(report, output)
        console.print(f"\n[bold green]✓[/bold green] Exported to: {output}")


@app.command()
def suggest(
    data_dir: Annotated[
        Path,
        typer.Argument(help="Directory with students, slots and blocks files"),
    ],
    schedule_id: Annotated[
        str,
        typer.Argument(help="Schedule id of the slot"),
    ],
    date: Annotated[
        Optional[str],
        typer.Option("--date", help="Date to evaluate (YYYY-MM-DD); defaults to the slot date"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """List ranked replacement candidates for one slot."""
    _configure_logging(verbose)

    loader = _load(data_dir)
    slot = loader.slots.get(normalize_id(schedule_id))
    if slot is None:
        console.print(f"[bold red]Error:[/bold red] Slot not found: {schedule_id}")
        raise typer.Exit(1)

    adapter = SingleSlotAdapter(
        loader.roster.students,
        loader.blocks.blocks,
        loader.statuses.statuses,
    )
    try:
        suggestion = adapter.suggest(slot, target_date=date)
    except FillInError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    target = suggestion.slot
    console.print(
        f"\n[bold]Slot {target.schedule_id}:[/bold] {target.day_of_week} "
        f"{target.start_time} on {target.slot_date} "
        f"(capacity {suggestion.effective_capacity}, {len(target.occupant_ids)} present)"
    )

    if suggestion.candidates:
        table = Table(title="Candidates")
        table.add_column("#", style="cyan")
        table.add_column("Student", style="green")
        table.add_column("Owed", style="yellow")
        table.add_column("Group", style="magenta")

        for rank, member in enumerate(suggestion.candidates, start=1):
            sub_group = f" [{member.sub_group}]" if member.sub_group else ""
            table.add_row(
                str(rank),
                member.name,
                str(member.lessons_owed),
                f"{group_size_text(member.group_of)}{sub_group}",
            )
        console.print(table)
    else:
        console.print("[bold yellow]No suitable students available.[/bold yellow]")

    skipped = {**suggestion.stats.to_dict(), "pairing": suggestion.skipped_pairing}
    skipped.pop("eligible")
    console.print(
        "  Skipped: " + ", ".join(f"{reason} {count}" for reason, count in skipped.items())
    )


@app.command()
def availability(
    text: Annotated[
        str,
        typer.Argument(help='Availability string, e.g. "Monday: 09:00-10:00; 15:30"'),
    ],
    day: Annotated[
        Optional[str],
        typer.Option("--day", "-d", help="Day to check"),
    ] = None,
    time: Annotated[
        Optional[str],
        typer.Option("--time", "-t", help="Time to check"),
    ] = None,
) -> None:
    """Parse an availability string and optionally check one day/time."""
    parsed = parse_availability(text)
    lines = format_availability(parsed)

    if lines:
        console.print("[bold]Parsed availability:[/bold]")
        for line in lines:
            console.print(f"  {line}")
    else:
        console.print("[bold yellow]No valid times found.[/bold yellow]")

    if day or time:
        if not (day and time):
            console.print("[bold red]Error:[/bold red] --day and --time must be given together")
            raise typer.Exit(1)
        probe = Student(id="probe", name="probe", availability_string=text)
        shown = normalize_time(time) or time
        if is_available(probe, day, time):
            console.print(f"\n[bold green]✓ Available[/bold green] on {day} at {shown}")
        else:
            console.print(f"\n[bold red]✗ Not available[/bold red] on {day} at {shown}")
            raise typer.Exit(1)


@app.command()
def validate(
    data_dir: Annotated[
        Path,
        typer.Argument(help="Directory with students, slots and blocks files"),
    ],
) -> None:
    """Check data files and report problems."""
    loader = _load(data_dir)

    students = loader.roster.students
    console.print(f"\n[bold]Validation Results for:[/bold] {data_dir}")

    overview = Table(title="Overview", show_header=False)
    overview.add_column("Metric", style="cyan")
    overview.add_column("Value", style="green")
    overview.add_row("Students", str(len(students)))
    overview.add_row("Active students owing lessons", str(sum(1 for s in students if s.is_active and s.lessons_owed > 0)))
    overview.add_row("Slots", str(len(loader.slots.slots)))
    overview.add_row("Daily blocks", str(len(loader.blocks.blocks)))
    overview.add_row("Daily statuses", str(len(loader.statuses.statuses)))
    console.print(overview)

    warnings = list(loader.problems)
    warnings.extend(
        f"Slot {slot.schedule_id} has no slot_date" for slot in loader.slots.without_date()
    )
    warnings.extend(
        f"Student {s.id} ({s.name}) has no availability" for s in loader.roster.without_availability()
    )

    if warnings:
        console.print(f"\n[bold yellow]Warnings ({len(warnings)}):[/bold yellow]")
        for warning in warnings:
            console.print(f"  [yellow]• {warning}[/yellow]")

    if loader.slots.without_date():
        console.print("[bold red]✗ Data has issues[/bold red]")
        raise typer.Exit(1)

    console.print("[bold green]✓ Data is valid[/bold green]")


if __name__ == "__main__":
    app()
