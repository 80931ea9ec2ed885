"""CLI entry point for the timetable generator."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.table import Table

from .constants import WORKING_DAYS, day_index
from .editor import TimetableEditor, new_entry_for_slot
from .exceptions import TimetableError, TimetableNotFoundError
from .exporters import build_timetable_grid, get_exporter
from .loader import load_config, save_config
from .models import EntryUpdate, SavedTimetable, TimetableConfig
from .scheduler import TimetableGenerator, generate_default_time_slots
from .storage import TimetableStore
from .validators import validate_configuration

app = typer.Typer(
    name="timetable-generator",
    help="Generate weekly class timetables with conflict-aware greedy scheduling",
    add_completion=False,
)
console = Console()

# Default paths
DEFAULT_STORAGE_DIR = Path("data/timetables")
DEFAULT_OUTPUT = Path("output/timetable.json")

StorageOption = Annotated[
    Path,
    typer.Option(
        "--storage",
        help="Directory holding saved timetables",
        envvar="TIMETABLE_STORAGE_DIR",
    ),
]


class OutputFormat(str, Enum):
    """Output format options."""

    json = "json"
    csv = "csv"
    excel = "excel"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config_or_exit(config_file: Path) -> TimetableConfig:
    try:
        return load_config(config_file)
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _load_record_or_exit(store: TimetableStore, timetable_id: str) -> SavedTimetable:
    try:
        record = store.load(timetable_id)
        if record is None:
            raise TimetableNotFoundError(timetable_id)
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    return record


def _print_validation(errors: list[str], warnings: list[str]) -> None:
    if errors:
        console.print(f"\n[bold red]Errors ({len(errors)}):[/bold red]")
        for error in errors:
            console.print(f"  [red]• {error}[/red]")

    if warnings:
        console.print(f"\n[bold yellow]Warnings ({len(warnings)}):[/bold yellow]")
        for warning in warnings:
            console.print(f"  [yellow]• {warning}[/yellow]")


def _print_conflicts(messages: list[str]) -> None:
    console.print(f"\n[bold red]Conflicts ({len(messages)}):[/bold red]")
    for message in messages:
        console.print(f"  [red]• {message}[/red]")


@app.command()
def validate(
    config_file: Annotated[
        Path,
        typer.Argument(help="Configuration JSON file (subjects and timeSlots)"),
    ],
) -> None:
    """Validate a configuration without generating."""
    config = _load_config_or_exit(config_file)
    result = validate_configuration(config)

    console.print(f"\n[bold]Validation Results for:[/bold] {config_file.name}")
    console.print(f"  Subjects: {len(config.subjects)}")
    console.print(f"  Time slots: {len(config.time_slots)}")

    if result.is_valid:
        console.print("[bold green]✓ Configuration is valid[/bold green]")
    else:
        console.print("[bold red]✗ Configuration has errors[/bold red]")

    _print_validation(result.errors, result.warnings)

    if not result.is_valid:
        raise typer.Exit(1)


@app.command()
def generate(
    config_file: Annotated[
        Path,
        typer.Argument(help="Configuration JSON file (subjects and timeSlots)"),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Output JSON file path"),
    ] = None,
    save: Annotated[
        Optional[str],
        typer.Option("--save", help="Save the result under this name"),
    ] = None,
    description: Annotated[
        Optional[str],
        typer.Option("--description", help="Description stored with a saved timetable"),
    ] = None,
    storage: StorageOption = DEFAULT_STORAGE_DIR,
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Show detailed output"),
    ] = False,
) -> None:
    """Validate a configuration and generate a timetable."""
    _configure_logging(verbose)
    config = _load_config_or_exit(config_file)

    validation = validate_configuration(config)
    if not validation.is_valid:
        console.print("[bold red]✗ Configuration has errors, nothing generated[/bold red]")
        _print_validation(validation.errors, validation.warnings)
        raise typer.Exit(1)

    if validation.warnings:
        _print_validation([], validation.warnings)

    with console.status("[bold green]Generating timetable..."):
        result = TimetableGenerator(config).generate()

    stats = result.statistics
    console.print(f"\n[bold]Timetable Results for:[/bold] {config_file.name}")
    console.print(f"  Required sessions: {stats.total_required}")
    console.print(f"  Scheduled: {stats.total_scheduled}")
    console.print(f"  Unscheduled: {stats.total_unscheduled}")
    console.print(f"  Completion: {result.completion_rate:.1f}%")

    if stats.by_day:
        console.print("\n[bold]Distribution by day:[/bold]")
        for day, count in sorted(stats.by_day.items(), key=lambda x: day_index(x[0])):
            console.print(f"  {day}: {count}")

    if result.conflicts:
        console.print(f"\n[bold yellow]Conflicts ({len(result.conflicts)}):[/bold yellow]")
        shown = result.conflicts if verbose else result.conflicts[:5]
        for conflict in shown:
            console.print(f"[yellow]{conflict.description}[/yellow]\n")
        if len(result.conflicts) > len(shown):
            console.print(
                f"  [yellow]... and {len(result.conflicts) - len(shown)} more "
                "(use --verbose)[/yellow]"
            )

    output_path = output or DEFAULT_OUTPUT
    if output_path.suffix != ".json":
        output_path = output_path.with_suffix(".json")
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)
    console.print(f"\n[bold green]✓[/bold green] Timetable exported to: {output_path}")

    if save:
        store = TimetableStore(storage)
        try:
            timetable_id = store.save(
                save, config.subjects, config.time_slots, result, description=description
            )
        except TimetableError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(1)
        console.print(f"[bold green]✓[/bold green] Saved as {timetable_id}")


@app.command("default-slots")
def default_slots(
    output: Annotated[
        Optional[Path],
        typer.Option("-o", "--output", help="Write a configuration file with these slots"),
    ] = None,
) -> None:
    """Show (or write) the default week of time slots."""
    slots = generate_default_time_slots()

    if output:
        save_config(TimetableConfig(subjects=[], time_slots=slots), output)
        console.print(f"[bold green]✓[/bold green] Wrote {len(slots)} slots to: {output}")
        return

    table = Table(title="Default Time Slots")
    table.add_column("ID", style="cyan")
    table.add_column("Day", style="blue")
    table.add_column("Start", style="green")
    table.add_column("End", style="green")
    table.add_column("Minutes", style="magenta")
    for slot in slots:
        table.add_row(slot.id, slot.day, slot.start_time, slot.end_time, str(slot.duration))
    console.print(table)


@app.command("list")
def list_timetables(storage: StorageOption = DEFAULT_STORAGE_DIR) -> None:
    """List saved timetables, most recent first."""
    try:
        records = TimetableStore(storage).load_all()
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not records:
        console.print("[yellow]No saved timetables[/yellow]")
        return

    table = Table(title="Saved Timetables")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green", max_width=40)
    table.add_column("Subjects", style="blue")
    table.add_column("Completion", style="magenta")
    table.add_column("Conflicts", style="yellow")
    table.add_column("Updated", style="white")
    for record in records:
        table.add_row(
            record.id,
            record.name,
            str(record.metadata.total_subjects),
            f"{record.metadata.completion_rate:.1f}%",
            str(record.metadata.conflict_count),
            record.updated_at[:19],
        )
    console.print(table)


@app.command()
def show(
    timetable_id: Annotated[str, typer.Argument(help="Saved timetable id")],
    storage: StorageOption = DEFAULT_STORAGE_DIR,
) -> None:
    """Show a saved timetable as a grid."""
    store = TimetableStore(storage)
    record = _load_record_or_exit(store, timetable_id)

    console.print(f"\n[bold]{record.name}[/bold]")
    if record.description:
        console.print(f"  {record.description}")
    console.print(
        f"  Completion: {record.metadata.completion_rate:.1f}%   "
        f"Conflicts: {record.metadata.conflict_count}"
    )

    grid = Table(title="Timetable", show_lines=True)
    grid.add_column("Time", style="cyan")
    for day in WORKING_DAYS:
        grid.add_column(day, style="green")
    for label, cells, is_break in build_timetable_grid(record):
        style = "dim italic" if is_break else None
        grid.add_row(label, *(cells[day] for day in WORKING_DAYS), style=style)
    console.print(grid)

    editor = TimetableEditor(record.generated_timetable, record.subjects)
    overrides = editor.teacher_overrides()
    if overrides:
        console.print(f"\n[bold yellow]Teacher overrides ({len(overrides)}):[/bold yellow]")
        for entry in overrides:
            console.print(
                f"  [yellow]• {entry.day} {entry.start_time} {entry.subject_id}: "
                f"taught by {entry.teacher_id}[/yellow]"
            )


@app.command()
def delete(
    timetable_id: Annotated[str, typer.Argument(help="Saved timetable id")],
    storage: StorageOption = DEFAULT_STORAGE_DIR,
) -> None:
    """Delete a saved timetable."""
    try:
        deleted = TimetableStore(storage).delete(timetable_id)
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not deleted:
        console.print(f"[bold red]Error:[/bold red] Timetable '{timetable_id}' not found")
        raise typer.Exit(1)
    console.print(f"[bold green]✓[/bold green] Deleted {timetable_id}")


@app.command()
def stats(storage: StorageOption = DEFAULT_STORAGE_DIR) -> None:
    """Show statistics over all saved timetables."""
    try:
        statistics = TimetableStore(storage).get_stats()
    except TimetableError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    table = Table(title="Overview", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Saved Timetables", str(statistics["total_timetables"]))
    table.add_row("Average Completion", f"{statistics['average_completion_rate']:.1f}%")
    table.add_row("Total Subjects", str(statistics["total_subjects"]))
    table.add_row("Total Conflicts", str(statistics["total_conflicts"]))
    table.add_row("Last Updated", statistics["last_updated"] or "-")
    console.print(table)


@app.command()
def export(
    timetable_id: Annotated[str, typer.Argument(help="Saved timetable id")],
    output: Annotated[
        Path,
        typer.Option("-o", "--output", help="Output file or directory path"),
    ],
    format: Annotated[
        OutputFormat,
        typer.Option("-f", "--format", help="Output format"),
    ] = OutputFormat.excel,
    storage: StorageOption = DEFAULT_STORAGE_DIR,
) -> None:
    """Export a saved timetable."""
    store = TimetableStore(storage)
    record = _load_record_or_exit(store, timetable_id)
    exporter = get_exporter(format.value)

    if format == OutputFormat.csv:
        # CSV exports to directory
        output_path = output if output.is_dir() else output.parent / output.stem
    else:
        suffix = ".xlsx" if format == OutputFormat.excel else ".json"
        output_path = output if output.suffix else output.with_suffix(suffix)

    with console.status(f"[bold green]Exporting to {format.value}..."):
        exporter.export(record, output_path)

    console.print(f"\n[bold green]✓[/bold green] Exported to: {output_path}")


@app.command("add-entry")
def add_entry(
    timetable_id: Annotated[str, typer.Argument(help="Saved timetable id")],
    subject_id: Annotated[str, typer.Option("--subject", help="Subject id")],
    slot_id: Annotated[str, typer.Option("--slot", help="Time slot id")],
    teacher: Annotated[
        Optional[str],
        typer.Option("--teacher", help="Teacher (defaults to the subject's teacher)"),
    ] = None,
    room: Annotated[
        Optional[str],
        typer.Option("--room", help="Room (defaults to the subject's room)"),
    ] = None,
    storage: StorageOption = DEFAULT_STORAGE_DIR,
) -> None:
    """Add a class to a saved timetable."""
    store = TimetableStore(storage)
    record = _load_record_or_exit(store, timetable_id)

    subject = record.get_subject(subject_id)
    slot = next((s for s in record.time_slots if s.id == slot_id), None)
    if subject is None or slot is None:
        missing = f"subject '{subject_id}'" if subject is None else f"time slot '{slot_id}'"
        console.print(f"[bold red]Error:[/bold red] Unknown {missing}")
        raise typer.Exit(1)

    editor = TimetableEditor(record.generated_timetable, record.subjects)
    entry = new_entry_for_slot(subject, slot, teacher_id=teacher, room_id=room)
    conflicts = editor.add_entry(entry)
    if conflicts:
        _print_conflicts(conflicts)
        raise typer.Exit(1)

    store.update(timetable_id, generated_timetable=editor.timetable)
    console.print(f"[bold green]✓[/bold green] Added entry {entry.id}")


@app.command("update-entry")
def update_entry(
    timetable_id: Annotated[str, typer.Argument(help="Saved timetable id")],
    entry_id: Annotated[str, typer.Argument(help="Entry id")],
    subject_id: Annotated[Optional[str], typer.Option("--subject", help="New subject id")] = None,
    slot_id: Annotated[
        Optional[str], typer.Option("--slot", help="Move to this time slot id")
    ] = None,
    teacher: Annotated[Optional[str], typer.Option("--teacher", help="New teacher")] = None,
    room: Annotated[Optional[str], typer.Option("--room", help="New room")] = None,
    storage: StorageOption = DEFAULT_STORAGE_DIR,
) -> None:
    """Change or move a class in a saved timetable."""
    store = TimetableStore(storage)
    record = _load_record_or_exit(store, timetable_id)

    changes = EntryUpdate(
        subject_id=subject_id,
        teacher_id=teacher.strip() if teacher else None,
        room_id=room.strip() if room else None,
    )
    if slot_id:
        slot = next((s for s in record.time_slots if s.id == slot_id), None)
        if slot is None:
            console.print(f"[bold red]Error:[/bold red] Unknown time slot '{slot_id}'")
            raise typer.Exit(1)
        changes.time_slot_id = slot.id
        changes.day = slot.day
        changes.start_time = slot.start_time
        changes.end_time = slot.end_time

    editor = TimetableEditor(record.generated_timetable, record.subjects)
    conflicts = editor.update_entry(entry_id, changes)
    if conflicts:
        _print_conflicts(conflicts)
        raise typer.Exit(1)

    store.update(timetable_id, generated_timetable=editor.timetable)
    console.print(f"[bold green]✓[/bold green] Updated entry {entry_id}")


@app.command("delete-entry")
def delete_entry(
    timetable_id: Annotated[str, typer.Argument(help="Saved timetable id")],
    entry_id: Annotated[str, typer.Argument(help="Entry id")],
    storage: StorageOption = DEFAULT_STORAGE_DIR,
) -> None:
    """Remove a class from a saved timetable."""
    store = TimetableStore(storage)
    record = _load_record_or_exit(store, timetable_id)

    editor = TimetableEditor(record.generated_timetable, record.subjects)
    if not editor.delete_entry(entry_id):
        console.print(f"[bold red]Error:[/bold red] Entry '{entry_id}' not found")
        raise typer.Exit(1)

    store.update(timetable_id, generated_timetable=editor.timetable)
    console.print(f"[bold green]✓[/bold green] Deleted entry {entry_id}")


if __name__ == "__main__":
    app()
