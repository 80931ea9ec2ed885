"""Export functionality for saved timetables."""

import json
from abc import ABC, abstractmethod
from pathlib import Path

import pandas as pd
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from .constants import BREAKS, WORKING_DAYS, day_index
from .exceptions import ExportError
from .models import SavedTimetable, TimetableEntry

# Fonts
FONT_TITLE = Font(name="Calibri", size=16, bold=True)
FONT_HEADER = Font(name="Calibri", size=11, bold=True, color="FFFFFF")
FONT_META = Font(name="Calibri", size=9, color="64748B")
FONT_CELL = Font(name="Calibri", size=10)
FONT_BREAK = Font(name="Calibri", size=10, italic=True, color="64748B")

HEADER_FILL = PatternFill(start_color="1E40AF", end_color="1E40AF", fill_type="solid")
BREAK_FILL = PatternFill(start_color="F1F5F9", end_color="F1F5F9", fill_type="solid")

ALIGN_CENTER = Alignment(horizontal="center", vertical="center", wrap_text=True)

THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)

# First row of the day x time grid on the Timetable sheet
GRID_START_ROW = 5


def format_entry_cell(record: SavedTimetable, entry: TimetableEntry) -> str:
    """Cell text for an entry: subject, teacher and room on separate lines."""
    subject = record.get_subject(entry.subject_id)
    lines = [subject.name if subject else "Unknown Subject", entry.teacher_id]
    if entry.room_id:
        lines.append(f"Room {entry.room_id}")
    return "\n".join(line for line in lines if line)


def build_timetable_grid(
    record: SavedTimetable, include_breaks: bool = True
) -> list[tuple[str, dict[str, str], bool]]:
    """Lay entries out as rows of periods by working day.

    Args:
        record: Saved timetable
        include_breaks: Add the fixed break rows between periods

    Returns:
        List of (time range, {day: cell text}, is_break) sorted by start time
    """
    periods: dict[str, str] = {}
    for slot in record.time_slots:
        if slot.day in WORKING_DAYS:
            periods.setdefault(slot.start_time, slot.end_time)
    for entry in record.generated_timetable.entries:
        periods.setdefault(entry.start_time, entry.end_time)

    rows: list[tuple[str, str, dict[str, str], bool]] = []
    for start, end in periods.items():
        cells = {}
        for day in WORKING_DAYS:
            entries = [
                e
                for e in record.generated_timetable.entries
                if e.day == day and e.start_time == start
            ]
            cells[day] = "\n\n".join(format_entry_cell(record, e) for e in entries)
        rows.append((start, f"{start}-{end}", cells, False))

    if include_breaks:
        for brk in BREAKS:
            if brk["start"] not in periods:
                cells = {day: brk["name"] for day in WORKING_DAYS}
                rows.append((brk["start"], f"{brk['start']}-{brk['end']}", cells, True))

    rows.sort(key=lambda row: row[0])
    return [(label, cells, is_break) for _, label, cells, is_break in rows]


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, record: SavedTimetable, output_path: str | Path) -> None:
        """Export a saved timetable to file.

        Args:
            record: SavedTimetable to export
            output_path: Path to output file or directory
        """
        pass


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        """Initialize exporter.

        Args:
            indent: JSON indentation level
            ensure_ascii: If False, allows non-ASCII characters
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, record: SavedTimetable, output_path: str | Path) -> None:
        """Export timetable to JSON file."""
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                record.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )


def _entry_rows(record: SavedTimetable) -> list[dict]:
    entries = sorted(
        record.generated_timetable.entries,
        key=lambda e: (day_index(e.day), e.start_time),
    )
    rows = []
    for entry in entries:
        subject = record.get_subject(entry.subject_id)
        rows.append(
            {
                "id": entry.id,
                "day": entry.day,
                "start_time": entry.start_time,
                "end_time": entry.end_time,
                "subject_id": entry.subject_id,
                "subject": subject.name if subject else "",
                "teacher": entry.teacher_id,
                "room": entry.room_id or "",
                "time_slot_id": entry.time_slot_id,
            }
        )
    return rows


def _conflict_rows(record: SavedTimetable) -> list[dict]:
    rows = []
    for conflict in record.generated_timetable.conflicts:
        rows.append(
            {
                "type": conflict.type,
                "subject_id": conflict.subject_id or "",
                "categories": "; ".join(sorted(c.value for c in conflict.categories)),
                "description": conflict.description,
            }
        )
    return rows


def _summary_rows(record: SavedTimetable) -> list[dict]:
    return [
        {"metric": "name", "value": record.name},
        {"metric": "description", "value": record.description or ""},
        {"metric": "created_at", "value": record.created_at},
        {"metric": "updated_at", "value": record.updated_at},
        {"metric": "total_subjects", "value": record.metadata.total_subjects},
        {"metric": "total_time_slots", "value": record.metadata.total_time_slots},
        {"metric": "total_entries", "value": len(record.generated_timetable.entries)},
        {
            "metric": "completion_rate",
            "value": round(record.metadata.completion_rate, 1),
        },
        {"metric": "conflicts", "value": record.metadata.conflict_count},
    ]


class CSVExporter(BaseExporter):
    """Export to CSV format (multiple files)."""

    ENTRY_COLUMNS = [
        "id",
        "day",
        "start_time",
        "end_time",
        "subject_id",
        "subject",
        "teacher",
        "room",
        "time_slot_id",
    ]
    CONFLICT_COLUMNS = ["type", "subject_id", "categories", "description"]

    def export(self, record: SavedTimetable, output_path: str | Path) -> None:
        """Export timetable to CSV files.

        Creates three files:
        - entries.csv: All entries ordered by day and time
        - conflicts.csv: Unscheduled occurrences
        - summary.csv: Overall summary

        Args:
            record: SavedTimetable to export
            output_path: Path to output directory
        """
        output_dir = Path(output_path)
        output_dir.mkdir(parents=True, exist_ok=True)

        pd.DataFrame(_entry_rows(record), columns=self.ENTRY_COLUMNS).to_csv(
            output_dir / "entries.csv", index=False
        )
        pd.DataFrame(_conflict_rows(record), columns=self.CONFLICT_COLUMNS).to_csv(
            output_dir / "conflicts.csv", index=False
        )
        pd.DataFrame(_summary_rows(record)).to_csv(output_dir / "summary.csv", index=False)


class ExcelExporter(BaseExporter):
    """Export to Excel format (single workbook with multiple sheets)."""

    def export(self, record: SavedTimetable, output_path: str | Path) -> None:
        """Export timetable to Excel file.

        Creates workbook with sheets:
        - Timetable: Periods by working day grid
        - Entries: All entries
        - Conflicts: Unscheduled occurrences
        - Summary: Overall summary

        Args:
            record: SavedTimetable to export
            output_path: Path to output Excel file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            pd.DataFrame(_entry_rows(record), columns=CSVExporter.ENTRY_COLUMNS).to_excel(
                writer, sheet_name="Entries", index=False
            )
            pd.DataFrame(
                _conflict_rows(record), columns=CSVExporter.CONFLICT_COLUMNS
            ).to_excel(writer, sheet_name="Conflicts", index=False)
            pd.DataFrame(_summary_rows(record)).to_excel(
                writer, sheet_name="Summary", index=False
            )
            self._write_grid_sheet(record, writer.book)

    def _write_grid_sheet(self, record: SavedTimetable, workbook) -> None:
        """Write the day x period grid as the first sheet."""
        ws = workbook.create_sheet("Timetable", 0)

        ws["A1"] = record.name
        ws["A1"].font = FONT_TITLE
        metadata = (
            f"Subjects: {record.metadata.total_subjects}   "
            f"Completion: {record.metadata.completion_rate:.1f}%   "
            f"Conflicts: {record.metadata.conflict_count}"
        )
        ws["A2"] = metadata
        ws["A2"].font = FONT_META
        if record.description:
            ws["A3"] = record.description
            ws["A3"].font = FONT_META

        headers = ["Time Period", *WORKING_DAYS]
        for col, header in enumerate(headers, start=1):
            cell = ws.cell(row=GRID_START_ROW, column=col, value=header)
            cell.font = FONT_HEADER
            cell.fill = HEADER_FILL
            cell.alignment = ALIGN_CENTER
            cell.border = THIN_BORDER

        for offset, (label, cells, is_break) in enumerate(build_timetable_grid(record), start=1):
            row = GRID_START_ROW + offset
            time_cell = ws.cell(row=row, column=1, value=label)
            time_cell.alignment = ALIGN_CENTER
            time_cell.border = THIN_BORDER
            time_cell.font = FONT_CELL

            for col, day in enumerate(WORKING_DAYS, start=2):
                cell = ws.cell(row=row, column=col, value=cells[day] or None)
                cell.alignment = ALIGN_CENTER
                cell.border = THIN_BORDER
                if is_break:
                    cell.font = FONT_BREAK
                    cell.fill = BREAK_FILL
                else:
                    cell.font = FONT_CELL

            ws.row_dimensions[row].height = 18 if is_break else 48

        ws.column_dimensions["A"].width = 14.0
        for col in range(2, len(WORKING_DAYS) + 2):
            ws.column_dimensions[get_column_letter(col)].width = 24.0


def get_exporter(format_type: str) -> BaseExporter:
    """Get appropriate exporter for format type.

    Args:
        format_type: Export format ('json', 'csv', 'excel')

    Returns:
        Exporter instance

    Raises:
        ExportError: If format type is not supported
    """
    exporters = {
        "json": JSONExporter,
        "csv": CSVExporter,
        "excel": ExcelExporter,
    }

    if format_type not in exporters:
        raise ExportError(format_type, list(exporters.keys()))

    return exporters[format_type]()
