"""Tests for timetable exporters."""

import json

import pandas as pd
import pytest
from openpyxl import load_workbook

from timetable_generator.exceptions import ExportError
from timetable_generator.exporters import (
    CSVExporter,
    ExcelExporter,
    JSONExporter,
    build_timetable_grid,
    get_exporter,
)
from timetable_generator.models import SavedTimetable, TimetableMetadata


@pytest.fixture
def record(sample_subjects, week_slots, sample_timetable):
    return SavedTimetable(
        id="f" * 32,
        name="Autumn term",
        description="First draft",
        subjects=sample_subjects,
        time_slots=week_slots,
        generated_timetable=sample_timetable,
        metadata=TimetableMetadata.build(sample_subjects, week_slots, sample_timetable),
    )


class TestBuildTimetableGrid:
    """Tests for build_timetable_grid function."""

    def test_rows_sorted_by_start(self, record):
        labels = [label for label, _, _ in build_timetable_grid(record)]
        assert labels == ["08:30-09:20", "09:20-10:10", "11:00-11:30", "13:10-14:00"]

    def test_cells(self, record):
        rows = build_timetable_grid(record, include_breaks=False)
        first_label, cells, is_break = rows[0]

        assert first_label == "08:30-09:20"
        assert not is_break
        assert cells["Monday"] == "Math\nSmith\nRoom 101"
        assert cells["Tuesday"] == "Art\nBrown\nRoom 101"
        assert cells["Friday"] == ""

    def test_break_rows(self, record):
        breaks = [row for row in build_timetable_grid(record) if row[2]]
        assert [cells["Monday"] for _, cells, _ in breaks] == ["Morning break", "Prayer break"]


class TestJSONExporter:
    """Tests for JSONExporter."""

    def test_export(self, record, tmp_path):
        output = tmp_path / "out" / "timetable.json"
        JSONExporter().export(record, output)

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["name"] == "Autumn term"
        assert len(data["generatedTimetable"]["entries"]) == 3


class TestCSVExporter:
    """Tests for CSVExporter."""

    def test_export_files(self, record, tmp_path):
        CSVExporter().export(record, tmp_path / "csv")

        entries = pd.read_csv(tmp_path / "csv" / "entries.csv")
        assert list(entries.columns) == CSVExporter.ENTRY_COLUMNS
        assert list(entries["subject"]) == ["Math", "History", "Art"]
        assert (tmp_path / "csv" / "conflicts.csv").exists()
        assert (tmp_path / "csv" / "summary.csv").exists()


class TestExcelExporter:
    """Tests for ExcelExporter."""

    def test_sheets(self, record, tmp_path):
        output = tmp_path / "timetable.xlsx"
        ExcelExporter().export(record, output)

        wb = load_workbook(output)
        assert wb.sheetnames == ["Timetable", "Entries", "Conflicts", "Summary"]

    def test_grid_sheet(self, record, tmp_path):
        output = tmp_path / "timetable.xlsx"
        ExcelExporter().export(record, output)

        ws = load_workbook(output)["Timetable"]
        assert ws["A1"].value == "Autumn term"
        assert ws["A3"].value == "First draft"
        assert ws["B5"].value == "Monday"
        assert ws["A6"].value == "08:30-09:20"
        assert ws["B6"].value == "Math\nSmith\nRoom 101"


class TestGetExporter:
    """Tests for get_exporter function."""

    @pytest.mark.parametrize(
        "name, cls", [("json", JSONExporter), ("csv", CSVExporter), ("excel", ExcelExporter)]
    )
    def test_known(self, name, cls):
        assert isinstance(get_exporter(name), cls)

    def test_unknown(self):
        with pytest.raises(ExportError, match="Unknown export format: 'pdf'"):
            get_exporter("pdf")
