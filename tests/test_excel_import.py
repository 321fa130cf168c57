"""
Tests for Excel roster import and the template workbook
"""

import pytest
from openpyxl import Workbook

from fight_scheduler import excel_import
from fight_scheduler.excel_import import (
    TEMPLATE_SHEETS,
    generate_excel_template,
    import_athletes_from_excel,
)


def write_workbook(path, sheets: dict[str, list[tuple]]):
    wb = Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(name)
        for row in rows:
            ws.append(list(row))
    wb.save(path)
    return path


def test_sheets_become_areas_and_groups_keep_order(tmp_path):
    path = write_workbook(
        tmp_path / "roster.xlsx",
        {
            "Mat 1": [
                ("Group", "Athlete"),
                ("Seniors", "Alice"),
                ("Juniors", "Eve"),
                ("Seniors", "Bob"),
                (None, None),
                ("Juniors", "Frank"),
            ],
            "Mat 2": [("Masters", "Henry"), ("Masters", "Ivy")],
        },
    )

    result = import_athletes_from_excel(path)

    assert result.success
    assert result.errors == []
    assert [area.name for area in result.areas] == ["Mat 1", "Mat 2"]
    seniors, juniors = result.areas[0].groups
    assert seniors.name == "Seniors"
    assert [a.name for a in seniors.athletes] == ["Alice", "Bob"]
    assert [a.name for a in juniors.athletes] == ["Eve", "Frank"]


def test_single_athlete_groups_are_flagged(tmp_path):
    path = write_workbook(tmp_path / "roster.xlsx", {"Mat 1": [("Solo", "Alice"), ("Pair", "Bob"), ("Pair", "Eve")]})

    result = import_athletes_from_excel(path)

    assert result.success
    assert len(result.warnings) == 1
    assert "Solo" in result.warnings[0]


def test_empty_sheets_are_skipped(tmp_path):
    path = write_workbook(
        tmp_path / "roster.xlsx",
        {"Notes": [("Group", "Athlete")], "Mat 1": [("Seniors", "Alice"), ("Seniors", "Bob")]},
    )

    result = import_athletes_from_excel(path)

    assert [area.name for area in result.areas] == ["Mat 1"]
    assert result.warnings == ['Sheet "Notes": no group found']


def test_workbook_without_groups_fails(tmp_path):
    path = write_workbook(tmp_path / "roster.xlsx", {"Mat 1": [("Group", "Athlete")]})

    result = import_athletes_from_excel(path)

    assert not result.success
    assert result.errors == ["No valid area found in the workbook"]


def test_unreadable_file_fails(tmp_path):
    path = tmp_path / "roster.xlsx"
    path.write_text("not a workbook", encoding="utf-8")

    result = import_athletes_from_excel(path)

    assert not result.success
    assert result.errors[0].startswith("Could not read")


def test_template_imports_cleanly(tmp_path):
    path = tmp_path / "template.xlsx"

    generate_excel_template(path)
    result = import_athletes_from_excel(path)

    assert result.success
    assert result.warnings == []
    assert [area.name for area in result.areas] == list(TEMPLATE_SHEETS)
    assert sum(len(g.athletes) for area in result.areas for g in area.groups) == 14


class RecordingWorkbook:
    """Read-only workbook stand-in that remembers whether it was closed."""

    def __init__(self, sheetnames, error=None):
        self.sheetnames = sheetnames
        self.error = error
        self.closed = False

    def __getitem__(self, name):
        raise self.error

    def close(self):
        self.closed = True


class TestWorkbookIsClosed:
    def test_when_there_is_no_worksheet(self, tmp_path, monkeypatch):
        workbook = RecordingWorkbook([])
        monkeypatch.setattr(excel_import, "load_workbook", lambda *args, **kwargs: workbook)

        result = import_athletes_from_excel(tmp_path / "roster.xlsx")

        assert result.errors == ["The workbook contains no worksheet"]
        assert workbook.closed

    def test_when_reading_a_sheet_fails(self, tmp_path, monkeypatch):
        workbook = RecordingWorkbook(["Mat 1"], error=OSError("truncated archive"))
        monkeypatch.setattr(excel_import, "load_workbook", lambda *args, **kwargs: workbook)

        with pytest.raises(OSError):
            import_athletes_from_excel(tmp_path / "roster.xlsx")

        assert workbook.closed
