"""Import athlete rosters from Excel workbooks.

Expected layout: one worksheet per area, column A holds the group name and
column B the athlete name:

    | Group A | Alice   |
    | Group A | Bob     |
    | Group B | Charlie |

Header rows ("Group" / "Athlete") and blank rows are ignored.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils.exceptions import InvalidFileException

from .dtos import AreaInput, AthleteInput, GroupInput

logger = logging.getLogger(__name__)

HEADER_GROUP_NAMES = {"group", "groupe"}
HEADER_ATHLETE_NAMES = {"athlete", "athlète"}

TEMPLATE_SHEETS: dict[str, list[tuple[str, str]]] = {
    "Area 1": [
        ("Group A", "Alice"),
        ("Group A", "Bob"),
        ("Group A", "Charlie"),
        ("Group A", "David"),
        ("Group B", "Eve"),
        ("Group B", "Frank"),
        ("Group B", "Grace"),
        ("Group B", "Henry"),
    ],
    "Area 2": [
        ("Group C", "Ivy"),
        ("Group C", "Jack"),
        ("Group C", "Kate"),
        ("Group D", "Liam"),
        ("Group D", "Mia"),
        ("Group D", "Noah"),
    ],
}


@dataclass
class ImportResult:
    success: bool = False
    areas: list[AreaInput] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def _is_header(group_name: str, athlete_name: str) -> bool:
    return (
        group_name.lower() in HEADER_GROUP_NAMES
        or athlete_name.lower() in HEADER_ATHLETE_NAMES
    )


def _read_areas(workbook, result: ImportResult) -> None:
    """Append one area per sheet that lists at least one group."""
    for sheet_name in workbook.sheetnames:
        sheet = workbook[sheet_name]
        rosters: dict[str, list[str]] = {}

        for row in sheet.iter_rows(min_col=1, max_col=2, values_only=True):
            group_cell, athlete_cell = (tuple(row) + (None, None))[:2]
            group_name = str(group_cell or "").strip()
            athlete_name = str(athlete_cell or "").strip()

            if not group_name or not athlete_name:
                continue
            if _is_header(group_name, athlete_name):
                continue

            rosters.setdefault(group_name, []).append(athlete_name)

        if not rosters:
            result.warnings.append(f'Sheet "{sheet_name}": no group found')
            continue

        groups: list[GroupInput] = []
        for group_name, athletes in rosters.items():
            if len(athletes) == 1:
                result.warnings.append(
                    f'Group "{group_name}" in "{sheet_name}": only 1 athlete (at least 2 required)'
                )
            groups.append(
                GroupInput(name=group_name, athletes=[AthleteInput(name=name) for name in athletes])
            )

        result.areas.append(AreaInput(name=sheet_name, groups=groups))
        logger.debug(f"Sheet {sheet_name}: {len(groups)} group(s)")


def import_athletes_from_excel(path: Path) -> ImportResult:
    """
    Read areas, groups and athletes from a workbook.

    Groups keep the order in which they first appear on their sheet, and
    athletes keep their row order.

    Returns:
        ImportResult with success=False and an error message when the file
        cannot be read or contains no usable area
    """
    result = ImportResult()

    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except (OSError, BadZipFile, InvalidFileException, KeyError) as e:
        result.errors.append(f"Could not read {path}: {e}")
        return result

    try:
        if not workbook.sheetnames:
            result.errors.append("The workbook contains no worksheet")
            return result
        _read_areas(workbook, result)
    finally:
        workbook.close()

    if not result.areas:
        result.errors.append("No valid area found in the workbook")
        return result

    result.success = True
    return result


def generate_excel_template(output_path: Path) -> None:
    """Write an example roster workbook in the expected layout."""
    wb = Workbook()
    wb.remove(wb.active)

    for sheet_name, rows in TEMPLATE_SHEETS.items():
        ws = wb.create_sheet(sheet_name)
        for col_idx, header in enumerate(["Group", "Athlete"], start=1):
            cell = ws.cell(row=1, column=col_idx, value=header)
            cell.font = Font(bold=True, size=12)
            cell.fill = PatternFill(start_color="D3D3D3", end_color="D3D3D3", fill_type="solid")

        for row_idx, (group_name, athlete_name) in enumerate(rows, start=2):
            ws.cell(row=row_idx, column=1, value=group_name)
            ws.cell(row=row_idx, column=2, value=athlete_name)

        ws.column_dimensions["A"].width = 15
        ws.column_dimensions["B"].width = 20

    wb.save(output_path)
