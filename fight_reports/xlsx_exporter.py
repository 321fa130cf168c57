"""Export a schedule with results and standings to an Excel workbook."""

import re
from pathlib import Path

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from fight_scheduler.models import Event, MatchResult, ScheduleEntry
from fight_scheduler.results import GroupStandings
from fight_scheduler.types import Schedule
from shared.time_utils import format_duration

HEADER_FONT = Font(bold=True, size=12)
HEADER_FILL = PatternFill(start_color="D3D3D3", end_color="D3D3D3", fill_type="solid")

SCHEDULE_HEADERS = ["#", "Area", "Group", "Time", "Athlete 1", "Athlete 2", "Score", "Winner"]
SCHEDULE_WIDTHS = [5, 15, 15, 8, 20, 20, 10, 20]

STANDINGS_HEADERS = [
    "Rank",
    "Athlete",
    "Fights (Played/Scheduled)",
    "Wins",
    "Draws",
    "Losses",
    "Win %",
    "Points Scored",
    "Points Against",
    "+/-",
]
STANDINGS_WIDTHS = [6, 20, 22, 6, 6, 8, 8, 14, 15, 6]

MAX_SHEET_NAME_LENGTH = 31


def safe_sheet_name(name: str) -> str:
    """Excel sheet names are limited to 31 characters without :\\/?*[]."""
    return re.sub(r"[:\\/?*\[\]]", "_", name[:MAX_SHEET_NAME_LENGTH])


def _write_header(ws: Worksheet, row: int, headers: list[str]) -> None:
    for col_idx, header in enumerate(headers, start=1):
        cell = ws.cell(row=row, column=col_idx, value=header)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL


def _set_widths(ws: Worksheet, widths: list[int]) -> None:
    for col_idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(col_idx)].width = width


def _winner_name(entry: ScheduleEntry, result: MatchResult) -> str:
    if result.winner_id is None:
        return "Draw"
    if result.winner_id == entry.athlete1_id:
        return entry.athlete1_name
    return entry.athlete2_name


def _write_event_info(ws: Worksheet, event: Event, schedule: Schedule) -> None:
    rows: list[tuple] = [
        ("Event Information",),
        ("Name", event.name),
        ("Date", event.date),
        ("Start Time", event.window_start),
        ("End Time", event.window_end),
        ("Match Duration", format_duration(event.match_duration_seconds)),
        ("Rotation Time", format_duration(event.rotation_seconds)),
        ("Min Rest Between Matches", format_duration(event.min_rest_seconds)),
        (),
        ("Statistics",),
        ("Total Matches", schedule.stats.total_matches),
        ("Total Duration", format_duration(schedule.stats.total_duration)),
    ]
    for row in rows:
        ws.append(list(row))

    for row_idx in (1, 10):
        ws.cell(row=row_idx, column=1).font = HEADER_FONT
    _set_widths(ws, [26, 30])


def _write_schedule(
    ws: Worksheet, event: Event, schedule: Schedule, results: dict[str, MatchResult]
) -> None:
    area_names = {area.id: area.name for area in event.areas}
    group_names = {group.id: group.name for group in event.groups}

    _write_header(ws, 1, SCHEDULE_HEADERS)
    for entry in schedule.entries:
        result = results.get(entry.match_id)
        ws.append([
            entry.sequence_number,
            area_names.get(entry.area_id),
            group_names.get(entry.group_id),
            entry.scheduled_time,
            entry.athlete1_name,
            entry.athlete2_name,
            f"{result.athlete1_score}-{result.athlete2_score}" if result else None,
            _winner_name(entry, result) if result else None,
        ])
    _set_widths(ws, SCHEDULE_WIDTHS)


def _write_standings(ws: Worksheet, standing: GroupStandings) -> None:
    ws.cell(row=1, column=1, value=f"{standing.area_name} - {standing.group_name}").font = HEADER_FONT
    ws.cell(row=1, column=len(STANDINGS_HEADERS), value=f"{standing.completion_percentage:.0f}% Complete")
    _write_header(ws, 2, STANDINGS_HEADERS)

    for athlete in standing.athletes:
        differential = athlete.points_differential
        ws.append([
            athlete.rank,
            athlete.athlete_name,
            f"{athlete.matches_played}/{athlete.matches_scheduled}",
            athlete.wins,
            athlete.draws,
            athlete.losses,
            f"{athlete.win_percentage:.1f}%",
            athlete.total_points_scored,
            athlete.total_points_against,
            f"+{differential}" if differential > 0 else differential,
        ])
    _set_widths(ws, STANDINGS_WIDTHS)


def export_to_excel(
    schedule: Schedule,
    event: Event,
    results: dict[str, MatchResult],
    standings: list[GroupStandings],
    output_path: Path,
) -> None:
    """
    Export event information, the schedule with scores, and standings.

    Sheets: "Event Info", "Schedule", then one sheet per group that has
    athletes.
    """
    wb = Workbook()
    info_sheet = wb.active
    info_sheet.title = "Event Info"
    _write_event_info(info_sheet, event, schedule)

    _write_schedule(wb.create_sheet("Schedule"), event, schedule, results)

    used_names = set(wb.sheetnames)
    for standing in standings:
        if not standing.athletes:
            continue
        sheet_name = safe_sheet_name(standing.group_name)
        suffix = 2
        while sheet_name in used_names:
            tail = f" ({suffix})"
            sheet_name = safe_sheet_name(standing.group_name[: MAX_SHEET_NAME_LENGTH - len(tail)] + tail)
            suffix += 1
        used_names.add(sheet_name)
        _write_standings(wb.create_sheet(sheet_name), standing)

    wb.save(output_path)
