"""
Schedule printing and formatting utilities.

This module contains functions for formatting fight schedules, their
statistics and warnings as readable text.
"""

from shared.time_utils import format_duration, format_duration_min_sec

from .models import Event, Severity
from .types import Schedule

SEVERITY_EMOJI = {
    Severity.ERROR: "❌",
    Severity.WARNING: "⚠️ ",
    Severity.INFO: "ℹ️ ",
}


def format_schedule_for_printing(schedule: Schedule, event: Event) -> str:
    """Format the entries of every area, one line per match."""
    if schedule.status != "solved" or not schedule.entries:
        return "No matches scheduled"

    group_names = {group.id: group.name for group in event.groups}
    lines: list[str] = []

    for area in event.areas:
        area_entries = schedule.entries_for_area(area.id)
        if not area_entries:
            continue

        lines.append(f"📍 {area.name}")
        lines.append("-" * 80)
        for entry in area_entries:
            round_info = f" R{entry.round_number}" if entry.round_number is not None else ""
            lines.append(
                f"{entry.sequence_number:3d}. {entry.scheduled_time}  "
                f"[{group_names.get(entry.group_id, entry.group_id)}{round_info}] "
                f"{entry.athlete1_name} vs {entry.athlete2_name}"
            )
        lines.append("")

    return "\n".join(lines).rstrip()


def format_stats(schedule: Schedule) -> str:
    """Summary statistics: totals, per-area margins and fairness figures."""
    stats = schedule.stats
    lines = [
        f"Total matches: {stats.total_matches}",
        f"Total duration: {format_duration(stats.total_duration)}",
    ]

    for area_stats in stats.area_stats:
        margin = area_stats.margin_or_overflow
        margin_text = (
            f"margin {format_duration(margin)}" if margin >= 0
            else f"overflow {format_duration(-margin)}"
        )
        lines.append(
            f"  {area_stats.area_name}: {area_stats.match_count} matches, "
            f"{format_duration(area_stats.duration)} ({margin_text})"
        )

    time_boxed = stats.time_boxed_stats
    if time_boxed:
        lines.append(
            f"Matches per athlete: min {time_boxed.min_matches_per_athlete}, "
            f"max {time_boxed.max_matches_per_athlete}, "
            f"avg {time_boxed.avg_matches_per_athlete:.1f} (gap {time_boxed.match_count_gap})"
        )
        lines.append(
            f"Completeness: {time_boxed.total_matches_scheduled}/"
            f"{time_boxed.total_theoretical_matches} "
            f"({time_boxed.overall_completeness_percentage:.1f}%), "
            f"rematches: {time_boxed.rematches_count}"
        )
        lines.append(f"Time utilization: {time_boxed.time_utilization_percentage:.1f}%")

    shortest_rests = [a for a in stats.athlete_stats if a.match_count > 1]
    if shortest_rests:
        tightest = min(shortest_rests, key=lambda a: a.min_rest_seconds)
        lines.append(
            f"Shortest rest: {format_duration_min_sec(max(tightest.min_rest_seconds, 0))} "
            f"({tightest.athlete_name})"
        )

    return "\n".join(lines)


def format_warnings(schedule: Schedule) -> str:
    lines: list[str] = []
    for warning in schedule.warnings:
        lines.append(f"{SEVERITY_EMOJI[warning.severity]} [{warning.type.value}] {warning.message}")
        if warning.suggestion:
            lines.append(f"   💡 {warning.suggestion}")
    return "\n".join(lines)

