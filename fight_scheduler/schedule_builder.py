"""
Build a Schedule from existing entries.

Used when a schedule comes back from an export document, possibly after
manual edits: statistics are recomputed from the entries instead of running
the scheduler again.
"""

from .constraint_validator import validate_min_rest_between_fights
from .models import Event, ScheduleEntry
from .stats import (
    compute_area_stats,
    compute_athlete_stats,
    compute_time_boxed_stats,
    realized_duration,
)
from .types import Schedule, ScheduleStats, ScheduleWarning


def build_schedule_from_entries(
    event: Event,
    entries: list[ScheduleEntry],
    warnings: list[ScheduleWarning] | None = None,
    status: str = "solved",
    include_time_boxed_stats: bool = True,
) -> Schedule:
    """
    Build a Schedule for the given entries.

    This does NOT run the scheduler - it takes the entries as-is.

    Args:
        event: Event the entries belong to
        entries: Scheduled matches, in sequence order per area
        warnings: Warnings to keep; rest violations are recomputed when omitted
        status: Status to report ("solved" or "infeasible")
        include_time_boxed_stats: Also compute fairness and completeness

    Returns:
        Schedule with statistics derived from the entries
    """
    if warnings is None:
        warnings = validate_min_rest_between_fights(
            entries, event.athletes, event.min_rest_seconds
        )

    stats = ScheduleStats(
        total_matches=len(entries),
        total_duration=realized_duration(entries),
        area_stats=[
            compute_area_stats(area, entries, event.available_seconds)
            for area in event.areas
        ] if status == "solved" else [],
        athlete_stats=compute_athlete_stats(entries, event),
        time_boxed_stats=(
            compute_time_boxed_stats(entries, event)
            if include_time_boxed_stats and status == "solved"
            else None
        ),
    )

    return Schedule(
        event_id=event.id,
        status=status,
        entries=list(entries),
        stats=stats,
        warnings=list(warnings),
    )
