"""
Functional, stateless entry point of the fight scheduler.

``generate_schedule`` turns one Event into one Schedule. Areas are scheduled
one after the other and independently; all state lives inside the call and
identifiers come from an injected id source, so the same event always gives
the same schedule.
"""

import logging

from .constraint_validator import (
    check_time_feasibility,
    split_schedulable_groups,
    validate_min_rest_between_fights,
)
from .ids import IdSource, SequentialIdSource
from .models import Event, ScheduleEntry, SchedulingStrategy, Severity, WarningType
from .round_robin import calculate_max_cycles, schedule_rounds_for_multi_group_area
from .stats import (
    compute_area_stats,
    compute_athlete_stats,
    compute_time_boxed_stats,
    fairness_warnings,
    realized_duration,
)
from .time_boxed import schedule_time_boxed_area
from .types import Schedule, ScheduleStats, ScheduleWarning

logger = logging.getLogger(__name__)


def _infeasible_schedule(event: Event, warnings: list[ScheduleWarning]) -> Schedule:
    return Schedule(
        event_id=event.id,
        status="infeasible",
        entries=[],
        stats=ScheduleStats(total_matches=0, total_duration=0),
        warnings=warnings,
    )


def generate_schedule(
    event: Event,
    strategy: SchedulingStrategy = SchedulingStrategy.TIME_BOXED,
    cycles: int | None = None,
    id_source: IdSource | None = None,
) -> Schedule:
    """Schedule every area of an event.

    Args:
        event: Areas, groups, athletes and timing parameters
        strategy: TIME_BOXED (greedy within the window) or ROUND_ROBIN
            (complete Circle Method round-robin, may overflow the window)
        cycles: Round-robin repetitions for ROUND_ROBIN; by default as many
            as fit in the window, at least one
        id_source: Source of entry and match ids (fresh sequential source if
            omitted)

    Returns:
        The schedule. When not a single match fits in the window the status
        is "infeasible", there are no entries and the only warning is a fatal
        TIME_OVERFLOW.
    """
    warnings = check_time_feasibility(event)
    if warnings:
        logger.warning(f"{event.name}: {warnings[0].message}")
        return _infeasible_schedule(event, warnings)

    ids = id_source or SequentialIdSource()
    start_seconds = event.window_start_seconds
    end_seconds = event.window_end_seconds

    all_entries: list[ScheduleEntry] = []
    for area in event.areas:
        groups, area_warnings = split_schedulable_groups(area)
        warnings.extend(area_warnings)
        if not groups:
            continue

        if strategy is SchedulingStrategy.TIME_BOXED:
            area_entries = schedule_time_boxed_area(
                area,
                groups,
                event.match_duration_seconds,
                event.rotation_seconds,
                start_seconds,
                end_seconds,
                event.min_rest_seconds,
                ids,
            )
        else:
            area_cycles = cycles or calculate_max_cycles(
                groups,
                event.match_duration_seconds,
                event.rotation_seconds,
                event.available_seconds,
            )
            if area_cycles > 1:
                warnings.append(
                    ScheduleWarning(
                        type=WarningType.INFO,
                        severity=Severity.INFO,
                        message=(
                            f"{area.name}: {area_cycles} cycles generated, "
                            f"every pair meets {area_cycles} times."
                        ),
                        affected_items=[area.id],
                    )
                )
            area_entries = schedule_rounds_for_multi_group_area(
                area,
                groups,
                event.match_duration_seconds,
                event.rotation_seconds,
                start_seconds,
                area_cycles,
                ids,
            )

        all_entries.extend(area_entries)

    athletes = event.athletes
    warnings.extend(
        validate_min_rest_between_fights(all_entries, athletes, event.min_rest_seconds)
    )

    time_boxed_stats = None
    if strategy is SchedulingStrategy.TIME_BOXED:
        time_boxed_stats = compute_time_boxed_stats(all_entries, event)
        warnings.extend(fairness_warnings(time_boxed_stats, event))

    stats = ScheduleStats(
        total_matches=len(all_entries),
        total_duration=realized_duration(all_entries),
        area_stats=[
            compute_area_stats(area, all_entries, event.available_seconds)
            for area in event.areas
        ],
        athlete_stats=compute_athlete_stats(all_entries, event),
        time_boxed_stats=time_boxed_stats,
    )

    logger.info(
        f"{event.name}: {len(all_entries)} matches in {len(event.areas)} area(s), "
        f"{len(warnings)} warning(s)"
    )

    return Schedule(
        event_id=event.id,
        status="solved",
        entries=all_entries,
        stats=stats,
        warnings=warnings,
    )
