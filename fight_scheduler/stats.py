"""
Statistics for produced schedules.

Rest metrics per athlete, duration and margin per area, and the fairness and
completeness figures of the time-boxed strategy, plus the advisory warnings
derived from them.
"""

from collections import Counter

from shared.time_utils import combinations

from .constraint_validator import matches_by_athlete, rest_between
from .models import Area, Event, Group, ScheduleEntry, Severity, WarningType
from .types import (
    AreaStats,
    AthleteStats,
    GroupTimeBoxedStats,
    ScheduleWarning,
    TimeBoxedStats,
)

# Advisory thresholds
MAX_FAIR_MATCH_COUNT_GAP = 2
MIN_COMPLETENESS_PERCENTAGE = 50.0


def realized_duration(entries: list[ScheduleEntry]) -> int:
    """Seconds from the earliest start to the latest end (0 without entries)."""
    if not entries:
        return 0
    return max(entry.end_time_seconds for entry in entries) - min(
        entry.start_time_seconds for entry in entries
    )


def compute_athlete_stats(
    entries: list[ScheduleEntry],
    event: Event,
) -> list[AthleteStats]:
    """Rest statistics for every athlete with at least one match."""
    by_athlete = matches_by_athlete(entries)
    stats: list[AthleteStats] = []

    for group in event.groups:
        for athlete in group.athletes:
            athlete_entries = by_athlete.get(athlete.id, [])
            if not athlete_entries:
                continue

            rests = [
                rest_between(previous, following)
                for previous, following in zip(athlete_entries, athlete_entries[1:])
            ]
            stats.append(
                AthleteStats(
                    athlete_id=athlete.id,
                    athlete_name=athlete.name,
                    group_id=group.id,
                    group_name=group.name,
                    match_count=len(athlete_entries),
                    min_rest_seconds=min(rests, default=0),
                    max_rest_seconds=max(rests, default=0),
                    avg_rest_seconds=sum(rests) / len(rests) if rests else 0.0,
                    total_rest_seconds=sum(rests),
                    consecutive_matches_count=sum(
                        1 for rest in rests if rest < event.min_rest_seconds
                    ),
                )
            )

    return stats


def compute_area_stats(area: Area, entries: list[ScheduleEntry], available_seconds: int) -> AreaStats:
    """Match count, realized duration and margin for one area."""
    area_entries = [entry for entry in entries if entry.area_id == area.id]
    duration = realized_duration(area_entries)
    return AreaStats(
        area_id=area.id,
        area_name=area.name,
        match_count=len(area_entries),
        duration=duration,
        margin_or_overflow=available_seconds - duration,
    )


def count_rematches(entries: list[ScheduleEntry]) -> int:
    """Matches beyond the first between the same two athletes."""
    pair_counts = Counter(entry.pair_key() for entry in entries)
    return sum(count - 1 for count in pair_counts.values() if count > 1)


def _athlete_match_counts(group: Group, group_entries: list[ScheduleEntry]) -> list[int]:
    """Matches per athlete in roster order, zero for athletes without a match."""
    match_counts = {athlete.id: 0 for athlete in group.athletes}
    for entry in group_entries:
        for athlete_id in (entry.athlete1_id, entry.athlete2_id):
            if athlete_id in match_counts:
                match_counts[athlete_id] += 1
    return list(match_counts.values())


def _group_time_boxed_stats(group: Group, entries: list[ScheduleEntry]) -> GroupTimeBoxedStats:
    group_entries = [entry for entry in entries if entry.group_id == group.id]
    counts = _athlete_match_counts(group, group_entries)

    min_matches = min(counts, default=0)
    max_matches = max(counts, default=0)
    theoretical_max = combinations(len(group.athletes))

    return GroupTimeBoxedStats(
        group_id=group.id,
        group_name=group.name,
        athlete_count=len(group.athletes),
        total_matches=len(group_entries),
        theoretical_max=theoretical_max,
        completeness_percentage=(
            len(group_entries) / theoretical_max * 100 if theoretical_max > 0 else 100.0
        ),
        min_matches_per_athlete=min_matches,
        max_matches_per_athlete=max_matches,
        avg_matches_per_athlete=sum(counts) / len(counts) if counts else 0.0,
        match_count_gap=max_matches - min_matches,
    )


def compute_time_boxed_stats(entries: list[ScheduleEntry], event: Event) -> TimeBoxedStats:
    """Fairness, completeness and time use across every group of the event."""
    group_stats = [_group_time_boxed_stats(group, entries) for group in event.groups]

    all_counts: list[int] = []
    for group in event.groups:
        group_entries = [entry for entry in entries if entry.group_id == group.id]
        all_counts.extend(_athlete_match_counts(group, group_entries))

    global_min = min(all_counts, default=0)
    global_max = max(all_counts, default=0)

    total_theoretical = sum(stats.theoretical_max for stats in group_stats)
    time_available = event.available_seconds
    time_used = realized_duration(entries)

    return TimeBoxedStats(
        min_matches_per_athlete=global_min,
        max_matches_per_athlete=global_max,
        avg_matches_per_athlete=sum(all_counts) / len(all_counts) if all_counts else 0.0,
        match_count_gap=global_max - global_min,
        group_stats=group_stats,
        total_matches_scheduled=len(entries),
        total_theoretical_matches=total_theoretical,
        overall_completeness_percentage=(
            len(entries) / total_theoretical * 100 if total_theoretical > 0 else 100.0
        ),
        rematches_count=count_rematches(entries),
        time_used_seconds=time_used,
        time_available_seconds=time_available,
        time_utilization_percentage=(
            time_used / time_available * 100 if time_available > 0 else 0.0
        ),
    )


def fairness_warnings(stats: TimeBoxedStats, event: Event) -> list[ScheduleWarning]:
    """Advisory warnings for uneven match counts and low completeness."""
    warnings: list[ScheduleWarning] = []

    if stats.match_count_gap > MAX_FAIR_MATCH_COUNT_GAP:
        warnings.append(
            ScheduleWarning(
                type=WarningType.INFO,
                severity=Severity.WARNING,
                message=(
                    f"Uneven schedule: {stats.match_count_gap} matches between athletes "
                    f"(min: {stats.min_matches_per_athlete}, max: {stats.max_matches_per_athlete})."
                ),
                affected_items=[event.id],
                suggestion="Extend the event window or reduce group sizes to improve fairness.",
            )
        )

    if stats.overall_completeness_percentage < MIN_COMPLETENESS_PERCENTAGE:
        warnings.append(
            ScheduleWarning(
                type=WarningType.INFO,
                severity=Severity.WARNING,
                message=(
                    f"Low completeness: only {stats.overall_completeness_percentage:.1f}% "
                    f"of the full round-robin could be scheduled."
                ),
                affected_items=[event.id],
                suggestion="Extend the event window to allow more matches.",
            )
        )

    return warnings
