"""
Feasibility and rest validation for fight schedules.

Checks that decide whether an event can be scheduled at all, which groups
take part, and whether the produced entries respect the rest requirement.
The checks report problems as warnings attached to the schedule; only the
strict invariant check raises.
"""

from collections import defaultdict

from shared.time_utils import format_duration

from .models import Area, Athlete, Event, Group, ScheduleEntry, Severity, WarningType
from .types import ScheduleWarning


class ConstraintViolation(Exception):
    """Raised when a schedule breaks one of its structural invariants."""

    pass


def check_time_feasibility(event: Event) -> list[ScheduleWarning]:
    """A fatal warning when not even one match fits in the window."""
    if event.window_start_seconds + event.match_duration_seconds <= event.window_end_seconds:
        return []

    return [
        ScheduleWarning(
            type=WarningType.TIME_OVERFLOW,
            severity=Severity.ERROR,
            message=(
                f"Not enough time: a {format_duration(event.match_duration_seconds)} match "
                f"does not fit between {event.window_start} and {event.window_end}."
            ),
            affected_items=[event.id],
            suggestion="Extend the event window or shorten the match duration.",
        )
    ]


def split_schedulable_groups(area: Area) -> tuple[list[Group], list[ScheduleWarning]]:
    """Groups of an area that can produce matches, plus warnings for the rest.

    Groups with fewer than two athletes are skipped with an info warning. If
    nothing is left, the area gets a warning and contributes no matches.
    """
    warnings: list[ScheduleWarning] = []
    schedulable: list[Group] = []

    for group in area.groups:
        if group.is_schedulable:
            schedulable.append(group)
            continue
        warnings.append(
            ScheduleWarning(
                type=WarningType.INFO,
                severity=Severity.INFO,
                message=(
                    f"{area.name} / {group.name}: {len(group.athletes)} athlete(s), "
                    f"at least 2 are needed. Group skipped."
                ),
                affected_items=[group.id],
                suggestion="Add athletes to the group or merge it with another group.",
            )
        )

    if not schedulable:
        warnings.append(
            ScheduleWarning(
                type=WarningType.INFO,
                severity=Severity.WARNING,
                message=f"{area.name}: no group with at least 2 athletes, no matches scheduled.",
                affected_items=[area.id],
            )
        )

    return schedulable, warnings


def matches_by_athlete(entries: list[ScheduleEntry]) -> dict[str, list[ScheduleEntry]]:
    """Each athlete's entries sorted by start time."""
    by_athlete: dict[str, list[ScheduleEntry]] = defaultdict(list)
    for entry in entries:
        by_athlete[entry.athlete1_id].append(entry)
        by_athlete[entry.athlete2_id].append(entry)

    for athlete_entries in by_athlete.values():
        athlete_entries.sort(key=lambda entry: entry.start_time_seconds)
    return by_athlete


def rest_between(previous: ScheduleEntry, following: ScheduleEntry) -> int:
    """Rest is measured from the end of one match to the start of the next."""
    return following.start_time_seconds - previous.end_time_seconds


def validate_min_rest_between_fights(
    entries: list[ScheduleEntry],
    athletes: list[Athlete],
    min_rest_seconds: int,
) -> list[ScheduleWarning]:
    """One REST_VIOLATION per pair of consecutive matches that are too close."""
    warnings: list[ScheduleWarning] = []
    if min_rest_seconds <= 0:
        return warnings

    by_athlete = matches_by_athlete(entries)

    for athlete in athletes:
        athlete_entries = by_athlete.get(athlete.id, [])
        for previous, following in zip(athlete_entries, athlete_entries[1:]):
            rest = rest_between(previous, following)
            if rest >= min_rest_seconds:
                continue
            warnings.append(
                ScheduleWarning(
                    type=WarningType.REST_VIOLATION,
                    severity=Severity.WARNING,
                    message=(
                        f"{athlete.name}: {format_duration(max(rest, 0))} rest between "
                        f"{previous.scheduled_time} and {following.scheduled_time} "
                        f"(minimum {format_duration(min_rest_seconds)})"
                    ),
                    affected_items=[athlete.id, previous.id, following.id],
                    suggestion="Increase the rotation time or reorganise the rounds.",
                )
            )

    return warnings


def validate_schedule_entries(entries: list[ScheduleEntry], event: Event) -> None:
    """
    Validate the structural invariants of a produced schedule.

    Raises:
        ConstraintViolation: If an entry has the wrong length, or per-area
            sequence numbers or start times go backwards
    """
    by_area: dict[str, list[ScheduleEntry]] = defaultdict(list)
    for entry in entries:
        by_area[entry.area_id].append(entry)

        if entry.end_time_seconds - entry.start_time_seconds != event.match_duration_seconds:
            raise ConstraintViolation(
                f"Entry {entry.id} lasts {entry.end_time_seconds - entry.start_time_seconds}s, "
                f"expected {event.match_duration_seconds}s"
            )

    for area_id, area_entries in by_area.items():
        for previous, following in zip(area_entries, area_entries[1:]):
            if following.sequence_number <= previous.sequence_number:
                raise ConstraintViolation(
                    f"Sequence numbers of area {area_id} are not increasing: "
                    f"{previous.sequence_number} then {following.sequence_number}"
                )
            if following.start_time_seconds < previous.start_time_seconds:
                raise ConstraintViolation(
                    f"Start times of area {area_id} go backwards: "
                    f"{previous.scheduled_time} then {following.scheduled_time}"
                )


def validate_window(entries: list[ScheduleEntry], event: Event) -> None:
    """
    Check that no entry runs past the end of the event window.

    Raises:
        ConstraintViolation: On the first entry that ends too late
    """
    for entry in entries:
        if entry.end_time_seconds > event.window_end_seconds:
            raise ConstraintViolation(
                f"Entry {entry.id} ({entry.athlete1_name} vs {entry.athlete2_name}) ends "
                f"after {event.window_end}"
            )


def validate_and_report(
    entries: list[ScheduleEntry],
    event: Event,
    check_window: bool = True,
) -> tuple[bool, list[str]]:
    """
    Validate entries and return a report instead of raising.

    Returns:
        Tuple of (is_valid, list of error messages)
    """
    try:
        validate_schedule_entries(entries, event)
        if check_window:
            validate_window(entries, event)
        return (True, [])
    except ConstraintViolation as e:
        return (False, [str(e)])
