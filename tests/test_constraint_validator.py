"""
Tests for feasibility checks, group skipping and rest validation
"""

import pytest

from fight_scheduler.constraint_validator import (
    ConstraintViolation,
    check_time_feasibility,
    split_schedulable_groups,
    validate_and_report,
    validate_min_rest_between_fights,
    validate_schedule_entries,
    validate_window,
)
from fight_scheduler.models import Athlete, ScheduleEntry, Severity, WarningType
from fight_scheduler.round_robin import schedule_rounds_for_multi_group_area
from shared.time_utils import format_time


def make_entry(
    entry_id: str,
    start: int,
    athlete1: str = "A",
    athlete2: str = "B",
    duration: int = 120,
    sequence_number: int = 1,
    area_id: str = "area_1",
) -> ScheduleEntry:
    return ScheduleEntry(
        id=entry_id,
        area_id=area_id,
        group_id="area_1_group_1",
        match_id=f"match_{entry_id}",
        sequence_number=sequence_number,
        scheduled_time=format_time(start),
        start_time_seconds=start,
        end_time_seconds=start + duration,
        athlete1_id=athlete1,
        athlete2_id=athlete2,
        athlete1_name=athlete1,
        athlete2_name=athlete2,
    )


def _athlete(name: str) -> Athlete:
    return Athlete(id=name, name=name, group_id="area_1_group_1")


class TestCheckTimeFeasibility:
    def test_feasible_window(self, four_athlete_event):
        assert check_time_feasibility(four_athlete_event) == []

    def test_match_longer_than_window(self, make_event):
        event = make_event(window_end="09:01")

        warnings = check_time_feasibility(event)

        assert len(warnings) == 1
        assert warnings[0].type is WarningType.TIME_OVERFLOW
        assert warnings[0].severity is Severity.ERROR
        assert warnings[0].is_fatal

    def test_match_exactly_filling_window_is_feasible(self, make_event):
        event = make_event(window_end="09:02")

        assert check_time_feasibility(event) == []


class TestSplitSchedulableGroups:
    def test_small_groups_are_skipped_with_info(self, make_event):
        event = make_event({"Mat 1": {"Full": ["A", "B"], "Solo": ["C"], "Empty": []}})

        groups, warnings = split_schedulable_groups(event.areas[0])

        assert [g.name for g in groups] == ["Full"]
        assert len(warnings) == 2
        assert all(w.type is WarningType.INFO and w.severity is Severity.INFO for w in warnings)
        assert warnings[0].affected_items == [event.areas[0].groups[1].id]

    def test_area_without_schedulable_group(self, make_event):
        event = make_event({"Mat 1": {"Solo": ["C"]}})

        groups, warnings = split_schedulable_groups(event.areas[0])

        assert groups == []
        assert warnings[-1].severity is Severity.WARNING
        assert warnings[-1].affected_items == [event.areas[0].id]


class TestValidateMinRestBetweenFights:
    def test_back_to_back_matches_violate_rest(self):
        """Two matches 30s apart with a 300s minimum give one violation."""
        entries = [
            make_entry("e1", 32400, "A", "B"),
            make_entry("e2", 32550, "A", "C", sequence_number=2),
        ]

        warnings = validate_min_rest_between_fights(
            entries, [_athlete("A"), _athlete("B"), _athlete("C")], 300
        )

        assert len(warnings) == 1
        assert warnings[0].type is WarningType.REST_VIOLATION
        assert warnings[0].severity is Severity.WARNING
        assert warnings[0].affected_items == ["A", "e1", "e2"]

    def test_enough_rest(self):
        entries = [make_entry("e1", 32400), make_entry("e2", 32820, sequence_number=2)]

        assert validate_min_rest_between_fights(entries, [_athlete("A"), _athlete("B")], 300) == []

    def test_zero_minimum_never_warns(self):
        entries = [make_entry("e1", 32400), make_entry("e2", 32520, sequence_number=2)]

        assert validate_min_rest_between_fights(entries, [_athlete("A"), _athlete("B")], 0) == []

    def test_round_robin_entries_are_checked(self, make_event):
        event = make_event({"Mat 1": {"Trio": ["A", "B", "C"]}}, min_rest=300)
        area = event.areas[0]
        entries = schedule_rounds_for_multi_group_area(
            area, area.groups, 120, 30, event.window_start_seconds
        )

        warnings = validate_min_rest_between_fights(entries, event.athletes, 300)

        # A fights rounds 1 and 2 back to back
        a_warnings = [w for w in warnings if w.affected_items[0] == "A"]
        assert len(a_warnings) == 1
        assert a_warnings[0].affected_items[1:] == [entries[0].id, entries[1].id]
        assert len(warnings) == 3


class TestValidateScheduleEntries:
    def test_valid_entries(self, four_athlete_event):
        entries = [make_entry("e1", 32400), make_entry("e2", 32550, "C", "D", sequence_number=2)]

        validate_schedule_entries(entries, four_athlete_event)

    def test_wrong_duration(self, four_athlete_event):
        with pytest.raises(ConstraintViolation, match="lasts 60s"):
            validate_schedule_entries([make_entry("e1", 32400, duration=60)], four_athlete_event)

    def test_sequence_going_backwards(self, four_athlete_event):
        entries = [
            make_entry("e1", 32400, sequence_number=2),
            make_entry("e2", 32550, sequence_number=1),
        ]

        with pytest.raises(ConstraintViolation, match="not increasing"):
            validate_schedule_entries(entries, four_athlete_event)

    def test_start_times_going_backwards(self, four_athlete_event):
        entries = [make_entry("e1", 32550), make_entry("e2", 32400, sequence_number=2)]

        with pytest.raises(ConstraintViolation, match="go backwards"):
            validate_schedule_entries(entries, four_athlete_event)

    def test_window_overrun(self, make_event):
        event = make_event(window_end="09:05")

        with pytest.raises(ConstraintViolation, match="ends after 09:05"):
            validate_window([make_entry("e1", 32400 + 240)], event)

    def test_validate_and_report(self, make_event):
        event = make_event(window_end="09:05")
        late = [make_entry("e1", 32400 + 240)]

        assert validate_and_report(late, event, check_window=False) == (True, [])
        is_valid, errors = validate_and_report(late, event)
        assert not is_valid
        assert len(errors) == 1
