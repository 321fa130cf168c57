"""
Tests for generate_schedule

Covers both strategies end to end, infeasible windows, skipped groups and
reproducibility.
"""

from fight_scheduler.functional_scheduler import generate_schedule
from fight_scheduler.models import SchedulingStrategy, Severity, WarningType


class TestTimeBoxed:
    def test_four_athletes_in_three_hours(self, four_athlete_event):
        schedule = generate_schedule(four_athlete_event)

        assert schedule.status == "solved"
        assert schedule.stats.total_matches >= 6
        assert schedule.stats.time_boxed_stats.match_count_gap == 0
        assert schedule.warnings == []
        assert all(
            e.end_time_seconds <= four_athlete_event.window_end_seconds for e in schedule.entries
        )

    def test_stats_are_attached(self, four_athlete_event):
        schedule = generate_schedule(four_athlete_event)

        stats = schedule.stats
        assert stats.total_matches == len(schedule.entries)
        assert len(stats.area_stats) == 1
        assert stats.area_stats[0].margin_or_overflow >= 0
        assert {s.athlete_id for s in stats.athlete_stats} == {"A", "B", "C", "D"}

    def test_areas_are_scheduled_independently(self, make_event):
        event = make_event(
            {"Mat 1": {"Seniors": ["A", "B", "C"]}, "Mat 2": {"Juniors": ["D", "E"]}},
            window_end="09:10",
        )

        schedule = generate_schedule(event)

        mat1 = schedule.entries_for_area("area_1")
        mat2 = schedule.entries_for_area("area_2")
        assert [e.sequence_number for e in mat1] == [1, 2, 3, 4]
        assert [e.sequence_number for e in mat2] == [1, 2, 3, 4]
        assert mat1[0].start_time_seconds == mat2[0].start_time_seconds

    def test_rest_gating_leaves_no_rest_violation(self, make_event):
        event = make_event({"Mat 1": {"Trio": ["A", "B", "C"]}}, min_rest=300)

        schedule = generate_schedule(event)

        assert schedule.entries
        assert not [w for w in schedule.warnings if w.type is WarningType.REST_VIOLATION]


class TestRoundRobin:
    def test_single_cycle_round_robin(self, four_athlete_event):
        schedule = generate_schedule(
            four_athlete_event, strategy=SchedulingStrategy.ROUND_ROBIN, cycles=1
        )

        assert schedule.stats.total_matches == 6
        assert [e.round_number for e in schedule.entries] == [1, 1, 2, 2, 3, 3]
        assert schedule.stats.time_boxed_stats is None
        assert schedule.warnings == []

    def test_default_cycles_fill_the_window(self, make_event):
        # 6 matches per cycle take 870s; a one hour window fits 4 cycles
        event = make_event(window_end="10:00")

        schedule = generate_schedule(event, strategy=SchedulingStrategy.ROUND_ROBIN)

        assert schedule.stats.total_matches == 24
        info = [w for w in schedule.warnings if w.type is WarningType.INFO]
        assert len(info) == 1
        assert "4 cycles" in info[0].message

    def test_overflow_is_reported_in_area_stats(self, make_event):
        event = make_event(window_end="09:05")

        schedule = generate_schedule(event, strategy=SchedulingStrategy.ROUND_ROBIN)

        assert schedule.status == "solved"
        assert schedule.stats.total_matches == 6
        assert schedule.stats.area_stats[0].margin_or_overflow < 0

    def test_back_to_back_matches_raise_rest_violations(self, make_event):
        event = make_event({"Mat 1": {"Trio": ["A", "B", "C"]}}, min_rest=300)

        schedule = generate_schedule(event, strategy=SchedulingStrategy.ROUND_ROBIN, cycles=1)

        violations = [w for w in schedule.warnings if w.type is WarningType.REST_VIOLATION]
        first, second = schedule.entries[0], schedule.entries[1]
        assert any(w.affected_items == ["A", first.id, second.id] for w in violations)


class TestEdgeCases:
    def test_window_shorter_than_one_match(self, make_event):
        event = make_event(window_end="09:01")

        schedule = generate_schedule(event)

        assert schedule.status == "infeasible"
        assert schedule.entries == []
        assert len(schedule.warnings) == 1
        assert schedule.warnings[0].type is WarningType.TIME_OVERFLOW
        assert schedule.has_fatal_warning

    def test_end_before_start_is_infeasible(self, make_event):
        event = make_event(window_start="12:00", window_end="09:00")

        schedule = generate_schedule(event, strategy=SchedulingStrategy.ROUND_ROBIN)

        assert schedule.status == "infeasible"
        assert schedule.entries == []

    def test_small_groups_are_skipped(self, make_event):
        event = make_event({"Mat 1": {"Pair": ["A", "B"], "Solo": ["C"]}, "Mat 2": {"Empty": []}})

        schedule = generate_schedule(event, strategy=SchedulingStrategy.ROUND_ROBIN, cycles=1)

        assert schedule.stats.total_matches == 1
        assert {e.group_id for e in schedule.entries} == {"area_1_group_1"}
        severities = [w.severity for w in schedule.warnings]
        assert severities == [Severity.INFO, Severity.INFO, Severity.WARNING]

    def test_no_athletes_at_all(self, make_event):
        event = make_event({"Mat 1": {"Empty": []}})

        schedule = generate_schedule(event)

        assert schedule.status == "solved"
        assert schedule.entries == []
        assert schedule.stats.total_duration == 0


def test_same_event_gives_identical_schedules(make_event):
    event = make_event(
        {"Mat 1": {"Seniors": ["A", "B", "C", "D", "E"], "Juniors": ["F", "G", "H"]}},
        min_rest=200,
    )

    for strategy in SchedulingStrategy:
        first = generate_schedule(event, strategy=strategy)
        second = generate_schedule(event, strategy=strategy)
        assert first == second
