"""
Tests for event loading and JSON export/import
"""

import json

import pytest

from fight_scheduler.event_json import (
    build_event_export,
    export_event_json,
    import_event_export,
    load_event,
    parse_event_export,
    save_event,
)
from fight_scheduler.functional_scheduler import generate_schedule
from fight_scheduler.models import MatchResult, SchedulingStrategy, WarningType
from fight_scheduler.results import record_result

EXPORTED_AT = "2026-04-18T08:00:00+00:00"


def test_load_event_from_organiser_file(event_file):
    event = load_event(event_file)

    assert event.name == "Spring Cup"
    assert event.window_start == "09:00"
    assert [a.name for a in event.areas] == ["Mat 1", "Mat 2"]
    assert len(event.groups) == 3
    assert len(event.athletes) == 8


def test_save_event_round_trips(tmp_path, four_athlete_event):
    path = tmp_path / "saved.json"

    save_event(four_athlete_event, path)

    assert load_event(path) == four_athlete_event


class TestExport:
    def test_document_layout(self, four_athlete_event):
        schedule = generate_schedule(four_athlete_event)

        document = build_event_export(
            four_athlete_event, schedule, exported_at=EXPORTED_AT
        ).model_dump(mode="json")

        assert document["version"] == "1.0"
        assert document["exported_at"] == EXPORTED_AT
        assert document["event"]["id"] == "spring_cup"
        assert document["schedule"]["strategy"] == "time_boxed"
        assert len(document["schedule"]["entries"]) == schedule.stats.total_matches
        assert document["schedule"]["stats"]["total_matches"] == schedule.stats.total_matches
        assert document["results"] == []

    def test_export_and_import(self, tmp_path, make_event):
        event = make_event(window_end="10:00", min_rest=300)
        schedule = generate_schedule(event, strategy=SchedulingStrategy.ROUND_ROBIN, cycles=1)
        result = record_result(schedule, schedule.entries[0].match_id, 3, 1, recorded_at=EXPORTED_AT)
        path = tmp_path / "export.json"

        export_event_json(
            event,
            schedule,
            path,
            results={result.match_id: result},
            strategy=SchedulingStrategy.ROUND_ROBIN,
        )
        exported = import_event_export(path)

        assert exported.event == event
        assert exported.strategy is SchedulingStrategy.ROUND_ROBIN
        assert exported.schedule.entries == schedule.entries
        assert exported.schedule.warnings == schedule.warnings
        assert exported.schedule.stats.time_boxed_stats is None
        assert exported.results == {result.match_id: result}

    def test_time_boxed_stats_are_recomputed(self, tmp_path, four_athlete_event):
        schedule = generate_schedule(four_athlete_event)
        path = tmp_path / "export.json"
        export_event_json(four_athlete_event, schedule, path)

        exported = import_event_export(path)

        assert exported.schedule.stats == schedule.stats

    def test_infeasible_schedule_survives_export(self, tmp_path, make_event):
        event = make_event(window_end="09:01")
        schedule = generate_schedule(event)
        path = tmp_path / "export.json"
        export_event_json(event, schedule, path)

        exported = import_event_export(path)

        assert exported.schedule.status == "infeasible"
        assert exported.schedule.entries == []
        assert exported.schedule.warnings[0].type is WarningType.TIME_OVERFLOW


class TestParseEventExport:
    def test_invalid_json(self):
        with pytest.raises(ValueError, match="Failed to parse JSON"):
            parse_event_export("{not json")

    def test_missing_fields(self):
        with pytest.raises(ValueError):
            parse_event_export(json.dumps({"version": "1.0"}))

    def test_unsupported_version(self, four_athlete_event):
        document = build_event_export(
            four_athlete_event, generate_schedule(four_athlete_event), exported_at=EXPORTED_AT
        ).model_dump(mode="json")
        document["version"] = "0.9"

        with pytest.raises(ValueError, match="Unsupported version"):
            parse_event_export(json.dumps(document))

    def test_results_keep_draws(self, four_athlete_event):
        schedule = generate_schedule(four_athlete_event)
        draw = MatchResult(
            match_id=schedule.entries[0].match_id,
            athlete1_score=2,
            athlete2_score=2,
            winner_id=None,
            recorded_at=EXPORTED_AT,
        )
        document = build_event_export(
            four_athlete_event, schedule, results={draw.match_id: draw}, exported_at=EXPORTED_AT
        )

        exported = parse_event_export(document.model_dump_json())

        assert exported.results[draw.match_id].winner_id is None
        assert exported.exported_at == EXPORTED_AT
