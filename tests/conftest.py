"""Shared fixtures: small events built directly from engine models."""

import json
from pathlib import Path

import pytest

from fight_scheduler.models import Area, Athlete, Event, Group


def build_event(
    areas: dict[str, dict[str, list[str]]] | None = None,
    *,
    match_duration: int = 120,
    rotation: int = 30,
    window_start: str = "09:00",
    window_end: str = "12:00",
    min_rest: int = 0,
) -> Event:
    """
    Build an Event from ``{area name: {group name: [athlete names]}}``.

    Athlete ids are the athlete names, so tests can assert on pairings
    directly.
    """
    if areas is None:
        areas = {"Mat 1": {"Seniors": ["A", "B", "C", "D"]}}

    area_models: list[Area] = []
    for area_index, (area_name, groups) in enumerate(areas.items(), start=1):
        area_id = f"area_{area_index}"
        group_models = []
        for group_index, (group_name, athlete_names) in enumerate(groups.items(), start=1):
            group_id = f"{area_id}_group_{group_index}"
            group_models.append(
                Group(
                    id=group_id,
                    name=group_name,
                    area_id=area_id,
                    athletes=[Athlete(id=name, name=name, group_id=group_id) for name in athlete_names],
                )
            )
        area_models.append(Area(id=area_id, name=area_name, groups=group_models))

    return Event(
        id="spring_cup",
        name="Spring Cup",
        date="2026-04-18",
        match_duration_seconds=match_duration,
        rotation_seconds=rotation,
        window_start=window_start,
        window_end=window_end,
        areas=area_models,
        min_rest_seconds=min_rest,
    )


@pytest.fixture
def make_event():
    return build_event


@pytest.fixture
def four_athlete_event() -> Event:
    return build_event()


@pytest.fixture
def event_file(tmp_path: Path) -> Path:
    """An event JSON file as organisers write it, with ids left out."""
    path = tmp_path / "event.json"
    path.write_text(
        json.dumps(
            {
                "name": "Spring Cup",
                "date": "2026-04-18",
                "match_duration_seconds": 120,
                "rotation_seconds": 30,
                "window_start": "9:00",
                "window_end": "10:00",
                "min_rest_seconds": 0,
                "areas": [
                    {
                        "name": "Mat 1",
                        "groups": [
                            {"name": "Seniors", "athletes": ["Alice", "Bob", "Charlie", "David"]},
                            {"name": "Juniors", "athletes": ["Eve", "Frank", "Grace"]},
                        ],
                    },
                    {
                        "name": "Mat 2",
                        "groups": [{"name": "Masters", "athletes": ["Henry"]}],
                    },
                ],
            }
        ),
        encoding="utf-8",
    )
    return path
