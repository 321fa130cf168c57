"""
Event file loading and JSON export/import of complete schedules.

Event files describe areas, groups and athletes plus the timing parameters.
Export documents bundle the event, the produced schedule and any recorded
match results so the schedule can be reopened later for result entry and
reports.
"""

import json
import logging
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path

from .dtos import (
    EXPORT_VERSION,
    EventExport,
    EventInput,
    MatchResultRow,
    ScheduleDocument,
    ScheduleEntryRow,
    WarningRow,
)
from .models import Event, MatchResult, SchedulingStrategy
from .schedule_builder import build_schedule_from_entries
from .types import Schedule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportedEvent:
    """Contents of an export document, converted back to engine types."""

    event: Event
    schedule: Schedule
    strategy: SchedulingStrategy
    results: dict[str, MatchResult]  # keyed by match id
    exported_at: str


def load_event(path: Path) -> Event:
    """
    Load and validate an event file.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If the content does not describe a valid event
    """
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    event = EventInput.model_validate(raw).to_event()
    logger.info(
        f"Loaded event '{event.name}': {len(event.areas)} area(s), "
        f"{len(event.groups)} group(s), {len(event.athletes)} athlete(s)"
    )
    return event


def save_event(event: Event, path: Path) -> None:
    """Write an event file that ``load_event`` reads back unchanged."""
    document = EventInput.from_event(event).model_dump(mode="json")
    path.write_text(json.dumps(document, indent=2, ensure_ascii=False), encoding="utf-8")


def build_event_export(
    event: Event,
    schedule: Schedule,
    results: dict[str, MatchResult] | None = None,
    strategy: SchedulingStrategy = SchedulingStrategy.TIME_BOXED,
    exported_at: str | None = None,
) -> EventExport:
    """Bundle event, schedule and results into a versioned export document."""
    return EventExport(
        version=EXPORT_VERSION,
        exported_at=exported_at or datetime.now(timezone.utc).isoformat(),
        event=EventInput.from_event(event),
        schedule=ScheduleDocument(
            event_id=schedule.event_id,
            status=schedule.status,
            strategy=strategy.value,
            entries=[ScheduleEntryRow.from_entry(entry) for entry in schedule.entries],
            warnings=[WarningRow.from_warning(warning) for warning in schedule.warnings],
            stats=asdict(schedule.stats),
        ),
        results=[MatchResultRow.from_result(result) for result in (results or {}).values()],
    )


def export_event_json(
    event: Event,
    schedule: Schedule,
    output_path: Path,
    results: dict[str, MatchResult] | None = None,
    strategy: SchedulingStrategy = SchedulingStrategy.TIME_BOXED,
    exported_at: str | None = None,
) -> None:
    """Write the export document to a JSON file."""
    document = build_event_export(event, schedule, results, strategy, exported_at)
    output_path.write_text(
        json.dumps(document.model_dump(mode="json"), indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info(f"Exported {len(schedule.entries)} entries to {output_path}")


def parse_event_export(content: str) -> ExportedEvent:
    """
    Parse and validate an export document.

    Raises:
        ValueError: If the content is not JSON, lacks required fields or has
            an unsupported version (pydantic.ValidationError is a ValueError)
    """
    try:
        raw = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse JSON: {e}") from e

    document = EventExport.model_validate(raw)
    event = document.event.to_event()
    strategy = SchedulingStrategy(document.schedule.strategy)

    schedule = build_schedule_from_entries(
        event,
        [row.to_entry() for row in document.schedule.entries],
        warnings=[row.to_warning() for row in document.schedule.warnings],
        status=document.schedule.status,
        include_time_boxed_stats=strategy is SchedulingStrategy.TIME_BOXED,
    )
    results = {row.match_id: row.to_result() for row in document.results}

    return ExportedEvent(
        event=event,
        schedule=schedule,
        strategy=strategy,
        results=results,
        exported_at=document.exported_at,
    )


def import_event_export(path: Path) -> ExportedEvent:
    """Read an export document from disk."""
    return parse_event_export(path.read_text(encoding="utf-8"))
