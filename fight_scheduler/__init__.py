from .models import (
    Area,
    Athlete,
    Event,
    Group,
    Match,
    MatchResult,
    Round,
    ScheduleEntry,
    SchedulingStrategy,
    Severity,
    WarningType,
)
from .types import Schedule, ScheduleStats, ScheduleWarning
from .functional_scheduler import generate_schedule
from .pairing import generate_rounds_for_group
from .round_robin import calculate_max_cycles, schedule_rounds_for_multi_group_area
from .time_boxed import schedule_time_boxed_area
from .constraint_validator import validate_min_rest_between_fights
from .event_json import export_event_json, import_event_export, load_event

__all__ = [
    "Area",
    "Athlete",
    "Event",
    "Group",
    "Match",
    "MatchResult",
    "Round",
    "Schedule",
    "ScheduleEntry",
    "ScheduleStats",
    "ScheduleWarning",
    "SchedulingStrategy",
    "Severity",
    "WarningType",
    "calculate_max_cycles",
    "export_event_json",
    "generate_rounds_for_group",
    "generate_schedule",
    "import_event_export",
    "load_event",
    "schedule_rounds_for_multi_group_area",
    "schedule_time_boxed_area",
    "validate_min_rest_between_fights",
]
