"""
Type definitions for the fight scheduler results.

This module contains the output records shared by the scheduling strategies,
the statistics engine and the exporters.
"""

from dataclasses import dataclass, field

from .models import ScheduleEntry, Severity, WarningType


@dataclass(frozen=True)
class ScheduleWarning:
    """A problem or advisory attached to a schedule. Never dropped."""

    type: WarningType
    severity: Severity
    message: str
    affected_items: list[str]  # ids of areas, groups, athletes or entries
    suggestion: str | None = None

    @property
    def is_fatal(self) -> bool:
        return self.severity is Severity.ERROR


@dataclass(frozen=True)
class AreaStats:
    area_id: str
    area_name: str
    match_count: int
    duration: int  # seconds from first start to last end
    margin_or_overflow: int  # available - duration, negative means overflow


@dataclass(frozen=True)
class AthleteStats:
    athlete_id: str
    athlete_name: str
    group_id: str
    group_name: str
    match_count: int
    min_rest_seconds: int
    max_rest_seconds: int
    avg_rest_seconds: float
    total_rest_seconds: int
    consecutive_matches_count: int  # rests shorter than the event minimum


@dataclass(frozen=True)
class GroupTimeBoxedStats:
    group_id: str
    group_name: str
    athlete_count: int
    total_matches: int
    theoretical_max: int  # C(n, 2)
    completeness_percentage: float
    min_matches_per_athlete: int
    max_matches_per_athlete: int
    avg_matches_per_athlete: float
    match_count_gap: int  # max - min


@dataclass(frozen=True)
class TimeBoxedStats:
    min_matches_per_athlete: int
    max_matches_per_athlete: int
    avg_matches_per_athlete: float
    match_count_gap: int
    group_stats: list[GroupTimeBoxedStats]
    total_matches_scheduled: int
    total_theoretical_matches: int
    overall_completeness_percentage: float
    rematches_count: int
    time_used_seconds: int
    time_available_seconds: int
    time_utilization_percentage: float


@dataclass(frozen=True)
class ScheduleStats:
    total_matches: int
    total_duration: int
    area_stats: list[AreaStats] = field(default_factory=list)
    athlete_stats: list[AthleteStats] = field(default_factory=list)
    time_boxed_stats: TimeBoxedStats | None = None


@dataclass(frozen=True)
class Schedule:
    """Complete scheduling result for one event."""

    event_id: str
    status: str  # "solved" or "infeasible"
    entries: list[ScheduleEntry]
    stats: ScheduleStats
    warnings: list[ScheduleWarning]

    @property
    def has_fatal_warning(self) -> bool:
        return any(warning.is_fatal for warning in self.warnings)

    def entries_for_area(self, area_id: str) -> list[ScheduleEntry]:
        return [entry for entry in self.entries if entry.area_id == area_id]
