"""
Pydantic DTOs for event files and schedule export documents.

All file I/O goes through these validated DTOs to avoid opaque dictionaries
and to reject malformed input before it reaches the scheduling engine.
"""

import re
from datetime import date, datetime
from typing import Any, Self

from pydantic import BaseModel, Field, field_validator, model_validator

from shared.time_utils import format_time, is_valid_time_format, parse_time

from .models import (
    Area,
    Athlete,
    Event,
    Group,
    MatchResult,
    ScheduleEntry,
    Severity,
    WarningType,
)
from .types import ScheduleWarning

EXPORT_VERSION = "1.0"


def create_safe_id(name: str) -> str:
    """Lowercase identifier derived from a display name ("Spring Cup" -> "spring_cup")."""
    safe = re.sub(r"[^a-z0-9]+", "_", name.strip().lower()).strip("_")
    return safe or "event"


class AthleteInput(BaseModel):
    id: str | None = Field(default=None, description="Unique athlete id (generated if omitted)")
    name: str = Field(min_length=1, description="Display name")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class GroupInput(BaseModel):
    id: str | None = Field(default=None, description="Unique group id (generated if omitted)")
    name: str = Field(min_length=1)
    athletes: list[AthleteInput] = Field(
        default_factory=list,
        description="Ordered roster; fewer than 2 athletes excludes the group",
    )

    @field_validator("athletes", mode="before")
    @classmethod
    def accept_plain_names(cls, v: Any) -> Any:
        """Allow rosters written as a list of names."""
        if isinstance(v, list):
            return [{"name": item} if isinstance(item, str) else item for item in v]
        return v


class AreaInput(BaseModel):
    id: str | None = Field(default=None, description="Unique area id (generated if omitted)")
    name: str = Field(min_length=1)
    groups: list[GroupInput] = Field(min_length=1)


class EventInput(BaseModel):
    """
    An event file as written by organisers.

    Ids are optional; missing ones are derived from the position of the area,
    group and athlete so the same file always produces the same ids.
    """

    id: str | None = Field(default=None, description="Event id (derived from the name if omitted)")
    name: str = Field(min_length=1)
    date: date
    match_duration_seconds: int = Field(gt=0, description="Length of one match")
    rotation_seconds: int = Field(ge=0, description="Changeover gap between matches")
    window_start: str = Field(description="Start of the window (HH:MM)")
    window_end: str = Field(description="End of the window (HH:MM)")
    min_rest_seconds: int = Field(default=0, ge=0, description="Minimum rest between an athlete's matches")
    areas: list[AreaInput] = Field(min_length=1)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, v: str | date) -> date:
        """Parse date from string if needed."""
        if isinstance(v, date):
            return v
        if isinstance(v, str):
            # Handle YYYY-MM-DD or DD.MM.YYYY format
            try:
                return datetime.strptime(v.strip(), "%Y-%m-%d").date()
            except ValueError:
                try:
                    return datetime.strptime(v.strip(), "%d.%m.%Y").date()
                except ValueError:
                    return datetime.fromisoformat(v).date()
        raise ValueError(f"Invalid date format: {v}")

    @field_validator("window_start", "window_end", mode="before")
    @classmethod
    def normalise_time(cls, v: Any) -> Any:
        """Validate HH:MM and zero-pad it ("9:00" -> "09:00")."""
        if not isinstance(v, str) or not is_valid_time_format(v):
            raise ValueError(f"Invalid time format: {v!r}. Expected HH:MM")
        return format_time(parse_time(v))

    @model_validator(mode="after")
    def assign_ids(self) -> Self:
        """Fill in missing ids and reject duplicates."""
        if not self.id:
            self.id = create_safe_id(self.name)

        seen: set[str] = set()

        def claim(kind: str, identifier: str) -> str:
            if identifier in seen:
                raise ValueError(f"Duplicate {kind} id: {identifier}")
            seen.add(identifier)
            return identifier

        for area_index, area in enumerate(self.areas, start=1):
            area.id = claim("area", area.id or f"area_{area_index}")
            for group_index, group in enumerate(area.groups, start=1):
                group.id = claim("group", group.id or f"{area.id}_group_{group_index}")
                for athlete_index, athlete in enumerate(group.athletes, start=1):
                    athlete.id = claim(
                        "athlete", athlete.id or f"{group.id}_athlete_{athlete_index}"
                    )
        return self

    def to_event(self) -> Event:
        """Convert to the immutable engine model."""
        areas: list[Area] = []
        for area in self.areas:
            groups = [
                Group(
                    id=group.id,
                    name=group.name,
                    area_id=area.id,
                    athletes=[
                        Athlete(id=athlete.id, name=athlete.name, group_id=group.id)
                        for athlete in group.athletes
                    ],
                )
                for group in area.groups
            ]
            areas.append(Area(id=area.id, name=area.name, groups=groups))

        return Event(
            id=self.id,
            name=self.name,
            date=self.date.isoformat(),
            match_duration_seconds=self.match_duration_seconds,
            rotation_seconds=self.rotation_seconds,
            window_start=self.window_start,
            window_end=self.window_end,
            min_rest_seconds=self.min_rest_seconds,
            areas=areas,
        )

    @classmethod
    def from_event(cls, event: Event) -> "EventInput":
        return cls(
            id=event.id,
            name=event.name,
            date=event.date,
            match_duration_seconds=event.match_duration_seconds,
            rotation_seconds=event.rotation_seconds,
            window_start=event.window_start,
            window_end=event.window_end,
            min_rest_seconds=event.min_rest_seconds,
            areas=[
                AreaInput(
                    id=area.id,
                    name=area.name,
                    groups=[
                        GroupInput(
                            id=group.id,
                            name=group.name,
                            athletes=[
                                AthleteInput(id=athlete.id, name=athlete.name)
                                for athlete in group.athletes
                            ],
                        )
                        for group in area.groups
                    ],
                )
                for area in event.areas
            ],
        )


class ScheduleEntryRow(BaseModel):
    """One scheduled match in an export document."""

    id: str
    area_id: str
    group_id: str
    match_id: str
    sequence_number: int = Field(ge=1)
    scheduled_time: str
    start_time_seconds: int = Field(ge=0)
    end_time_seconds: int = Field(ge=0)
    athlete1_id: str
    athlete2_id: str
    athlete1_name: str
    athlete2_name: str
    round_number: int | None = None

    @model_validator(mode="after")
    def validate_time_range(self) -> Self:
        if self.end_time_seconds <= self.start_time_seconds:
            raise ValueError(
                f"end_time_seconds ({self.end_time_seconds}) must be after "
                f"start_time_seconds ({self.start_time_seconds})"
            )
        return self

    @classmethod
    def from_entry(cls, entry: ScheduleEntry) -> "ScheduleEntryRow":
        return cls(**entry.__dict__)

    def to_entry(self) -> ScheduleEntry:
        return ScheduleEntry(**self.model_dump())


class WarningRow(BaseModel):
    type: WarningType
    severity: Severity
    message: str
    affected_items: list[str] = Field(default_factory=list)
    suggestion: str | None = None

    @classmethod
    def from_warning(cls, warning: ScheduleWarning) -> "WarningRow":
        return cls(
            type=warning.type,
            severity=warning.severity,
            message=warning.message,
            affected_items=list(warning.affected_items),
            suggestion=warning.suggestion,
        )

    def to_warning(self) -> ScheduleWarning:
        return ScheduleWarning(
            type=self.type,
            severity=self.severity,
            message=self.message,
            affected_items=list(self.affected_items),
            suggestion=self.suggestion,
        )


class MatchResultRow(BaseModel):
    """Score of one match, keyed by the match id of its schedule entry."""

    match_id: str
    athlete1_score: int = Field(ge=0)
    athlete2_score: int = Field(ge=0)
    winner_id: str | None = Field(default=None, description="None for a draw")
    recorded_at: str

    @classmethod
    def from_result(cls, result: MatchResult) -> "MatchResultRow":
        return cls(**result.__dict__)

    def to_result(self) -> MatchResult:
        return MatchResult(**self.model_dump())


class ScheduleDocument(BaseModel):
    event_id: str
    status: str = "solved"
    strategy: str = "time_boxed"
    entries: list[ScheduleEntryRow] = Field(default_factory=list)
    warnings: list[WarningRow] = Field(default_factory=list)
    stats: dict[str, Any] = Field(default_factory=dict)


class EventExport(BaseModel):
    """Complete export package: event, schedule and recorded results."""

    version: str
    exported_at: str
    event: EventInput
    schedule: ScheduleDocument
    results: list[MatchResultRow] = Field(default_factory=list)

    @field_validator("version")
    @classmethod
    def check_version(cls, v: str) -> str:
        if v != EXPORT_VERSION:
            raise ValueError(f"Unsupported version: {v}")
        return v
