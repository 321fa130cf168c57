from dataclasses import dataclass, field
from enum import Enum

from shared.time_utils import parse_time


class SchedulingStrategy(Enum):
    """How matches are chosen and placed on an area's timeline."""

    # Greedy fairness-driven selection bounded by the event window
    TIME_BOXED = "time_boxed"
    # Complete Circle Method round-robin, rounds alternated between groups
    ROUND_ROBIN = "round_robin"


class WarningType(Enum):
    TIME_OVERFLOW = "TIME_OVERFLOW"
    REST_VIOLATION = "REST_VIOLATION"
    INFO = "INFO"


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Athlete:
    id: str
    name: str
    group_id: str


@dataclass(frozen=True)
class Group:
    id: str
    name: str
    area_id: str
    athletes: list[Athlete] = field(default_factory=list)

    @property
    def is_schedulable(self) -> bool:
        """A group needs at least two athletes to produce a match."""
        return len(self.athletes) >= 2


@dataclass(frozen=True)
class Area:
    id: str
    name: str
    groups: list[Group] = field(default_factory=list)


@dataclass(frozen=True)
class Event:
    id: str
    name: str
    date: str  # ISO 8601 (YYYY-MM-DD)
    match_duration_seconds: int
    rotation_seconds: int
    window_start: str  # "HH:MM"
    window_end: str  # "HH:MM"
    areas: list[Area] = field(default_factory=list)
    min_rest_seconds: int = 0

    @property
    def window_start_seconds(self) -> int:
        return parse_time(self.window_start)

    @property
    def window_end_seconds(self) -> int:
        return parse_time(self.window_end)

    @property
    def available_seconds(self) -> int:
        """Length of the scheduling window."""
        return self.window_end_seconds - self.window_start_seconds

    @property
    def groups(self) -> list[Group]:
        """All groups in area order, then group order."""
        return [group for area in self.areas for group in area.groups]

    @property
    def athletes(self) -> list[Athlete]:
        """All athletes in area, group and roster order."""
        return [athlete for group in self.groups for athlete in group.athletes]


@dataclass(frozen=True)
class Match:
    """A pairing produced by the Circle Method, not yet placed in time."""

    id: str
    group_id: str
    athlete1_id: str
    athlete2_id: str
    cycle: int  # 1-based repetition index of the round-robin


@dataclass(frozen=True)
class Round:
    """A set of matches in which every athlete fights at most once."""

    round_number: int
    group_id: str
    matches: list[Match]


@dataclass(frozen=True)
class ScheduleEntry:
    id: str
    area_id: str
    group_id: str
    match_id: str
    sequence_number: int  # 1-based, per area
    scheduled_time: str  # "HH:MM" for display
    start_time_seconds: int  # seconds since midnight
    end_time_seconds: int  # start + match duration
    athlete1_id: str
    athlete2_id: str
    athlete1_name: str
    athlete2_name: str
    round_number: int | None = None  # only set by the round-robin strategy

    def involves(self, athlete_id: str) -> bool:
        return athlete_id in (self.athlete1_id, self.athlete2_id)

    def pair_key(self) -> tuple[str, str]:
        """Order-independent identity of the pairing."""
        return tuple(sorted((self.athlete1_id, self.athlete2_id)))  # type: ignore[return-value]


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a scheduled match, keyed by its match id."""

    match_id: str
    athlete1_score: int
    athlete2_score: int
    winner_id: str | None  # None for a draw
    recorded_at: str  # ISO timestamp
