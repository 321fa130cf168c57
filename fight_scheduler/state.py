"""
Mutable per-run state for the time-boxed scheduler.

State is indexed by an athlete's position in its group roster, so selection
always walks athletes in roster order. It lives for one area pass and is
discarded when the area's entries are final.
"""

from dataclasses import dataclass, field

from .models import Group


@dataclass
class AthleteState:
    match_count: int = 0
    opponents: set[int] = field(default_factory=set)  # roster indices
    last_match_end: int = 0
    available_at: int = 0  # last_match_end + minimum rest

    def is_available(self, clock: int) -> bool:
        return self.available_at <= clock


@dataclass
class GroupState:
    group: Group
    athletes: list[AthleteState]
    total_matches: int = 0
    last_scheduled_time: int = 0

    @property
    def avg_matches_per_athlete(self) -> float:
        if not self.athletes:
            return 0.0
        return self.total_matches / len(self.athletes)

    def record_match(
        self, index1: int, index2: int, start: int, end: int, min_rest_seconds: int
    ) -> None:
        """Commit a match between two roster positions."""
        for own, other in ((index1, index2), (index2, index1)):
            state = self.athletes[own]
            state.match_count += 1
            state.opponents.add(other)
            state.last_match_end = end
            state.available_at = end + min_rest_seconds

        self.total_matches += 1
        self.last_scheduled_time = start


def build_group_states(groups: list[Group], start_seconds: int) -> list[GroupState]:
    """Fresh state for every group, everyone available at the window start."""
    return [
        GroupState(
            group=group,
            athletes=[
                AthleteState(last_match_end=start_seconds, available_at=start_seconds)
                for _ in group.athletes
            ],
            last_scheduled_time=start_seconds,
        )
        for group in groups
    ]
