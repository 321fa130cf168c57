"""
Match results and group standings.

Results are recorded per match id after the schedule has been produced and
never feed back into scheduling.
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from .models import Event, MatchResult, ScheduleEntry
from .types import Schedule


@dataclass
class AthleteResult:
    athlete_id: str
    athlete_name: str
    group_id: str
    group_name: str
    area_id: str
    area_name: str
    matches_played: int = 0
    matches_scheduled: int = 0
    wins: int = 0
    losses: int = 0
    draws: int = 0
    total_points_scored: int = 0
    total_points_against: int = 0
    win_percentage: float = 0.0
    points_differential: int = 0
    rank: int | None = None  # within the group


@dataclass(frozen=True)
class GroupStandings:
    group_id: str
    group_name: str
    area_id: str
    area_name: str
    athletes: list[AthleteResult]  # sorted by rank
    completion_percentage: float  # matches with a result / matches scheduled


def find_entry(schedule: Schedule, match_id: str) -> ScheduleEntry:
    for entry in schedule.entries:
        if entry.match_id == match_id:
            return entry
    raise KeyError(f"No scheduled match with id {match_id}")


def record_result(
    schedule: Schedule,
    match_id: str,
    athlete1_score: int,
    athlete2_score: int,
    winner_id: str | None = None,
    recorded_at: str | None = None,
) -> MatchResult:
    """
    Create a result for a scheduled match.

    The winner defaults to the athlete with the higher score; equal scores
    make a draw unless a winner is given explicitly.

    Raises:
        KeyError: If the match is not in the schedule
        ValueError: If a score is negative or the winner did not fight
    """
    entry = find_entry(schedule, match_id)

    if athlete1_score < 0 or athlete2_score < 0:
        raise ValueError("Scores cannot be negative")

    if winner_id is None and athlete1_score != athlete2_score:
        winner_id = entry.athlete1_id if athlete1_score > athlete2_score else entry.athlete2_id

    if winner_id is not None and not entry.involves(winner_id):
        raise ValueError(
            f"Winner {winner_id} is neither {entry.athlete1_id} nor {entry.athlete2_id}"
        )

    return MatchResult(
        match_id=match_id,
        athlete1_score=athlete1_score,
        athlete2_score=athlete2_score,
        winner_id=winner_id,
        recorded_at=recorded_at or datetime.now(timezone.utc).isoformat(),
    )


def calculate_athlete_results(
    event: Event,
    schedule: Schedule,
    results: dict[str, MatchResult],
) -> list[AthleteResult]:
    """Win/loss/draw record and points for every athlete of the event."""
    athlete_results: dict[str, AthleteResult] = {}
    for area in event.areas:
        for group in area.groups:
            for athlete in group.athletes:
                athlete_results[athlete.id] = AthleteResult(
                    athlete_id=athlete.id,
                    athlete_name=athlete.name,
                    group_id=group.id,
                    group_name=group.name,
                    area_id=area.id,
                    area_name=area.name,
                )

    for entry in schedule.entries:
        first = athlete_results.get(entry.athlete1_id)
        second = athlete_results.get(entry.athlete2_id)
        if first:
            first.matches_scheduled += 1
        if second:
            second.matches_scheduled += 1

        result = results.get(entry.match_id)
        if not result or not first or not second:
            continue

        for own, own_score, other_score in (
            (first, result.athlete1_score, result.athlete2_score),
            (second, result.athlete2_score, result.athlete1_score),
        ):
            own.matches_played += 1
            own.total_points_scored += own_score
            own.total_points_against += other_score
            if result.winner_id is None:
                own.draws += 1
            elif result.winner_id == own.athlete_id:
                own.wins += 1
            else:
                own.losses += 1

    for athlete in athlete_results.values():
        athlete.win_percentage = (
            athlete.wins / athlete.matches_played * 100 if athlete.matches_played > 0 else 0.0
        )
        athlete.points_differential = athlete.total_points_scored - athlete.total_points_against

    return list(athlete_results.values())


def calculate_group_standings(
    event: Event,
    schedule: Schedule,
    results: dict[str, MatchResult],
) -> list[GroupStandings]:
    """Ranked standings per group: wins, then win percentage, then points differential."""
    athlete_results = calculate_athlete_results(event, schedule, results)

    standings: list[GroupStandings] = []
    for group in event.groups:
        athletes = [result for result in athlete_results if result.group_id == group.id]
        if not athletes:
            continue

        # sorted() is stable: equal records keep roster order
        ranked = sorted(
            athletes,
            key=lambda a: (-a.wins, -a.win_percentage, -a.points_differential),
        )
        for rank, athlete in enumerate(ranked, start=1):
            athlete.rank = rank

        group_match_ids = {
            entry.match_id for entry in schedule.entries if entry.group_id == group.id
        }
        with_results = sum(1 for match_id in group_match_ids if match_id in results)

        standings.append(
            GroupStandings(
                group_id=group.id,
                group_name=group.name,
                area_id=ranked[0].area_id,
                area_name=ranked[0].area_name,
                athletes=ranked,
                completion_percentage=(
                    with_results / len(group_match_ids) * 100 if group_match_ids else 0.0
                ),
            )
        )

    return standings
