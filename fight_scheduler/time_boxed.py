"""
Time-boxed greedy scheduling for one area.

The scheduler walks a virtual clock from the window start and, at every step,
picks the group that is furthest behind and the fairest available pair inside
it, until no further match fits before the window end. Rest requirements are
eligibility gates, so this strategy never produces rest violations.

Selection rules:
1. Group: lowest average matches per athlete among groups that have an
   eligible pair. Ties go to the group listed first.
2. Pair: new opponents before rematches, then the lowest fairness score
   10 * (countA + countB) + |countA - avg| + |countB - avg|.
   Ties go to the first pair in roster order (i ascending, then j).
"""

import logging
from dataclasses import dataclass

from shared.time_utils import format_time

from .ids import IdSource, SequentialIdSource
from .models import Area, Group, ScheduleEntry
from .state import GroupState, build_group_states

logger = logging.getLogger(__name__)

MATCH_COUNT_WEIGHT = 10


@dataclass(frozen=True)
class CandidatePair:
    index1: int
    index2: int
    fairness_score: float
    is_rematch: bool


def fairness_score(count1: int, count2: int, avg_match_count: float) -> float:
    """Lower is better: favour athletes with few matches, close to the group average."""
    match_count_score = (count1 + count2) * MATCH_COUNT_WEIGHT
    balance_penalty = abs(count1 - avg_match_count) + abs(count2 - avg_match_count)
    return match_count_score + balance_penalty


def find_best_pair(state: GroupState, clock: int) -> CandidatePair | None:
    """Best pair of available athletes in a group, or None if nobody can fight."""
    avg_match_count = state.avg_matches_per_athlete

    new_opponents: list[CandidatePair] = []
    rematches: list[CandidatePair] = []

    athletes = state.athletes
    for i in range(len(athletes)):
        for j in range(i + 1, len(athletes)):
            first, second = athletes[i], athletes[j]
            if not (first.is_available(clock) and second.is_available(clock)):
                continue

            is_rematch = j in first.opponents
            candidate = CandidatePair(
                index1=i,
                index2=j,
                fairness_score=fairness_score(
                    first.match_count, second.match_count, avg_match_count
                ),
                is_rematch=is_rematch,
            )
            if is_rematch:
                rematches.append(candidate)
            else:
                new_opponents.append(candidate)

    candidates = new_opponents or rematches
    if not candidates:
        return None

    # min() keeps the first of equal scores, preserving enumeration order
    return min(candidates, key=lambda candidate: candidate.fairness_score)


def select_next_group(
    states: list[GroupState], clock: int
) -> tuple[GroupState, CandidatePair] | None:
    """Group with the lowest average match count that can schedule a pair now,
    together with its best pair."""
    eligible: list[tuple[GroupState, CandidatePair]] = []
    for state in states:
        pair = find_best_pair(state, clock)
        if pair is not None:
            eligible.append((state, pair))
    if not eligible:
        return None
    return min(eligible, key=lambda choice: choice[0].avg_matches_per_athlete)


def next_availability(states: list[GroupState], clock: int, end_seconds: int) -> int:
    """Earliest moment after ``clock`` at which some athlete becomes available.

    Returns ``end_seconds`` when nobody frees up before the window closes.
    """
    next_available = end_seconds
    for state in states:
        for athlete_state in state.athletes:
            if clock < athlete_state.available_at < next_available:
                next_available = athlete_state.available_at
    return next_available


def schedule_time_boxed_area(
    area: Area,
    groups: list[Group],
    match_duration: int,
    rotation_time: int,
    start_seconds: int,
    end_seconds: int,
    min_rest_seconds: int = 0,
    id_source: IdSource | None = None,
) -> list[ScheduleEntry]:
    """Schedule as many fair matches as fit in the window for one area.

    Args:
        area: Area the entries belong to
        groups: Schedulable groups of the area (two or more athletes each)
        match_duration: Length of one match in seconds
        rotation_time: Changeover gap between consecutive matches in seconds
        start_seconds: Window start, seconds since midnight
        end_seconds: Window end, seconds since midnight
        min_rest_seconds: Minimum gap between an athlete's matches
        id_source: Source of entry and match ids

    Returns:
        Entries in sequence order; every entry ends at or before end_seconds.
    """
    ids = id_source or SequentialIdSource()
    states = build_group_states(groups, start_seconds)
    entries: list[ScheduleEntry] = []

    clock = start_seconds
    sequence_number = 0

    while clock + match_duration <= end_seconds:
        choice = select_next_group(states, clock)

        if choice is None:
            next_available = next_availability(states, clock, end_seconds)
            if next_available >= end_seconds:
                break
            logger.debug(f"{area.name}: nobody available at {format_time(clock)}, "
                         f"waiting until {format_time(next_available)}")
            clock = next_available
            continue

        state, pair = choice
        group = state.group
        athlete1 = group.athletes[pair.index1]
        athlete2 = group.athletes[pair.index2]
        match_end = clock + match_duration
        sequence_number += 1

        entries.append(
            ScheduleEntry(
                id=ids.next_id(f"entry_{area.id}"),
                area_id=area.id,
                group_id=group.id,
                match_id=ids.next_id(f"match_{area.id}_{group.id}"),
                sequence_number=sequence_number,
                scheduled_time=format_time(clock),
                start_time_seconds=clock,
                end_time_seconds=match_end,
                athlete1_id=athlete1.id,
                athlete2_id=athlete2.id,
                athlete1_name=athlete1.name,
                athlete2_name=athlete2.name,
            )
        )
        logger.debug(
            f"{area.name} #{sequence_number} {format_time(clock)}: "
            f"{athlete1.name} vs {athlete2.name} ({group.name}"
            f"{', rematch' if pair.is_rematch else ''})"
        )

        state.record_match(pair.index1, pair.index2, clock, match_end, min_rest_seconds)
        clock = match_end + rotation_time

    logger.info(f"{area.name}: {len(entries)} matches scheduled across {len(groups)} group(s)")
    return entries
