"""
Complete round-robin scheduling for areas that hold several groups.

Each group's rounds come from the Circle Method; the area then plays round 1
of every group, round 2 of every group, and so on. Matches are placed back to
back with the rotation gap in between, regardless of the event window, so the
statistics report any overflow as a negative margin.
"""

import logging

from shared.time_utils import combinations, format_time

from .ids import IdSource, SequentialIdSource
from .models import Area, Group, ScheduleEntry
from .pairing import generate_rounds_for_group

logger = logging.getLogger(__name__)


def calculate_max_cycles(
    groups: list[Group],
    match_duration: int,
    rotation_time: int,
    available_seconds: int,
) -> int:
    """How many complete round-robin cycles of an area fit in the window (at least 1)."""
    matches_per_cycle = sum(combinations(len(group.athletes)) for group in groups)
    if matches_per_cycle == 0:
        return 1

    time_per_cycle = matches_per_cycle * (match_duration + rotation_time) - rotation_time
    return max(1, available_seconds // time_per_cycle)


def schedule_rounds_for_multi_group_area(
    area: Area,
    groups: list[Group],
    match_duration: int,
    rotation_time: int,
    start_seconds: int,
    cycles: int = 1,
    id_source: IdSource | None = None,
) -> list[ScheduleEntry]:
    """Interleave complete round-robins of several groups, round by round."""
    ids = id_source or SequentialIdSource()

    group_rounds = [
        (group, generate_rounds_for_group(group.athletes, group.id, cycles, ids))
        for group in groups
    ]
    max_rounds = max((len(rounds) for _, rounds in group_rounds), default=0)

    entries: list[ScheduleEntry] = []
    clock = start_seconds
    sequence_number = 0

    for round_index in range(max_rounds):
        for group, rounds in group_rounds:
            if round_index >= len(rounds):
                continue

            names = {athlete.id: athlete.name for athlete in group.athletes}
            current_round = rounds[round_index]

            for match in current_round.matches:
                sequence_number += 1
                entries.append(
                    ScheduleEntry(
                        id=ids.next_id(f"entry_{area.id}"),
                        area_id=area.id,
                        group_id=group.id,
                        match_id=match.id,
                        sequence_number=sequence_number,
                        scheduled_time=format_time(clock),
                        start_time_seconds=clock,
                        end_time_seconds=clock + match_duration,
                        athlete1_id=match.athlete1_id,
                        athlete2_id=match.athlete2_id,
                        athlete1_name=names[match.athlete1_id],
                        athlete2_name=names[match.athlete2_id],
                        round_number=current_round.round_number,
                    )
                )
                clock += match_duration + rotation_time

    logger.info(
        f"{area.name}: {len(entries)} matches in {max_rounds} round(s) "
        f"({cycles} cycle(s), {len(groups)} group(s))"
    )
    return entries
