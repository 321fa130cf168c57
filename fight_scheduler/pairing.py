"""
Round-robin pairing generation using the Circle Method.

For four athletes [A, B, C, D] one cycle gives:

    Round 1: A-B, C-D
    Round 2: A-C, D-B
    Round 3: A-D, B-C

Every athlete fights at most once per round, and every unordered pair meets
exactly once per cycle.
"""

from .ids import IdSource, SequentialIdSource
from .models import Athlete, Match, Round


def generate_rounds_for_group(
    athletes: list[Athlete],
    group_id: str,
    cycles: int = 1,
    id_source: IdSource | None = None,
) -> list[Round]:
    """Generate the complete list of rounds for one group.

    Args:
        athletes: Ordered roster; the first athlete keeps a fixed position
        group_id: Group the matches belong to
        cycles: Number of times the full round-robin is repeated
        id_source: Source of match ids (a fresh sequential source if omitted)

    Returns:
        Rounds numbered continuously across cycles. Odd rosters get one round
        per athlete, with the match against the BYE dropped from each round.
    """
    if len(athletes) < 2:
        return []

    ids = id_source or SequentialIdSource()

    # None stands in for the BYE on odd rosters
    participant_ids: list[str | None] = [athlete.id for athlete in athletes]
    if len(participant_ids) % 2 == 1:
        participant_ids.append(None)

    size = len(participant_ids)
    rounds_per_cycle = size - 1
    half = size // 2

    # Position 0 stays fixed, the rest rotate one step before each round.
    # After a full cycle the positions are back where they started.
    positions = list(range(size))

    rounds: list[Round] = []
    for cycle in range(1, cycles + 1):
        for round_index in range(rounds_per_cycle):
            positions.append(positions.pop(1))

            matches: list[Match] = []
            for i in range(half):
                home = participant_ids[positions[i]]
                away = participant_ids[positions[size - 1 - i]]
                if home is None or away is None:
                    continue
                matches.append(
                    Match(
                        id=ids.next_id(f"match_{group_id}_c{cycle}_r{round_index}"),
                        group_id=group_id,
                        athlete1_id=home,
                        athlete2_id=away,
                        cycle=cycle,
                    )
                )

            rounds.append(
                Round(
                    round_number=(cycle - 1) * rounds_per_cycle + round_index + 1,
                    group_id=group_id,
                    matches=matches,
                )
            )

    return rounds
