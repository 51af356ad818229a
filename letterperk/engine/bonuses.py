"""Scatter bonus-tile markers across generated column sequences."""

from typing import List

from .models import BonusConfig, SequenceTile
from .rng import SeededRandom


def assign_bonuses_to_sequences(
    sequences: List[List[SequenceTile]],
    config: List[BonusConfig],
    random: SeededRandom,
) -> List[List[SequenceTile]]:
    """
    Assign bonus types to random sequence entries.

    All entries share one pool of unassigned positions. Bonus types are drawn
    in config order, each taking ``min_count`` picks of
    ``floor(random() * remaining)`` before the next type starts. A position
    leaves the pool once picked, so no entry carries two bonuses, and the
    total is capped by the pool size.

    Args:
        sequences: Column sequences without bonuses
        config: Bonus types and counts, in draw order
        random: Seeded generator; advanced once per assignment

    Returns:
        New column sequences with the same letters in the same order
    """
    flat = [
        (col, index, tile.model_copy())
        for col, sequence in enumerate(sequences)
        for index, tile in enumerate(sequence)
    ]
    available = list(range(len(flat)))

    for bonus in config:
        for _ in range(bonus.min_count):
            if not available:
                break
            pick = random.randbelow(len(available))
            flat[available.pop(pick)][2].bonus_type = bonus.type

    result: List[List[SequenceTile]] = [[] for _ in sequences]
    for col, _index, tile in flat:
        result[col].append(tile)
    return result
