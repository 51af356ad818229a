"""
Puzzle configuration generation.

Builds the tile bag from the letter table, deals it into three column
sequences and repairs each column so its opening tiles carry distinct letters.
Every random decision is drawn from a single seeded stream, so the same seed
always yields the same configuration.
"""

from typing import List

from .constants import (
    DEFAULT_BONUS_CONFIG,
    GRID_COLS,
    LETTER_DISTRIBUTION,
    TILES_PER_COLUMN,
    VOWELS,
)
from .models import GameConfiguration, SequenceTile
from .rng import SeededRandom, seeded_random, shuffle_array


def build_tile_bag() -> List[SequenceTile]:
    """Expand the letter table into one entry per physical tile."""
    bag: List[SequenceTile] = []
    for letter, entry in LETTER_DISTRIBUTION.items():
        bag.extend(
            SequenceTile(letter=letter, points=entry["points"])
            for _ in range(entry["count"])
        )
    return bag


def deal_columns(tiles: List[SequenceTile]) -> List[List[SequenceTile]]:
    """
    Deal vowels round-robin across the columns, then consonants after them.

    The consonant pass continues the round-robin where the vowel pass stopped.
    Each column starts with its share of vowels, and shuffle order is preserved
    inside each group.
    """
    vowels = [t for t in tiles if t.letter in VOWELS]
    consonants = [t for t in tiles if t.letter not in VOWELS]

    columns: List[List[SequenceTile]] = [[] for _ in range(GRID_COLS)]
    for index, tile in enumerate(vowels + consonants):
        columns[index % GRID_COLS].append(tile)
    return columns


def spread_opening_letters(
    sequence: List[SequenceTile],
    random: SeededRandom,
    opening: int = TILES_PER_COLUMN,
) -> List[SequenceTile]:
    """
    Reorder a column so its first ``opening`` tiles have no repeated letter.

    The first occurrence of each unused letter fills the opening slots in
    scan order. If the column runs out of distinct letters, the leftover slots
    take whatever remains in original relative order. The untouched remainder
    is appended after being shuffled again with ``random``.
    """
    used_letters = set()
    taken = set()
    head: List[SequenceTile] = []

    for index, tile in enumerate(sequence):
        if len(head) >= opening:
            break
        if tile.letter not in used_letters:
            used_letters.add(tile.letter)
            taken.add(index)
            head.append(tile)

    if len(head) < opening:
        for index, tile in enumerate(sequence):
            if len(head) >= opening:
                break
            if index not in taken:
                taken.add(index)
                head.append(tile)

    remainder = [tile for index, tile in enumerate(sequence) if index not in taken]
    return head + shuffle_array(remainder, random)


def generate_game_configuration(seed: int) -> GameConfiguration:
    """
    Generate the deterministic puzzle blueprint for ``seed``.

    Steps, all on one RNG stream: shuffle the full bag, deal vowels then
    consonants into columns, shuffle columns 0, 1, 2 in order, then repair
    columns 0, 1, 2 in order so their opening tiles are distinct.
    """
    random = seeded_random(seed)

    shuffled_bag = shuffle_array(build_tile_bag(), random)
    columns = deal_columns(shuffled_bag)
    columns = [shuffle_array(column, random) for column in columns]
    columns = [spread_opening_letters(column, random) for column in columns]

    return GameConfiguration(
        column_sequences=columns,
        bonus_config=[config.model_copy() for config in DEFAULT_BONUS_CONFIG],
        effects=[],
    )
