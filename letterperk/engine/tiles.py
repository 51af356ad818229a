"""
Tile creation, replacement and gravity.

All functions return new tile lists and never mutate the tiles they receive.
"""

import uuid
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .constants import GRID_COLS, GRID_ROWS, TILES_PER_COLUMN
from .models import BonusType, SequenceTile, Tile
from .rng import SeededRandom, shuffle_array


MAX_DERANGEMENT_ATTEMPTS = 100


class ReplaceTilesResult(NamedTuple):
    """Tiles after a replacement draw and the advanced draw indices."""
    new_tiles: List[Tile]
    new_indices: List[int]


def create_tile(
    letter: str,
    points: int,
    row: int,
    col: int,
    bonus_type: Optional[BonusType] = None,
) -> Tile:
    """Create a tile with a fresh unique id."""
    return Tile(
        id=f"{letter}-{row}-{col}-{uuid.uuid4().hex}",
        letter=letter,
        points=points,
        row=row,
        col=col,
        bonus_type=bonus_type,
    )


def get_tiles_by_column(tiles: Sequence[Tile], col: int) -> List[Tile]:
    """Tiles of one column, top row first."""
    return sorted((t for t in tiles if t.col == col), key=lambda t: t.row)


def get_empty_positions(tiles: Sequence[Tile]) -> List[Tuple[int, int]]:
    """Grid cells (row, col) with no tile, in row-major order."""
    occupied = {(t.row, t.col) for t in tiles}
    return [
        (row, col)
        for row in range(GRID_ROWS)
        for col in range(GRID_COLS)
        if (row, col) not in occupied
    ]


def apply_gravity(tiles: Sequence[Tile]) -> List[Tile]:
    """
    Settle every column to the bottom of the grid.

    Each column is sorted by row descending; the highest row takes the bottom
    slot and the rest stack upward. Only ``row`` changes, and the result keeps
    the input order of tiles.
    """
    settled = {}
    for col in range(GRID_COLS):
        column = sorted((t for t in tiles if t.col == col), key=lambda t: t.row, reverse=True)
        for offset, tile in enumerate(column):
            settled[tile.id] = GRID_ROWS - 1 - offset

    return [
        tile.model_copy(update={"row": settled[tile.id]}) if tile.id in settled else tile
        for tile in tiles
    ]


def replace_tiles_in_columns(
    remaining_tiles: Sequence[Tile],
    selected_tiles: Sequence[Tile],
    sequences: Sequence[Sequence[SequenceTile]],
    draw_indices: Sequence[int],
) -> ReplaceTilesResult:
    """
    Refill every column to ``TILES_PER_COLUMN`` from its draw sequence.

    Each column draws from its own sequence starting at its draw index,
    wrapping modulo the sequence length and advancing the index once per
    draw. Drawn tiles get rows -1, -2, ... in draw order so gravity stacks
    them above the tiles that stayed. The result is not settled; callers
    apply gravity.

    Args:
        remaining_tiles: Tiles still on the grid
        selected_tiles: Tiles that were consumed (kept for symmetry with callers)
        sequences: Per-column draw sequences
        draw_indices: Per-column draw counters

    Returns:
        ReplaceTilesResult with remaining + drawn tiles and the new indices
    """
    fresh_tiles: List[Tile] = []
    new_indices = list(draw_indices)

    for col in range(GRID_COLS):
        in_column = sum(1 for t in remaining_tiles if t.col == col)
        needed = TILES_PER_COLUMN - in_column
        sequence = sequences[col]

        for i in range(needed):
            if not sequence:
                break
            tile_data = sequence[new_indices[col] % len(sequence)]
            new_indices[col] += 1
            fresh_tiles.append(create_tile(
                tile_data.letter,
                tile_data.points,
                -1 - i,
                col,
                tile_data.bonus_type,
            ))

    return ReplaceTilesResult(
        new_tiles=list(remaining_tiles) + fresh_tiles,
        new_indices=new_indices,
    )


def derangement(size: int, random: SeededRandom) -> List[int]:
    """
    Permutation of ``range(size)`` with no fixed points.

    Uses rejection sampling over seeded shuffles and falls back to a cyclic
    rotation after ``MAX_DERANGEMENT_ATTEMPTS`` failures.
    """
    positions = list(range(size))
    if size < 2:
        return positions

    for _ in range(MAX_DERANGEMENT_ATTEMPTS):
        candidate = shuffle_array(positions, random)
        if all(candidate[i] != i for i in positions):
            return candidate

    return [(i + 1) % size for i in positions]


def shuffle_tiles(tiles: Sequence[Tile], random: SeededRandom) -> List[Tile]:
    """
    Rearrange every column so that no tile keeps its row.

    Per column, the tiles are taken bottom to top, a derangement moves the
    tile at position ``i`` to position ``perm[i]``, and gravity is re-applied.
    Column contents are unchanged.
    """
    new_rows = {}
    for col in range(GRID_COLS):
        column = sorted((t for t in tiles if t.col == col), key=lambda t: t.row, reverse=True)
        perm = derangement(len(column), random)
        for position, tile in enumerate(column):
            new_rows[tile.id] = GRID_ROWS - 1 - perm[position]

    moved = [
        tile.model_copy(update={"row": new_rows[tile.id]}) if tile.id in new_rows else tile
        for tile in tiles
    ]
    return apply_gravity(moved)
