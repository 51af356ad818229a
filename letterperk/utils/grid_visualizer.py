from typing import Dict, List, Optional, Sequence

from ..engine.constants import GRID_COLS, GRID_ROWS
from ..engine.models import Tile

COLUMN_LABELS = "abc"

BONUS_MARKERS = {
    'green': 'g',
    'purple': 'p',
    'red': 'r',
    'yellow': 'y',
    'blue': 'b',
    'black': 'k',
}

LEGEND = "g +2  r +10 (<=4 letters)  b +5 (first/last)  y count^2  p x2 (7+ letters)  k +1 trade"


def cell_label(row: int, col: int) -> str:
    """Board coordinate of a cell, e.g. (0, 0) -> 'a1'."""
    return f"{COLUMN_LABELS[col]}{row + 1}"


def render_cell(tile: Optional[Tile], selected: bool = False) -> str:
    """Fixed-width text for one cell: letter, points, bonus marker."""
    if tile is None:
        return "  .   "
    marker = BONUS_MARKERS.get(tile.bonus_type, ' ') if tile.bonus_type else ' '
    text = f"{tile.letter}{tile.points:<2}{marker}"
    return f"[{text}]" if selected else f" {text} "


def render_tiles(tiles: Sequence[Tile], selected: Sequence[Tile] = ()) -> str:
    """
    Render the grid as text, one line per row, top row first.

    Selected tiles are bracketed; empty cells show a dot.
    """
    grid: Dict[tuple, Tile] = {(t.row, t.col): t for t in tiles}
    selected_ids = {t.id for t in selected}

    lines: List[str] = ["   " + "".join(f"  {c}   " for c in COLUMN_LABELS[:GRID_COLS])]
    for row in range(GRID_ROWS):
        cells = []
        for col in range(GRID_COLS):
            tile = grid.get((row, col))
            cells.append(render_cell(tile, tile is not None and tile.id in selected_ids))
        lines.append(f"{row + 1}  " + "".join(cells))

    return '\n'.join(lines)
