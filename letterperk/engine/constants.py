from typing import Dict, List

from .models import BonusConfig


GRID_ROWS = 4
GRID_COLS = 3
TILES_PER_COLUMN = 4

MAX_WORDS_PER_GAME = 4
MIN_WORD_LENGTH = 2
TOTAL_TILES = 92
STARTING_TRADES = 1

PURPLE_BONUS_MIN_LENGTH = 7
PURPLE_BONUS_MULTIPLIER = 2
RED_BONUS_MAX_LENGTH = 4
RED_BONUS_VALUE = 10
GREEN_BONUS_VALUE = 2
BLUE_BONUS_VALUE = 5

VOWELS = frozenset("AEIOU")

# Casual seeds are drawn from the same six-digit range daily seeds occupy
MIN_SEED = 100000
MAX_SEED = 999999

# Letter table: (points, count) per letter, 92 tiles in total
LETTER_DISTRIBUTION: Dict[str, Dict[str, int]] = {
    "A": {"points": 1, "count": 8},
    "B": {"points": 2, "count": 2},
    "C": {"points": 3, "count": 2},
    "D": {"points": 2, "count": 4},
    "E": {"points": 1, "count": 10},
    "F": {"points": 3, "count": 2},
    "G": {"points": 3, "count": 2},
    "H": {"points": 2, "count": 2},
    "I": {"points": 1, "count": 8},
    "J": {"points": 10, "count": 1},
    "K": {"points": 5, "count": 1},
    "L": {"points": 2, "count": 4},
    "M": {"points": 3, "count": 2},
    "N": {"points": 1, "count": 6},
    "O": {"points": 1, "count": 8},
    "P": {"points": 2, "count": 2},
    "Q": {"points": 10, "count": 1},
    "R": {"points": 1, "count": 6},
    "S": {"points": 1, "count": 4},
    "T": {"points": 1, "count": 6},
    "U": {"points": 2, "count": 4},
    "V": {"points": 4, "count": 2},
    "W": {"points": 4, "count": 2},
    "X": {"points": 8, "count": 1},
    "Y": {"points": 4, "count": 1},
    "Z": {"points": 6, "count": 1},
}

# Declaration order matters: bonus assignment draws each type in this order
DEFAULT_BONUS_CONFIG: List[BonusConfig] = [
    BonusConfig(type="green", min_count=3, max_count=3),
    BonusConfig(type="purple", min_count=3, max_count=3),
    BonusConfig(type="red", min_count=3, max_count=3),
    BonusConfig(type="yellow", min_count=6, max_count=6),
    BonusConfig(type="blue", min_count=3, max_count=3),
    BonusConfig(type="black", min_count=3, max_count=3),
]
