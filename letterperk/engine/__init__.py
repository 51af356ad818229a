"""Deterministic core: seeds, puzzle generation, bonus placement and tile movement."""

from .models import (
    BonusType,
    GameMode,
    GameStatus,
    Tile,
    SequenceTile,
    BonusConfig,
    GameEffect,
    GameConfiguration,
    Puzzle,
    BonusEntry,
    ScoreBreakdown,
    WordState,
    CompletedWord,
    GameSetup,
    GameResultWord,
    GameResult,
    LeaderboardEntry,
    DailyGameRecord,
)
from .constants import (
    GRID_ROWS,
    GRID_COLS,
    TILES_PER_COLUMN,
    MAX_WORDS_PER_GAME,
    MIN_WORD_LENGTH,
    TOTAL_TILES,
    STARTING_TRADES,
    LETTER_DISTRIBUTION,
    DEFAULT_BONUS_CONFIG,
)
from .errors import ErrorType, GameError, handle_error, get_user_message
from .rng import SeededRandom, seeded_random, shuffle_array
from .seeds import (
    eastern_date,
    get_today_utc,
    format_utc_date_string,
    date_to_seed,
    random_casual_seed,
)
from .generator import build_tile_bag, generate_game_configuration
from .bonuses import assign_bonuses_to_sequences
from .tiles import (
    ReplaceTilesResult,
    create_tile,
    apply_gravity,
    get_tiles_by_column,
    get_empty_positions,
    replace_tiles_in_columns,
    shuffle_tiles,
)

__all__ = [
    # Models
    "BonusType",
    "GameMode",
    "GameStatus",
    "Tile",
    "SequenceTile",
    "BonusConfig",
    "GameEffect",
    "GameConfiguration",
    "Puzzle",
    "BonusEntry",
    "ScoreBreakdown",
    "WordState",
    "CompletedWord",
    "GameSetup",
    "GameResultWord",
    "GameResult",
    "LeaderboardEntry",
    "DailyGameRecord",
    # Constants
    "GRID_ROWS",
    "GRID_COLS",
    "TILES_PER_COLUMN",
    "MAX_WORDS_PER_GAME",
    "MIN_WORD_LENGTH",
    "TOTAL_TILES",
    "STARTING_TRADES",
    "LETTER_DISTRIBUTION",
    "DEFAULT_BONUS_CONFIG",
    # Errors
    "ErrorType",
    "GameError",
    "handle_error",
    "get_user_message",
    # Randomness and seeds
    "SeededRandom",
    "seeded_random",
    "shuffle_array",
    "eastern_date",
    "get_today_utc",
    "format_utc_date_string",
    "date_to_seed",
    "random_casual_seed",
    # Generation
    "build_tile_bag",
    "generate_game_configuration",
    "assign_bonuses_to_sequences",
    # Tiles
    "ReplaceTilesResult",
    "create_tile",
    "apply_gravity",
    "get_tiles_by_column",
    "get_empty_positions",
    "replace_tiles_in_columns",
    "shuffle_tiles",
]
