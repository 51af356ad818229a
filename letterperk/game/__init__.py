"""Game state, transitions, puzzle initialization and the async session."""

from .state import (
    GameState,
    calculate_word_state,
    start_game,
    select_tile,
    deselect_tile,
    clear_selection,
    submit_word,
    trade_tiles,
    shuffle_board,
    reset_game,
    build_game_result,
)
from .initializer import GameInitializer, build_initial_tiles
from .session import GameSession

__all__ = [
    "GameState",
    "calculate_word_state",
    "start_game",
    "select_tile",
    "deselect_tile",
    "clear_selection",
    "submit_word",
    "trade_tiles",
    "shuffle_board",
    "reset_game",
    "build_game_result",
    "GameInitializer",
    "build_initial_tiles",
    "GameSession",
]
