"""
Game state and the pure transitions between states.

Every transition takes a GameState and returns a new one; nothing is mutated
in place. Illegal moves raise GameError and leave the input state untouched.
The game's random stream is stored as the integer ``rng_state`` and resumed
with ``SeededRandom(rng_state)`` whenever a transition needs it.
"""

from datetime import datetime, timezone
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from ..engine.constants import MAX_WORDS_PER_GAME, MIN_WORD_LENGTH, STARTING_TRADES
from ..engine.errors import ErrorType, GameError
from ..engine.models import (
    CompletedWord,
    GameMode,
    GameResult,
    GameResultWord,
    GameSetup,
    GameStatus,
    Puzzle,
    SequenceTile,
    Tile,
    WordState,
)
from ..engine.rng import SeededRandom
from ..engine.tiles import apply_gravity, replace_tiles_in_columns, shuffle_tiles
from ..scoring.calculator import BonusCalculator, calculate_score
from ..services.dictionary import WordDictionary


class GameState(BaseModel):
    """Complete state of one game."""
    game_mode: GameMode = "daily"
    puzzle: Optional[Puzzle] = None
    status: GameStatus = "loading"
    column_sequences: List[List[SequenceTile]] = Field(default_factory=lambda: [[], [], []])
    column_draw_indices: List[int] = Field(default_factory=lambda: [0, 0, 0])
    rng_state: Optional[int] = None
    tiles: List[Tile] = Field(default_factory=list)
    selected_tiles: List[Tile] = Field(default_factory=list)
    word_state: WordState = Field(default_factory=WordState)
    total_score: int = 0
    words_completed: List[CompletedWord] = Field(default_factory=list)
    trades_remaining: int = STARTING_TRADES
    started_at: Optional[datetime] = None
    error: Optional[str] = None  # user-facing message of the last failed action

    @property
    def words_remaining(self) -> int:
        return MAX_WORDS_PER_GAME - len(self.words_completed)


def calculate_word_state(
    selected_tiles: Sequence[Tile],
    dictionary: WordDictionary,
    calculator: Optional[BonusCalculator] = None,
) -> WordState:
    """Word spelled by ``selected_tiles``, whether it is playable, and its score."""
    if not selected_tiles:
        return WordState()

    word = "".join(tile.letter for tile in selected_tiles)
    return WordState(
        word=word,
        is_valid=len(word) >= MIN_WORD_LENGTH and dictionary.is_valid_word(word),
        score=calculate_score(word, selected_tiles, calculator),
    )


def _require_playing(state: GameState) -> None:
    if state.status != "playing" or state.puzzle is None or state.rng_state is None:
        raise GameError(ErrorType.GAME_NOT_INITIALIZED, f"Cannot act while game is {state.status}")


def start_game(setup: GameSetup, mode: GameMode, now: Optional[datetime] = None) -> GameState:
    """Fresh playing state for an initialized puzzle."""
    return GameState(
        game_mode=mode,
        puzzle=Puzzle(date=setup.date, seed=setup.seed, configuration=setup.configuration),
        status="playing",
        column_sequences=setup.column_sequences,
        column_draw_indices=list(setup.column_draw_indices),
        rng_state=setup.rng_state,
        tiles=list(setup.tiles),
        started_at=now or datetime.now(timezone.utc),
    )


def select_tile(
    state: GameState,
    tile_id: str,
    dictionary: WordDictionary,
    calculator: Optional[BonusCalculator] = None,
) -> GameState:
    """Append a tile to the selection. Unknown or already selected tiles are ignored."""
    _require_playing(state)

    tile = next((t for t in state.tiles if t.id == tile_id), None)
    if tile is None or any(t.id == tile_id for t in state.selected_tiles):
        return state

    selected = state.selected_tiles + [tile]
    return state.model_copy(update={
        "selected_tiles": selected,
        "word_state": calculate_word_state(selected, dictionary, calculator),
        "error": None,
    })


def deselect_tile(
    state: GameState,
    tile_id: str,
    dictionary: WordDictionary,
    calculator: Optional[BonusCalculator] = None,
) -> GameState:
    """Remove a tile from the selection, keeping the order of the rest."""
    _require_playing(state)

    if not any(t.id == tile_id for t in state.selected_tiles):
        return state

    selected = [t for t in state.selected_tiles if t.id != tile_id]
    return state.model_copy(update={
        "selected_tiles": selected,
        "word_state": calculate_word_state(selected, dictionary, calculator),
    })


def clear_selection(state: GameState) -> GameState:
    return state.model_copy(update={"selected_tiles": [], "word_state": WordState()})


def _refill(state: GameState) -> tuple:
    """Remove the selected tiles, draw replacements and settle the grid."""
    selected_ids = {t.id for t in state.selected_tiles}
    remaining = [t for t in state.tiles if t.id not in selected_ids]
    replaced = replace_tiles_in_columns(
        remaining,
        state.selected_tiles,
        state.column_sequences,
        state.column_draw_indices,
    )
    return apply_gravity(replaced.new_tiles), replaced.new_indices


def submit_word(
    state: GameState,
    dictionary: WordDictionary,
    calculator: Optional[BonusCalculator] = None,
) -> GameState:
    """
    Score the selected word and refill the grid.

    Each black tile in the word grants one extra trade. The game ends once
    ``MAX_WORDS_PER_GAME`` words are completed.

    Raises:
        GameError: INVALID_WORD for fewer than two tiles or a word the
            dictionary rejects; GAME_NOT_INITIALIZED outside play
    """
    _require_playing(state)

    word_state = calculate_word_state(state.selected_tiles, dictionary, calculator)
    if len(state.selected_tiles) < MIN_WORD_LENGTH or not word_state.is_valid:
        raise GameError(ErrorType.INVALID_WORD, f"Rejected word {word_state.word!r}")

    completed = CompletedWord(
        word=word_state.word,
        score=word_state.score.final_score,
        bonuses_applied=[b.type for b in word_state.score.bonuses],
        tile_bonuses=[t.bonus_type for t in state.selected_tiles],
        bonus_breakdown=word_state.score.bonuses,
    )
    black_tiles = sum(1 for t in state.selected_tiles if t.bonus_type == "black")
    tiles, indices = _refill(state)

    words_completed = state.words_completed + [completed]
    status = "gameover" if len(words_completed) >= MAX_WORDS_PER_GAME else "playing"

    return state.model_copy(update={
        "tiles": tiles,
        "column_draw_indices": indices,
        "selected_tiles": [],
        "word_state": WordState(),
        "total_score": state.total_score + completed.score,
        "words_completed": words_completed,
        "trades_remaining": state.trades_remaining + black_tiles,
        "status": status,
        "error": None,
    })


def trade_tiles(state: GameState) -> GameState:
    """
    Spend one trade to swap the selected tiles for fresh draws.

    Raises:
        GameError: NO_TRADES_AVAILABLE, NO_TILES_SELECTED or GAME_NOT_INITIALIZED
    """
    _require_playing(state)

    if state.trades_remaining <= 0:
        raise GameError(ErrorType.NO_TRADES_AVAILABLE)
    if not state.selected_tiles:
        raise GameError(ErrorType.NO_TILES_SELECTED)

    tiles, indices = _refill(state)
    return state.model_copy(update={
        "tiles": tiles,
        "column_draw_indices": indices,
        "selected_tiles": [],
        "word_state": WordState(),
        "trades_remaining": state.trades_remaining - 1,
        "error": None,
    })


def shuffle_board(state: GameState) -> GameState:
    """Rearrange every column with the game's random stream so no tile keeps its row."""
    _require_playing(state)

    random = SeededRandom(state.rng_state)
    tiles = shuffle_tiles(state.tiles, random)
    return state.model_copy(update={
        "tiles": tiles,
        "rng_state": random.state,
        "selected_tiles": [],
        "word_state": WordState(),
        "error": None,
    })


def reset_game(state: GameState) -> GameState:
    """Back to an empty loading state, keeping only the mode."""
    return GameState(game_mode=state.game_mode)


def build_game_result(state: GameState, ended_at: Optional[datetime] = None) -> GameResult:
    """
    Assemble the record handed to the result repository.

    Raises:
        GameError: GAME_NOT_INITIALIZED if there is no puzzle
    """
    if state.puzzle is None:
        raise GameError(ErrorType.GAME_NOT_INITIALIZED, "No puzzle to report")

    words = [
        GameResultWord(
            word=w.word,
            score=w.score,
            index=i + 1,
            bonuses=w.bonus_breakdown,
            bonus_tiles_count=sum(1 for b in w.tile_bonuses if b is not None),
        )
        for i, w in enumerate(state.words_completed)
    ]

    duration = None
    started_at = None
    if state.started_at is not None:
        started_at = state.started_at.isoformat()
        ended_at = ended_at or datetime.now(timezone.utc)
        duration = max(0, int((ended_at - state.started_at).total_seconds()))

    return GameResult(
        puzzle_date=state.puzzle.date,
        seed=state.puzzle.seed,
        total_score=state.total_score,
        word_count=len(state.words_completed),
        mode=state.game_mode,
        words=words,
        duration_seconds=duration,
        started_at=started_at,
        total_bonus_tiles_used=sum(w.bonus_tiles_count for w in words),
    )