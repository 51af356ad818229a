"""
Async glue between the pure game transitions and the outside world.

A GameSession owns one game at a time. It starts puzzles through the
initializer, applies player actions, and when the game ends hands the result
to the result repository and marks daily puzzles as played.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ..engine.errors import USER_MESSAGES, ErrorType, GameError, handle_error
from ..engine.models import GameMode, LeaderboardEntry
from ..scoring.calculator import BonusCalculator
from ..services.dictionary import WordDictionary
from ..services.records import DailyRecordStore
from ..services.repositories import GameResultRepository
from .initializer import GameInitializer
from .state import (
    GameState,
    build_game_result,
    clear_selection,
    deselect_tile,
    select_tile,
    shuffle_board,
    start_game,
    submit_word,
    trade_tiles,
)


logger = logging.getLogger(__name__)


class GameSession:
    """
    One player's game, wired to its collaborators.

    Args:
        initializer: Builds puzzle setups
        dictionary: Validates words
        results: Receives finished games
        records: Remembers played daily puzzles (optional)
        calculator: Scoring strategies (default set when omitted)
        clock: Returns the current instant; injectable for tests
    """

    def __init__(
        self,
        initializer: GameInitializer,
        dictionary: WordDictionary,
        results: GameResultRepository,
        records: Optional[DailyRecordStore] = None,
        calculator: Optional[BonusCalculator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.initializer = initializer
        self.dictionary = dictionary
        self.results = results
        self.records = records
        self.calculator = calculator or BonusCalculator()
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.state = GameState()

    async def start(self, mode: GameMode) -> GameState:
        """
        Initialize a new game, discarding any current one.

        Raises:
            GameError: INITIALIZATION_FAILED if no puzzle could be built
        """
        self.state = GameState(game_mode=mode)
        now = self.clock()
        if self.records is not None:
            await asyncio.to_thread(self.records.cleanup_old_records, now)

        try:
            setup = await self.initializer.initialize(mode, now)
        except Exception as e:
            error = handle_error(e, ErrorType.INITIALIZATION_FAILED)
            self.state = self.state.model_copy(update={"error": error.user_message})
            raise error from e

        self.state = start_game(setup, mode, now)
        # Warm the word list while the player looks at the board
        await self.dictionary.ready()
        return self.state

    def _apply(self, transition, *args) -> GameState:
        try:
            self.state = transition(self.state, *args)
        except GameError as e:
            self.state = self.state.model_copy(update={"error": e.user_message})
            raise
        return self.state

    def select(self, tile_id: str) -> GameState:
        return self._apply(select_tile, tile_id, self.dictionary, self.calculator)

    def deselect(self, tile_id: str) -> GameState:
        return self._apply(deselect_tile, tile_id, self.dictionary, self.calculator)

    def clear(self) -> GameState:
        return self._apply(clear_selection)

    async def submit(self) -> GameState:
        """Submit the selected word; records the result if this ends the game."""
        self._apply(submit_word, self.dictionary, self.calculator)
        if self.state.status == "gameover":
            await self._finish()
        return self.state

    def trade(self) -> GameState:
        return self._apply(trade_tiles)

    def shuffle(self) -> GameState:
        return self._apply(shuffle_board)

    async def _finish(self) -> None:
        state = self.state
        result = build_game_result(state, self.clock())

        try:
            await self.results.log_game_result(result)
        except Exception as e:
            logger.error(f"Failed to log game result: {e}")
            self.state = state.model_copy(update={"error": USER_MESSAGES[ErrorType.DATABASE_ERROR]})

        if state.game_mode == "daily" and self.records is not None:
            await asyncio.to_thread(
                self.records.mark_played,
                result.puzzle_date,
                result.total_score,
                result.word_count,
                self.clock(),
            )

    def has_played_today(self) -> bool:
        """Whether the current daily puzzle is already recorded as played."""
        if self.records is None or self.state.puzzle is None:
            return False
        return self.records.has_played(self.state.puzzle.date)

    async def leaderboard(self) -> List[LeaderboardEntry]:
        if self.state.puzzle is None:
            return []
        return await self.results.get_leaderboard(self.state.game_mode, self.state.puzzle.date)
