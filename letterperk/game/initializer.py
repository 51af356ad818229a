"""Turns a game mode into a ready-to-play puzzle setup."""

import logging
import random
from datetime import datetime
from typing import List, Optional

from ..engine.bonuses import assign_bonuses_to_sequences
from ..engine.constants import GRID_COLS, TILES_PER_COLUMN
from ..engine.generator import generate_game_configuration
from ..engine.models import GameConfiguration, GameMode, GameSetup, SequenceTile, Tile
from ..engine.rng import seeded_random
from ..engine.seeds import date_to_seed, format_utc_date_string, get_today_utc, random_casual_seed
from ..engine.tiles import create_tile
from ..services.repositories import PuzzleRepository


logger = logging.getLogger(__name__)


def build_initial_tiles(sequences: List[List[SequenceTile]]) -> List[Tile]:
    """Fill the grid column by column, top row first, from the head of each sequence."""
    tiles = []
    for col in range(GRID_COLS):
        for row in range(TILES_PER_COLUMN):
            entry = sequences[col][row]
            tiles.append(create_tile(entry.letter, entry.points, row, col, entry.bonus_type))
    return tiles


class GameInitializer:
    """
    Builds game setups for daily and casual play.

    Daily puzzles come from the puzzle repository keyed by the Eastern game
    day; casual puzzles are generated locally from a random seed.
    """

    def __init__(
        self,
        puzzle_repository: PuzzleRepository,
        casual_rng: Optional[random.Random] = None,
    ):
        self.puzzle_repository = puzzle_repository
        self.casual_rng = casual_rng

    async def _daily_configuration(self, date: str, seed: int) -> GameConfiguration:
        try:
            return await self.puzzle_repository.load_daily_puzzle(date, seed)
        except Exception as e:
            logger.warning(f"Daily puzzle load failed for {date}, generating locally: {e}")
            return generate_game_configuration(seed)

    async def initialize(self, mode: GameMode, now: Optional[datetime] = None) -> GameSetup:
        """
        Prepare a puzzle for ``mode``.

        Args:
            mode: "daily" or "casual"
            now: Instant used to pick the game day (defaults to now)

        Returns:
            GameSetup with bonus-assigned sequences, the initial 4x3 grid,
            draw indices [4, 4, 4] and the random stream position
        """
        today = get_today_utc(now)
        date = format_utc_date_string(today)

        if mode == "daily":
            seed = date_to_seed(today)
            configuration = await self._daily_configuration(date, seed)
        else:
            seed = random_casual_seed(self.casual_rng)
            configuration = generate_game_configuration(seed)

        rng = seeded_random(seed)
        sequences = assign_bonuses_to_sequences(
            configuration.column_sequences,
            configuration.bonus_config,
            rng,
        )
        configuration = configuration.model_copy(update={"column_sequences": sequences})

        logger.info(f"Initialized {mode} puzzle {date} (seed {seed})")
        return GameSetup(
            date=date,
            seed=seed,
            configuration=configuration,
            tiles=build_initial_tiles(sequences),
            column_sequences=sequences,
            column_draw_indices=[TILES_PER_COLUMN] * GRID_COLS,
            rng_state=rng.state,
        )
