"""
Storage contracts for puzzles and game results, with in-memory implementations.

The in-memory repositories back casual local play and the test suite. SQL
implementations live in ``sql.py``.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, List, Tuple

from ..engine.generator import generate_game_configuration
from ..engine.models import GameConfiguration, GameMode, GameResult, LeaderboardEntry


LEADERBOARD_SIZE = 10


class PuzzleRepository(ABC):
    """Persistence of daily puzzle configurations."""

    @abstractmethod
    async def load_daily_puzzle(self, date: str, seed: int) -> GameConfiguration:
        """
        Return the stored configuration for (date, seed).

        If none is stored, generate one from the seed and save it. Storage
        failures fall back to local generation rather than raising.
        """

    @abstractmethod
    async def save_daily_puzzle(self, date: str, seed: int, configuration: GameConfiguration) -> None:
        """Store a configuration keyed by its seed. Saving twice is not an error."""


class GameResultRepository(ABC):
    """Persistence of finished games and the leaderboard built from them."""

    @abstractmethod
    async def log_game_result(self, result: GameResult) -> None:
        """Record a finished game."""

    @abstractmethod
    async def get_leaderboard(self, mode: GameMode, date: str) -> List[LeaderboardEntry]:
        """Top unique scores for a mode and puzzle date, best first."""


def rank_unique_scores(
    rows: List[Tuple[int, int, str]],
    limit: int = LEADERBOARD_SIZE,
) -> List[LeaderboardEntry]:
    """
    Build leaderboard entries from (score, word_count, created_at) rows.

    Rows must be in first-seen order. Scores are sorted descending with a
    stable sort, so ties keep that order, and only the first row of each
    score is kept.
    """
    seen = set()
    entries: List[LeaderboardEntry] = []
    for score, word_count, created_at in sorted(rows, key=lambda r: r[0], reverse=True):
        if score in seen:
            continue
        seen.add(score)
        entries.append(LeaderboardEntry(
            total_score=score,
            word_count=word_count,
            created_at=created_at,
        ))
        if len(entries) >= limit:
            break
    return entries


class InMemoryPuzzleRepository(PuzzleRepository):
    """Keeps puzzles in a dict keyed by date and seed."""

    def __init__(self):
        self._puzzles: Dict[str, GameConfiguration] = {}

    @staticmethod
    def _key(date: str, seed: int) -> str:
        return f"{date}-{seed}"

    async def load_daily_puzzle(self, date: str, seed: int) -> GameConfiguration:
        key = self._key(date, seed)
        if key in self._puzzles:
            return self._puzzles[key]

        configuration = generate_game_configuration(seed)
        self._puzzles[key] = configuration
        return configuration

    async def save_daily_puzzle(self, date: str, seed: int, configuration: GameConfiguration) -> None:
        self._puzzles[self._key(date, seed)] = configuration

    def clear(self) -> None:
        self._puzzles.clear()

    def has_puzzle(self, date: str, seed: int) -> bool:
        return self._key(date, seed) in self._puzzles

    @property
    def puzzle_count(self) -> int:
        return len(self._puzzles)


class InMemoryGameResultRepository(GameResultRepository):
    """Keeps results in a list in arrival order."""

    def __init__(self):
        self._results: List[Tuple[GameResult, str]] = []

    async def log_game_result(self, result: GameResult) -> None:
        logged_at = datetime.now(timezone.utc).isoformat()
        self._results.append((result.model_copy(deep=True), logged_at))

    async def get_leaderboard(self, mode: GameMode, date: str) -> List[LeaderboardEntry]:
        rows = [
            (result.total_score, result.word_count, result.started_at or logged_at)
            for result, logged_at in self._results
            if result.mode == mode and result.puzzle_date == date
        ]
        return rank_unique_scores(rows)

    def clear(self) -> None:
        self._results = []

    @property
    def results(self) -> List[GameResult]:
        return [result for result, _ in self._results]
