"""
Tests for the async game session.
"""

import asyncio
import random
import threading
from datetime import datetime, timedelta, timezone
from typing import List

import pytest

from letterperk.engine import ErrorType, GameError, GameResult, LeaderboardEntry
from letterperk.game import GameInitializer, GameSession
from letterperk.services import (
    DailyRecordStore,
    GameResultRepository,
    InMemoryGameResultRepository,
    InMemoryPuzzleRepository,
    WordDictionary,
)


NOW = datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


class BrokenResultRepository(GameResultRepository):
    """Result store that always fails."""

    async def log_game_result(self, result: GameResult) -> None:
        raise ConnectionError("storage offline")

    async def get_leaderboard(self, mode, date: str) -> List[LeaderboardEntry]:
        return []


class FailingInitializer(GameInitializer):
    """Initializer that cannot build a puzzle."""

    async def initialize(self, mode, now=None):
        raise RuntimeError("no puzzle")


class ThreadRecordingStore(DailyRecordStore):
    """Record store that notes which threads touch the file."""

    def __init__(self, path):
        super().__init__(path)
        self.threads = set()

    def _read(self):
        self.threads.add(threading.get_ident())
        return super()._read()

    def _write(self, data):
        self.threads.add(threading.get_ident())
        super()._write(data)


class Clock:
    """Clock that advances one minute per reading."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(minutes=1)
        return current


def make_session(tmp_path, results=None, dictionary=None, initializer=None) -> GameSession:
    return GameSession(
        initializer=initializer or GameInitializer(InMemoryPuzzleRepository(), random.Random(1)),
        dictionary=dictionary or WordDictionary.from_words([]),
        results=results or InMemoryGameResultRepository(),
        records=DailyRecordStore(tmp_path / "records.json"),
        clock=Clock(NOW),
    )


def bottom_pair(session: GameSession):
    tiles = session.state.tiles
    return [next(t.id for t in tiles if t.row == 3 and t.col == col) for col in (0, 1)]


async def play_full_game(session: GameSession) -> None:
    await session.start("daily")
    for _ in range(4):
        for tile_id in bottom_pair(session):
            session.select(tile_id)
        await session.submit()


class TestStart:
    """Test cases for starting games."""

    def test_start_daily(self, tmp_path):
        """Starting a daily game yields a playing state for the game day."""
        session = make_session(tmp_path)
        state = asyncio.run(session.start("daily"))
        assert state.status == "playing"
        assert state.puzzle.date == "2025-01-15"
        assert state.started_at == NOW

    def test_start_failure(self, tmp_path):
        """Initializer failures surface as INITIALIZATION_FAILED."""
        session = make_session(tmp_path, initializer=FailingInitializer(InMemoryPuzzleRepository()))
        with pytest.raises(GameError) as exc_info:
            asyncio.run(session.start("daily"))
        assert exc_info.value.type is ErrorType.INITIALIZATION_FAILED
        assert session.state.error == "Failed to initialize game. Please try again."

    def test_start_prunes_old_records(self, tmp_path):
        """Starting a game prunes stale daily records."""
        session = make_session(tmp_path)
        session.records.mark_played("2025-01-10", 50, 4, NOW - timedelta(days=5))
        asyncio.run(session.start("casual"))
        assert not session.records.has_played("2025-01-10")


class TestPlay:
    """Test cases for playing through a session."""

    def test_full_game_logged(self, tmp_path):
        """Finishing a game logs the result and marks the day played."""
        results = InMemoryGameResultRepository()
        session = make_session(tmp_path, results=results)

        asyncio.run(play_full_game(session))

        assert session.state.status == "gameover"
        assert len(results.results) == 1
        logged = results.results[0]
        assert logged.word_count == 4
        assert logged.total_score == session.state.total_score
        assert logged.duration_seconds is not None and logged.duration_seconds > 0
        assert session.has_played_today()
        assert session.records.get_result("2025-01-15").score == session.state.total_score

    def test_leaderboard(self, tmp_path):
        """The finished game appears on the leaderboard."""
        session = make_session(tmp_path)

        async def scenario():
            await play_full_game(session)
            return await session.leaderboard()

        board = asyncio.run(scenario())
        assert [e.total_score for e in board] == [session.state.total_score]

    def test_casual_not_recorded(self, tmp_path):
        """Casual games are logged but not marked as the daily puzzle."""
        results = InMemoryGameResultRepository()
        session = make_session(tmp_path, results=results)

        async def scenario():
            await session.start("casual")
            for _ in range(4):
                for tile_id in bottom_pair(session):
                    session.select(tile_id)
                await session.submit()

        asyncio.run(scenario())
        assert results.results[0].mode == "casual"
        assert not session.records.path.exists() or not session.records.has_played(session.state.puzzle.date)

    def test_logging_failure_not_raised(self, tmp_path):
        """A failed result log shows the database message but finishes the game."""
        session = make_session(tmp_path, results=BrokenResultRepository())

        asyncio.run(play_full_game(session))

        assert session.state.status == "gameover"
        assert session.state.error == "Database error. Your progress may not be saved."
        assert session.has_played_today()

    def test_invalid_word_sets_error(self, tmp_path):
        """Rejected words raise and leave a user message in the state."""
        session = make_session(tmp_path, dictionary=WordDictionary.from_words(["ZZZZZZZZ"]))

        async def scenario():
            await session.start("daily")
            for tile_id in bottom_pair(session):
                session.select(tile_id)
            await session.submit()

        with pytest.raises(GameError) as exc_info:
            asyncio.run(scenario())
        assert exc_info.value.type is ErrorType.INVALID_WORD
        assert session.state.error == "Invalid word. Please select a valid word."
        assert session.state.words_completed == []

    def test_trade_and_shuffle(self, tmp_path):
        """Trades are limited, shuffles are not."""
        session = make_session(tmp_path)
        asyncio.run(session.start("daily"))

        session.select(session.state.tiles[0].id)
        session.trade()
        assert session.state.trades_remaining == 0

        session.shuffle()
        session.shuffle()
        session.select(session.state.tiles[0].id)
        with pytest.raises(GameError) as exc_info:
            session.trade()
        assert exc_info.value.type is ErrorType.NO_TRADES_AVAILABLE
        assert session.state.error == "No trades available."


class TestCollaboratorFailures:
    """Test cases for collaborators failing outside the game rules."""

    def test_dictionary_failure_still_starts(self, tmp_path):
        """A word list that fails to load leaves the game playable and permissive."""

        async def broken_loader():
            raise RuntimeError("network down")

        session = make_session(tmp_path, dictionary=WordDictionary(loader=broken_loader))
        state = asyncio.run(session.start("daily"))
        assert state.status == "playing"
        assert session.dictionary.words == set()

    def test_corrupt_word_file_still_starts(self, tmp_path):
        """A word file holding numbers does not stop the game from starting."""
        path = tmp_path / "words.json"
        path.write_text("[1, 2, 3]")
        session = make_session(tmp_path, dictionary=WordDictionary.from_file(path))
        assert asyncio.run(session.start("daily")).status == "playing"

    def test_record_file_access_off_event_loop(self, tmp_path):
        """Daily record reads and writes run in worker threads."""
        session = make_session(tmp_path)
        session.records = ThreadRecordingStore(tmp_path / "records.json")

        asyncio.run(play_full_game(session))

        assert session.records.threads
        assert threading.get_ident() not in session.records.threads
