"""
SQLAlchemy (async) implementations of the puzzle and result repositories.

Tables:
- game_seeds: one row per daily puzzle, unique on seed
- game_results: one row per finished game
"""

import logging
from datetime import datetime, timezone
from typing import List, Tuple

from pydantic import ValidationError
from sqlalchemy import JSON, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.schema import Column
from sqlalchemy.types import DateTime, Integer, String

from ..engine.generator import generate_game_configuration
from ..engine.models import GameConfiguration, GameMode, GameResult, LeaderboardEntry
from .repositories import GameResultRepository, PuzzleRepository, rank_unique_scores


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class GameSeed(Base):
    __tablename__ = "game_seeds"
    id = Column(Integer, primary_key=True, autoincrement=True)
    seed = Column(Integer, nullable=False, unique=True)
    puzzle_date = Column(String(10), nullable=False, index=True)
    configuration = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


class GameResultRow(Base):
    __tablename__ = "game_results"
    id = Column(Integer, primary_key=True, autoincrement=True)
    puzzle_date = Column(String(10), nullable=False, index=True)
    seed = Column(Integer, nullable=False)
    total_score = Column(Integer, nullable=False)
    word_count = Column(Integer, nullable=False)
    mode = Column(String(10), nullable=False)
    words = Column(JSON, nullable=False)
    duration_seconds = Column(Integer, nullable=True)
    started_at = Column(String, nullable=True)
    total_bonus_tiles_used = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


def create_engine(database_url: str) -> AsyncEngine:
    """Async engine for a URL such as ``sqlite+aiosqlite:///letterperk.sqlite3``."""
    return create_async_engine(url=database_url, echo=False)


async def init_models(engine: AsyncEngine) -> None:
    """Create the tables if they do not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


class SqlPuzzleRepository(PuzzleRepository):
    """Daily puzzles stored in ``game_seeds``."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._sessions = session_factory

    async def load_daily_puzzle(self, date: str, seed: int) -> GameConfiguration:
        try:
            async with self._sessions() as session:
                stmt = select(GameSeed).where(GameSeed.puzzle_date == date, GameSeed.seed == seed)
                row = (await session.execute(stmt)).scalars().first()
        except SQLAlchemyError as e:
            logger.error(f"Error loading daily puzzle {date} ({seed}), generating locally: {e}")
            return generate_game_configuration(seed)

        if row is not None:
            try:
                return GameConfiguration.model_validate(row.configuration)
            except ValidationError as e:
                logger.error(f"Stored puzzle {date} ({seed}) is invalid, generating locally: {e}")
                return generate_game_configuration(seed)

        configuration = generate_game_configuration(seed)
        await self.save_daily_puzzle(date, seed, configuration)
        return configuration

    async def save_daily_puzzle(self, date: str, seed: int, configuration: GameConfiguration) -> None:
        async with self._sessions() as session:
            try:
                session.add(GameSeed(
                    seed=seed,
                    puzzle_date=date,
                    configuration=configuration.model_dump(mode="json"),
                ))
                await session.commit()
            except IntegrityError:
                # Another writer stored this seed first
                await session.rollback()
                logger.debug(f"Puzzle for seed {seed} already stored")
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Error saving daily puzzle {date} ({seed}): {e}")


class SqlGameResultRepository(GameResultRepository):
    """Finished games stored in ``game_results``."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._sessions = session_factory

    async def log_game_result(self, result: GameResult) -> None:
        async with self._sessions() as session:
            try:
                session.add(GameResultRow(
                    puzzle_date=result.puzzle_date,
                    seed=result.seed,
                    total_score=result.total_score,
                    word_count=result.word_count,
                    mode=result.mode,
                    words=[w.model_dump(mode="json") for w in result.words],
                    duration_seconds=result.duration_seconds,
                    started_at=result.started_at,
                    total_bonus_tiles_used=result.total_bonus_tiles_used,
                ))
                await session.commit()
                logger.info(f"Logged {result.mode} result for {result.puzzle_date}: {result.total_score}")
            except SQLAlchemyError as e:
                await session.rollback()
                logger.error(f"Failed to log game result: {e}")

    async def get_leaderboard(self, mode: GameMode, date: str) -> List[LeaderboardEntry]:
        async with self._sessions() as session:
            try:
                stmt = (
                    select(GameResultRow)
                    .where(GameResultRow.mode == mode, GameResultRow.puzzle_date == date)
                    .order_by(GameResultRow.id)
                )
                rows = (await session.execute(stmt)).scalars().all()
            except SQLAlchemyError as e:
                logger.error(f"Failed to read leaderboard for {mode} {date}: {e}")
                return []

        ranked: List[Tuple[int, int, str]] = [
            (
                row.total_score,
                row.word_count,
                row.started_at or (row.created_at.isoformat() if row.created_at else ""),
            )
            for row in rows
        ]
        return rank_unique_scores(ranked)


def create_sql_repositories(database_url: str) -> Tuple[AsyncEngine, SqlPuzzleRepository, SqlGameResultRepository]:
    """Engine plus both repositories sharing one session factory. Call ``init_models`` before use."""
    engine = create_engine(database_url)
    sessions = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    return engine, SqlPuzzleRepository(sessions), SqlGameResultRepository(sessions)
