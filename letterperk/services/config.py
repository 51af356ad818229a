"""Application configuration and explicit construction of storage collaborators."""

from pathlib import Path
from typing import Literal, NamedTuple, Optional

import yaml
from pydantic import BaseModel
from sqlalchemy.ext.asyncio import AsyncEngine

from ..engine.models import GameMode
from .dictionary import WordDictionary
from .records import DailyRecordStore
from .repositories import (
    GameResultRepository,
    InMemoryGameResultRepository,
    InMemoryPuzzleRepository,
    PuzzleRepository,
)
from .sql import create_sql_repositories, init_models


class AppConfig(BaseModel):
    """Configuration for a game client."""
    database_url: Optional[str] = None  # None keeps puzzles and results in memory
    dictionary_path: Optional[str] = None
    records_path: str = ".letterperk/daily_records.json"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    mode: GameMode = "daily"


def load_config(config_path: str) -> AppConfig:
    """Load application configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f)

    return AppConfig(**(data or {}))


class Repositories(NamedTuple):
    puzzles: PuzzleRepository
    results: GameResultRepository
    engine: Optional[AsyncEngine] = None


async def build_repositories(config: AppConfig) -> Repositories:
    """
    Puzzle and result repositories for ``config``.

    With a ``database_url`` the SQL repositories are used and their tables are
    created; otherwise both live in memory. Callers owning an engine should
    ``await engine.dispose()`` when done.
    """
    if config.database_url is None:
        return Repositories(InMemoryPuzzleRepository(), InMemoryGameResultRepository())

    engine, puzzles, results = create_sql_repositories(config.database_url)
    await init_models(engine)
    return Repositories(puzzles, results, engine)


def build_dictionary(config: AppConfig) -> WordDictionary:
    if config.dictionary_path is None:
        return WordDictionary()
    return WordDictionary.from_file(config.dictionary_path)


def build_record_store(config: AppConfig) -> DailyRecordStore:
    return DailyRecordStore(config.records_path)
