"""Collaborators around the core: dictionary, storage, daily records, sharing and configuration."""

from .dictionary import WordDictionary, json_file_loader
from .repositories import (
    LEADERBOARD_SIZE,
    PuzzleRepository,
    GameResultRepository,
    InMemoryPuzzleRepository,
    InMemoryGameResultRepository,
    rank_unique_scores,
)
from .sql import (
    SqlPuzzleRepository,
    SqlGameResultRepository,
    create_sql_repositories,
    init_models,
)
from .records import DailyRecordStore
from .share import generate_share_text
from .config import (
    AppConfig,
    Repositories,
    load_config,
    build_repositories,
    build_dictionary,
    build_record_store,
)

__all__ = [
    "WordDictionary",
    "json_file_loader",
    "LEADERBOARD_SIZE",
    "PuzzleRepository",
    "GameResultRepository",
    "InMemoryPuzzleRepository",
    "InMemoryGameResultRepository",
    "rank_unique_scores",
    "SqlPuzzleRepository",
    "SqlGameResultRepository",
    "create_sql_repositories",
    "init_models",
    "DailyRecordStore",
    "generate_share_text",
    "AppConfig",
    "Repositories",
    "load_config",
    "build_repositories",
    "build_dictionary",
    "build_record_store",
]
