"""
Pydantic models for the game engine.

This module contains the data models (tiles, configurations, score breakdowns,
results) shared by the engine, the scoring package and the services. The logic
lives in the modules that operate on these models.
"""

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, Field


# Type aliases
BonusType = Literal["green", "purple", "red", "yellow", "blue", "black"]
GameMode = Literal["daily", "casual"]
GameStatus = Literal["loading", "playing", "gameover"]


class Tile(BaseModel):
    """A tile on the grid. Identity is its id; row/col change on gravity and shuffle."""
    id: str
    letter: str = Field(..., pattern=r'^[A-Z]$')
    points: int = Field(..., ge=1)
    row: int  # may be negative while waiting for gravity to settle it
    col: int = Field(..., ge=0, le=2)
    bonus_type: Optional[BonusType] = None


class SequenceTile(BaseModel):
    """One entry of a column's deterministic draw order."""
    letter: str
    points: int
    bonus_type: Optional[BonusType] = None


class BonusConfig(BaseModel):
    """How many tiles of a bonus type are scattered into a puzzle."""
    type: BonusType
    min_count: int = Field(1, ge=0)
    max_count: int = Field(1, ge=0)


class GameEffect(BaseModel):
    """A puzzle-wide rule modifier carried by the configuration."""
    id: str
    type: Literal["point_modifier", "tile_manipulation", "score_modifier", "word_restriction"]
    timing: Literal["game_start", "word_formation", "word_submission", "after_word", "continuous"]
    name: str
    description: str = ""
    enabled: bool = False
    params: Dict[str, Any] = Field(default_factory=dict)


class GameConfiguration(BaseModel):
    """The full deterministic blueprint for one puzzle."""
    column_sequences: List[List[SequenceTile]]
    bonus_config: List[BonusConfig] = Field(default_factory=list)
    effects: List[GameEffect] = Field(default_factory=list)


class Puzzle(BaseModel):
    """Puzzle identity: the game day, its seed and the configuration in play."""
    date: str = Field(..., pattern=r'^\d{4}-\d{2}-\d{2}$')
    seed: int
    configuration: GameConfiguration


class BonusEntry(BaseModel):
    """A single applied bonus and the value it contributed."""
    type: BonusType
    value: int


class ScoreBreakdown(BaseModel):
    """Score of a word: base points, bonuses in application order, final total."""
    base_score: int = 0
    bonuses: List[BonusEntry] = Field(default_factory=list)
    final_score: int = 0


class WordState(BaseModel):
    """Word formed by the current selection, its validity and its score."""
    word: str = ""
    is_valid: bool = False
    score: ScoreBreakdown = Field(default_factory=ScoreBreakdown)


class CompletedWord(BaseModel):
    """A word that was submitted and scored."""
    word: str
    score: int
    bonuses_applied: List[BonusType] = Field(default_factory=list)
    tile_bonuses: List[Optional[BonusType]] = Field(default_factory=list)
    bonus_breakdown: List[BonusEntry] = Field(default_factory=list)


class GameSetup(BaseModel):
    """Everything needed to start playing a puzzle."""
    date: str
    seed: int
    configuration: GameConfiguration
    tiles: List[Tile]
    column_sequences: List[List[SequenceTile]]
    column_draw_indices: List[int]
    rng_state: int  # position of the seeded generator after bonus assignment


class GameResultWord(BaseModel):
    """Per-word entry of a logged game result."""
    word: str
    score: int
    index: int
    bonuses: List[BonusEntry] = Field(default_factory=list)
    bonus_tiles_count: int = 0


class GameResult(BaseModel):
    """A finished game as handed to the leaderboard collaborator."""
    puzzle_date: str
    seed: int
    total_score: int
    word_count: int
    mode: GameMode
    words: List[GameResultWord] = Field(default_factory=list)
    duration_seconds: Optional[int] = None
    started_at: Optional[str] = None
    total_bonus_tiles_used: Optional[int] = None


class LeaderboardEntry(BaseModel):
    """One row of the leaderboard."""
    total_score: int
    word_count: int
    created_at: str


class DailyGameRecord(BaseModel):
    """Local record that a daily puzzle was played."""
    score: int
    word_count: int
    played_at: datetime
    puzzle_date: str
