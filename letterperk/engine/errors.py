"""Error taxonomy for the game and conversion of arbitrary failures into it."""

import logging
from enum import Enum
from typing import Optional


logger = logging.getLogger(__name__)


class ErrorType(str, Enum):
    """Kinds of failure the game reports."""
    # Game initialization
    INITIALIZATION_FAILED = "INITIALIZATION_FAILED"
    PUZZLE_LOAD_FAILED = "PUZZLE_LOAD_FAILED"

    # Gameplay
    INVALID_WORD = "INVALID_WORD"
    NO_TRADES_AVAILABLE = "NO_TRADES_AVAILABLE"
    NO_TILES_SELECTED = "NO_TILES_SELECTED"
    GAME_NOT_INITIALIZED = "GAME_NOT_INITIALIZED"

    # Storage / network
    DATABASE_ERROR = "DATABASE_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"

    UNKNOWN_ERROR = "UNKNOWN_ERROR"


USER_MESSAGES = {
    ErrorType.INITIALIZATION_FAILED: "Failed to initialize game. Please try again.",
    ErrorType.PUZZLE_LOAD_FAILED: "Failed to load puzzle. Please try again later.",
    ErrorType.INVALID_WORD: "Invalid word. Please select a valid word.",
    ErrorType.NO_TRADES_AVAILABLE: "No trades available.",
    ErrorType.NO_TILES_SELECTED: "Select tiles to trade.",
    ErrorType.GAME_NOT_INITIALIZED: "Game not initialized. Please start a new game.",
    ErrorType.DATABASE_ERROR: "Database error. Your progress may not be saved.",
    ErrorType.NETWORK_ERROR: "Network error. Please check your connection.",
}


class GameError(Exception):
    """
    A failure of a known kind.

    The message and original error are kept for diagnostics; players only
    ever see ``user_message``.
    """

    def __init__(
        self,
        type: ErrorType,
        message: str = "",
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message or type.value)
        self.type = type
        self.message = message or type.value
        self.original_error = original_error

    @property
    def user_message(self) -> str:
        """Short human-readable text for this kind of failure."""
        return USER_MESSAGES.get(self.type, "An unexpected error occurred.")

    def __repr__(self) -> str:
        return f"GameError({self.type.value}, {self.message!r})"


def handle_error(
    error: BaseException,
    default_type: ErrorType = ErrorType.UNKNOWN_ERROR,
) -> GameError:
    """Return ``error`` as a GameError, wrapping and logging foreign exceptions."""
    if isinstance(error, GameError):
        return error

    game_error = GameError(default_type, str(error), original_error=error)
    logger.error(f"[GameError] {game_error.type.value}: {game_error.message}", exc_info=error)
    return game_error


def get_user_message(
    error: BaseException,
    default_type: ErrorType = ErrorType.UNKNOWN_ERROR,
) -> str:
    """User-facing text for any exception."""
    return handle_error(error, default_type).user_message
