"""Shareable plain-text summary of a finished game."""

from typing import TYPE_CHECKING, Optional

from ..engine.models import BonusType

if TYPE_CHECKING:
    from ..game.state import GameState


BONUS_EMOJI = {
    "green": "🟩",
    "purple": "🟪",
    "red": "🟥",
    "yellow": "🟨",
    "blue": "🟦",
    "black": "⬛",
}
NORMAL_EMOJI = "⬜"


def format_share_date(date: str) -> str:
    """YYYY-MM-DD -> MM/DD/YYYY"""
    year, month, day = date.split("-")
    return f"{month}/{day}/{year}"


def bonus_to_emoji(bonus_type: Optional[BonusType]) -> str:
    if bonus_type is None:
        return NORMAL_EMOJI
    return BONUS_EMOJI.get(bonus_type, NORMAL_EMOJI)


def generate_share_text(state: "GameState") -> str:
    """
    Header with date and score, then one row of squares per completed word.

    Args:
        state: A GameState; an empty string is returned when it has no puzzle

    Returns:
        Text such as ``"LetterPerk - 01/15/2025\\nScore: 42\\n\\n🟩⬜⬜"``
    """
    if state.puzzle is None:
        return ""

    lines = [
        f"LetterPerk - {format_share_date(state.puzzle.date)}",
        f"Score: {state.total_score}",
        "",
    ]
    for word in state.words_completed:
        lines.append("".join(bonus_to_emoji(b) for b in word.tile_bonuses))
    return "\n".join(lines)
