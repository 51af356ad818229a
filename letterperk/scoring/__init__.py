"""Bonus scoring for submitted words."""

from .strategies import (
    BonusContext,
    BonusResult,
    BonusStrategy,
    GreenBonusStrategy,
    RedBonusStrategy,
    BlueBonusStrategy,
    YellowBonusStrategy,
    PurpleBonusStrategy,
    BlackBonusStrategy,
    DEFAULT_STRATEGIES,
)
from .calculator import BonusCalculator, calculate_score

__all__ = [
    "BonusContext",
    "BonusResult",
    "BonusStrategy",
    "GreenBonusStrategy",
    "RedBonusStrategy",
    "BlueBonusStrategy",
    "YellowBonusStrategy",
    "PurpleBonusStrategy",
    "BlackBonusStrategy",
    "DEFAULT_STRATEGIES",
    "BonusCalculator",
    "calculate_score",
]
