"""
Per-type bonus rules.

Each bonus type has one strategy. A strategy looks at a single bonus tile in
the context of the whole selection and either contributes a result or nothing.
"""

from abc import ABC, abstractmethod
from typing import List, NamedTuple, Optional

from ..engine.constants import (
    BLUE_BONUS_VALUE,
    GREEN_BONUS_VALUE,
    PURPLE_BONUS_MIN_LENGTH,
    RED_BONUS_MAX_LENGTH,
    RED_BONUS_VALUE,
)
from ..engine.models import BonusType, Tile


class BonusContext(NamedTuple):
    """What a strategy can see while scoring one bonus tile."""
    word: str
    selected_tiles: List[Tile]
    tile_index: int
    base_score: int
    current_score: int


class BonusResult(NamedTuple):
    """Contribution of one bonus tile."""
    value: int
    is_multiplicative: bool = False


class BonusStrategy(ABC):
    """Scoring rule for one bonus type."""

    type: BonusType

    @abstractmethod
    def calculate(self, context: BonusContext) -> Optional[BonusResult]:
        """Return the bonus for ``context.tile_index``, or None if it does not apply."""


class GreenBonusStrategy(BonusStrategy):
    """+2 for every green tile."""

    type: BonusType = "green"

    def calculate(self, context: BonusContext) -> Optional[BonusResult]:
        return BonusResult(value=GREEN_BONUS_VALUE)


class RedBonusStrategy(BonusStrategy):
    """+10 per red tile when the word is short."""

    type: BonusType = "red"

    def calculate(self, context: BonusContext) -> Optional[BonusResult]:
        if len(context.word) <= RED_BONUS_MAX_LENGTH:
            return BonusResult(value=RED_BONUS_VALUE)
        return None


class BlueBonusStrategy(BonusStrategy):
    """+5 for a blue tile at either end of the selection."""

    type: BonusType = "blue"

    def calculate(self, context: BonusContext) -> Optional[BonusResult]:
        last_index = len(context.selected_tiles) - 1
        if context.tile_index in (0, last_index):
            return BonusResult(value=BLUE_BONUS_VALUE)
        return None


class YellowBonusStrategy(BonusStrategy):
    """
    Square of the number of yellow tiles used.

    Counted once per word: only the first yellow tile in the selection
    reports the value, later yellow tiles contribute nothing.
    """

    type: BonusType = "yellow"

    def calculate(self, context: BonusContext) -> Optional[BonusResult]:
        tiles = context.selected_tiles
        if tiles[context.tile_index].bonus_type != "yellow":
            return None
        if any(t.bonus_type == "yellow" for t in tiles[:context.tile_index]):
            return None

        yellow_count = sum(1 for t in tiles if t.bonus_type == "yellow")
        return BonusResult(value=yellow_count * yellow_count)


class PurpleBonusStrategy(BonusStrategy):
    """
    Doubles the additive subtotal of long words.

    Multiplicative: the calculator applies it once, after every additive
    bonus, however many purple tiles are selected.
    """

    type: BonusType = "purple"

    def calculate(self, context: BonusContext) -> Optional[BonusResult]:
        if len(context.word) >= PURPLE_BONUS_MIN_LENGTH:
            return BonusResult(value=context.current_score, is_multiplicative=True)
        return None


class BlackBonusStrategy(BonusStrategy):
    """No score effect; each black tile used grants a trade in the game state."""

    type: BonusType = "black"

    def calculate(self, context: BonusContext) -> Optional[BonusResult]:
        return None


DEFAULT_STRATEGIES: List[BonusStrategy] = [
    GreenBonusStrategy(),
    YellowBonusStrategy(),
    RedBonusStrategy(),
    BlueBonusStrategy(),
    PurpleBonusStrategy(),
    BlackBonusStrategy(),
]
