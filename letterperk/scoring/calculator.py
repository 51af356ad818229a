"""Word scoring: base points plus bonuses composed in a fixed order."""

from typing import Dict, Iterable, List, Optional, Sequence, get_args

from ..engine.constants import PURPLE_BONUS_MULTIPLIER
from ..engine.models import BonusEntry, BonusType, ScoreBreakdown, Tile
from .strategies import DEFAULT_STRATEGIES, BonusContext, BonusStrategy


class BonusCalculator:
    """
    Scores words by dispatching each bonus tile to its type's strategy.

    Strategies are kept in a table keyed by bonus type. Adding a bonus type
    means registering one more strategy; existing strategies are untouched.
    """

    def __init__(self, strategies: Optional[Iterable[BonusStrategy]] = None):
        self.strategies: Dict[str, BonusStrategy] = {}
        for strategy in strategies if strategies is not None else DEFAULT_STRATEGIES:
            self.register_strategy(strategy)

    def register_strategy(self, strategy: BonusStrategy) -> None:
        """Register (or replace) the strategy for ``strategy.type``."""
        self.strategies[strategy.type] = strategy

    @property
    def missing_types(self) -> List[str]:
        """Bonus types with no registered strategy."""
        return [t for t in get_args(BonusType) if t not in self.strategies]

    def calculate_score(self, word: str, selected_tiles: Sequence[Tile]) -> ScoreBreakdown:
        """
        Score a word formed by ``selected_tiles``.

        Additive bonuses are applied tile by tile in selection order. The
        multiplicative purple bonus is applied last, once, to the additive
        subtotal; its breakdown entry records that subtotal.

        Args:
            word: The submitted word (length drives the red and purple rules)
            selected_tiles: Tiles in selection order

        Returns:
            ScoreBreakdown with base score, applied bonuses and final score
        """
        tiles = list(selected_tiles)
        base_score = sum(tile.points for tile in tiles)
        bonuses: List[BonusEntry] = []
        current_score = base_score
        multiplied = False

        for index, tile in enumerate(tiles):
            if tile.bonus_type is None:
                continue
            strategy = self.strategies.get(tile.bonus_type)
            if strategy is None:
                continue

            result = strategy.calculate(BonusContext(
                word=word,
                selected_tiles=tiles,
                tile_index=index,
                base_score=base_score,
                current_score=current_score,
            ))
            if result is None:
                continue
            if result.is_multiplicative:
                multiplied = True
            else:
                bonuses.append(BonusEntry(type=tile.bonus_type, value=result.value))
                current_score += result.value

        if multiplied:
            bonuses.append(BonusEntry(type="purple", value=current_score))
            current_score *= PURPLE_BONUS_MULTIPLIER

        return ScoreBreakdown(
            base_score=base_score,
            bonuses=bonuses,
            final_score=current_score,
        )


def calculate_score(
    word: str,
    selected_tiles: Sequence[Tile],
    calculator: Optional[BonusCalculator] = None,
) -> ScoreBreakdown:
    """Score a word with ``calculator`` or the default strategy set."""
    return (calculator or BonusCalculator()).calculate_score(word, selected_tiles)
