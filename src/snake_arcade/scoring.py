"""Score accounting for food events."""

from __future__ import annotations

from snake_arcade.config import ScoreRules
from snake_arcade.food import FoodKind


class ScoringEngine:
    """Maps food consumption to score deltas.

    Scores are not floored; a negative result is left for the caller to
    act on.
    """

    def __init__(self, rules: ScoreRules | None = None) -> None:
        self.rules = rules if rules is not None else ScoreRules()

    def delta(self, kind: FoodKind) -> int:
        """Return the score change for eating one *kind* of food."""
        return {
            FoodKind.REGULAR: self.rules.regular,
            FoodKind.BONUS: self.rules.bonus,
            FoodKind.POISON: self.rules.poison,
        }[kind]

    def apply(self, kind: FoodKind, score: int) -> int:
        return score + self.delta(kind)
