"""Mutable per-game state owned by the controller."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from snake_arcade.food import FoodItem, FoodKind
from snake_arcade.snake import Snake


class Phase(str, enum.Enum):
    """Top-level state of a session."""

    RUNNING = "running"
    GAME_OVER = "game_over"


@dataclass
class GameSession:
    """Snake, food, score and pacing for one game."""

    snake: Snake
    speed: int
    score: int = 0
    consumed_since_spawn: int = 0
    phase: Phase = Phase.RUNNING
    tick: int = 0
    regular: FoodItem = field(
        default_factory=lambda: FoodItem(FoodKind.REGULAR),
    )
    bonus: FoodItem = field(default_factory=lambda: FoodItem(FoodKind.BONUS))
    poison: FoodItem = field(
        default_factory=lambda: FoodItem(FoodKind.POISON),
    )

    @property
    def foods(self) -> tuple[FoodItem, FoodItem, FoodItem]:
        return self.regular, self.bonus, self.poison

    def to_dict(self) -> dict:
        """Serialize the session to a JSON-friendly snapshot."""
        return {
            "tick": self.tick,
            "phase": self.phase.value,
            "score": self.score,
            "speed": self.speed,
            "consumed_since_spawn": self.consumed_since_spawn,
            "snake": self.snake.to_dict(),
            "food": {f.kind.value: f.to_dict() for f in self.foods},
        }
