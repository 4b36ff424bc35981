"""Snake Arcade — deterministic simulation core."""

from snake_arcade.config import GameConfig, ScoreRules
from snake_arcade.engine import GameController, GameEvent, StepResult
from snake_arcade.food import FoodItem, FoodKind, FoodManager
from snake_arcade.grid import Grid
from snake_arcade.interfaces import Intent
from snake_arcade.scoring import ScoringEngine
from snake_arcade.session import GameSession, Phase
from snake_arcade.snake import Direction, Snake

__all__ = [
    "Direction",
    "FoodItem",
    "FoodKind",
    "FoodManager",
    "GameConfig",
    "GameController",
    "GameEvent",
    "GameSession",
    "Grid",
    "Intent",
    "Phase",
    "ScoreRules",
    "ScoringEngine",
    "Snake",
    "StepResult",
]
