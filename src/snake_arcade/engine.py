"""Step-based game controller composing snake, food, collision and scoring."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

import numpy as np

from snake_arcade.collision import border_collision, self_collision
from snake_arcade.config import GameConfig
from snake_arcade.food import FoodKind, FoodManager
from snake_arcade.grid import Grid
from snake_arcade.interfaces import Intent
from snake_arcade.scoring import ScoringEngine
from snake_arcade.session import GameSession, Phase
from snake_arcade.snake import Direction, Snake

logger = logging.getLogger(__name__)


class GameEvent(str, enum.Enum):
    """Notable things that happened during a step."""

    FOOD_EATEN = "food_eaten"
    BONUS_EATEN = "bonus_eaten"
    POISON_EATEN = "poison_eaten"
    POISON_SPAWNED = "poison_spawned"
    BONUS_SPAWNED = "bonus_spawned"
    POISON_EXPIRED = "poison_expired"
    BORDER_COLLISION = "border_collision"
    SELF_COLLISION = "self_collision"
    GAME_OVER = "game_over"
    RESTARTED = "restarted"
    QUIT = "quit"


_SPAWN_EVENTS: dict[FoodKind, GameEvent] = {
    FoodKind.POISON: GameEvent.POISON_SPAWNED,
    FoodKind.BONUS: GameEvent.BONUS_SPAWNED,
}


@dataclass
class StepResult:
    """Phase after a step and the events it produced, in order."""

    phase: Phase
    events: list[GameEvent] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "phase": self.phase.value,
            "events": [e.value for e in self.events],
        }


class GameController:
    """Single-player, step-based arcade controller.

    The controller owns the :class:`GameSession` and is the only component
    that mutates it. Each call to :meth:`step` runs at most one tick and
    never raises for in-game conditions: collisions and a negative score are
    phase transitions.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.config.validate()
        self.grid = Grid(self.config.grid_width, self.config.grid_height)
        self.rng = np.random.default_rng(seed)
        self.food = FoodManager(self.grid, self.config, rng=self.rng)
        self.scoring = ScoringEngine(self.config.scoring)
        self.quit_requested = False
        self.session = self._new_session()

    @property
    def phase(self) -> Phase:
        return self.session.phase

    def _new_session(self) -> GameSession:
        snake = Snake(
            max_length=self.grid.cell_count,
            length=self.config.initial_length,
        )
        session = GameSession(snake=snake, speed=self.config.initial_speed)
        session.regular.location = self.food.spawn_regular(snake)
        session.regular.active = True
        return session

    def set_heading(self, direction: Direction) -> bool:
        """Change heading while running. Reversals are ignored."""
        if self.session.phase != Phase.RUNNING:
            return False
        return self.session.snake.set_heading(direction)

    def restart(self) -> bool:
        """Start a fresh session. Only honoured after game over."""
        if self.session.phase != Phase.GAME_OVER:
            return False
        final_score = self.session.score
        self.session = self._new_session()
        logger.info("Game restarted (previous score %d).", final_score)
        return True

    def step(self, now: int, intent: Intent = Intent.NONE) -> StepResult:
        """Apply *intent* and advance the game by one tick.

        *now* is the monotonic clock reading in milliseconds, used for
        poison expiry.
        """
        result = StepResult(phase=self.session.phase)

        if intent == Intent.QUIT:
            self.quit_requested = True
            result.events.append(GameEvent.QUIT)
            return result

        if self.session.phase == Phase.GAME_OVER:
            if intent == Intent.RESTART and self.restart():
                result.events.append(GameEvent.RESTARTED)
            result.phase = self.session.phase
            return result

        direction = intent.direction
        if direction is not None:
            self.set_heading(direction)

        self._tick(now, result.events)
        result.phase = self.session.phase
        return result

    def _tick(self, now: int, events: list[GameEvent]) -> None:
        session = self.session
        snake = session.snake

        snake.advance()
        session.tick += 1

        # --- collisions ---
        if border_collision(snake, self.grid.width, self.grid.height):
            events.append(GameEvent.BORDER_COLLISION)
            self._game_over(events)
            return
        if self_collision(snake):
            events.append(GameEvent.SELF_COLLISION)
            self._game_over(events)
            return

        head = snake.head

        # --- regular food ---
        if head == session.regular.location:
            snake.grow()
            session.score = self.scoring.apply(FoodKind.REGULAR, session.score)
            spawned = self.food.on_regular_consumed(session, now)
            events.append(GameEvent.FOOD_EATEN)
            events.extend(_SPAWN_EVENTS[k] for k in spawned if k in _SPAWN_EVENTS)
            session.speed = max(
                self.config.min_speed, session.speed - self.config.speed_step,
            )

        # --- poison ---
        if session.poison.active and head == session.poison.location:
            session.score = self.scoring.apply(FoodKind.POISON, session.score)
            self.food.on_poison_consumed(session)
            events.append(GameEvent.POISON_EATEN)
            if session.score < 0:
                self._game_over(events)

        # --- bonus ---
        if session.bonus.active and head == session.bonus.location:
            session.score = self.scoring.apply(FoodKind.BONUS, session.score)
            self.food.on_bonus_consumed(session)
            events.append(GameEvent.BONUS_EATEN)

        if self.food.tick(session, now):
            events.append(GameEvent.POISON_EXPIRED)

    def _game_over(self, events: list[GameEvent]) -> None:
        self.session.phase = Phase.GAME_OVER
        events.append(GameEvent.GAME_OVER)
        logger.info(
            "Game over at tick %d with score %d.",
            self.session.tick, self.session.score,
        )

    def frame_interval_ms(self) -> int:
        """Delay the driver should wait before the next step."""
        if self.session.phase == Phase.RUNNING:
            return self.session.speed
        return self.config.game_over_interval_ms

    def snapshot(self) -> dict:
        """Return the full, serializable game state."""
        state = self.session.to_dict()
        state["grid"] = self.grid.to_dict()
        return state
