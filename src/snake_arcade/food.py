"""Food spawning and expiry logic."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from snake_arcade.grid import Cell, Grid

if TYPE_CHECKING:
    from snake_arcade.config import GameConfig
    from snake_arcade.session import GameSession
    from snake_arcade.snake import Snake

logger = logging.getLogger(__name__)


class FoodKind(str, enum.Enum):
    """The three food variants."""

    REGULAR = "regular"
    BONUS = "bonus"
    POISON = "poison"


@dataclass
class FoodItem:
    """A single food entity on the grid.

    ``spawned_at`` is only meaningful for poison, which expires after a
    fixed lifetime.
    """

    kind: FoodKind
    location: Cell = (0, 0)
    active: bool = False
    spawned_at: int = 0

    def to_dict(self) -> dict:
        return {
            "kind": self.kind.value,
            "location": list(self.location),
            "active": self.active,
        }


class FoodManager:
    """Places regular, bonus and poison food.

    Uses a shared NumPy RNG so placement is reproducible for a given seed.
    """

    def __init__(
        self,
        grid: Grid,
        config: GameConfig,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.grid = grid
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng()

    def free_cell(self, snake: Snake) -> Cell:
        """Draw a random cell, redrawing while it lies on the snake."""
        if len(set(snake.body)) >= self.grid.cell_count:
            logger.warning("No free cells left; food placed on the snake.")
            return self.grid.random_cell(self.rng)
        while True:
            cell = self.grid.random_cell(self.rng)
            if not snake.occupies(cell):
                return cell

    def spawn_regular(self, snake: Snake) -> Cell:
        """Return a fresh location for the regular food."""
        return self.free_cell(snake)

    def on_regular_consumed(
        self, session: GameSession, now: int,
    ) -> list[FoodKind]:
        """Relocate regular food and spawn poison/bonus on thresholds.

        The poison threshold is checked before the bonus threshold and both
        may fire on the same call. Returns the kinds that were (re)spawned.
        """
        spawned = [FoodKind.REGULAR]
        session.regular.location = self.spawn_regular(session.snake)
        session.regular.active = True
        session.consumed_since_spawn += 1
        counter = session.consumed_since_spawn

        poison = session.poison
        if (
            self.config.poison_enabled
            and counter >= self.config.poison_threshold
            and not poison.active
        ):
            poison.location = self.free_cell(session.snake)
            poison.active = True
            poison.spawned_at = now
            spawned.append(FoodKind.POISON)
            logger.debug("Poison spawned at %s (t=%d).", poison.location, now)

        if counter >= self.config.bonus_threshold:
            session.bonus.location = self.free_cell(session.snake)
            session.bonus.active = True
            session.consumed_since_spawn = 0
            spawned.append(FoodKind.BONUS)
            logger.debug("Bonus spawned at %s.", session.bonus.location)

        return spawned

    def tick(self, session: GameSession, now: int) -> bool:
        """Expire poison that outlived its lifetime. Returns True if expired."""
        poison = session.poison
        if poison.active and now - poison.spawned_at > self.config.poison_lifetime_ms:
            poison.active = False
            logger.debug("Poison at %s expired (t=%d).", poison.location, now)
            return True
        return False

    def on_bonus_consumed(self, session: GameSession) -> None:
        session.bonus.active = False

    def on_poison_consumed(self, session: GameSession) -> None:
        session.poison.active = False
