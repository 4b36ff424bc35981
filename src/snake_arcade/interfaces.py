"""Contracts for the collaborators that surround the engine."""

from __future__ import annotations

import enum
from typing import Protocol

from snake_arcade.snake import Direction


class Intent(str, enum.Enum):
    """A discrete player intent produced by one input poll."""

    NONE = "none"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    RESTART = "restart"
    QUIT = "quit"

    @property
    def direction(self) -> Direction | None:
        """The heading this intent asks for, if it is a movement intent."""
        return _INTENT_DIRECTIONS.get(self)


_INTENT_DIRECTIONS: dict[Intent, Direction] = {
    Intent.UP: Direction.UP,
    Intent.DOWN: Direction.DOWN,
    Intent.LEFT: Direction.LEFT,
    Intent.RIGHT: Direction.RIGHT,
}


class InputSource(Protocol):
    def poll(self) -> Intent: ...


class Clock(Protocol):
    def now(self) -> int:
        """Monotonic time in milliseconds."""
        ...


class Renderer(Protocol):
    def draw(self, snapshot: dict) -> None: ...


class AudioOutput(Protocol):
    def food_eaten(self) -> None: ...
