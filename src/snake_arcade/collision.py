"""Stateless collision queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from snake_arcade.snake import Snake


def self_collision(snake: Snake) -> bool:
    """True iff the head overlaps any other body segment."""
    head = snake.body[0]
    return any(seg == head for seg in snake.body[1:])


def border_collision(snake: Snake, width: int, height: int) -> bool:
    """True iff the head has left the ``width`` × ``height`` playfield."""
    x, y = snake.body[0]
    return not (0 <= x < width and 0 <= y < height)
