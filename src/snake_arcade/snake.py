"""Snake body and movement logic."""

from __future__ import annotations

import enum

from snake_arcade.grid import Cell


class Direction(enum.Enum):
    """Cardinal headings with (dx, dy) values in screen space."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        dx, dy = self.value
        return Direction((-dx, -dy))


class Snake:
    """A snake represented as an ordered list of (x, y) body cells.

    The head is ``body[0]``; the tail is ``body[-1]``. The body never holds
    more than ``max_length`` cells.
    """

    def __init__(
        self,
        max_length: int,
        length: int = 2,
        heading: Direction = Direction.RIGHT,
    ) -> None:
        if length < 2:
            raise ValueError("Snake length must be at least 2.")
        if length > max_length:
            raise ValueError("Snake length cannot exceed max_length.")
        self.max_length = max_length
        # Laid out along row 0 with the head at the far end.
        self.body: list[Cell] = [(length - i - 1, 0) for i in range(length)]
        self.heading = heading
        self._vacated: Cell | None = None

    @property
    def head(self) -> Cell:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def length(self) -> int:
        return len(self.body)

    def set_heading(self, direction: Direction) -> bool:
        """Change heading, ignoring 180° reversals.

        Returns True if the heading was accepted.
        """
        if direction == self.heading.opposite:
            return False
        self.heading = direction
        return True

    def advance(self) -> Cell:
        """Move the snake one cell along its heading.

        Each segment takes the previous position of the one ahead of it.
        Returns the vacated tail cell.
        """
        vacated = self.body[-1]
        for i in range(len(self.body) - 1, 0, -1):
            self.body[i] = self.body[i - 1]
        x, y = self.body[0]
        dx, dy = self.heading.value
        self.body[0] = (x + dx, y + dy)
        self._vacated = vacated
        return vacated

    def grow(self) -> bool:
        """Add one segment at the tail.

        The new segment occupies the cell vacated by the last
        :meth:`advance`, so the old tail position is kept one extra tick.
        Returns False once the snake is ``max_length`` long.
        """
        if len(self.body) >= self.max_length:
            return False
        tail = self._vacated if self._vacated is not None else self.body[-1]
        self.body.append(tail)
        self._vacated = None
        return True

    def occupies(self, cell: Cell) -> bool:
        """Check whether the snake occupies a given cell."""
        return cell in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {
            "body": [list(seg) for seg in self.body],
            "heading": list(self.heading.value),
            "length": self.length,
        }
