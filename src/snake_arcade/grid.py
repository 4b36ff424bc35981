"""Playfield bounds for the arcade game."""

from __future__ import annotations

import numpy as np

# A grid cell as (column, row).
Cell = tuple[int, int]


class Grid:
    """Fixed W×H playfield.

    Coordinates use (column, row) ordering: ``x`` grows to the right and
    ``y`` grows downwards, matching screen space divided into blocks.
    """

    def __init__(self, width: int = 35, height: int = 30) -> None:
        if width < 4 or height < 4:
            raise ValueError("Grid dimensions must be at least 4×4.")
        self.width = width
        self.height = height

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def random_cell(self, rng: np.random.Generator) -> Cell:
        """Draw a uniformly random cell."""
        x = int(rng.integers(self.width))
        y = int(rng.integers(self.height))
        return x, y

    def to_dict(self) -> dict:
        """Serialize grid dimensions to a dictionary."""
        return {"width": self.width, "height": self.height}
