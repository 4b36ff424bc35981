"""Game configuration for the arcade engine."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreRules:
    """Score deltas applied when each food kind is eaten."""

    regular: int = 10
    bonus: int = 50
    poison: int = -10

    @classmethod
    def classic(cls) -> ScoreRules:
        """One point per regular food, as in the poison-free game."""
        return cls(regular=1)


@dataclass(frozen=True)
class GameConfig:
    """Full game configuration.

    Screen dimensions are in pixels; the playfield is divided into square
    blocks of ``block_size`` pixels. All timings are in milliseconds.
    """

    # Playfield
    screen_width: int = 700
    screen_height: int = 600
    block_size: int = 20
    initial_length: int = 2

    # Pacing
    initial_speed: int = 200
    min_speed: int = 50
    speed_step: int = 5
    game_over_interval_ms: int = 300

    # Food
    poison_enabled: bool = True
    poison_threshold: int = 4
    bonus_threshold: int = 5
    poison_lifetime_ms: int = 4000

    # Scoring
    scoring: ScoreRules = field(default_factory=ScoreRules)

    @property
    def grid_width(self) -> int:
        return self.screen_width // self.block_size

    @property
    def grid_height(self) -> int:
        return self.screen_height // self.block_size

    def validate(self) -> None:
        """Raise ``ValueError`` if the configuration cannot be played."""
        if self.block_size < 1:
            raise ValueError("block_size must be at least 1.")
        if self.grid_width < 4 or self.grid_height < 4:
            raise ValueError("Grid dimensions must be at least 4×4.")
        if self.initial_length < 2 or self.initial_length > self.grid_width:
            raise ValueError(
                "initial_length must be between 2 and the grid width.",
            )
        if self.min_speed < 1 or self.speed_step < 0:
            raise ValueError("Speeds must be positive.")
        if self.min_speed > self.initial_speed:
            raise ValueError("min_speed must not exceed initial_speed.")
        if self.game_over_interval_ms < 1:
            raise ValueError("game_over_interval_ms must be positive.")
        if self.poison_threshold < 1 or self.bonus_threshold < 1:
            raise ValueError("Food thresholds must be at least 1.")
        if self.poison_lifetime_ms < 0:
            raise ValueError("poison_lifetime_ms must be >= 0.")

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        data = dict(raw)
        scoring_data = data.pop("scoring", {})
        data["scoring"] = ScoreRules(**scoring_data)
        return cls(**data)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
