"""Headless simulation of random-play games."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass

import numpy as np

from snake_arcade.config import GameConfig
from snake_arcade.driver import run
from snake_arcade.engine import GameController
from snake_arcade.headless import CountingAudio, ManualClock, NullRenderer, RandomInput

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Aggregate results from a batch of simulated games."""

    total_games: int
    total_frames: int
    food_eaten: int
    mean_score: float
    best_score: int
    wall_time_seconds: float
    frames_per_second: float

    def summary(self) -> str:
        return (
            f"Simulation: {self.total_games} games, "
            f"{self.total_frames} frames, {self.food_eaten} food eaten in "
            f"{self.wall_time_seconds:.2f}s | "
            f"mean score {self.mean_score:.1f}, best {self.best_score} | "
            f"{self.frames_per_second:.1f} frames/s"
        )


def simulate(
    *,
    num_games: int = 10,
    config: GameConfig | None = None,
    seed: int = 42,
    max_frames: int = 2_000,
) -> SimulationResult:
    """Play *num_games* games with random steering on virtual time.

    Each game runs until game over or *max_frames* frames.
    """
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    rng = np.random.default_rng(seed)

    scores: list[int] = []
    total_frames = 0
    food_eaten = 0
    start = time.perf_counter()

    for _ in range(num_games):
        controller = GameController(config, seed=int(rng.integers(2**31)))
        clock = ManualClock()
        audio = CountingAudio()
        total_frames += run(
            controller,
            RandomInput(rng),
            NullRenderer(),
            audio,
            clock,
            sleep=clock.sleep,
            max_frames=max_frames,
            stop_on_game_over=True,
        )
        food_eaten += audio.food_eaten_count
        scores.append(controller.session.score)

    elapsed = time.perf_counter() - start
    result = SimulationResult(
        total_games=num_games,
        total_frames=total_frames,
        food_eaten=food_eaten,
        mean_score=float(np.mean(scores)),
        best_score=max(scores),
        wall_time_seconds=elapsed,
        frames_per_second=total_frames / max(elapsed, 1e-9),
    )
    logger.info(result.summary())
    return result
