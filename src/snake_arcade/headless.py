"""Collaborators for running the engine without a window."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Iterable

import numpy as np

from snake_arcade.interfaces import Intent


class MonotonicClock:
    """Wall clock in integer milliseconds."""

    def now(self) -> int:
        return int(time.monotonic() * 1000)


class ManualClock:
    """Virtual clock advanced explicitly, for tests and simulations."""

    def __init__(self, start_ms: int = 0) -> None:
        self.current = start_ms

    def now(self) -> int:
        return self.current

    def advance(self, ms: int) -> None:
        self.current += ms

    def sleep(self, seconds: float) -> None:
        """Drop-in for ``time.sleep`` that moves virtual time instead."""
        self.advance(round(seconds * 1000))


class ScriptedInput:
    """Replays a fixed sequence of intents, then yields ``Intent.NONE``."""

    def __init__(self, intents: Iterable[Intent]) -> None:
        self._queue: deque[Intent] = deque(intents)

    def poll(self) -> Intent:
        return self._queue.popleft() if self._queue else Intent.NONE


_STEERING = [Intent.NONE, Intent.UP, Intent.DOWN, Intent.LEFT, Intent.RIGHT]


class RandomInput:
    """Random steering intents drawn from a NumPy RNG."""

    def __init__(self, rng: np.random.Generator | None = None) -> None:
        self.rng = rng if rng is not None else np.random.default_rng()

    def poll(self) -> Intent:
        return _STEERING[int(self.rng.integers(len(_STEERING)))]


class NullRenderer:
    def draw(self, snapshot: dict) -> None:
        pass


class RecordingRenderer:
    """Keeps every snapshot it is asked to draw."""

    def __init__(self) -> None:
        self.frames: list[dict] = []

    def draw(self, snapshot: dict) -> None:
        self.frames.append(snapshot)


class CountingAudio:
    def __init__(self) -> None:
        self.food_eaten_count = 0

    def food_eaten(self) -> None:
        self.food_eaten_count += 1
