"""Frame loop wiring the controller to its collaborators."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

from snake_arcade.engine import GameController, GameEvent
from snake_arcade.interfaces import AudioOutput, Clock, InputSource, Renderer
from snake_arcade.session import Phase

logger = logging.getLogger(__name__)


def run(
    controller: GameController,
    input_source: InputSource,
    renderer: Renderer,
    audio: AudioOutput,
    clock: Clock,
    *,
    sleep: Callable[[float], None] = time.sleep,
    max_frames: int | None = None,
    stop_on_game_over: bool = False,
) -> int:
    """Drive *controller* until quit, returning the number of frames run.

    Each frame polls one intent, steps the controller, hands the snapshot to
    the renderer and then sleeps for the controller's frame interval.
    """
    frames = 0
    while max_frames is None or frames < max_frames:
        result = controller.step(clock.now(), input_source.poll())
        if controller.quit_requested:
            logger.info("Quit requested after %d frames.", frames)
            break
        frames += 1

        renderer.draw(controller.snapshot())
        if GameEvent.FOOD_EATEN in result.events:
            audio.food_eaten()

        if stop_on_game_over and result.phase == Phase.GAME_OVER:
            break
        sleep(controller.frame_interval_ms() / 1000.0)
    return frames
