"""Tests for the frame loop and headless collaborators."""

import numpy as np

from snake_arcade.driver import run
from snake_arcade.engine import GameController
from snake_arcade.headless import (
    CountingAudio,
    ManualClock,
    MonotonicClock,
    NullRenderer,
    RandomInput,
    RecordingRenderer,
    ScriptedInput,
)
from snake_arcade.interfaces import Intent
from snake_arcade.session import Phase

FAR = (30, 25)


def _controller():
    controller = GameController(seed=0)
    controller.session.regular.location = FAR
    return controller


class TestHeadlessCollaborators:
    def test_manual_clock(self):
        clock = ManualClock(start_ms=10)
        clock.advance(5)
        clock.sleep(0.2)
        assert clock.now() == 215

    def test_monotonic_clock_is_nondecreasing(self):
        clock = MonotonicClock()
        first = clock.now()
        assert clock.now() >= first

    def test_scripted_input(self):
        source = ScriptedInput([Intent.UP, Intent.LEFT])
        assert source.poll() == Intent.UP
        assert source.poll() == Intent.LEFT
        assert source.poll() == Intent.NONE

    def test_random_input_only_steers(self):
        source = RandomInput(np.random.default_rng(0))
        seen = {source.poll() for _ in range(200)}
        assert Intent.QUIT not in seen
        assert Intent.RESTART not in seen
        assert Intent.UP in seen

    def test_intent_direction(self):
        assert Intent.UP.direction is not None
        assert Intent.RESTART.direction is None
        assert Intent.NONE.direction is None


class TestRunLoop:
    def test_quit_stops_loop(self):
        controller = _controller()
        clock = ManualClock()
        renderer = RecordingRenderer()
        frames = run(
            controller,
            ScriptedInput([Intent.NONE, Intent.NONE, Intent.QUIT]),
            renderer,
            CountingAudio(),
            clock,
            sleep=clock.sleep,
        )
        assert frames == 2
        assert len(renderer.frames) == 2
        assert controller.quit_requested

    def test_sleeps_for_current_speed(self):
        controller = _controller()
        clock = ManualClock()
        run(
            controller, ScriptedInput([]), NullRenderer(), CountingAudio(),
            clock, sleep=clock.sleep, max_frames=3,
        )
        assert clock.now() == 3 * 200

    def test_game_over_uses_longer_interval(self):
        controller = _controller()
        clock = ManualClock()
        run(
            controller, ScriptedInput([Intent.UP]), NullRenderer(),
            CountingAudio(), clock, sleep=clock.sleep, max_frames=3,
        )
        assert controller.phase == Phase.GAME_OVER
        assert clock.now() == 3 * 300

    def test_stop_on_game_over(self):
        controller = _controller()
        clock = ManualClock()
        frames = run(
            controller, ScriptedInput([Intent.UP]), NullRenderer(),
            CountingAudio(), clock, sleep=clock.sleep, stop_on_game_over=True,
        )
        assert frames == 1

    def test_restart_through_loop(self):
        controller = _controller()
        clock = ManualClock()
        renderer = RecordingRenderer()
        run(
            controller,
            ScriptedInput([Intent.UP, Intent.RESTART]),
            renderer,
            CountingAudio(),
            clock,
            sleep=clock.sleep,
            max_frames=2,
        )
        assert [f["phase"] for f in renderer.frames] == ["game_over", "running"]

    def test_audio_notified_on_food(self):
        controller = _controller()
        controller.session.regular.location = (2, 0)
        clock = ManualClock()
        audio = CountingAudio()
        run(
            controller, ScriptedInput([]), NullRenderer(), audio, clock,
            sleep=clock.sleep, max_frames=1,
        )
        assert audio.food_eaten_count == 1

    def test_poison_expires_on_virtual_time(self):
        controller = _controller()
        session = controller.session
        session.poison.active = True
        session.poison.location = (20, 20)
        session.poison.spawned_at = 0
        clock = ManualClock()
        # Frames at t=0, 200, ..., 4000 keep it; t=4200 expires it.
        run(
            controller,
            ScriptedInput([Intent.DOWN]),
            NullRenderer(),
            CountingAudio(),
            clock,
            sleep=clock.sleep,
            max_frames=21,
        )
        assert session.poison.active
        run(
            controller, ScriptedInput([]), NullRenderer(), CountingAudio(),
            clock, sleep=clock.sleep, max_frames=1,
        )
        assert not session.poison.active
