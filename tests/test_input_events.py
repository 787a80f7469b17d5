"""
Tests for input mapping and handling.
"""

import pytest

from flappy_bard.bard_core.config_loader import load_config
from flappy_bard.bard_core.input_events import (
    InputEvent,
    event_for_key,
    event_for_touch,
    handle_input,
)
from flappy_bard.bard_core.platform_info import detect_touch_primary, TOUCH_ENV_VAR
from flappy_bard.bard_core.world import World


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def world(config):
    return World(config=config, seed=42)


class TestKeyMapping:
    """Key names to events."""

    @pytest.mark.parametrize("key", ["up", "space", "UP", "Space"])
    def test_primary_keys(self, key):
        assert event_for_key(key) is InputEvent.PRIMARY_ACTION

    def test_restart_key(self):
        assert event_for_key("r") is InputEvent.RESTART

    @pytest.mark.parametrize("key", ["down", "x", "return", ""])
    def test_unknown_keys_ignored(self, key):
        assert event_for_key(key) is None

    def test_touch_depends_on_phase(self, world):
        assert event_for_touch(world) is InputEvent.PRIMARY_ACTION
        world.kill("ground")
        assert event_for_touch(world) is InputEvent.RESTART


class TestHandleInput:
    """Applying events to the world."""

    def test_primary_action_flaps_and_starts(self, world, config):
        assert handle_input(world, InputEvent.PRIMARY_ACTION) is True
        assert world.bird.velocity == config.bird.flap_velocity
        assert world.started is True

        # Idempotent with respect to started
        world.bird.velocity = 120.0
        handle_input(world, InputEvent.PRIMARY_ACTION)
        assert world.started is True
        assert world.bird.velocity == config.bird.flap_velocity

    def test_primary_action_ignored_while_dead(self, world):
        world.kill("pipe")
        world.bird.velocity = 321.0

        assert handle_input(world, InputEvent.PRIMARY_ACTION) is False
        assert world.bird.velocity == 321.0
        assert world.started is False
        assert world.dead is True

    def test_restart_while_dead_resets(self, world):
        handle_input(world, InputEvent.PRIMARY_ACTION)
        world.score = 5
        world.bird.y = 500.0
        world.spawn_pipe()
        world.kill("ground")

        assert handle_input(world, InputEvent.RESTART) is True

        assert world.dead is False
        assert world.started is False
        assert world.score == 0
        assert len(world.pipes) == 1
        assert (world.bird.x, world.bird.y) == (200, 200)
        assert world.bird.velocity == 0
        assert world.prev_timestamp_ms is None

    def test_restart_ignored_while_alive(self, world):
        handle_input(world, InputEvent.PRIMARY_ACTION)
        world.score = 3

        assert handle_input(world, InputEvent.RESTART) is False
        assert world.score == 3
        assert world.started is True

    def test_none_is_ignored(self, world):
        assert handle_input(world, None) is False
        assert world.started is False

    def test_touch_round_trip(self, world):
        """A single touch channel flaps while alive and restarts when dead."""
        handle_input(world, event_for_touch(world))
        assert world.started is True

        world.kill("pipe")
        handle_input(world, event_for_touch(world))
        assert world.dead is False
        assert world.started is False


class TestTouchDetection:
    """Host classification for the retry prompt."""

    def test_desktop_platforms(self):
        assert detect_touch_primary("linux", environ={}) is False
        assert detect_touch_primary("win32", environ={}) is False

    def test_mobile_platforms(self):
        assert detect_touch_primary("android", environ={}) is True
        assert detect_touch_primary("ios", environ={}) is True

    def test_env_override(self):
        assert detect_touch_primary("linux", environ={TOUCH_ENV_VAR: "1"}) is True
        assert detect_touch_primary("android", environ={TOUCH_ENV_VAR: "no"}) is False
        assert detect_touch_primary("android", environ={TOUCH_ENV_VAR: " "}) is True
