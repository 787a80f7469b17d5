"""
Tests for frame timing and the simulation step.
"""

import random

import pytest

from flappy_bard.bard_core import physics
from flappy_bard.bard_core.config_loader import load_config
from flappy_bard.bard_core.world import World


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def world(config):
    return World(config=config, seed=42)


@pytest.fixture
def running(world):
    world.begin_run()
    return world


def _state(world):
    data = world.get_render_data()
    data["travel_speed"] = world.travel_speed
    data["distance"] = world.distance
    data["pipe_count"] = len(world.pipes)
    data["dead"] = world.dead
    data["started"] = world.started
    return data


class TestUpdateClock:
    """Time bookkeeping."""

    def test_first_frame_has_zero_dt(self, world):
        assert physics.update_clock(world, 5000.0) == 0.0
        assert world.prev_timestamp_ms == 5000.0
        assert world.elapsed_s == 0.0

    def test_delta_in_seconds(self, world):
        physics.update_clock(world, 1000.0)
        dt = physics.update_clock(world, 1250.0)

        assert dt == pytest.approx(0.25)
        assert world.elapsed_s == pytest.approx(0.25)
        assert world.prev_timestamp_ms == 1250.0

    def test_runs_while_not_started(self, world):
        """Clock updates regardless of phase."""
        physics.update_clock(world, 0.0)
        physics.update_clock(world, 100.0)
        assert world.elapsed_s == pytest.approx(0.1)

        world.kill("ground")
        physics.update_clock(world, 300.0)
        assert world.elapsed_s == pytest.approx(0.2)


class TestStep:
    """Simulation step behavior."""

    def test_single_step_values(self, running):
        """Distance, ramp, semi-implicit Euler and pipe scroll in order."""
        pipe_x = running.pipes[0].x

        physics.step(running, 0.1)

        assert running.distance == pytest.approx(15.0)
        assert running.travel_speed == pytest.approx(150.0 + 0.0002 * 15.0 * 0.1)
        # Position uses the old velocity (0), then gravity is applied
        assert running.bird.y == pytest.approx(200.0)
        assert running.bird.velocity == pytest.approx(200.0)
        assert running.pipes[0].x == pytest.approx(pipe_x - running.travel_speed * 0.1)

    def test_position_uses_old_velocity(self, running):
        running.bird.velocity = -400.0

        physics.step(running, 0.1)

        assert running.bird.y == pytest.approx(160.0)
        assert running.bird.velocity == pytest.approx(-200.0)

    def test_zero_dt_is_noop(self, running):
        running.bird.velocity = -400.0
        before = _state(running)

        physics.step(running, 0.0)

        assert _state(running) == before

    def test_not_started_is_noop(self, world):
        before = _state(world)
        physics.step(world, 0.5)
        assert _state(world) == before

    def test_dead_is_noop(self, running):
        running.kill("pipe")
        before = _state(running)
        physics.step(running, 0.5)
        assert _state(running) == before

    def test_negative_dt_rejected(self, running):
        with pytest.raises(ValueError):
            physics.step(running, -0.01)

    def test_top_clamp(self, running):
        """Rising past the top snaps to floor(height/2) and stops."""
        running.bird.y = 30.0
        running.bird.velocity = -400.0

        physics.step(running, 0.1)

        assert running.bird.y == 25
        assert running.bird.velocity == 0.0

    def test_spawn_when_tail_crosses_middle(self, running, config):
        running.pipes[0].x = config.board.width / 2 + 1

        physics.step(running, 0.1)

        assert len(running.pipes) == 2
        assert running.pipes[1].x == config.board.width + config.pipes.spawn_offset

    def test_cull_head_off_screen(self, running):
        running.pipes[0].x = -40.0
        running.spawn_pipe()
        running.pipes[1].x = 300.0
        tail = running.pipes[1]

        physics.step(running, 0.1)

        assert running.pipes == [tail]


class TestStepInvariants:
    """Properties that hold across many random frames."""

    def test_invariants_over_long_run(self, running):
        rng = random.Random(0)
        for _ in range(3000):
            if rng.random() < 0.08:
                running.flap()
            speed, distance = running.travel_speed, running.distance

            physics.step(running, rng.uniform(0.0, 0.05))

            assert running.travel_speed >= speed
            assert running.distance >= distance
            assert running.bird.y >= running.bird.height / 2
            assert len(running.pipes) >= 1
            xs = [p.x for p in running.pipes]
            assert all(a < b for a, b in zip(xs, xs[1:]))

    def test_pipes_keep_coming(self, running):
        """A long run spawns many pipes but keeps only a handful alive."""
        seen = []
        for _ in range(2000):
            running.bird.y = 200.0
            physics.step(running, 1 / 60)
            for pipe in running.pipes:
                if not any(pipe is s for s in seen):
                    seen.append(pipe)
            assert len(running.pipes) <= 4
        assert len(seen) > 5
