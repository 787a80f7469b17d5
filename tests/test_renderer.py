"""
Tests for the renderer and the numpy canvas.
"""

import numpy as np
import pytest

from flappy_bard.bard_core import renderer
from flappy_bard.bard_core.canvas import ArrayCanvas
from flappy_bard.bard_core.config_loader import load_config
from flappy_bard.bard_core.world import World


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def world(config):
    return World(config=config, seed=42)


@pytest.fixture
def canvas(config):
    return ArrayCanvas(config.board.width, config.board.height)


class TestArrayCanvas:
    """Rectangle rasterization and text recording."""

    def test_fill_rect_clips(self):
        canvas = ArrayCanvas(20, 10)
        canvas.set_fill_color((255, 0, 0))
        canvas.fill_rect(15, 5, 100, 100)

        assert canvas.pixel(19, 9) == (255, 0, 0)
        assert canvas.pixel(14, 9) == (0, 0, 0)
        assert canvas.image.shape == (10, 20, 3)
        assert canvas.image.dtype == np.uint8

    def test_fully_offscreen_rect(self):
        canvas = ArrayCanvas(20, 10)
        canvas.set_fill_color((255, 0, 0))
        canvas.fill_rect(-50, -50, 10, 10)
        assert not canvas.image.any()

    def test_full_clear_resets_text(self):
        canvas = ArrayCanvas(20, 10)
        canvas.fill_text("hello", 1, 1)
        assert canvas.texts() == ["hello"]

        canvas.clear_rect(0, 0, 20, 10)
        assert canvas.texts() == []


class TestDraw:
    """Frame contents per phase."""

    def test_start_screen(self, world, canvas, config):
        renderer.draw(world, canvas)

        assert canvas.texts() == ["Score: 0", renderer.START_PROMPT]
        assert canvas.pixel(200, 200) == config.render.bird_color
        assert canvas.pixel(5, 600) == config.render.background_color

    def test_text_style(self, world, canvas, config):
        renderer.draw(world, canvas)

        score = canvas.text_log[0]
        assert (score.x, score.y) == (10, 30)
        assert score.color == config.render.text_color
        assert score.font == "30px Arial"

    def test_pipe_colors(self, world, canvas, config):
        pipe = world.pipes[0]
        pipe.x, pipe.y = 400.0, 400.0

        renderer.draw(world, canvas)
        assert canvas.pixel(400, 400) == config.render.pipe_color

        pipe.passed = True
        renderer.draw(world, canvas)
        assert canvas.pixel(400, 400) == config.render.pipe_passed_color

    def test_running_shows_only_score(self, world, canvas):
        world.begin_run()
        world.score = 12

        renderer.draw(world, canvas)

        assert canvas.texts() == ["Score: 12"]

    def test_death_prompt_keys(self, world, canvas):
        world.begin_run()
        world.kill("pipe")

        renderer.draw(world, canvas, touch_primary=False)

        assert canvas.texts() == [
            "Score: 0", renderer.DEATH_TITLE, renderer.RETRY_PROMPT_KEYS
        ]
        assert (canvas.text_log[2].x, canvas.text_log[2].y) == (120, 270)

    def test_death_prompt_touch(self, world, canvas):
        world.begin_run()
        world.kill("pipe")

        renderer.draw(world, canvas, touch_primary=True)

        assert canvas.texts()[-1] == renderer.RETRY_PROMPT_TOUCH
        assert (canvas.text_log[-1].x, canvas.text_log[-1].y) == (150, 270)

    def test_draw_does_not_mutate(self, world, canvas):
        world.begin_run()
        world.spawn_pipe()
        world.pipes[0].passed = True
        before = world.get_render_data()

        renderer.draw(world, canvas)

        assert world.get_render_data() == before
