"""
Tests for the pygame canvas backend.
"""

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from flappy_bard.bard_core import renderer
from flappy_bard.bard_core.config_loader import load_config
from flappy_bard.bard_core.render_pygame import PygameCanvas, parse_font
from flappy_bard.bard_core.world import World


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def canvas(config):
    pygame.init()
    surface = pygame.Surface((config.board.width, config.board.height))
    yield PygameCanvas(surface)
    pygame.quit()


class TestParseFont:

    def test_css_font(self):
        assert parse_font("30px Arial") == (30, "Arial")
        assert parse_font(" 12px  Comic Sans MS ") == (12, "Comic Sans MS")

    def test_bad_font(self):
        with pytest.raises(ValueError):
            parse_font("Arial 30")


class TestPygameCanvas:

    def test_size(self, canvas, config):
        assert canvas.width == config.board.width
        assert canvas.height == config.board.height

    def test_fill_rect(self, canvas):
        canvas.set_fill_color((10, 20, 30))
        canvas.fill_rect(5, 5, 10, 10)

        assert tuple(canvas.surface.get_at((7, 7)))[:3] == (10, 20, 30)
        assert tuple(canvas.surface.get_at((20, 20)))[:3] == (0, 0, 0)

    def test_draw_world(self, canvas, config):
        world = World(config=config, seed=1)

        renderer.draw(world, canvas)

        assert tuple(canvas.surface.get_at((200, 200)))[:3] == config.render.bird_color
