"""
Renderer
========

Draws the world onto any Canvas. Reads world state only.
"""

from __future__ import annotations

import math
from typing import Optional

from flappy_bard.bard_core.canvas import Canvas
from flappy_bard.bard_core.config_loader import GameConfig
from flappy_bard.bard_core.world import World


START_PROMPT = "Press space or up arrow to begin"
DEATH_TITLE = "Ouch, that hurt!"
RETRY_PROMPT_TOUCH = "Tap to try again"
RETRY_PROMPT_KEYS = "Press 'r' to try again"


def draw(
    world: World,
    canvas: Canvas,
    touch_primary: bool = False,
    config: Optional[GameConfig] = None
) -> None:
    """
    Render one frame.

    Args:
        world: Session state (not modified).
        canvas: Target surface.
        touch_primary: Selects the touch wording of the retry prompt.
        config: Render configuration. Uses the world's config if None.
    """
    if config is None:
        config = world.config
    colors = config.render

    canvas.clear_rect(0, 0, canvas.width, canvas.height)

    canvas.set_fill_color(colors.background_color)
    canvas.fill_rect(0, 0, canvas.width, canvas.height)

    bird = world.bird
    canvas.set_fill_color(colors.bird_color)
    canvas.fill_rect(
        bird.x - math.floor(bird.width / 2),
        bird.y - math.floor(bird.height / 2),
        bird.width,
        bird.height
    )

    for pipe in world.pipes:
        canvas.set_fill_color(colors.pipe_passed_color if pipe.passed else colors.pipe_color)
        canvas.fill_rect(
            pipe.x - math.floor(pipe.width / 2),
            pipe.y - math.floor(pipe.height / 2),
            pipe.width,
            pipe.height
        )

    score_x, score_y = colors.score_position
    canvas.set_fill_color(colors.text_color)
    canvas.set_font(colors.font)
    canvas.fill_text(f"Score: {world.score}", score_x, score_y)

    if not world.started:
        canvas.fill_text(START_PROMPT, 25, 250)

    if world.dead:
        canvas.fill_text(DEATH_TITLE, 150, 230)
        if touch_primary:
            canvas.fill_text(RETRY_PROMPT_TOUCH, 150, 270)
        else:
            canvas.fill_text(RETRY_PROMPT_KEYS, 120, 270)
