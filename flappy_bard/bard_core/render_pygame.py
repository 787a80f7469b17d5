"""
Pygame Backend
==============

Canvas and frame scheduler backed by pygame, used for the interactive
window (tools/play_human.py) and the "human" render mode of the
Gymnasium environment.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from flappy_bard.bard_core.canvas import Color
from flappy_bard.bard_core.frame_driver import FrameCallback


_FONT_RE = re.compile(r"^\s*(\d+)px\s+(.+?)\s*$")


def parse_font(font: str) -> Tuple[int, str]:
    """
    Parse a CSS-like font string such as "30px Arial".

    Returns:
        (size_px, family) tuple.

    Raises:
        ValueError: If the string is not "<size>px <family>".
    """
    match = _FONT_RE.match(font)
    if match is None:
        raise ValueError(f"Font must look like '30px Arial', got {font!r}")
    return int(match.group(1)), match.group(2)


class PygameCanvas:
    """
    Canvas drawing onto a pygame Surface.

    fill_text places the text baseline at y, matching the browser canvas.
    """

    def __init__(self, surface: "pygame.Surface"):
        """
        Initialize canvas.

        Args:
            surface: Target surface (usually the display surface).
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameCanvas")

        if not pygame.font.get_init():
            pygame.font.init()

        self._surface = surface
        self._fill_color: Color = (0, 0, 0)
        self._font_name = ""
        self._font: Optional["pygame.font.Font"] = None
        self._font_cache: Dict[str, "pygame.font.Font"] = {}
        self.set_font("10px sans-serif")

    @property
    def surface(self) -> "pygame.Surface":
        return self._surface

    @property
    def width(self) -> int:
        return self._surface.get_width()

    @property
    def height(self) -> int:
        return self._surface.get_height()

    def set_fill_color(self, color: Color) -> None:
        self._fill_color = (int(color[0]), int(color[1]), int(color[2]))

    def set_font(self, font: str) -> None:
        if font == self._font_name:
            return
        if font not in self._font_cache:
            size, family = parse_font(font)
            self._font_cache[font] = pygame.font.SysFont(family.lower(), size)
        self._font = self._font_cache[font]
        self._font_name = font

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        self._surface.fill((0, 0, 0), pygame.Rect(int(x), int(y), int(w), int(h)))

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        self._surface.fill(self._fill_color, pygame.Rect(int(x), int(y), int(w), int(h)))

    def fill_text(self, text: str, x: float, y: float) -> None:
        rendered = self._font.render(text, True, self._fill_color)
        self._surface.blit(rendered, (int(x), int(y) - self._font.get_ascent()))


class PygameScheduler:
    """
    Frame scheduler driven by the pygame clock.

    Each loop iteration dispatches window events, runs the callbacks
    requested since the previous refresh with pygame.time.get_ticks(),
    flips the display and waits for the next refresh.
    """

    def __init__(
        self,
        event_handler: Callable[["pygame.event.Event"], bool],
        target_fps: int = 60
    ):
        """
        Initialize scheduler.

        Args:
            event_handler: Called for every pygame event. Returning False
                ends the loop.
            target_fps: Refresh rate cap.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameScheduler")

        self._event_handler = event_handler
        self._target_fps = target_fps
        self._clock = pygame.time.Clock()
        self._pending: List[FrameCallback] = []
        self._running = False

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    def run(self) -> None:
        """Run until the event handler asks to stop."""
        self._running = True
        while self._running:
            for event in pygame.event.get():
                if not self._event_handler(event):
                    self._running = False

            if not self._running:
                break

            callbacks, self._pending = self._pending, []
            timestamp_ms = float(pygame.time.get_ticks())
            for callback in callbacks:
                callback(timestamp_ms)

            pygame.display.flip()
            self._clock.tick(self._target_fps)

    def stop(self) -> None:
        self._running = False
