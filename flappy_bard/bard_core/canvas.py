"""
Canvas
======

The drawing surface interface the renderer targets, and a numpy-backed
implementation for headless rendering (tests, rgb_array output, agents).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Protocol, Tuple

import numpy as np


Color = Tuple[int, int, int]


class Canvas(Protocol):
    """2D drawing surface of fixed pixel size."""

    @property
    def width(self) -> int: ...

    @property
    def height(self) -> int: ...

    def set_fill_color(self, color: Color) -> None: ...

    def set_font(self, font: str) -> None: ...

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None: ...

    def fill_text(self, text: str, x: float, y: float) -> None: ...


@dataclass
class TextDraw:
    """A recorded fill_text call."""
    text: str
    x: float
    y: float
    color: Color
    font: str


class ArrayCanvas:
    """
    Canvas that rasterizes rectangles into an RGB numpy array.

    Rectangles are clipped to the image bounds. Text is not rasterized;
    each fill_text call is recorded in text_log instead.
    """

    def __init__(self, width: int, height: int):
        """
        Initialize canvas.

        Args:
            width: Image width in pixels.
            height: Image height in pixels.
        """
        self._width = int(width)
        self._height = int(height)
        self._img = np.zeros((self._height, self._width, 3), dtype=np.uint8)
        self._fill_color: Color = (0, 0, 0)
        self._font = "10px sans-serif"
        self.text_log: List[TextDraw] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def image(self) -> np.ndarray:
        """(height, width, 3) uint8 array with the current frame."""
        return self._img

    @property
    def fill_color(self) -> Color:
        return self._fill_color

    @property
    def font(self) -> str:
        return self._font

    def set_fill_color(self, color: Color) -> None:
        self._fill_color = (int(color[0]), int(color[1]), int(color[2]))

    def set_font(self, font: str) -> None:
        self._font = font

    def _clip(self, x: float, y: float, w: float, h: float) -> Tuple[int, int, int, int]:
        """Clip a rectangle to pixel bounds as (x0, y0, x1, y1)."""
        x0 = max(0, int(round(x)))
        y0 = max(0, int(round(y)))
        x1 = min(self._width, int(round(x + w)))
        y1 = min(self._height, int(round(y + h)))
        return x0, y0, x1, y1

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        x0, y0, x1, y1 = self._clip(x, y, w, h)
        if x1 > x0 and y1 > y0:
            self._img[y0:y1, x0:x1] = 0
        # A full clear also starts a new frame for the text log
        if x0 == 0 and y0 == 0 and x1 == self._width and y1 == self._height:
            self.text_log.clear()

    def fill_rect(self, x: float, y: float, w: float, h: float) -> None:
        x0, y0, x1, y1 = self._clip(x, y, w, h)
        if x1 > x0 and y1 > y0:
            self._img[y0:y1, x0:x1] = np.array(self._fill_color, dtype=np.uint8)

    def fill_text(self, text: str, x: float, y: float) -> None:
        self.text_log.append(TextDraw(text, x, y, self._fill_color, self._font))

    def texts(self) -> List[str]:
        """Text strings drawn since the last full clear."""
        return [t.text for t in self.text_log]

    def pixel(self, x: int, y: int) -> Color:
        """RGB value at a pixel."""
        r, g, b = self._img[int(y), int(x)]
        return (int(r), int(g), int(b))
