"""
Entities
========

Plain data records for the bird and the pipes. Positions are box centres
in screen pixels (y grows downward).
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Bird:
    """The player entity. Only y and velocity change during a run."""
    x: float
    y: float
    width: float
    height: float
    velocity: float = 0.0
    gravity: float = 2000.0

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2


@dataclass
class Pipe:
    """An obstacle scrolling from right to left."""
    x: float
    y: float
    width: float
    height: float
    passed: bool = False

    @property
    def left(self) -> float:
        return self.x - self.width / 2

    @property
    def right(self) -> float:
        return self.x + self.width / 2

    @property
    def top(self) -> float:
        return self.y - self.height / 2

    @property
    def bottom(self) -> float:
        return self.y + self.height / 2

    def __repr__(self) -> str:
        state = "passed" if self.passed else "ahead"
        return f"Pipe(x={self.x:.1f}, y={self.y:.1f}, {state})"


def boxes_overlap(a, b) -> bool:
    """
    True if two centred boxes overlap on both axes.

    Touching edges do not count as overlap.
    """
    return (
        a.right > b.left
        and a.left < b.right
        and a.bottom > b.top
        and a.top < b.bottom
    )
