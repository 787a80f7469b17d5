"""
Frame Driver
============

Runs one frame per display refresh: clock, physics, rules, render, then
requests the next frame. The loop has no stop condition of its own.
"""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol

from flappy_bard.bard_core import physics, renderer, rules
from flappy_bard.bard_core.canvas import Canvas
from flappy_bard.bard_core.rules import RuleResult
from flappy_bard.bard_core.world import World


FrameCallback = Callable[[float], None]


class FrameScheduler(Protocol):
    """Delivers "next display refresh" notifications."""

    def request_frame(self, callback: FrameCallback) -> None: ...


class ManualScheduler:
    """
    Scheduler that fires pending callbacks only when told to.

    Used by tests and headless runs to drive frames with chosen timestamps.
    """

    def __init__(self):
        self._pending: List[FrameCallback] = []

    @property
    def pending(self) -> int:
        """Number of callbacks waiting for the next frame."""
        return len(self._pending)

    def request_frame(self, callback: FrameCallback) -> None:
        self._pending.append(callback)

    def fire(self, timestamp_ms: float) -> int:
        """
        Run every callback requested before this call.

        Callbacks requested while firing wait for the next fire().

        Returns:
            Number of callbacks run.
        """
        callbacks, self._pending = self._pending, []
        for callback in callbacks:
            callback(timestamp_ms)
        return len(callbacks)


class FrameDriver:
    """
    Owns the world for the life of the process and drives its frames.
    """

    def __init__(
        self,
        world: World,
        canvas: Canvas,
        scheduler: FrameScheduler,
        touch_primary: bool = False,
        on_rules: Optional[Callable[[World, RuleResult], None]] = None
    ):
        """
        Initialize driver.

        Args:
            world: Session state.
            canvas: Surface to draw on.
            scheduler: Source of frame notifications.
            touch_primary: Passed to the renderer for the retry prompt.
            on_rules: Optional hook called with each frame's rule outcome.
        """
        self._world = world
        self._canvas = canvas
        self._scheduler = scheduler
        self._touch_primary = touch_primary
        self._on_rules = on_rules
        self._frames = 0

    @property
    def world(self) -> World:
        return self._world

    @property
    def frames(self) -> int:
        """Frames processed so far."""
        return self._frames

    def start(self) -> None:
        """Request the first frame."""
        self._scheduler.request_frame(self.on_frame)

    def on_frame(self, timestamp_ms: float) -> None:
        """Process one frame and schedule the next."""
        dt = physics.update_clock(self._world, timestamp_ms)
        physics.step(self._world, dt)

        result = rules.evaluate(self._world)
        if self._on_rules is not None:
            self._on_rules(self._world, result)

        renderer.draw(self._world, self._canvas, touch_primary=self._touch_primary)
        self._frames += 1

        self._scheduler.request_frame(self.on_frame)
