"""
World State
===========

The single session aggregate shared by physics, rules, input and rendering.
"""

from __future__ import annotations

import random
from enum import Enum
from typing import Any, Dict, List, Optional

from flappy_bard.bard_core.config_loader import GameConfig, get_config
from flappy_bard.bard_core.entities import Bird, Pipe
from flappy_bard.bard_core.rng import PipeSpawner


class Phase(Enum):
    """Game phase derived from the started/dead flags."""
    NOT_STARTED = "not_started"
    RUNNING = "running"
    DEAD = "dead"


class World:
    """
    Mutable game session.

    Holds the bird, the ordered pipe list (oldest first, so x decreases
    from tail to head), score, travel speed, distance and frame timing.
    reset() reinitializes every field in place.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize world and perform the first reset.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for pipe placement.
            rng: Explicit random source for pipe placement.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._spawner = PipeSpawner(config, seed=seed, rng=rng)

        self.bird = Bird(
            x=config.bird.start_x,
            y=config.bird.start_y,
            width=config.bird.width,
            height=config.bird.height,
            velocity=0.0,
            gravity=config.bird.gravity
        )
        self.pipes: List[Pipe] = []
        self.score: int = 0
        self.travel_speed: float = config.speed.base
        self.distance: float = 0.0
        self.prev_timestamp_ms: Optional[float] = None
        self.elapsed_s: float = 0.0
        self.started: bool = False
        self.dead: bool = False
        self.death_reason: str = ""

        self.reset()

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def spawner(self) -> PipeSpawner:
        """Pipe spawner (owns the random source)."""
        return self._spawner

    @property
    def width(self) -> int:
        return self._config.board.width

    @property
    def height(self) -> int:
        return self._config.board.height

    @property
    def phase(self) -> Phase:
        """Current phase of the session."""
        if self.dead:
            return Phase.DEAD
        if self.started:
            return Phase.RUNNING
        return Phase.NOT_STARTED

    @property
    def is_running(self) -> bool:
        """True while physics should advance."""
        return self.started and not self.dead

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reinitialize the session to its start condition.

        Args:
            seed: New random seed for pipe placement. Keeps current if None.
        """
        self._spawner.reset(seed)

        self.pipes.clear()
        self.spawn_pipe()

        self.started = False
        self.dead = False
        self.death_reason = ""
        self.score = 0

        self.bird.x = self._config.bird.start_x
        self.bird.y = self._config.bird.start_y
        self.bird.velocity = 0.0

        self.travel_speed = self._config.speed.base
        self.distance = 0.0
        self.prev_timestamp_ms = None
        self.elapsed_s = 0.0

    def spawn_pipe(self) -> Pipe:
        """Create a pipe beyond the right edge and append it."""
        pipe = self._spawner.spawn()
        self.pipes.append(pipe)
        return pipe

    def begin_run(self) -> None:
        """Mark the run as started. Idempotent."""
        self.started = True

    def flap(self) -> None:
        """Give the bird its upward impulse."""
        self.bird.velocity = self._config.bird.flap_velocity

    def kill(self, reason: str) -> None:
        """Latch the dead flag. Only reset() clears it."""
        if self.dead:
            return
        self.dead = True
        self.death_reason = reason

    def next_pipe(self) -> Optional[Pipe]:
        """The first pipe the bird has not passed yet, if any."""
        for pipe in self.pipes:
            if not pipe.passed:
                return pipe
        return None

    def get_info(self) -> Dict[str, Any]:
        """Get additional info dict for Gymnasium."""
        return {
            "score": self.score,
            "distance": self.distance,
            "travel_speed": self.travel_speed,
            "pipes_count": len(self.pipes),
            "phase": self.phase.value,
            "terminated_reason": self.death_reason,
        }

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with bird and pipe boxes plus board info.
        """
        pipes_data = []
        for pipe in self.pipes:
            pipes_data.append({
                "x": pipe.x,
                "y": pipe.y,
                "width": pipe.width,
                "height": pipe.height,
                "passed": pipe.passed,
            })

        return {
            "board_width": self.width,
            "board_height": self.height,
            "bird": {
                "x": self.bird.x,
                "y": self.bird.y,
                "width": self.bird.width,
                "height": self.bird.height,
                "velocity": self.bird.velocity,
            },
            "pipes": pipes_data,
            "score": self.score,
            "phase": self.phase.value,
        }
