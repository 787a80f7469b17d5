"""
State Snapshot
==============

Packs world state into numpy scalars for Gymnasium observations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from flappy_bard.bard_core.config_loader import GameConfig, get_config
from flappy_bard.bard_core.world import World


@dataclass
class GameSnapshot:
    """
    Flat view of the session for agents.

    The "next pipe" is the first pipe not yet passed. When there is none
    (possible for a frame right after the bird clears the last pipe), it
    is reported as sitting at the spawn position, vertically centred.
    """
    # Bird
    bird_y: float
    bird_velocity: float

    # Progress
    travel_speed: float
    distance: float
    score: int
    pipes_count: int

    # Next obstacle, relative to the bird
    next_pipe_dx: float
    next_pipe_y: float
    next_pipe_top: float
    next_pipe_bottom: float

    # Board info (for normalization)
    board_width: float
    board_height: float

    # Phase
    started: bool
    dead: bool

    def to_obs_dict(self) -> Dict[str, np.ndarray]:
        """Convert to the observation dict used by FlappyBardEnv."""
        return {
            "bird_y": np.array(self.bird_y, dtype=np.float32),
            "bird_velocity": np.array(self.bird_velocity, dtype=np.float32),
            "travel_speed": np.array(self.travel_speed, dtype=np.float32),
            "distance": np.array(self.distance, dtype=np.float32),
            "score": np.array(self.score, dtype=np.int64),
            "pipes_count": np.array(self.pipes_count, dtype=np.int32),
            "next_pipe_dx": np.array(self.next_pipe_dx, dtype=np.float32),
            "next_pipe_y": np.array(self.next_pipe_y, dtype=np.float32),
            "next_pipe_top": np.array(self.next_pipe_top, dtype=np.float32),
            "next_pipe_bottom": np.array(self.next_pipe_bottom, dtype=np.float32),
            "board_width": np.array(self.board_width, dtype=np.float32),
            "board_height": np.array(self.board_height, dtype=np.float32),
            "started": np.array(int(self.started), dtype=np.int8),
            "dead": np.array(int(self.dead), dtype=np.int8),
        }


class SnapshotBuilder:
    """Builds GameSnapshot instances from a World."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()
        self._config = config

    def build(self, world: World) -> GameSnapshot:
        bird = world.bird
        pipe = world.next_pipe()

        if pipe is not None:
            dx = pipe.x - bird.x
            pipe_y = pipe.y
            half_h = pipe.height / 2
        else:
            dx = world.spawner.spawn_x - bird.x
            pipe_y = world.height / 2
            half_h = self._config.pipes.height / 2

        return GameSnapshot(
            bird_y=bird.y,
            bird_velocity=bird.velocity,
            travel_speed=world.travel_speed,
            distance=world.distance,
            score=world.score,
            pipes_count=len(world.pipes),
            next_pipe_dx=dx,
            next_pipe_y=pipe_y,
            next_pipe_top=pipe_y - half_h,
            next_pipe_bottom=pipe_y + half_h,
            board_width=float(world.width),
            board_height=float(world.height),
            started=world.started,
            dead=world.dead,
        )
