"""
RNG - Pipe Spawner
==================

Provides deterministic pipe placement through a seedable random source.
"""

from __future__ import annotations

import math
import random
from typing import Optional

from flappy_bard.bard_core.config_loader import GameConfig, get_config
from flappy_bard.bard_core.entities import Pipe


class PipeSpawner:
    """
    Creates pipes just beyond the right edge of the play area.

    The vertical centre is drawn uniformly from
    [margin, board_height - margin), floored to a whole pixel, where
    margin is half the pipe height plus the configured edge clearance.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize spawner.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
            rng: Explicit random source. Takes precedence over seed.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = rng if rng is not None else random.Random(seed)

        self._margin = config.pipes.vertical_margin
        self._spawn_x = config.board.width + config.pipes.spawn_offset

    @property
    def margin(self) -> float:
        """Minimum distance between a pipe centre and the top/bottom edge."""
        return self._margin

    @property
    def spawn_x(self) -> float:
        """X coordinate at which new pipes appear."""
        return self._spawn_x

    def spawn(self) -> Pipe:
        """
        Create a new pipe. Consumes exactly one random draw.

        Returns:
            Fresh, not-yet-passed pipe.
        """
        band = self._config.board.height - 2 * self._margin
        y = math.floor(self._rng.random() * band) + self._margin

        return Pipe(
            x=self._spawn_x,
            y=y,
            width=self._config.pipes.width,
            height=self._config.pipes.height,
            passed=False
        )

    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reseed the spawner.

        Args:
            seed: New random seed. Keeps the current sequence if None.
        """
        if seed is not None:
            self._rng = random.Random(seed)
