"""
Baseline Gap Agent - Flies around the next obstacle.

Strategy:
- Look at the next pipe the bird has not passed yet
- If it sits in the lower half of the board, aim to pass above it;
  otherwise aim to pass below it
- With no pipe close by, hold the middle of the board
- Flap whenever the bird is below its target height and falling
"""

from typing import Any, Dict

import numpy as np


# Vertical slack kept between the bird and the obstacle edge
CLEARANCE = 35.0
# Start steering when the next pipe is closer than this (pixels)
LOOKAHEAD = 320.0
# Assumed bird half-height (matches the shipped config)
BIRD_HALF_HEIGHT = 25.0


class BardAgent:
    """Heuristic flap policy."""

    def __init__(self, debug: bool = False):
        """
        Initialize the agent.

        Args:
            debug: If True, print decisions to stdout.
        """
        self.debug = debug

    def target_height(self, observation: Dict[str, Any]) -> float:
        """Y coordinate the bird should hover around."""
        board_height = float(observation["board_height"])
        dx = float(observation["next_pipe_dx"])

        if dx > LOOKAHEAD:
            return board_height / 2

        pipe_y = float(observation["next_pipe_y"])
        if pipe_y >= board_height / 2:
            return float(observation["next_pipe_top"]) - BIRD_HALF_HEIGHT - CLEARANCE
        return float(observation["next_pipe_bottom"]) + BIRD_HALF_HEIGHT + CLEARANCE

    def act(self, observation: Dict[str, Any], debug: bool = False) -> int:
        """
        Decide whether to flap.

        Args:
            observation: Dict of numpy arrays from the environment.
            debug: If True, print debug info for this step.

        Returns:
            1 to flap, 0 to glide.
        """
        bird_y = float(observation["bird_y"])
        velocity = float(observation["bird_velocity"])
        target = float(np.clip(
            self.target_height(observation),
            BIRD_HALF_HEIGHT,
            float(observation["board_height"]) - BIRD_HALF_HEIGHT,
        ))

        action = 1 if bird_y > target and velocity >= 0.0 else 0

        if debug or self.debug:
            print(f"[Gap Agent] y={bird_y:.0f} v={velocity:.0f} "
                  f"target={target:.0f} dx={float(observation['next_pipe_dx']):.0f} "
                  f"action={action}")

        return action


def create_agent(**kwargs) -> BardAgent:
    """Factory function to create an agent instance."""
    return BardAgent(**kwargs)
