"""
Gymnasium Environment Wrapper
=============================

Provides a standard Gymnasium interface to the game.
Reward is always 0.0 - agents compute their own from info.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Union
import numpy as np

import gymnasium as gym
from gymnasium import spaces

from flappy_bard.bard_core import physics, renderer, rules
from flappy_bard.bard_core.canvas import ArrayCanvas
from flappy_bard.bard_core.config_loader import GameConfig, load_config
from flappy_bard.bard_core.input_events import InputEvent, handle_input
from flappy_bard.bard_core.state_snapshot import SnapshotBuilder
from flappy_bard.bard_core.world import World


ACTION_GLIDE = 0
ACTION_FLAP = 1


class FlappyBardEnv(gym.Env):
    """
    Flappy Bard as a Gymnasium environment.

    Action Space:
        Discrete(2): 0 = do nothing, 1 = flap.

    Observation Space:
        Dict of numpy scalars describing the bird, the next pipe and progress.

    Reward:
        Always 0.0. Agents must compute their own reward from the info dict.

    Info:
        Contains score, delta_score, distance, travel_speed, terminated_reason, etc.

    Each step advances the simulation by the fixed env.dt from the config.
    The run starts immediately on reset; no initial flap is needed.
    """

    metadata = {
        "render_modes": ["human", "rgb_array"],
        "render_fps": 60,
    }

    def __init__(
        self,
        config_path: Optional[str] = None,
        render_mode: Optional[str] = None,
        max_steps: Optional[int] = None,
        debug: bool = False,
    ):
        """
        Initialize environment.

        Args:
            config_path: Path to game_config.yaml. Uses default if None.
            render_mode: "human" for window, "rgb_array" for numpy, None for headless.
            max_steps: Override the truncation limit from the config.
            debug: If True, prints per-step debug output.
        """
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode: {render_mode!r}")

        self._config = load_config(config_path)
        self.render_mode = render_mode
        self._debug = debug

        self._dt = self._config.env.dt
        self._max_steps = max_steps if max_steps is not None else self._config.env.max_steps

        self._world = World(config=self._config)
        self._snapshot_builder = SnapshotBuilder(self._config)
        self._steps = 0

        # Renderers (lazy)
        self._array_canvas: Optional[ArrayCanvas] = None
        self._screen_canvas = None

        self.action_space = spaces.Discrete(2)
        self.observation_space = self._build_observation_space()

        if self._debug:
            print(f"[DEBUG] FlappyBardEnv initialized")
            print(f"[DEBUG]   Board: {self._config.board.width}x{self._config.board.height}")
            print(f"[DEBUG]   dt: {self._dt:.4f}s, max_steps: {self._max_steps}")

    def _build_observation_space(self) -> spaces.Dict:
        """Build the observation space definition."""
        board = self._config.board
        unbounded = dict(low=-np.inf, high=np.inf, shape=(), dtype=np.float32)

        return spaces.Dict({
            "bird_y": spaces.Box(**unbounded),
            "bird_velocity": spaces.Box(**unbounded),
            "travel_speed": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "distance": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "score": spaces.Box(low=0, high=np.iinfo(np.int64).max, shape=(), dtype=np.int64),
            "pipes_count": spaces.Box(low=0, high=np.iinfo(np.int32).max, shape=(), dtype=np.int32),
            "next_pipe_dx": spaces.Box(**unbounded),
            "next_pipe_y": spaces.Box(low=0, high=board.height, shape=(), dtype=np.float32),
            "next_pipe_top": spaces.Box(**unbounded),
            "next_pipe_bottom": spaces.Box(**unbounded),
            "board_width": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "board_height": spaces.Box(low=0, high=np.inf, shape=(), dtype=np.float32),
            "started": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),
            "dead": spaces.Box(low=0, high=1, shape=(), dtype=np.int8),
        })

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None
    ) -> Tuple[Dict[str, np.ndarray], Dict[str, Any]]:
        """
        Reset the environment.

        Args:
            seed: Random seed for pipe placement.
            options: Additional options (unused).

        Returns:
            (observation, info) tuple.
        """
        super().reset(seed=seed)

        self._world.reset(seed=seed)
        self._world.begin_run()
        self._steps = 0

        obs = self._get_obs()
        info = self._get_info(delta_score=0)
        return obs, info

    def step(
        self,
        action: Union[int, np.ndarray]
    ) -> Tuple[Dict[str, np.ndarray], float, bool, bool, Dict[str, Any]]:
        """
        Execute one step.

        Args:
            action: 0 to glide, 1 to flap.

        Returns:
            (observation, reward, terminated, truncated, info) tuple.
            Reward is always 0.0.
        """
        if isinstance(action, np.ndarray):
            action = action.item() if action.ndim == 0 else action[0]
        action = int(action)
        if action not in (ACTION_GLIDE, ACTION_FLAP):
            raise ValueError(f"Action must be 0 or 1, got {action}")

        world = self._world
        if world.dead:
            # Episode already ended, return current state
            return self._get_obs(), 0.0, True, False, self._get_info(delta_score=0)

        if action == ACTION_FLAP:
            handle_input(world, InputEvent.PRIMARY_ACTION)

        physics.step(world, self._dt)
        world.elapsed_s = self._dt
        result = rules.evaluate(world)
        self._steps += 1

        terminated = world.dead
        truncated = not terminated and self._steps >= self._max_steps

        obs = self._get_obs()
        info = self._get_info(delta_score=result.points)

        if self._debug:
            print(f"[DEBUG] Step {self._steps}: action={action}, y={world.bird.y:.1f}, "
                  f"v={world.bird.velocity:.1f}, score={world.score}")
            if terminated:
                print(f"[DEBUG] TERMINATED: {world.death_reason}")

        if self.render_mode == "human":
            self.render()

        return obs, 0.0, terminated, truncated, info

    def _get_obs(self) -> Dict[str, np.ndarray]:
        return self._snapshot_builder.build(self._world).to_obs_dict()

    def _get_info(self, delta_score: int) -> Dict[str, Any]:
        info = self._world.get_info()
        info["delta_score"] = delta_score
        info["steps"] = self._steps
        return info

    def _render_to_array(self) -> np.ndarray:
        """Render board to RGB array."""
        if self._array_canvas is None:
            self._array_canvas = ArrayCanvas(self._config.board.width, self._config.board.height)
        renderer.draw(self._world, self._array_canvas)
        return self._array_canvas.image.copy()

    def _render_to_screen(self) -> None:
        """Render board to a pygame window."""
        from flappy_bard.bard_core.render_pygame import PygameCanvas, pygame

        if self._screen_canvas is None:
            pygame.init()
            screen = pygame.display.set_mode((self._config.board.width, self._config.board.height))
            pygame.display.set_caption("Flappy Bard")
            self._screen_canvas = PygameCanvas(screen)

        pygame.event.pump()
        renderer.draw(self._world, self._screen_canvas)
        pygame.display.flip()

    def render(self) -> Optional[np.ndarray]:
        """
        Render the current game state.

        Returns:
            RGB array if render_mode is "rgb_array", None otherwise.
        """
        if self.render_mode == "rgb_array":
            return self._render_to_array()

        if self.render_mode == "human":
            self._render_to_screen()

        return None

    def close(self) -> None:
        """Clean up resources."""
        if self._screen_canvas is not None:
            from flappy_bard.bard_core.render_pygame import pygame
            pygame.display.quit()
            self._screen_canvas = None
        self._array_canvas = None

    @property
    def world(self) -> World:
        """Access to underlying world (for debugging/tools)."""
        return self._world

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config
