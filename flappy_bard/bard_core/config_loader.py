"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

import yaml


Color = Tuple[int, int, int]


@dataclass(frozen=True)
class BoardConfig:
    """Play area geometry."""
    width: int
    height: int


@dataclass(frozen=True)
class BirdConfig:
    """Player entity parameters."""
    start_x: float
    start_y: float
    width: float
    height: float
    gravity: float        # Downward acceleration (pixels/s^2)
    flap_velocity: float  # Velocity applied by a flap (negative = up)


@dataclass(frozen=True)
class PipeConfig:
    """Obstacle geometry and spawn placement."""
    width: float
    height: float
    spawn_offset: float    # Pixels beyond the right edge where pipes spawn
    edge_clearance: float  # Extra margin from top/bottom edges

    @property
    def vertical_margin(self) -> float:
        """Minimum distance from the play area edges to a pipe centre."""
        return self.height / 2 + self.edge_clearance


@dataclass(frozen=True)
class SpeedConfig:
    """Travel speed and its distance-driven ramp."""
    base: float
    ramp: float


@dataclass(frozen=True)
class RenderConfig:
    """Colors and text layout for the renderer."""
    background_color: Color
    bird_color: Color
    pipe_color: Color
    pipe_passed_color: Color
    text_color: Color
    font: str
    score_position: Tuple[int, int]


@dataclass(frozen=True)
class EnvConfig:
    """Gymnasium wrapper parameters."""
    dt: float
    max_steps: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    board: BoardConfig
    bird: BirdConfig
    pipes: PipeConfig
    speed: SpeedConfig
    render: RenderConfig
    env: EnvConfig


def _parse_color(color_data: Union[str, list]) -> Color:
    """Parse an RGB color given as [R, G, B] or a "#RRGGBB" string."""
    if isinstance(color_data, str):
        text = color_data.lstrip("#")
        if len(text) != 6:
            raise ValueError(f"Hex color must look like #RRGGBB, got {color_data!r}")
        return (int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16))

    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_point(point_data: list) -> Tuple[int, int]:
    """Parse an [x, y] screen position."""
    if len(point_data) != 2:
        raise ValueError(f"Position must have 2 values [x, y], got {point_data}")
    return (int(point_data[0]), int(point_data[1]))


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.board.width <= 0 or config.board.height <= 0:
        raise ValueError(
            f"Board size must be positive, got {config.board.width}x{config.board.height}"
        )

    if config.bird.width <= 0 or config.bird.height <= 0:
        raise ValueError("Bird width and height must be positive")

    # The ceiling clamp snaps y to floor(height / 2); an odd height would sit above it
    if config.bird.height % 2 != 0:
        raise ValueError(f"bird.height must be even, got {config.bird.height}")

    if config.bird.gravity <= 0:
        raise ValueError(f"bird.gravity must be positive, got {config.bird.gravity}")

    if config.bird.flap_velocity >= 0:
        raise ValueError(
            f"bird.flap_velocity must be negative (upward), got {config.bird.flap_velocity}"
        )

    if config.pipes.width <= 0 or config.pipes.height <= 0:
        raise ValueError("Pipe width and height must be positive")

    if config.pipes.edge_clearance < 0:
        raise ValueError("pipes.edge_clearance must not be negative")

    # The spawn band [margin, height - margin] must not be empty
    if 2 * config.pipes.vertical_margin > config.board.height:
        raise ValueError(
            f"Pipe spawn margin ({config.pipes.vertical_margin}) leaves no room "
            f"on a board of height {config.board.height}"
        )

    if config.speed.base <= 0:
        raise ValueError(f"speed.base must be positive, got {config.speed.base}")

    if config.speed.ramp < 0:
        raise ValueError(f"speed.ramp must not be negative, got {config.speed.ramp}")

    if config.env.dt <= 0:
        raise ValueError(f"env.dt must be positive, got {config.env.dt}")

    if config.env.max_steps <= 0:
        raise ValueError(f"env.max_steps must be positive, got {config.env.max_steps}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    board_data = raw["board"]
    board = BoardConfig(
        width=int(board_data["width"]),
        height=int(board_data["height"])
    )

    bird_data = raw["bird"]
    bird = BirdConfig(
        start_x=float(bird_data["start_x"]),
        start_y=float(bird_data["start_y"]),
        width=float(bird_data["width"]),
        height=float(bird_data["height"]),
        gravity=float(bird_data["gravity"]),
        flap_velocity=float(bird_data["flap_velocity"])
    )

    pipe_data = raw["pipes"]
    pipes = PipeConfig(
        width=float(pipe_data["width"]),
        height=float(pipe_data["height"]),
        spawn_offset=float(pipe_data.get("spawn_offset", 50)),
        edge_clearance=float(pipe_data.get("edge_clearance", 0))
    )

    speed_data = raw["speed"]
    speed = SpeedConfig(
        base=float(speed_data["base"]),
        ramp=float(speed_data.get("ramp", 0.0002))
    )

    render_data = raw.get("render", {})
    render = RenderConfig(
        background_color=_parse_color(render_data.get("background_color", [0, 0, 0])),
        bird_color=_parse_color(render_data.get("bird_color", [0, 128, 0])),
        pipe_color=_parse_color(render_data.get("pipe_color", "#DA6868")),
        pipe_passed_color=_parse_color(render_data.get("pipe_passed_color", "#68DA7D")),
        text_color=_parse_color(render_data.get("text_color", [255, 255, 255])),
        font=str(render_data.get("font", "30px Arial")),
        score_position=_parse_point(render_data.get("score_position", [10, 30]))
    )

    env_data = raw.get("env", {})
    env = EnvConfig(
        dt=float(env_data.get("dt", 1.0 / 60.0)),
        max_steps=int(env_data.get("max_steps", 10000))
    )

    config = GameConfig(
        board=board,
        bird=bird,
        pipes=pipes,
        speed=speed,
        render=render,
        env=env
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
