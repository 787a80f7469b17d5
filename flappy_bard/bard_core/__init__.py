"""
Bard Core - The game simulation and its front ends.

Main exports:
- World: Session state with reset() and pipe spawning
- FrameDriver: Per-refresh loop (clock -> physics -> rules -> render)
- FlappyBardEnv: Gymnasium environment for agents
- GameConfig: Configuration loaded from game_config.yaml
"""

from flappy_bard.bard_core.config_loader import GameConfig, load_config
from flappy_bard.bard_core.entities import Bird, Pipe
from flappy_bard.bard_core.world import World, Phase
from flappy_bard.bard_core.input_events import InputEvent, handle_input
from flappy_bard.bard_core.canvas import ArrayCanvas
from flappy_bard.bard_core.frame_driver import FrameDriver, ManualScheduler
from flappy_bard.bard_core.env_gym import FlappyBardEnv

__all__ = [
    "GameConfig",
    "load_config",
    "Bird",
    "Pipe",
    "World",
    "Phase",
    "InputEvent",
    "handle_input",
    "ArrayCanvas",
    "FrameDriver",
    "ManualScheduler",
    "FlappyBardEnv",
]
