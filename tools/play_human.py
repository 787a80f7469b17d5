"""
Human Play Mode
================

Play Flappy Bard in a pygame window.

Controls:
    - Space / Up arrow: Flap (starts the run)
    - Touch or mouse click: Flap, or restart after dying
    - R: Restart after dying
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--fps FPS] [--touch | --keys]
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from flappy_bard.bard_core.config_loader import load_config, GameConfig
from flappy_bard.bard_core.frame_driver import FrameDriver
from flappy_bard.bard_core.input_events import event_for_key, event_for_touch, handle_input
from flappy_bard.bard_core.platform_info import detect_touch_primary
from flappy_bard.bard_core.rules import RuleResult
from flappy_bard.bard_core.world import World


class HumanPlayer:
    """
    Interactive game window: one FrameDriver fed by the pygame clock,
    with keyboard and touch input applied between frames.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        target_fps: int = 60,
        touch_primary: Optional[bool] = None
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        # Imported here so the module can report a missing pygame cleanly
        from flappy_bard.bard_core.render_pygame import PygameCanvas, PygameScheduler

        if config is None:
            config = load_config()
        if touch_primary is None:
            touch_primary = detect_touch_primary()

        self._config = config
        self._touch_primary = touch_primary

        self._world = World(config=config, seed=seed)

        pygame.init()
        self._screen = pygame.display.set_mode((config.board.width, config.board.height))
        pygame.display.set_caption("Flappy Bard")

        self._scheduler = PygameScheduler(self._handle_event, target_fps=target_fps)
        self._driver = FrameDriver(
            self._world,
            PygameCanvas(self._screen),
            self._scheduler,
            touch_primary=touch_primary,
            on_rules=self._report
        )

    def run(self) -> int:
        """Run the game loop until the window closes. Returns the last score."""
        print("=== Flappy Bard ===")
        if self._touch_primary:
            print("Tap to flap, tap again after dying to retry")
        else:
            print("Space or Up to flap, R to retry after dying")
        print("ESC to quit")
        print()

        self._driver.start()
        self._scheduler.run()

        pygame.quit()
        return self._world.score

    def _handle_event(self, event: "pygame.event.Event") -> bool:
        """Process one pygame event. Returns False to quit."""
        if event.type == pygame.QUIT:
            return False

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return False
            self._apply(event_for_key(pygame.key.name(event.key)))

        elif event.type in (pygame.FINGERDOWN, pygame.MOUSEBUTTONDOWN):
            self._apply(event_for_touch(self._world))

        return True

    def _apply(self, input_event) -> None:
        was_dead = self._world.dead
        changed = handle_input(self._world, input_event)
        if changed and was_dead:
            print("\n=== Game Restarted ===\n")

    def _report(self, world: World, result: RuleResult) -> None:
        """Print score changes and deaths."""
        if result.points > 0:
            print(f"  +{result.points} (Total: {world.score})")
        if result.died:
            print(f"\nGAME OVER ({result.reason}) - Score: {world.score}")


def main():
    parser = argparse.ArgumentParser(description="Play Flappy Bard interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for pipe placement")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--touch", dest="touch", action="store_true", default=None,
                      help="Show touch prompts")
    mode.add_argument("--keys", dest="touch", action="store_false",
                      help="Show keyboard prompts")

    args = parser.parse_args()

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            target_fps=args.fps,
            touch_primary=args.touch
        )
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
