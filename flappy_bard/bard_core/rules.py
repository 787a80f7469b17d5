"""
Game Rules
==========

Collision detection (game over) and pipe-passed scoring.

Both checks run every frame regardless of phase. The collision check only
has an effect while the bird is alive; the scoring check is independent of
it, so a pipe passed in the frame the bird dies still scores.
"""

from __future__ import annotations

from dataclasses import dataclass

from flappy_bard.bard_core.entities import boxes_overlap
from flappy_bard.bard_core.world import World


REASON_GROUND = "ground"
REASON_PIPE = "pipe"


@dataclass
class RuleResult:
    """Outcome of evaluating the rules for one frame."""
    died: bool
    reason: str
    points: int

    @staticmethod
    def none() -> "RuleResult":
        return RuleResult(False, "", 0)


def check_game_over(world: World) -> bool:
    """
    Kill the bird if it hit the ground or an unpassed pipe.

    Pipes are checked in sequence order and the first hit wins.

    Args:
        world: Session state.

    Returns:
        True if the bird died during this call.
    """
    if world.dead:
        return False

    bird = world.bird

    if bird.y > world.height:
        world.kill(REASON_GROUND)
        return True

    for pipe in world.pipes:
        if not pipe.passed and boxes_overlap(bird, pipe):
            world.kill(REASON_PIPE)
            return True

    return False


def update_score(world: World) -> int:
    """
    Mark pipes the bird has fully cleared and award a point for each.

    A pipe is cleared once its right edge is strictly behind the bird's
    left edge. Each pipe scores at most once.

    Args:
        world: Session state.

    Returns:
        Number of pipes newly passed.
    """
    points = 0
    bird_left = world.bird.left

    for pipe in world.pipes:
        if not pipe.passed and pipe.right < bird_left:
            pipe.passed = True
            world.score += 1
            points += 1

    return points


def evaluate(world: World) -> RuleResult:
    """
    Run the collision check, then scoring.

    Args:
        world: Session state.

    Returns:
        RuleResult for this frame.
    """
    died = check_game_over(world)
    points = update_score(world)

    if not died and points == 0:
        return RuleResult.none()
    return RuleResult(died=died, reason=world.death_reason if died else "", points=points)
