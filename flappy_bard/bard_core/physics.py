"""
Physics
=======

Frame timing and the per-frame simulation step.

Integration is semi-implicit Euler in a fixed order: the bird's position
uses the velocity from before this frame's gravity is applied.
"""

from __future__ import annotations

import math

from flappy_bard.bard_core.world import World


def update_clock(world: World, timestamp_ms: float) -> float:
    """
    Record a frame timestamp and return the elapsed seconds.

    Runs every frame regardless of phase. The first frame after a
    (re)start has no previous timestamp and yields dt = 0.

    Args:
        world: Session state.
        timestamp_ms: Monotonic frame timestamp in milliseconds.

    Returns:
        Seconds since the previous frame.
    """
    if world.prev_timestamp_ms is None:
        dt = 0.0
    else:
        dt = (timestamp_ms - world.prev_timestamp_ms) / 1000.0

    world.elapsed_s = dt
    world.prev_timestamp_ms = timestamp_ms
    return dt


def step(world: World, dt: float) -> None:
    """
    Advance distance, speed, bird and pipes by dt seconds.

    Does nothing unless the run has started and the bird is alive, or
    when dt is zero.

    Args:
        world: Session state, mutated in place.
        dt: Elapsed seconds since the previous frame.

    Raises:
        ValueError: If dt is negative.
    """
    if dt < 0:
        raise ValueError(f"dt must not be negative, got {dt}")

    if not world.is_running or dt == 0:
        return

    config = world.config

    # Distance first, then the ramp reads the updated distance
    world.distance += world.travel_speed * dt
    world.travel_speed += config.speed.ramp * world.distance * dt

    bird = world.bird
    bird.y += bird.velocity * dt
    bird.velocity += bird.gravity * dt

    # Top of the play area
    if bird.y < bird.height / 2:
        bird.y = math.floor(bird.height / 2)
        bird.velocity = 0.0

    for pipe in world.pipes:
        pipe.x -= world.travel_speed * dt

    if world.pipes[-1].x < world.width / 2:
        world.spawn_pipe()

    head = world.pipes[0]
    if head.x < -(head.width / 2):
        world.pipes.pop(0)
