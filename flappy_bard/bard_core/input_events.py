"""
Input Events
============

Maps raw key and touch input onto the two logical game events and applies
them to the world.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from flappy_bard.bard_core.world import World


class InputEvent(Enum):
    """Logical input events."""
    PRIMARY_ACTION = "primary_action"  # Flap (and start the run)
    RESTART = "restart"


# Key names as delivered by the frontends (lower-case)
_KEY_EVENTS = {
    "up": InputEvent.PRIMARY_ACTION,
    "space": InputEvent.PRIMARY_ACTION,
    "r": InputEvent.RESTART,
}


def event_for_key(key: str) -> Optional[InputEvent]:
    """
    Translate a key name into an input event.

    Args:
        key: Key name such as "up", "space" or "r".

    Returns:
        The matching event, or None for keys the game ignores.
    """
    return _KEY_EVENTS.get(key.lower())


def event_for_touch(world: World) -> InputEvent:
    """A touch restarts a dead game and flaps otherwise."""
    if world.dead:
        return InputEvent.RESTART
    return InputEvent.PRIMARY_ACTION


def handle_input(world: World, event: Optional[InputEvent]) -> bool:
    """
    Apply an input event to the world.

    PRIMARY_ACTION flaps and starts the run while alive and is ignored
    while dead. RESTART resets the world while dead and is ignored while
    alive.

    Args:
        world: Session state.
        event: Event to apply. None is ignored.

    Returns:
        True if the event changed the world.
    """
    if event is InputEvent.PRIMARY_ACTION:
        if world.dead:
            return False
        world.flap()
        world.begin_run()
        return True

    if event is InputEvent.RESTART:
        if not world.dead:
            return False
        world.reset()
        return True

    return False
