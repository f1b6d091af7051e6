"""Input snapshot consumed by the simulation and its pygame key bindings.

Movement, jump and sprint are level-held: the snapshot says whether the key is
down this tick. Punch is edge-triggered and never part of the snapshot; the
input collaborator calls GameSession.press_punch() once per key press.
"""

from dataclasses import dataclass
from typing import Mapping

import pygame


@dataclass(frozen=True)
class InputState:
    """Held-state of the logical actions for one tick."""
    move_left: bool = False
    move_right: bool = False
    jump: bool = False
    sprint: bool = False


NO_INPUT = InputState()


# Logical action -> pygame key codes
KEY_BINDINGS = {
    "move_left": (pygame.K_a, pygame.K_LEFT),
    "move_right": (pygame.K_d, pygame.K_RIGHT),
    "jump": (pygame.K_w, pygame.K_UP, pygame.K_SPACE),
    "sprint": (pygame.K_LSHIFT, pygame.K_RSHIFT),
    "punch": (pygame.K_LCTRL, pygame.K_RCTRL, pygame.K_j),
    "pause": (pygame.K_p, pygame.K_ESCAPE),
    "restart": (pygame.K_r,),
    "start": (pygame.K_RETURN,),
}


def is_bound(action: str, key: int) -> bool:
    """Whether a pygame key code triggers the given action."""
    return key in KEY_BINDINGS[action]


def input_from_keys(keys_pressed: Mapping[int, bool]) -> InputState:
    """Build a snapshot from a key-code -> held mapping."""

    def held(action: str) -> bool:
        return any(keys_pressed.get(k, False) for k in KEY_BINDINGS[action])

    return InputState(
        move_left=held("move_left"),
        move_right=held("move_right"),
        jump=held("jump"),
        sprint=held("sprint"),
    )
