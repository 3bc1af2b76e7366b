"""
Input action definitions.

Actions abstract raw input (keys, buttons) into the four narrative
actions plus a host-level quit. Runtime logic only ever sees Actions.
"""

from enum import Enum, auto

import pygame


class Action(Enum):
    """Semantic input actions."""

    ADVANCE = auto()
    NAVIGATE_UP = auto()
    NAVIGATE_DOWN = auto()
    CONFIRM = auto()

    # Host
    QUIT = auto()


DEFAULT_KEY_BINDINGS: dict[Action, list[int]] = {
    Action.ADVANCE: [pygame.K_SPACE, pygame.K_RETURN],
    Action.CONFIRM: [pygame.K_SPACE, pygame.K_RETURN],
    Action.NAVIGATE_UP: [pygame.K_UP, pygame.K_w, pygame.K_z],
    Action.NAVIGATE_DOWN: [pygame.K_DOWN, pygame.K_s],
    Action.QUIT: [pygame.K_ESCAPE],
}

# Gamepad button bindings (SDL controller layout)
DEFAULT_GAMEPAD_BINDINGS: dict[Action, list[int]] = {
    Action.ADVANCE: [0],  # A button
    Action.CONFIRM: [0],
    Action.QUIT: [7],     # Start
}

# D-pad bindings (hat)
DEFAULT_GAMEPAD_HAT_BINDINGS: dict[tuple[int, int], Action] = {
    (0, 1): Action.NAVIGATE_UP,
    (0, -1): Action.NAVIGATE_DOWN,
}
