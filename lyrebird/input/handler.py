"""
Input handler - pygame keyboard and gamepad events to Actions.

The narrative samples input once per cycle as a set of edge-triggered
actions. Feed every pygame event to process_event, call update() once,
then hand just_pressed() to the narrative.

Usage:
    for event in pygame.event.get():
        input.process_event(event)
    input.update()
    narrative.update(dt, input.just_pressed())
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import pygame

from lyrebird.core.actions import (
    Action,
    DEFAULT_KEY_BINDINGS,
    DEFAULT_GAMEPAD_BINDINGS,
    DEFAULT_GAMEPAD_HAT_BINDINGS,
)
from lyrebird.core.events import EventBus


class InputEvent(Enum):
    ACTION_PRESSED = "input.action_pressed"
    ACTION_RELEASED = "input.action_released"


@dataclass
class InputState:
    """What is held now and what changed at the last update()."""
    held: set[Action] = field(default_factory=set)
    just_pressed: set[Action] = field(default_factory=set)
    just_released: set[Action] = field(default_factory=set)
    keys_down: set[int] = field(default_factory=set)


class InputHandler:
    """
    Keyboard and gamepad input mapped through rebindable Action bindings.

    A press that starts and ends between two update() calls still
    reports once, and several presses of one action collapse to one.
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus
        self._state = InputState()
        self._held_last_update: set[Action] = set()
        # Presses seen since the last update, released or not
        self._presses: set[Action] = set()

        self._key_bindings = {action: list(keys) for action, keys in DEFAULT_KEY_BINDINGS.items()}
        self._actions_for_key: dict[int, list[Action]] = {}
        self._index_keys()

        self._button_bindings = {action: list(b) for action, b in DEFAULT_GAMEPAD_BINDINGS.items()}
        self._hat_bindings = dict(DEFAULT_GAMEPAD_HAT_BINDINGS)

        self._gamepads: dict[int, pygame.joystick.JoystickType] = {}
        pygame.joystick.init()
        self._scan_gamepads()

    def _index_keys(self) -> None:
        self._actions_for_key = {}
        for action, keys in self._key_bindings.items():
            for key in keys:
                self._actions_for_key.setdefault(key, []).append(action)

    def _scan_gamepads(self) -> None:
        self._gamepads = {}
        for i in range(pygame.joystick.get_count()):
            pad = pygame.joystick.Joystick(i)
            pad.init()
            self._gamepads[pad.get_instance_id()] = pad

    # Queries

    def is_action_pressed(self, action: Action) -> bool:
        """Whether the action is held right now."""
        return action in self._state.held

    def is_action_just_pressed(self, action: Action) -> bool:
        return action in self._state.just_pressed

    def just_pressed(self) -> frozenset[Action]:
        """Actions pressed since the previous update()."""
        return frozenset(self._state.just_pressed)

    # Bindings

    def bind_key(self, action: Action, key: int) -> None:
        keys = self._key_bindings.setdefault(action, [])
        if key not in keys:
            keys.append(key)
        self._index_keys()

    def unbind_key(self, action: Action, key: int) -> None:
        keys = self._key_bindings.get(action, [])
        if key in keys:
            keys.remove(key)
        self._index_keys()

    def get_bindings(self, action: Action) -> list[int]:
        return list(self._key_bindings.get(action, []))

    # Events

    def process_event(self, event: pygame.event.Event) -> None:
        kind = event.type

        if kind == pygame.KEYDOWN:
            self._state.keys_down.add(event.key)
            for action in self._actions_for_key.get(event.key, []):
                self._press(action)

        elif kind == pygame.KEYUP:
            self._state.keys_down.discard(event.key)
            for action in self._actions_for_key.get(event.key, []):
                # Another key bound to the same action may still be down
                if not self._state.keys_down.intersection(self._key_bindings.get(action, [])):
                    self._state.held.discard(action)

        elif kind in (pygame.JOYDEVICEADDED, pygame.JOYDEVICEREMOVED):
            self._scan_gamepads()

        elif kind == pygame.JOYBUTTONDOWN:
            for action, buttons in self._button_bindings.items():
                if event.button in buttons:
                    self._press(action)

        elif kind == pygame.JOYBUTTONUP:
            for action, buttons in self._button_bindings.items():
                if event.button in buttons:
                    self._state.held.discard(action)

        elif kind == pygame.JOYHATMOTION:
            self._state.held.difference_update(self._hat_bindings.values())
            action = self._hat_bindings.get(tuple(event.value))
            if action is not None:
                self._press(action)

    def _press(self, action: Action) -> None:
        if action not in self._state.held:
            self._presses.add(action)
        self._state.held.add(action)

    def update(self) -> None:
        """Close the current cycle's sample. Call once per cycle after process_event."""
        state = self._state
        state.just_pressed = (state.held - self._held_last_update) | self._presses
        state.just_released = self._held_last_update - state.held

        if self.event_bus:
            for action in state.just_pressed:
                self.event_bus.publish(InputEvent.ACTION_PRESSED, action=action)
            for action in state.just_released:
                self.event_bus.publish(InputEvent.ACTION_RELEASED, action=action)

        self._held_last_update = set(state.held)
        self._presses.clear()
