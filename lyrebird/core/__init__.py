"""
Core module.

Exports:
- Entity, Component, System, RenderSystem, World: ECS container
- EventBus, Event and event enums
- Action: Input actions
- Error taxonomy
"""

from lyrebird.core.entity import Entity
from lyrebird.core.component import Component
from lyrebird.core.system import System, RenderSystem
from lyrebird.core.world import World
from lyrebird.core.events import EventBus, Event, EngineEvent, NarrativeEvent, AudioEvent
from lyrebird.core.actions import Action
from lyrebird.core.errors import (
    NarrativeError,
    FormatError,
    UnresolvedReferenceError,
    TargetRangeError,
    SettingValueError,
    UnknownEntryError,
)

__all__ = [
    # ECS
    "Entity",
    "Component",
    "System",
    "RenderSystem",
    "World",
    # Events
    "EventBus",
    "Event",
    "EngineEvent",
    "NarrativeEvent",
    "AudioEvent",
    # Input
    "Action",
    # Errors
    "NarrativeError",
    "FormatError",
    "UnresolvedReferenceError",
    "TargetRangeError",
    "SettingValueError",
    "UnknownEntryError",
]
