"""
Lyrebird

A runtime for branching narrative dialogue driven by a compact text
script: typewriter text, actor portraits with voice cues, background
images and menu choices.

Quick Start:
    from lyrebird import Narrative
    from lyrebird.resources import PygameAssetLoader

    narrative = Narrative(PygameAssetLoader("assets"))
    narrative.start(open("story.txt", encoding="utf-8").read())

    # Each frame:
    narrative.update(dt, actions)
"""

__version__ = "0.1.0"

from lyrebird.core import (
    Action,
    EventBus,
    Event,
    NarrativeEvent,
    World,
    NarrativeError,
    FormatError,
    UnresolvedReferenceError,
    TargetRangeError,
    SettingValueError,
    UnknownEntryError,
)
from lyrebird.script import ScriptParser, ParsedScript, Entry
from lyrebird.presentation import PresentationSettings, TextStyle
from lyrebird.runtime import Narrative, NarrativeContext, EntryInterpreter

__all__ = [
    "Action",
    "EventBus",
    "Event",
    "NarrativeEvent",
    "World",
    "NarrativeError",
    "FormatError",
    "UnresolvedReferenceError",
    "TargetRangeError",
    "SettingValueError",
    "UnknownEntryError",
    "ScriptParser",
    "ParsedScript",
    "Entry",
    "PresentationSettings",
    "TextStyle",
    "Narrative",
    "NarrativeContext",
    "EntryInterpreter",
]
