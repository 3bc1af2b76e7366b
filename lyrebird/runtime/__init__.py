"""
Runtime module - context, interpreter, pipeline stages and host API.
"""

from lyrebird.runtime.context import NarrativeContext, ScriptSource
from lyrebird.runtime.interpreter import EntryInterpreter
from lyrebird.runtime.systems import (
    NarrativeSystem,
    ScriptParseSystem,
    InterpreterSystem,
    DialogueBoxSystem,
    ChoiceSystem,
    BackgroundSystem,
    ActorSystem,
    ProgressSystem,
)
from lyrebird.runtime.narrative import Narrative

__all__ = [
    "NarrativeContext",
    "ScriptSource",
    "EntryInterpreter",
    "NarrativeSystem",
    "ScriptParseSystem",
    "InterpreterSystem",
    "DialogueBoxSystem",
    "ChoiceSystem",
    "BackgroundSystem",
    "ActorSystem",
    "ProgressSystem",
    "Narrative",
]
