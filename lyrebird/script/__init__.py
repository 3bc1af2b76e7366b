"""
Script module - the text format and its parser.
"""

from lyrebird.script.parser import (
    ScriptParser,
    ParsedScript,
    Section,
    Entry,
    BackgroundEntry,
    ActorEntry,
)
from lyrebird.script.entries import (
    EntryType,
    ChoiceOption,
    split_text,
    parse_choice_options,
    parse_settings,
    parse_float,
    parse_floats,
)

__all__ = [
    "ScriptParser",
    "ParsedScript",
    "Section",
    "Entry",
    "BackgroundEntry",
    "ActorEntry",
    "EntryType",
    "ChoiceOption",
    "split_text",
    "parse_choice_options",
    "parse_settings",
    "parse_float",
    "parse_floats",
]
