"""
Error taxonomy for the narrative runtime.

Only FormatError aborts anything (the parse attempt it came from).
Everything else is reported and the failing sub-action is skipped.
"""

from __future__ import annotations


class NarrativeError(Exception):
    """Base class for all script and runtime errors."""


class FormatError(NarrativeError):
    """A script line is missing a delimiter or has an unparsable number."""

    def __init__(self, section: str, line_number: int, raw_line: str, reason: str = ""):
        self.section = section
        self.line_number = line_number
        self.raw_line = raw_line
        self.reason = reason
        message = f"{section} line {line_number}: {raw_line!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UnresolvedReferenceError(NarrativeError, LookupError):
    """An entry names a font, cursor, background or actor that was never declared."""

    def __init__(self, table: str, name: str):
        self.table = table
        self.name = name
        super().__init__(f"unknown {table} {name!r}")


class TargetRangeError(NarrativeError, IndexError):
    """A choice jumps outside the entry list."""

    def __init__(self, target: int, entry_count: int):
        self.target = target
        self.entry_count = entry_count
        super().__init__(f"choice target {target} outside [0, {entry_count})")


class SettingValueError(NarrativeError, ValueError):
    """A settings value could not be parsed or failed validation."""

    def __init__(self, key: str, value: str, reason: str = ""):
        self.key = key
        self.value = value
        message = f"bad value for {key!r}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class UnknownEntryError(NarrativeError):
    """An entry carries a type tag the interpreter does not handle."""

    def __init__(self, index: int, tag: str):
        self.index = index
        self.tag = tag
        super().__init__(f"entry {index} has unknown type {tag!r}")
