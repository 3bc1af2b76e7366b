"""
Entry payload grammar.

The parser keeps payloads verbatim; these helpers split them when
the interpreter and the choice menu need their parts.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from lyrebird.core.errors import SettingValueError


# Plain ASCII decimals only: no inf/nan, exponents, underscores or padding
DECIMAL = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)", re.ASCII)


class EntryType(str, Enum):
    """Known entry type tags."""
    SETTINGS = "s"
    CHOICE = "c"
    TEXT = "t"
    IMAGE = "i"


@dataclass(frozen=True)
class ChoiceOption:
    """A menu label and the entry index it jumps to (-1 if unreadable)."""
    label: str
    target: int


def split_text(payload: str) -> tuple[str | None, str]:
    """Split `speaker@body` into (speaker, body); speaker is None when absent."""
    if "@" in payload:
        speaker, body = payload.split("@", 1)
        return speaker, body
    return None, payload


def parse_choice_options(payload: str) -> list[ChoiceOption]:
    """Split `Label@3|Other@5` into options."""
    options = []
    for option in payload.split("|"):
        label, _, target = option.partition("@")
        try:
            index = int(target)
        except ValueError:
            index = -1
        options.append(ChoiceOption(label=label, target=index))
    return options


def parse_settings(payload: str) -> list[tuple[str, str]]:
    """Split `key:value|key:value` into pairs, in order."""
    pairs = []
    for setting in payload.split("|"):
        if not setting:
            continue
        key, _, value = setting.partition(":")
        pairs.append((key, value))
    return pairs


def parse_float(key: str, value: str) -> float:
    if not DECIMAL.fullmatch(value):
        raise SettingValueError(key, value, "not a number")
    return float(value)


def parse_floats(key: str, value: str, counts: Sequence[int]) -> tuple[float, ...]:
    """Parse `AxB[xC]` with one of the allowed component counts."""
    parts = value.split("x")
    if len(parts) not in counts:
        expected = " or ".join(str(c) for c in counts)
        raise SettingValueError(key, value, f"expected {expected} values")
    return tuple(parse_float(key, part) for part in parts)
