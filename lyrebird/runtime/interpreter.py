"""
Entry interpreter - walks the entry list and drives the presentation states.

Each cycle the interpreter first applies the sampled input actions,
then dispatches the entry at the current index if it has not been
dispatched yet:

- `s` settings: apply `key:value` pairs, advance immediately
- `c` choice: hide dialogue and actor, open the choice menu, wait
- `t` text: show `[speaker@]body` in the dialogue box, wait for Advance
- `i` image: switch background, advance immediately
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from lyrebird.core.actions import Action
from lyrebird.core.errors import (
    NarrativeError,
    SettingValueError,
    TargetRangeError,
    UnknownEntryError,
    UnresolvedReferenceError,
)
from lyrebird.core.events import NarrativeEvent
from lyrebird.runtime.context import NarrativeContext
from lyrebird.script.entries import (
    EntryType,
    parse_float,
    parse_floats,
    parse_settings,
    split_text,
)
from lyrebird.script.parser import Entry


logger = logging.getLogger(__name__)


# Settings keys holding a single float
SCALAR_SETTINGS = (
    "box_text_speed",
    "voice_frequency",
    "choice_spacing",
    "choice_indent",
    "cursor_offset",
)

# Settings keys holding a position; z is optional
POSITION_SETTINGS = ("box_position", "portrait_position")


def lookup(table: dict[str, Any], table_name: str, name: str) -> Any:
    """Resolve a script name or raise UnresolvedReferenceError."""
    if name not in table:
        raise UnresolvedReferenceError(table_name, name)
    return table[name]


class EntryInterpreter:
    """
    Dispatches entries and applies input to a NarrativeContext.

    Args:
        skip_unknown_entries: Step over entries with unknown type tags
            instead of stalling on them
    """

    def __init__(self, skip_unknown_entries: bool = False):
        self.skip_unknown_entries = skip_unknown_entries

    def step(self, ctx: NarrativeContext) -> NarrativeContext:
        """Run one interpreter cycle."""
        if not ctx.gate_open or not ctx.script.entries:
            return ctx

        self.handle_input(ctx)

        if ctx.gate_open and ctx.entry_index != ctx.dispatched_index:
            self.dispatch(ctx)

        return ctx

    # Input

    def handle_input(self, ctx: NarrativeContext) -> None:
        actions = ctx.actions

        if ctx.choices.enabled:
            if Action.NAVIGATE_UP in actions:
                ctx.choices.navigate(-1)
            if Action.NAVIGATE_DOWN in actions:
                ctx.choices.navigate(1)
            if Action.CONFIRM in actions:
                self.confirm_choice(ctx)
        elif Action.ADVANCE in actions and self._awaiting_advance(ctx):
            self.advance(ctx)

    @staticmethod
    def _awaiting_advance(ctx: NarrativeContext) -> bool:
        """Advance only applies to a text entry already shown in the box."""
        return (
            ctx.dispatched_index == ctx.entry_index
            and ctx.dialogue.enabled
            and ctx.dialogue.entry_index == ctx.entry_index
        )

    def advance(self, ctx: NarrativeContext) -> None:
        """Finish the reveal, or move past the current entry."""
        dialogue = ctx.dialogue
        if dialogue.printing:
            dialogue.snap()
        elif ctx.entry_index < ctx.entry_count - 1:
            dialogue.reset_cursor()
            ctx.jump(ctx.entry_index + 1)
        else:
            ctx.conclude()

    def confirm_choice(self, ctx: NarrativeContext) -> None:
        """Jump to the active option's target."""
        choices = ctx.choices
        option = choices.active_option
        if option is None:
            return

        if not 0 <= option.target < ctx.entry_count:
            ctx.report(TargetRangeError(option.target, ctx.entry_count))
            return

        selection = choices.selection
        ctx.dialogue.reset_cursor()
        choices.close()
        ctx.gate_open = True
        ctx.jump(option.target)
        ctx.events.publish(
            NarrativeEvent.CHOICE_CONFIRMED, selection=selection, target=option.target
        )

    # Dispatch

    def dispatch(self, ctx: NarrativeContext) -> None:
        index = ctx.entry_index
        entry = ctx.script.entries[index]
        ctx.dispatched_index = index
        logger.debug(f"Dispatching entry {index}: {entry.type}#{entry.payload}")

        if entry.type == EntryType.SETTINGS:
            self.apply_settings(ctx, entry)
            self._advance_free(ctx)

        elif entry.type == EntryType.CHOICE:
            ctx.dialogue.disable()
            ctx.actor.disable()
            ctx.choices.open(index, entry.payload)

        elif entry.type == EntryType.TEXT:
            self.show_text(ctx, index, entry)

        elif entry.type == EntryType.IMAGE:
            try:
                lookup(ctx.script.backgrounds, "background", entry.payload)
            except UnresolvedReferenceError as e:
                ctx.report(e)
            else:
                ctx.background.show(entry.payload)
            self._advance_free(ctx)

        else:
            ctx.report(UnknownEntryError(index, entry.type))
            if self.skip_unknown_entries:
                self._advance_free(ctx)

    def _advance_free(self, ctx: NarrativeContext) -> None:
        """Advance past an entry that needs no input; the last one ends the run."""
        if ctx.entry_index < ctx.entry_count - 1:
            ctx.jump(ctx.entry_index + 1)
        else:
            ctx.conclude()

    def show_text(self, ctx: NarrativeContext, index: int, entry: Entry) -> None:
        speaker, body = split_text(entry.payload)
        if speaker is not None:
            try:
                lookup(ctx.script.actors, "actor", speaker)
            except UnresolvedReferenceError as e:
                ctx.report(e)
            else:
                ctx.actor.show(speaker)
        ctx.dialogue.show(index, body)

    def apply_settings(self, ctx: NarrativeContext, entry: Entry) -> None:
        """Apply every pair; a bad pair is reported and skipped."""
        for key, value in parse_settings(entry.payload):
            try:
                self.apply_setting(ctx, key, value)
            except NarrativeError as e:
                ctx.report(e)

    def apply_setting(self, ctx: NarrativeContext, key: str, value: str) -> None:
        settings = ctx.settings
        try:
            if key == "font":
                settings.text_style.font = lookup(ctx.script.fonts, "font", value)
            elif key == "font_size":
                settings.text_style.font_size = parse_float(key, value)
            elif key == "font_color":
                settings.text_style.color = parse_floats(key, value, (4,))
            elif key == "cursor":
                settings.cursor_sprite = lookup(ctx.script.cursor_sprites, "cursor sprite", value)
            elif key == "box_size":
                settings.box_size = parse_floats(key, value, (2,))
            elif key in POSITION_SETTINGS:
                values = parse_floats(key, value, (2, 3))
                if len(values) == 2:
                    values = values + (getattr(settings, key)[2],)
                setattr(settings, key, values)
            elif key in SCALAR_SETTINGS:
                setattr(settings, key, parse_float(key, value))
            else:
                logger.debug(f"Ignoring unknown setting {key!r}")
        except ValidationError as e:
            raise SettingValueError(key, value, e.errors()[0]["msg"]) from None
