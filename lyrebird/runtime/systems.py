"""
Pipeline stages of one polling cycle.

A World runs these in priority order:

    parse -> interpret -> dialogue box -> choices -> background -> actor -> progress

so the interpreter always sees freshly parsed tables and every
presentation stage sees the interpreter's decisions from the same cycle.
Each stage receives the NarrativeContext explicitly through step().
"""

from __future__ import annotations

from abc import abstractmethod
from typing import TYPE_CHECKING

from lyrebird.core.errors import FormatError, UnresolvedReferenceError
from lyrebird.core.events import NarrativeEvent
from lyrebird.core.system import System
from lyrebird.presentation.states import Transition
from lyrebird.runtime.context import NarrativeContext
from lyrebird.runtime.interpreter import EntryInterpreter, lookup

if TYPE_CHECKING:
    from lyrebird.audio.player import AudioPlayer
    from lyrebird.core.entity import Entity
    from lyrebird.presentation.renderer import Renderer
    from lyrebird.script.parser import ScriptParser


class NarrativeSystem(System):
    """A pipeline stage operating on a NarrativeContext rather than entities."""

    def __init__(self, context: NarrativeContext):
        super().__init__()
        self.context = context

    def update(self, dt: float) -> None:
        if not self.enabled:
            return
        self.step(self.context, dt)

    def process_entity(self, entity: Entity, dt: float) -> None:
        """Stages don't iterate entities."""
        pass

    @abstractmethod
    def step(self, ctx: NarrativeContext, dt: float) -> None:
        """Run this stage for one cycle."""
        pass


class ScriptParseSystem(NarrativeSystem):
    """Parses the script when it is marked dirty and installs it atomically."""

    priority = 100

    def __init__(self, context: NarrativeContext, parser: ScriptParser):
        super().__init__(context)
        self.parser = parser

    def step(self, ctx: NarrativeContext, dt: float) -> None:
        if not ctx.source.dirty:
            return
        ctx.source.dirty = False

        try:
            script = self.parser.parse_string(ctx.source.text)
        except FormatError as e:
            ctx.report(e)
            ctx.events.publish(NarrativeEvent.SCRIPT_REJECTED, error=e)
            return

        ctx.install(script)


class InterpreterSystem(NarrativeSystem):
    """Applies input and dispatches the current entry."""

    priority = 90

    def __init__(self, context: NarrativeContext, interpreter: EntryInterpreter):
        super().__init__(context)
        self.interpreter = interpreter

    def step(self, ctx: NarrativeContext, dt: float) -> None:
        self.interpreter.step(ctx)


class DialogueBoxSystem(NarrativeSystem):
    """Creates, reveals and destroys the dialogue box."""

    priority = 80

    def __init__(self, context: NarrativeContext, renderer: Renderer):
        super().__init__(context)
        self.renderer = renderer
        self._shown: str | None = None

    def step(self, ctx: NarrativeContext, dt: float) -> None:
        state = ctx.dialogue
        settings = ctx.settings
        transition = state.sync()

        if transition is Transition.CREATE:
            state.handle = self.renderer.create_text_box(
                settings.text_style, settings.box_size, settings.box_position
            )
            self._shown = None
        elif transition is Transition.DESTROY:
            self.renderer.destroy(state.handle)
            state.handle = None

        # The box keeps its last text until the next text entry is shown
        if state.enabled and state.handle is not None and state.entry_index == ctx.entry_index:
            text = state.reveal(settings.box_text_speed, dt)
            if text != self._shown:
                self.renderer.update_text_box(state.handle, text)
                self._shown = text


class ChoiceSystem(NarrativeSystem):
    """Builds the choice rows and keeps the cursor on the active one."""

    priority = 70

    def __init__(self, context: NarrativeContext, renderer: Renderer):
        super().__init__(context)
        self.renderer = renderer

    def step(self, ctx: NarrativeContext, dt: float) -> None:
        state = ctx.choices
        transition = state.sync()

        if transition in (Transition.DESTROY, Transition.REBUILD):
            for handle in state.handles:
                self.renderer.destroy(handle)
            state.handles = []
            state.clear()

        if transition in (Transition.CREATE, Transition.REBUILD):
            self._build(ctx)
            self._show_cursor(ctx)
        elif transition is Transition.UPDATE:
            self._show_cursor(ctx)

    def _build(self, ctx: NarrativeContext) -> None:
        state = ctx.choices
        settings = ctx.settings
        x, y, z = settings.box_position

        for i, option in enumerate(state.build()):
            row_y = y - i * settings.choice_spacing
            handle = self.renderer.create_choice_item(
                option.label,
                settings.text_style,
                settings.box_size,
                (x + settings.choice_indent, row_y, z),
                settings.cursor_sprite,
                (x, row_y - settings.cursor_offset, z),
            )
            state.handles.append(handle)

        ctx.events.publish(
            NarrativeEvent.CHOICE_OPENED,
            index=state.entry_index,
            options=list(state.options),
        )

    def _show_cursor(self, ctx: NarrativeContext) -> None:
        state = ctx.choices
        for i, handle in enumerate(state.handles):
            self.renderer.set_cursor_visible(handle, i == state.selection)


class BackgroundSystem(NarrativeSystem):
    """Shows the current background at its declared position."""

    priority = 60

    def __init__(self, context: NarrativeContext, renderer: Renderer):
        super().__init__(context)
        self.renderer = renderer

    def step(self, ctx: NarrativeContext, dt: float) -> None:
        state = ctx.background
        transition = state.sync()

        if transition is Transition.DESTROY:
            self.renderer.destroy(state.handle)
            state.handle = None
            return

        if transition not in (Transition.CREATE, Transition.UPDATE):
            return

        try:
            background = lookup(ctx.script.backgrounds, "background", state.name)
        except UnresolvedReferenceError as e:
            ctx.report(e)
            if transition is Transition.CREATE:
                state.abort_create()
            return

        position = (background.position[0], background.position[1], 0.0)
        if transition is Transition.CREATE:
            state.handle = self.renderer.create_sprite(background.image, position)
        else:
            self.renderer.update_sprite(state.handle, background.image, position)


class ActorSystem(NarrativeSystem):
    """Shows the speaking actor's portrait and plays voice cues while text prints."""

    priority = 50

    def __init__(self, context: NarrativeContext, renderer: Renderer, audio: AudioPlayer | None = None):
        super().__init__(context)
        self.renderer = renderer
        self.audio = audio

    def step(self, ctx: NarrativeContext, dt: float) -> None:
        state = ctx.actor
        settings = ctx.settings
        transition = state.sync(settings.portrait_position)

        if transition is Transition.DESTROY:
            self.renderer.destroy(state.handle)
            state.handle = None
            return

        if transition in (Transition.CREATE, Transition.UPDATE):
            try:
                actor = lookup(ctx.script.actors, "actor", state.name)
            except UnresolvedReferenceError as e:
                ctx.report(e)
                if transition is Transition.CREATE:
                    state.abort_create()
                return

            if transition is Transition.CREATE:
                state.handle = self.renderer.create_sprite(actor.portrait, settings.portrait_position)
            else:
                self.renderer.update_sprite(state.handle, actor.portrait, settings.portrait_position)

        if state.enabled and state.tick_voice(settings.voice_frequency, dt, ctx.dialogue.printing):
            actor = ctx.script.actors.get(state.name)
            if actor is None:
                return
            if self.audio is not None:
                self.audio.play(actor.voice)
            ctx.events.publish(NarrativeEvent.VOICE_CUE, actor=state.name)


class ProgressSystem(NarrativeSystem):
    """Publishes the entry index for the host."""

    priority = 10

    def step(self, ctx: NarrativeContext, dt: float) -> None:
        ctx.progress = ctx.entry_index
