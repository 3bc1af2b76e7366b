"""
Narrative - the host-facing runtime.

Wires a NarrativeContext into a World as the fixed sequence of
pipeline stages and exposes the two calls a host needs.

Usage:
    narrative = Narrative(PygameAssetLoader("assets"))
    narrative.start(script_text)

    # Every frame:
    narrative.update(dt, input.just_pressed())
    narrative.render()
    bookmark = narrative.current_entry_index()
"""

from __future__ import annotations

from typing import Iterable

from lyrebird.audio.player import AudioPlayer
from lyrebird.core.actions import Action
from lyrebird.core.errors import NarrativeError
from lyrebird.core.events import EventBus
from lyrebird.core.world import World
from lyrebird.presentation.renderer import Renderer, WorldRenderer
from lyrebird.presentation.settings import PresentationSettings
from lyrebird.resources.assets import AssetLoader
from lyrebird.runtime.context import NarrativeContext
from lyrebird.runtime.interpreter import EntryInterpreter
from lyrebird.runtime.systems import (
    ActorSystem,
    BackgroundSystem,
    ChoiceSystem,
    DialogueBoxSystem,
    InterpreterSystem,
    ProgressSystem,
    ScriptParseSystem,
)
from lyrebird.script.parser import ScriptParser


class Narrative:
    """
    Owns the world, the context and the pipeline stages of one runtime.

    Args:
        loader: Resolves script paths to asset handles
        renderer: Visual backend; defaults to entities in the world
        audio: Voice cue player; cues are still published as events without one
        world: World to register stages in (created if omitted)
        event_bus: Bus for a newly created world
        settings: Initial presentation settings
        skip_unknown_entries: Step over entries with unknown type tags
            instead of stalling on them (reported either way)
    """

    def __init__(
        self,
        loader: AssetLoader,
        renderer: Renderer | None = None,
        audio: AudioPlayer | None = None,
        world: World | None = None,
        event_bus: EventBus | None = None,
        settings: PresentationSettings | None = None,
        skip_unknown_entries: bool = False,
    ):
        self.world = world or World(event_bus)
        self.renderer = renderer or WorldRenderer(self.world)
        self.context = NarrativeContext(
            settings=settings or PresentationSettings.with_defaults(loader),
            events=self.world.event_bus,
        )

        ctx = self.context
        self.world.add_system(ScriptParseSystem(ctx, ScriptParser(loader)))
        self.world.add_system(InterpreterSystem(ctx, EntryInterpreter(skip_unknown_entries)))
        self.world.add_system(DialogueBoxSystem(ctx, self.renderer))
        self.world.add_system(ChoiceSystem(ctx, self.renderer))
        self.world.add_system(BackgroundSystem(ctx, self.renderer))
        self.world.add_system(ActorSystem(ctx, self.renderer, audio))
        self.world.add_system(ProgressSystem(ctx))

    @property
    def events(self) -> EventBus:
        return self.world.event_bus

    def start(self, script: str) -> None:
        """Install new script text; it is parsed on the next cycle."""
        self.context.source.text = script
        self.context.source.dirty = True

    def current_entry_index(self) -> int:
        """Entry index as of the last completed cycle."""
        return self.context.progress

    @property
    def concluded(self) -> bool:
        return self.context.concluded

    @property
    def last_error(self) -> NarrativeError | None:
        return self.context.last_error

    def update(self, dt: float, actions: Iterable[Action] = ()) -> None:
        """
        Run one polling cycle.

        Args:
            dt: Seconds since the previous cycle
            actions: Actions pressed since the previous cycle
        """
        self.context.actions = frozenset(actions)
        try:
            self.world.update(dt)
        finally:
            self.context.actions = frozenset()

    def render(self, alpha: float = 1.0) -> None:
        self.world.render(alpha)
