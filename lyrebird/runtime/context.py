"""
Narrative context - the one value holding all runtime state.

Every pipeline stage receives the context explicitly; nothing in the
runtime keeps state anywhere else.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from lyrebird.core.actions import Action
from lyrebird.core.errors import NarrativeError
from lyrebird.core.events import EventBus, NarrativeEvent
from lyrebird.presentation.settings import PresentationSettings
from lyrebird.presentation.states import (
    ActorState,
    BackgroundState,
    ChoiceState,
    DialogueBoxState,
)
from lyrebird.script.parser import Entry, ParsedScript


logger = logging.getLogger(__name__)


@dataclass
class ScriptSource:
    """Raw script text and whether it still needs parsing."""
    text: str = ""
    dirty: bool = False


@dataclass
class NarrativeContext:
    """
    All state of one narrative run.

    Attributes:
        settings: Presentation settings, changed by settings entries
        events: Bus the host listens on
        source: Script text awaiting parse
        script: Tables and entries of the last successful parse
        entry_index: Interpreter position
        dispatched_index: Entry most recently dispatched (None = dispatch again)
        gate_open: Whether the interpreter may dispatch
        concluded: Run reached the end of its entries
        actions: Actions sampled for the current cycle
        progress: Entry index published for the host
        last_error: Most recent reported error
    """
    settings: PresentationSettings
    events: EventBus = field(default_factory=EventBus)
    source: ScriptSource = field(default_factory=ScriptSource)
    script: ParsedScript = field(default_factory=ParsedScript)
    dialogue: DialogueBoxState = field(default_factory=DialogueBoxState)
    choices: ChoiceState = field(default_factory=ChoiceState)
    actor: ActorState = field(default_factory=ActorState)
    background: BackgroundState = field(default_factory=BackgroundState)
    entry_index: int = 0
    dispatched_index: int | None = None
    gate_open: bool = False
    concluded: bool = False
    actions: frozenset[Action] = frozenset()
    progress: int = 0
    last_error: NarrativeError | None = None

    @property
    def current_entry(self) -> Entry | None:
        if 0 <= self.entry_index < len(self.script.entries):
            return self.script.entries[self.entry_index]
        return None

    @property
    def entry_count(self) -> int:
        return len(self.script.entries)

    def install(self, script: ParsedScript) -> None:
        """Swap in a freshly parsed script and restart the run."""
        self.script = script
        self.entry_index = 0
        self.dispatched_index = None
        self.gate_open = True
        self.concluded = False

        self.dialogue.disable()
        self.dialogue.forget_entry()
        self.choices.close()
        self.actor.disable()
        self.background.disable()

        logger.info(f"Loaded script with {len(script.entries)} entries")
        self.events.publish(NarrativeEvent.SCRIPT_LOADED, entry_count=len(script.entries))

    def jump(self, index: int) -> None:
        """Move the interpreter to index and let it dispatch again."""
        self.entry_index = index
        self.dispatched_index = None
        self.events.publish(NarrativeEvent.ENTRY_CHANGED, index=index)

    def conclude(self) -> None:
        """End the run; nothing dispatches until a new script is started."""
        self.concluded = True
        self.gate_open = False
        logger.info(f"Run concluded at entry {self.entry_index}")
        self.events.publish(NarrativeEvent.RUN_CONCLUDED, index=self.entry_index)

    def report(self, error: NarrativeError) -> None:
        """Record a recoverable error and tell the host."""
        self.last_error = error
        logger.warning(f"{type(error).__name__}: {error}")
        self.events.publish(NarrativeEvent.ERROR, error=error)
