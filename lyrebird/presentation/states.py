"""
Presentation state machines.

Each state tracks whether its visual should be shown (enabled) and
whether it currently is (created). The interpreter only flips the
logical side; the owning stage calls sync() once per cycle and turns
the returned Transition into renderer calls.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto

from lyrebird.script.entries import ChoiceOption, parse_choice_options


class Transition(Enum):
    """What the owning stage must do to the rendered object this cycle."""
    NONE = auto()
    CREATE = auto()
    UPDATE = auto()
    REBUILD = auto()
    DESTROY = auto()


@dataclass
class VisualState:
    """Shared enabled/created lifecycle."""
    enabled: bool = False
    created: bool = False
    dirty: bool = False
    # Renderer handle of the visual while created
    handle: int | None = None

    def enable(self) -> None:
        if not self.enabled:
            self.enabled = True
            self.dirty = True

    def disable(self) -> None:
        self.enabled = False

    def sync(self) -> Transition:
        """Advance the lifecycle by one cycle."""
        if self.enabled and not self.created:
            self.created = True
            self.dirty = False
            return Transition.CREATE
        if not self.enabled and self.created:
            self.created = False
            self.dirty = False
            return Transition.DESTROY
        if self.enabled and self.dirty:
            self.dirty = False
            return Transition.UPDATE
        return Transition.NONE

    def abort_create(self) -> None:
        """Undo a CREATE the stage could not carry out."""
        self.created = False
        self.enabled = False


@dataclass
class DialogueBoxState(VisualState):
    """
    Typewriter reveal of one text entry.

    cursor counts revealed characters; it only moves forward while
    printing and goes back to 0 when the entry changes.
    """
    cursor: float = 0.0
    text: str = ""
    entry_index: int | None = None
    printing: bool = False

    def show(self, entry_index: int, text: str) -> None:
        self.enable()
        if entry_index != self.entry_index or text != self.text:
            if entry_index != self.entry_index:
                self.cursor = 0.0
            self.entry_index = entry_index
            self.text = text
            self.printing = self.cursor < len(text)
            self.dirty = True

    def reveal(self, speed: float, dt: float) -> str:
        """Move the cursor forward and return the visible prefix."""
        length = len(self.text)
        if self.cursor < length:
            self.cursor = min(float(length), self.cursor + speed * dt)
        self.printing = self.cursor < length
        return self.visible_text

    def snap(self) -> None:
        """Reveal the whole text at once."""
        self.cursor = float(len(self.text))
        self.printing = False

    def reset_cursor(self) -> None:
        """Rewind for the next entry; nothing prints until it is shown."""
        self.cursor = 0.0
        self.printing = False

    def forget_entry(self) -> None:
        """Drop the displayed entry so the next show() starts fresh."""
        self.entry_index = None

    @property
    def visible_text(self) -> str:
        return self.text[:math.floor(self.cursor)]


@dataclass
class ChoiceState(VisualState):
    """Branching menu built from a choice entry's payload."""
    payload: str = ""
    entry_index: int | None = None
    selection: int = 0
    options: list[ChoiceOption] = field(default_factory=list)
    rebuild: bool = False
    # One renderer handle per option row
    handles: list[int] = field(default_factory=list)

    def open(self, entry_index: int, payload: str) -> None:
        # Reopening while the old menu is still on screen rebuilds it
        if not self.enabled and self.created:
            self.rebuild = True
        self.enable()
        self.entry_index = entry_index
        self.payload = payload

    def close(self) -> None:
        self.disable()

    def sync(self) -> Transition:
        if self.enabled and self.created and self.rebuild:
            self.rebuild = False
            self.dirty = False
            return Transition.REBUILD
        if not self.enabled:
            self.rebuild = False
        return super().sync()

    def build(self) -> list[ChoiceOption]:
        """Split the payload into options and select the first."""
        self.options = parse_choice_options(self.payload)
        self.selection = 0
        return self.options

    def clear(self) -> None:
        self.options = []
        self.selection = 0

    def navigate(self, delta: int) -> bool:
        """Move the selection, clamped to the option list. Returns whether it moved."""
        if not self.options:
            return False
        selection = max(0, min(len(self.options) - 1, self.selection + delta))
        if selection == self.selection:
            return False
        self.selection = selection
        self.dirty = True
        return True

    @property
    def option_count(self) -> int:
        return len(self.options)

    @property
    def active_option(self) -> ChoiceOption | None:
        if not self.options:
            return None
        return self.options[self.selection]

    @property
    def pending_target(self) -> int | None:
        option = self.active_option
        return option.target if option else None


@dataclass
class VoiceTimer:
    """Repeating timer; a non-positive duration never fires."""
    duration: float
    elapsed: float = 0.0

    def tick(self, dt: float) -> bool:
        """Advance by dt; True when at least one period completed."""
        if self.duration <= 0:
            return False
        self.elapsed += dt
        if self.elapsed < self.duration:
            return False
        self.elapsed %= self.duration
        return True


@dataclass
class ActorState(VisualState):
    """Speaking actor's portrait plus periodic voice cues."""
    name: str | None = None
    position: tuple[float, float, float] | None = None
    voice_timer: VoiceTimer = field(default_factory=lambda: VoiceTimer(0.1))

    def show(self, name: str) -> None:
        self.enable()
        if name != self.name:
            self.name = name
            self.dirty = True

    def sync(self, position: tuple[float, float, float] | None = None) -> Transition:
        transition = super().sync()
        if position is not None and self.enabled and position != self.position:
            self.position = position
            if transition is Transition.NONE:
                transition = Transition.UPDATE
        return transition

    def tick_voice(self, frequency: float, dt: float, printing: bool) -> bool:
        """Tick the voice timer; True when a cue should play now."""
        if self.voice_timer.duration != frequency:
            self.voice_timer = VoiceTimer(frequency)
        fired = self.voice_timer.tick(dt)
        return fired and printing


@dataclass
class BackgroundState(VisualState):
    """Current background image."""
    name: str | None = None

    def show(self, name: str) -> None:
        self.enable()
        if name != self.name:
            self.name = name
            self.dirty = True
