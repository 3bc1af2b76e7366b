"""
Typed event bus between the runtime and its host.

Event types are Enum members, never strings. The narrative publishes
script loads, entry changes, choice activity, voice cues and every
recoverable error here; hosts subscribe instead of polling state.

Usage:
    event_bus.subscribe(NarrativeEvent.ERROR, on_error)
    event_bus.publish(NarrativeEvent.ENTRY_CHANGED, index=3)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Callable
from weakref import WeakMethod, ref


logger = logging.getLogger(__name__)


class EngineEvent(Enum):
    """World and host lifecycle."""
    ENTITY_CREATED = auto()
    ENTITY_DESTROYED = auto()
    GAME_QUIT = auto()


class NarrativeEvent(Enum):
    """Script and interpreter events."""
    SCRIPT_LOADED = auto()
    SCRIPT_REJECTED = auto()
    ENTRY_CHANGED = auto()
    CHOICE_OPENED = auto()
    CHOICE_CONFIRMED = auto()
    VOICE_CUE = auto()
    RUN_CONCLUDED = auto()
    ERROR = auto()


class AudioEvent(Enum):
    VOICE_PLAYED = auto()


@dataclass
class Event:
    """
    A published event.

    Attributes:
        type: Enum member it was published under
        data: Keyword arguments given to publish()
        consumed: Set by a handler to stop lower-priority handlers
    """
    type: Enum
    data: dict[str, Any] = field(default_factory=dict)
    consumed: bool = False

    def consume(self) -> None:
        self.consumed = True

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]


EventHandler = Callable[[Event], None]


@dataclass(eq=False)
class _Subscription:
    priority: int
    target: Any  # handler, or a weak reference to it
    one_shot: bool
    weak: bool

    def resolve(self) -> EventHandler | None:
        return self.target() if self.weak else self.target


class EventBus:
    """
    Publish/subscribe by Enum event type.

    Handlers run highest priority first. By default they are held
    weakly and drop out once garbage collected. Events published from
    inside a handler are queued until the current dispatch finishes.
    A handler that raises is logged and the rest still run.
    """

    def __init__(self):
        self._subscriptions: dict[Enum, list[_Subscription]] = {}
        self._pending: list[Event] = []
        self._dispatching = False

    def subscribe(
        self,
        event_type: Enum,
        handler: EventHandler,
        priority: int = 0,
        one_shot: bool = False,
        weak: bool = True,
    ) -> None:
        """
        Args:
            event_type: Event to listen for
            handler: Called with the Event
            priority: Higher runs first; equal priorities keep subscription order
            one_shot: Drop the handler after its first call
            weak: Hold only a weak reference (keep lambdas alive with weak=False)
        """
        if weak:
            target = WeakMethod(handler) if hasattr(handler, "__self__") else ref(handler)
        else:
            target = handler

        subscriptions = self._subscriptions.setdefault(event_type, [])
        position = next(
            (i for i, s in enumerate(subscriptions) if priority > s.priority),
            len(subscriptions),
        )
        subscriptions.insert(position, _Subscription(priority, target, one_shot, weak))

    def unsubscribe(self, event_type: Enum, handler: EventHandler) -> None:
        subscriptions = self._subscriptions.get(event_type)
        if subscriptions:
            subscriptions[:] = [s for s in subscriptions if s.resolve() != handler]

    def publish(self, event_type: Enum, **data: Any) -> Event:
        """Publish and return the Event (check .consumed to see if it was handled)."""
        event = Event(type=event_type, data=data)
        if self._dispatching:
            self._pending.append(event)
        else:
            self._dispatch(event)
        return event

    def _dispatch(self, event: Event) -> None:
        subscriptions = self._subscriptions.get(event.type)
        if not subscriptions:
            return

        self._dispatching = True
        finished = []
        try:
            for subscription in list(subscriptions):
                handler = subscription.resolve()
                if handler is None:
                    finished.append(subscription)
                    continue

                try:
                    handler(event)
                except Exception:
                    logger.exception("Error in event handler for %s", event.type)

                if subscription.one_shot:
                    finished.append(subscription)
                if event.consumed:
                    break
        finally:
            for subscription in finished:
                if subscription in subscriptions:
                    subscriptions.remove(subscription)
            self._dispatching = False

        while self._pending:
            self._dispatch(self._pending.pop(0))
