"""
System base classes.

A World runs its logic systems once per polling cycle in descending
priority; that ordering is what fixes the stage sequence of the
narrative pipeline. Render systems only run from World.render.

Usage:
    class PortraitSystem(RenderSystem):
        required_components = [Sprite]

        def render_entity(self, entity: Entity, alpha: float) -> None:
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, ClassVar, Iterator

from lyrebird.core.component import Component

if TYPE_CHECKING:
    from lyrebird.core.entity import Entity
    from lyrebird.core.world import World


class System(ABC):
    """
    Per-cycle logic.

    The default update() calls process_entity for every active entity
    carrying all of required_components.
    """

    required_components: ClassVar[list[type[Component]]] = []

    # Higher runs earlier
    priority: ClassVar[int] = 0

    enabled: bool = True

    def __init__(self):
        self._world: World | None = None

    @property
    def world(self) -> World:
        if self._world is None:
            raise RuntimeError(f"{type(self).__name__} is not attached to a world")
        return self._world

    def on_add(self, world: World) -> None:
        self._world = world

    def on_remove(self) -> None:
        self._world = None

    def get_entities(self) -> Iterator[Entity]:
        if self._world is None:
            return iter([])
        if not self.required_components:
            return self._world.entities
        return self._world.get_entities_with(*self.required_components)

    def update(self, dt: float) -> None:
        """
        Args:
            dt: Seconds since the previous cycle
        """
        if not self.enabled:
            return
        for entity in self.get_entities():
            if entity.active:
                self.process_entity(entity, dt)

    @abstractmethod
    def process_entity(self, entity: Entity, dt: float) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(priority={self.priority})"


class RenderSystem(System):
    """Draws entities; skipped by World.update."""

    def update(self, dt: float) -> None:
        pass

    def process_entity(self, entity: Entity, dt: float) -> None:
        pass

    def render(self, alpha: float) -> None:
        if not self.enabled:
            return
        for entity in self.get_entities():
            if entity.active:
                self.render_entity(entity, alpha)

    @abstractmethod
    def render_entity(self, entity: Entity, alpha: float) -> None:
        pass
