"""
World - runs the pipeline stages and stores the rendered objects.

A Narrative registers its stages here as systems; the WorldRenderer
stores every visual it is asked for as an entity. Entity removal is
deferred to the end of World.update, so a stage may destroy an object
another stage still reads in the same cycle.

Usage:
    world = World()
    world.add_system(ScriptParseSystem(context, parser))

    # One polling cycle:
    world.update(dt)
    world.render(alpha)
"""

from __future__ import annotations

from typing import Iterator

from lyrebird.core.component import Component
from lyrebird.core.entity import Entity
from lyrebird.core.events import EngineEvent, EventBus
from lyrebird.core.system import RenderSystem, System


class World:
    """Entities, a component index over them, and the systems to run."""

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus or EventBus()

        self._entities: dict[int, Entity] = {}
        self._doomed: list[int] = []
        # component type -> ids of entities carrying it
        self._index: dict[type[Component], set[int]] = {}

        # Both kept sorted by descending priority
        self._systems: list[System] = []
        self._render_systems: list[RenderSystem] = []

    # Entities

    def create_entity(self, name: str = "") -> Entity:
        entity = Entity(name)
        entity._world = self
        self._entities[entity.id] = entity
        self.event_bus.publish(EngineEvent.ENTITY_CREATED, entity=entity)
        return entity

    def destroy_entity(self, entity: Entity | int) -> None:
        """Queue an entity (or entity id) for removal at the end of this cycle."""
        entity_id = entity.id if isinstance(entity, Entity) else entity
        if entity_id in self._entities and entity_id not in self._doomed:
            self._doomed.append(entity_id)

    def _flush_destroyed(self) -> None:
        for entity_id in self._doomed:
            entity = self._entities.pop(entity_id, None)
            if entity is None:
                continue
            for component in entity.components:
                self._index.get(type(component), set()).discard(entity_id)
            entity._world = None
            self.event_bus.publish(EngineEvent.ENTITY_DESTROYED, entity=entity)
        self._doomed.clear()

    def get_entity(self, entity_id: int) -> Entity | None:
        return self._entities.get(entity_id)

    def is_pending_destroy(self, entity_id: int) -> bool:
        return entity_id in self._doomed

    @property
    def entities(self) -> Iterator[Entity]:
        return iter(self._entities.values())

    @property
    def entity_count(self) -> int:
        return len(self._entities)

    def _index_component(self, entity: Entity, component_type: type[Component]) -> None:
        self._index.setdefault(component_type, set()).add(entity.id)

    def get_entities_with(self, *component_types: type[Component]) -> Iterator[Entity]:
        """Entities carrying every given component type, oldest first."""
        if not component_types:
            return iter([])

        ids = set(self._index.get(component_types[0], ()))
        for kind in component_types[1:]:
            ids &= self._index.get(kind, set())

        return (self._entities[i] for i in sorted(ids) if i in self._entities)

    # Systems

    def add_system(self, system: System) -> None:
        systems = self._render_systems if isinstance(system, RenderSystem) else self._systems
        systems.append(system)
        systems.sort(key=lambda s: -s.priority)
        system.on_add(self)

    def remove_system(self, system: System) -> None:
        systems = self._render_systems if isinstance(system, RenderSystem) else self._systems
        if system in systems:
            systems.remove(system)
            system.on_remove()

    def get_system(self, system_type: type[System]) -> System | None:
        for system in self._systems + self._render_systems:
            if isinstance(system, system_type):
                return system
        return None

    @property
    def systems(self) -> list[System]:
        """Logic systems in execution order."""
        return list(self._systems)

    # Cycle

    def update(self, dt: float) -> None:
        """Run every enabled logic system once, then drop destroyed entities."""
        for system in self._systems:
            if system.enabled:
                system.update(dt)
        self._flush_destroyed()

    def render(self, alpha: float = 1.0) -> None:
        for system in self._render_systems:
            if system.enabled:
                system.render(alpha)

    def clear(self) -> None:
        """Drop every entity and detach every system."""
        for entity_id in list(self._entities):
            self.destroy_entity(entity_id)
        self._flush_destroyed()

        for system in self._systems + self._render_systems:
            self.remove_system(system)
        self._index.clear()
