"""
Entity - one rendered object of the presentation stages.

The WorldRenderer creates an entity per dialogue box, choice row,
background or portrait and hands its id back as the renderer handle.
Entities only carry components; render systems do the drawing.

Usage:
    entity = world.create_entity("dialogue_box")
    entity.add(TextBlock(text=""))

    block = entity.get(TextBlock)
"""

from __future__ import annotations

import itertools
from typing import TypeVar, Iterator

from lyrebird.core.component import Component


C = TypeVar('C', bound=Component)


class Entity:
    """
    Component bag with a process-wide unique id.

    Attributes:
        active: Inactive entities are skipped by render systems
    """

    _ids = itertools.count(1)

    def __init__(self, name: str = ""):
        self._id = next(Entity._ids)
        self.name = name or f"entity_{self._id}"
        self.active = True
        self._components: dict[type[Component], Component] = {}
        self._world = None  # Owning World, which indexes our components

    @property
    def id(self) -> int:
        return self._id

    def add(self, component: C) -> C:
        """
        Attach a component.

        Raises:
            ValueError: If a component of the same type is already attached
        """
        kind = type(component)
        if kind in self._components:
            raise ValueError(f"{self.name} already has a {kind.__name__}")

        component._entity_id = self._id
        self._components[kind] = component
        if self._world is not None:
            self._world._index_component(self, kind)
        return component

    def get(self, component_type: type[C]) -> C:
        """
        Raises:
            KeyError: If no component of that type is attached
        """
        try:
            return self._components[component_type]  # type: ignore
        except KeyError:
            raise KeyError(f"{self.name} has no {component_type.__name__}") from None

    def try_get(self, component_type: type[C]) -> C | None:
        return self._components.get(component_type)  # type: ignore

    def has(self, *component_types: type[Component]) -> bool:
        return all(kind in self._components for kind in component_types)

    @property
    def components(self) -> Iterator[Component]:
        return iter(self._components.values())

    def __repr__(self) -> str:
        kinds = ", ".join(kind.__name__ for kind in self._components)
        return f"Entity({self.name}, id={self._id}, components=[{kinds}])"

    def __hash__(self) -> int:
        return hash(self._id)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Entity) and other._id == self._id
