"""
Renderer boundary for the presentation stages.

Stages never draw. They ask a Renderer to create, update and destroy
visual objects and keep the opaque integer handle it returns. The
WorldRenderer realises those objects as entities in a World, where a
render system (or anything else) can pick them up.
"""

from __future__ import annotations

from typing import Any, Protocol

from lyrebird.core.world import World
from lyrebird.presentation.components import ChoiceCursor, Sprite, TextBlock
from lyrebird.presentation.settings import TextStyle


Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


class Renderer(Protocol):
    """Create/update/destroy operations used by the presentation stages."""

    def create_text_box(self, style: TextStyle, bounds: Vec2, position: Vec3) -> int:
        ...

    def update_text_box(self, handle: int, text: str) -> None:
        ...

    def create_choice_item(
        self,
        label: str,
        style: TextStyle,
        bounds: Vec2,
        label_position: Vec3,
        cursor_image: Any,
        cursor_position: Vec3,
    ) -> int:
        ...

    def set_cursor_visible(self, handle: int, visible: bool) -> None:
        ...

    def create_sprite(self, image: Any, position: Vec3) -> int:
        ...

    def update_sprite(self, handle: int, image: Any, position: Vec3) -> None:
        ...

    def destroy(self, handle: int) -> None:
        ...


class WorldRenderer:
    """Renderer that stores every visual object as an entity in a World."""

    def __init__(self, world: World):
        self.world = world

    def create_text_box(self, style: TextStyle, bounds: Vec2, position: Vec3) -> int:
        entity = self.world.create_entity("dialogue_box")
        entity.add(TextBlock(
            font=style.font,
            font_size=style.font_size,
            color=style.color,
            bounds=bounds,
            position=position,
        ))
        return entity.id

    def update_text_box(self, handle: int, text: str) -> None:
        entity = self.world.get_entity(handle)
        if entity:
            entity.get(TextBlock).text = text

    def create_choice_item(
        self,
        label: str,
        style: TextStyle,
        bounds: Vec2,
        label_position: Vec3,
        cursor_image: Any,
        cursor_position: Vec3,
    ) -> int:
        entity = self.world.create_entity(f"choice:{label}")
        entity.add(TextBlock(
            text=label,
            font=style.font,
            font_size=style.font_size,
            color=style.color,
            bounds=bounds,
            position=label_position,
        ))
        entity.add(ChoiceCursor(image=cursor_image, position=cursor_position))
        return entity.id

    def set_cursor_visible(self, handle: int, visible: bool) -> None:
        entity = self.world.get_entity(handle)
        if entity:
            entity.get(ChoiceCursor).visible = visible

    def create_sprite(self, image: Any, position: Vec3) -> int:
        entity = self.world.create_entity("sprite")
        entity.add(Sprite(image=image, position=position))
        return entity.id

    def update_sprite(self, handle: int, image: Any, position: Vec3) -> None:
        entity = self.world.get_entity(handle)
        if entity:
            sprite = entity.get(Sprite)
            sprite.image = image
            sprite.position = position

    def destroy(self, handle: int) -> None:
        self.world.destroy_entity(handle)
