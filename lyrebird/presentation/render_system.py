"""
Pygame render system for the entities a WorldRenderer creates.

Draws sprites and choice cursors (centred on their position) and
wrapped text blocks (top-left at their position), ordered by z.
Asset handles that are still pending are simply skipped this frame.
"""

from __future__ import annotations

from typing import Any, Iterator

import pygame

from lyrebird.core.entity import Entity
from lyrebird.core.system import RenderSystem
from lyrebird.presentation.components import ChoiceCursor, Sprite, TextBlock


def resolve(handle: Any) -> Any:
    """Read an asset handle, passing plain values through."""
    if handle is None:
        return None
    get = getattr(handle, "get", None)
    return get() if callable(get) else handle


def to_rgba(color: tuple[float, float, float, float]) -> tuple[int, int, int, int]:
    return tuple(round(max(0.0, min(1.0, c)) * 255) for c in color)  # type: ignore


def wrap_text(font: pygame.font.Font, text: str, width: float) -> Iterator[str]:
    """Greedy word wrap; explicit newlines are kept."""
    for paragraph in text.split("\n"):
        line = ""
        for word in paragraph.split(" "):
            candidate = f"{line} {word}" if line else word
            if line and font.size(candidate)[0] > width:
                yield line
                line = word
            else:
                line = candidate
        yield line


class PygameRenderSystem(RenderSystem):
    """
    Draws narrative entities onto a pygame surface.
    """

    def __init__(self, surface: pygame.Surface):
        super().__init__()
        self.surface = surface
        self._fonts: dict[tuple[Any, int], pygame.font.Font] = {}

    def to_screen(self, x: float, y: float) -> tuple[float, float]:
        """Centre-origin, y-up to pygame screen space."""
        width, height = self.surface.get_size()
        return (width / 2 + x, height / 2 - y)

    def get_font(self, path: Any, size: float) -> pygame.font.Font:
        key = (path, int(size))
        if key not in self._fonts:
            if not pygame.font.get_init():
                pygame.font.init()
            self._fonts[key] = pygame.font.Font(path, int(size))
        return self._fonts[key]

    def render(self, alpha: float) -> None:
        if not self.enabled or self._world is None:
            return

        layers: list[tuple[float, int, Entity]] = []
        for entity in self._world.entities:
            if not entity.active:
                continue
            for component_type in (Sprite, TextBlock):
                component = entity.try_get(component_type)
                if component is not None:
                    layers.append((component.position[2], entity.id, entity))
                    break

        for _, _, entity in sorted(layers, key=lambda item: (item[0], item[1])):
            self.render_entity(entity, alpha)

    def render_entity(self, entity: Entity, alpha: float) -> None:
        sprite = entity.try_get(Sprite)
        if sprite and sprite.visible:
            self._blit_centred(resolve(sprite.image), sprite.position)

        cursor = entity.try_get(ChoiceCursor)
        if cursor and cursor.visible:
            self._blit_centred(resolve(cursor.image), cursor.position)

        block = entity.try_get(TextBlock)
        if block and block.text:
            self._draw_text(block)

    def _blit_centred(self, image: Any, position: tuple[float, float, float]) -> None:
        if image is None:
            return
        x, y = self.to_screen(position[0], position[1])
        rect = image.get_rect(center=(round(x), round(y)))
        self.surface.blit(image, rect)

    def _draw_text(self, block: TextBlock) -> None:
        font = self.get_font(resolve(block.font), block.font_size)
        color = to_rgba(block.color)
        left, top = self.to_screen(block.position[0], block.position[1])
        width, height = block.bounds
        line_height = font.get_linesize()

        y = top
        for line in wrap_text(font, block.text, width):
            if y + line_height > top + height:
                break
            rendered = font.render(line, True, color[:3])
            rendered.set_alpha(color[3])
            self.surface.blit(rendered, (round(left), round(y)))
            y += line_height
