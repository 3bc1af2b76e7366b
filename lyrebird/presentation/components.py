"""
Render components attached to the entities the renderer creates.
"""

from __future__ import annotations

from typing import Any

from lyrebird.core.component import Component


class TextBlock(Component):
    """
    Wrapped text drawn with its top-left corner at position.

    Attributes:
        text: Text currently shown
        font: Font handle (None = pygame default font)
        font_size: Point size
        color: RGBA, 0-1 channels
        bounds: Wrap width and clip height
        position: (x, y, z) in centre-origin, y-up space
    """
    text: str = ""
    font: Any = None
    font_size: float = 45.0
    color: tuple[float, float, float, float] = (1.0, 1.0, 1.0, 1.0)
    bounds: tuple[float, float] = (350.0, 600.0)
    position: tuple[float, float, float] = (0.0, 0.0, 1.0)


class Sprite(Component):
    """An image centred on position."""
    image: Any = None
    position: tuple[float, float, float] = (0.0, 0.0, 0.0)
    visible: bool = True


class ChoiceCursor(Component):
    """Cursor image beside a choice label, shown only on the active row."""
    image: Any = None
    position: tuple[float, float, float] = (0.0, 0.0, 1.0)
    visible: bool = False
