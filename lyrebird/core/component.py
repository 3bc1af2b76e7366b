"""
Component base class for render-side data.

Components are plain data. The WorldRenderer attaches them to the
entities it creates and render systems read them back.

Usage:
    class Sprite(Component):
        image: Any = None
        position: tuple[float, float, float] = (0.0, 0.0, 0.0)
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Component(BaseModel):
    """
    Validated, data-only base for all components.

    Assignments are validated too, so a stage writing a bad value
    fails where it writes rather than where it draws.
    """

    model_config = ConfigDict(
        # Asset handles are plain Python objects
        arbitrary_types_allowed=True,
        validate_assignment=True,
        extra='forbid',
    )

    # Owning entity id (set by Entity.add)
    _entity_id: int | None = None
