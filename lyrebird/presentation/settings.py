"""
Presentation settings shared by every presentation stage.

Settings entries in a script mutate these; everything else only
reads them. Positions live in a centre-origin, y-up space.
"""

from __future__ import annotations

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field

from lyrebird.resources.assets import AssetLoader


DEFAULT_FONT_PATH = "fonts/Silver.ttf"
DEFAULT_FONT_SIZE = 45.0
DEFAULT_TEXT_COLOR = (1.0, 1.0, 1.0, 1.0)
DEFAULT_CURSOR_PATH = "images/cursor.png"
DEFAULT_BOX_SIZE = (350.0, 600.0)
DEFAULT_BOX_POSITION = (-600.0, 100.0, 1.0)
DEFAULT_TEXT_SPEED = 100.0
DEFAULT_VOICE_FREQUENCY = 0.1
DEFAULT_CHOICE_SPACING = 40.0
DEFAULT_CHOICE_INDENT = 25.0
DEFAULT_CURSOR_OFFSET = 16.0
DEFAULT_PORTRAIT_POSITION = (-425.0, 225.0, 1.0)


Channel = Annotated[float, Field(ge=0.0, le=1.0)]
Color = tuple[Channel, Channel, Channel, Channel]
Vec2 = tuple[float, float]
Vec3 = tuple[float, float, float]


class TextStyle(BaseModel):
    """Font handle, size and RGBA colour (0-1 channels)."""

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    font: Any = None
    font_size: float = Field(DEFAULT_FONT_SIZE, gt=0)
    color: Color = DEFAULT_TEXT_COLOR


class PresentationSettings(BaseModel):
    """
    Mutable presentation configuration.

    Attributes:
        text_style: Style for the dialogue box and choice labels
        cursor_sprite: Image handle for the choice cursor
        box_size: Wrap bounds of the dialogue box
        box_position: Dialogue box anchor; choices hang below it
        box_text_speed: Typewriter speed in characters per second
        voice_frequency: Seconds between voice cues
        choice_spacing: Vertical distance between choice rows
        choice_indent: Horizontal offset of labels from the cursor column
        cursor_offset: Vertical offset of the cursor from its row
        portrait_position: Actor portrait anchor
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, validate_assignment=True)

    text_style: TextStyle = Field(default_factory=TextStyle)
    cursor_sprite: Any = None
    box_size: Vec2 = DEFAULT_BOX_SIZE
    box_position: Vec3 = DEFAULT_BOX_POSITION
    box_text_speed: float = Field(DEFAULT_TEXT_SPEED, ge=0)
    voice_frequency: float = DEFAULT_VOICE_FREQUENCY
    choice_spacing: float = DEFAULT_CHOICE_SPACING
    choice_indent: float = DEFAULT_CHOICE_INDENT
    cursor_offset: float = DEFAULT_CURSOR_OFFSET
    portrait_position: Vec3 = DEFAULT_PORTRAIT_POSITION

    @classmethod
    def with_defaults(
        cls,
        loader: AssetLoader,
        font_path: str = DEFAULT_FONT_PATH,
        cursor_path: str = DEFAULT_CURSOR_PATH,
    ) -> PresentationSettings:
        """Default settings with the default font and cursor requested from loader."""
        return cls(
            text_style=TextStyle(font=loader.load(font_path)),
            cursor_sprite=loader.load(cursor_path),
        )
