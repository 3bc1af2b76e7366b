import pytest
from unittest.mock import MagicMock, patch
from pydantic import ValidationError

from lyrebird.presentation.components import ChoiceCursor, Sprite, TextBlock
from lyrebird.presentation.renderer import WorldRenderer
from lyrebird.presentation.render_system import PygameRenderSystem, to_rgba, wrap_text
from lyrebird.presentation.settings import (
    DEFAULT_BOX_POSITION,
    DEFAULT_FONT_PATH,
    PresentationSettings,
    TextStyle,
)

def test_settings_defaults(loader):
    settings = PresentationSettings.with_defaults(loader)

    assert settings.text_style.font.path == DEFAULT_FONT_PATH
    assert settings.text_style.font_size == 45.0
    assert settings.box_position == DEFAULT_BOX_POSITION
    assert settings.box_text_speed == 100.0
    assert settings.voice_frequency == 0.1
    assert settings.cursor_sprite.path == "images/cursor.png"

def test_settings_validate_assignment():
    style = TextStyle()

    with pytest.raises(ValidationError):
        style.color = (1.0, 2.0, 1.0, 1.0)
    with pytest.raises(ValidationError):
        style.font_size = 0

    settings = PresentationSettings()
    with pytest.raises(ValidationError):
        settings.box_text_speed = -1.0

def test_world_renderer_text_box(world):
    renderer = WorldRenderer(world)
    handle = renderer.create_text_box(TextStyle(), (300.0, 200.0), (1.0, 2.0, 3.0))

    renderer.update_text_box(handle, "Hel")

    block = world.get_entity(handle).get(TextBlock)
    assert block.text == "Hel"
    assert block.bounds == (300.0, 200.0)
    assert block.position == (1.0, 2.0, 3.0)

def test_world_renderer_choice_item(world):
    renderer = WorldRenderer(world)
    handle = renderer.create_choice_item(
        "Stay", TextStyle(), (300.0, 200.0), (25.0, 0.0, 1.0), "cursor", (0.0, -16.0, 1.0)
    )

    entity = world.get_entity(handle)
    assert entity.get(TextBlock).text == "Stay"
    assert entity.get(ChoiceCursor).visible is False

    renderer.set_cursor_visible(handle, True)
    assert entity.get(ChoiceCursor).visible is True

def test_world_renderer_sprite_lifecycle(world):
    renderer = WorldRenderer(world)
    handle = renderer.create_sprite("forest", (0.0, 0.0, 0.0))

    renderer.update_sprite(handle, "night", (5.0, 5.0, 0.0))
    sprite = world.get_entity(handle).get(Sprite)
    assert sprite.image == "night"
    assert sprite.position == (5.0, 5.0, 0.0)

    renderer.destroy(handle)
    world.update(0.0)
    assert world.get_entity(handle) is None

def test_to_rgba():
    assert to_rgba((1.0, 0.0, 0.5, 1.0)) == (255, 0, 128, 255)

def test_wrap_text():
    font = MagicMock()
    font.size.side_effect = lambda text: (len(text) * 10, 10)

    lines = list(wrap_text(font, "the quick brown fox\njumps", 100))

    assert lines == ["the quick", "brown fox", "jumps"]

def test_render_system_to_screen():
    surface = MagicMock()
    surface.get_size.return_value = (800, 600)
    system = PygameRenderSystem(surface)

    assert system.to_screen(0, 0) == (400, 300)
    assert system.to_screen(-100, 50) == (300, 250)

def test_render_system_draws_sprites_by_z(world):
    surface = MagicMock()
    surface.get_size.return_value = (800, 600)
    system = PygameRenderSystem(surface)
    world.add_system(system)

    front = MagicMock(spec=["get_rect"])
    back = MagicMock(spec=["get_rect"])
    renderer = WorldRenderer(world)
    renderer.create_sprite(front, (0.0, 0.0, 2.0))
    renderer.create_sprite(back, (0.0, 0.0, 0.0))

    world.render()

    blitted = [call.args[0] for call in surface.blit.call_args_list]
    assert blitted == [back, front]
    back.get_rect.assert_called_once_with(center=(400, 300))

def test_render_system_skips_pending_images(world):
    surface = MagicMock()
    surface.get_size.return_value = (800, 600)
    world.add_system(PygameRenderSystem(surface))

    pending = MagicMock()
    pending.get.return_value = None
    WorldRenderer(world).create_sprite(pending, (0.0, 0.0, 0.0))

    world.render()

    surface.blit.assert_not_called()

def test_render_system_draws_text(world):
    surface = MagicMock()
    surface.get_size.return_value = (800, 600)
    world.add_system(PygameRenderSystem(surface))

    renderer = WorldRenderer(world)
    handle = renderer.create_text_box(TextStyle(), (300.0, 200.0), (-100.0, 100.0, 1.0))
    renderer.update_text_box(handle, "Hello")

    with patch("pygame.font") as font_module:
        font = font_module.Font.return_value
        font.size.return_value = (50, 20)
        font.get_linesize.return_value = 20
        world.render()

    font.render.assert_called_once_with("Hello", True, (255, 255, 255))
    surface.blit.assert_called_once_with(font.render.return_value, (300, 200))
