import os
import sys
import pytest
from unittest.mock import MagicMock, patch

# Ensure lyrebird can be imported from a checkout
sys.path.append(os.getcwd())

@pytest.fixture(autouse=True)
def mock_pygame():
    """
    Global mock for pygame to allow headless testing.
    Autoused for all tests to prevent accidental window creation.
    """
    with patch('pygame.init'), \
         patch('pygame.display'), \
         patch('pygame.event'), \
         patch('pygame.time'), \
         patch('pygame.mixer'), \
         patch('pygame.image'), \
         patch('pygame.joystick'), \
         patch('pygame.key'), \
         patch('pygame.mouse'):

        import pygame
        pygame.time.get_ticks = MagicMock(return_value=0)
        pygame.joystick.get_count.return_value = 0

        yield


class FakeLoader:
    """AssetLoader handing out ready handles, one per path."""

    def __init__(self):
        self.requested = []
        self._handles = {}

    def load(self, path):
        from lyrebird.resources.assets import AssetHandle, asset_kind
        self.requested.append(path)
        if path not in self._handles:
            self._handles[path] = AssetHandle(path, asset_kind(path))
        return self._handles[path]


class RecordingRenderer:
    """Renderer that records every call and keeps live objects in a dict."""

    def __init__(self):
        self.calls = []
        self.objects = {}
        self._next = 1

    def _new(self, kind, **data):
        handle = self._next
        self._next += 1
        self.objects[handle] = {"kind": kind, **data}
        return handle

    def create_text_box(self, style, bounds, position):
        handle = self._new("text_box", text="", style=style, bounds=bounds, position=position)
        self.calls.append(("create_text_box", handle))
        return handle

    def update_text_box(self, handle, text):
        self.calls.append(("update_text_box", handle, text))
        self.objects[handle]["text"] = text

    def create_choice_item(self, label, style, bounds, label_position, cursor_image, cursor_position):
        handle = self._new(
            "choice", label=label, label_position=label_position,
            cursor_image=cursor_image, cursor_position=cursor_position, cursor_visible=False,
        )
        self.calls.append(("create_choice_item", handle, label))
        return handle

    def set_cursor_visible(self, handle, visible):
        self.objects[handle]["cursor_visible"] = visible

    def create_sprite(self, image, position):
        handle = self._new("sprite", image=image, position=position)
        self.calls.append(("create_sprite", handle))
        return handle

    def update_sprite(self, handle, image, position):
        self.calls.append(("update_sprite", handle))
        self.objects[handle].update(image=image, position=position)

    def destroy(self, handle):
        self.calls.append(("destroy", handle))
        del self.objects[handle]

    def count(self, name):
        return sum(1 for call in self.calls if call[0] == name)

    def of_kind(self, kind):
        return [obj for obj in self.objects.values() if obj["kind"] == kind]


class RecordingAudio:
    def __init__(self):
        self.played = []

    def play(self, handle):
        self.played.append(handle)


@pytest.fixture
def event_bus():
    """Fresh EventBus for each test."""
    from lyrebird.core.events import EventBus
    return EventBus()

@pytest.fixture
def world():
    """Fresh World for each test."""
    from lyrebird.core.world import World
    return World()

@pytest.fixture
def loader():
    return FakeLoader()

@pytest.fixture
def renderer():
    return RecordingRenderer()

@pytest.fixture
def audio():
    return RecordingAudio()

@pytest.fixture
def narrative(loader, renderer, audio):
    """Narrative wired to recording collaborators."""
    from lyrebird.runtime.narrative import Narrative
    return Narrative(loader, renderer=renderer, audio=audio)

@pytest.fixture
def errors(narrative):
    """Errors reported by the narrative fixture, in order."""
    from lyrebird.core.events import NarrativeEvent
    reported = []
    narrative.events.subscribe(
        NarrativeEvent.ERROR, lambda e: reported.append(e["error"]), weak=False
    )
    return reported
