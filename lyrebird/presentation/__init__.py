"""
Presentation module - settings, render boundary and state machines.
"""

from lyrebird.presentation.settings import PresentationSettings, TextStyle
from lyrebird.presentation.components import TextBlock, Sprite, ChoiceCursor
from lyrebird.presentation.renderer import Renderer, WorldRenderer
from lyrebird.presentation.render_system import PygameRenderSystem
from lyrebird.presentation.states import (
    Transition,
    VisualState,
    DialogueBoxState,
    ChoiceState,
    ActorState,
    BackgroundState,
    VoiceTimer,
)

__all__ = [
    "PresentationSettings",
    "TextStyle",
    "TextBlock",
    "Sprite",
    "ChoiceCursor",
    "Renderer",
    "WorldRenderer",
    "PygameRenderSystem",
    "Transition",
    "VisualState",
    "DialogueBoxState",
    "ChoiceState",
    "ActorState",
    "BackgroundState",
    "VoiceTimer",
]
