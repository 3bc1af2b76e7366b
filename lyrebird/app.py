"""
Player - a pygame window running one narrative.

Handles:
- Window creation
- One polling cycle per frame (input -> narrative -> render)
- Audio initialisation for voice cues
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

import pygame

from lyrebird.audio.player import PygameAudioPlayer
from lyrebird.core.actions import Action
from lyrebird.core.events import EngineEvent
from lyrebird.input.handler import InputHandler
from lyrebird.presentation.render_system import PygameRenderSystem
from lyrebird.presentation.settings import (
    DEFAULT_CURSOR_PATH,
    DEFAULT_FONT_PATH,
    PresentationSettings,
)
from lyrebird.resources.assets import PygameAssetLoader
from lyrebird.runtime.narrative import Narrative


logger = logging.getLogger(__name__)


class RuntimeConfig:
    """Configuration for the player window and runtime."""

    def __init__(
        self,
        title: str = "Lyrebird",
        width: int = 1600,
        height: int = 900,
        target_fps: int = 60,
        asset_root: str | Path = "assets",
        default_font_path: str = DEFAULT_FONT_PATH,
        default_cursor_path: str = DEFAULT_CURSOR_PATH,
        skip_unknown_entries: bool = False,
        master_volume: float = 1.0,
        voice_volume: float = 1.0,
        clear_color: tuple[int, int, int] = (0, 0, 0),
        max_frame_time: float = 0.25,
    ):
        self.title = title
        self.width = width
        self.height = height
        self.target_fps = target_fps
        self.asset_root = Path(asset_root)
        self.default_font_path = default_font_path
        self.default_cursor_path = default_cursor_path
        self.skip_unknown_entries = skip_unknown_entries
        self.master_volume = master_volume
        self.voice_volume = voice_volume
        self.clear_color = clear_color
        self.max_frame_time = max_frame_time


class Player:
    """
    Runs a Narrative in a pygame window.

    Usage:
        player = Player(RuntimeConfig(asset_root="assets"))
        player.narrative.start(Path("story.txt").read_text())
        player.run()
    """

    def __init__(self, config: RuntimeConfig | None = None):
        self.config = config or RuntimeConfig()
        self._running = False

        pygame.init()
        self.screen = pygame.display.set_mode((self.config.width, self.config.height))
        pygame.display.set_caption(self.config.title)

        self.audio = PygameAudioPlayer()
        self.audio.init()
        self.audio.set_master_volume(self.config.master_volume)
        self.audio.set_voice_volume(self.config.voice_volume)

        self.loader = PygameAssetLoader(self.config.asset_root)
        settings = PresentationSettings.with_defaults(
            self.loader,
            font_path=self.config.default_font_path,
            cursor_path=self.config.default_cursor_path,
        )
        self.narrative = Narrative(
            self.loader,
            audio=self.audio,
            settings=settings,
            skip_unknown_entries=self.config.skip_unknown_entries,
        )
        self.audio.event_bus = self.narrative.events
        self.input = InputHandler(self.narrative.events)
        self.narrative.world.add_system(PygameRenderSystem(self.screen))

        self._clock = pygame.time.Clock()

    def run(self) -> None:
        """Main loop; returns when the window closes or Quit is pressed."""
        self._running = True
        current_time = time.perf_counter()

        while self._running:
            new_time = time.perf_counter()
            dt = min(new_time - current_time, self.config.max_frame_time)
            current_time = new_time

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.quit()
                self.input.process_event(event)
            self.input.update()

            actions = self.input.just_pressed()
            if Action.QUIT in actions:
                self.quit()

            self.narrative.update(dt, actions)

            self.screen.fill(self.config.clear_color)
            self.narrative.render()
            pygame.display.flip()

            self._clock.tick(self.config.target_fps)

        self._shutdown()

    def quit(self) -> None:
        """Request shutdown."""
        self._running = False

    def _shutdown(self) -> None:
        logger.info("Shutting down player")
        self.narrative.events.publish(EngineEvent.GAME_QUIT)
        self.narrative.world.clear()
        self.audio.quit()
        pygame.quit()
