"""
Voice cue playback.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

import pygame

from lyrebird.core.events import EventBus, AudioEvent


class AudioPlayer(Protocol):
    """Fire-and-forget playback of a sound handle."""

    def play(self, handle: Any) -> None:
        ...


class PygameAudioPlayer:
    """
    Plays voice cues through pygame.mixer.

    Handles:
    - Mixer initialisation
    - Master and voice volume
    - Skipping handles whose sound is not loaded yet
    """

    def __init__(self, event_bus: EventBus | None = None):
        self.event_bus = event_bus
        self._master_volume: float = 1.0
        self._voice_volume: float = 1.0
        self._initialized: bool = False

    def init(self, frequency: int = 44100, size: int = -16, channels: int = 2, buffer: int = 512) -> None:
        """Initialize the audio system."""
        if pygame.mixer.get_init():
            self._initialized = True
            return

        try:
            pygame.mixer.init(frequency=frequency, size=size, channels=channels, buffer=buffer)
            pygame.mixer.set_num_channels(16)
            self._initialized = True
            logging.info("Audio system initialized.")
        except pygame.error as e:
            logging.error(f"Failed to initialize audio system: {e}")

    def quit(self) -> None:
        pygame.mixer.quit()
        self._initialized = False

    def set_master_volume(self, volume: float) -> None:
        """Set master volume (0.0 to 1.0)."""
        self._master_volume = max(0.0, min(1.0, volume))

    def set_voice_volume(self, volume: float) -> None:
        """Set voice cue volume (0.0 to 1.0)."""
        self._voice_volume = max(0.0, min(1.0, volume))

    def play(self, handle: Any) -> pygame.mixer.Channel | None:
        """
        Play a voice cue.

        Returns:
            The channel used, or None if nothing played.
        """
        if not self._initialized:
            return None

        sound = handle.get() if hasattr(handle, "get") else handle
        if sound is None:
            return None

        channel = pygame.mixer.find_channel(True)
        if not channel:
            return None

        channel.set_volume(self._master_volume * self._voice_volume)
        channel.play(sound)

        if self.event_bus:
            self.event_bus.publish(AudioEvent.VOICE_PLAYED, sound=getattr(handle, "path", None))

        return channel
