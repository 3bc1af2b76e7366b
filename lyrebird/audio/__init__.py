"""
Audio module - voice cue playback.
"""

from lyrebird.audio.player import AudioPlayer, PygameAudioPlayer

__all__ = ["AudioPlayer", "PygameAudioPlayer"]
