"""
Asset handles and the pygame-backed asset loader.

The narrative core never touches files. It asks an AssetLoader for a
handle by path and stores the handle in its tables; whoever draws or
plays the resource reads the handle each frame until it is ready.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from pathlib import Path
from typing import Any, Callable, Protocol

import pygame


logger = logging.getLogger(__name__)


class AssetKind(Enum):
    """What a path resolves to."""
    IMAGE = auto()
    SOUND = auto()
    FONT = auto()
    UNKNOWN = auto()


class LoadState(Enum):
    """Resolution state of a handle."""
    PENDING = auto()
    LOADED = auto()
    FAILED = auto()


IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tga", ".webp"}
SOUND_SUFFIXES = {".wav", ".ogg", ".mp3", ".flac"}
FONT_SUFFIXES = {".ttf", ".otf", ".fon"}


def asset_kind(path: str) -> AssetKind:
    """Guess the asset kind from a path suffix."""
    suffix = Path(path).suffix.lower()
    if suffix in IMAGE_SUFFIXES:
        return AssetKind.IMAGE
    if suffix in SOUND_SUFFIXES:
        return AssetKind.SOUND
    if suffix in FONT_SUFFIXES:
        return AssetKind.FONT
    return AssetKind.UNKNOWN


class AssetHandle:
    """
    Opaque reference to a resource that may not be loaded yet.

    Reads never block on anything but the resolver itself; a resolver
    returning None leaves the handle pending so the next read retries.
    """

    def __init__(self, path: str, kind: AssetKind, resolver: Callable[[], Any] | None = None):
        self.path = path
        self.kind = kind
        self._resolver = resolver
        self._value: Any = None
        self._state = LoadState.PENDING if resolver else LoadState.LOADED

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def ready(self) -> bool:
        return self.get() is not None

    def get(self) -> Any:
        """Latest known resource, or None while pending / after failure."""
        if self._state is LoadState.PENDING and self._resolver is not None:
            try:
                value = self._resolver()
            except (pygame.error, OSError) as e:
                logger.warning(f"Failed to load asset {self.path}: {e}")
                self._state = LoadState.FAILED
                return None
            if value is not None:
                self._value = value
                self._state = LoadState.LOADED
        return self._value

    def __repr__(self) -> str:
        return f"AssetHandle({self.path!r}, {self.kind.name}, {self._state.name})"


class AssetLoader(Protocol):
    """Resolves a path string to a handle."""

    def load(self, path: str) -> AssetHandle:
        ...


class PygameAssetLoader:
    """
    Loads images, sounds and fonts with pygame, caching handles by path.

    Fonts resolve to their file path; the renderer opens them at the
    size the current text style asks for.
    """

    def __init__(self, root: str | Path = "assets"):
        self.root = Path(root)
        self._handles: dict[str, AssetHandle] = {}

    def load(self, path: str) -> AssetHandle:
        if path in self._handles:
            return self._handles[path]

        kind = asset_kind(path)
        handle = AssetHandle(path, kind, self._resolver(kind, self.root / path))
        self._handles[path] = handle
        logger.debug(f"Requested {kind.name.lower()} asset {path}")
        return handle

    def _resolver(self, kind: AssetKind, full_path: Path) -> Callable[[], Any]:
        def resolve() -> Any:
            if not full_path.exists():
                raise FileNotFoundError(full_path)
            if kind is AssetKind.IMAGE:
                return pygame.image.load(str(full_path))
            if kind is AssetKind.SOUND:
                # Mixer may come up later; stay pending until it does
                if not pygame.mixer.get_init():
                    return None
                return pygame.mixer.Sound(str(full_path))
            return str(full_path)

        return resolve

    def clear(self) -> None:
        """Forget all cached handles."""
        self._handles.clear()
