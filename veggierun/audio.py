"""Background music and short sound effects."""

from __future__ import annotations

import os
from typing import Any, Callable

import pygame


class AudioError(Exception):
    """Raised when music or a sound effect cannot be loaded or played."""


class Music:
    """A music track played through the mixer's single streaming channel."""

    def __init__(self, backend: Any = None) -> None:
        self._backend = backend if backend is not None else pygame.mixer.music
        self._path: str | None = None
        self._paused = False

    @property
    def loaded(self) -> bool:
        return self._path is not None

    def load(self, path: str | os.PathLike[str]) -> None:
        """Remember ``path`` as this track; raise AudioError if it is not a file."""
        self.free()
        path = os.fspath(path)
        if not os.path.isfile(path):
            raise AudioError(f"could not load music: {path}")
        self._path = path

    def play(self, loops: int = -1) -> None:
        """Start the track; -1 repeats forever. Does nothing if nothing is loaded."""
        if self._path is None:
            return
        try:
            self._backend.load(self._path)
            self._backend.play(loops)
        except pygame.error as exc:
            raise AudioError(f"failed to play music: {exc}") from exc
        self._paused = False

    def pause(self) -> None:
        if self._backend.get_busy():
            self._backend.pause()
            self._paused = True

    def resume(self) -> None:
        if self._paused:
            self._backend.unpause()
            self._paused = False

    def stop(self) -> None:
        self._backend.stop()
        self._paused = False

    def free(self) -> None:
        self._path = None
        self._paused = False


class SoundEffect:
    """A short sample played on any free mixer channel."""

    def __init__(self, loader: Callable[[str], Any] | None = None) -> None:
        self._loader = loader if loader is not None else pygame.mixer.Sound
        self._sound: Any = None

    @property
    def loaded(self) -> bool:
        return self._sound is not None

    def load(self, path: str | os.PathLike[str]) -> None:
        """Load the sample at ``path``; raise AudioError on failure."""
        self.free()
        path = os.fspath(path)
        try:
            self._sound = self._loader(path)
        except (pygame.error, OSError) as exc:
            raise AudioError(f"failed to load sound: {path}") from exc

    def play(self, loops: int = 0) -> None:
        if self._sound is not None:
            self._sound.play(loops=loops)

    def free(self) -> None:
        if self._sound is not None:
            self._sound.stop()
            self._sound = None