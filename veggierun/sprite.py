"""Base drawable object: an image, its placement and its animation frame size."""

from __future__ import annotations

import os

import pygame


class ImageLoadError(Exception):
    """Raised when an image file cannot be loaded."""


class Sprite:
    """An image placed on screen at ``rect``, split into frames of ``width_frame``."""

    FRAME_COUNT = 8

    def __init__(self) -> None:
        self.image: pygame.Surface | None = None
        self.rect = pygame.Rect(0, 0, 0, 0)
        self.width_frame = 0
        self.height_frame = 0

    def load_image(self, path: str | os.PathLike[str]) -> None:
        """Load the image at ``path``, replacing any previous one."""
        self.free()
        path = os.fspath(path)
        try:
            image = pygame.image.load(path)
        except (pygame.error, OSError) as exc:
            raise ImageLoadError(f"could not load image: {path}") from exc
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            image = image.convert_alpha()
        self.image = image
        self.rect.w, self.rect.h = image.get_size()
        self.width_frame = self.rect.w // self.FRAME_COUNT
        self.height_frame = self.rect.h

    def render(self, surface: pygame.Surface, clip: pygame.Rect | None = None) -> None:
        """Draw the image, or the ``clip`` part of it, stretched to ``rect``."""
        if self.image is None:
            return
        part = self.image if clip is None else self.image.subsurface(clip)
        if part.get_size() != self.rect.size:
            part = pygame.transform.scale(part, self.rect.size)
        surface.blit(part, self.rect.topleft)

    def free(self) -> None:
        if self.image is not None:
            self.image = None
            self.rect.w = 0
            self.rect.h = 0

    def frame_rect(self) -> pygame.Rect:
        """Position of the sprite with the size of one animation frame."""
        return pygame.Rect(self.rect.x, self.rect.y, self.width_frame, self.height_frame)