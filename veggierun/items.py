"""Pick-up items lying on the map."""

from __future__ import annotations

import os

import pygame

from .sprite import Sprite


class Item(Sprite):
    """A single-frame pick-up placed at map coordinates."""

    def __init__(self) -> None:
        super().__init__()
        self.x_pos = 0.0
        self.y_pos = 0.0

    def load_image(self, path: str | os.PathLike[str]) -> None:
        """Load the image; the whole image is one frame."""
        super().load_image(path)
        self.width_frame = self.rect.w
        self.height_frame = self.rect.h

    def show(self, surface: pygame.Surface, cam_y: float) -> None:
        """Draw the item shifted up by the camera offset ``cam_y``."""
        self.rect.x = int(self.x_pos)
        self.rect.y = int(self.y_pos - cam_y)
        self.render(surface)


class LifeItem(Item):
    """Gives the player an extra life."""


class ScoreItem(Item):
    """Adds bonus score."""