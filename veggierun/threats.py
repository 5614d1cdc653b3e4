"""Cars crossing the road lanes."""

from __future__ import annotations

import os
import random
from typing import Any

import pygame

from .settings import SCREEN_WIDTH
from .sprite import Sprite

THREAT_FRAME_NUM = 8
THREAT_SPEED = 10
COME_BACK_LIMIT = 10


class Threat(Sprite):
    """A car driving along one lane and reappearing at its start after leaving."""

    def __init__(self, rng: Any = None) -> None:
        super().__init__()
        self._rng = rng if rng is not None else random.Random()
        self.x_pos = 0.0
        self.y_pos = 0.0
        self.x_val = 0.0
        self.y_val = 0.0
        self.start_x = 0.0
        self.start_y = 0.0
        self.map_x = 0.0
        self.map_y = 0.0
        self.direction = 1
        self.speed = 0.0
        self.come_back_time = 0
        self.frame = 0
        self.frame_clips: list[pygame.Rect] = []

    def load_image(self, path: str | os.PathLike[str]) -> None:
        """Load a sheet of eight frames side by side."""
        super().load_image(path)
        self.width_frame = self.rect.w // THREAT_FRAME_NUM
        self.height_frame = self.rect.h

    def set_clips(self) -> None:
        if self.width_frame > 0 and self.height_frame > 0:
            self.frame_clips = [
                pygame.Rect(i * self.width_frame, 0, self.width_frame, self.height_frame)
                for i in range(THREAT_FRAME_NUM)
            ]

    def show(self, surface: pygame.Surface, cam_y: float) -> None:
        """Draw the next animation frame while the car is on the road."""
        if self.come_back_time != 0:
            return
        self.rect.x = int(self.x_pos)
        self.rect.y = int(self.y_pos - cam_y)
        self.frame += 1
        if self.frame >= THREAT_FRAME_NUM:
            self.frame = 0
        if self.image is None or self.width_frame <= 0 or self.height_frame <= 0:
            return
        if self.frame < len(self.frame_clips):
            clip = self.frame_clips[self.frame]
        else:
            clip = pygame.Rect(0, 0, self.width_frame, self.height_frame)
        part = self.image.subsurface(clip.clip(self.image.get_rect()))
        size = (self.width_frame, self.height_frame)
        if part.get_size() != size:
            part = pygame.transform.scale(part, size)
        surface.blit(part, self.rect.topleft)

    def update(self) -> None:
        """Drive one step, or count down the wait before returning to the start."""
        if self.come_back_time == 0:
            self.x_val = self.speed
            self.x_pos += self.x_val * self.direction
            self.y_val = 0.0
            if self.x_pos + self.width_frame < 0 or self.x_pos >= SCREEN_WIDTH:
                self.come_back_time = self._rng.randrange(COME_BACK_LIMIT)
        elif self.come_back_time > 0:
            self.come_back_time -= 1
            if self.come_back_time == 0:
                self.x_pos = self.start_x
                self.x_val = 0.0
                self.y_val = 0.0