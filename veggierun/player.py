"""The player character: keyboard control, movement, tile collision and drawing."""

from __future__ import annotations

import math
import os
import time
from enum import IntEnum
from typing import Any, Callable, Protocol

import pygame

from .settings import (
    BLOCKED_TILE_1,
    BLOCKED_TILE_2,
    MAX_MAP_X,
    MAX_MAP_Y,
    PLAYER_MOVE_SPEED,
    PLAYER_RUN_SPEED,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TILE_SIZE,
    WON_TILE,
    Input,
    MapData,
)
from .sprite import Sprite
from .timer import Timer

HIT_FLASH_MS = 1000
HIT_BLINK_MS = 50
PICK_FLASH_MS = 100
MOVE_SOUND_INTERVAL_MS = 200

HITBOX_OFFSET_X = 17
HITBOX_OFFSET_Y = 18

_WHITE = (255, 255, 255)
_RED = (255, 0, 0)
_GREEN = (0, 255, 0)

_BLOCKED = frozenset((BLOCKED_TILE_1, BLOCKED_TILE_2))


class WalkType(IntEnum):
    WALK_RIGHT = 0
    WALK_LEFT = 1
    WALK_UP = 2
    WALK_DOWN = 3
    RUN = 4


_STATUS_IMAGES = {
    WalkType.WALK_LEFT: os.path.join("player", "player_left.png"),
    WalkType.WALK_RIGHT: os.path.join("player", "player_right.png"),
    WalkType.WALK_UP: os.path.join("player", "player_back.png"),
    WalkType.WALK_DOWN: os.path.join("player", "player_front.png"),
}

_DIRECTION_KEYS = {
    pygame.K_d: (WalkType.WALK_RIGHT, "right"),
    pygame.K_a: (WalkType.WALK_LEFT, "left"),
    pygame.K_w: (WalkType.WALK_UP, "up"),
    pygame.K_s: (WalkType.WALK_DOWN, "down"),
}


class _Playable(Protocol):
    def play(self, loops: int = 0) -> Any: ...


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class Player(Sprite):
    """The walking character, animated over eight frames of one sprite sheet."""

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        super().__init__()
        self._clock = clock if clock is not None else _monotonic_ms
        self.asset_dir = "."
        self.x_pos = float(SCREEN_WIDTH // 2 - TILE_SIZE // 2)
        self.y_pos = float(SCREEN_HEIGHT // 2)
        self.x_val = 0.0
        self.y_val = 0.0
        self.frame_clips: list[pygame.Rect] = []
        self.input = Input()
        self.frame = 0
        self.status: WalkType | None = None
        self.map_x = 0
        self.map_y = 0
        self.is_running = False
        self.is_won = False
        self.is_hit = False
        self.hit_timer = Timer(self._clock)
        self.is_picked = False
        self.picked_timer = Timer(self._clock)
        self._last_move_sound = 0
        self._shown_status: WalkType | None = None

    def load_image(self, path: str | os.PathLike[str]) -> None:
        """Load a sprite sheet holding eight frames side by side."""
        super().load_image(path)
        self.width_frame = self.rect.w // self.FRAME_COUNT
        self.height_frame = self.rect.h

    def set_clips(self) -> None:
        """Cut the sheet into its animation frames."""
        if self.width_frame > 0 and self.height_frame > 0:
            self.frame_clips = [
                pygame.Rect(i * self.width_frame, 0, self.width_frame, self.height_frame)
                for i in range(self.FRAME_COUNT)
            ]

    def _current_tint(self) -> tuple[int, int, int]:
        tint = _WHITE
        if self.is_hit:
            ticks = self.hit_timer.elapsed()
            if ticks < HIT_FLASH_MS:
                tint = _RED if (ticks // HIT_BLINK_MS) % 2 == 0 else _WHITE
            else:
                self.is_hit = False
        if self.is_picked:
            if self.picked_timer.elapsed() < PICK_FLASH_MS:
                tint = _GREEN
            else:
                tint = _WHITE
                self.is_picked = False
        return tint

    def show(self, surface: pygame.Surface) -> None:
        """Advance the walk animation and draw the current frame."""
        sheet = _STATUS_IMAGES.get(self.status) if self.status is not None else None
        if sheet is not None and self.status != self._shown_status:
            self.load_image(os.path.join(self.asset_dir, sheet))
            self._shown_status = self.status

        tint = self._current_tint()

        moving = self.input.left or self.input.right or self.input.up or self.input.down
        self.frame = self.frame + 1 if moving else 0
        if self.frame >= self.FRAME_COUNT:
            self.frame = 0

        self.rect.x = int(self.x_pos - self.map_x)
        self.rect.y = int(self.y_pos - self.map_y)

        if self.image is None or self.width_frame <= 0 or self.height_frame <= 0:
            return
        if self.frame < len(self.frame_clips):
            clip = self.frame_clips[self.frame]
        else:
            clip = pygame.Rect(0, 0, self.width_frame, self.height_frame)
        part = self.image.subsurface(clip.clip(self.image.get_rect())).copy()
        size = (self.width_frame, self.height_frame)
        if part.get_size() != size:
            part = pygame.transform.scale(part, size)
        if tint != _WHITE:
            part.fill(tint, special_flags=pygame.BLEND_RGB_MULT)
        surface.blit(part, self.rect.topleft)

    def handle_input(self, event: Any, move_sound: _Playable) -> None:
        """Update held keys and facing from a key event."""
        key = getattr(event, "key", None)
        if event.type == pygame.KEYDOWN:
            if key in _DIRECTION_KEYS:
                status, pressed = _DIRECTION_KEYS[key]
                self.status = status
                self.input.left = pressed == "left"
                self.input.right = pressed == "right"
                self.input.up = pressed == "up"
                self.input.down = pressed == "down"
                now = self._clock()
                if now - self._last_move_sound > MOVE_SOUND_INTERVAL_MS:
                    move_sound.play()
                    self._last_move_sound = now
            elif key == pygame.K_LSHIFT:
                self.status = WalkType.RUN
                self.is_running = True
                self.input.run = True
                move_sound.play()
        elif event.type == pygame.KEYUP:
            if key == pygame.K_d:
                self.input.right = False
            elif key == pygame.K_a:
                self.input.left = False
            elif key == pygame.K_w:
                self.input.up = False
            elif key == pygame.K_s:
                self.input.down = False
                self.status = None
            elif key == pygame.K_LSHIFT:
                self.is_running = False
                self.input.run = False

    def do_player(self, map_data: MapData) -> None:
        """Move one step according to the held keys, then collide and recentre."""
        self.x_val = 0.0
        self.y_val = 0.0
        horizontal = vertical = False

        if self.input.left:
            self.x_val -= PLAYER_MOVE_SPEED
            horizontal = True
        if self.input.right:
            self.x_val += PLAYER_MOVE_SPEED
            horizontal = True
        if self.input.up:
            self.y_val -= PLAYER_MOVE_SPEED
            vertical = True
        if self.input.down:
            self.y_val += PLAYER_MOVE_SPEED
            vertical = True

        if horizontal and vertical:
            self.x_val /= math.sqrt(2.0)
            self.y_val /= math.sqrt(2.0)

        if self.input.run:
            if self.input.right:
                self.status = WalkType.WALK_RIGHT
                self.x_val += PLAYER_RUN_SPEED
            if self.input.left:
                self.status = WalkType.WALK_LEFT
                self.x_val -= PLAYER_RUN_SPEED
            if self.input.down:
                self.status = WalkType.WALK_DOWN
                self.y_val += PLAYER_RUN_SPEED
            if self.input.up:
                self.status = WalkType.WALK_UP
                self.y_val -= PLAYER_RUN_SPEED

        self.x_pos += self.x_val
        self.y_pos += self.y_val

        self.check_to_map(map_data)
        self.center_on_map(map_data)

    def check_to_map(self, map_data: MapData) -> None:
        """Detect the winning tile, stop at blocked tiles and keep inside the map."""
        x1 = int((self.x_pos + self.x_val) / TILE_SIZE)
        x2 = int((self.x_pos + self.x_val + self.width_frame) / TILE_SIZE)
        y1 = int((self.y_pos + self.y_val) / TILE_SIZE)
        y2 = int((self.y_pos + self.y_val + self.height_frame) / TILE_SIZE)

        if x1 >= 0 and x2 < MAX_MAP_X and y1 >= 0 and y2 < MAX_MAP_Y:
            tile = map_data.tile_at
            if WON_TILE in (tile(y1, x1), tile(y2, x2), tile(y1, x2)):
                self.is_won = True

            if self.x_val > 0:
                if tile(y1, x2) in _BLOCKED or tile(y2, x2) in _BLOCKED:
                    self.x_pos = x2 * TILE_SIZE - self.width_frame - 1
                    self.x_val = 0.0
            elif self.x_val < 0:
                if tile(y1, x1) in _BLOCKED or tile(y2, x1) in _BLOCKED:
                    self.x_pos = (x1 + 1) * TILE_SIZE
                    self.x_val = 0.0

            if self.y_val > 0:
                if tile(y2, x1) in _BLOCKED or tile(y2, x2) in _BLOCKED:
                    self.y_pos = y2 * TILE_SIZE - self.height_frame - 1
                    self.y_val = 0.0
            elif self.y_val < 0:
                if tile(y1, x1) in _BLOCKED or tile(y1, x2) in _BLOCKED:
                    self.y_pos = (y1 + 1) * TILE_SIZE
                    self.y_val = 0.0

        map_width = MAX_MAP_X * TILE_SIZE
        map_height = MAX_MAP_Y * TILE_SIZE
        if self.x_pos < 0:
            self.x_pos = 0.0
        elif self.x_pos + self.width_frame > map_width:
            self.x_pos = float(map_width - self.width_frame)
        if self.y_pos < 0:
            self.y_pos = 0.0
        elif self.y_pos + self.height_frame > map_height:
            self.y_pos = float(map_height - self.height_frame)

    def center_on_map(self, map_data: MapData) -> None:
        """Move the camera origin so the player sits mid-screen, clamped to the map."""
        map_data.start_x = int(self.x_pos - SCREEN_WIDTH // 2)
        if map_data.start_x < 0:
            map_data.start_x = 0
        elif map_data.start_x + SCREEN_WIDTH >= map_data.map_x:
            map_data.start_x = map_data.map_x - SCREEN_WIDTH

        map_data.start_y = int(self.y_pos - SCREEN_HEIGHT // 2)
        if map_data.start_y < 0:
            map_data.start_y = 0
        elif map_data.start_y + SCREEN_HEIGHT >= map_data.map_y:
            map_data.start_y = map_data.map_y - SCREEN_HEIGHT

    def set_map_xy(self, map_x: int, map_y: int) -> None:
        self.map_x = map_x
        self.map_y = map_y

    def reset_position(self) -> None:
        """Return to the starting spot facing down with no keys held."""
        self.x_pos = float(SCREEN_WIDTH // 2 - TILE_SIZE // 2)
        self.y_pos = float(SCREEN_HEIGHT // 2)
        self.x_val = 0.0
        self.y_val = 0.0
        self.status = WalkType.WALK_DOWN
        self.is_running = False
        self.is_won = False
        self.input = Input()

    def hitbox(self) -> pygame.Rect:
        """Screen rectangle used for collisions, smaller than the drawn frame."""
        return pygame.Rect(
            int(self.x_pos + HITBOX_OFFSET_X - self.map_x),
            int(self.y_pos + HITBOX_OFFSET_Y - self.map_y),
            self.width_frame - 2 * HITBOX_OFFSET_X,
            self.height_frame - 2 * HITBOX_OFFSET_Y,
        )

    def take_damage(self) -> None:
        self.is_hit = True
        self.hit_timer.start()

    def picked_item(self) -> None:
        self.is_picked = True
        self.picked_timer.start()