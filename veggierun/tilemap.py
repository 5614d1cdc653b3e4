"""Tile map loading and drawing."""

from __future__ import annotations

import os
from pathlib import Path

import pygame

from .settings import (
    BLANK_TILE,
    MAX_MAP_X,
    MAX_MAP_Y,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TILE_SIZE,
    MapData,
)
from .sprite import Sprite

MAX_TILES = 30


def parse_tiles(text: str) -> MapData:
    """Read a whitespace-separated grid of tile numbers into a MapData.

    Missing trailing values count as blank tiles. The map's pixel extent reaches
    the right-most column and the last row holding a non-blank tile.
    """
    values = iter(text.split())
    tiles: list[list[int]] = []
    last_col = 0
    last_row = 0
    for row in range(MAX_MAP_Y):
        line: list[int] = []
        for col in range(MAX_MAP_X):
            token = next(values, None)
            if token is None:
                value = BLANK_TILE
            else:
                try:
                    value = int(token)
                except ValueError:
                    raise ValueError(
                        f"bad tile value {token!r} at row {row}, column {col}"
                    ) from None
            if value > 0:
                last_col = max(last_col, col)
                last_row = row
            line.append(value)
        tiles.append(line)
    return MapData(
        map_x=(last_col + 1) * TILE_SIZE,
        map_y=(last_row + 1) * TILE_SIZE,
        tiles=tiles,
    )


def _trunc_divmod(value: int, divisor: int) -> tuple[int, int]:
    quotient = int(value / divisor)
    return quotient, value - quotient * divisor


class TileMat(Sprite):
    """Image of one kind of tile."""


class GameMap:
    """A level: its tile grid plus the images of every tile kind."""

    def __init__(self) -> None:
        self.tile_mat = [TileMat() for _ in range(MAX_TILES)]
        self.map_data = MapData()

    def load_map(self, path: str | os.PathLike[str]) -> None:
        """Load the tile grid from the text file at ``path``."""
        path = Path(path)
        map_data = parse_tiles(path.read_text(encoding="utf-8"))
        map_data.file_name = str(path)
        self.map_data = map_data

    def load_tiles(self, directory: str | os.PathLike[str]) -> None:
        """Load ``<n>.png`` from ``directory`` for every tile number that has one."""
        base = Path(directory)
        for number, tile in enumerate(self.tile_mat):
            image_path = base / f"{number}.png"
            if image_path.is_file():
                tile.load_image(image_path)

    def draw(self, surface: pygame.Surface) -> None:
        """Draw the tiles visible from the camera origin."""
        data = self.map_data
        first_col, rem_x = _trunc_divmod(data.start_x, TILE_SIZE)
        first_row, rem_y = _trunc_divmod(data.start_y, TILE_SIZE)
        x1 = -rem_x
        x2 = x1 + SCREEN_WIDTH + (0 if x1 == 0 else TILE_SIZE)
        y1 = -rem_y
        y2 = y1 + SCREEN_HEIGHT + (0 if y1 == 0 else TILE_SIZE)

        for row, screen_y in enumerate(range(y1, y2, TILE_SIZE), start=first_row):
            if not 0 <= row < min(MAX_MAP_Y, len(data.tiles)):
                continue
            line = data.tiles[row]
            for col, screen_x in enumerate(range(x1, x2, TILE_SIZE), start=first_col):
                if not 0 <= col < min(MAX_MAP_X, len(line)):
                    continue
                value = line[col]
                if 0 < value < len(self.tile_mat):
                    tile = self.tile_mat[value]
                    tile.rect.topleft = (screen_x, screen_y)
                    tile.render(surface)