"""Screen, map and gameplay constants plus the shared input and map records."""

from __future__ import annotations

from dataclasses import dataclass, field

SCREEN_WIDTH = 1024
SCREEN_HEIGHT = 768
SCREEN_BPP = 64

TILE_SIZE = 64
BLANK_TILE = 0
BLOCKED_TILE_1 = 19
BLOCKED_TILE_2 = 20
MAX_MAP_X = 16
MAX_MAP_Y = 80
WON_TILE = 4

FPS = 24

PLAYER_MOVE_SPEED = 4
PLAYER_RUN_SPEED = 6
PLAYER_LIFE = 3

LEFT = 0
RIGHT = 960
LEFT_THREAT_NUMBER = 16


@dataclass
class Input:
    """Which movement keys are currently held."""

    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    run: bool = False


def _blank_tiles() -> list[list[int]]:
    return [[BLANK_TILE] * MAX_MAP_X for _ in range(MAX_MAP_Y)]


@dataclass
class MapData:
    """Tile grid of a level together with the camera origin and pixel extent."""

    start_x: int = 0
    start_y: int = 0
    map_x: int = 0
    map_y: int = 0
    tiles: list[list[int]] = field(default_factory=_blank_tiles)
    file_name: str | None = None

    def tile_at(self, row: int, col: int) -> int:
        """Return the tile value at ``row``, ``col``; raise IndexError outside the grid."""
        if not 0 <= row < len(self.tiles):
            raise IndexError(f"row {row} outside the map")
        line = self.tiles[row]
        if not 0 <= col < len(line):
            raise IndexError(f"column {col} outside the map")
        return line[col]