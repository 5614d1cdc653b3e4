import pytest

from veggierun.settings import (
    BLANK_TILE,
    MAX_MAP_X,
    MAX_MAP_Y,
    Input,
    MapData,
)


def test_input_starts_released():
    keys = Input()
    assert (keys.left, keys.right, keys.up, keys.down, keys.run) == (
        False,
        False,
        False,
        False,
        False,
    )


def test_map_has_full_blank_grid():
    data = MapData()
    assert len(data.tiles) == MAX_MAP_Y
    assert all(len(row) == MAX_MAP_X for row in data.tiles)
    assert all(value == BLANK_TILE for row in data.tiles for value in row)


def test_maps_do_not_share_tiles():
    first = MapData()
    second = MapData()
    first.tiles[3][4] = 7
    assert second.tile_at(3, 4) == BLANK_TILE


def test_tile_at_reads_value():
    data = MapData()
    data.tiles[MAX_MAP_Y - 1][MAX_MAP_X - 1] = 9
    assert data.tile_at(MAX_MAP_Y - 1, MAX_MAP_X - 1) == 9


@pytest.mark.parametrize(
    "row, col",
    [(-1, 0), (0, -1), (MAX_MAP_Y, 0), (0, MAX_MAP_X)],
)
def test_tile_at_outside_grid(row, col):
    with pytest.raises(IndexError):
        MapData().tile_at(row, col)