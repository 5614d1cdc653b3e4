import math

import pygame
import pytest

from veggierun.player import Player, WalkType
from veggierun.settings import (
    BLOCKED_TILE_1,
    MAX_MAP_X,
    MAX_MAP_Y,
    PLAYER_MOVE_SPEED,
    PLAYER_RUN_SPEED,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TILE_SIZE,
    WON_TILE,
    MapData,
)


class _FakeSound:
    def __init__(self):
        self.plays = 0

    def play(self, loops=0):
        self.plays += 1


class _Clock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


def _full_map():
    return MapData(map_x=MAX_MAP_X * TILE_SIZE, map_y=MAX_MAP_Y * TILE_SIZE)


def _key(kind, key):
    return pygame.event.Event(kind, key=key)


def _with_white_sheet(player, size=16):
    sheet = pygame.Surface((size * Player.FRAME_COUNT, size))
    sheet.fill((255, 255, 255))
    player.image = sheet
    player.width_frame = size
    player.height_frame = size
    player.set_clips()


def test_starts_centred_on_screen():
    player = Player()
    assert player.x_pos == SCREEN_WIDTH // 2 - TILE_SIZE // 2
    assert player.y_pos == SCREEN_HEIGHT // 2
    assert player.status is None


def test_keydown_sets_direction_and_clears_others():
    player = Player(clock=_Clock(1000))
    sound = _FakeSound()
    player.handle_input(_key(pygame.KEYDOWN, pygame.K_a), sound)
    player.handle_input(_key(pygame.KEYDOWN, pygame.K_d), sound)
    assert player.status == WalkType.WALK_RIGHT
    assert player.input.right
    assert not player.input.left
    assert not player.input.up
    assert not player.input.down


def test_move_sound_is_throttled():
    clock = _Clock(500)
    player = Player(clock=clock)
    sound = _FakeSound()
    player.handle_input(_key(pygame.KEYDOWN, pygame.K_d), sound)
    assert sound.plays == 1
    clock.now = 600
    player.handle_input(_key(pygame.KEYDOWN, pygame.K_a), sound)
    assert sound.plays == 1
    clock.now = 800
    player.handle_input(_key(pygame.KEYDOWN, pygame.K_w), sound)
    assert sound.plays == 2


def test_shift_starts_and_stops_running():
    player = Player(clock=_Clock(0))
    sound = _FakeSound()
    player.handle_input(_key(pygame.KEYDOWN, pygame.K_LSHIFT), sound)
    assert player.status == WalkType.RUN
    assert player.is_running and player.input.run
    assert sound.plays == 1
    player.handle_input(_key(pygame.KEYUP, pygame.K_LSHIFT), sound)
    assert not player.is_running
    assert not player.input.run


def test_releasing_down_clears_status():
    player = Player(clock=_Clock(1000))
    sound = _FakeSound()
    player.handle_input(_key(pygame.KEYDOWN, pygame.K_s), sound)
    assert player.status == WalkType.WALK_DOWN
    player.handle_input(_key(pygame.KEYUP, pygame.K_s), sound)
    assert player.status is None
    assert not player.input.down


def test_walking_right_moves_by_walk_speed():
    player = Player()
    start = player.x_pos
    player.input.right = True
    player.do_player(_full_map())
    assert player.x_pos == start + PLAYER_MOVE_SPEED


def test_running_adds_run_speed():
    player = Player()
    start = player.y_pos
    player.input.down = True
    player.input.run = True
    player.do_player(_full_map())
    assert player.y_pos == start + PLAYER_MOVE_SPEED + PLAYER_RUN_SPEED
    assert player.status == WalkType.WALK_DOWN


def test_diagonal_movement_keeps_speed():
    player = Player()
    x0, y0 = player.x_pos, player.y_pos
    player.input.right = True
    player.input.up = True
    player.do_player(_full_map())
    step = math.hypot(player.x_pos - x0, player.y_pos - y0)
    assert step == pytest.approx(PLAYER_MOVE_SPEED)


def test_won_tile_under_player_sets_won():
    player = Player()
    map_data = _full_map()
    row = int(player.y_pos) // TILE_SIZE
    col = int(player.x_pos) // TILE_SIZE
    map_data.tiles[row][col] = WON_TILE
    player.check_to_map(map_data)
    assert player.is_won


def test_blocked_tile_stops_player():
    player = Player()
    player.width_frame = TILE_SIZE
    player.height_frame = TILE_SIZE
    map_data = _full_map()
    wall_col = int(player.x_pos) // TILE_SIZE + 1
    for row in range(MAX_MAP_Y):
        map_data.tiles[row][wall_col] = BLOCKED_TILE_1
    player.input.right = True
    for _ in range(30):
        player.do_player(map_data)
    assert player.x_pos + player.width_frame <= wall_col * TILE_SIZE


def test_position_clamped_to_map():
    player = Player()
    player.x_pos = -50.0
    player.y_pos = MAX_MAP_Y * TILE_SIZE + 100.0
    player.check_to_map(_full_map())
    assert player.x_pos == 0
    assert player.y_pos + player.height_frame == MAX_MAP_Y * TILE_SIZE


def test_camera_clamped_to_map_edges():
    player = Player()
    map_data = _full_map()
    player.y_pos = map_data.map_y - 10.0
    player.center_on_map(map_data)
    assert map_data.start_x == 0
    assert map_data.start_y == map_data.map_y - SCREEN_HEIGHT


def test_hitbox_lies_inside_frame():
    player = Player()
    player.width_frame = TILE_SIZE
    player.height_frame = TILE_SIZE
    player.set_map_xy(100, 200)
    frame = pygame.Rect(
        int(player.x_pos - 100), int(player.y_pos - 200), TILE_SIZE, TILE_SIZE
    )
    assert frame.contains(player.hitbox())


def test_set_clips_cover_sheet_side_by_side():
    player = Player()
    player.width_frame = 20
    player.height_frame = 30
    player.set_clips()
    assert len(player.frame_clips) == Player.FRAME_COUNT
    for index, clip in enumerate(player.frame_clips):
        assert clip == pygame.Rect(index * 20, 0, 20, 30)


def test_reset_position_restores_start():
    player = Player()
    player.x_pos = 5.0
    player.is_won = True
    player.input.left = True
    player.reset_position()
    assert player.x_pos == SCREEN_WIDTH // 2 - TILE_SIZE // 2
    assert player.status == WalkType.WALK_DOWN
    assert not player.is_won
    assert not player.input.left


def test_hit_flashes_red_then_clears():
    clock = _Clock(0)
    player = Player(clock=clock)
    _with_white_sheet(player)
    target = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT))
    player.take_damage()
    player.show(target)
    spot = (int(player.x_pos), int(player.y_pos))
    assert tuple(target.get_at(spot))[:3] == (255, 0, 0)
    clock.now = 1000
    player.show(target)
    assert not player.is_hit
    assert tuple(target.get_at(spot))[:3] == (255, 255, 255)


def test_pick_flashes_green_then_clears():
    clock = _Clock(0)
    player = Player(clock=clock)
    _with_white_sheet(player)
    target = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT))
    player.picked_item()
    player.show(target)
    spot = (int(player.x_pos), int(player.y_pos))
    assert tuple(target.get_at(spot))[:3] == (0, 255, 0)
    clock.now = 100
    player.show(target)
    assert not player.is_picked


def test_walk_animation_wraps():
    player = Player()
    _with_white_sheet(player)
    target = pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT))
    player.input.left = True
    seen = []
    for _ in range(Player.FRAME_COUNT):
        player.show(target)
        seen.append(player.frame)
    assert all(0 <= frame < Player.FRAME_COUNT for frame in seen)
    assert seen[-1] == 0
    player.input.left = False
    player.show(target)
    assert player.frame == 0


def test_show_loads_sheet_for_direction(tmp_path):
    (tmp_path / "player").mkdir()
    pygame.image.save(pygame.Surface((160, 24)), str(tmp_path / "player" / "player_right.png"))
    player = Player()
    player.asset_dir = str(tmp_path)
    player.status = WalkType.WALK_RIGHT
    player.show(pygame.Surface((SCREEN_WIDTH, SCREEN_HEIGHT)))
    assert player.width_frame == 160 // Player.FRAME_COUNT
    assert player.height_frame == 24