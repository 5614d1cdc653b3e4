"""The game loop: menus, level play, collisions, scoring and restarts."""

from __future__ import annotations

import argparse
import os
import random
import sys
import time
from pathlib import Path
from typing import Any

import pygame

from .audio import AudioError, Music, SoundEffect
from .items import LifeItem, ScoreItem
from .menu import (
    ButtonAction,
    GameOverScreen,
    HowToPlayScreen,
    PauseScreen,
    Screen,
    StartMenu,
    WonScreen,
)
from .player import Player
from .rules import (
    check_collision,
    item_tile_positions,
    update_high_score,
    won_score,
)
from .settings import (
    FPS,
    LEFT,
    LEFT_THREAT_NUMBER,
    PLAYER_LIFE,
    RIGHT,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TILE_SIZE,
)
from .sprite import ImageLoadError
from .threats import THREAT_SPEED, Threat
from .tilemap import GameMap
from .timer import Timer

WINDOW_TITLE = "Mell bell don't like vegatable"

ITEM_COUNT = 10
SCORE_ITEM_BONUS = 100
INVINCIBLE_MS = 1000
THREAT_SPEED_SPREAD = 50

HEART_SIZE = 30
HEART_SPACING = 35
HEART_MARGIN_RIGHT = 40
HEART_TOP = 10

HUD_FONT_SIZE = 24
RESULT_FONT_SIZE = 40
HUD_TEXT_COLOR = (255, 255, 255)
RESULT_TEXT_COLOR = (0, 0, 0)
BACKGROUND_COLOR = (255, 255, 255)
CLEAR_COLOR = (0, 0, 0)
GAME_OVER_TEXT_Y = 256
WON_TEXT_Y = 440
TEXT_GAP = 16

_THREAT_FILES_LEFT = ("car01_left.png", "car02_left.png", "car03_left.png")
_THREAT_FILES_RIGHT = ("car01_right.png", "car02_right.png", "car03_right.png")

_SCREEN_ERRORS = (ImageLoadError, ValueError, OSError, pygame.error)


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class _Silent:
    """Stand-in sound used before the real effects are loaded."""

    def play(self, loops: int = 0) -> None:
        return None


class Game:
    """Owns the window, the level and every object in it, and runs the loop."""

    def __init__(self) -> None:
        self.asset_dir: str | os.PathLike[str] = "."
        self.rng: Any = random.Random()
        self.clock = _monotonic_ms
        self.surface: pygame.Surface | None = None

        self.is_running = True
        self.is_invincible = False
        self.is_paused = False

        self.game_map = GameMap()
        self.player = Player(self._now)
        self.fps_timer = Timer(self._now)
        self.invincible_timer = Timer(self._now)
        self.game_timer = Timer(self._now)

        self.music = Music()
        self.lost_music = Music()
        self.won_music = Music()
        self.start_music = Music()
        self.move_sound: Any = SoundEffect()
        self.hit_sound: Any = SoundEffect()
        self.buff_sound: Any = SoundEffect()
        self.click_sound: Any = SoundEffect()

        self.threats: list[Threat] = []
        self.life_items: list[LifeItem] = []
        self.score_items: list[ScoreItem] = []

        self.life = PLAYER_LIFE
        self.bonus_score = 0
        self.heart_image: pygame.Surface | None = None
        self.timer_font: pygame.font.Font | None = None
        self.start_menu: StartMenu | None = None

    def _now(self) -> int:
        return self.clock()

    def _asset(self, *parts: str) -> Path:
        return Path(self.asset_dir, *parts)

    @property
    def high_score_path(self) -> Path:
        return self._asset("data", "highscore.txt")

    # ------------------------------------------------------------------ setup

    def init(self) -> None:
        """Open the window and audio, and load the start menu and its music."""
        pygame.init()
        if not pygame.font.get_init():
            pygame.font.init()
        try:
            pygame.mixer.init(44100, -16, 2, 2048)
        except pygame.error as exc:
            raise AudioError(f"mixer could not initialise: {exc}") from exc
        pygame.display.set_caption(WINDOW_TITLE)
        self.surface = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT))

        self.start_menu = StartMenu(self.surface)
        self.start_menu.load(self._asset("data", "Menu.png"), self._asset("data", "font.ttf"))
        self.start_music.load(self._asset("music", "game_theme.mp3"))

    def load_resources(self) -> None:
        """Load the level, the player, threats, items and the HUD assets."""
        map_path = self._asset("map", "map01.dat")
        if map_path.is_file():
            self.game_map.load_map(map_path)
        self.game_map.load_tiles(self._asset("map"))

        self.player.asset_dir = os.fspath(self.asset_dir)
        self.player.load_image(self._asset("player", "player_idle.png"))
        self.player.set_clips()

        self.threats = self.make_threats()
        if not self.threats:
            raise ImageLoadError("no threat could be loaded")
        self.life_items = self.make_life_items()
        self.score_items = self.make_score_items()
        if not self.life_items or not self.score_items:
            raise ImageLoadError("no item could be loaded")

        heart_path = self._asset("player", "heart.png")
        try:
            self.heart_image = pygame.image.load(os.fspath(heart_path))
        except (pygame.error, OSError) as exc:
            raise ImageLoadError(f"could not load image: {heart_path}") from exc

        self.timer_font = self._open_font(HUD_FONT_SIZE)
        self.click_sound.load(self._asset("sfx", "click.wav"))

    def _open_font(self, size: int) -> pygame.font.Font:
        font_path = self._asset("data", "font.ttf")
        if not font_path.is_file():
            raise FileNotFoundError(f"font not found: {font_path}")
        if not pygame.font.get_init():
            pygame.font.init()
        return pygame.font.Font(os.fspath(font_path), size)

    # ------------------------------------------------------------- main loop

    def run(self) -> None:
        """Alternate between the start menu and play until the player exits."""
        frame_ms = 1000 // FPS
        while True:
            self.start_music.play(-1)
            action = self.handle_start_menu()
            self.start_music.stop()

            if action == ButtonAction.EXIT:
                self.is_running = False
                break
            if action != ButtonAction.START:
                continue

            self.music.load(self._asset("music", "play_theme.mp3"))
            self.lost_music.load(self._asset("music", "lost_theme.mp3"))
            self.won_music.load(self._asset("music", "won_theme.mp3"))
            self.hit_sound.load(self._asset("sfx", "hit.wav"))
            self.buff_sound.load(self._asset("sfx", "buff.wav"))
            self.move_sound.load(self._asset("sfx", "move.wav"))

            self.music.play(-1)
            self.game_timer.start()
            self.is_running = True

            while self.is_running:
                self.fps_timer.start()
                self.handle_events()
                self.update()
                self.render()

                spent = self.fps_timer.elapsed()
                if spent < frame_ms:
                    pygame.time.delay(frame_ms - spent)

                if self.life == 0:
                    self.music.pause()
                    self.lost_music.play(-1)
                    result = self.handle_game_over()
                    self.lost_music.stop()
                    if result == ButtonAction.EXIT:
                        self.is_running = False
                        self.restart()
                        self.lost_music.free()
                    elif result == ButtonAction.RESTART:
                        self.restart()
                        self.music.play(-1)

                if self.player.is_won:
                    self.music.pause()
                    self.won_music.play(-1)
                    result = self.handle_player_won()
                    self.won_music.stop()
                    if result == ButtonAction.EXIT:
                        self.is_running = False
                        self.restart()
                        self.won_music.free()
                    elif result == ButtonAction.RESTART:
                        self.restart()
                        self.music.play(-1)

                if self.is_paused:
                    result = self.handle_pause()
                    if result == ButtonAction.EXIT:
                        self.is_running = False
                        self.restart()
                    elif result == ButtonAction.RESUME:
                        self.is_paused = False

            for track in (self.music, self.lost_music, self.won_music):
                track.free()
            for effect in (self.move_sound, self.hit_sound, self.buff_sound):
                effect.free()

    def handle_events(self) -> None:
        """Handle every pending pygame event."""
        self._dispatch_events(pygame.event.get())

    def _dispatch_events(self, events: Any) -> None:
        for event in events:
            if event.type == pygame.QUIT:
                self.is_running = False
            if event.type == pygame.KEYDOWN and getattr(event, "key", None) == pygame.K_ESCAPE:
                self.is_paused = not self.is_paused
            self.player.handle_input(event, self.move_sound)

    def update(self) -> None:
        """Move the player and the threats, then resolve collisions."""
        map_data = self.game_map.map_data
        self.player.set_map_xy(map_data.start_x, map_data.start_y)
        self.player.do_player(map_data)
        for threat in self.threats:
            threat.update()
        self.check_collisions()

    # --------------------------------------------------------------- drawing

    def _camera_y(self) -> float:
        return self.player.y_pos - SCREEN_HEIGHT // 2

    def _present(self) -> None:
        if pygame.display.get_init() and pygame.display.get_surface() is not None:
            pygame.display.flip()

    def _require_surface(self) -> pygame.Surface:
        if self.surface is None:
            raise RuntimeError("no display surface; call init() first")
        return self.surface

    def render(self) -> None:
        """Draw one frame of play with the lives and the time/bonus line."""
        surface = self._require_surface()
        surface.fill(BACKGROUND_COLOR)

        self.game_map.draw(surface)
        self.player.show(surface)
        self.render_life()
        cam_y = self._camera_y()
        for item in self.life_items:
            item.show(surface, cam_y)
        for item in self.score_items:
            item.show(surface, cam_y)
        for threat in self.threats:
            threat.show(surface, cam_y)

        if self.timer_font is not None:
            seconds = self.game_timer.elapsed() // 1000
            text = f"Time: {seconds}s   |    Bonus score: {self.bonus_score}"
            label = self.timer_font.render(text, False, HUD_TEXT_COLOR)
            surface.blit(label, (10, 10))

        self._present()

    def render_life(self) -> None:
        """Draw one heart per remaining life, right to left from the top corner."""
        surface = self._require_surface()
        if self.heart_image is None:
            return
        heart = pygame.transform.scale(self.heart_image, (HEART_SIZE, HEART_SIZE))
        start_x = SCREEN_WIDTH - HEART_MARGIN_RIGHT
        for i in range(self.life):
            surface.blit(heart, (start_x - i * HEART_SPACING, HEART_TOP))

    # ------------------------------------------------------------ collisions

    def check_collisions(self) -> None:
        """Apply damage from threats and collect items the player touches."""
        player_rect = self.player.hitbox()

        for threat in self.threats:
            if check_collision(player_rect, threat.frame_rect()) and not self.is_invincible:
                self.life -= 1
                self.hit_sound.play()
                self.player.take_damage()
                self.is_invincible = True
                self.invincible_timer.start()
            if self.is_invincible and self.invincible_timer.elapsed() >= INVINCIBLE_MS:
                self.is_invincible = False
                self.invincible_timer.stop()

        kept_life = []
        for item in self.life_items:
            if check_collision(player_rect, self._item_hit_rect(item)):
                self.player.picked_item()
                self.life += 1
                self.buff_sound.play()
            else:
                kept_life.append(item)
        self.life_items = kept_life

        kept_score = []
        for item in self.score_items:
            if check_collision(player_rect, self._item_hit_rect(item)):
                self.player.picked_item()
                self.bonus_score += SCORE_ITEM_BONUS
                self.buff_sound.play()
            else:
                kept_score.append(item)
        self.score_items = kept_score

    @staticmethod
    def _item_hit_rect(item: Any) -> pygame.Rect:
        rect = item.frame_rect()
        rect.x += 16
        rect.w += 16
        rect.h -= 8
        rect.y += 8
        return rect

    # ------------------------------------------------------------- creation

    def make_threats(self) -> list[Threat]:
        """Two cars per lane pair: one driving right, one driving left."""
        threats: list[Threat] = []
        for i in range(LEFT_THREAT_NUMBER):
            lanes = (
                (_THREAT_FILES_LEFT, LEFT, 8, 1),
                (_THREAT_FILES_RIGHT, RIGHT, 7, -1),
            )
            for files, start_x, first_row, direction in lanes:
                threat = Threat(self.rng)
                name = files[self.rng.randrange(len(files))]
                try:
                    threat.load_image(self._asset("threats", name))
                except ImageLoadError as exc:
                    print(f"Failed to load threat image: {exc}", file=sys.stderr)
                    break
                threat.set_clips()
                y = first_row * TILE_SIZE + i * 4 * TILE_SIZE
                threat.x_pos = float(start_x)
                threat.y_pos = float(y)
                threat.start_x = float(start_x)
                threat.start_y = float(y)
                threat.direction = direction
                threat.speed = float(THREAT_SPEED + self.rng.randrange(THREAT_SPEED_SPREAD))
                threats.append(threat)
        return threats

    def _make_items(self, kind: type, image_name: str) -> list[Any]:
        items = []
        for col, row in item_tile_positions(self.rng, ITEM_COUNT):
            item = kind()
            item.x_pos = float(col * TILE_SIZE)
            item.y_pos = float(row * TILE_SIZE)
            try:
                item.load_image(self._asset("data", image_name))
            except ImageLoadError as exc:
                print(f"Failed to load item image: {exc}", file=sys.stderr)
                continue
            items.append(item)
        return items

    def make_life_items(self) -> list[LifeItem]:
        return self._make_items(LifeItem, "mcdonald.png")

    def make_score_items(self) -> list[ScoreItem]:
        return self._make_items(ScoreItem, "drumstick.png")

    # --------------------------------------------------------------- screens

    def _run_screen(self, screen: Screen, done: tuple[ButtonAction, ...]) -> ButtonAction:
        surface = self._require_surface()
        while True:
            action = screen.poll(self.click_sound)
            surface.fill(CLEAR_COLOR)
            screen.render()
            self._present()
            if action in done:
                return action

    def handle_start_menu(self) -> ButtonAction:
        """Show the start menu until the player starts or exits."""
        if self.start_menu is None:
            raise RuntimeError("start menu not loaded; call init() first")
        surface = self._require_surface()
        self.start_music.play(-1)
        action = ButtonAction.NONE
        while True:
            action = self.start_menu.poll(self.click_sound)
            surface.fill(CLEAR_COLOR)
            self.start_menu.render()
            self._present()

            if action in (ButtonAction.START, ButtonAction.EXIT):
                break
            if action != ButtonAction.HOW_TO_PLAY:
                continue

            how_to_play = HowToPlayScreen(surface)
            try:
                how_to_play.load(
                    self._asset("data", "how_to_play.png"), self._asset("data", "font.ttf")
                )
            except _SCREEN_ERRORS as exc:
                print(f"Error: how to play screen: {exc}", file=sys.stderr)
                continue
            sub = self._run_screen(how_to_play, (ButtonAction.BACK_TO_MENU, ButtonAction.EXIT))
            if sub == ButtonAction.EXIT:
                self.start_music.stop()
                self.start_music.free()
                self.is_running = False
                return ButtonAction.EXIT

        self.start_music.stop()
        return action

    def handle_pause(self) -> ButtonAction:
        """Show the pause screen until the player resumes or exits."""
        screen = PauseScreen(self.surface)
        try:
            screen.load(self._asset("data", "Game_paused.png"), self._asset("data", "font.ttf"))
        except _SCREEN_ERRORS as exc:
            print(f"Error: pause screen: {exc}", file=sys.stderr)
            return ButtonAction.EXIT
        action = self._run_screen(screen, (ButtonAction.RESUME, ButtonAction.EXIT))
        self._require_surface().fill(CLEAR_COLOR)
        return action

    def _record_high_score(self, score: int) -> int:
        try:
            return update_high_score(self.high_score_path, score)
        except OSError as exc:
            print(f"Could not store high score: {exc}", file=sys.stderr)
            return score

    def _blit_centered(self, font: pygame.font.Font, text: str, y: int) -> int:
        surface = self._require_surface()
        label = font.render(text, False, RESULT_TEXT_COLOR)
        width, height = label.get_size()
        surface.blit(label, ((SCREEN_WIDTH - width) // 2, y))
        return height

    def _result_screen(
        self, screen: Screen, image: str, lines: tuple[str, str], text_y: int
    ) -> ButtonAction:
        try:
            screen.load(self._asset("data", image), self._asset("data", "font.ttf"))
            font = self._open_font(RESULT_FONT_SIZE)
        except _SCREEN_ERRORS as exc:
            print(f"Error: result screen: {exc}", file=sys.stderr)
            return ButtonAction.EXIT

        surface = self._require_surface()
        while True:
            action = screen.poll(self.click_sound)
            surface.fill(CLEAR_COLOR)
            screen.render()
            height = self._blit_centered(font, lines[0], text_y)
            self._blit_centered(font, lines[1], text_y + height + TEXT_GAP)
            self._present()
            if action in (ButtonAction.RESTART, ButtonAction.EXIT):
                return action

    def handle_game_over(self) -> ButtonAction:
        """Record the bonus score and show the game-over screen."""
        seconds = self.game_timer.elapsed() // 1000
        current = self.bonus_score
        high = self._record_high_score(current)
        lines = (f"Time: {seconds}s | Score: {current}", f"High score: {high}")
        return self._result_screen(GameOverScreen(self.surface), "GameOver.png", lines,
                                   GAME_OVER_TEXT_Y)

    def handle_player_won(self) -> ButtonAction:
        """Score the finished run, record it and show the winning screen."""
        seconds = self.game_timer.elapsed() // 1000
        score = won_score(seconds, self.bonus_score, self.life)
        high = self._record_high_score(score)
        lines = (f"Time: {seconds}s | Total Score: {score}", f"High score: {high}")
        return self._result_screen(WonScreen(self.surface), "won.png", lines, WON_TEXT_Y)

    # ------------------------------------------------------------- lifecycle

    def restart(self) -> None:
        """Reset lives, score, player, threats and life items for a new run."""
        self.life = PLAYER_LIFE
        self.bonus_score = 0
        self.player.reset_position()
        self.music.play(-1)
        self.is_paused = False
        self.threats = []
        self.life_items = []
        self.game_timer.start()
        self.threats = self.make_threats()
        self.life_items = self.make_life_items()

    def clean(self) -> None:
        """Release every resource and shut pygame down."""
        self.click_sound.free()
        self.threats = []
        self.life_items = []
        self.score_items = []
        self.heart_image = None
        self.timer_font = None
        self.surface = None
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="veggierun", description="Cross the roads to win.")
    parser.add_argument("--assets", default=".", help="directory holding the game's assets")
    args = parser.parse_args(argv)

    game = Game()
    game.asset_dir = args.assets
    try:
        game.init()
        game.load_resources()
        game.run()
    except (AudioError, ImageLoadError, OSError, pygame.error) as exc:
        print(f"veggierun: {exc}", file=sys.stderr)
        return 1
    finally:
        game.clean()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())