"""Menu screens built from a background image and clickable buttons."""

from __future__ import annotations

import os
from enum import IntEnum
from typing import Any, ClassVar, Iterable, Protocol

import pygame

from .sprite import Sprite

NORMAL_COLOR = (248, 243, 217)
HOVER_COLOR = (220, 200, 150)
BORDER_COLOR = (0, 0, 0)
TEXT_COLOR = (0, 0, 0)


class ButtonAction(IntEnum):
    """What a screen asks the game to do next."""

    NONE = 0
    START = 1
    HOW_TO_PLAY = 2
    EXIT = 3
    BACK_TO_MENU = 4
    RESTART = 5
    RESUME = 6


class _Playable(Protocol):
    def play(self, loops: int = 0) -> Any: ...


class Button:
    """A labelled rectangle that highlights under the mouse."""

    def __init__(self, x: int, y: int, w: int, h: int, text: str) -> None:
        self.rect = pygame.Rect(x, y, w, h)
        self.text = text

    def contains(self, x: int, y: int) -> bool:
        """True if the point lies on or inside the button's edges."""
        r = self.rect
        return r.x <= x <= r.x + r.w and r.y <= y <= r.y + r.h

    def render(
        self, surface: pygame.Surface, font: pygame.font.Font | None, mouse_x: int, mouse_y: int
    ) -> None:
        """Draw the button, highlighted if the mouse is over it, with centred text."""
        color = HOVER_COLOR if self.contains(mouse_x, mouse_y) else NORMAL_COLOR
        surface.fill(color, self.rect)
        pygame.draw.rect(surface, BORDER_COLOR, self.rect, 1)
        if font is None:
            return
        label = font.render(self.text, False, TEXT_COLOR)
        text_w, text_h = label.get_size()
        surface.blit(
            label,
            (
                self.rect.x + int((self.rect.w - text_w) / 2),
                self.rect.y + int((self.rect.h - text_h) / 2),
            ),
        )


def _mouse_position() -> tuple[int, int]:
    try:
        return pygame.mouse.get_pos()
    except pygame.error:
        return (-1, -1)


class Screen:
    """A full-screen background with buttons that map clicks to actions."""

    BUTTONS: ClassVar[tuple[tuple[int, int, int, int, str, ButtonAction], ...]] = ()
    FONT_SIZE: ClassVar[int] = 36

    def __init__(self, surface: pygame.Surface | None) -> None:
        self.surface = surface
        self.background = Sprite()
        self.font: pygame.font.Font | None = None
        self.buttons: list[tuple[Button, ButtonAction]] = [
            (Button(x, y, w, h, text), action) for x, y, w, h, text, action in self.BUTTONS
        ]

    def load(
        self,
        image_path: str | os.PathLike[str],
        font_path: str | os.PathLike[str] | None = None,
    ) -> None:
        """Load the background image and the button font (default font if no path)."""
        if self.surface is None:
            raise ValueError("screen has no surface to draw on")
        self.background.load_image(image_path)
        if font_path is not None:
            font_path = os.fspath(font_path)
            if not os.path.isfile(font_path):
                raise FileNotFoundError(f"font not found: {font_path}")
        if not pygame.font.get_init():
            pygame.font.init()
        self.font = pygame.font.Font(font_path, self.FONT_SIZE)

    def render(self) -> None:
        """Draw the background and every button."""
        if self.surface is None:
            return
        self.background.render(self.surface)
        mouse_x, mouse_y = _mouse_position()
        for button, _ in self.buttons:
            button.render(self.surface, self.font, mouse_x, mouse_y)

    def process_events(self, events: Iterable[Any], click: _Playable) -> ButtonAction:
        """Return the action of the first quit or button click among ``events``."""
        for event in events:
            if event.type == pygame.QUIT:
                return ButtonAction.EXIT
            if event.type == pygame.MOUSEBUTTONDOWN:
                click.play()
                x, y = event.pos
                for button, action in self.buttons:
                    if button.contains(x, y):
                        return action
        return ButtonAction.NONE

    def poll(self, click: _Playable) -> ButtonAction:
        """Handle every pending pygame event."""
        return self.process_events(pygame.event.get(), click)


class StartMenu(Screen):
    BUTTONS = (
        (400, 450, 200, 50, "START", ButtonAction.START),
        (400, 550, 200, 50, "HOW TO PLAY", ButtonAction.HOW_TO_PLAY),
        (400, 650, 200, 50, "EXIT", ButtonAction.EXIT),
    )


class HowToPlayScreen(Screen):
    BUTTONS = ((900, 700, 100, 50, "BACK", ButtonAction.BACK_TO_MENU),)


class GameOverScreen(Screen):
    BUTTONS = (
        (400, 400, 200, 50, "RESTART", ButtonAction.RESTART),
        (400, 500, 200, 50, "EXIT", ButtonAction.EXIT),
    )


class WonScreen(Screen):
    BUTTONS = (
        (400, 600, 200, 50, "RESTART", ButtonAction.RESTART),
        (400, 700, 200, 50, "EXIT", ButtonAction.EXIT),
    )


class PauseScreen(Screen):
    BUTTONS = (
        (400, 350, 200, 50, "CONTINUE", ButtonAction.RESUME),
        (400, 450, 200, 50, "EXIT", ButtonAction.EXIT),
    )