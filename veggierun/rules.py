"""Game rules: collisions, scoring, high scores and item placement."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any

from .settings import MAX_MAP_X, MAX_MAP_Y

WON_BASE_SCORE = 1000
WON_TIME_PENALTY = 10
LIFE_BONUS = 100
ITEM_MIN_ROW = 6
ITEM_MAX_ROW = MAX_MAP_Y - 10

_LEADING_INT = re.compile(r"[+-]?\d+")


def check_collision(a: Any, b: Any) -> bool:
    """True if a corner of one rectangle lies strictly inside the other, or they line up.

    ``a`` and ``b`` need ``x``, ``y``, ``w`` and ``h``.
    """
    left_a, right_a = a.x, a.x + a.w
    top_a, bottom_a = a.y, a.y + a.h
    left_b, right_b = b.x, b.x + b.w
    top_b, bottom_b = b.y, b.y + b.h

    def corner_inside(xs, ys, left, right, top, bottom):
        return any(
            left < x < right and top < y < bottom for x in xs for y in ys
        )

    if corner_inside((left_a, right_a), (top_a, bottom_a), left_b, right_b, top_b, bottom_b):
        return True
    if corner_inside((left_b, right_b), (top_b, bottom_b), left_a, right_a, top_a, bottom_a):
        return True
    return top_a == top_b and right_a == right_b and bottom_a == bottom_b


def load_high_score(path: str | os.PathLike[str]) -> int:
    """Read the stored high score; 0 if the file is missing or holds no number."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return 0
    match = _LEADING_INT.match(text.lstrip())
    return int(match.group()) if match else 0


def save_high_score(path: str | os.PathLike[str], score: int) -> None:
    Path(path).write_text(str(score), encoding="utf-8")


def update_high_score(path: str | os.PathLike[str], score: int) -> int:
    """Store ``score`` if it beats the saved one; return the resulting high score."""
    high = load_high_score(path)
    if score > high:
        save_high_score(path, score)
        return score
    return high


def won_score(elapsed_seconds: int, bonus: int, lives: int) -> int:
    """Score for finishing: a time score that never drops below 0, plus bonuses."""
    time_score = max(0, WON_BASE_SCORE - elapsed_seconds * WON_TIME_PENALTY)
    return time_score + bonus + lives * LIFE_BONUS


def item_tile_positions(rng: Any, count: int) -> list[tuple[int, int]]:
    """Random (column, row) tiles for ``count`` pick-ups, kept off the top and bottom rows."""
    return [
        (
            rng.randrange(MAX_MAP_X),
            ITEM_MIN_ROW + rng.randrange(ITEM_MAX_ROW - ITEM_MIN_ROW),
        )
        for _ in range(count)
    ]