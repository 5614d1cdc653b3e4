"""A pausable millisecond stopwatch."""

from __future__ import annotations

import time
from typing import Callable


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class Timer:
    """Stopwatch counting milliseconds from ``clock``, which returns a time in ms."""

    def __init__(self, clock: Callable[[], int] | None = None) -> None:
        self._clock = clock if clock is not None else _monotonic_ms
        self._start_tick = 0
        self._pause_tick = 0
        self._started = False
        self._paused = False

    @property
    def is_started(self) -> bool:
        return self._started

    @property
    def is_paused(self) -> bool:
        return self._paused

    def start(self) -> None:
        self._started = True
        self._paused = False
        self._start_tick = self._clock()

    def stop(self) -> None:
        self._paused = False
        self._started = False

    def pause(self) -> None:
        if self._started and not self._paused:
            self._paused = True
            self._pause_tick = self._clock() - self._start_tick

    def unpause(self) -> None:
        if self._paused:
            self._paused = False
            self._start_tick = self._clock() - self._pause_tick
            self._pause_tick = 0

    def elapsed(self) -> int:
        """Milliseconds counted so far; 0 when not started."""
        if not self._started:
            return 0
        if self._paused:
            return self._pause_tick
        return self._clock() - self._start_tick