"""Phases of a match: the countdown before play, the timed match and game over."""

from __future__ import annotations

import enum
import time
from collections.abc import Callable
from typing import Optional

from spacebagarre.input import MAX_FRAME_COUNT

START_DELAY = 5.0
MAX_PLAY_TIME = (MAX_FRAME_COUNT / 60.0) - 10.0


class GamePhase(enum.Enum):
    WAITING_TO_START = "waiting_to_start"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class GameTimerManager:
    """Tracks the time since the match started and the phase it is in.

    The clock is any callable returning seconds; elapsed time is sampled on each tick.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None) -> None:
        self._clock = clock if clock is not None else time.monotonic
        self._start = self._clock()
        self._total = 0.0
        self._phase = GamePhase.WAITING_TO_START
        self.start_delay = START_DELAY
        self.max_play_time = MAX_PLAY_TIME

    def start_game(self) -> None:
        """Reset the clock and go back to waiting for the start."""
        self._start = self._clock()
        self._total = 0.0
        self._phase = GamePhase.WAITING_TO_START

    def tick(self) -> None:
        """Sample the clock and move to the next phase when its time has come."""
        self._total = self._clock() - self._start
        t = self._total
        if self._phase is GamePhase.WAITING_TO_START and t >= self.start_delay:
            self._phase = GamePhase.PLAYING
        elif self._phase is GamePhase.PLAYING and t >= self.start_delay + self.max_play_time:
            self._phase = GamePhase.GAME_OVER

    def phase(self) -> GamePhase:
        return self._phase

    def time_remaining(self) -> float:
        """Seconds of play left, or 0 outside the playing phase."""
        if self._phase is GamePhase.PLAYING:
            return max(0.0, self.start_delay + self.max_play_time - self._total)
        return 0.0

    def elapsed_time(self) -> float:
        return self._total

    def is_frozen(self) -> bool:
        """True while waiting to start or once the game is over."""
        return self._phase is not GamePhase.PLAYING