from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import numpy as np

from .core import Action, FallingBlockGame


@dataclass
class SessionConfig:
    ticks_per_drop: int = 32
    tick_seconds: float = 0.02


@dataclass(frozen=True, eq=False)
class GameSnapshot:
    """Read-only view handed to whatever draws the game."""

    board: np.ndarray
    next_pieces: Tuple[int, ...]
    score: int
    elapsed: int
    game_over: bool


@dataclass(frozen=True)
class SessionResult:
    score: int
    elapsed: int
    ticks: int


class GameSession:
    """Fixed-cadence loop around a ``FallingBlockGame``.

    Each tick applies at most one player command, then advances the drop
    counter (gravity fires when it wraps), then refreshes the elapsed
    seconds.
    """

    def __init__(
        self,
        game: Optional[FallingBlockGame] = None,
        config: Optional[SessionConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.game = game or FallingBlockGame()
        self.config = config or SessionConfig()
        if self.config.ticks_per_drop < 1:
            raise ValueError("ticks_per_drop must be at least 1")
        self.clock = clock
        self.ticks = 0
        self.elapsed = 0
        self._counter = 1
        self._base_time: Optional[float] = None

    def start(self) -> None:
        self._base_time = self.clock()
        self.ticks = 0
        self.elapsed = 0
        self._counter = 1

    def _update_elapsed(self) -> None:
        assert self._base_time is not None
        seconds = int(self.clock() - self._base_time)
        if seconds > self.elapsed:
            self.elapsed = seconds

    def tick(self, action: Optional[Action] = None) -> GameSnapshot:
        if self.game.game_over:
            return self.snapshot()
        if self._base_time is None:
            self.start()
        if action is not None:
            self.game.step(action)
        self._counter = (self._counter + 1) % self.config.ticks_per_drop
        if self._counter == 0:
            self.game.gravity()
        self._update_elapsed()
        self.ticks += 1
        return self.snapshot()

    def snapshot(self) -> GameSnapshot:
        board = self.game.get_state()
        board.setflags(write=False)
        return GameSnapshot(
            board=board,
            next_pieces=self.game.next_pieces(),
            score=self.game.score,
            elapsed=self.elapsed,
            game_over=self.game.game_over,
        )

    def result(self) -> SessionResult:
        return SessionResult(score=self.game.score, elapsed=self.elapsed, ticks=self.ticks)

    def run(
        self,
        poll: Callable[[], Optional[Action]],
        sleep: Callable[[float], None] = time.sleep,
        on_frame: Optional[Callable[[GameSnapshot], None]] = None,
    ) -> SessionResult:
        """Tick until game over and return the final score and time."""
        self.start()
        snapshot = self.snapshot()
        while not snapshot.game_over:
            if on_frame is not None:
                on_frame(snapshot)
            snapshot = self.tick(poll())
            sleep(self.config.tick_seconds)
        if on_frame is not None:
            on_frame(snapshot)
        return self.result()
