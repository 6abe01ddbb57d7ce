from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

import numpy as np

from .grid import GameGrid
from .piece_queue import PieceQueue
from .pieces import Piece
from .rules import ScoringRules


class Action(IntEnum):
    LEFT = 0
    RIGHT = 1
    ROTATE_CW = 2
    ROTATE_CCW = 3
    SOFT_DROP = 4
    NONE = 5


@dataclass
class GameConfig:
    width: int = 12
    height: int = 21
    random_seed: Optional[int] = None
    spawn_x: int = 4
    spawn_y: int = 0
    next_pieces: int = 3


class FallingBlockGame:
    """Rule engine: one falling piece over a walled grid.

    Player commands never lock a piece. Only ``gravity`` locks, when the
    piece cannot fall any further.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.queue = PieceQueue(self.config.next_pieces, self.rng)
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.last_lines_cleared = 0
        self.game_over = False
        self.current_piece: Optional[Piece] = None
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.queue.reset()
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_locked = 0
        self.last_lines_cleared = 0
        self.game_over = False
        self.current_piece = None
        self._spawn_piece()

    def _spawn_piece(self) -> bool:
        kind = self.queue.dequeue_next()
        piece = Piece.spawn(kind, self.config.spawn_x, self.config.spawn_y)
        if self.grid.spawn_area_blocked(piece.x, piece.y) or self.grid.collides(piece.mask, piece.x, piece.y):
            self.current_piece = None
            self.game_over = True
            return False
        self.current_piece = piece
        self.grid.place(piece.mask, piece.x, piece.y)
        return True

    def _move(self, dx: int, dy: int) -> bool:
        piece = self.current_piece
        if piece is None or self.game_over:
            return False
        candidate = piece.moved(dx, dy)
        if self.grid.collides(candidate.mask, candidate.x, candidate.y):
            return False
        self.grid.remove_at(piece.mask, piece.x, piece.y)
        piece.x, piece.y = candidate.x, candidate.y
        self.grid.place(piece.mask, piece.x, piece.y)
        return True

    def move_left(self) -> bool:
        return self._move(-1, 0)

    def move_right(self) -> bool:
        return self._move(1, 0)

    def soft_drop(self) -> bool:
        # A blocked soft drop is a no-op; it never locks the piece.
        return self._move(0, 1)

    def rotate(self, clockwise: bool = True) -> bool:
        piece = self.current_piece
        if piece is None or self.game_over:
            return False
        candidate = piece.rotated(clockwise)
        if self.grid.collides(candidate.mask, candidate.x, candidate.y):
            return False
        self.grid.remove_at(piece.mask, piece.x, piece.y)
        piece.mask = candidate.mask
        self.grid.place(piece.mask, piece.x, piece.y)
        return True

    def _lock_piece(self) -> int:
        assert self.current_piece is not None
        piece = self.current_piece
        self.grid.merge(piece.mask, piece.x, piece.y)
        lines = self.grid.clear_full_lines()
        self.grid.sync_composite()
        self.current_piece = None
        self.pieces_locked += 1
        self.lines_cleared_total += lines
        self.last_lines_cleared = lines
        self.score += self.rules.score_for_lines(lines)
        return lines

    def gravity(self) -> bool:
        """Drop the piece one row, or lock it and spawn the next one.

        Returns True when the piece was locked.
        """
        if self.game_over or self.current_piece is None:
            return False
        if self._move(0, 1):
            return False
        self._lock_piece()
        self._spawn_piece()
        return True

    def step(self, action: Action) -> bool:
        """Apply one player command. Returns whether it was accepted."""
        if self.game_over:
            return False
        action = Action(action)
        if action == Action.LEFT:
            return self.move_left()
        elif action == Action.RIGHT:
            return self.move_right()
        elif action == Action.ROTATE_CW:
            return self.rotate(True)
        elif action == Action.ROTATE_CCW:
            return self.rotate(False)
        elif action == Action.SOFT_DROP:
            return self.soft_drop()
        return False

    def next_pieces(self) -> Tuple[int, ...]:
        return tuple(int(kind) for kind in self.queue.upcoming())

    def get_state(self) -> np.ndarray:
        return self.grid.clone_state()

    def get_game_stats(self) -> dict:
        return {
            "final_score": self.score,
            "pieces_locked": self.pieces_locked,
            "lines_cleared": self.lines_cleared_total,
            "avg_lines_per_piece": self.lines_cleared_total / max(1, self.pieces_locked),
        }
