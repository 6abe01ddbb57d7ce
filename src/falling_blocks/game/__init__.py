"""Game module for Falling Blocks.

Exports the rule engine and supporting classes:
- GameGrid: walled field with locked and composite grids, line clearing
- Piece / PieceType: the seven 4x4 pieces and their rotation
- PieceQueue: ring buffer of upcoming pieces
- ScoringRules: line clear score table
- FallingBlockGame: moves, rotation, gravity, locking and spawning
- GameSession: fixed-tick loop with gravity timer and elapsed time
"""

from .grid import EMPTY, WALL, GameGrid
from .pieces import BLOCK_SIZE, SHAPES, Piece, PieceType, rotate_mask, shape_of
from .piece_queue import PieceQueue
from .rules import ScoringRules
from .core import Action, FallingBlockGame, GameConfig
from .session import GameSession, GameSnapshot, SessionConfig, SessionResult

__all__ = [
    "EMPTY",
    "WALL",
    "GameGrid",
    "BLOCK_SIZE",
    "SHAPES",
    "Piece",
    "PieceType",
    "rotate_mask",
    "shape_of",
    "PieceQueue",
    "ScoringRules",
    "Action",
    "FallingBlockGame",
    "GameConfig",
    "GameSession",
    "GameSnapshot",
    "SessionConfig",
    "SessionResult",
]
