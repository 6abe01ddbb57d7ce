from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Tuple

import numpy as np


BLOCK_SIZE = 4


class PieceType(IntEnum):
    I = 0
    S = 1
    Z = 2
    L = 3
    T = 4
    O = 5
    J = 6


Mask = np.ndarray


def _mask(cells: List[Tuple[int, int]], color: int) -> Mask:
    m = np.zeros((BLOCK_SIZE, BLOCK_SIZE), dtype=np.int8)
    for row, col in cells:
        m[row, col] = color
    m.setflags(write=False)
    return m


# Cell values inside each mask are the piece color (type + 1).
SHAPES: Dict[PieceType, Mask] = {
    PieceType.I: _mask([(0, 1), (1, 1), (2, 1), (3, 1)], 1),
    PieceType.S: _mask([(1, 1), (1, 2), (2, 1), (3, 1)], 2),
    PieceType.Z: _mask([(0, 2), (1, 1), (1, 2), (2, 1)], 3),
    PieceType.L: _mask([(0, 1), (1, 1), (1, 2), (2, 2)], 4),
    PieceType.T: _mask([(1, 1), (2, 0), (2, 1), (2, 2)], 5),
    PieceType.O: _mask([(1, 1), (1, 2), (2, 1), (2, 2)], 6),
    PieceType.J: _mask([(1, 1), (1, 2), (2, 2), (3, 2)], 7),
}


def shape_of(kind: int) -> Mask:
    return SHAPES[PieceType(kind)]


def rotate_mask(mask: Mask, clockwise: bool = True) -> Mask:
    """Rotate a 4x4 mask by 90 degrees around the center of its box.

    Clockwise: ``new[i][j] = old[3 - j][i]``.
    Counter-clockwise: ``new[i][j] = old[j][3 - i]``.
    """
    k = 1 if clockwise else -1
    return np.rot90(mask, k, axes=(1, 0)).copy()


@dataclass
class Piece:
    kind: PieceType
    mask: Mask
    x: int = 0
    y: int = 0

    @classmethod
    def spawn(cls, kind: int, x: int, y: int) -> "Piece":
        return cls(PieceType(kind), shape_of(kind).copy(), x, y)

    def rotated(self, clockwise: bool = True) -> "Piece":
        return Piece(self.kind, rotate_mask(self.mask, clockwise), self.x, self.y)

    def moved(self, dx: int, dy: int) -> "Piece":
        return Piece(self.kind, self.mask, self.x + dx, self.y + dy)
