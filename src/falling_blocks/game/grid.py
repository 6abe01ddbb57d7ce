from __future__ import annotations

import numpy as np

from .pieces import BLOCK_SIZE, Mask


EMPTY = 0
WALL = 9


class GameGrid:
    """Playing field with an immutable wall border.

    Two grids are kept. ``locked`` holds settled cells only; ``composite``
    holds the settled cells plus the falling piece and is what gets drawn.
    Both use 0 for empty cells, 1..7 for piece colors and ``WALL`` for the
    left column, right column and bottom row. Row 0 is the top and has no
    wall.
    """

    def __init__(self, width: int = 12, height: int = 21) -> None:
        if width < 3 or height < 2:
            raise ValueError("grid needs room for walls and at least one cell")
        self.width = int(width)
        self.height = int(height)
        self.locked = np.zeros((self.height, self.width), dtype=np.int8)
        self.composite = np.zeros((self.height, self.width), dtype=np.int8)
        self.reset()

    def reset(self) -> None:
        self.locked.fill(EMPTY)
        self.locked[:, 0] = WALL
        self.locked[:, -1] = WALL
        self.locked[-1, :] = WALL
        self.composite = self.locked.copy()

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _check(self, x: int, y: int) -> None:
        if not self.is_inside(x, y):
            raise IndexError(f"cell ({x}, {y}) outside {self.width}x{self.height} grid")

    def cell(self, x: int, y: int) -> int:
        self._check(x, y)
        return int(self.locked[y, x])

    def set_cell(self, x: int, y: int, value: int) -> None:
        self._check(x, y)
        if self.locked[y, x] == WALL:
            raise ValueError(f"cell ({x}, {y}) is a wall")
        self.locked[y, x] = value
        self.composite[y, x] = value

    def collides(self, mask: Mask, x: int, y: int) -> bool:
        """True if any occupied mask cell lands on a non-empty locked cell.

        Probes outside the grid count as blocked, like the wall around it.
        """
        for dy in range(BLOCK_SIZE):
            for dx in range(BLOCK_SIZE):
                if not mask[dy, dx]:
                    continue
                if not self.is_inside(x + dx, y + dy):
                    return True
                if self.locked[y + dy, x + dx] != EMPTY:
                    return True
        return False

    def spawn_area_blocked(self, x: int, y: int) -> bool:
        """True if the whole 4x4 box at (x, y) has any settled cell in it."""
        self._check(x, y)
        self._check(x + BLOCK_SIZE - 1, y + BLOCK_SIZE - 1)
        box = self.locked[y : y + BLOCK_SIZE, x : x + BLOCK_SIZE]
        return bool(np.any(box != EMPTY))

    def _overlay(self, mask: Mask, x: int, y: int, sign: int) -> None:
        for dy in range(BLOCK_SIZE):
            for dx in range(BLOCK_SIZE):
                v = int(mask[dy, dx])
                if not v:
                    continue
                self._check(x + dx, y + dy)
                if sign > 0 and self.composite[y + dy, x + dx] != EMPTY:
                    raise ValueError(f"cell ({x + dx}, {y + dy}) is already occupied")
                self.composite[y + dy, x + dx] += sign * v

    def place(self, mask: Mask, x: int, y: int) -> None:
        """Add the falling piece to the composite grid."""
        self._overlay(mask, x, y, 1)

    def remove_at(self, mask: Mask, x: int, y: int) -> None:
        """Take the falling piece back out of the composite grid."""
        self._overlay(mask, x, y, -1)

    def merge(self, mask: Mask, x: int, y: int) -> None:
        """Settle a piece into the locked grid."""
        for dy in range(BLOCK_SIZE):
            for dx in range(BLOCK_SIZE):
                v = int(mask[dy, dx])
                if v:
                    self._check(x + dx, y + dy)
                    if self.locked[y + dy, x + dx] != EMPTY:
                        raise ValueError(f"cell ({x + dx}, {y + dy}) is already occupied")
                    self.locked[y + dy, x + dx] = v

    def sync_composite(self) -> None:
        self.composite = self.locked.copy()

    def is_full_row(self, row: int) -> bool:
        return bool(np.all(self.locked[row, 1:-1] != EMPTY))

    def clear_full_lines(self) -> int:
        """Remove full rows from the locked grid and return how many went.

        Scans top to bottom, above the floor. Each full row is emptied and
        every interior row above it shifts down by one; row 0 ends up empty.
        The scan restarts after each clear.
        """
        lines = 0
        while True:
            full = [row for row in range(self.height - 1) if self.is_full_row(row)]
            if not full:
                break
            row = full[0]
            self.locked[1 : row + 1, 1:-1] = self.locked[0:row, 1:-1].copy()
            self.locked[0, 1:-1] = EMPTY
            lines += 1
        return lines

    def overlay_of(self, mask: Mask, x: int, y: int) -> np.ndarray:
        """Locked cells plus a mask at (x, y), computed from scratch."""
        out = self.locked.copy()
        for dy in range(BLOCK_SIZE):
            for dx in range(BLOCK_SIZE):
                if mask[dy, dx]:
                    self._check(x + dx, y + dy)
                    out[y + dy, x + dx] += mask[dy, dx]
        return out

    def clone_state(self) -> np.ndarray:
        return self.composite.copy()
