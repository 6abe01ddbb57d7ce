from __future__ import annotations

import random
from typing import List, Optional

from .pieces import PieceType


class PieceQueue:
    """Fixed-size ring of upcoming piece types.

    The ring is always full: taking the head refills its slot with a fresh
    random type and advances the head, so the refilled slot becomes the tail.
    """

    def __init__(self, size: int = 3, rng: Optional[random.Random] = None) -> None:
        if size < 1:
            raise ValueError("queue size must be positive")
        self.size = int(size)
        self.rng = rng or random.Random()
        self.head = 0
        self.slots: List[int] = []
        self.reset()

    def _random_kind(self) -> int:
        return self.rng.randrange(len(PieceType))

    def reset(self) -> None:
        self.head = 0
        self.slots = [self._random_kind() for _ in range(self.size)]

    def dequeue_next(self) -> PieceType:
        kind = self.slots[self.head]
        self.slots[self.head] = self._random_kind()
        self.head = (self.head + 1) % self.size
        return PieceType(kind)

    def peek(self, i: int) -> PieceType:
        if not 0 <= i < self.size:
            raise IndexError(f"peek index {i} outside 0..{self.size - 1}")
        return PieceType(self.slots[(self.head + i) % self.size])

    def upcoming(self) -> List[PieceType]:
        return [self.peek(i) for i in range(self.size)]

    def __len__(self) -> int:
        return self.size
