from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass
class ScoringRules:
    line_clear_scores: Tuple[int, int, int, int] = (100, 300, 500, 1000)

    def score_for_lines(self, lines: int) -> int:
        if 1 <= lines <= len(self.line_clear_scores):
            return self.line_clear_scores[lines - 1]
        return 0
