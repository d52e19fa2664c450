from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .grid import ClearedCell, GameGrid


LINE_SCORE_MULTIPLIER = 20


@dataclass
class ScoreDelta:
    points: int
    lines_cleared: int
    cleared_cells: List[ClearedCell] = field(default_factory=list)


@dataclass
class LineClearEngine:
    line_score_multiplier: int = LINE_SCORE_MULTIPLIER

    def score_for_lines(self, lines: int) -> int:
        # Every row is worth the same, no matter how many clear together.
        if lines <= 0:
            return 0
        return lines * self.line_score_multiplier

    def process(self, grid: GameGrid) -> ScoreDelta:
        result = grid.clear_and_compact()
        return ScoreDelta(
            points=self.score_for_lines(result.lines_cleared),
            lines_cleared=result.lines_cleared,
            cleared_cells=result.cleared_cells,
        )
