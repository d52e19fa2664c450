from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

import numpy as np


Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class ClearedCell:
    x: int
    y: int
    color: int


@dataclass
class ClearResult:
    lines_cleared: int
    cleared_cells: List[ClearedCell] = field(default_factory=list)


class GameGrid:
    """Fixed-size playfield.

    The grid uses 0 for empty cells and positive integers for filled cells.
    Integer values are shape kinds and double as colour identifiers.
    Row 0 is the top of the field.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_occupied(self, x: int, y: int) -> bool:
        """Collision query used by pieces.

        Walls and the floor count as occupied; everything above row 0 is
        open space so freshly spawned pieces can overhang the field.
        """
        if x < 0 or x >= self.width:
            return True
        if y >= self.height:
            return True
        if y < 0:
            return False
        return bool(self.grid[y, x] != 0)

    def set_cell(self, x: int, y: int, color: int) -> None:
        if not self.is_inside(x, y):
            raise ValueError(f"cell ({x}, {y}) is outside the {self.width}x{self.height} field")
        self.grid[y, x] = color

    def row_is_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != 0))

    def clear_and_compact(self) -> ClearResult:
        """Remove full rows and let the rows above fall into their place.

        Walks from the bottom row upwards with a write cursor that only
        advances past rows that are kept, so every row above a cleared one
        drops by exactly one per cleared row below it.
        """
        result = ClearResult(lines_cleared=0)
        row_to_fill = self.height - 1
        for y in range(self.height - 1, -1, -1):
            if self.row_is_full(y):
                result.lines_cleared += 1
                for x in range(self.width):
                    result.cleared_cells.append(ClearedCell(x, y, int(self.grid[y, x])))
                continue
            if row_to_fill != y:
                self.grid[row_to_fill] = self.grid[y]
            row_to_fill -= 1
        if row_to_fill >= 0:
            self.grid[: row_to_fill + 1] = 0
        return result

    def filled_count(self) -> int:
        return int(np.count_nonzero(self.grid))

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
