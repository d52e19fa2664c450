from __future__ import annotations

from enum import Enum
from typing import List, Optional, Sequence, Tuple

from .grid import Coordinate, GameGrid
from .shapes import SHAPE_COLORS, SHAPE_OFFSETS, Color, ShapeKind


class Direction(Enum):
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


# Horizontal shifts tried, in order, when a rotation collides.
KICK_OFFSETS: Tuple[int, ...] = (1, 2, 3, 4, -1, -2, -3, -4)


class Piece:
    """The falling tetromino.

    Cells are absolute grid coordinates; the first cell is the rotation
    pivot. ``landed`` only ever flips to True as the result of a rejected
    downward move.
    """

    def __init__(self, kind: ShapeKind, cells: Sequence[Coordinate], grid: GameGrid) -> None:
        self.kind = kind
        self.cells: List[Coordinate] = list(cells)
        self.grid = grid
        self.landed = False

    @classmethod
    def spawn(cls, kind: ShapeKind, grid: GameGrid, column: Optional[int] = None) -> "Piece":
        if column is None:
            column = grid.width // 2 - 1
        offsets = SHAPE_OFFSETS[kind]
        top = min(dy for _, dy in offsets)
        cells = [(column + dx, dy - top) for dx, dy in offsets]
        return cls(kind, cells, grid)

    @property
    def color(self) -> Color:
        return SHAPE_COLORS[self.kind]

    def copy(self) -> "Piece":
        clone = Piece(self.kind, self.cells, self.grid)
        clone.landed = self.landed
        return clone

    def collides(self, cells: Sequence[Coordinate]) -> bool:
        return any(self.grid.is_occupied(x, y) for x, y in cells)

    def try_move(self, direction: Direction) -> bool:
        candidate = [(x + direction.dx, y + direction.dy) for x, y in self.cells]
        if self.collides(candidate):
            if direction is Direction.DOWN:
                self.landed = True
            return False
        self.cells = candidate
        return True

    def try_rotate(self) -> bool:
        """Rotate clockwise around the pivot cell, kicking sideways if needed."""
        if self.kind is ShapeKind.O:
            return True
        px, py = self.cells[0]
        rotated = [(-(y - py) + px, (x - px) + py) for x, y in self.cells]
        if not self.collides(rotated):
            self.cells = rotated
            return True
        for shift in KICK_OFFSETS:
            kicked = [(x + shift, y) for x, y in rotated]
            if not self.collides(kicked):
                self.cells = kicked
                return True
        return False

    def landing_preview(self) -> List[Coordinate]:
        """Cells the piece would occupy if dropped straight down now."""
        ghost = self.copy()
        while ghost.try_move(Direction.DOWN):
            pass
        return ghost.cells

    def __repr__(self) -> str:
        return f"Piece({self.kind.name}, cells={self.cells}, landed={self.landed})"
