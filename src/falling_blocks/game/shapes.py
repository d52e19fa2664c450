from __future__ import annotations

import colorsys
from enum import IntEnum
from typing import Dict, Tuple


Offset = Tuple[int, int]
Color = Tuple[int, int, int]


class ShapeKind(IntEnum):
    T = 1
    O = 2
    J = 3
    L = 4
    I = 5
    S = 6
    Z = 7


# First offset is the rotation pivot. y grows downwards.
SHAPE_OFFSETS: Dict[ShapeKind, Tuple[Offset, Offset, Offset, Offset]] = {
    ShapeKind.T: ((0, 0), (-1, 0), (1, 0), (0, -1)),
    ShapeKind.O: ((0, 0), (1, 0), (0, 1), (1, 1)),
    ShapeKind.J: ((0, 0), (0, -1), (0, 1), (-1, 1)),
    ShapeKind.L: ((0, 0), (0, -1), (0, 1), (1, 1)),
    ShapeKind.I: ((0, 0), (0, -1), (0, 1), (0, 2)),
    ShapeKind.S: ((0, 0), (1, 0), (0, 1), (-1, 1)),
    ShapeKind.Z: ((0, 0), (-1, 0), (0, 1), (1, 1)),
}


def _color_for_index(index: int) -> Color:
    hue = index / len(ShapeKind)
    r, g, b = colorsys.hls_to_rgb(hue, 0.6, 0.75)
    return int(r * 255), int(g * 255), int(b * 255)


SHAPE_COLORS: Dict[ShapeKind, Color] = {
    kind: _color_for_index(i) for i, kind in enumerate(ShapeKind)
}

EMPTY_COLOR: Color = (20, 20, 26)

_PALETTE: Dict[int, Color] = {int(kind): color for kind, color in SHAPE_COLORS.items()}


def color_for_value(v: int) -> Color:
    """Palette lookup for a grid value; negative values mark the falling piece."""
    if v == 0:
        return EMPTY_COLOR
    return _PALETTE.get(abs(v), (200, 200, 200))
