"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- ShapeKind: Enum of the seven tetromino shapes
- GameGrid: Field representation and line clearing
- Piece: Falling tetromino with movement, rotation and wall kicks
- LineClearEngine: Linear line-clear scoring
- GameSession: Tick-driven game loop and state management
"""

from .shapes import ShapeKind, SHAPE_OFFSETS, SHAPE_COLORS, color_for_value
from .grid import GameGrid, ClearResult, ClearedCell
from .pieces import Piece, Direction
from .rules import LineClearEngine, ScoreDelta, LINE_SCORE_MULTIPLIER
from .controls import Action, RepeatTimers, HeldActions
from .effects import ParticleSystem, Particle
from .core import (
    GameSession,
    GameConfig,
    GameSnapshot,
    GameState,
    FIELD_COLS,
    FIELD_ROWS,
    SPAWN_COLUMN,
    DROP_INTERVAL_MS,
    MOVE_REPEAT_MS,
    ROTATE_REPEAT_MS,
)

__all__ = [
    "ShapeKind",
    "SHAPE_OFFSETS",
    "SHAPE_COLORS",
    "color_for_value",
    "GameGrid",
    "ClearResult",
    "ClearedCell",
    "Piece",
    "Direction",
    "LineClearEngine",
    "ScoreDelta",
    "LINE_SCORE_MULTIPLIER",
    "Action",
    "RepeatTimers",
    "HeldActions",
    "ParticleSystem",
    "Particle",
    "GameSession",
    "GameConfig",
    "GameSnapshot",
    "GameState",
    "FIELD_COLS",
    "FIELD_ROWS",
    "SPAWN_COLUMN",
    "DROP_INTERVAL_MS",
    "MOVE_REPEAT_MS",
    "ROTATE_REPEAT_MS",
]
