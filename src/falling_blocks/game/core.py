from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import numpy as np

from .controls import Action, HeldActions, RepeatTimers
from .effects import ParticleSystem
from .grid import Coordinate, GameGrid
from .pieces import Direction, Piece
from .rules import LineClearEngine
from .shapes import Color, ShapeKind

logger = logging.getLogger(__name__)


FIELD_COLS = 10
FIELD_ROWS = 20
SPAWN_COLUMN = FIELD_COLS // 2 - 1
DROP_INTERVAL_MS = 400
MOVE_REPEAT_MS = 80
ROTATE_REPEAT_MS = 100

REPEAT_DELAYS = {
    Action.LEFT: MOVE_REPEAT_MS,
    Action.RIGHT: MOVE_REPEAT_MS,
    Action.DOWN: MOVE_REPEAT_MS,
    Action.ROTATE: ROTATE_REPEAT_MS,
}


class GameState(Enum):
    PLAYING = "playing"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    random_seed: Optional[int] = None


@dataclass
class GameSnapshot:
    """Read-only view handed to renderers and environments."""

    grid: np.ndarray
    current_kind: ShapeKind
    current_cells: List[Coordinate]
    current_color: Color
    next_kind: ShapeKind
    preview_cells: List[Coordinate]
    score: int
    state: GameState
    lines_cleared_total: int = 0
    pieces_placed: int = 0
    hard_dropping: bool = False


class GameSession:
    """Owns the field and the falling pieces and advances them in time.

    Within one ``update`` call the order is fixed: player commands, then
    gravity, then the landing sequence. Replaying the same presses, releases
    and time deltas with the same seed yields the same state.
    """

    def __init__(self, config: Optional[GameConfig] = None, line_clear: Optional[LineClearEngine] = None) -> None:
        self.config = config or GameConfig()
        self.line_clear = line_clear or LineClearEngine()
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(FIELD_COLS, FIELD_ROWS)
        self.timers = RepeatTimers(REPEAT_DELAYS)
        self.held = HeldActions()
        self.effects = ParticleSystem(self.config.random_seed)
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.state = GameState.PLAYING
        self.drop_timer = 0.0
        self.hard_dropping = False
        self.current_piece: Piece
        self.next_piece: Piece
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.timers.reset()
        self.held.clear()
        self.effects.clear()
        self.score = 0
        self.lines_cleared_total = 0
        self.pieces_placed = 0
        self.state = GameState.PLAYING
        self.drop_timer = 0.0
        self.hard_dropping = False
        self.current_piece = self._random_piece()
        self.next_piece = self._random_piece()
        logger.info("New game: current=%s next=%s", self.current_piece.kind.name, self.next_piece.kind.name)

    @property
    def game_over(self) -> bool:
        return self.state is GameState.GAME_OVER

    def _random_piece(self) -> Piece:
        kind = self.rng.choice(list(ShapeKind))
        return Piece.spawn(kind, self.grid, SPAWN_COLUMN)

    def press(self, action: Action) -> None:
        if self.game_over:
            return
        if action is Action.HARD_DROP:
            self.hard_dropping = True
            return
        if self.held.press(action):
            self.timers.prime(action)

    def release(self, action: Action) -> None:
        self.held.release(action)

    def update(self, dt: float) -> None:
        self.effects.update(dt)
        if self.game_over:
            return

        piece = self.current_piece
        if self.hard_dropping:
            piece.try_move(Direction.DOWN)
        else:
            self._apply_commands(dt)
            self.drop_timer += dt
            if self.drop_timer >= DROP_INTERVAL_MS:
                piece.try_move(Direction.DOWN)
                self.drop_timer = 0.0

        if piece.landed:
            self._land(piece)

    def _apply_commands(self, dt: float) -> None:
        action = self.held.active()
        if action is None or not self.timers.tick(action, dt):
            return
        piece = self.current_piece
        if action is Action.LEFT:
            piece.try_move(Direction.LEFT)
        elif action is Action.RIGHT:
            piece.try_move(Direction.RIGHT)
        elif action is Action.DOWN:
            piece.try_move(Direction.DOWN)
        elif action is Action.ROTATE:
            piece.try_rotate()

    def _land(self, piece: Piece) -> None:
        value = int(piece.kind)
        for x, y in piece.cells:
            if y >= 0:
                self.grid.set_cell(x, y, value)
        self.pieces_placed += 1
        self.hard_dropping = False

        delta = self.line_clear.process(self.grid)
        if delta.lines_cleared:
            self.score += delta.points
            self.lines_cleared_total += delta.lines_cleared
            self.effects.spawn(delta.cleared_cells)
            logger.debug("Cleared %d line(s), score=%d", delta.lines_cleared, self.score)

        if any(y <= 0 for _, y in piece.cells):
            self.state = GameState.GAME_OVER
            logger.info(
                "Game over: score=%d lines=%d pieces=%d",
                self.score,
                self.lines_cleared_total,
                self.pieces_placed,
            )

        self.current_piece = self.next_piece
        self.next_piece = self._random_piece()
        logger.debug("Landed %s; spawned %s", piece.kind.name, self.current_piece.kind.name)

    def snapshot(self) -> GameSnapshot:
        piece = self.current_piece
        return GameSnapshot(
            grid=self.grid.clone_state(),
            current_kind=piece.kind,
            current_cells=list(piece.cells),
            current_color=piece.color,
            next_kind=self.next_piece.kind,
            preview_cells=piece.landing_preview(),
            score=self.score,
            state=self.state,
            lines_cleared_total=self.lines_cleared_total,
            pieces_placed=self.pieces_placed,
            hard_dropping=self.hard_dropping,
        )

    def get_state(self) -> np.ndarray:
        state = self.grid.clone_state()
        if not self.game_over:
            for x, y in self.current_piece.cells:
                if self.grid.is_inside(x, y):
                    # negative = falling
                    state[y, x] = -int(self.current_piece.kind)
        return state
