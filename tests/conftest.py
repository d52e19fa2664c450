from __future__ import annotations

import pytest

from falling_blocks.game import FIELD_COLS, FIELD_ROWS, GameConfig, GameGrid, GameSession


@pytest.fixture
def grid() -> GameGrid:
    return GameGrid(FIELD_COLS, FIELD_ROWS)


@pytest.fixture
def session() -> GameSession:
    return GameSession(GameConfig(random_seed=1234))


def fill_row(grid: GameGrid, y: int, value: int = 1, skip=()) -> None:
    for x in range(grid.width):
        if x not in skip:
            grid.set_cell(x, y, value)
