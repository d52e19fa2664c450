from __future__ import annotations

import numpy as np

from falling_blocks.game import (
    DROP_INTERVAL_MS,
    SPAWN_COLUMN,
    Action,
    GameConfig,
    GameSession,
    GameState,
    Piece,
    ShapeKind,
)

from conftest import fill_row


def _use_piece(session: GameSession, kind: ShapeKind) -> Piece:
    session.current_piece = Piece.spawn(kind, session.grid, SPAWN_COLUMN)
    return session.current_piece


def _tick_until_placed(session: GameSession, max_ticks: int = 100) -> int:
    placed = session.pieces_placed
    for tick in range(1, max_ticks + 1):
        session.update(1)
        if session.pieces_placed > placed:
            return tick
    raise AssertionError("piece never landed")


def test_new_session_is_playing_with_two_pieces(session):
    assert session.state is GameState.PLAYING
    assert session.score == 0
    assert session.grid.filled_count() == 0
    assert session.current_piece is not session.next_piece


def test_gravity_moves_piece_once_per_interval(session):
    piece = _use_piece(session, ShapeKind.T)
    session.update(DROP_INTERVAL_MS - 1)
    assert piece.cells[0] == (4, 1)
    session.update(1)
    assert piece.cells[0] == (4, 2)
    assert session.drop_timer == 0
    session.update(DROP_INTERVAL_MS)
    assert piece.cells[0] == (4, 3)


def test_held_move_repeats_at_its_delay(session):
    piece = _use_piece(session, ShapeKind.T)
    session.press(Action.LEFT)
    session.update(1)
    assert piece.cells[0] == (3, 1)
    session.update(50)
    assert piece.cells[0] == (3, 1)
    session.update(30)
    assert piece.cells[0] == (2, 1)


def test_repeated_press_of_held_action_is_idempotent(session):
    piece = _use_piece(session, ShapeKind.T)
    session.press(Action.LEFT)
    session.update(1)
    session.press(Action.LEFT)
    session.update(1)
    assert piece.cells[0] == (3, 1)


def test_last_pressed_action_wins(session):
    piece = _use_piece(session, ShapeKind.T)
    session.press(Action.LEFT)
    session.press(Action.RIGHT)
    session.update(1)
    assert piece.cells[0] == (5, 1)
    session.release(Action.RIGHT)
    session.update(1)
    assert piece.cells[0] == (4, 1)
    session.release(Action.LEFT)
    session.update(200)
    assert piece.cells[0] == (4, 1)


def test_rotate_repeats_slower_than_moves(session):
    piece = _use_piece(session, ShapeKind.T)
    session.press(Action.ROTATE)
    session.update(1)
    assert set(piece.cells) == {(4, 1), (4, 0), (4, 2), (5, 1)}
    session.update(80)
    assert set(piece.cells) == {(4, 1), (4, 0), (4, 2), (5, 1)}
    session.update(20)
    assert set(piece.cells) == {(4, 1), (3, 1), (5, 1), (4, 2)}


def test_hard_drop_descends_one_row_per_tick(session):
    _use_piece(session, ShapeKind.I)
    upcoming = session.next_piece
    session.press(Action.HARD_DROP)
    assert session.hard_dropping

    ticks = _tick_until_placed(session)

    assert ticks == 17
    assert not session.hard_dropping
    assert all(session.grid.grid[y, 4] == int(ShapeKind.I) for y in range(16, 20))
    assert session.grid.filled_count() == 4
    assert session.current_piece is upcoming
    assert session.state is GameState.PLAYING


def test_o_piece_filling_gap_clears_row(session):
    grid = session.grid
    fill_row(grid, 19, value=int(ShapeKind.L), skip={4, 5})
    grid.set_cell(0, 18, int(ShapeKind.S))
    _use_piece(session, ShapeKind.O)

    session.press(Action.HARD_DROP)
    _tick_until_placed(session)

    assert session.score == 20
    assert session.lines_cleared_total == 1
    assert grid.grid[19, 0] == int(ShapeKind.S)
    assert grid.grid[19, 4] == int(ShapeKind.O)
    assert grid.grid[19, 5] == int(ShapeKind.O)
    assert np.count_nonzero(grid.grid[19]) == 3
    assert grid.filled_count() == 3
    assert len(session.effects) == 10 * 4
    assert session.state is GameState.PLAYING


def test_landing_at_top_row_ends_game_and_freezes_state(session):
    grid = session.grid
    for y in range(2, grid.height):
        grid.set_cell(4, y, 1)
        grid.set_cell(5, y, 1)
    piece = _use_piece(session, ShapeKind.O)
    upcoming = session.next_piece

    session.update(DROP_INTERVAL_MS)

    assert piece.landed
    assert session.state is GameState.GAME_OVER
    assert session.game_over
    assert session.current_piece is upcoming
    assert session.next_piece is not upcoming
    frozen = grid.clone_state()
    cells = list(session.current_piece.cells)

    session.press(Action.LEFT)
    session.press(Action.HARD_DROP)
    for _ in range(10):
        session.update(DROP_INTERVAL_MS)

    assert session.state is GameState.GAME_OVER
    assert (grid.grid == frozen).all()
    assert session.current_piece.cells == cells
    assert not session.hard_dropping
    assert session.score == 0


def test_cells_above_field_are_dropped_on_landing(session):
    grid = session.grid
    grid.set_cell(4, 2, 1)
    session.current_piece = Piece(ShapeKind.I, [(4, 0), (4, -1), (4, 1), (4, -2)], grid)

    session.update(DROP_INTERVAL_MS)

    assert session.game_over
    assert grid.grid[0, 4] == int(ShapeKind.I)
    assert grid.grid[1, 4] == int(ShapeKind.I)
    assert grid.filled_count() == 3


def test_reset_after_game_over(session):
    for y in range(4, session.grid.height):
        session.grid.set_cell(4, y, 1)
    _use_piece(session, ShapeKind.I)
    session.update(DROP_INTERVAL_MS)
    assert session.game_over

    session.reset()

    assert session.state is GameState.PLAYING
    assert session.score == 0
    assert session.pieces_placed == 0
    assert session.grid.filled_count() == 0


def test_snapshot_exposes_read_only_view(session):
    _use_piece(session, ShapeKind.I)
    snap = session.snapshot()
    assert snap.current_kind is ShapeKind.I
    assert set(snap.current_cells) == {(4, 0), (4, 1), (4, 2), (4, 3)}
    assert set(snap.preview_cells) == {(4, 16), (4, 17), (4, 18), (4, 19)}
    assert snap.next_kind is session.next_piece.kind
    assert snap.state is GameState.PLAYING

    snap.grid[0, 0] = 3
    assert session.grid.grid[0, 0] == 0
    assert set(session.current_piece.cells) == {(4, 0), (4, 1), (4, 2), (4, 3)}


def test_get_state_overlays_falling_piece(session):
    _use_piece(session, ShapeKind.I)
    state = session.get_state()
    assert all(state[y, 4] == -int(ShapeKind.I) for y in range(4))
    assert np.count_nonzero(state) == 4
    assert session.grid.filled_count() == 0


def _scripted_run(seed: int) -> GameSession:
    session = GameSession(GameConfig(random_seed=seed))
    for i in range(3000):
        if i % 41 == 0:
            session.press(Action.HARD_DROP)
        if i % 7 == 0:
            session.press(Action.LEFT)
        elif i % 7 == 3:
            session.release(Action.LEFT)
            session.press(Action.ROTATE)
        elif i % 7 == 5:
            session.release(Action.ROTATE)
            session.press(Action.RIGHT)
        elif i % 7 == 6:
            session.release(Action.RIGHT)
        session.update(16)
    return session


def test_replaying_inputs_reproduces_state():
    a = _scripted_run(99)
    b = _scripted_run(99)
    assert (a.grid.grid == b.grid.grid).all()
    assert a.score == b.score
    assert a.state is b.state
    assert a.pieces_placed == b.pieces_placed > 0
    assert a.current_piece.cells == b.current_piece.cells
    assert a.next_piece.kind is b.next_piece.kind
