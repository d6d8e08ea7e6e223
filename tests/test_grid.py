# tests/test_grid.py
from __future__ import annotations

import numpy as np
import pytest

from tetris_engine.errors import CollisionInvariantError
from tetris_engine.game.grid import (
    ACTIVE,
    clear_rows,
    collides,
    empty_board,
    full_rows,
    lock_piece,
    max_height,
    render_overlay,
)
from tetris_engine.game.pieces import BASE_SHAPES, Position, TetrominoType, spawn_piece

O = BASE_SHAPES[TetrominoType.O]
I = BASE_SHAPES[TetrominoType.I]


def test_collides_on_floor_walls_and_stack() -> None:
    board = empty_board(20, 10)
    assert not collides(O, Position(4, 0), board)
    assert not collides(O, Position(8, 18), board)
    assert collides(O, Position(4, 19), board)
    assert collides(O, Position(-1, 0), board)
    assert collides(O, Position(9, 0), board)
    assert collides(I, Position(7, 0), board)

    stacked = board.copy()
    stacked[10, 5] = 1
    assert collides(O, Position(4, 9), stacked)
    assert not collides(O, Position(6, 9), stacked)


def test_collides_ignores_empty_cells_of_the_matrix() -> None:
    board = empty_board(20, 10)
    t = BASE_SHAPES[TetrominoType.T]
    # The T's top corners are empty; a locked cell under one is not a hit.
    blocked = board.copy()
    blocked[0, 0] = 1
    assert not collides(t, Position(0, 0), blocked)


def test_collides_never_indexes_out_of_range() -> None:
    board = empty_board(4, 4)
    for x in range(-6, 8):
        for y in range(-6, 8):
            collides(I, Position(x, y), board)


def test_lock_piece_copies_the_board() -> None:
    board = empty_board(20, 10)
    locked = lock_piece(board, O, Position(4, 18))
    assert board.sum() == 0
    assert not locked.flags.writeable
    assert locked[18:20, 4:6].tolist() == [[1, 1], [1, 1]]
    assert locked.sum() == 4


def test_lock_piece_outside_board_is_an_invariant_error() -> None:
    with pytest.raises(CollisionInvariantError, match="outside board"):
        lock_piece(empty_board(20, 10), O, Position(9, 0))


def test_full_rows_scans_top_to_bottom() -> None:
    board = np.zeros((6, 4), dtype=np.int8)
    board[1, :] = 1
    board[4, :] = 1
    board[5, :3] = 1
    assert full_rows(board) == [1, 4]


def test_clear_rows_drops_rows_and_keeps_survivor_order() -> None:
    board = np.array(
        [
            [0, 0, 0],
            [1, 0, 0],
            [1, 1, 1],
            [0, 1, 0],
            [1, 1, 1],
            [0, 0, 1],
        ],
        dtype=np.int8,
    )
    cleared = clear_rows(board, full_rows(board))
    assert cleared.tolist() == [
        [0, 0, 0],
        [0, 0, 0],
        [0, 0, 0],
        [1, 0, 0],
        [0, 1, 0],
        [0, 0, 1],
    ]
    assert cleared.shape == board.shape


def test_clear_rows_without_rows_returns_same_board() -> None:
    board = empty_board(5, 5)
    assert clear_rows(board, []) is board


def test_render_overlay_marks_active_cells_on_a_copy() -> None:
    board = empty_board(20, 10)
    view = render_overlay(board, spawn_piece(TetrominoType.O, 10))
    assert board.sum() == 0
    assert int((view == ACTIVE).sum()) == 4
    assert view[0:2, 4:6].tolist() == [[ACTIVE, ACTIVE], [ACTIVE, ACTIVE]]


def test_max_height_counts_from_the_floor() -> None:
    board = np.zeros((20, 10), dtype=np.int8)
    assert max_height(board) == 0
    board[15, 3] = 1
    assert max_height(board) == 5
