from __future__ import annotations

from typing import List, Optional

import numpy as np

from tetris_engine.errors import CollisionInvariantError

from .pieces import ActivePiece, Position, Shape, shape_cells


Board = np.ndarray

EMPTY = 0
LOCKED = 1
ACTIVE = 2


def _freeze(board: Board) -> Board:
    board.setflags(write=False)
    return board


def empty_board(rows: int, cols: int) -> Board:
    return _freeze(np.zeros((int(rows), int(cols)), dtype=np.int8))


def collides(shape: Shape, position: Position, board: Board) -> bool:
    """Collision oracle.

    True if any filled cell of ``shape`` anchored at ``position`` is below the
    floor, outside the side walls, or on an occupied board cell. Bounds are
    checked before the board is indexed, so the lookup is always in range.
    Cells above the top row count as a breach; no spawn or move produces them.
    """
    rows, cols = board.shape
    for x, y in shape_cells(shape, position):
        if y >= rows:
            return True
        if x < 0 or x >= cols:
            return True
        if y < 0:
            return True
        if board[y, x] != EMPTY:
            return True
    return False


def lock_piece(board: Board, shape: Shape, position: Position) -> Board:
    """Burn ``shape`` into a copy of ``board`` at ``position``.

    Writing an already-occupied cell leaves it occupied; that only happens when
    game-over detection is off and a piece spawned into the stack.
    """
    rows, cols = board.shape
    locked = board.copy()
    for x, y in shape_cells(shape, position):
        if not (0 <= x < cols and 0 <= y < rows):
            raise CollisionInvariantError(f"lock outside board at ({x}, {y}) on {rows}x{cols}")
        locked[y, x] = LOCKED
    return _freeze(locked)


def full_rows(board: Board) -> List[int]:
    return [int(y) for y in np.flatnonzero(np.all(board != EMPTY, axis=1))]


def clear_rows(board: Board, rows: List[int]) -> Board:
    """Remove each listed row in order, inserting an empty row at the top.

    Rows must be given top-to-bottom. Removing row ``y`` shifts only rows
    above it, so indices of later (lower) rows stay valid.
    """
    if not rows:
        return board
    width = board.shape[1]
    cleared = board
    for y in rows:
        cleared = np.vstack((np.zeros((1, width), dtype=np.int8), np.delete(cleared, y, axis=0)))
    return _freeze(cleared)


def render_overlay(board: Board, piece: Optional[ActivePiece]) -> np.ndarray:
    """Copy of ``board`` with the active piece's cells marked ``ACTIVE``."""
    view = board.copy()
    if piece is not None:
        rows, cols = view.shape
        for x, y in piece.cells():
            if 0 <= y < rows and 0 <= x < cols:
                view[y, x] = ACTIVE
    return view


def max_height(board: Board) -> int:
    # y=0 is top; find first non-empty from top
    non_empty_rows = np.flatnonzero(np.any(board != EMPTY, axis=1))
    if non_empty_rows.size == 0:
        return 0
    return board.shape[0] - int(non_empty_rows[0])
