from __future__ import annotations

import random
from dataclasses import dataclass
from enum import IntEnum
from types import MappingProxyType
from typing import Iterator, Mapping, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 0
    O = 1
    T = 2
    L = 3
    J = 4
    S = 5
    Z = 6


Shape = np.ndarray
Coordinate = Tuple[int, int]


def _frozen(rows) -> Shape:
    arr = np.array(rows, dtype=np.int8)
    arr.setflags(write=False)
    return arr


BASE_SHAPES: Mapping[TetrominoType, Shape] = MappingProxyType({
    TetrominoType.I: _frozen([[1, 1, 1, 1]]),
    TetrominoType.O: _frozen([[1, 1], [1, 1]]),
    TetrominoType.T: _frozen([[0, 1, 0], [1, 1, 1]]),
    TetrominoType.L: _frozen([[1, 0, 0], [1, 1, 1]]),
    TetrominoType.J: _frozen([[0, 0, 1], [1, 1, 1]]),
    TetrominoType.S: _frozen([[0, 1, 1], [1, 1, 0]]),
    TetrominoType.Z: _frozen([[1, 1, 0], [0, 1, 1]]),
})


def rotate_cw(shape: Shape) -> Shape:
    """Rotate a shape matrix 90 degrees clockwise.

    Transposes the matrix and reverses each resulting row. There is no pivot:
    the result is anchored at the same top-left corner as the input. The
    returned matrix is a fresh read-only array.
    """
    rotated = np.ascontiguousarray(np.asarray(shape).T[:, ::-1], dtype=np.int8)
    rotated.setflags(write=False)
    return rotated


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def offset(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)


def shape_cells(shape: Shape, position: Position) -> Iterator[Coordinate]:
    h, w = shape.shape
    for dy in range(h):
        for dx in range(w):
            if shape[dy, dx]:
                yield position.x + dx, position.y + dy


@dataclass(frozen=True, eq=False)
class ActivePiece:
    kind: TetrominoType
    shape: Shape
    position: Position

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return ActivePiece(self.kind, self.shape, self.position.offset(dx, dy))

    def with_shape(self, shape: Shape) -> "ActivePiece":
        return ActivePiece(self.kind, shape, self.position)

    def cells(self) -> list[Coordinate]:
        return list(shape_cells(self.shape, self.position))


def spawn_position(cols: int) -> Position:
    return Position(cols // 2 - 1, 0)


def spawn_piece(kind: TetrominoType, cols: int) -> ActivePiece:
    return ActivePiece(kind, BASE_SHAPES[kind], spawn_position(cols))


def random_piece(rng: random.Random, cols: int) -> ActivePiece:
    kind = rng.choice(list(TetrominoType))
    return spawn_piece(kind, cols)
