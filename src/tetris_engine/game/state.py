from __future__ import annotations

import random
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from .grid import Board, empty_board, render_overlay
from .pieces import ActivePiece, random_piece


@dataclass
class GameConfig:
    rows: int = 20
    cols: int = 10
    tick_ms: int = 1000
    random_seed: Optional[int] = None
    # When False the latch never sets and a piece may spawn into the stack.
    detect_game_over: bool = True

    def __post_init__(self) -> None:
        if self.rows < 2:
            raise ValueError(f"rows must be >= 2, got {self.rows}")
        # The I piece is 4 wide and spawns at cols // 2 - 1.
        if self.cols < 5:
            raise ValueError(f"cols must be >= 5, got {self.cols}")
        if self.tick_ms <= 0:
            raise ValueError(f"tick_ms must be positive, got {self.tick_ms}")


@dataclass(frozen=True, eq=False)
class GameState:
    """Root of all game data.

    Transitions never mutate a GameState; they publish a new one. ``board`` is a
    read-only array owned by this state alone.
    """

    board: Board
    # None once the game-over latch is set; no piece is in play then.
    piece: Optional[ActivePiece]
    score: int = 0
    is_game_over: bool = False
    lines_cleared: int = 0
    pieces_locked: int = 0

    @property
    def rows(self) -> int:
        return int(self.board.shape[0])

    @property
    def cols(self) -> int:
        return int(self.board.shape[1])

    def evolve(self, **changes) -> "GameState":
        return replace(self, **changes)

    def snapshot(self) -> np.ndarray:
        """Board with the active piece overlaid, for renderers."""
        return render_overlay(self.board, self.piece)


def new_game(config: GameConfig, rng: random.Random) -> GameState:
    return GameState(
        board=empty_board(config.rows, config.cols),
        piece=random_piece(rng, config.cols),
    )
