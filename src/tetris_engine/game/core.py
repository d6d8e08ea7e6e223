from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from .grid import clear_rows, collides, full_rows, lock_piece
from .pieces import random_piece, rotate_cw
from .rules import ScoringRules
from .state import GameConfig, GameState, new_game


logger = logging.getLogger(__name__)


class Intent(IntEnum):
    LEFT = 0
    RIGHT = 1
    SOFT_DROP = 2
    ROTATE = 3
    TICK = 4


INPUT_INTENTS = (Intent.LEFT, Intent.RIGHT, Intent.SOFT_DROP, Intent.ROTATE)


@dataclass(frozen=True)
class StepResult:
    state: GameState
    lines_cleared: int = 0
    locked: bool = False


def move(state: GameState, dx: int, dy: int) -> GameState:
    """Shift the active piece; a colliding move returns ``state`` unchanged."""
    if state.piece is None:
        return state
    proposed = state.piece.position.offset(dx, dy)
    if collides(state.piece.shape, proposed, state.board):
        return state
    return state.evolve(piece=state.piece.moved(dx, dy))


def move_left(state: GameState) -> GameState:
    return move(state, -1, 0)


def move_right(state: GameState) -> GameState:
    return move(state, 1, 0)


def rotate(state: GameState) -> GameState:
    # No wall kicks: a rotation that collides is dropped.
    if state.piece is None:
        return state
    rotated = rotate_cw(state.piece.shape)
    if collides(rotated, state.piece.position, state.board):
        return state
    return state.evolve(piece=state.piece.with_shape(rotated))


def descend(
    state: GameState,
    rng: random.Random,
    rules: Optional[ScoringRules] = None,
    config: Optional[GameConfig] = None,
) -> StepResult:
    """Move the active piece down one row, or lock it and resolve the board.

    Locking burns the piece into a copy of the board at its current position,
    clears every full row top-down (each removal inserts an empty row at the
    top), scores the cleared rows and spawns the next piece.
    """
    rules = rules or ScoringRules()
    piece = state.piece
    if piece is None:
        return StepResult(state)
    below = piece.position.offset(0, 1)
    if not collides(piece.shape, below, state.board):
        return StepResult(state.evolve(piece=piece.moved(0, 1)))

    board = lock_piece(state.board, piece.shape, piece.position)
    rows = full_rows(board)
    board = clear_rows(board, rows)
    lines = len(rows)
    logger.debug("locked %s at (%d, %d), cleared %d", piece.kind.name, piece.position.x, piece.position.y, lines)

    locked = state.evolve(
        board=board,
        score=state.score + rules.score_for_lines(lines),
        lines_cleared=state.lines_cleared + lines,
        pieces_locked=state.pieces_locked + 1,
    )

    detect = config.detect_game_over if config is not None else True
    spawned = random_piece(rng, state.cols)
    if detect and collides(spawned.shape, spawned.position, board):
        logger.info("game over: score=%d lines=%d pieces=%d", locked.score, locked.lines_cleared, locked.pieces_locked)
        return StepResult(locked.evolve(piece=None, is_game_over=True), lines_cleared=lines, locked=True)
    return StepResult(locked.evolve(piece=spawned), lines_cleared=lines, locked=True)


def step(
    state: GameState,
    intent: Intent,
    rng: random.Random,
    rules: Optional[ScoringRules] = None,
    config: Optional[GameConfig] = None,
) -> StepResult:
    if state.is_game_over:
        return StepResult(state)

    if intent == Intent.LEFT:
        return StepResult(move_left(state))
    if intent == Intent.RIGHT:
        return StepResult(move_right(state))
    if intent == Intent.ROTATE:
        return StepResult(rotate(state))
    if intent in (Intent.SOFT_DROP, Intent.TICK):
        return descend(state, rng, rules, config)
    raise ValueError(f"unknown intent {intent!r}")


class TetrisGame:
    """Holds the latest committed GameState and applies intents to it."""

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = random.Random(self.config.random_seed)
        self.state = new_game(self.config, self.rng)

    def reset(self, seed: Optional[int] = None) -> GameState:
        if seed is not None:
            self.rng = random.Random(seed)
        self.state = new_game(self.config, self.rng)
        return self.state

    def step(self, intent: Intent) -> StepResult:
        result = step(self.state, intent, self.rng, self.rules, self.config)
        self.state = result.state
        return result

    @property
    def game_over(self) -> bool:
        return self.state.is_game_over

    @property
    def score(self) -> int:
        return self.state.score
