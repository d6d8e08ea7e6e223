"""Game module for the Tetris engine.

Exports the rules engine and supporting types:
- TetrominoType / BASE_SHAPES: the seven-shape catalog and rotation
- collides / lock_piece / clear_rows: board operations and the collision oracle
- ScoringRules: linear per-line scoring
- GameConfig / GameState: configuration and the immutable state root
- Intent / step / TetrisGame: transitions over the state root
- GameSession / Ticker: ordered intent channel and gravity timer
"""

from .pieces import BASE_SHAPES, ActivePiece, Position, TetrominoType, rotate_cw, spawn_position
from .grid import clear_rows, collides, empty_board, full_rows, lock_piece, render_overlay
from .rules import ScoringRules
from .state import GameConfig, GameState, new_game
from .core import Intent, StepResult, TetrisGame, descend, move_left, move_right, rotate, step
from .driver import GameSession, Ticker

__all__ = [
    "BASE_SHAPES",
    "ActivePiece",
    "Position",
    "TetrominoType",
    "rotate_cw",
    "spawn_position",
    "clear_rows",
    "collides",
    "empty_board",
    "full_rows",
    "lock_piece",
    "render_overlay",
    "ScoringRules",
    "GameConfig",
    "GameState",
    "new_game",
    "Intent",
    "StepResult",
    "TetrisGame",
    "descend",
    "move_left",
    "move_right",
    "rotate",
    "step",
    "GameSession",
    "Ticker",
]
