from __future__ import annotations


class TetrisEngineError(Exception):
    """Base class for engine defects and misuse. Rejected moves never raise."""


class CollisionInvariantError(TetrisEngineError):
    """A lock tried to write outside the board or over a locked cell."""


class SessionClosedError(TetrisEngineError):
    """An intent was submitted to a session that has been torn down."""


__all__ = ["TetrisEngineError", "CollisionInvariantError", "SessionClosedError"]
