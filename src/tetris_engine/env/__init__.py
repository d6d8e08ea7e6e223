"""Gymnasium environments for the Tetris engine."""

from __future__ import annotations

from gymnasium.envs.registration import register

ENV_ID = "Tetris-20x10-v0"

register(
    id=ENV_ID,
    entry_point="tetris_engine.env.tetris_env:TetrisEnv",
    max_episode_steps=10000,
)

__all__ = ["ENV_ID"]
