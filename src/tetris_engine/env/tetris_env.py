from __future__ import annotations

import random
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_engine.game import GameConfig, Intent, ScoringRules, TetrisGame
from tetris_engine.game.core import INPUT_INTENTS
from tetris_engine.game.grid import ACTIVE, LOCKED, max_height


_PALETTE = {
    0: (30, 30, 36),
    LOCKED: (200, 60, 60),
    ACTIVE: (240, 200, 60),
}


class TetrisEnv(gym.Env):
    """One env step applies one player intent, then gravity every ``tick_every`` steps.

    Actions index ``INPUT_INTENTS`` (left, right, soft drop, rotate). The
    observation is the board with the active piece overlaid (0 empty, 1
    locked, 2 active). Reward is the engine score gained during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None,
                 render_mode: Optional[str] = None, tick_every: int = 1) -> None:
        super().__init__()
        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"unsupported render_mode {render_mode!r}")
        if tick_every < 0:
            raise ValueError(f"tick_every must be >= 0, got {tick_every}")
        self.game = TetrisGame(config, rules)
        self.render_mode = render_mode
        self.tick_every = int(tick_every)

        rows, cols = self.game.config.rows, self.game.config.cols
        self.observation_space = spaces.Box(low=0, high=ACTIVE, shape=(rows, cols), dtype=np.int8)
        self.action_space = spaces.Discrete(len(INPUT_INTENTS))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.game.state.snapshot().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        state = self.game.state
        return {
            "score": state.score,
            "lines_cleared_total": state.lines_cleared,
            "pieces_locked": state.pieces_locked,
            "max_height": max_height(state.board),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        # Derive the engine RNG from the env's seeded generator so episodes are reproducible.
        self.game.rng = random.Random(int(self.np_random.integers(0, 2**31 - 1)))
        self.game.reset()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        intent = INPUT_INTENTS[int(action)]
        score_before = self.game.state.score

        result = self.game.step(intent)
        lines = result.lines_cleared
        self._steps += 1
        if self.tick_every and self._steps % self.tick_every == 0:
            tick = self.game.step(Intent.TICK)
            lines += tick.lines_cleared

        reward = float(self.game.state.score - score_before)
        terminated = bool(self.game.state.is_game_over)

        info = self._get_info()
        info["lines_cleared"] = lines
        return self._get_obs(), reward, terminated, False, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        grid = self._get_obs()
        cell = 12
        h, w = grid.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = _PALETTE[int(grid[y, x])]
        return img
