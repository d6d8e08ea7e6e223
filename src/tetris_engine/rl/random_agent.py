from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import gymnasium as gym

from tetris_engine.env import ENV_ID
from tetris_engine.utils.logging import setup_logger


logger = logging.getLogger(__name__)


def run_random(steps: int = 2000, seed: Optional[int] = None) -> Dict[str, float]:
    env = gym.make(ENV_ID)
    obs, info = env.reset(seed=seed)
    env.action_space.seed(seed)
    total_reward = 0.0
    episodes = 0
    best_score = 0
    for _ in range(steps):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += float(reward)
        best_score = max(best_score, int(info["score"]))
        if terminated or truncated:
            episodes += 1
            logger.debug("episode %d done: score=%d lines=%d", episodes, info["score"], info["lines_cleared_total"])
            obs, info = env.reset()
    env.close()
    logger.info(f"Random agent total reward: {total_reward:.2f} over {episodes} finished episodes (best score {best_score})")
    return {"total_reward": total_reward, "episodes": float(episodes), "best_score": float(best_score)}


def main() -> None:
    p = argparse.ArgumentParser(description="Roll out a uniform random policy.")
    p.add_argument("--steps", type=int, default=2000)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", type=str, default="info")
    args = p.parse_args()
    setup_logger(name="tetris_engine", level=args.log_level)
    run_random(args.steps, args.seed)


if __name__ == "__main__":  # pragma: no cover
    main()
