from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from tetris_engine.game import GameConfig, GameSession, Intent
from tetris_engine.utils.logging import setup_logger
from .renderer import Renderer


logger = logging.getLogger(__name__)

KEY_TO_INTENT: Dict[int, Intent] = {
    pygame.K_LEFT: Intent.LEFT,
    pygame.K_RIGHT: Intent.RIGHT,
    pygame.K_DOWN: Intent.SOFT_DROP,
    pygame.K_UP: Intent.ROTATE,
}


def run(config: Optional[GameConfig] = None, cell_size: int = 30, fps: int = 60) -> int:
    """Play until the window closes; return the final score."""
    config = config or GameConfig()
    renderer = Renderer(cell_size=cell_size)

    pygame.init()
    try:
        screen = pygame.display.set_mode(renderer.window_size(config.rows, config.cols))
        pygame.display.set_caption("Tetris")
        clock = pygame.time.Clock()

        session = GameSession(config=config)
        with session:
            running = True
            while running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        if event.key == pygame.K_ESCAPE:
                            running = False
                        elif event.key == pygame.K_r and session.state.is_game_over:
                            logger.info("restart after score %d", session.state.score)
                            session.game.reset()
                        else:
                            intent = KEY_TO_INTENT.get(event.key)
                            if intent is not None:
                                session.submit(intent)

                # Ticker and keys share one queue; apply everything in arrival order.
                session.pump()
                renderer.draw(screen, session.state)
                clock.tick(fps)

            final = session.state
        logger.info("final score %d, lines %d, pieces %d", final.score, final.lines_cleared, final.pieces_locked)
        return final.score
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Tetris with the arrow keys.")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--tick-ms", type=int, default=1000)
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--rows", type=int, default=20)
    p.add_argument("--cols", type=int, default=10)
    p.add_argument("--no-game-over", action="store_true",
                   help="never latch game over; pieces may spawn into the stack")
    p.add_argument("--log-level", type=str, default="info")
    return p


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(name="tetris_engine", level=args.log_level)
    config = GameConfig(
        rows=args.rows,
        cols=args.cols,
        tick_ms=args.tick_ms,
        random_seed=args.seed,
        detect_game_over=not args.no_game_over,
    )
    run(config, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
