from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from falling_blocks.game import Action, GameConfig, GameSession
from .renderer import Renderer

logger = logging.getLogger(__name__)


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
    pygame.K_DOWN: Action.DOWN,
    pygame.K_UP: Action.ROTATE,
    pygame.K_SPACE: Action.HARD_DROP,
}


def run(seed: Optional[int] = None, cell_size: int = 32, fps: int = 60) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        session = GameSession(GameConfig(random_seed=seed))
        renderer = Renderer(cell_size=cell_size)
        screen = pygame.display.set_mode(renderer.window_size)
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_r and session.game_over:
                        session.reset()
                    else:
                        action = KEY_TO_ACTION.get(event.key)
                        if action is not None:
                            session.press(action)
                elif event.type == pygame.KEYUP:
                    action = KEY_TO_ACTION.get(event.key)
                    if action is not None:
                        session.release(action)

            dt = clock.tick(fps)
            session.update(dt)
            renderer.draw(screen, session.snapshot(), session.effects.particles)
        logger.info("Closed with score %d", session.score)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=32)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", default="INFO")
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run(seed=args.seed, cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
