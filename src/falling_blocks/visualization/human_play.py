from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional, Sequence

import pygame

from falling_blocks.game import Command, GameConfig, GameEngine
from falling_blocks.utils.logging import setup_logger
from .renderer import Renderer

logger = logging.getLogger(__name__)

KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.LEFT,
    pygame.K_RIGHT: Command.RIGHT,
    pygame.K_UP: Command.ROTATE,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_SPACE: Command.TOGGLE_PAUSE,
    pygame.K_RETURN: Command.START,
    pygame.K_r: Command.RESTART,
}

FLASH_PERIOD_MS = 100


def run(config: Optional[GameConfig] = None, cell_size: int = 20, fps: int = 60) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        engine = GameEngine(config)
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(engine.board.width, engine.board.height))
        pygame.display.set_caption("Falling Blocks")
        font = pygame.font.SysFont(None, 24)

        last_revision = -1
        last_flash: Optional[bool] = None
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            engine.handle(command)

            engine.advance(clock.tick(fps))

            snapshot = engine.snapshot()
            flash_on = bool(snapshot.clearing_rows) and (pygame.time.get_ticks() // FLASH_PERIOD_MS) % 2 == 0
            if snapshot.revision != last_revision or flash_on != last_flash:
                renderer.draw(screen, snapshot, font=font, flash_on=flash_on)
                pygame.display.flip()
                last_revision = snapshot.revision
                last_flash = flash_on
        logger.info("[play] final score=%d lines=%d", engine.score, engine.lines_cleared_total)
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks")
    p.add_argument("--width", type=int, default=20)
    p.add_argument("--height", type=int, default=30)
    p.add_argument("--cell-size", type=int, default=20)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", type=str, default="info")
    p.add_argument("--plain-log", action="store_true", help="plain stream logging instead of rich")
    return p


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logger(name="falling_blocks", use_rich=not args.plain_log, level=args.log_level)
    config = GameConfig(
        width=args.width,
        height=args.height,
        spawn_col=max(0, (args.width - 4) // 2),
        random_seed=args.seed,
    )
    run(config, cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
