# tests/test_play_shell.py
from __future__ import annotations

import os

import pytest

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
pygame = pytest.importorskip("pygame")

from falling_blocks.game import Command, GameConfig, GameEngine, Piece, ShapeType  # noqa: E402
from falling_blocks.visualization.human_play import KEY_TO_COMMAND, build_parser  # noqa: E402
from falling_blocks.visualization.renderer import EMPTY_CELL, LOCKED_CELL, Renderer  # noqa: E402


def _pixel(surface, x: int, y: int) -> tuple:
    return tuple(surface.get_at((x, y)))[:3]


def test_key_map_matches_controls() -> None:
    assert KEY_TO_COMMAND[pygame.K_LEFT] is Command.LEFT
    assert KEY_TO_COMMAND[pygame.K_RIGHT] is Command.RIGHT
    assert KEY_TO_COMMAND[pygame.K_UP] is Command.ROTATE
    assert KEY_TO_COMMAND[pygame.K_DOWN] is Command.SOFT_DROP
    assert KEY_TO_COMMAND[pygame.K_SPACE] is Command.TOGGLE_PAUSE
    assert KEY_TO_COMMAND[pygame.K_RETURN] is Command.START
    assert KEY_TO_COMMAND[pygame.K_r] is Command.RESTART


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert (args.width, args.height) == (20, 30)
    assert args.seed is None
    args = build_parser().parse_args(["--width", "10", "--seed", "4", "--cell-size", "12"])
    assert (args.width, args.seed, args.cell_size) == (10, 4, 12)
    assert args.plain_log is False
    assert build_parser().parse_args(["--plain-log"]).plain_log is True


def test_renderer_draws_locked_cells_and_active_piece() -> None:
    engine = GameEngine(GameConfig(width=6, height=8, spawn_col=1, random_seed=0))
    engine.start()
    engine.board.grid[7, 0] = 1
    engine._active = Piece(kind=ShapeType.O, color="red", row=2, col=2)  # cells rows 3..4, cols 3..4

    renderer = Renderer(cell_size=10, margin=5)
    surface = pygame.Surface(renderer.window_size(6, 8))
    renderer.draw(surface, engine.snapshot())

    def cell_center(row: int, col: int) -> tuple:
        return (5 + col * 10 + 4, 5 + row * 10 + 4)

    assert _pixel(surface, *cell_center(7, 0)) == LOCKED_CELL
    assert _pixel(surface, *cell_center(0, 0)) == EMPTY_CELL
    assert _pixel(surface, *cell_center(3, 3)) == (255, 0, 0)
    assert _pixel(surface, *cell_center(4, 4)) == (255, 0, 0)


def test_renderer_clips_piece_above_board() -> None:
    engine = GameEngine(GameConfig(width=6, height=8, spawn_col=1, random_seed=0))
    engine.start()
    engine._active = Piece(kind=ShapeType.I, rotation=0, color="red", row=-3, col=0)  # cells rows -3..0, col 1

    renderer = Renderer(cell_size=10, margin=5)
    surface = pygame.Surface(renderer.window_size(6, 8))
    renderer.draw(surface, engine.snapshot())

    assert _pixel(surface, 5 + 1 * 10 + 4, 5 + 4) == (255, 0, 0)
    assert _pixel(surface, 5 + 1 * 10 + 4, 5 + 10 + 4) == EMPTY_CELL
