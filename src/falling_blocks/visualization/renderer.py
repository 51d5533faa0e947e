from __future__ import annotations

from typing import Optional, Tuple

import pygame

from falling_blocks.game import GameSnapshot, GameStatus, Piece

BACKGROUND = (10, 10, 14)
EMPTY_CELL = (30, 30, 36)
LOCKED_CELL = (90, 90, 110)
FLASH = (240, 240, 240)
TEXT = (230, 230, 230)

STATUS_TEXT = {
    GameStatus.NOT_STARTED: "Press Enter to start",
    GameStatus.PAUSED: "Paused - Space to resume",
    GameStatus.GAME_OVER: "Game Over - R to restart",
}


def _color_for_piece(piece: Piece) -> Tuple[int, int, int]:
    try:
        c = pygame.Color(piece.color)
    except ValueError:
        return (200, 200, 200)
    return (c.r, c.g, c.b)


class Renderer:
    def __init__(self, cell_size: int = 20, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        panel_w = 6 * self.cell_size
        return (
            self.margin * 3 + width * self.cell_size + panel_w,
            self.margin * 2 + height * self.cell_size,
        )

    def _cell_rect(self, x0: int, y0: int, row: int, col: int) -> pygame.Rect:
        return pygame.Rect(
            x0 + col * self.cell_size,
            y0 + row * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _draw_board(self, screen: pygame.Surface, snapshot: GameSnapshot, flash_on: bool) -> None:
        h, w = snapshot.board.shape
        for y in range(h):
            for x in range(w):
                color = LOCKED_CELL if snapshot.board[y, x] else EMPTY_CELL
                pygame.draw.rect(screen, color, self._cell_rect(self.margin, self.margin, y, x))
        if flash_on:
            for y in snapshot.clearing_rows:
                band = pygame.Rect(self.margin, self.margin + y * self.cell_size, w * self.cell_size, self.cell_size - 1)
                pygame.draw.rect(screen, FLASH, band, 1)

    def _draw_piece(self, screen: pygame.Surface, piece: Piece, height: int) -> None:
        color = _color_for_piece(piece)
        for row, col in piece.occupied_cells():
            # Cells above the visible board are clipped.
            if 0 <= row < height:
                pygame.draw.rect(screen, color, self._cell_rect(self.margin, self.margin, row, col))

    def _draw_preview(self, screen: pygame.Surface, piece: Piece, x0: int, y0: int) -> None:
        color = _color_for_piece(piece)
        for row in range(4):
            for col in range(4):
                pygame.draw.rect(screen, EMPTY_CELL, self._cell_rect(x0, y0, row, col))
        origin = piece.translated(-piece.row, -piece.col)
        for row, col in origin.occupied_cells():
            pygame.draw.rect(screen, color, self._cell_rect(x0, y0, row, col))

    def draw(
        self,
        screen: pygame.Surface,
        snapshot: GameSnapshot,
        font: Optional[pygame.font.Font] = None,
        flash_on: bool = False,
    ) -> None:
        h, w = snapshot.board.shape
        screen.fill(BACKGROUND)
        self._draw_board(screen, snapshot, flash_on)
        if snapshot.active is not None:
            self._draw_piece(screen, snapshot.active, h)

        panel_x = self.margin * 2 + w * self.cell_size
        preview_y = self.margin + 2 * self.cell_size
        if snapshot.next_piece is not None:
            self._draw_preview(screen, snapshot.next_piece, panel_x, preview_y)

        if font is not None:
            lines = [
                f"Score {snapshot.score}",
                f"Lines {snapshot.lines_cleared_total}",
                f"Speed {snapshot.fall_interval_ms} ms",
            ]
            y = preview_y + 5 * self.cell_size
            for text in lines:
                screen.blit(font.render(text, True, TEXT), (panel_x, y))
                y += font.get_linesize()
            message = STATUS_TEXT.get(snapshot.status)
            if message:
                surf = font.render(message, True, TEXT)
                rect = surf.get_rect(center=(self.margin + w * self.cell_size // 2, self.margin + h * self.cell_size // 2))
                screen.blit(surf, rect)
