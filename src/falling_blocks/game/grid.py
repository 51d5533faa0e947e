from __future__ import annotations

from typing import Iterable, List

import numpy as np

from .pieces import Piece


class Board:
    """Fixed-size grid of locked cells.

    The grid uses 0 for empty cells and 1 for locked cells. Rows grow downward;
    row 0 is the top of the visible board. Columns outside [0, width) and rows
    below the bottom count as blocked, rows above the top never do, so a piece
    may move and rotate while it is still partly off-board.
    """

    def __init__(self, width: int, height: int) -> None:
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError(f"board dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(0)

    def is_inside(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def is_blocked(self, row: int, col: int) -> bool:
        if col < 0 or col >= self.width or row >= self.height:
            return True
        if row < 0:
            return False
        return bool(self.grid[row, col])

    def collides(self, piece: Piece) -> bool:
        return any(self.is_blocked(row, col) for row, col in piece.occupied_cells())

    def lock(self, piece: Piece) -> None:
        for row, col in piece.occupied_cells():
            if self.is_inside(row, col):
                self.grid[row, col] = 1

    def full_rows(self) -> List[int]:
        return [int(r) for r in np.flatnonzero(np.all(self.grid != 0, axis=1))]

    def clear_rows(self, rows: Iterable[int]) -> int:
        """Remove ``rows`` at once and pad the same number of empty rows on top."""
        unique = sorted({int(r) for r in rows})
        if not unique:
            return 0
        if unique[0] < 0 or unique[-1] >= self.height:
            raise ValueError(f"row indices out of range [0, {self.height}): {unique}")
        num = len(unique)
        kept = np.delete(self.grid, unique, axis=0)
        new_rows = np.zeros((num, self.width), dtype=np.int8)
        self.grid = np.vstack((new_rows, kept))
        return num

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
