from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple, Union


class ShapeType(IntEnum):
    O = 0
    I = 1
    Z = 2
    S = 3
    L = 4
    J = 5
    T = 6


Mask = int
Cell = Tuple[int, int]

# Bit 15 - (row * 4 + col) marks cell (row, col) of the 4x4 box.
# Index order is clockwise rotation.
SHAPE_MASKS: Dict[ShapeType, Tuple[Mask, Mask, Mask, Mask]] = {
    ShapeType.O: (0x0660, 0x0660, 0x0660, 0x0660),
    ShapeType.I: (0x4444, 0x0F00, 0x4444, 0x0F00),
    ShapeType.Z: (0x0C60, 0x2640, 0x0C60, 0x2640),
    ShapeType.S: (0x0360, 0x4620, 0x0360, 0x4620),
    ShapeType.L: (0x4460, 0x0E80, 0x6220, 0x0170),
    ShapeType.J: (0x2260, 0x08E0, 0x6440, 0x0710),
    ShapeType.T: (0x04E0, 0x4640, 0x0720, 0x2620),
}

DEFAULT_PALETTE: Tuple[str, ...] = (
    "red",
    "orange",
    "yellow",
    "green",
    "cyan",
    "blue",
    "purple",
)


def _coerce_kind(kind: Union[ShapeType, int, str]) -> ShapeType:
    if isinstance(kind, ShapeType):
        return kind
    if isinstance(kind, str):
        try:
            return ShapeType[kind.upper()]
        except KeyError:
            raise ValueError(f"unknown shape type {kind!r}") from None
    try:
        return ShapeType(kind)
    except ValueError:
        raise ValueError(f"unknown shape type {kind!r}") from None


def masks(kind: Union[ShapeType, int, str]) -> Tuple[Mask, Mask, Mask, Mask]:
    return SHAPE_MASKS[_coerce_kind(kind)]


def mask_cells(mask: Mask) -> List[Cell]:
    """Return (row, col) offsets of the set bits inside the 4x4 box."""
    cells: List[Cell] = []
    for k in range(16):
        if mask & (1 << (15 - k)):
            cells.append((k // 4, k % 4))
    return cells


@dataclass(frozen=True)
class Piece:
    kind: ShapeType
    rotation: int = 0  # 0..3
    color: str = DEFAULT_PALETTE[0]
    row: int = 0
    col: int = 0

    @classmethod
    def spawn(
        cls,
        rng: random.Random,
        kind: Optional[Union[ShapeType, int, str]] = None,
        palette: Sequence[str] = DEFAULT_PALETTE,
        spawn_row: int = -4,
        spawn_col: int = 8,
    ) -> "Piece":
        if not palette:
            raise ValueError("palette must contain at least one color")
        if kind is None:
            chosen = rng.choice(list(ShapeType))
        else:
            chosen = _coerce_kind(kind)
        color = rng.choice(list(palette))
        return cls(kind=chosen, rotation=0, color=color, row=spawn_row, col=spawn_col)

    def mask(self) -> Mask:
        return SHAPE_MASKS[self.kind][self.rotation]

    def rotated(self) -> "Piece":
        return replace(self, rotation=(self.rotation + 1) % 4)

    def translated(self, d_row: int, d_col: int) -> "Piece":
        return replace(self, row=self.row + d_row, col=self.col + d_col)

    def occupied_cells(self) -> FrozenSet[Cell]:
        return frozenset((self.row + r, self.col + c) for r, c in mask_cells(self.mask()))
