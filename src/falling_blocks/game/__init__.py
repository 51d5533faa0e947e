"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- Board: Grid of locked cells, collision and line clearing
- Piece: Falling tetromino with precomputed rotation masks
- ShapeType: Enum of available piece types
- ScoringRules / SpeedRules: Scoring and fall-speed configuration
- GameEngine: State machine, timers and input commands
"""

from .grid import Board
from .pieces import DEFAULT_PALETTE, SHAPE_MASKS, Piece, ShapeType, mask_cells, masks
from .rules import ScoringRules, SpeedRules
from .core import Command, GameConfig, GameEngine, GameSnapshot, GameStatus

__all__ = [
    "Board",
    "Piece",
    "ShapeType",
    "SHAPE_MASKS",
    "DEFAULT_PALETTE",
    "masks",
    "mask_cells",
    "ScoringRules",
    "SpeedRules",
    "GameConfig",
    "GameStatus",
    "GameSnapshot",
    "GameEngine",
    "Command",
]
