from __future__ import annotations

import logging
import random
import threading
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .grid import Board
from .pieces import DEFAULT_PALETTE, Piece
from .rules import ScoringRules, SpeedRules

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Command(IntEnum):
    START = 0
    TOGGLE_PAUSE = 1
    RESTART = 2
    LEFT = 3
    RIGHT = 4
    ROTATE = 5
    SOFT_DROP = 6
    NONE = 7


@dataclass
class GameConfig:
    width: int = 20
    height: int = 30
    spawn_col: int = 8
    spawn_row_offset: int = 4  # rows of overhang above row 0
    palette: Tuple[str, ...] = DEFAULT_PALETTE
    random_seed: Optional[int] = None
    clear_flash_ms: int = 300

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"board dimensions must be positive, got {self.width}x{self.height}")
        if not 0 <= self.spawn_col < self.width:
            raise ValueError(f"spawn_col must be in [0, {self.width}), got {self.spawn_col}")
        if self.spawn_row_offset < 0:
            raise ValueError("spawn_row_offset must be >= 0")
        self.palette = tuple(self.palette)
        if not self.palette:
            raise ValueError("palette must contain at least one color")
        if self.clear_flash_ms < 0:
            raise ValueError("clear_flash_ms must be >= 0")

    @property
    def spawn_row(self) -> int:
        return -self.spawn_row_offset


@dataclass(frozen=True)
class GameSnapshot:
    status: GameStatus
    board: np.ndarray
    active: Optional[Piece]
    next_piece: Optional[Piece]
    score: int
    fall_interval_ms: int
    lines_cleared_total: int
    clearing_rows: Tuple[int, ...]
    revision: int


class GameEngine:
    """Authoritative falling-block game state.

    The engine owns the board, the active and queued pieces and the status
    state machine. It has no clock of its own: the host loop feeds real time
    through ``advance()``, which drives the fall timer and the speed ramp while
    the game is RUNNING. Every public mutator takes the same re-entrant lock, so
    timer-driven and input-driven mutations never interleave.

    Readers use ``snapshot()`` (or the individual observation helpers) and can
    compare ``revision`` to detect changes; the engine never calls back into
    rendering code.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        speed: Optional[SpeedRules] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.speed = speed or SpeedRules()
        self.rng = random.Random(self.config.random_seed)
        self.board = Board(self.config.width, self.config.height)
        self._mutex = threading.RLock()
        self._status = GameStatus.NOT_STARTED
        self._revision = 0
        self._reset_state()

    def _reset_state(self) -> None:
        self.board.reset()
        self._active: Optional[Piece] = None
        self._next: Optional[Piece] = None
        self._score = 0
        self._lines_cleared_total = 0
        self._fall_interval_ms = self.speed.base_interval_ms
        self._fall_elapsed_ms = 0
        self._ramp_elapsed_ms = 0
        self._clearing_rows: Tuple[int, ...] = ()
        self._clearing_ms = 0

    def _touch(self) -> None:
        self._revision += 1

    def _spawn_piece(self) -> Piece:
        return Piece.spawn(
            self.rng,
            palette=self.config.palette,
            spawn_row=self.config.spawn_row,
            spawn_col=self.config.spawn_col,
        )

    # ------------------------------------------------------------------
    # State machine commands
    # ------------------------------------------------------------------
    def start(self) -> bool:
        with self._mutex:
            if self._status is not GameStatus.NOT_STARTED:
                return False
            self._reset_state()
            self._active = self._spawn_piece()
            self._next = self._spawn_piece()
            self._status = GameStatus.RUNNING
            self._touch()
            logger.info("[engine] started %dx%d board", self.board.width, self.board.height)
            return True

    def toggle_pause(self) -> bool:
        with self._mutex:
            if self._status is GameStatus.RUNNING:
                self._status = GameStatus.PAUSED
            elif self._status is GameStatus.PAUSED:
                self._status = GameStatus.RUNNING
            else:
                return False
            self._touch()
            logger.debug("[engine] status=%s", self._status.value)
            return True

    def restart(self) -> bool:
        with self._mutex:
            if self._status is GameStatus.NOT_STARTED:
                return False
            self._reset_state()
            self._status = GameStatus.NOT_STARTED
            self._touch()
            logger.info("[engine] restarted")
            return True

    # ------------------------------------------------------------------
    # Input commands (RUNNING only)
    # ------------------------------------------------------------------
    def _try_commit(self, candidate: Piece) -> bool:
        if self.board.collides(candidate):
            return False
        self._active = candidate
        self._touch()
        return True

    def _move(self, d_row: int, d_col: int) -> bool:
        with self._mutex:
            if self._status is not GameStatus.RUNNING or self._active is None:
                return False
            return self._try_commit(self._active.translated(d_row, d_col))

    def move_left(self) -> bool:
        return self._move(0, -1)

    def move_right(self) -> bool:
        return self._move(0, 1)

    def rotate(self) -> bool:
        with self._mutex:
            if self._status is not GameStatus.RUNNING or self._active is None:
                return False
            return self._try_commit(self._active.rotated())

    def soft_drop(self) -> bool:
        with self._mutex:
            if self._status is not GameStatus.RUNNING:
                return False
            self._fall_tick()
            self._fall_elapsed_ms = 0
            return True

    def handle(self, command: Command) -> bool:
        handlers: Dict[Command, Callable[[], bool]] = {
            Command.START: self.start,
            Command.TOGGLE_PAUSE: self.toggle_pause,
            Command.RESTART: self.restart,
            Command.LEFT: self.move_left,
            Command.RIGHT: self.move_right,
            Command.ROTATE: self.rotate,
            Command.SOFT_DROP: self.soft_drop,
        }
        handler = handlers.get(command)
        if handler is None:
            return False
        return handler()

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------
    def tick(self) -> bool:
        """Force one fall tick. Returns False when the game is not running."""
        with self._mutex:
            if self._status is not GameStatus.RUNNING:
                return False
            self._fall_tick()
            return True

    def advance(self, elapsed_ms: int) -> int:
        """Feed ``elapsed_ms`` of real time; returns the number of fall ticks fired."""
        with self._mutex:
            if self._status is not GameStatus.RUNNING or elapsed_ms <= 0:
                return 0
            elapsed_ms = int(elapsed_ms)

            if self._clearing_rows:
                self._clearing_ms -= elapsed_ms
                if self._clearing_ms <= 0:
                    self._clearing_rows = ()
                    self._clearing_ms = 0
                    self._touch()

            self._ramp_elapsed_ms += elapsed_ms
            while self._ramp_elapsed_ms >= self.speed.cadence_ms:
                self._ramp_elapsed_ms -= self.speed.cadence_ms
                interval = self.speed.next_interval(self._fall_interval_ms)
                if interval != self._fall_interval_ms:
                    self._fall_interval_ms = interval
                    self._touch()

            self._fall_elapsed_ms += elapsed_ms
            ticks = 0
            while self._status is GameStatus.RUNNING and self._fall_elapsed_ms >= self._fall_interval_ms:
                self._fall_elapsed_ms -= self._fall_interval_ms
                self._fall_tick()
                ticks += 1
            return ticks

    def _fall_tick(self) -> None:
        assert self._active is not None
        candidate = self._active.translated(1, 0)
        overlapping = self.board.collides(self._active)
        if not overlapping and not self.board.collides(candidate):
            self._active = candidate
            self._touch()
            return
        if overlapping or self._active.row < 0:
            # Spawned onto the stack, or blocked before fully entering the board.
            self._status = GameStatus.GAME_OVER
            self._touch()
            logger.info("[engine] game over score=%d lines=%d", self._score, self._lines_cleared_total)
            return
        self._lock_piece()

    def _lock_piece(self) -> None:
        assert self._active is not None and self._next is not None
        self.board.lock(self._active)
        logger.debug("[engine] locked %s at (%d, %d)", self._active.kind.name, self._active.row, self._active.col)
        self._active = self._next
        self._next = self._spawn_piece()
        self._clear_full_rows()
        self._touch()

    def _clear_full_rows(self) -> int:
        rows = self.board.full_rows()
        if not rows:
            return 0
        self._score += self.rules.score_for_rows(len(rows), self.board.width)
        cleared = self.board.clear_rows(rows)
        self._lines_cleared_total += cleared
        self._clearing_rows = tuple(rows)
        self._clearing_ms = self.config.clear_flash_ms
        logger.debug("[engine] cleared rows=%s score=%d", rows, self._score)
        return cleared

    # ------------------------------------------------------------------
    # Observations
    # ------------------------------------------------------------------
    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def score(self) -> int:
        return self._score

    @property
    def fall_interval_ms(self) -> int:
        return self._fall_interval_ms

    @property
    def lines_cleared_total(self) -> int:
        return self._lines_cleared_total

    @property
    def clearing_rows(self) -> Tuple[int, ...]:
        return self._clearing_rows

    @property
    def revision(self) -> int:
        return self._revision

    def board_snapshot(self) -> np.ndarray:
        with self._mutex:
            return self.board.clone_state()

    def active_piece_snapshot(self) -> Optional[Piece]:
        return self._active

    def next_piece_snapshot(self) -> Optional[Piece]:
        return self._next

    def snapshot(self) -> GameSnapshot:
        with self._mutex:
            board = self.board.clone_state()
            board.flags.writeable = False
            return GameSnapshot(
                status=self._status,
                board=board,
                active=self._active,
                next_piece=self._next,
                score=self._score,
                fall_interval_ms=self._fall_interval_ms,
                lines_cleared_total=self._lines_cleared_total,
                clearing_rows=self._clearing_rows,
                revision=self._revision,
            )
