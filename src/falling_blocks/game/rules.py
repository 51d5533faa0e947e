from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    row_multiplier: int = 5

    def __post_init__(self) -> None:
        if self.row_multiplier < 0:
            raise ValueError("row_multiplier must be >= 0")

    def score_for_rows(self, rows: int, width: int) -> int:
        if rows <= 0:
            return 0
        return self.row_multiplier * width * rows


@dataclass
class SpeedRules:
    base_interval_ms: int = 500
    min_interval_ms: int = 100
    decrement_ms: int = 1
    cadence_ms: int = 1000

    def __post_init__(self) -> None:
        if self.base_interval_ms <= 0 or self.cadence_ms <= 0:
            raise ValueError("base_interval_ms and cadence_ms must be positive")
        if not 0 < self.min_interval_ms <= self.base_interval_ms:
            raise ValueError("min_interval_ms must be in (0, base_interval_ms]")
        if self.decrement_ms < 0:
            raise ValueError("decrement_ms must be >= 0")

    def next_interval(self, current: int) -> int:
        return max(self.min_interval_ms, current - self.decrement_ms)
