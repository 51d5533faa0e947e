# tests/test_rules.py
from __future__ import annotations

import pytest

from falling_blocks.game.rules import ScoringRules, SpeedRules


@pytest.mark.parametrize("rows,expected", [(0, 0), (-1, 0), (1, 100), (2, 200), (4, 400)])
def test_score_for_rows(rows: int, expected: int) -> None:
    assert ScoringRules().score_for_rows(rows, width=20) == expected


def test_custom_row_multiplier() -> None:
    assert ScoringRules(row_multiplier=10).score_for_rows(3, width=10) == 300
    with pytest.raises(ValueError):
        ScoringRules(row_multiplier=-1)


def test_next_interval_is_floored() -> None:
    speed = SpeedRules()
    assert speed.next_interval(500) == 499
    assert speed.next_interval(101) == 100
    assert speed.next_interval(100) == 100

    interval = speed.base_interval_ms
    for _ in range(1000):
        interval = speed.next_interval(interval)
        assert interval >= speed.min_interval_ms
    assert interval == 100


@pytest.mark.parametrize(
    "kwargs",
    [
        {"base_interval_ms": 0},
        {"cadence_ms": 0},
        {"min_interval_ms": 0},
        {"min_interval_ms": 600},
        {"decrement_ms": -1},
    ],
)
def test_speed_rules_validation(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        SpeedRules(**kwargs)
