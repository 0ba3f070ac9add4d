from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

import pytest

from c4mcts.config import COLUMNS, RANKS
from c4mcts.core.position import Position


def cell_bit(rank: int, column: int) -> int:
    return 1 << (COLUMNS * rank + column)


@pytest.fixture
def vertical_threat() -> Position:
    """Yellow to move with three stacked in column 2; column 2 wins."""
    yellow = cell_bit(0, 2) | cell_bit(1, 2) | cell_bit(2, 2)
    red = cell_bit(0, 4) | cell_bit(0, 5) | cell_bit(1, 5)
    return Position.from_bits(red, yellow, "yellow")


@pytest.fixture
def last_column_threat() -> Position:
    """Yellow to move; only column 7, the last one expanded, wins."""
    yellow = cell_bit(0, 7) | cell_bit(1, 7) | cell_bit(2, 7)
    red = cell_bit(0, 0) | cell_bit(0, 1) | cell_bit(1, 1)
    return Position.from_bits(red, yellow, "yellow")


@pytest.fixture
def drawn_board() -> Position:
    """A full board with no four-in-a-row in any direction."""
    yellow = 0
    red = 0
    for r in range(RANKS):
        for c in range(COLUMNS):
            if ((c // 2) + r) % 2 == 0:
                yellow |= cell_bit(r, c)
            else:
                red |= cell_bit(r, c)
    return Position.from_bits(red, yellow, "yellow")
