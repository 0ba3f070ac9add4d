from __future__ import annotations
from typing import List

from c4mcts.config import COLUMNS, RANKS

# One bit per cell: bit index = COLUMNS * rank + column, rank 0 at the bottom.
FULL = (1 << (COLUMNS * RANKS)) - 1
FIRST_RANK = (1 << COLUMNS) - 1  # guard rank for legal move generation
FILE_A = sum(1 << (COLUMNS * r) for r in range(RANKS))
NOT_A = FULL ^ FILE_A
NOT_H = FULL ^ (FILE_A << (COLUMNS - 1))


def bit(idx: int) -> int:
    return 1 << idx


def popcount(bb: int) -> int:
    return bin(bb).count("1")


def column_mask(column: int) -> int:
    return FILE_A << column


def shl(bb: int, bits: int) -> int:
    return (bb << bits) & FULL


def split_bits(bb: int) -> List[int]:
    """Split a bitboard into single-bit boards, lowest bit first."""
    out: List[int] = []
    while bb:
        low = bb & -bb
        out.append(low)
        bb &= bb - 1
    return out


# Four-in-a-row scans. Each ANDs three successively shifted copies; a
# non-empty result marks the far end of a run of four in that direction.
def horizontal(b: int) -> int:
    t = b
    for _ in range(3):
        t &= (t << 1) & NOT_A
    return t


def vertical(b: int) -> int:
    t = b
    for _ in range(3):
        t &= t << COLUMNS
    return t


def a1_h8(b: int) -> int:
    t = b
    for _ in range(3):
        t &= (t << (COLUMNS + 1)) & NOT_A
    return t


def h1_a8(b: int) -> int:
    t = b
    for _ in range(3):
        t &= (t << (COLUMNS - 1)) & NOT_H
    return t


def has_four(b: int) -> bool:
    return bool(horizontal(b) or vertical(b) or a1_h8(b) or h1_a8(b))
