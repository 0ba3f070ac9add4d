from __future__ import annotations
import random
from dataclasses import dataclass
from typing import List, Optional

from c4mcts.config import COLUMNS
from c4mcts.core.bitboard import split_bits


@dataclass(frozen=True, slots=True)
class Move:
    """A single placed stone, stored as its one-bit bitboard."""

    bits: int = 0

    @property
    def column(self) -> Optional[int]:
        if not self.bits:
            return None
        return (self.bits.bit_length() - 1) % COLUMNS

    @property
    def rank(self) -> Optional[int]:
        if not self.bits:
            return None
        return (self.bits.bit_length() - 1) // COLUMNS

    def is_empty(self) -> bool:
        return self.bits == 0

    def __repr__(self) -> str:
        col = self.column
        return "Move(None)" if col is None else f"Move(col={col})"


EMPTY_MOVE = Move(0)


def moves_list(bb: int) -> List[Move]:
    return [Move(b) for b in split_bits(bb)]


def random_move(bb: int, rng: random.Random) -> Move:
    moves = split_bits(bb)
    return Move(moves[rng.randrange(len(moves))])


def choose_move(bb: int, idx: int) -> Move:
    return Move(split_bits(bb)[idx])
