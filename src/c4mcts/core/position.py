from __future__ import annotations
from dataclasses import dataclass
from typing import List, Optional

from c4mcts.config import COLUMNS, RANKS
from c4mcts.core.bitboard import FIRST_RANK, FULL, column_mask, has_four, popcount, shl
from c4mcts.core.move import Move, moves_list
from c4mcts.types import Player, other


@dataclass(slots=True)
class Position:
    red: int = 0
    yellow: int = 0
    turn: Player = "yellow"

    @classmethod
    def from_bits(cls, red: int, yellow: int, turn: Player = "yellow") -> "Position":
        for name, bb in (("red", red), ("yellow", yellow)):
            if bb < 0 or bb > FULL:
                raise ValueError(f"{name} bitboard out of range: {bb}")
        if red & yellow:
            raise ValueError("red and yellow bitboards overlap")
        return cls(red=red, yellow=yellow, turn=turn)

    def copy(self) -> "Position":
        return Position(self.red, self.yellow, self.turn)

    def bits_of(self, player: Player) -> int:
        return self.yellow if player == "yellow" else self.red

    def occupied(self) -> int:
        return self.red | self.yellow

    def is_empty(self) -> bool:
        return self.occupied() == 0

    def is_full(self) -> bool:
        return self.occupied() == FULL

    def winner(self) -> Optional[Player]:
        if has_four(self.yellow):
            return "yellow"
        if has_four(self.red):
            return "red"
        return None

    def legal_moves(self) -> int:
        """One candidate bit per non-full column, at the lowest empty cell."""
        occ = self.occupied()
        return occ ^ (shl(occ, COLUMNS) | FIRST_RANK)

    def legal_move_count(self) -> int:
        return popcount(self.legal_moves())

    def moves(self) -> List[Move]:
        return moves_list(self.legal_moves())

    def is_terminal(self) -> bool:
        return self.winner() is not None or self.is_full()

    def play(self, move: Move) -> None:
        # No legality check: callers pass moves taken from legal_moves().
        if self.turn == "yellow":
            self.yellow |= move.bits
        else:
            self.red |= move.bits
        self.turn = other(self.turn)

    def unplay(self, move: Move) -> None:
        self.turn = other(self.turn)
        if self.turn == "yellow":
            self.yellow ^= move.bits
        else:
            self.red ^= move.bits

    def move_for_column(self, column: int) -> Move:
        if column < 0 or column >= COLUMNS:
            raise ValueError("Column out of range.")
        bb = self.legal_moves() & column_mask(column)
        if not bb:
            raise ValueError("Column is full.")
        return Move(bb)

    def cell(self, rank: int, column: int) -> Optional[Player]:
        b = 1 << (COLUMNS * rank + column)
        if self.yellow & b:
            return "yellow"
        if self.red & b:
            return "red"
        return None

    def heights(self) -> List[int]:
        occ = self.occupied()
        return [popcount(occ & column_mask(c)) for c in range(COLUMNS)]

    def __str__(self) -> str:
        rows = []
        for r in range(RANKS - 1, -1, -1):
            row = []
            for c in range(COLUMNS):
                p = self.cell(r, c)
                row.append("." if p is None else p[0].upper())
            rows.append(" ".join(row))
        return "\n".join(rows)
