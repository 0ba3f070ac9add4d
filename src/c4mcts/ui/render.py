from __future__ import annotations
from typing import List

from c4mcts.config import COLUMNS, RANKS
from c4mcts.core.position import Position
from c4mcts.types import Player
from c4mcts.ui.format import A


def _piece(cell: Player | None) -> str:
    if cell is None:
        return A.gray("·")
    if cell == "red":
        return A.red("R")
    return A.yellow("Y")


def board_lines(position: Position, status: str = "") -> List[str]:
    lines: List[str] = []
    if status:
        lines.append(A.cyan(status))

    lines.append(A.dim("   " + " ".join(str(i) for i in range(COLUMNS))))
    for r in range(RANKS - 1, -1, -1):
        parts = [_piece(position.cell(r, c)) for c in range(COLUMNS)]
        lines.append(" | " + " ".join(parts) + " |")
    lines.append(A.dim("   " + "─" * (2 * COLUMNS - 1)))
    lines.append(A.dim(f"   {position.turn} to move"))
    return lines


def render(position: Position, status: str = "") -> None:
    print("\n".join(board_lines(position, status)))
