from __future__ import annotations
from typing import Protocol

from c4mcts.types import Player


class EngineLike(Protocol):
    name: str

    def startpos(self) -> None:
        ...

    def set_position(self, turn: Player, red: int, yellow: int) -> None:
        ...

    def get_best(self, time_budget_sec: float) -> int:
        ...

    def close(self) -> None:
        ...
