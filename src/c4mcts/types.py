# src/c4mcts/types.py

from __future__ import annotations

from enum import Enum
from typing import Literal

Player = Literal["yellow", "red"]
PLAYERS: tuple[Player, Player] = ("yellow", "red")


def other(p: Player) -> Player:
    return "red" if p == "yellow" else "yellow"


class Outcome(Enum):
    """Result of a playout, seen by the player to move when it was produced."""

    WON = 1
    LOST = -1
    DRAWN = 0

    def __neg__(self) -> "Outcome":
        if self is Outcome.WON:
            return Outcome.LOST
        if self is Outcome.LOST:
            return Outcome.WON
        return self

    @property
    def reward(self) -> float:
        return float(self.value)
