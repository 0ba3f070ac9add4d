from __future__ import annotations

import math
import random
import time
from dataclasses import dataclass, field
from threading import Event
from typing import List, Optional

from c4mcts.config import CHECK_INTERVAL, EXPLORATION_C
from c4mcts.core.bitboard import has_four
from c4mcts.core.move import Move, random_move
from c4mcts.core.position import Position
from c4mcts.errors import NoLegalMovesError
from c4mcts.search.tree import Tree
from c4mcts.types import Outcome


def simulate(position: Position, rng: random.Random) -> Outcome:
    """
    Random playout from `position`, scored for the player to move now.

    Every move played is undone before returning, so `position` comes back
    exactly as it went in.
    """
    colour = position.turn
    played: List[Move] = []
    winner = position.winner()
    try:
        while winner is None and not position.is_full():
            mover = position.turn
            mv = random_move(position.legal_moves(), rng)
            position.play(mv)
            played.append(mv)
            if has_four(position.bits_of(mover)):
                winner = mover
    finally:
        for mv in reversed(played):
            position.unplay(mv)

    if winner is None:
        return Outcome.DRAWN
    return Outcome.WON if winner == colour else Outcome.LOST


@dataclass(slots=True)
class MCTS:
    """
    UCT Monte Carlo Tree Search over a bitboard position.

    Knobs:
      - exploration_c: UCB1 exploration constant
      - check_interval: rounds between clock / stop-flag checks
      - seed: seed for the rollout RNG
    """
    name: str = "MCTS"
    exploration_c: float = EXPLORATION_C
    check_interval: int = CHECK_INTERVAL
    seed: Optional[int] = None

    rng: random.Random = field(init=False)
    last_info: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)
        if self.check_interval < 1:
            self.check_interval = 1
        if self.exploration_c < 0:
            self.exploration_c = 0.0

    def search(
        self,
        position: Position,
        time_budget: float = math.inf,
        should_stop: Optional[Event] = None,
        max_rounds: Optional[int] = None,
    ) -> Move:
        """
        Search from `position` until the time budget (seconds) runs out, the
        stop flag is set, or `max_rounds` rounds have run. `position` is not
        modified.
        """
        if position.is_terminal():
            raise NoLegalMovesError()

        t0 = time.perf_counter()
        board = position.copy()
        tree = Tree()
        zipper = tree.head

        rounds = 0
        max_depth = 0
        stopped = "time"
        while True:
            rounds += 1
            zipper.select(board, rounds, self.exploration_c)
            zipper.expand(board)
            if zipper.depth > max_depth:
                max_depth = zipper.depth
            outcome = simulate(board, self.rng)
            zipper.backpropagate(board, outcome)

            if max_rounds is not None and rounds >= max_rounds:
                stopped = "rounds"
                break
            if rounds % self.check_interval == 0:
                if should_stop is not None and should_stop.is_set():
                    stopped = "stop"
                    break
                if time.perf_counter() - t0 > time_budget:
                    stopped = "time"
                    break

        tree.flip_root_perspective()
        best = tree.best()

        self.last_info = {
            "time_ms": max(1, int((time.perf_counter() - t0) * 1000)),
            "rounds": rounds,
            "depth": max_depth,
            "move_col": best.column,
            "expected": round(tree.best_child().expected(), 4),
            "stopped": stopped,
            "children": tree.summary(),
        }
        return best
