from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, List, Literal, Optional, Tuple

from c4mcts.arena.base import EngineLike
from c4mcts.core.position import Position
from c4mcts.errors import IllegalEngineMoveError
from c4mcts.types import Player, other

Side = Literal["p1", "p2", "draw"]


@dataclass(frozen=True)
class GameRecord:
    game: int
    p1_name: str
    p2_name: str
    p1_colour: Player
    winner: Side
    plies: int
    p1_moves: int
    p2_moves: int
    p1_ms: int
    p2_ms: int
    red: int
    yellow: int


@dataclass
class Session:
    games_played: int = 0
    # (p1 wins, draws, p2 wins)
    results: Tuple[int, int, int] = (0, 0, 0)

    def __add__(self, rhs: "Session") -> "Session":
        return Session(
            games_played=self.games_played + rhs.games_played,
            results=(
                self.results[0] + rhs.results[0],
                self.results[1] + rhs.results[1],
                self.results[2] + rhs.results[2],
            ),
        )

    @classmethod
    def from_record(cls, rec: GameRecord) -> "Session":
        if rec.winner == "p1":
            return cls(1, (1, 0, 0))
        if rec.winner == "p2":
            return cls(1, (0, 0, 1))
        return cls(1, (0, 1, 0))


@dataclass
class GameHandler:
    player1: EngineLike
    player2: EngineLike
    records: List[GameRecord] = field(default_factory=list)
    last_position: Optional[Position] = None

    def play(self, time_per_move: float, player1: Player = "yellow") -> GameRecord:
        """
        Referee a single game from the empty board. Yellow moves first;
        `player1` is the colour engine 1 plays.
        """
        position = Position()
        moves = {"p1": 0, "p2": 0}
        spent = {"p1": 0.0, "p2": 0.0}

        self.player1.startpos()
        self.player2.startpos()

        plies = 0
        while not position.is_terminal():
            side = "p1" if position.turn == player1 else "p2"
            engine = self.player1 if side == "p1" else self.player2

            if not position.is_empty():
                # keep the engine's view of the board in sync
                engine.set_position(position.turn, position.red, position.yellow)

            t0 = time.perf_counter()
            col = engine.get_best(time_per_move)
            spent[side] += time.perf_counter() - t0
            moves[side] += 1

            try:
                mv = position.move_for_column(col)
            except ValueError as e:
                raise IllegalEngineMoveError(f"{engine.name} played column {col}: {e}") from e
            position.play(mv)
            plies += 1

        w = position.winner()
        if w is None:
            winner: Side = "draw"
        else:
            winner = "p1" if w == player1 else "p2"

        rec = GameRecord(
            game=len(self.records) + 1,
            p1_name=self.player1.name,
            p2_name=self.player2.name,
            p1_colour=player1,
            winner=winner,
            plies=plies,
            p1_moves=moves["p1"],
            p2_moves=moves["p2"],
            p1_ms=int(spent["p1"] * 1000),
            p2_ms=int(spent["p2"] * 1000),
            red=position.red,
            yellow=position.yellow,
        )
        self.records.append(rec)
        self.last_position = position
        return rec

    def play_many(
        self,
        count: int,
        time_per_move: float,
        on_game: Optional[Callable[[GameRecord], None]] = None,
    ) -> Session:
        # Moving first is a big edge, so each engine gets each colour equally often.
        if count % 2 != 0:
            raise ValueError("Game count must be even.")

        turn: Player = "yellow"
        session = Session()
        for _ in range(count):
            rec = self.play(time_per_move, turn)
            session = session + Session.from_record(rec)
            if on_game is not None:
                on_game(rec)
            turn = other(turn)
        return session
