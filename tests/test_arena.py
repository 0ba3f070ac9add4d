"""
Arena: refereeing games between engines, result bookkeeping, CSV export.
"""

import csv
import os
import sys
from pathlib import Path

import pytest

from c4mcts.arena.engine import EngineProcess, LocalEngine
from c4mcts.arena.export import COLUMNS as CSV_COLUMNS
from c4mcts.arena.export import write_records_csv
from c4mcts.arena.game import GameHandler, Session
from c4mcts.core.position import Position
from c4mcts.errors import EngineProcessError, IllegalEngineMoveError
from c4mcts.search.mcts import MCTS

SRC = Path(__file__).resolve().parents[1] / "src"


class ColumnZeroEngine:
    """Always answers column 0, legal or not."""

    name = "column-zero"

    def startpos(self):
        pass

    def set_position(self, turn, red, yellow):
        pass

    def get_best(self, time_budget_sec):
        return 0

    def close(self):
        pass


def local_pair(rounds=64):
    return (
        LocalEngine(MCTS(seed=1), name="A", max_rounds=rounds),
        LocalEngine(MCTS(seed=2), name="B", max_rounds=rounds),
    )


def test_session_addition():
    a = Session(2, (1, 0, 1))
    b = Session(3, (0, 2, 1))
    assert a + b == Session(5, (1, 2, 2))
    assert Session() + Session() == Session()


def test_play_many_alternates_colours_and_counts_results():
    e1, e2 = local_pair()
    handler = GameHandler(e1, e2)
    session = handler.play_many(2, 1.0)

    assert session.games_played == 2
    assert sum(session.results) == 2
    assert [r.p1_colour for r in handler.records] == ["yellow", "red"]
    assert [r.game for r in handler.records] == [1, 2]

    for rec in handler.records:
        assert rec.p1_name == "A"
        assert rec.p2_name == "B"
        assert rec.p1_moves + rec.p2_moves == rec.plies
        final = Position.from_bits(rec.red, rec.yellow)
        assert final.is_terminal()
        assert bin(rec.red | rec.yellow).count("1") == rec.plies


def test_winner_is_mapped_to_engine_not_colour():
    e1, e2 = local_pair()
    handler = GameHandler(e1, e2)
    rec = handler.play(1.0, player1="red")
    final = handler.last_position
    if final.winner() is None:
        assert rec.winner == "draw"
    elif final.winner() == "red":
        assert rec.winner == "p1"
    else:
        assert rec.winner == "p2"


def test_on_game_callback_sees_every_record():
    seen = []
    e1, e2 = local_pair(rounds=16)
    GameHandler(e1, e2).play_many(2, 1.0, on_game=seen.append)
    assert [r.game for r in seen] == [1, 2]


def test_odd_game_count_is_rejected():
    e1, e2 = local_pair()
    with pytest.raises(ValueError):
        GameHandler(e1, e2).play_many(3, 1.0)


def test_illegal_engine_move_is_reported():
    handler = GameHandler(ColumnZeroEngine(), ColumnZeroEngine())
    with pytest.raises(IllegalEngineMoveError, match="column-zero"):
        handler.play(0.01)


def test_write_records_csv(tmp_path):
    e1, e2 = local_pair(rounds=16)
    handler = GameHandler(e1, e2)
    handler.play_many(2, 1.0)

    path = write_records_csv(handler.records, tmp_path / "out" / "arena.csv")
    with open(path, newline="") as f:
        rows = list(csv.reader(f))

    assert rows[0] == CSV_COLUMNS
    assert len(rows) == 3
    assert rows[1][0] == "1"
    assert rows[2][3] == "red"
    assert rows[1][4] in ("p1", "p2", "draw")


def test_engine_process_speaks_c4i():
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(SRC), env.get("PYTHONPATH")]))
    cmd = [sys.executable, "-m", "c4mcts", "--seed", "1"]

    with EngineProcess(cmd, name="child", env=env) as eng:
        assert eng.is_c4i()
        eng.startpos()
        col = eng.get_best(0.05)
        assert 0 <= col < 8

        # three yellow stacked in column 2
        eng.set_position("yellow", 8240, 263172)
        assert eng.get_best(0.05) == 2
    assert eng.proc.poll() is not None


def test_engine_process_missing_binary():
    with pytest.raises(EngineProcessError):
        EngineProcess(["/nonexistent/c4-engine"])
