"""
Background search handler: stop flag, busy policy, result access.
"""

import math

import pytest

from c4mcts.core.position import Position
from c4mcts.errors import NoLegalMovesError, NoSearchResultError, SearchBusyError
from c4mcts.search.handler import SearchHandler
from c4mcts.search.mcts import MCTS


def test_stop_ends_infinite_search():
    with SearchHandler(MCTS(seed=1, check_interval=64)) as h:
        h.search(Position(), math.inf)
        h.stop_search()
        mv = h.wait(timeout=30)
        assert 0 <= mv.column < 8
        assert not h.is_searching()
        assert h.last_move == mv
        assert h.last_info["move_col"] == mv.column


def test_round_limited_search_completes_on_its_own():
    with SearchHandler(MCTS(seed=2)) as h:
        fut = h.search(Position(), max_rounds=100)
        mv = fut.result(timeout=30)
        assert h.last_info["rounds"] == 100
        assert h.last_move == mv


def test_second_search_is_refused_while_busy():
    with SearchHandler(MCTS(seed=3, check_interval=64), busy_wait_sec=0.01) as h:
        h.search(Position(), math.inf)
        with pytest.raises(SearchBusyError):
            h.search(Position(), math.inf)
        h.stop_search()
        h.wait(timeout=30)
        assert not h.is_searching()


def test_new_search_allowed_after_previous_finished(vertical_threat):
    with SearchHandler(MCTS(seed=4)) as h:
        h.search(Position(), max_rounds=50).result(timeout=30)
        mv = h.search(vertical_threat, max_rounds=2000).result(timeout=30)
        assert mv.column == 2


def test_caller_position_is_not_shared_with_worker():
    p = Position()
    with SearchHandler(MCTS(seed=5, check_interval=32)) as h:
        h.search(p, math.inf)
        p.play(p.move_for_column(3))
        h.stop_search()
        h.wait(timeout=30)
    assert p.yellow != 0
    assert p.turn == "red"


def test_results_before_any_search_raise():
    with SearchHandler() as h:
        assert not h.is_searching()
        with pytest.raises(NoSearchResultError):
            h.wait()
        with pytest.raises(NoSearchResultError):
            _ = h.last_move


def test_terminal_position_raises(drawn_board):
    with SearchHandler() as h:
        with pytest.raises(NoLegalMovesError):
            h.search(drawn_board)
        assert not h.is_searching()


def test_close_stops_a_running_search():
    h = SearchHandler(MCTS(seed=6, check_interval=64))
    fut = h.search(Position(), math.inf)
    h.close()
    assert fut.done()
    assert not h.is_searching()
