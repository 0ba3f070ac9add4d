from __future__ import annotations

import math
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from concurrent.futures import wait as wait_futures
from typing import Optional

from c4mcts.config import SEARCH_BUSY_WAIT_SEC
from c4mcts.core.move import Move
from c4mcts.core.position import Position
from c4mcts.errors import NoLegalMovesError, NoSearchResultError, SearchBusyError
from c4mcts.search.mcts import MCTS


class SearchHandler:
    """
    Runs one search at a time on a background worker.

    The caller and the worker share only two flags and the Future: the worker
    searches a private copy of the position, and `stop_search` just raises
    the stop flag, which the driver reads every `check_interval` rounds.
    """

    def __init__(self, engine: Optional[MCTS] = None, busy_wait_sec: float = SEARCH_BUSY_WAIT_SEC) -> None:
        self.engine = engine if engine is not None else MCTS()
        self.busy_wait_sec = busy_wait_sec

        self._should_stop = threading.Event()
        self._searching = threading.Event()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="c4mcts-search")
        self._future: Optional[Future] = None
        self._last_move: Optional[Move] = None

    def search(
        self,
        position: Position,
        time_budget: float = math.inf,
        max_rounds: Optional[int] = None,
    ) -> Future:
        if self.is_searching() and self._future is not None:
            # one bounded wait, then refuse
            wait_futures([self._future], timeout=self.busy_wait_sec)
            if self.is_searching():
                raise SearchBusyError()

        if position.is_terminal():
            raise NoLegalMovesError()

        self._should_stop.clear()
        self._searching.set()
        scratch = position.copy()
        try:
            self._future = self._executor.submit(self._run, scratch, time_budget, max_rounds)
        except RuntimeError:
            self._searching.clear()
            raise
        return self._future

    def _run(self, position: Position, time_budget: float, max_rounds: Optional[int]) -> Move:
        try:
            mv = self.engine.search(position, time_budget, should_stop=self._should_stop, max_rounds=max_rounds)
        finally:
            self._searching.clear()
        self._last_move = mv
        return mv

    def stop_search(self) -> None:
        self._should_stop.set()

    def is_searching(self) -> bool:
        return self._searching.is_set()

    def wait(self, timeout: Optional[float] = None) -> Move:
        if self._future is None:
            raise NoSearchResultError()
        return self._future.result(timeout=timeout)

    @property
    def last_move(self) -> Move:
        if self._last_move is None:
            raise NoSearchResultError()
        return self._last_move

    @property
    def last_info(self) -> dict:
        return self.engine.last_info

    def close(self) -> None:
        self.stop_search()
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "SearchHandler":
        return self

    def __exit__(self, *exc) -> None:
        self.close()
