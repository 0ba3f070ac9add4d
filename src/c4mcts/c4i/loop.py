from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import Iterable, Optional, TextIO

from c4mcts.c4i.parse import Command, CommandParseError, parse_command
from c4mcts.config import ENGINE_AUTHOR, ENGINE_NAME, ENGINE_VERSION
from c4mcts.core.position import Position
from c4mcts.errors import EngineError
from c4mcts.search.handler import SearchHandler


class EngineLoop:
    """Line-oriented c4i front end around a SearchHandler."""

    def __init__(self, out: TextIO, handler: Optional[SearchHandler] = None) -> None:
        self.out = out
        self.handler = handler if handler is not None else SearchHandler()
        self.position = Position()
        self._out_lock = threading.Lock()

    def send(self, message: str) -> None:
        # the search worker reports from its own thread
        with self._out_lock:
            self.out.write(message + "\n")
            self.out.flush()

    def warn(self, message: str) -> None:
        self.send(f"warn {message}")

    def _on_search_done(self, fut: Future) -> None:
        exc = fut.exception()
        if exc is not None:
            self.warn(str(exc))
            return
        mv = fut.result()
        info = self.handler.last_info
        self.send(
            f"info rounds {info.get('rounds')} time {info.get('time_ms')} "
            f"depth {info.get('depth')} score {info.get('expected')}"
        )
        self.send(f"bestmove {mv.column}")

    def handle(self, command: Command) -> bool:
        """Apply one command. Returns False when the loop should end."""
        kind = command.kind

        if kind == "c4i":
            self.send(f"id name {ENGINE_NAME} {ENGINE_VERSION}")
            self.send(f"id author {ENGINE_AUTHOR}")
            self.send("")
            self.send("option name turn type string default yellow")
            self.send("c4iok")
        elif kind == "isready":
            self.send("readyok")
        elif kind == "exit":
            return False
        elif kind == "stop":
            self.handler.stop_search()
        elif kind == "startpos":
            self.position = Position()
        elif kind == "custom":
            self.position.red = command.red
            self.position.yellow = command.yellow
        elif kind == "turn":
            self.position.turn = command.turn
        elif kind == "go":
            try:
                fut = self.handler.search(self.position, command.time_budget)
            except EngineError as e:
                self.warn(str(e))
            else:
                fut.add_done_callback(self._on_search_done)
        return True

    def run(self, lines: Iterable[str]) -> int:
        try:
            for raw in lines:
                try:
                    command = parse_command(raw)
                except CommandParseError as e:
                    self.warn(str(e))
                    continue
                if command is None:
                    continue
                if not self.handle(command):
                    break
        finally:
            # flushes the bestmove of a search still running at exit / EOF
            self.handler.close()
        return 0
