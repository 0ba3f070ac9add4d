from __future__ import annotations

import subprocess
import sys
from typing import List, Mapping, Optional, Sequence

from c4mcts.config import ENGINE_EXIT_WAIT_SEC
from c4mcts.core.position import Position
from c4mcts.errors import EngineProcessError
from c4mcts.search.mcts import MCTS
from c4mcts.types import Player


def default_engine_command() -> List[str]:
    return [sys.executable, "-m", "c4mcts"]


class EngineProcess:
    """A c4i engine running as a child process, driven over its stdin/stdout."""

    def __init__(
        self,
        command: Sequence[str],
        name: Optional[str] = None,
        env: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.command = list(command)
        self.name = name or " ".join(self.command)
        try:
            self.proc = subprocess.Popen(
                self.command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                text=True,
                bufsize=1,
                env=None if env is None else dict(env),
            )
        except OSError as e:
            raise EngineProcessError(f"could not start engine {self.name!r}: {e}") from e

    def send(self, line: str) -> None:
        assert self.proc.stdin is not None
        try:
            self.proc.stdin.write(line + "\n")
            self.proc.stdin.flush()
        except (BrokenPipeError, ValueError) as e:
            raise EngineProcessError(f"engine {self.name!r} closed its input") from e

    def read_line(self) -> str:
        assert self.proc.stdout is not None
        line = self.proc.stdout.readline()
        if line == "":
            raise EngineProcessError(f"engine {self.name!r} closed its output")
        return line.strip()

    def is_c4i(self) -> bool:
        """Handshake: send `c4i` and wait for `c4iok`."""
        self.send("c4i")
        while True:
            try:
                line = self.read_line()
            except EngineProcessError:
                return False
            if line.lower() == "c4iok":
                return True

    def startpos(self) -> None:
        self.send("position startpos")
        self.send("setoption turn yellow")

    def set_position(self, turn: Player, red: int, yellow: int) -> None:
        self.send(f"setoption turn {turn}")
        self.send(f"position custom {red} {yellow}")

    def get_best(self, time_budget_sec: float) -> int:
        self.send(f"go time {int(time_budget_sec * 1_000_000)}")
        while True:
            line = self.read_line()
            if line.startswith("bestmove"):
                parts = line.split()
                if len(parts) < 2 or not parts[1].isdigit():
                    raise EngineProcessError(f"engine {self.name!r} sent a malformed reply: {line!r}")
                return int(parts[1])

    def close(self) -> None:
        if self.proc.poll() is None:
            try:
                self.send("exit")
            except EngineProcessError:
                pass
            try:
                self.proc.wait(timeout=ENGINE_EXIT_WAIT_SEC)
            except subprocess.TimeoutExpired:
                self.proc.kill()
                self.proc.wait()
        for stream in (self.proc.stdin, self.proc.stdout):
            if stream is not None:
                stream.close()

    def __enter__(self) -> "EngineProcess":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class LocalEngine:
    """The same engine interface served in-process by an MCTS driver."""

    def __init__(self, engine: Optional[MCTS] = None, name: str = "MCTS (local)", max_rounds: Optional[int] = None) -> None:
        self.engine = engine if engine is not None else MCTS()
        self.name = name
        self.max_rounds = max_rounds
        self.position = Position()

    def startpos(self) -> None:
        self.position = Position()

    def set_position(self, turn: Player, red: int, yellow: int) -> None:
        self.position = Position.from_bits(red, yellow, turn)

    def get_best(self, time_budget_sec: float) -> int:
        mv = self.engine.search(self.position, time_budget_sec, max_rounds=self.max_rounds)
        return mv.column

    @property
    def last_info(self) -> dict:
        return self.engine.last_info

    def close(self) -> None:
        pass
