from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Literal, Optional

from c4mcts.core.bitboard import FULL
from c4mcts.types import Player

CommandKind = Literal[
    "c4i",
    "isready",
    "exit",
    "stop",
    "startpos",
    "custom",
    "turn",
    "go",
]


class CommandParseError(ValueError):
    pass


class ExpectedArgumentError(CommandParseError):
    def __init__(self) -> None:
        super().__init__("additional expected argument was not found")


class UnknownCommandError(CommandParseError):
    def __init__(self, token: str) -> None:
        super().__init__(f"invalid command: {token}")


class UnknownArgumentError(CommandParseError):
    def __init__(self, token: str) -> None:
        super().__init__(f"invalid argument: {token}")


class InvalidNumberError(CommandParseError):
    def __init__(self, token: str) -> None:
        super().__init__(f"invalid number: {token}")


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    red: int = 0
    yellow: int = 0
    turn: Optional[Player] = None
    time_budget: float = math.inf  # seconds; inf for "go" / "go infinite"


def _next(parts: Iterator[str]) -> str:
    tok = next(parts, None)
    if tok is None:
        raise ExpectedArgumentError()
    return tok


def _u64(tok: str) -> int:
    if not (tok.isascii() and tok.isdigit()):
        raise InvalidNumberError(tok)
    value = int(tok)
    if value > FULL:
        raise InvalidNumberError(tok)
    return value


def parse_command(line: str) -> Optional[Command]:
    """
    Parse one protocol line. Returns None for a blank line.
    Raises CommandParseError for anything malformed.
    """
    parts = iter(line.split())
    first = next(parts, None)
    if first is None:
        return None

    if first in ("c4i", "isready", "exit", "stop"):
        return Command(first)

    if first == "go":
        second = next(parts, None)
        if second is None or second == "infinite":
            return Command("go")
        if second == "time":
            micros = _u64(_next(parts))
            return Command("go", time_budget=micros / 1_000_000)
        raise UnknownArgumentError(second)

    if first == "position":
        second = _next(parts)
        if second == "startpos":
            return Command("startpos")
        if second == "custom":
            red = _u64(_next(parts))
            yellow = _u64(_next(parts))
            if red & yellow:
                raise UnknownArgumentError(f"{red} {yellow} (overlapping bitboards)")
            return Command("custom", red=red, yellow=yellow)
        raise UnknownArgumentError(second)

    if first == "setoption":
        second = _next(parts)
        if second != "turn":
            raise UnknownArgumentError(second)
        third = _next(parts)
        if third == "red":
            return Command("turn", turn="red")
        if third == "yellow":
            return Command("turn", turn="yellow")
        raise UnknownArgumentError(third)

    raise UnknownCommandError(first)
