from __future__ import annotations


class EngineError(Exception):
    """Base class for engine-level failures."""


class NoLegalMovesError(EngineError, ValueError):
    def __init__(self) -> None:
        super().__init__("no legal moves in this position")


class SearchBusyError(EngineError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("a search is already running")


class NoSearchResultError(EngineError, RuntimeError):
    def __init__(self) -> None:
        super().__init__("no search has completed yet")


class EngineProcessError(EngineError, RuntimeError):
    pass


class IllegalEngineMoveError(EngineError, ValueError):
    pass
