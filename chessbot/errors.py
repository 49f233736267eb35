"""
Error conditions raised by the engine.

Only NoLegalMoves ever reaches the host: the other two are recovered inside
SearchEngine.select_move, which falls back to a shallower search or to the
best move found before the clock ran out.
"""


class EngineError(Exception):
    """Base class for every condition raised by the chessbot package."""


class NoLegalMoves(EngineError):
    """The side to move has no legal move (checkmate or stalemate)."""

    def __init__(self, fen: str, checkmate: bool) -> None:
        self.fen = fen
        self.checkmate = checkmate
        reason = "checkmate" if checkmate else "stalemate"
        super().__init__(f"no legal moves ({reason}): {fen}")


class InvalidTimeBudget(EngineError):
    """The timer reported a clock that cannot be used for time decisions."""


class SearchAborted(EngineError):
    """The turn budget ran out, or the host asked the search to stop."""
