"""
Chess bot decision core.

Given a python-chess board and a timer, picks a move using iterative
deepening over a minimax search with alpha-beta pruning, captures-first move
ordering, and a per-piece evaluation with game-phase weighting and a short
memory of the bot's own moves.

Modules:
    constants     — Piece values, default weights, search and time parameters
    errors        — NoLegalMoves, InvalidTimeBudget, SearchAborted
    weights       — EvaluationWeights and the game-phase multiplier
    history       — Bounded history of the engine's own moves
    evaluate      — Per-piece and whole-board evaluation
    move_ordering — Captures-first stable ordering
    timer         — TurnTimer and the time policy (depth, budget, factor)
    search        — Minimax / alpha-beta search and the SearchEngine driver
"""

from chessbot.errors import EngineError, InvalidTimeBudget, NoLegalMoves, SearchAborted
from chessbot.search import SearchEngine, SearchResult
from chessbot.timer import TurnTimer
from chessbot.weights import EvaluationWeights

__all__ = [
    "EngineError",
    "EvaluationWeights",
    "InvalidTimeBudget",
    "NoLegalMoves",
    "SearchAborted",
    "SearchEngine",
    "SearchResult",
    "TurnTimer",
]
