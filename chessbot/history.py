"""
Short-term memory of the engine's own moves.

Only moves the engine itself played are recorded, once per turn after the
search is over. The evaluator reads the history to penalize a piece standing
on a square the engine recently moved away from, which is what a piece that
shuffles back and forth looks like.
"""

from collections import deque
from typing import Iterator

import chess

from chessbot.constants import HISTORY_SIZE


class MoveHistory:
    """Bounded FIFO of the most recent engine moves; the oldest is evicted."""

    def __init__(self, capacity: int = HISTORY_SIZE) -> None:
        if capacity < 1:
            raise ValueError(f"history capacity must be positive, got {capacity}")
        self._moves: deque[chess.Move] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._moves.maxlen

    def add(self, move: chess.Move) -> None:
        self._moves.append(move)

    def origins_matching(self, square: chess.Square) -> int:
        """Count the remembered moves that started on ``square``."""
        return sum(1 for move in self._moves if move.from_square == square)

    def __len__(self) -> int:
        return len(self._moves)

    def __iter__(self) -> Iterator[chess.Move]:
        return iter(self._moves)

    def __repr__(self) -> str:
        return f"MoveHistory([{', '.join(m.uci() for m in self._moves)}])"
