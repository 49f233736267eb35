"""
Move ordering: captures first.

Alpha-beta prunes more when strong moves are searched early, and captures
are the cheapest proxy for "strong" available. There is no scoring beyond
that split: the order inside each group is the order the moves came in.
"""

from typing import Iterable

import chess


def order_moves(board: chess.Board, moves: Iterable[chess.Move]) -> list[chess.Move]:
    """
    Return ``moves`` with every capture ahead of every quiet move.

    The partition is stable: captures keep their relative input order, and so
    do quiet moves.

    Args:
        board: The position the moves belong to (used to detect captures,
               including en passant).
        moves: Legal moves to order.

    Returns:
        A new list; the input is not modified.
    """
    captures: list[chess.Move] = []
    quiet: list[chess.Move] = []
    for move in moves:
        (captures if board.is_capture(move) else quiet).append(move)
    return captures + quiet
