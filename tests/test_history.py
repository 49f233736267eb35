import chess
import pytest

from chessbot.history import MoveHistory


def test_starts_empty():
    history = MoveHistory()
    assert len(history) == 0
    assert history.capacity == 2


def test_third_move_evicts_oldest():
    history = MoveHistory()
    moves = [chess.Move.from_uci(m) for m in ("a1a2", "a2a3", "a3a4")]
    for move in moves:
        history.add(move)
        assert len(history) <= 2

    assert list(history) == moves[1:]


def test_origins_matching():
    history = MoveHistory()
    history.add(chess.Move.from_uci("a1a2"))
    history.add(chess.Move.from_uci("a1a5"))
    assert history.origins_matching(chess.A1) == 2
    assert history.origins_matching(chess.A2) == 0


def test_rejects_zero_capacity():
    with pytest.raises(ValueError):
        MoveHistory(capacity=0)
