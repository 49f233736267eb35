"""
Per-piece positional evaluation.

Each piece on the board gets its own score built from seven components
(material, mobility, king safety, capturing potential, captured exposure,
advancement and repetition), which EvaluationWeights combines into a single
integer. A position's score is the sum of its pieces' scores.

Scores are absolute: positive favours White, negative favours Black,
regardless of whose turn it is. The search therefore uses plain minimax with
White maximizing rather than the negamax convention.

Board-wide facts (the legal move list, which moves capture, whether the side
to move is in check) are gathered once per evaluation into a BoardSummary and
shared by every piece. Material is each piece's own signed value, so summing
over the board gives exactly the per-kind aggregate
    sum over kinds of (white count - black count) * value
with no piece counted twice. The king is left out of material: it is never
traded, and its sentinel value only matters when pricing capture threats.
"""

from collections import Counter
from dataclasses import dataclass

import chess

from chessbot.constants import PIECE_VALUES
from chessbot.history import MoveHistory
from chessbot.weights import EvaluationWeights, PieceTerms


@dataclass(frozen=True)
class BoardSummary:
    """
    Aggregates shared by every piece evaluated in one position.

    Attributes:
        turn:            Side to move.
        in_check:        Whether the side to move is in check.
        pieces:          Square -> piece for every occupied square.
        moves_from:      Number of legal moves leaving each square.
        capturing_from:  Summed victim value of legal captures leaving each
                         square.
        captured_on:     Summed attacker value of legal captures landing on
                         each square.
    """

    turn: chess.Color
    in_check: bool
    pieces: dict[chess.Square, chess.Piece]
    moves_from: Counter
    capturing_from: Counter
    captured_on: Counter

    @classmethod
    def of(cls, board: chess.Board) -> "BoardSummary":
        moves_from: Counter = Counter()
        capturing_from: Counter = Counter()
        captured_on: Counter = Counter()

        for move in board.legal_moves:
            moves_from[move.from_square] += 1
            if not board.is_capture(move):
                continue
            attacker = board.piece_at(move.from_square)
            # En passant: the captured pawn is not on move.to_square.
            if board.is_en_passant(move):
                victim_square = chess.square(
                    chess.square_file(move.to_square), chess.square_rank(move.from_square)
                )
            else:
                victim_square = move.to_square
            capturing_from[move.from_square] += _value(board.piece_at(victim_square))
            captured_on[victim_square] += _value(attacker)

        return cls(
            turn=board.turn,
            in_check=board.is_check(),
            pieces=board.piece_map(),
            moves_from=moves_from,
            capturing_from=capturing_from,
            captured_on=captured_on,
        )


def _value(piece: chess.Piece | None) -> int:
    return PIECE_VALUES[piece.piece_type if piece else None]


def piece_terms(
    board: chess.Board,
    square: chess.Square,
    history: MoveHistory,
    summary: BoardSummary | None = None,
) -> PieceTerms:
    """
    Compute the raw evaluation components for the piece on ``square``.

    Args:
        board:   The position. Not modified.
        square:  Square of the piece to score. Must be occupied.
        history: The engine's recent moves, for the repetition component.
        summary: Precomputed aggregates for ``board``. Built on demand when
                 omitted, which is fine for a single call but wasteful in a
                 loop over all pieces.

    Returns:
        PieceTerms with every component in absolute (White-positive) terms:
        each magnitude is signed by the piece's colour, so mirroring the
        position negates every term.

    Raises:
        ValueError: ``square`` is empty.
    """
    if summary is None:
        summary = BoardSummary.of(board)

    piece = summary.pieces.get(square)
    if piece is None:
        raise ValueError(f"no piece on {chess.square_name(square)}")

    sign = 1 if piece.color == chess.WHITE else -1
    material = 0 if piece.piece_type == chess.KING else PIECE_VALUES[piece.piece_type]
    rank = chess.square_rank(square)
    advanced = rank if piece.color == chess.WHITE else 7 - rank

    king_safety = 0
    if summary.in_check and piece.color == summary.turn:
        king_safety = -sign

    return PieceTerms(
        material=sign * material,
        mobility=sign * summary.moves_from[square],
        king_safety=king_safety,
        capturing=sign * summary.capturing_from[square],
        captured=sign * summary.captured_on[square],
        advancement=sign * advanced,
        repetition=sign * history.origins_matching(square),
    )


def evaluate_piece(
    board: chess.Board,
    square: chess.Square,
    weights: EvaluationWeights,
    history: MoveHistory,
    summary: BoardSummary | None = None,
) -> int:
    """Weighted score of the piece on ``square``; see piece_terms()."""
    return weights.weigh(piece_terms(board, square, history, summary))


def evaluate_board(
    board: chess.Board,
    weights: EvaluationWeights,
    history: MoveHistory,
) -> int:
    """
    Score a whole position as the sum of its pieces' scores.

    Each piece is weighted and truncated on its own before summing, so the
    result is identical to calling evaluate_piece() once per occupied square.

    Args:
        board:   The position. Not modified.
        weights: Evaluation coefficients.
        history: The engine's recent moves.

    Returns:
        Absolute score: positive favours White.
    """
    summary = BoardSummary.of(board)
    return sum(
        evaluate_piece(board, square, weights, history, summary)
        for square in summary.pieces
    )
