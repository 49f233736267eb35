"""
Search entry point: iterative deepening over a depth-limited minimax search,
with optional alpha-beta pruning, captures-first move ordering and a
wall-clock deadline.

The public interface is SearchEngine.select_move(board, timer). One engine
instance plays one game: it owns the evaluation weights and the short move
history that feeds the repetition penalty, and records the statistics of its
last search in ``last_result``.

Scores are absolute (positive favours White), so the recursive search is
classic minimax: White maximizes, Black minimizes. Pruning and plain minimax
share one recursive function; with a full (-INFINITY, INFINITY) window at the
root both return the same value, pruning only skips siblings that cannot
change it.

Root scoring:
    For each root move, the moved piece is evaluated in the resulting
    position, scaled by the game-phase weight (and optionally by the time
    factor), and added to the search value of that position one ply
    shallower. Each completed iteration replaces the previous one's move and
    score wholesale, so a move whose deeper score collapsed (it walks into a
    mate, say) is not kept on the strength of its shallower value. An
    interrupted iteration is discarded in favour of the last completed one.

Threading model:
    The search itself is single-threaded and works on the caller's board via
    push/pop. The UCI host runs select_move() in a daemon thread and passes a
    stop_event; the search checks it, and the turn deadline, on every node.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator

import chess

from chessbot.constants import (
    CHECKMATE_SCORE,
    DEFAULT_MAX_DEPTH,
    INFINITY,
    LOW_TIME_DEPTH,
    LOW_TIME_RATIO,
    MIN_TURN_BUDGET_MS,
    TIME_USAGE_FRACTION,
)
from chessbot.errors import InvalidTimeBudget, NoLegalMoves, SearchAborted
from chessbot.evaluate import evaluate_board, evaluate_piece
from chessbot.history import MoveHistory
from chessbot.move_ordering import order_moves
from chessbot.timer import remaining_ratio, time_factor, turn_budget_ms
from chessbot.weights import EvaluationWeights

_log = logging.getLogger(__name__)


@contextmanager
def played(board: chess.Board, move: chess.Move) -> Iterator[chess.Board]:
    """
    Apply ``move`` for the duration of a ``with`` block.

    The move is undone on every exit path, including exceptions such as
    SearchAborted, so the board always comes back exactly as it was.
    """
    board.push(move)
    try:
        yield board
    finally:
        board.pop()


@dataclass
class SearchState:
    """
    Everything one search call tree needs besides the board.

    Attributes:
        weights:    Evaluation coefficients used at leaf nodes.
        history:    The engine's recent moves (read-only during search).
        prune:      Enable alpha-beta cutoffs. False gives plain minimax.
        timer:      Timer collaborator, or None for an untimed search.
        budget_ms:  Milliseconds this turn may use. The search aborts once
                    TIME_USAGE_FRACTION of it has elapsed.
        stop_event: Set by the host to abort the search.
        node_count: Number of nodes visited so far.
    """

    weights: EvaluationWeights = field(default_factory=EvaluationWeights)
    history: MoveHistory = field(default_factory=MoveHistory)
    prune: bool = True
    timer: object | None = None
    budget_ms: float = float("inf")
    stop_event: threading.Event = field(default_factory=threading.Event)
    node_count: int = 0

    def check_deadline(self) -> None:
        """Raise SearchAborted if the host stopped us or the budget is spent."""
        if self.stop_event.is_set():
            raise SearchAborted("stop requested")
        if self.timer is None:
            return
        elapsed = self.timer.ms_elapsed_this_turn
        if elapsed >= self.budget_ms * TIME_USAGE_FRACTION:
            raise SearchAborted(f"turn budget spent ({elapsed} of {self.budget_ms} ms)")


@dataclass
class SearchResult:
    """
    Outcome of one select_move() call.

    Attributes:
        move:    The move returned to the host.
        score:   Its root score (absolute, positive favours White).
        depth:   Deepest iteration that completed.
        nodes:   Nodes visited across all iterations.
        aborted: True when the deadline or a stop request cut the search short.
    """

    move: chess.Move
    score: int
    depth: int
    nodes: int
    aborted: bool = False


def search(
    board: chess.Board,
    depth: int,
    alpha: int,
    beta: int,
    maximizing: bool,
    state: SearchState,
    ply: int = 0,
) -> int:
    """
    Depth-limited minimax with optional alpha-beta pruning.

    Args:
        board:      Current position. Modified in place via push/pop and
                    always restored before returning.
        depth:      Remaining depth in plies.
        alpha:      Best score the maximizer can already guarantee.
        beta:       Best score the minimizer can already guarantee.
        maximizing: True when the side to move is White.
        state:      Weights, history, pruning switch and deadline.
        ply:        Distance from the root, for mate distance.

    Returns:
        The minimax value of the position. A checkmated side scores
        CHECKMATE_SCORE - ply against it, so nearer mates weigh more. At
        depth 0, or on stalemate, this is the sum of per-piece evaluations
        over the whole board.

    Raises:
        SearchAborted: the deadline passed or the host requested a stop.
    """
    state.check_deadline()
    state.node_count += 1

    if board.is_checkmate():
        return mate_score(board, ply)

    if depth == 0:
        return evaluate_board(board, state.weights, state.history)

    moves = order_moves(board, board.legal_moves)
    if not moves:
        # Stalemate.
        return evaluate_board(board, state.weights, state.history)

    best_score = -INFINITY if maximizing else INFINITY

    for move in moves:
        with played(board, move):
            score = search(board, depth - 1, alpha, beta, not maximizing, state, ply + 1)

        if maximizing:
            best_score = max(best_score, score)
            alpha = max(alpha, score)
        else:
            best_score = min(best_score, score)
            beta = min(beta, score)

        # Cutoff: the opponent already has a better alternative elsewhere, so
        # the remaining siblings cannot change the value of this node.
        if state.prune and beta <= alpha:
            break

    return best_score


def mate_score(board: chess.Board, ply: int) -> int:
    """Absolute score of a checkmated ``board``, reached ``ply`` moves from the root."""
    score = CHECKMATE_SCORE - ply
    return -score if board.turn == chess.WHITE else score


def minimax(
    board: chess.Board,
    depth: int,
    maximizing: bool,
    state: SearchState | None = None,
) -> int:
    """Unpruned minimax value of ``board``."""
    if state is None:
        state = SearchState()
    state.prune = False
    return search(board, depth, -INFINITY, INFINITY, maximizing, state)


def alphabeta(
    board: chess.Board,
    depth: int,
    maximizing: bool,
    state: SearchState | None = None,
) -> int:
    """Alpha-beta value of ``board`` from a full window; equals minimax()."""
    if state is None:
        state = SearchState()
    state.prune = True
    return search(board, depth, -INFINITY, INFINITY, maximizing, state)


class SearchEngine:
    """
    Move selector for one game.

    Args:
        weights:         Evaluation coefficients. Defaults to the constants.
        max_depth:       Deepest iteration when the clock is comfortable.
        low_time_depth:  Deepest iteration once less than ``low_time_ratio``
                         of the total clock remains.
        low_time_ratio:  Threshold on ms_remaining / ms_total.
        prune:           Use alpha-beta cutoffs (same scores, fewer nodes).
        use_time_factor: Scale the root evaluation of the moved piece by the
                         clamped remaining/elapsed ratio.
    """

    def __init__(
        self,
        weights: EvaluationWeights | None = None,
        max_depth: int = DEFAULT_MAX_DEPTH,
        low_time_depth: int = LOW_TIME_DEPTH,
        low_time_ratio: float = LOW_TIME_RATIO,
        prune: bool = True,
        use_time_factor: bool = False,
    ) -> None:
        if max_depth < 1:
            raise ValueError(f"max_depth must be at least 1, got {max_depth}")
        self.weights = weights or EvaluationWeights()
        self.max_depth = max_depth
        self.low_time_depth = max(1, min(low_time_depth, max_depth))
        self.low_time_ratio = low_time_ratio
        self.prune = prune
        self.use_time_factor = use_time_factor
        self.history = MoveHistory()
        self.last_result: SearchResult | None = None

    def depth_limit(self, timer) -> int:
        """Maximum iteration depth for this turn, given the clock."""
        try:
            ratio = remaining_ratio(timer)
        except InvalidTimeBudget as exc:
            _log.warning("falling back to depth %d: %s", self.low_time_depth, exc)
            return self.low_time_depth
        return self.low_time_depth if ratio < self.low_time_ratio else self.max_depth

    def _root_weight(self, piece_count: int, timer) -> float:
        weight = self.weights.phase_weight(piece_count)
        if not self.use_time_factor:
            return weight
        try:
            return weight * time_factor(timer)
        except InvalidTimeBudget as exc:
            _log.warning("ignoring time factor: %s", exc)
            return weight

    def select_move(
        self,
        board: chess.Board,
        timer,
        stop_event: threading.Event | None = None,
    ) -> chess.Move:
        """
        Choose a move for the side to move within the turn's time budget.

        Args:
            board:      The current position. Searched in place and restored
                        before returning.
            timer:      Object exposing ms_remaining and ms_elapsed_this_turn.
            stop_event: Optional event the host sets to stop the search early.

        Returns:
            The chosen legal move. It is also appended to the move history.

        Raises:
            NoLegalMoves: the side to move is checkmated or stalemated.
        """
        moves = order_moves(board, board.legal_moves)
        if not moves:
            raise NoLegalMoves(board.fen(), board.is_checkmate())

        max_depth = self.depth_limit(timer)
        try:
            budget_ms = turn_budget_ms(timer)
        except InvalidTimeBudget:
            budget_ms = MIN_TURN_BUDGET_MS

        state = SearchState(
            weights=self.weights,
            history=self.history,
            prune=self.prune,
            timer=timer,
            budget_ms=budget_ms,
            stop_event=stop_event or threading.Event(),
        )

        # White wants the highest absolute score, Black the lowest.
        sign = 1 if board.turn == chess.WHITE else -1
        piece_count = len(board.piece_map())

        best_move = moves[0]
        best_score: int | None = None
        completed_depth = 0
        aborted = False

        for depth in range(1, max_depth + 1):
            depth_move: chess.Move | None = None
            depth_score = 0
            try:
                for move in moves:
                    with played(board, move):
                        if board.is_checkmate():
                            # Mate in one: nothing deeper can beat it.
                            score = mate_score(board, 1)
                            return self._finish(move, score, depth, state, aborted=False)

                        weight = self._root_weight(piece_count, timer)
                        moved = evaluate_piece(board, move.to_square, self.weights, self.history)
                        score = int(moved * weight) + search(
                            board,
                            depth - 1,
                            -INFINITY,
                            INFINITY,
                            board.turn == chess.WHITE,
                            state,
                            ply=1,
                        )

                    if depth_move is None or sign * score > sign * depth_score:
                        depth_move = move
                        depth_score = score
            except SearchAborted as exc:
                _log.info("search stopped during depth %d: %s", depth, exc)
                aborted = True
                if best_score is None and depth_move is not None:
                    # No iteration finished: a partial one beats no score.
                    best_move, best_score = depth_move, depth_score
                break

            best_move, best_score = depth_move, depth_score
            completed_depth = depth
            _log.debug(
                "depth=%d best=%s score=%d nodes=%d",
                depth, best_move.uci(), best_score, state.node_count,
            )

        if best_score is None:
            # Aborted before any root move was scored.
            best_score = 0
        return self._finish(best_move, best_score, completed_depth, state, aborted)

    def _finish(
        self,
        move: chess.Move,
        score: int,
        depth: int,
        state: SearchState,
        aborted: bool,
    ) -> chess.Move:
        self.history.add(move)
        self.last_result = SearchResult(
            move=move,
            score=score,
            depth=depth,
            nodes=state.node_count,
            aborted=aborted,
        )
        return move
