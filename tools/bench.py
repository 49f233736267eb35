#!/usr/bin/env python3
"""
Benchmark: compare node counts of plain minimax and alpha-beta.

Both searches run in-process on the same fixed positions at the same depth.
The scores must match (pruning never changes the value of the root); the
node columns show how much alpha-beta saves with captures-first ordering.

Usage: python3 tools/bench.py [depth]
"""
import os
import sys
import time

REPO = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO not in sys.path:
    sys.path.insert(0, REPO)

import chess

from chessbot.search import SearchState, alphabeta, minimax

# Fixed positions spanning opening, middlegame and endgame. Small enough that
# unpruned minimax still finishes at depth 3.
POSITIONS = [
    ("Start",        chess.STARTING_FEN),
    ("After 1.e4",   "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq - 0 1"),
    ("Italian",      "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3"),
    ("Queen hangs",  "4k3/8/8/3q4/4P3/8/8/4K3 w - - 0 1"),
    ("Rook ending",  "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
    ("Pawn race",    "8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1"),
]


def run_position(label: str, fen: str, depth: int) -> dict:
    """Search one position both ways and return scores, nodes and times."""
    board = chess.Board(fen)
    maximizing = board.turn == chess.WHITE

    plain = SearchState()
    start = time.monotonic()
    plain_score = minimax(board, depth, maximizing, plain)
    plain_ms = int((time.monotonic() - start) * 1000)

    pruned = SearchState()
    start = time.monotonic()
    pruned_score = alphabeta(board, depth, maximizing, pruned)
    pruned_ms = int((time.monotonic() - start) * 1000)

    return {
        "label": label,
        "plain_score": plain_score,
        "pruned_score": pruned_score,
        "plain_nodes": plain.node_count,
        "pruned_nodes": pruned.node_count,
        "plain_ms": plain_ms,
        "pruned_ms": pruned_ms,
    }


def main() -> None:
    """Run all benchmark positions and print a summary table."""
    depth = int(sys.argv[1]) if len(sys.argv) > 1 else 3
    print(f"Chess bot benchmark — depth {depth} — {sys.executable}")
    print()
    print(
        f"{'Position':<12} {'Score':>7} {'Minimax':>9} {'AlphaBeta':>10} "
        f"{'Saved':>6} {'MM(ms)':>7} {'AB(ms)':>7}"
    )
    print("-" * 64)

    mismatches = 0
    for label, fen in POSITIONS:
        r = run_position(label, fen, depth)
        saved = 100 - (100 * r["pruned_nodes"] // max(1, r["plain_nodes"]))
        flag = "" if r["plain_score"] == r["pruned_score"] else "  MISMATCH"
        mismatches += bool(flag)
        print(
            f"{r['label']:<12} {r['pruned_score']:>7} {r['plain_nodes']:>9,} "
            f"{r['pruned_nodes']:>10,} {saved:>5}% {r['plain_ms']:>7,} "
            f"{r['pruned_ms']:>7,}{flag}"
        )

    print()
    if mismatches:
        print(f"{mismatches} position(s) scored differently with pruning.")
        sys.exit(1)


if __name__ == "__main__":
    main()
