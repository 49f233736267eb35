"""
Engine constants: piece values, evaluation weights, search and time parameters.

All numeric constants used throughout the bot are defined here so that other
modules never need to introduce new magic numbers. The weights below are the
defaults for EvaluationWeights; a caller who wants to tune them builds a new
EvaluationWeights instead of editing module state.

Piece values follow the centipawn convention (1 pawn = 100 cp), with knights
and bishops deliberately equal.
"""

import chess

# ---------------------------------------------------------------------------
# Piece values (centipawns)
# ---------------------------------------------------------------------------

NO_PIECE_VALUE: int = 0
PAWN_VALUE: int = 100
KNIGHT_VALUE: int = 300
BISHOP_VALUE: int = 300
ROOK_VALUE: int = 500
QUEEN_VALUE: int = 900
KING_VALUE: int = 10_000  # Sentinel for capture pricing; never counted as material

# Mapping from python-chess piece type constants to centipawn values.
# Index None stands for an empty square.
PIECE_VALUES: dict[int | None, int] = {
    None:         NO_PIECE_VALUE,
    chess.PAWN:   PAWN_VALUE,
    chess.KNIGHT: KNIGHT_VALUE,
    chess.BISHOP: BISHOP_VALUE,
    chess.ROOK:   ROOK_VALUE,
    chess.QUEEN:  QUEEN_VALUE,
    chess.KING:   KING_VALUE,
}

# ---------------------------------------------------------------------------
# Evaluation weights (defaults for EvaluationWeights)
# ---------------------------------------------------------------------------
# Every component is signed by the piece's colour, so these weights read from
# the owner's point of view. The captured weight is negative: exposure to a
# capture is a penalty. Flip its sign to treat exposure as a bonus. The
# repetition weight is negative and at least 1 in magnitude, so each history
# entry leaving from a square costs the piece standing there a whole point
# after truncation.

MATERIAL_WEIGHT: float = 1.0
MOBILITY_WEIGHT: float = 0.5
KING_SAFETY_WEIGHT: float = 0.3
CAPTURING_WEIGHT: float = 0.6
CAPTURED_WEIGHT: float = -0.6
ADVANCEMENT_WEIGHT: float = 0.4
REPETITION_WEIGHT: float = -1.0

# ---------------------------------------------------------------------------
# Game phase
# ---------------------------------------------------------------------------
# Phase is read from the total number of pieces (both colours, kings
# included). At or below ENDGAME_PIECES the king-safety weight scales the root
# score, at or below MIDDLEGAME_PIECES the mobility weight, otherwise material.

ENDGAME_PIECES: int = 12
MIDDLEGAME_PIECES: int = 24

# ---------------------------------------------------------------------------
# Move history
# ---------------------------------------------------------------------------

HISTORY_SIZE: int = 2

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------

DEFAULT_MAX_DEPTH: int = 3
LOW_TIME_DEPTH: int = 2

# When ms_remaining / ms_total drops below this, the root searches to
# LOW_TIME_DEPTH instead of the configured maximum.
LOW_TIME_RATIO: float = 0.33

# Bound used to seed alpha/beta and the best-score trackers. Larger than any
# reachable evaluation (32 pieces of king value would still fit).
INFINITY: int = 1_000_000_000

# Score of a checkmated position, less the ply at which the mate happens so
# that nearer mates score higher. Well inside INFINITY and far above any
# material evaluation.
CHECKMATE_SCORE: int = 100_000_000

# ---------------------------------------------------------------------------
# Time management
# ---------------------------------------------------------------------------
# The optional time factor multiplies the root score by remaining / elapsed.
# Elapsed is floored at 1 ms and the ratio is clamped so that a fresh turn
# (elapsed close to zero) cannot blow the score up.

TIME_FACTOR_MIN: float = 0.1
TIME_FACTOR_MAX: float = 10.0

# Per-turn budget: remaining clock divided by MOVES_TO_GO, never less than
# MIN_TURN_BUDGET_MS. The search aborts once TIME_USAGE_FRACTION of it is spent.
MOVES_TO_GO: int = 40
MIN_TURN_BUDGET_MS: int = 50
TIME_USAGE_FRACTION: float = 0.9
