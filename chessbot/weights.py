"""
Evaluation weights: one coefficient per scoring factor.

The weights are fixed at construction. The only thing that varies during a
turn is the transient phase multiplier picked by phase_weight(), which the
root driver applies to the moved piece's score.
"""

from dataclasses import dataclass
from typing import NamedTuple

from chessbot.constants import (
    ADVANCEMENT_WEIGHT,
    CAPTURED_WEIGHT,
    CAPTURING_WEIGHT,
    ENDGAME_PIECES,
    KING_SAFETY_WEIGHT,
    MATERIAL_WEIGHT,
    MIDDLEGAME_PIECES,
    MOBILITY_WEIGHT,
    REPETITION_WEIGHT,
)


class PieceTerms(NamedTuple):
    """Raw, unweighted evaluation components for a single piece."""

    material: int = 0
    mobility: int = 0
    king_safety: int = 0
    capturing: int = 0
    captured: int = 0
    advancement: int = 0
    repetition: int = 0


@dataclass(frozen=True)
class EvaluationWeights:
    """
    Coefficients for the seven per-piece evaluation components.

    Attributes:
        material:    Signed piece value.
        mobility:    Legal moves leaving the piece's square.
        king_safety: Flat check penalty on every piece of the checked side.
        capturing:   Value of the pieces this piece can capture right now.
        captured:    Value of the pieces that can capture this piece right
                     now. Negative treats exposure as a penalty, positive
                     as a bonus.
        advancement: Ranks advanced from the piece's own back rank.
        repetition:  History entries that left from the piece's square.
                     Negative to discourage shuffling; applied after the
                     other components are truncated.
    """

    material: float = MATERIAL_WEIGHT
    mobility: float = MOBILITY_WEIGHT
    king_safety: float = KING_SAFETY_WEIGHT
    capturing: float = CAPTURING_WEIGHT
    captured: float = CAPTURED_WEIGHT
    advancement: float = ADVANCEMENT_WEIGHT
    repetition: float = REPETITION_WEIGHT

    def weigh(self, terms: PieceTerms) -> int:
        """
        Combine raw components into one score, truncated toward zero.

        The repetition product is truncated on its own and added afterwards,
        so a whole-number repetition weight always moves the score by exactly
        that much. Truncation toward zero is odd (int(-x) == -int(x)), so a
        colour-mirrored piece scores the exact negation.
        """
        total = (
            self.material * terms.material
            + self.mobility * terms.mobility
            + self.king_safety * terms.king_safety
            + self.capturing * terms.capturing
            + self.captured * terms.captured
            + self.advancement * terms.advancement
        )
        return int(total) + int(self.repetition * terms.repetition)

    def phase_weight(self, piece_count: int) -> float:
        """
        Pick the root multiplier for the current game phase.

        Args:
            piece_count: Pieces of both colours on the board, kings included.

        Returns:
            The king-safety weight in the endgame, the mobility weight in the
            middlegame, and the material weight otherwise.
        """
        if piece_count <= ENDGAME_PIECES:
            return self.king_safety
        if piece_count <= MIDDLEGAME_PIECES:
            return self.mobility
        return self.material
