import dataclasses

import pytest

from chessbot.weights import EvaluationWeights, PieceTerms


def test_defaults():
    weights = EvaluationWeights()
    assert weights.material == 1.0
    assert weights.mobility == 0.5
    assert weights.king_safety == 0.3
    assert weights.repetition < 0


def test_weights_are_immutable():
    weights = EvaluationWeights()
    with pytest.raises(dataclasses.FrozenInstanceError):
        weights.material = 2.0


@pytest.mark.parametrize(
    "piece_count, expected",
    [(2, 0.3), (12, 0.3), (13, 0.5), (24, 0.5), (25, 1.0), (32, 1.0)],
)
def test_phase_weight(piece_count, expected):
    assert EvaluationWeights().phase_weight(piece_count) == expected


def test_weigh_combines_every_component():
    weights = EvaluationWeights(
        material=1, mobility=2, king_safety=3, capturing=4,
        captured=5, advancement=6, repetition=7,
    )
    terms = PieceTerms(1, 1, 1, 1, 1, 1, 1)
    assert weights.weigh(terms) == 28


def test_weigh_truncates_toward_zero():
    weights = EvaluationWeights()
    assert weights.weigh(PieceTerms(mobility=3)) == 1
    assert weights.weigh(PieceTerms(mobility=-3)) == -1
    assert weights.weigh(PieceTerms(captured=1)) == 0


def test_repetition_survives_truncation():
    weights = EvaluationWeights()
    assert weights.weigh(PieceTerms(repetition=1)) == -1
    assert weights.weigh(PieceTerms(mobility=1, repetition=1)) == -1
    assert weights.weigh(PieceTerms(material=-500, mobility=-3, repetition=-1)) == -500


def test_weigh_is_odd():
    weights = EvaluationWeights()
    terms = PieceTerms(505, 7, -1, 300, 100, 3, 2)
    mirrored = PieceTerms(*(-term for term in terms))
    assert weights.weigh(mirrored) == -weights.weigh(terms)
