from dataclasses import dataclass

import pytest


@dataclass
class FixedTimer:
    """Timer whose clock does not move, so searches never hit the deadline."""

    ms_remaining: int = 60_000
    ms_elapsed_this_turn: int = 0
    ms_total: int = 60_000


@pytest.fixture
def timer():
    return FixedTimer()


@pytest.fixture
def make_timer():
    """Build a FixedTimer with custom clock values."""
    return FixedTimer
