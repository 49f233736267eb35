"""
Timer collaborator and the time policy built on it.

The search only ever reads two numbers from a timer: ``ms_remaining`` (the
clock left for the whole game) and ``ms_elapsed_this_turn``. Any object with
those attributes will do; TurnTimer is the implementation the UCI host uses.
A timer may also expose ``ms_total``, the clock at the start of the game,
which makes the low-time ratio meaningful at the very start of a turn.
"""

import time
from dataclasses import dataclass, field

from chessbot.constants import (
    MIN_TURN_BUDGET_MS,
    MOVES_TO_GO,
    TIME_FACTOR_MAX,
    TIME_FACTOR_MIN,
)
from chessbot.errors import InvalidTimeBudget


@dataclass
class TurnTimer:
    """
    Wall-clock timer for one turn, started when the object is created.

    Attributes:
        ms_total:   Clock the game started with (or the whole allotment when
                    the host only knows a per-move time).
        ms_clock:   Clock left at the start of this turn. Defaults to ms_total.
        ms_budget:  Fixed allotment for this turn (UCI "movetime"). When None,
                    turn_budget_ms() spreads the clock over MOVES_TO_GO moves.
        start_time: Monotonic timestamp of the start of the turn.
    """

    ms_total: int
    ms_clock: int | None = None
    ms_budget: int | None = None
    start_time: float = field(default_factory=time.monotonic)

    def __post_init__(self) -> None:
        if self.ms_clock is None:
            self.ms_clock = self.ms_total

    @property
    def ms_elapsed_this_turn(self) -> int:
        return int((time.monotonic() - self.start_time) * 1000)

    @property
    def ms_remaining(self) -> int:
        return self.ms_clock - self.ms_elapsed_this_turn


def _check(timer) -> tuple[int, int]:
    remaining = timer.ms_remaining
    elapsed = timer.ms_elapsed_this_turn
    if remaining <= 0:
        raise InvalidTimeBudget(f"no time remaining ({remaining} ms)")
    if elapsed < 0:
        raise InvalidTimeBudget(f"negative elapsed time ({elapsed} ms)")
    return remaining, elapsed


def remaining_ratio(timer) -> float:
    """
    Fraction of the total clock still available.

    Uses ``ms_total`` when the timer has one, otherwise remaining + elapsed.

    Raises:
        InvalidTimeBudget: remaining or total is not positive, or elapsed is
            negative.
    """
    remaining, elapsed = _check(timer)
    total = getattr(timer, "ms_total", None)
    if total is None:
        total = remaining + elapsed
    if total <= 0:
        raise InvalidTimeBudget(f"non-positive total clock ({total} ms)")
    return remaining / total


def time_factor(timer) -> float:
    """
    Root score multiplier for time pressure: remaining / elapsed, clamped.

    Elapsed is floored at 1 ms, and the ratio is held inside
    [TIME_FACTOR_MIN, TIME_FACTOR_MAX].

    Raises:
        InvalidTimeBudget: see remaining_ratio().
    """
    remaining, elapsed = _check(timer)
    ratio = remaining / max(elapsed, 1)
    return max(TIME_FACTOR_MIN, min(ratio, TIME_FACTOR_MAX))


def turn_budget_ms(timer) -> int:
    """
    Milliseconds this turn may use.

    A timer with a fixed ``ms_budget`` gets exactly that; otherwise the clock
    is spread over MOVES_TO_GO moves.

    Raises:
        InvalidTimeBudget: see remaining_ratio().
    """
    remaining, _ = _check(timer)
    budget = getattr(timer, "ms_budget", None)
    if budget is not None:
        return max(1, budget)
    return max(MIN_TURN_BUDGET_MS, remaining // MOVES_TO_GO)
