from types import SimpleNamespace

import pytest

from chessbot.errors import InvalidTimeBudget
from chessbot.timer import TurnTimer, remaining_ratio, time_factor, turn_budget_ms


def test_turn_timer_defaults_clock_to_total():
    timer = TurnTimer(ms_total=60_000)
    assert timer.ms_clock == 60_000
    assert 0 <= timer.ms_elapsed_this_turn
    assert timer.ms_remaining <= 60_000


def test_turn_timer_counts_from_start_time():
    timer = TurnTimer(ms_total=60_000, ms_clock=30_000, start_time=0.0)
    assert timer.ms_elapsed_this_turn > 0
    assert timer.ms_remaining < 30_000


def test_remaining_ratio_uses_total(make_timer):
    assert remaining_ratio(make_timer(ms_remaining=15_000)) == 0.25


def test_remaining_ratio_without_total():
    timer = SimpleNamespace(ms_remaining=3_000, ms_elapsed_this_turn=1_000)
    assert remaining_ratio(timer) == 0.75


@pytest.mark.parametrize(
    "remaining, elapsed, total",
    [(0, 0, 60_000), (-5, 0, 60_000), (1_000, -1, 60_000), (1_000, 0, 0)],
)
def test_remaining_ratio_rejects_bad_clocks(make_timer, remaining, elapsed, total):
    timer = make_timer(ms_remaining=remaining, ms_elapsed_this_turn=elapsed, ms_total=total)
    with pytest.raises(InvalidTimeBudget):
        remaining_ratio(timer)


def test_time_factor_is_clamped(make_timer):
    assert time_factor(make_timer(ms_remaining=60_000, ms_elapsed_this_turn=0)) == 10.0
    assert time_factor(make_timer(ms_remaining=100, ms_elapsed_this_turn=10_000)) == 0.1
    assert time_factor(make_timer(ms_remaining=4_000, ms_elapsed_this_turn=2_000)) == 2.0


def test_time_factor_rejects_empty_clock(make_timer):
    with pytest.raises(InvalidTimeBudget):
        time_factor(make_timer(ms_remaining=0))


def test_turn_budget_spreads_clock(make_timer):
    assert turn_budget_ms(make_timer(ms_remaining=60_000)) == 1_500
    assert turn_budget_ms(make_timer(ms_remaining=100)) == 50


def test_turn_budget_prefers_fixed_allotment():
    timer = TurnTimer(ms_total=2_000, ms_budget=2_000)
    assert turn_budget_ms(timer) == 2_000
