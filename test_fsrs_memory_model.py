"""
Tests for the forgetting curve and the stability/difficulty update rules.
"""

import logging
import math

import pytest

from srs_core import fsrs
from srs_core.fsrs import ltm_updates
from srs_core.fsrs.constants import DEFAULT_WEIGHTS, D_MAX, D_MIN, S_MAX, S_MIN, Rating

W = DEFAULT_WEIGHTS
SUCCESS = [Rating.HARD, Rating.GOOD, Rating.EASY]


# ---- Retrievability ----

@pytest.mark.parametrize("stability", [0.01, 0.5, 1.0, 10.0, 365.0, 36500.0])
def test_retrievability_is_one_at_zero_elapsed(stability):
    assert fsrs.calculate_retrievability(0, stability) == 1.0


def test_retrievability_strictly_decreasing_in_time():
    values = [fsrs.calculate_retrievability(t, 5.0) for t in [0, 0.1, 1, 2, 5, 10, 100, 1000]]
    assert all(a > b for a, b in zip(values, values[1:]))


def test_retrievability_increasing_in_stability():
    values = [fsrs.calculate_retrievability(10, s) for s in [1, 2, 5, 10, 50]]
    assert all(a < b for a, b in zip(values, values[1:]))


def test_retrievability_is_ninety_percent_after_one_stability():
    assert fsrs.calculate_retrievability(7.0, 7.0) == pytest.approx(0.9)


def test_retrievability_approaches_zero():
    assert fsrs.calculate_retrievability(1e9, 1.0) < 0.001
    assert fsrs.calculate_retrievability(math.inf, 1.0) == 0.0


@pytest.mark.parametrize("stability", [1e-12, 0.0, -3.0, math.nan])
def test_retrievability_with_degenerate_stability(stability):
    r = fsrs.calculate_retrievability(36500, stability)
    assert math.isfinite(r)
    assert 0.0 <= r <= 1.0


def test_negative_elapsed_counts_as_zero():
    assert fsrs.calculate_retrievability(-2.0, 5.0) == 1.0


# ---- Initial values ----

def test_initial_stability_comes_from_weights():
    for rating in Rating:
        assert ltm_updates.initial_stability(rating, W) == W[int(rating) - 1]


def test_initial_difficulty_ordered_by_rating():
    d = [ltm_updates.initial_difficulty(r, W) for r in Rating]
    assert d[0] > d[1] > d[2] > d[3]
    assert ltm_updates.initial_difficulty(Rating.GOOD, W) == pytest.approx(W[4])
    assert all(D_MIN <= x <= D_MAX for x in d)


# ---- Difficulty ----

def test_again_raises_and_easy_lowers_difficulty():
    assert ltm_updates.next_difficulty(5.0, Rating.AGAIN, W) > 5.0
    assert ltm_updates.next_difficulty(5.0, Rating.EASY, W) < 5.0


def test_hard_and_good_adjust_modestly():
    hard = ltm_updates.next_difficulty(5.0, Rating.HARD, W)
    good = ltm_updates.next_difficulty(5.0, Rating.GOOD, W)
    again = ltm_updates.next_difficulty(5.0, Rating.AGAIN, W)
    assert abs(good - 5.0) < abs(hard - 5.0) < abs(again - 5.0)


def test_difficulty_is_clamped():
    assert ltm_updates.next_difficulty(10.0, Rating.AGAIN, W) == D_MAX
    assert ltm_updates.next_difficulty(1.0, Rating.EASY, W) == D_MIN
    assert D_MIN <= ltm_updates.next_difficulty(math.nan, Rating.GOOD, W) <= D_MAX


# ---- Stability on success ----

@pytest.mark.parametrize("rating", SUCCESS)
@pytest.mark.parametrize("retrievability", [0.3, 0.7, 0.9, 0.99, 1.0])
def test_success_always_grows_stability(rating, retrievability):
    new = ltm_updates.next_stability_on_success(10.0, 5.0, retrievability, rating, W)
    assert new > 10.0


@pytest.mark.parametrize("rating", [Rating.GOOD, Rating.EASY])
def test_harder_items_grow_less(rating):
    gains = [
        ltm_updates.next_stability_on_success(10.0, d, 0.85, rating, W) - 10.0
        for d in [1.0, 3.0, 5.0, 8.0, 10.0]
    ]
    assert all(a > b for a, b in zip(gains, gains[1:]))


def test_surprising_success_grows_more():
    low_r = ltm_updates.next_stability_on_success(10.0, 5.0, 0.6, Rating.GOOD, W)
    high_r = ltm_updates.next_stability_on_success(10.0, 5.0, 0.95, Rating.GOOD, W)
    assert low_r > high_r


def test_rating_orders_stability_gain():
    hard, good, easy = (
        ltm_updates.next_stability_on_success(10.0, 5.0, 0.85, r, W) for r in SUCCESS
    )
    assert hard < good < easy


def test_success_rejects_again():
    with pytest.raises(ValueError):
        ltm_updates.next_stability_on_success(10.0, 5.0, 0.9, Rating.AGAIN, W)


def test_success_overflow_is_clamped(caplog):
    weights = list(W)
    weights[8] = 1000.0
    with caplog.at_level(logging.WARNING, logger="srs_core.fsrs.ltm_updates"):
        new = ltm_updates.next_stability_on_success(10.0, 5.0, 0.5, Rating.GOOD, weights)
    assert new == S_MAX
    assert "degenerate" in caplog.text


# ---- Stability on failure ----

@pytest.mark.parametrize("stability", [0.5, 3.0, 10.0, 100.0, 3650.0])
@pytest.mark.parametrize("retrievability", [0.2, 0.9, 1.0])
def test_failure_shrinks_stability(stability, retrievability):
    new = ltm_updates.next_stability_on_failure(stability, 6.0, retrievability, W)
    assert 0 < new < stability


@pytest.mark.parametrize(
    "stability, difficulty, retrievability",
    [(1e-9, 5.0, 0.9), (0.0, 10.0, 1.0), (-4.0, 1.0, 0.0), (math.nan, math.nan, math.nan)],
)
def test_failure_stays_positive_for_pathological_inputs(stability, difficulty, retrievability):
    new = ltm_updates.next_stability_on_failure(stability, difficulty, retrievability, W)
    assert math.isfinite(new)
    assert new >= S_MIN


def test_apply_ltm_update_routes_by_rating():
    s_fail, d_fail = ltm_updates.apply_ltm_update(10.0, 5.0, 0.9, Rating.AGAIN, W)
    s_good, d_good = ltm_updates.apply_ltm_update(10.0, 5.0, 0.9, Rating.GOOD, W)
    assert s_fail < 10.0 < s_good
    assert d_fail > d_good


def test_retrievability_curve_shape():
    assert fsrs.calculate_retrievability(7.0, 7.0, decay=-1.0, factor=1 / 9) == pytest.approx(0.9)
    assert fsrs.calculate_retrievability(3.0, 1.0, decay=-1.0, factor=1.0) == pytest.approx(0.25)
