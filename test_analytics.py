"""
Tests for deck statistics.
"""

from dataclasses import replace
from datetime import timedelta

import pytest

from conftest import make_review_card
from srs_core import analytics, fsrs
from srs_core.fsrs.constants import Rating


@pytest.fixture
def history(t0, anki_params):
    """One card taken through Good, Good, Again plus one untouched New card."""
    card = fsrs.create_card(anki_params, now=t0)
    logs = []
    for offset, rating in [(0, Rating.GOOD), (1, Rating.GOOD), (2, Rating.AGAIN)]:
        outcome = fsrs.review_card(card, rating, t0 + timedelta(days=offset), anki_params)
        card = outcome.card
        logs.append(outcome.log)
    fresh = fsrs.create_card(anki_params, now=t0)
    return [card, fresh], logs


def test_deck_statistics(t0, history):
    cards, logs = history
    now = t0 + timedelta(days=2, hours=1)
    stats = analytics.build_deck_statistics(cards, logs, now)

    assert stats.total_cards == 2
    assert stats.state_counts == {"NEW": 1, "LEARNING": 0, "REVIEW": 0, "RELEARNING": 1}
    assert stats.due_now == 2
    assert stats.true_retention == 0.0
    assert stats.learned_count == 1

    assert len(stats.daily_reviews) == 3
    assert stats.daily_reviews.sum() == 3
    assert list(stats.daily_reviews) == [1, 1, 1]

    assert len(stats.due_forecast) == analytics.DEFAULT_FORECAST_DAYS
    assert stats.due_forecast.iloc[0] == 1
    assert stats.due_forecast.sum() == 1


def test_due_forecast_spreads_future_cards(t0, anki_params):
    card = fsrs.create_card(anki_params, now=t0)
    card = fsrs.review_card(card, Rating.EASY, t0, anki_params).card
    stats = analytics.build_deck_statistics([card], [], t0, forecast_days=7)
    assert stats.due_now == 0
    assert stats.due_forecast.iloc[4] == 1
    assert stats.due_forecast.sum() == 1


def test_review_log_frame_is_sorted(t0, history):
    _, logs = history
    frame = analytics.review_log_frame(reversed(logs))
    assert list(frame["rating"]) == [3, 3, 1]
    assert list(frame["previous_state"]) == ["NEW", "LEARNING", "REVIEW"]


def test_empty_deck(t0):
    stats = analytics.build_deck_statistics([], [], t0)
    assert stats.total_cards == 0
    assert stats.due_now == 0
    assert stats.learned_count == 0
    assert stats.true_retention is None
    assert stats.daily_reviews.empty
    assert stats.due_forecast.sum() == 0
    assert stats.state_counts == {state.name: 0 for state in fsrs.State}


def test_card_progress(t0, anki_params):
    cards = [
        fsrs.create_card(anki_params, now=t0),
        make_review_card(t0, stability=50.0, reps=5),
        make_review_card(t0, stability=200.0, reps=2),
    ]
    snapshots = analytics.card_snapshot_frame(cards, t0)
    progress = analytics.compute_card_progress(snapshots)
    assert list(progress) == pytest.approx([0.0, 0.5, 1.0])

    stats = analytics.build_deck_statistics(cards, [], t0)
    assert stats.mean_progress == pytest.approx(0.5)


def test_empty_deck_has_no_progress(t0):
    assert analytics.build_deck_statistics([], [], t0).mean_progress is None


def test_snapshot_accepts_int_state(t0):
    card = replace(make_review_card(t0), state=2)
    snapshots = analytics.card_snapshot_frame([card], t0)
    assert list(snapshots["state"]) == ["REVIEW"]
