"""
Shared pytest fixtures for the scheduler tests.
"""

from datetime import datetime, timedelta, timezone

import pytest

from srs_core import fsrs


# ============================================================================
# Time Fixtures
# ============================================================================

@pytest.fixture
def t0():
    """Fixed review start time."""
    return datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


# ============================================================================
# Parameter Fixtures
# ============================================================================

@pytest.fixture
def anki_params():
    """Reference deck: steps [1, 10] min, relearn [10] min, no fuzz."""
    return fsrs.ParameterSet(
        request_retention=0.9,
        maximum_interval=36500,
        enable_fuzz=False,
        learning_steps=[1, 10],
        relearning_steps=[10],
        graduating_interval=1,
        easy_interval=4,
    )


@pytest.fixture
def fuzzy_params():
    return fsrs.ParameterSet(enable_fuzz=True)


# ============================================================================
# Card Fixtures
# ============================================================================

def make_review_card(
    now,
    stability=10.0,
    difficulty=5.0,
    elapsed_days=10.0,
    reps=5,
    lapses=0,
):
    """A card in Review, last reviewed `elapsed_days` before `now`."""
    last_review = now - timedelta(days=elapsed_days)
    return fsrs.MemoryState(
        state=fsrs.State.REVIEW,
        due=now,
        stability=stability,
        difficulty=difficulty,
        elapsed_days=elapsed_days,
        scheduled_days=elapsed_days,
        reps=reps,
        lapses=lapses,
        last_review=last_review,
        step=None,
    )


@pytest.fixture
def review_card(t0):
    return make_review_card(t0)
