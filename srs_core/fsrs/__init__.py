"""
FSRS - Free Spaced Repetition Scheduler

Main API for the scheduling core.

This package implements a pure, stateless spaced repetition scheduler with:
- Power-law forgetting curve: R = (1 + FACTOR * t / S) ^ DECAY
- Long-Term Memory (LTM) updates of stability and difficulty
- Short-Term Memory (STM) learning and relearning step ladders
- Deterministic, seedable interval fuzz

Quick start:
    from datetime import datetime, timezone
    from srs_core import fsrs

    now = datetime.now(timezone.utc)
    card = fsrs.create_card(now=now)
    outcome = fsrs.review_card(card, fsrs.Rating.GOOD, now)
    card, log_entry = outcome.card, outcome.log
"""

# Scheduler API
from srs_core.fsrs.scheduling import (
    ReviewOutcome,
    create_card,
    get_retrievability,
    preview_card,
    review_card,
)
from srs_core.fsrs.scheduler import coerce_rating, process_review

# Parameters
from srs_core.fsrs.parameters import DEFAULT_PARAMETERS, ParameterSet

# Constants and enums
from srs_core.fsrs.constants import (
    DEFAULT_WEIGHTS,
    DECAY,
    FACTOR,
    S_MIN,
    S_MAX,
    D_MIN,
    D_MAX,
    Rating,
    State,
)

# Errors
from srs_core.fsrs.errors import (
    InvalidParameters,
    InvalidRating,
    NumericDegenerate,
    SchedulerError,
)

# Memory state (for advanced usage)
from srs_core.fsrs.memory_state import (
    MemoryState,
    ReviewLogEntry,
    calculate_retrievability,
    get_elapsed_days,
)


__all__ = [
    # Core API
    "create_card",
    "review_card",
    "preview_card",
    "get_retrievability",
    "process_review",
    "coerce_rating",
    "ReviewOutcome",

    # Parameters
    "ParameterSet",
    "DEFAULT_PARAMETERS",

    # Enums
    "Rating",
    "State",

    # Errors
    "SchedulerError",
    "InvalidParameters",
    "InvalidRating",
    "NumericDegenerate",

    # Memory state
    "MemoryState",
    "ReviewLogEntry",
    "calculate_retrievability",
    "get_elapsed_days",

    # Constants
    "DEFAULT_WEIGHTS",
    "DECAY",
    "FACTOR",
    "S_MIN",
    "S_MAX",
    "D_MIN",
    "D_MAX",
]
