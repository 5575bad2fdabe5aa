"""
Memory State - FSRS Card State and Retrievability

Defines the per-card memory state, the review log entry and the derived
quantities used by every other module.

Key concepts:
- Stability (S): Days until recall probability decays to 90%
- Difficulty (D): How hard the card is to learn (1-10 scale)
- Retrievability (R): Probability of successful recall at time t
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

from srs_core.fsrs.constants import (
    D_MAX,
    D_MIN,
    DECAY,
    FACTOR,
    S_MAX,
    S_MIN,
    SECONDS_PER_DAY,
    Rating,
    State,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemoryState:
    """
    Memory state for a single card.

    Never mutated: every review returns a new instance.
    """
    state: State
    due: datetime

    # Long-term memory parameters
    stability: float  # S, in days
    difficulty: float  # D, range 1-10

    # Timing of the previous review
    elapsed_days: float  # Days between the last two reviews
    scheduled_days: float  # Interval chosen at the last review

    # Counters
    reps: int
    lapses: int

    last_review: Optional[datetime] = None

    # Position on the learning/relearning ladder (None outside a ladder)
    step: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary (enums as names, times as ISO strings)."""
        return {
            "state": State(self.state).name,
            "due": self.due.isoformat(),
            "stability": self.stability,
            "difficulty": self.difficulty,
            "elapsed_days": self.elapsed_days,
            "scheduled_days": self.scheduled_days,
            "reps": self.reps,
            "lapses": self.lapses,
            "last_review": self.last_review.isoformat() if self.last_review else None,
            "step": self.step,
        }


@dataclass(frozen=True)
class ReviewLogEntry:
    """
    Log entry for a single review.

    Captures the rating, the timing and a snapshot of the resulting state.
    """
    rating: Rating
    previous_state: State
    state: State
    elapsed_days: float
    scheduled_days: float
    stability: float
    difficulty: float
    due: datetime
    review: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "rating": int(self.rating),
            "previous_state": self.previous_state.name,
            "state": State(self.state).name,
            "elapsed_days": self.elapsed_days,
            "scheduled_days": self.scheduled_days,
            "stability": self.stability,
            "difficulty": self.difficulty,
            "due": self.due.isoformat(),
            "review": self.review.isoformat(),
        }


def as_utc(timestamp: datetime) -> datetime:
    """Return an aware UTC datetime; naive values are taken to be UTC."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def clamp_stability(stability: float) -> float:
    if not math.isfinite(stability):
        return S_MAX if stability > 0 else S_MIN
    return min(S_MAX, max(S_MIN, stability))


def clamp_difficulty(difficulty: float) -> float:
    if math.isnan(difficulty):
        return D_MAX
    return min(D_MAX, max(D_MIN, difficulty))


def calculate_retrievability(
    elapsed_days: float,
    stability: float,
    decay: float = DECAY,
    factor: float = FACTOR
) -> float:
    """
    Calculate retrievability using the power-law forgetting curve.

    Formula: R = (1 + FACTOR * t / S) ^ DECAY

    Where:
    - t = days since the last review
    - S = stability (in days)
    - FACTOR is chosen so that R = 0.9 when t = S

    Interpretation:
    - Immediately after review: R = 1.0
    - As time passes: R decays smoothly toward 0
    - Larger S: slower decay

    Args:
        elapsed_days: Time since last review in days
        stability: Current stability in days
        decay: Forgetting-curve exponent (ParameterSet.decay)
        factor: Forgetting-curve scale (ParameterSet.factor)

    Returns:
        Retrievability between 0 and 1
    """
    if not elapsed_days > 0:
        return 1.0

    stability = clamp_stability(stability)
    if math.isinf(elapsed_days):
        return 0.0

    retrievability = (1.0 + factor * elapsed_days / stability) ** decay
    return min(1.0, max(0.0, retrievability))


def get_elapsed_days(last_review: Optional[datetime], now: datetime) -> float:
    """
    Calculate days since the last review.

    A `now` earlier than `last_review` (clock skew) counts as zero.

    Args:
        last_review: Timestamp of the last review, or None for new cards
        now: Current timestamp (injected by the caller)

    Returns:
        Days since last review (0 if never reviewed)
    """
    if last_review is None:
        return 0.0

    delta = as_utc(now) - as_utc(last_review)
    days = delta.total_seconds() / SECONDS_PER_DAY
    if days < 0:
        logger.debug("Review time precedes last review by %.3f days; using 0", -days)
        return 0.0
    return days


def initialize_new_card(
    now: datetime,
    initial_stability: float,
    initial_difficulty: float
) -> MemoryState:
    """
    Initialize state for a new card (never seen before).

    Args:
        now: Creation time; the card is due immediately
        initial_stability: Placeholder stability until the first review
        initial_difficulty: Placeholder difficulty until the first review

    Returns:
        New MemoryState
    """
    return MemoryState(
        state=State.NEW,
        due=as_utc(now),
        stability=clamp_stability(initial_stability),
        difficulty=clamp_difficulty(initial_difficulty),
        elapsed_days=0.0,
        scheduled_days=0.0,
        reps=0,
        lapses=0,
        last_review=None,
        step=None,
    )
