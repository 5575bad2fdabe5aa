"""
Long-Term Memory (LTM) Updates

Implements the stability and difficulty update rules of the memory model.

Key principles:
- Well-spaced (low R) success produces the largest stability gains
- Difficult items gain stability more slowly
- A lapse resets stability to a fraction of its previous value
- Difficulty drifts with ratings and reverts slowly toward its default

All functions are pure. Overflow and non-finite intermediate results raise
NumericDegenerate internally and are clamped to the documented bounds.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from srs_core.fsrs.constants import (
    MIN_LAPSE_SHRINK,
    MIN_RECALL_GROWTH,
    S_MAX,
    S_MIN,
    Rating,
)
from srs_core.fsrs.errors import NumericDegenerate
from srs_core.fsrs.memory_state import clamp_difficulty, clamp_stability

logger = logging.getLogger(__name__)


def _checked(quantity: str, value: float, low: float, high: float) -> float:
    if not math.isfinite(value) or value < low or value > high:
        raise NumericDegenerate(quantity, value)
    return value


def _recover_stability(exc: NumericDegenerate) -> float:
    value = exc.value
    recovered = S_MAX if isinstance(value, float) and value > S_MAX else S_MIN
    logger.warning("%s; clamping stability to %s", exc, recovered)
    return recovered


def initial_stability(rating: Rating, weights: Sequence[float]) -> float:
    """
    Stability after the very first review.

    Formula: S0(G) = w[G - 1]

    Args:
        rating: First rating
        weights: Model weights

    Returns:
        Initial stability (floored at S_MIN)
    """
    return clamp_stability(weights[int(rating) - 1])


def initial_difficulty(rating: Rating, weights: Sequence[float]) -> float:
    """
    Difficulty after the very first review.

    Formula: D0(G) = w4 - w5 * (G - 3), clipped to [1, 10]
    """
    return clamp_difficulty(weights[4] - weights[5] * (int(rating) - 3))


def next_difficulty(
    difficulty: float,
    rating: Rating,
    weights: Sequence[float]
) -> float:
    """
    Update difficulty based on the rating.

    Formula:
        D' = D - w6 * (G - 3)
        D_new = clip(w7 * D0(GOOD) + (1 - w7) * D', 1, 10)

    Conceptually:
    - Again raises difficulty, Easy lowers it
    - Hard and Good adjust it modestly
    - Mean reversion keeps it from sticking at the bounds

    Args:
        difficulty: Current difficulty
        rating: User feedback
        weights: Model weights

    Returns:
        New difficulty (clipped to [1, 10])
    """
    shifted = difficulty - weights[6] * (int(rating) - 3)
    reverted = weights[7] * initial_difficulty(Rating.GOOD, weights) + (1.0 - weights[7]) * shifted
    return clamp_difficulty(reverted)


def next_stability_on_success(
    stability: float,
    difficulty: float,
    retrievability: float,
    rating: Rating,
    weights: Sequence[float]
) -> float:
    """
    Update stability after a successful recall (Hard/Good/Easy).

    Formula:
        SInc = e^w8 * (11 - D) * S^-w9 * (e^(w10 * (1 - R)) - 1)
               * hard_penalty * easy_bonus
        S_new = S * (1 + max(SInc, MIN_RECALL_GROWTH))

    Where:
        - (11 - D) shrinks gains for difficult items
        - S^-w9 makes already-stable memories grow more slowly
        - (e^(w10 * (1 - R)) - 1) rewards surprising (low R) success
        - hard_penalty = w15 for Hard, easy_bonus = w16 for Easy

    Args:
        stability: Current stability (S)
        difficulty: Current difficulty (D)
        retrievability: Retrievability at review time (R)
        rating: HARD, GOOD or EASY
        weights: Model weights

    Returns:
        New stability, strictly greater than the input (before the S_MAX ceiling)
    """
    if rating == Rating.AGAIN:
        raise ValueError("Use next_stability_on_failure for AGAIN")

    stability = clamp_stability(stability)
    difficulty = clamp_difficulty(difficulty)
    retrievability = min(1.0, max(0.0, retrievability))

    hard_penalty = weights[15] if rating == Rating.HARD else 1.0
    easy_bonus = weights[16] if rating == Rating.EASY else 1.0

    try:
        increase = (
            math.exp(weights[8])
            * (11.0 - difficulty)
            * stability ** -weights[9]
            * (math.exp(weights[10] * (1.0 - retrievability)) - 1.0)
            * hard_penalty
            * easy_bonus
        )
        new_stability = stability * (1.0 + max(increase, MIN_RECALL_GROWTH))
        return _checked("recall stability", new_stability, S_MIN, S_MAX)
    except OverflowError:
        return _recover_stability(NumericDegenerate("recall stability", math.inf))
    except NumericDegenerate as exc:
        return _recover_stability(exc)


def next_stability_on_failure(
    stability: float,
    difficulty: float,
    retrievability: float,
    weights: Sequence[float]
) -> float:
    """
    Update stability after a failed recall (Again).

    Formula:
        S_f = w11 * D^-w12 * ((S + 1)^w13 - 1) * e^(w14 * (1 - R))
        S_new = max(S_MIN, min(S_f, S * (1 - MIN_LAPSE_SHRINK)))

    A lapse always lowers stability (unless it is already at S_MIN), and
    the result stays strictly positive.

    Args:
        stability: Current stability
        difficulty: Current difficulty
        retrievability: Retrievability at review time

    Returns:
        New stability value (reduced)
    """
    stability = clamp_stability(stability)
    difficulty = clamp_difficulty(difficulty)
    retrievability = min(1.0, max(0.0, retrievability))

    try:
        forget = (
            weights[11]
            * difficulty ** -weights[12]
            * ((stability + 1.0) ** weights[13] - 1.0)
            * math.exp(weights[14] * (1.0 - retrievability))
        )
        ceiling = stability * (1.0 - MIN_LAPSE_SHRINK)
        return _checked("forget stability", min(forget, ceiling), S_MIN, S_MAX)
    except OverflowError:
        return max(S_MIN, stability * (1.0 - MIN_LAPSE_SHRINK))
    except NumericDegenerate as exc:
        return _recover_stability(exc)


def apply_ltm_update(
    stability: float,
    difficulty: float,
    retrievability: float,
    rating: Rating,
    weights: Sequence[float]
) -> tuple[float, float]:
    """
    Apply the LTM update rules to a card in Review.

    Args:
        stability: Current stability
        difficulty: Current difficulty
        retrievability: Retrievability at review time
        rating: User feedback
        weights: Model weights

    Returns:
        (new_stability, new_difficulty)
    """
    if rating == Rating.AGAIN:
        new_stability = next_stability_on_failure(stability, difficulty, retrievability, weights)
    else:
        new_stability = next_stability_on_success(
            stability, difficulty, retrievability, rating, weights
        )

    new_difficulty = next_difficulty(difficulty, rating, weights)

    return new_stability, new_difficulty
