"""
Scheduler - FSRS State Machine

Pure scheduling and state updates (no I/O, no wall clock).

Main workflow:
1. Validate the rating and normalise the card
2. Compute elapsed time since the last review
3. Route by state:
   - New: initialise S and D, enter the learning ladder
   - Learning / Relearning: STM ladder moves
   - Review: LTM update of S and D, next interval from the planner
4. Return a new card + log entry

Transitions:
    New -> Learning | Review
    Learning -> Learning | Review
    Review -> Review | Relearning
    Relearning -> Relearning | Review
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Any, Optional, Union

from srs_core.fsrs import intervals, ltm_updates, stm_updates
from srs_core.fsrs.constants import Rating, State
from srs_core.fsrs.errors import InvalidRating
from srs_core.fsrs.memory_state import (
    MemoryState,
    ReviewLogEntry,
    as_utc,
    calculate_retrievability,
    clamp_difficulty,
    clamp_stability,
    get_elapsed_days,
)
from srs_core.fsrs.parameters import ParameterSet

logger = logging.getLogger(__name__)

Seed = Union[int, str]


@dataclass(frozen=True)
class _Transition:
    state: State
    stability: float
    difficulty: float
    scheduled_days: float
    delay: timedelta
    step: Optional[int]
    lapses: int


def coerce_rating(value: Any) -> Rating:
    """
    Turn a Rating, an int 1-4 or a rating name into a Rating.

    Raises:
        InvalidRating: For anything else
    """
    if isinstance(value, Rating):
        return value
    if isinstance(value, bool):
        raise InvalidRating(f"Rating must be 1, 2, 3 or 4, got {value!r}")
    if isinstance(value, str):
        try:
            return Rating[value.strip().upper()]
        except KeyError:
            raise InvalidRating(f"Unknown rating name: {value!r}") from None
    try:
        return Rating(value)
    except (ValueError, TypeError):
        raise InvalidRating(f"Rating must be 1, 2, 3 or 4, got {value!r}") from None


def derive_seed(card: MemoryState, now: datetime) -> str:
    """Fuzz seed derived from the card and review time (same inputs, same seed)."""
    return f"{as_utc(now).isoformat()}|{card.reps}|{card.stability!r}|{card.difficulty!r}"


def process_review(
    card: MemoryState,
    rating: Rating,
    now: datetime,
    params: ParameterSet,
    seed: Optional[Seed] = None
) -> tuple[MemoryState, ReviewLogEntry]:
    """
    Process a review and return the new card state + log entry.

    This is the core FSRS algorithm. The input card is never modified.

    Args:
        card: Current memory state
        rating: User feedback (AGAIN, HARD, GOOD, EASY)
        now: Review timestamp (injected)
        params: Deck parameters
        seed: Fuzz seed (derived from card and time when None)

    Returns:
        Tuple of (updated_card, log_entry)

    Raises:
        InvalidRating: If rating is not one of the four grades
    """
    rating = coerce_rating(rating)
    now = as_utc(now)
    card = _normalise(card)

    elapsed_days = get_elapsed_days(card.last_review, now)
    if seed is None:
        seed = derive_seed(card, now)

    if card.state == State.NEW:
        transition = _apply_new_card(card, rating, params)
    elif card.state == State.REVIEW:
        transition = _apply_ltm_update(card, rating, elapsed_days, params, seed)
    else:
        transition = _apply_stm_update(card, rating, params, seed)

    updated = replace(
        card,
        state=transition.state,
        due=now + transition.delay,
        stability=transition.stability,
        difficulty=transition.difficulty,
        elapsed_days=elapsed_days,
        scheduled_days=transition.scheduled_days,
        reps=card.reps + 1,
        lapses=transition.lapses,
        last_review=now,
        step=transition.step,
    )

    log_entry = ReviewLogEntry(
        rating=rating,
        previous_state=card.state,
        state=updated.state,
        elapsed_days=elapsed_days,
        scheduled_days=updated.scheduled_days,
        stability=updated.stability,
        difficulty=updated.difficulty,
        due=updated.due,
        review=now,
    )

    logger.debug(
        "Review %s -> %s (rating=%s, S=%.3f, D=%.3f, due=%s)",
        card.state.name, updated.state.name, rating.name,
        updated.stability, updated.difficulty, updated.due.isoformat(),
    )
    return updated, log_entry


def _normalise(card: MemoryState) -> MemoryState:
    """Clamp drifted numeric fields back into range."""
    if not isinstance(card, MemoryState):
        raise TypeError(f"Expected MemoryState, got {type(card).__name__}")

    return replace(
        card,
        state=State(card.state),
        due=as_utc(card.due),
        stability=clamp_stability(card.stability),
        difficulty=clamp_difficulty(card.difficulty),
        reps=max(0, card.reps),
        lapses=max(0, card.lapses),
        last_review=as_utc(card.last_review) if card.last_review else None,
    )


def _graduate(days: int, params: ParameterSet) -> tuple[float, timedelta]:
    capped = intervals.apply_cap(days, params.maximum_interval)
    return float(capped), timedelta(days=capped)


def _apply_new_card(
    card: MemoryState,
    rating: Rating,
    params: ParameterSet
) -> _Transition:
    """
    First review: initialise S and D, then enter (or skip) the learning ladder.
    """
    stability = ltm_updates.initial_stability(rating, params.weights)
    difficulty = ltm_updates.initial_difficulty(rating, params.weights)
    move = stm_updates.entry_move(params.learning_steps, rating)

    if move.graduate:
        days = params.easy_interval if rating == Rating.EASY else params.graduating_interval
        scheduled_days, delay = _graduate(days, params)
        return _Transition(State.REVIEW, stability, difficulty, scheduled_days, delay, None, card.lapses)

    return _Transition(
        State.LEARNING, stability, difficulty,
        move.delay_days, timedelta(minutes=move.delay_minutes), move.step, card.lapses,
    )


def _apply_stm_update(
    card: MemoryState,
    rating: Rating,
    params: ParameterSet,
    seed: Seed
) -> _Transition:
    """
    Learning / Relearning answer: move along the ladder, update D only.

    Learning graduates with the deck's graduating/easy interval; Relearning
    graduates with an interval planned from the post-lapse stability.
    """
    relearning = card.state == State.RELEARNING
    steps = params.relearning_steps if relearning else params.learning_steps

    difficulty = ltm_updates.next_difficulty(card.difficulty, rating, params.weights)
    move = stm_updates.ladder_move(steps, card.step, rating)

    if not move.graduate:
        return _Transition(
            card.state, card.stability, difficulty,
            move.delay_days, timedelta(minutes=move.delay_minutes), move.step, card.lapses,
        )

    if relearning:
        days = intervals.next_interval(card.stability, params, seed)
        if rating == Rating.EASY:
            days += 1
    elif rating == Rating.EASY:
        days = params.easy_interval
    else:
        days = params.graduating_interval

    scheduled_days, delay = _graduate(days, params)
    return _Transition(State.REVIEW, card.stability, difficulty, scheduled_days, delay, None, card.lapses)


def _apply_ltm_update(
    card: MemoryState,
    rating: Rating,
    elapsed_days: float,
    params: ParameterSet,
    seed: Seed
) -> _Transition:
    """
    Review answer: update S and D from retrievability at review time.

    Again lapses into Relearning. Hard/Good/Easy stay in Review with
    intervals ordered hard <= good < easy.
    """
    retrievability = calculate_retrievability(
        elapsed_days, card.stability, params.decay, params.factor
    )

    if rating == Rating.AGAIN:
        stability, difficulty = ltm_updates.apply_ltm_update(
            card.stability, card.difficulty, retrievability, rating, params.weights
        )
        move = stm_updates.lapse_move(params.relearning_steps)
        return _Transition(
            State.RELEARNING, stability, difficulty,
            move.delay_days, timedelta(minutes=move.delay_minutes), move.step, card.lapses + 1,
        )

    planned = _plan_success_intervals(card, retrievability, params, seed)
    stability, difficulty, days = planned[rating]
    return _Transition(
        State.REVIEW, stability, difficulty, float(days), timedelta(days=days), None, card.lapses
    )


def _plan_success_intervals(
    card: MemoryState,
    retrievability: float,
    params: ParameterSet,
    seed: Seed
) -> dict[Rating, tuple[float, float, int]]:
    """
    Stability, difficulty and interval for each successful rating.
    """
    outcomes: dict[Rating, tuple[float, float]] = {}
    days: dict[Rating, int] = {}
    for grade in (Rating.HARD, Rating.GOOD, Rating.EASY):
        outcomes[grade] = ltm_updates.apply_ltm_update(
            card.stability, card.difficulty, retrievability, grade, params.weights
        )
        days[grade] = intervals.next_interval(outcomes[grade][0], params, f"{seed}|{grade.name}")

    cap = params.maximum_interval
    hard = min(days[Rating.HARD], days[Rating.GOOD])
    good = min(max(days[Rating.GOOD], hard + 1), cap)
    easy = min(max(days[Rating.EASY], good + 1), cap)
    days = {Rating.HARD: hard, Rating.GOOD: good, Rating.EASY: easy}

    return {
        grade: (outcomes[grade][0], outcomes[grade][1], days[grade])
        for grade in outcomes
    }
