"""
Scheduling - Main FSRS API

Entry points callers use to create and review cards. Every function is a
pure function of its arguments: the caller supplies `now` and persists the
returned state and log entry.

Main workflow:
1. create_card() once per new card
2. review_card() on every answer; store outcome.card, append outcome.log
3. Optionally preview_card() to show the interval behind each button
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from srs_core.fsrs import ltm_updates
from srs_core.fsrs.constants import Rating, State
from srs_core.fsrs.memory_state import (
    MemoryState,
    ReviewLogEntry,
    calculate_retrievability,
    get_elapsed_days,
    initialize_new_card,
)
from srs_core.fsrs.parameters import DEFAULT_PARAMETERS, ParameterSet
from srs_core.fsrs.scheduler import Seed, process_review


@dataclass(frozen=True)
class ReviewOutcome:
    """Result of one review: the replacement state and the log entry to append."""
    card: MemoryState
    log: ReviewLogEntry


def create_card(
    params: Optional[ParameterSet] = None,
    *,
    now: datetime
) -> MemoryState:
    """
    Create a New card, due immediately.

    Stability and difficulty hold the model's Good-rating defaults until the
    first review replaces them.

    Args:
        params: Deck parameters (defaults to the reference set)
        now: Creation timestamp

    Returns:
        New MemoryState
    """
    params = params or DEFAULT_PARAMETERS
    return initialize_new_card(
        now,
        initial_stability=ltm_updates.initial_stability(Rating.GOOD, params.weights),
        initial_difficulty=ltm_updates.initial_difficulty(Rating.GOOD, params.weights),
    )


def review_card(
    card: MemoryState,
    rating: Rating,
    now: datetime,
    params: Optional[ParameterSet] = None,
    seed: Optional[Seed] = None
) -> ReviewOutcome:
    """
    Apply one answer to a card.

    Args:
        card: Current memory state (not modified)
        rating: AGAIN, HARD, GOOD or EASY (an int 1-4 or the name also works)
        now: Review timestamp
        params: Deck parameters (defaults to the reference set)
        seed: Fuzz seed; derived from card and `now` when omitted

    Returns:
        ReviewOutcome with the new state and its log entry

    Raises:
        InvalidRating: Rating outside the four grades; nothing is changed
    """
    updated, log_entry = process_review(card, rating, now, params or DEFAULT_PARAMETERS, seed)
    return ReviewOutcome(card=updated, log=log_entry)


def preview_card(
    card: MemoryState,
    now: datetime,
    params: Optional[ParameterSet] = None,
    seed: Optional[Seed] = None
) -> dict[Rating, ReviewOutcome]:
    """
    Preview what each rating would do, e.g. to label answer buttons.

    Args:
        card: Current memory state
        now: Review timestamp
        params: Deck parameters
        seed: Fuzz seed, shared with a following review_card call

    Returns:
        Dictionary mapping each rating to its outcome
    """
    return {
        rating: review_card(card, rating, now, params, seed)
        for rating in Rating
    }


def get_retrievability(card: MemoryState, now: datetime) -> float:
    """
    Current probability of recall for a card.

    New cards have never been studied and report 1.0.
    """
    if card.state == State.NEW or card.last_review is None:
        return 1.0
    return calculate_retrievability(get_elapsed_days(card.last_review, now), card.stability)

