"""
Short-Term Memory (STM) Updates

Implements the learning and relearning step ladders.

Cards in Learning or Relearning are re-shown after short delays (minutes)
until they graduate to Review:
- Again resets to the first step
- Hard repeats the current step
- Good moves to the next step, or graduates from the last one
- Easy graduates immediately

A New card enters the ladder on its first answer: Again and Hard start on
the first step, Good starts on the second step (or the only one). Only an
empty ladder lets Good skip Learning.

Key principle:
STM never touches stability. Only Review-state answers (LTM) change it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from srs_core.fsrs.constants import MINUTES_PER_DAY, Rating


@dataclass(frozen=True)
class LadderMove:
    """Where a card goes on its step ladder after one answer."""
    graduate: bool
    step: Optional[int]  # None when graduating
    delay_minutes: float

    @property
    def delay_days(self) -> float:
        return self.delay_minutes / MINUTES_PER_DAY


def step_delay(steps: Sequence[float], step: int) -> float:
    """
    Delay in minutes for a ladder step.

    Out-of-range indexes (the deck's ladder was shortened) use the last
    step; an empty ladder has no delay.
    """
    if not steps:
        return 0.0
    return float(steps[min(max(step, 0), len(steps) - 1)])


def ladder_move(
    steps: Sequence[float],
    step: Optional[int],
    rating: Rating
) -> LadderMove:
    """
    Move a card along its learning or relearning ladder.

    Args:
        steps: Ladder delays in minutes (may be empty)
        step: Current step index (None is treated as the first step)
        rating: User feedback

    Returns:
        LadderMove with the new step and its delay, or a graduation
    """
    current = 0 if step is None else min(max(step, 0), max(len(steps) - 1, 0))

    if rating == Rating.AGAIN:
        return LadderMove(graduate=False, step=0, delay_minutes=step_delay(steps, 0))

    if rating == Rating.HARD:
        return LadderMove(graduate=False, step=current, delay_minutes=step_delay(steps, current))

    if rating == Rating.GOOD:
        following = current + 1
        if following >= len(steps):
            return LadderMove(graduate=True, step=None, delay_minutes=0.0)
        return LadderMove(graduate=False, step=following, delay_minutes=step_delay(steps, following))

    return LadderMove(graduate=True, step=None, delay_minutes=0.0)


def entry_move(steps: Sequence[float], rating: Rating) -> LadderMove:
    """
    Ladder entry for the first answer to a New card.

    Good lands on step min(1, len(steps) - 1), so a one-step ladder still
    shows the card once more before it graduates.
    """
    if rating == Rating.EASY or (rating == Rating.GOOD and not steps):
        return LadderMove(graduate=True, step=None, delay_minutes=0.0)

    step = min(1, len(steps) - 1) if rating == Rating.GOOD else 0
    return LadderMove(graduate=False, step=step, delay_minutes=step_delay(steps, step))


def lapse_move(relearning_steps: Sequence[float]) -> LadderMove:
    """Ladder entry for a Review card answered Again."""
    return ladder_move(relearning_steps, 0, Rating.AGAIN)
