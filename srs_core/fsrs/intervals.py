"""
Interval Planning

Turns a stability value and the target retention into a day count, then
applies the maximum-interval cap and optional fuzz.

Fuzz band:
    No fuzz below 2.5 days. Above that the half-width is

        delta = 1 + sum(factor * overlap(d, band))

    over the bands [2.5, 7) -> 0.15, [7, 20) -> 0.10, [20, inf) -> 0.05,
    and the fuzzed interval is drawn uniformly from the whole days in
    [max(2, round(d - delta)), min(round(d + delta), maximum_interval)].
    A 3-day interval moves at most one day either way; a 100-day interval
    roughly five days.
"""

from __future__ import annotations

import math
import random
from typing import Optional, Union

from srs_core.fsrs.constants import (
    DECAY,
    FACTOR,
    FUZZ_MIN_INTERVAL,
    FUZZ_RANGES,
)
from srs_core.fsrs.memory_state import clamp_stability
from srs_core.fsrs.parameters import ParameterSet


def ideal_interval(
    stability: float,
    request_retention: float,
    decay: float = DECAY,
    factor: float = FACTOR
) -> int:
    """
    Days until retrievability falls to the requested retention.

    Inverse of the forgetting curve:
        I = S / FACTOR * (r ^ (1 / DECAY) - 1)

    With r = 0.9 this gives I = S.

    Args:
        stability: Memory stability in days
        request_retention: Target recall probability, 0 < r < 1
        decay: Forgetting-curve exponent
        factor: Forgetting-curve scale

    Returns:
        Interval in whole days (at least 1)
    """
    stability = clamp_stability(stability)
    days = stability / factor * (request_retention ** (1.0 / decay) - 1.0)
    if not math.isfinite(days):
        return 1
    return max(1, int(round(days)))


def apply_cap(days: float, maximum_interval: int) -> int:
    """Clamp an interval to [1, maximum_interval] whole days."""
    if not math.isfinite(days):
        return maximum_interval if days > 0 else 1
    return int(min(maximum_interval, max(1, round(days))))


def fuzz_delta(days: float) -> float:
    """Half-width of the fuzz band for an interval (0 below 2.5 days)."""
    if days < FUZZ_MIN_INTERVAL:
        return 0.0
    delta = 1.0
    for start, end, factor in FUZZ_RANGES:
        delta += factor * max(min(days, end) - start, 0.0)
    return delta


def fuzz_range(days: float, maximum_interval: int) -> tuple[int, int]:
    """
    Whole-day range a fuzzed interval may fall in.

    Args:
        days: Unfuzzed interval
        maximum_interval: Deck cap

    Returns:
        (min_days, max_days), both inside [1, maximum_interval]
    """
    if days < FUZZ_MIN_INTERVAL:
        capped = apply_cap(days, maximum_interval)
        return capped, capped

    delta = fuzz_delta(days)
    min_days = max(2, int(round(days - delta)))
    max_days = min(int(round(days + delta)), maximum_interval)
    min_days = min(min_days, max_days)
    return max(1, min_days), max(1, max_days)


def apply_fuzz(
    days: int,
    enable_fuzz: bool,
    rng_seed: Optional[Union[int, str]],
    maximum_interval: int
) -> int:
    """
    Randomly spread an interval inside its fuzz band.

    The same seed always gives the same result. Output stays inside
    [1, maximum_interval].

    Args:
        days: Interval to fuzz (already capped)
        enable_fuzz: Fuzz switch from the ParameterSet
        rng_seed: Seed for random.Random
        maximum_interval: Deck cap

    Returns:
        Fuzzed interval in whole days
    """
    if not enable_fuzz or days < FUZZ_MIN_INTERVAL:
        return apply_cap(days, maximum_interval)

    min_days, max_days = fuzz_range(days, maximum_interval)
    rng = random.Random(rng_seed)
    return rng.randint(min_days, max_days)


def next_interval(
    stability: float,
    params: ParameterSet,
    rng_seed: Optional[Union[int, str]] = None
) -> int:
    """
    Full planning pipeline: ideal interval, cap, then fuzz.

    Args:
        stability: Memory stability in days
        params: Deck parameters
        rng_seed: Seed for the fuzz draw

    Returns:
        Interval in whole days inside [1, params.maximum_interval]
    """
    days = ideal_interval(stability, params.request_retention, params.decay, params.factor)
    days = apply_cap(days, params.maximum_interval)
    return apply_fuzz(days, params.enable_fuzz, rng_seed, params.maximum_interval)
