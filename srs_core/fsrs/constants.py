"""
FSRS Constants and Parameters

Enums, reference weights and numeric bounds for the scheduler in one place.
The weight vector is the published FSRS-4.5 default set.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Final


# ---- Ratings ----

class Rating(IntEnum):
    """User feedback on a recall attempt."""
    AGAIN = 1   # Recall failed
    HARD = 2    # Recalled with high effort
    GOOD = 3    # Recalled normally
    EASY = 4    # Recalled fluently


# ---- Scheduling phases ----

class State(IntEnum):
    """Scheduling phase of a card."""
    NEW = 0
    LEARNING = 1
    REVIEW = 2
    RELEARNING = 3


# ---- Reference weights ----

WEIGHT_COUNT: Final[int] = 17

DEFAULT_WEIGHTS: Final[tuple[float, ...]] = (
    0.4872,   # w0: initial stability for AGAIN
    1.4003,   # w1: initial stability for HARD
    3.7145,   # w2: initial stability for GOOD
    13.8206,  # w3: initial stability for EASY
    5.1618,   # w4: initial difficulty for GOOD
    1.2298,   # w5: initial difficulty slope per rating
    0.8975,   # w6: difficulty change per rating
    0.031,    # w7: mean reversion toward w4
    1.6474,   # w8: recall stability scale (exp)
    0.1367,   # w9: recall stability saturation
    1.0461,   # w10: recall stability gain from low R
    2.1072,   # w11: forget stability scale
    0.0793,   # w12: forget stability difficulty exponent
    0.3246,   # w13: forget stability prior-stability exponent
    1.587,    # w14: forget stability gain from low R
    0.2272,   # w15: hard penalty
    2.8755,   # w16: easy bonus
)


# ---- Forgetting curve ----
# R(t, S) = (1 + FACTOR * t / S) ** DECAY, so that R(S, S) == 0.9

DECAY: Final[float] = -0.5
FACTOR: Final[float] = 0.9 ** (1.0 / DECAY) - 1.0  # 19/81


# ---- Bounds ----

S_MIN: Final[float] = 0.01      # Minimum stability (days)
S_MAX: Final[float] = 36500.0   # Ceiling used when a computation blows up
D_MIN: Final[float] = 1.0       # Minimum difficulty
D_MAX: Final[float] = 10.0      # Maximum difficulty

# Smallest relative stability gain on a successful review
MIN_RECALL_GROWTH: Final[float] = 0.01

# Smallest relative stability loss on a lapse
MIN_LAPSE_SHRINK: Final[float] = 0.01


# ---- Deck defaults ----

DEFAULT_REQUEST_RETENTION: Final[float] = 0.9
DEFAULT_MAXIMUM_INTERVAL: Final[int] = 36500
DEFAULT_ENABLE_FUZZ: Final[bool] = True
DEFAULT_LEARNING_STEPS: Final[tuple[float, ...]] = (1.0, 10.0)   # minutes
DEFAULT_RELEARNING_STEPS: Final[tuple[float, ...]] = (10.0,)     # minutes
DEFAULT_GRADUATING_INTERVAL: Final[int] = 1   # days
DEFAULT_EASY_INTERVAL: Final[int] = 4         # days


# ---- Fuzz ----
# (start, end, factor): each band adds factor * overlap to the fuzz half-width

FUZZ_MIN_INTERVAL: Final[float] = 2.5
FUZZ_RANGES: Final[tuple[tuple[float, float, float], ...]] = (
    (2.5, 7.0, 0.15),
    (7.0, 20.0, 0.10),
    (20.0, float("inf"), 0.05),
)

MINUTES_PER_DAY: Final[float] = 1440.0
SECONDS_PER_DAY: Final[float] = 86400.0
