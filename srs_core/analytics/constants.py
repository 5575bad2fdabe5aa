"""
Constants for deck statistics.
"""

from __future__ import annotations

from typing import Final


# A card counts as learned when its current retrievability reaches this level
LEARNED_RETRIEVABILITY: Final[float] = 0.9

DEFAULT_FORECAST_DAYS: Final[int] = 30

# Card progress saturates at this stability (days) and this many reviews
PROGRESS_STABILITY_DAYS: Final[float] = 100.0
PROGRESS_REPS: Final[int] = 10

EVENT_COLUMNS: Final[list[str]] = [
    "review",
    "day_utc",
    "rating",
    "previous_state",
    "state",
    "elapsed_days",
    "scheduled_days",
    "stability",
    "difficulty",
    "due",
]

SNAPSHOT_COLUMNS: Final[list[str]] = [
    "state",
    "due",
    "stability",
    "difficulty",
    "reps",
    "lapses",
    "retrievability",
]
