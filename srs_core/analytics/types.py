"""
Types for deck statistics.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd


@dataclass(frozen=True)
class DeckStatistics:
    """
    Precomputed metrics and series for one deck.
    """
    total_cards: int
    state_counts: dict[str, int]
    due_now: int
    learned_count: int
    mean_progress: Optional[float]
    true_retention: Optional[float]
    daily_reviews: pd.Series
    due_forecast: pd.Series
