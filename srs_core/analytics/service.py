"""
Service layer to assemble deck statistics.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

from srs_core import fsrs
from srs_core.analytics.constants import DEFAULT_FORECAST_DAYS, LEARNED_RETRIEVABILITY
from srs_core.analytics.metrics import (
    build_day_index,
    compute_daily_reviews,
    compute_due_forecast,
    compute_due_now,
    compute_learned_count,
    compute_mean_progress,
    compute_state_counts,
    compute_true_retention,
)
from srs_core.analytics.queries import card_snapshot_frame, review_log_frame
from srs_core.analytics.types import DeckStatistics
from srs_core.fsrs.memory_state import as_utc


def build_deck_statistics(
    cards: Iterable[fsrs.MemoryState],
    log_entries: Iterable[fsrs.ReviewLogEntry],
    now: datetime,
    learned_threshold: float = LEARNED_RETRIEVABILITY,
    forecast_days: int = DEFAULT_FORECAST_DAYS,
) -> DeckStatistics:
    """
    Build the KPI values and series shown on a deck's statistics page.
    """
    now = as_utc(now)
    snapshots_df = card_snapshot_frame(cards, now)
    events_df = review_log_frame(log_entries)
    day_index = build_day_index(events_df)

    return DeckStatistics(
        total_cards=len(snapshots_df),
        state_counts=compute_state_counts(snapshots_df),
        due_now=compute_due_now(snapshots_df, now),
        learned_count=compute_learned_count(snapshots_df, learned_threshold),
        mean_progress=compute_mean_progress(snapshots_df),
        true_retention=compute_true_retention(events_df),
        daily_reviews=compute_daily_reviews(events_df, day_index),
        due_forecast=compute_due_forecast(snapshots_df, now, forecast_days),
    )
