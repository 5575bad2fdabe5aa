"""
Metric computations for deck statistics.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

import pandas as pd

from srs_core import fsrs
from srs_core.analytics.constants import PROGRESS_REPS, PROGRESS_STABILITY_DAYS


def build_day_index(events_df: pd.DataFrame) -> pd.DatetimeIndex:
    """
    Build a dense UTC day index spanning the event range.
    """
    if events_df.empty:
        return pd.DatetimeIndex([], tz="UTC")
    start = events_df["day_utc"].min()
    end = events_df["day_utc"].max()
    return pd.date_range(start=start, end=end, freq="D")


def compute_daily_reviews(
    events_df: pd.DataFrame,
    day_index: pd.DatetimeIndex
) -> pd.Series:
    """
    Number of reviews per UTC day, zero-filled across the index.
    """
    if events_df.empty or len(day_index) == 0:
        return pd.Series(dtype="int64")

    daily = events_df.groupby("day_utc").size()
    return daily.reindex(day_index, fill_value=0).astype("int64")


def compute_true_retention(events_df: pd.DataFrame) -> Optional[float]:
    """
    Share of passed answers among reviews of cards that were in Review.

    Learning-step answers are excluded: they measure short-term recall.
    """
    if events_df.empty:
        return None

    scoped = events_df[events_df["previous_state"] == fsrs.State.REVIEW.name]
    if scoped.empty:
        return None
    return float((scoped["rating"] != int(fsrs.Rating.AGAIN)).mean())


def compute_state_counts(snapshots_df: pd.DataFrame) -> dict[str, int]:
    """
    Number of cards in each scheduling state (every state present, zeros included).
    """
    counts = {state.name: 0 for state in fsrs.State}
    if snapshots_df.empty:
        return counts
    for name, count in snapshots_df["state"].value_counts().items():
        counts[str(name)] = int(count)
    return counts


def compute_due_now(snapshots_df: pd.DataFrame, now: datetime) -> int:
    """
    Cards eligible for study at `now`.
    """
    if snapshots_df.empty:
        return 0
    return int((snapshots_df["due"] <= pd.Timestamp(now)).sum())


def compute_due_forecast(
    snapshots_df: pd.DataFrame,
    now: datetime,
    days: int
) -> pd.Series:
    """
    Cards coming due on each of the next `days` days (day 0 = today).

    Overdue cards are counted on day 0. New cards are left out.
    """
    index = pd.RangeIndex(days, name="day")
    if snapshots_df.empty or days <= 0:
        return pd.Series(0, index=index, dtype="int64")

    scheduled = snapshots_df[snapshots_df["state"] != fsrs.State.NEW.name]
    if scheduled.empty:
        return pd.Series(0, index=index, dtype="int64")

    today = pd.Timestamp(now).floor("D")
    offsets = ((scheduled["due"] - today).dt.total_seconds() // 86400).clip(lower=0)
    counts = offsets.astype("int64").value_counts()
    return counts.reindex(index, fill_value=0).astype("int64")


def compute_learned_count(snapshots_df: pd.DataFrame, r_target: float) -> int:
    """
    Learned count where learned == retrievability >= threshold and the card
    has left the New state.
    """
    if snapshots_df.empty:
        return 0
    studied = snapshots_df["state"] != fsrs.State.NEW.name
    return int(((snapshots_df["retrievability"] >= r_target) & studied).sum())


def compute_card_progress(snapshots_df: pd.DataFrame) -> pd.Series:
    """
    Per-card learning progress in [0, 1].

    Average of stability and repetitions, each scaled to its saturation
    point. New cards are 0; Review cards past the stability saturation are 1.
    """
    if snapshots_df.empty:
        return pd.Series(dtype="float64")

    stability_part = (snapshots_df["stability"] / PROGRESS_STABILITY_DAYS).clip(upper=1.0)
    reps_part = (snapshots_df["reps"] / PROGRESS_REPS).clip(upper=1.0)
    progress = (stability_part + reps_part) / 2.0

    mature = (snapshots_df["state"] == fsrs.State.REVIEW.name) & (
        snapshots_df["stability"] > PROGRESS_STABILITY_DAYS
    )
    progress = progress.mask(mature, 1.0)
    progress = progress.mask(snapshots_df["state"] == fsrs.State.NEW.name, 0.0)
    return progress.astype("float64")


def compute_mean_progress(snapshots_df: pd.DataFrame) -> Optional[float]:
    """Average card progress (None for an empty deck)."""
    progress = compute_card_progress(snapshots_df)
    if progress.empty:
        return None
    return float(progress.mean())
