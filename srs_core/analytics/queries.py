"""
Dataframe builders for deck statistics.

Cards and review logs come from the caller's storage; these helpers only
reshape them.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable

import pandas as pd

from srs_core import fsrs
from srs_core.analytics.constants import EVENT_COLUMNS, SNAPSHOT_COLUMNS


def review_log_frame(entries: Iterable[fsrs.ReviewLogEntry]) -> pd.DataFrame:
    """
    Load review log entries into a dataframe sorted by review time.
    """
    rows = [entry.to_dict() for entry in entries]
    if not rows:
        return pd.DataFrame(columns=EVENT_COLUMNS)

    df = pd.DataFrame(rows)
    df["review"] = pd.to_datetime(df["review"], utc=True, errors="coerce")
    df["due"] = pd.to_datetime(df["due"], utc=True, errors="coerce")
    df = df.dropna(subset=["review"])
    df["day_utc"] = df["review"].dt.floor("D")
    df = df.sort_values("review").reset_index(drop=True)
    return df[EVENT_COLUMNS]


def card_snapshot_frame(
    cards: Iterable[fsrs.MemoryState],
    now: datetime
) -> pd.DataFrame:
    """
    Current card states plus their retrievability at `now`.
    """
    rows = []
    for card in cards:
        row = card.to_dict()
        row["retrievability"] = fsrs.get_retrievability(card, now)
        rows.append(row)

    if not rows:
        return pd.DataFrame(columns=SNAPSHOT_COLUMNS)

    df = pd.DataFrame(rows)
    df["due"] = pd.to_datetime(df["due"], utc=True, errors="coerce")
    return df[SNAPSHOT_COLUMNS]
