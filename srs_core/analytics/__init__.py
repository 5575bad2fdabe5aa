"""
Analytics package exports.
"""

from srs_core.analytics.constants import DEFAULT_FORECAST_DAYS, LEARNED_RETRIEVABILITY
from srs_core.analytics.metrics import compute_card_progress
from srs_core.analytics.queries import card_snapshot_frame, review_log_frame
from srs_core.analytics.service import build_deck_statistics
from srs_core.analytics.types import DeckStatistics

__all__ = [
    "DEFAULT_FORECAST_DAYS",
    "LEARNED_RETRIEVABILITY",
    "build_deck_statistics",
    "compute_card_progress",
    "card_snapshot_frame",
    "review_log_frame",
    "DeckStatistics",
]
