"""
Ranking pipeline: normalize, score, jitter, admit and dedup a raw catalog batch.

Public API: rank_boats, score_boat, get_badges.
- core: main orchestration (rank_boats).
- Submodules: normalize, scoring, badges.
"""

from .badges import get_badges
from .core import admission_threshold, jitter_magnitude, page_limit, rank_boats
from .normalize import normalize_boat, upgrade_image_url
from .scoring import score_boat, score_components

__all__ = [
    "admission_threshold",
    "get_badges",
    "jitter_magnitude",
    "normalize_boat",
    "page_limit",
    "rank_boats",
    "score_boat",
    "score_components",
    "upgrade_image_url",
]
