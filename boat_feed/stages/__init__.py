"""Pipeline stages: learner, phase filters, retrieval ladder, ranking, feed orchestration."""

from .learner import learn_preferences
from .mock_catalog import generate_mock_boats
from .orchestrator import FeedBatch, next_feed_batch
from .phase import EngagementPhase, build_phase_filters, resolve_phase
from .ranking import get_badges, rank_boats, score_boat
from .retrieval import (
    FALLBACK_LADDER,
    CatalogFetchError,
    CatalogSource,
    CatalogUnavailableError,
    RetrievalResult,
    RetrievalStep,
    retrieve_page,
)

__all__ = [
    "CatalogFetchError",
    "CatalogSource",
    "CatalogUnavailableError",
    "EngagementPhase",
    "FALLBACK_LADDER",
    "FeedBatch",
    "RetrievalResult",
    "RetrievalStep",
    "build_phase_filters",
    "generate_mock_boats",
    "get_badges",
    "learn_preferences",
    "next_feed_batch",
    "rank_boats",
    "resolve_phase",
    "retrieve_page",
    "score_boat",
]
