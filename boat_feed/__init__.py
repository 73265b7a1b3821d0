"""
Boat Match feed engine: adaptive retrieval and ranking for a swipe-driven boat stream.

Single entry point for the engine package:
- models/: FeedConfig, Boat, SwipeLedger, DailyLikeCounter, preferences, FeedSession
- stages/: learner, phase filters, retrieval ladder, ranking, orchestrator
- utils/: decay curves and time helpers
"""

from .models.boat import Boat, parse_boats
from .models.config import DEFAULT_CONFIG, FeedConfig, resolve_config
from .models.engagement import DailyLikeCounter, SwipeDirection, SwipeEvent, SwipeLedger
from .models.preferences import DEFAULT_PREFERENCES, LearnedPreferences, UserPreferences
from .models.scoring import ScoredBoat
from .models.session import FeedSession
from .stages.learner import learn_preferences
from .stages.mock_catalog import generate_mock_boats
from .stages.orchestrator import FeedBatch, next_feed_batch
from .stages.phase import EngagementPhase, build_phase_filters, resolve_phase
from .stages.ranking import get_badges, rank_boats, score_boat
from .stages.retrieval import (
    CatalogFetchError,
    CatalogSource,
    CatalogUnavailableError,
    retrieve_page,
)

__all__ = [
    "Boat",
    "CatalogFetchError",
    "CatalogSource",
    "CatalogUnavailableError",
    "DEFAULT_CONFIG",
    "DEFAULT_PREFERENCES",
    "DailyLikeCounter",
    "EngagementPhase",
    "FeedBatch",
    "FeedConfig",
    "FeedSession",
    "LearnedPreferences",
    "ScoredBoat",
    "SwipeDirection",
    "SwipeEvent",
    "SwipeLedger",
    "UserPreferences",
    "build_phase_filters",
    "generate_mock_boats",
    "get_badges",
    "learn_preferences",
    "next_feed_batch",
    "parse_boats",
    "rank_boats",
    "resolve_config",
    "resolve_phase",
    "retrieve_page",
    "score_boat",
]
