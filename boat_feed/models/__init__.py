"""Data models for the boat feed."""

from .boat import Boat, BoatEngine, BoatImage, parse_boats
from .config import DEFAULT_CONFIG, FeedConfig, resolve_config
from .engagement import (
    BoatSnapshot,
    DailyLikeCounter,
    SwipeDirection,
    SwipeEvent,
    SwipeLedger,
    SwipeStats,
)
from .preferences import DEFAULT_PREFERENCES, LearnedPreferences, UserPreferences
from .scoring import ScoredBoat
from .session import FeedSession

__all__ = [
    "Boat",
    "BoatEngine",
    "BoatImage",
    "BoatSnapshot",
    "DEFAULT_CONFIG",
    "DEFAULT_PREFERENCES",
    "DailyLikeCounter",
    "FeedConfig",
    "FeedSession",
    "LearnedPreferences",
    "ScoredBoat",
    "SwipeDirection",
    "SwipeEvent",
    "SwipeLedger",
    "SwipeStats",
    "UserPreferences",
    "parse_boats",
    "resolve_config",
]
