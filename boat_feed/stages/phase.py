"""
Engagement phase and phase-specific catalog filters.

The phase is chosen from cumulative swipe counts; each phase builds a fresh filter
set for the catalog (filter-key -> string value).
"""

import logging
import math
from enum import Enum
from typing import Dict, Optional

from ..models.config import DEFAULT_CONFIG, FeedConfig
from ..models.preferences import LearnedPreferences

logger = logging.getLogger(__name__)


class EngagementPhase(str, Enum):
    EXPLORATION = "exploration"
    DEFAULT = "default"
    PERSONALIZED = "personalized"


def resolve_phase(
    total_swipes: int,
    likes: int,
    learned: Optional[LearnedPreferences],
    config: FeedConfig = DEFAULT_CONFIG,
) -> EngagementPhase:
    """
    EXPLORATION below the swipe limit; PERSONALIZED once enough likes and learned
    preferences exist; DEFAULT in between or when personalization is unavailable.
    """
    if total_swipes < config.exploration_swipe_limit:
        return EngagementPhase.EXPLORATION
    if learned is not None and likes >= config.personalized_min_likes:
        return EngagementPhase.PERSONALIZED
    return EngagementPhase.DEFAULT


def _format_number(value: float) -> str:
    """Integral values without a decimal point, others with one decimal."""
    return str(int(value)) if float(value).is_integer() else f"{value:.1f}"


def _personalized_filters(learned: LearnedPreferences, config: FeedConfig) -> Dict[str, str]:
    filters: Dict[str, str] = {}
    if learned.average_price > 0:
        filters["priceFrom"] = str(math.floor(learned.average_price * (1 - config.price_band)))
        filters["priceTo"] = str(math.floor(learned.average_price * (1 + config.price_band)))
    if learned.average_length > 0:
        filters["lengthFrom"] = f"{learned.average_length * (1 - config.length_band):.1f}"
        filters["lengthTo"] = f"{learned.average_length * (1 + config.length_band):.1f}"
    if learned.average_year > config.year_floor_min_average:
        filters["yearFrom"] = str(round(learned.average_year) - config.year_relaxation)
    if learned.preferred_types:
        filters["boatType"] = learned.preferred_types[0]
    return filters


def build_phase_filters(
    phase: EngagementPhase,
    learned: Optional[LearnedPreferences],
    config: FeedConfig = DEFAULT_CONFIG,
) -> Dict[str, str]:
    """Build the filter set for the first retrieval attempt of a call."""
    if phase is EngagementPhase.EXPLORATION:
        filters = {"lengthTo": _format_number(config.exploration_max_length)}
    elif phase is EngagementPhase.PERSONALIZED and learned is not None:
        filters = _personalized_filters(learned, config)
    else:
        filters = {}
    logger.info("[phase] FILTERS phase=%s filters=%s", phase.value, filters)
    return filters
