"""
Preference learner: derive LearnedPreferences from the swipe ledger.

Pure function of the events passed in. Returns None until enough swipes were
accepted to say anything about the user ("no personalization yet").
"""

from collections import Counter
from typing import Iterable, List, Optional, Union

from ..models.config import DEFAULT_CONFIG, FeedConfig
from ..models.engagement import SwipeEvent, SwipeLedger
from ..models.preferences import LearnedPreferences


def _rank_by_frequency(values: Iterable[str], min_count: int = 1) -> List[str]:
    """Values ordered by descending count; ties keep first-observed order."""
    # Counter preserves insertion order and sorted() is stable.
    counts = Counter(v for v in values if v)
    ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [value for value, count in ranked if count >= min_count]


def _average(values: Iterable[Optional[float]]) -> float:
    """Mean over positive values; 0 when there are none."""
    positives = [float(v) for v in values if v is not None and v > 0]
    return sum(positives) / len(positives) if positives else 0.0


def _family_tokens(likes: List[SwipeEvent]) -> List[str]:
    tokens = []
    for like in likes:
        if like.boat.boat_family:
            tokens.extend(t.strip() for t in like.boat.boat_family.split(",") if t.strip())
    return tokens


def learn_preferences(
    ledger: Union[SwipeLedger, Iterable[SwipeEvent]],
    config: FeedConfig = DEFAULT_CONFIG,
) -> Optional[LearnedPreferences]:
    """
    Learn ranked affinities and averages from accepted swipes.

    Brands, types and countries are ranked by raw frequency (top-1 is used as a
    primary filter). Family tags are split on commas and only kept when seen more
    than once, to suppress noise in the secondary ranking.
    """
    events = ledger.events() if isinstance(ledger, SwipeLedger) else list(ledger)
    likes = [e for e in events if e.accepted]
    if len(likes) < config.learner_min_likes:
        return None

    return LearnedPreferences(
        preferred_brands=_rank_by_frequency(like.boat.builder for like in likes),
        preferred_types=_rank_by_frequency(like.boat.boat_type for like in likes),
        preferred_families=_rank_by_frequency(_family_tokens(likes), min_count=2),
        preferred_countries=_rank_by_frequency(like.boat.country for like in likes),
        average_price=_average(like.boat.price for like in likes),
        average_length=_average(like.boat.length for like in likes),
        average_year=_average(like.boat.year_built for like in likes),
        accepted_count=len(likes),
        confident=len(likes) >= config.personalized_min_likes,
    )
