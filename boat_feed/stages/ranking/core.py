"""
Main ranking orchestration: normalize, score, jitter, sort, admit, truncate, dedup.

Jitter magnitude depends on the engagement phase so randomness dominates early and
learned preference dominates once enough signal exists.
Submodules used: normalize, scoring.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Set, Union

import numpy as np

from ...models.boat import Boat, parse_boats
from ...models.config import DEFAULT_CONFIG, FeedConfig
from ...models.preferences import DEFAULT_PREFERENCES, LearnedPreferences, UserPreferences
from ...models.scoring import ScoredBoat
from ..phase import EngagementPhase
from .normalize import normalize_batch
from .scoring import score_batch

logger = logging.getLogger(__name__)


def jitter_magnitude(phase: EngagementPhase, config: FeedConfig = DEFAULT_CONFIG) -> float:
    """Upper bound of the jitter added to sort keys in this phase."""
    factor = {
        EngagementPhase.EXPLORATION: config.jitter_factor_exploration,
        EngagementPhase.DEFAULT: config.jitter_factor_default,
        EngagementPhase.PERSONALIZED: config.jitter_factor_personalized,
    }[phase]
    return config.jitter_base * factor


def admission_threshold(phase: EngagementPhase, config: FeedConfig = DEFAULT_CONFIG) -> float:
    if phase is EngagementPhase.EXPLORATION:
        return config.min_score_exploration
    return config.min_score_default


def page_limit(phase: EngagementPhase, config: FeedConfig = DEFAULT_CONFIG) -> int:
    if phase is EngagementPhase.EXPLORATION:
        return config.page_size_exploration
    return config.page_size_default


def _admit(
    ranked: List[ScoredBoat],
    phase: EngagementPhase,
    config: FeedConfig,
) -> List[ScoredBoat]:
    """
    Keep boats whose base score clears the phase threshold, up to the page limit.
    When none clear it, fall back to the top of the sorted list so the page is never empty.
    """
    limit = page_limit(phase, config)
    threshold = admission_threshold(phase, config)
    admitted = [s for s in ranked if s.base_score >= threshold]
    if admitted:
        return admitted[:limit]
    logger.info(
        "[ranking] ADMISSION_FALLBACK phase=%s threshold=%s candidates=%d",
        phase.value, threshold, len(ranked),
    )
    return ranked[:limit]


def _dedup_seen(selected: List[ScoredBoat], seen_ids: Optional[Set[str]]) -> List[ScoredBoat]:
    if seen_ids is None:
        return selected
    out = []
    for scored in selected:
        boat_id = scored.boat.boat_id
        if boat_id in seen_ids:
            continue
        seen_ids.add(boat_id)
        out.append(scored)
    return out


def rank_boats(
    raw_batch: List[Union[Dict[str, Any], Boat]],
    learned: Optional[LearnedPreferences],
    phase: EngagementPhase,
    seen_ids: Optional[Set[str]] = None,
    preferences: UserPreferences = DEFAULT_PREFERENCES,
    config: FeedConfig = DEFAULT_CONFIG,
    rng: Optional[np.random.Generator] = None,
    now: Optional[datetime] = None,
) -> List[ScoredBoat]:
    """
    Rank a raw catalog batch into the boats to hand to the UI.

    1) parse and normalize (malformed records and repeated ids dropped)
    2) base score per boat
    3) jitter in [0, jitter_magnitude(phase)); zero when rng is None
    4) sort by base + jitter, descending
    5) admission threshold on the base score, with top-N fallback; truncate to page limit
    6) drop ids already in seen_ids and add the rest to it (seen_ids is mutated)
    """
    # 1) Normalize
    boats = normalize_batch(parse_boats(raw_batch))
    if not boats:
        return []

    # 2) Base scores
    now = now or datetime.now(timezone.utc)
    base_scores = score_batch(boats, learned, preferences, config, rng=rng, now=now)

    # 3) Phase-scaled jitter
    magnitude = jitter_magnitude(phase, config)
    if rng is not None and magnitude > 0:
        jitters = (rng.random(len(boats)) * magnitude).tolist()
    else:
        jitters = [0.0] * len(boats)

    scored = [
        ScoredBoat(boat=b, base_score=s, jitter=j)
        for b, s, j in zip(boats, base_scores, jitters)
    ]

    # 4) Sort by final score
    scored.sort(key=lambda s: s.final_score, reverse=True)

    # 5) Admission threshold + truncation
    selected = _admit(scored, phase, config)

    # 6) Cross-call dedup
    result = _dedup_seen(selected, seen_ids)
    logger.info(
        "[ranking] RANKED phase=%s input=%d scored=%d selected=%d returned=%d",
        phase.value, len(raw_batch), len(scored), len(selected), len(result),
    )
    return result
