"""
Feed orchestrator: one "fetch more" call: learn, pick phase and filters, retrieve
(with fallback ladder), rank, dedup.

The main entry point is next_feed_batch. State (ledger, session) is owned by the caller
and passed in explicitly. Transport failures never escape: the batch is replaced with a
synthetic one so the stream keeps moving.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

import numpy as np

from ..models.config import FeedConfig, resolve_config
from ..models.engagement import SwipeLedger
from ..models.preferences import DEFAULT_PREFERENCES, LearnedPreferences, UserPreferences
from ..models.scoring import ScoredBoat
from ..models.session import FeedSession
from .learner import learn_preferences
from .mock_catalog import generate_mock_boats
from .phase import EngagementPhase, build_phase_filters, resolve_phase
from .ranking import rank_boats
from .retrieval import CatalogFetchError, CatalogSource, retrieve_page

logger = logging.getLogger(__name__)


@dataclass
class FeedBatch:
    """Result of next_feed_batch plus the decisions that produced it."""

    boats: List[ScoredBoat]
    phase: EngagementPhase
    page: int
    filters: Dict[str, str] = field(default_factory=dict)
    step: str = "primary"
    attempts: int = 0
    fetched_page: Optional[int] = None
    raw_count: int = 0
    synthetic: bool = False
    learned: Optional[LearnedPreferences] = None

    @property
    def end_of_stream(self) -> bool:
        """True when the catalog returned nothing even after the fallback ladder."""
        return self.raw_count == 0 and not self.synthetic


def next_feed_batch(
    source: CatalogSource,
    ledger: SwipeLedger,
    session: FeedSession,
    config: Optional[FeedConfig] = None,
    preferences: UserPreferences = DEFAULT_PREFERENCES,
    rng: Optional[np.random.Generator] = None,
    page: Optional[int] = None,
    now: Optional[datetime] = None,
) -> FeedBatch:
    """
    Produce the next ranked batch for a session.

    page defaults to session.next_page(). rng drives the diversity bonus, jitter and the
    random-page fallback; rng=None disables jitter (random page still uses a fresh generator).
    """
    # Resolve config (use defaults when None)
    config = resolve_config(config)

    # Learn preferences and pick the engagement phase
    learned = learn_preferences(ledger, config)
    phase = resolve_phase(ledger.total_swipes, ledger.likes, learned, config)
    filters = build_phase_filters(phase, learned, config)
    if page is None:
        page = session.next_page()

    # Retrieve, cascading on empty; substitute synthetic data on transport failure
    batch = FeedBatch(boats=[], phase=phase, page=page, filters=filters, learned=learned)
    try:
        result = retrieve_page(source, page, phase, filters, config, rng=rng)
        records = result.records
        batch.filters = result.filters
        batch.step = result.step
        batch.attempts = result.attempts
        batch.fetched_page = result.page
    except CatalogFetchError as e:
        logger.warning(
            "[feed] SYNTHETIC_BATCH page=%d step=%s error=%s", e.page, e.step, e.cause,
        )
        records = generate_mock_boats(page, config.fetch_page_size, preferences)
        batch.synthetic = True
        batch.step = e.step
    batch.raw_count = len(records)

    # Rank, admit and dedup against the session's seen-set
    batch.boats = rank_boats(
        records,
        learned,
        phase,
        seen_ids=session.seen_ids,
        preferences=preferences,
        config=config,
        rng=rng,
        now=now,
    )
    logger.info(
        "[feed] BATCH user=%s phase=%s page=%d step=%s raw=%d returned=%d synthetic=%s",
        session.user_id, phase.value, page, batch.step, batch.raw_count,
        len(batch.boats), batch.synthetic,
    )
    return batch
