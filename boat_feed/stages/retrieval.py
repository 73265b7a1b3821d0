"""
Retrieval orchestrator: fetch one catalog page, cascading through a fallback ladder
when the filtered query comes back empty.

The ladder is an explicit ordered list of (filter builder, page policy) steps. Attempts
run one after another, never concurrently, since each depends on the previous result.
An empty result after every step is a legitimate end of stream, not an error.

The public entry point is retrieve_page.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence

import numpy as np

from ..models.config import DEFAULT_CONFIG, FeedConfig
from .phase import EngagementPhase

logger = logging.getLogger(__name__)


class CatalogUnavailableError(Exception):
    """Transport or remote failure talking to the catalog (as opposed to an empty page)."""


class CatalogFetchError(Exception):
    """A retrieval attempt failed in transport; carries the page and ladder step."""

    def __init__(self, page: int, step: str, cause: Exception):
        super().__init__(f"catalog fetch failed at page={page} step={step}: {cause}")
        self.page = page
        self.step = step
        self.cause = cause


class CatalogSource(Protocol):
    """Protocol for the remote boat catalog. Implement for HTTP or a local file."""

    def fetch_page(
        self,
        page: int,
        page_size: int,
        filters: Mapping[str, str],
    ) -> List[Dict[str, Any]]:
        """
        Return raw records for a 1-based page. Unknown filter keys are passed through
        to the catalog untouched. Raise CatalogUnavailableError on transport failure.
        """
        ...

    def fetch_detail(self, boat_id: str) -> Optional[Dict[str, Any]]:
        """Full record for one boat, or None when unavailable."""
        ...


FilterBuilder = Callable[[Mapping[str, str], FeedConfig], Dict[str, str]]
PagePolicy = Callable[[int, FeedConfig, Optional[np.random.Generator]], int]


@dataclass(frozen=True)
class RetrievalStep:
    """One rung of the ladder: how to derive filters and which page to ask for."""

    name: str
    build_filters: FilterBuilder
    choose_page: PagePolicy


def _keep_filters(filters: Mapping[str, str], config: FeedConfig) -> Dict[str, str]:
    return dict(filters)


def _relaxed_filters(filters: Mapping[str, str], config: FeedConfig) -> Dict[str, str]:
    return {"priceFrom": str(config.fallback_price_floor)}


def _no_filters(filters: Mapping[str, str], config: FeedConfig) -> Dict[str, str]:
    return {}


def _same_page(page: int, config: FeedConfig, rng: Optional[np.random.Generator]) -> int:
    return page


def _random_page(page: int, config: FeedConfig, rng: Optional[np.random.Generator]) -> int:
    rng = rng if rng is not None else np.random.default_rng()
    return int(rng.integers(config.random_page_min, config.random_page_max + 1))


PRIMARY_STEP = RetrievalStep("primary", _keep_filters, _same_page)

FALLBACK_LADDER: Sequence[RetrievalStep] = (
    RetrievalStep("relaxed", _relaxed_filters, _same_page),
    RetrievalStep("random_page", _no_filters, _random_page),
)


@dataclass
class RetrievalResult:
    """Outcome of retrieve_page: the records and the attempt that produced them."""

    records: List[Dict[str, Any]]
    page: int
    filters: Dict[str, str]
    step: str
    attempts: int = 1
    tried: List[str] = field(default_factory=list)

    @property
    def used_fallback(self) -> bool:
        return self.step != PRIMARY_STEP.name


def cascades_on_empty(phase: EngagementPhase, config: FeedConfig) -> bool:
    """Whether an empty first attempt in this phase walks the fallback ladder."""
    return phase is EngagementPhase.PERSONALIZED or config.fallback_all_phases


def _attempt(
    source: CatalogSource,
    step: RetrievalStep,
    page: int,
    page_size: int,
    filters: Dict[str, str],
) -> List[Dict[str, Any]]:
    try:
        # Pass a copy so the source cannot mutate the caller's filter set.
        return list(source.fetch_page(page, page_size, dict(filters)) or [])
    except CatalogUnavailableError as e:
        logger.warning(
            "[retrieval] FETCH_FAILED step=%s page=%d filters=%s error=%s",
            step.name, page, filters, e,
        )
        raise CatalogFetchError(page, step.name, e) from e


def retrieve_page(
    source: CatalogSource,
    page: int,
    phase: EngagementPhase,
    filters: Mapping[str, str],
    config: FeedConfig = DEFAULT_CONFIG,
    rng: Optional[np.random.Generator] = None,
    page_size: Optional[int] = None,
    ladder: Sequence[RetrievalStep] = FALLBACK_LADDER,
) -> RetrievalResult:
    """
    Fetch page with the phase filters; on an empty result (when the phase cascades)
    try each ladder step once, in order, until one yields records.

    Raises CatalogFetchError if any attempt fails in transport.
    """
    page_size = page_size or config.fetch_page_size
    steps = [PRIMARY_STEP]
    if cascades_on_empty(phase, config):
        steps.extend(ladder)

    tried: List[str] = []
    step_page, step_filters = page, dict(filters)
    for step in steps:
        step_filters = step.build_filters(filters, config)
        step_page = step.choose_page(page, config, rng)
        tried.append(step.name)
        records = _attempt(source, step, step_page, page_size, step_filters)
        if records:
            if step is not PRIMARY_STEP:
                logger.warning(
                    "[retrieval] FALLBACK_HIT step=%s page=%d records=%d",
                    step.name, step_page, len(records),
                )
            return RetrievalResult(
                records=records,
                page=step_page,
                filters=step_filters,
                step=step.name,
                attempts=len(tried),
                tried=tried,
            )
        logger.warning(
            "[retrieval] EMPTY_PAGE phase=%s page=%d step=%s filters=%s",
            phase.value, step_page, step.name, step_filters,
        )

    return RetrievalResult(
        records=[],
        page=step_page,
        filters=step_filters,
        step=tried[-1],
        attempts=len(tried),
        tried=tried,
    )
