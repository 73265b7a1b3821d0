"""
Feed configuration: phase thresholds, fallback ladder, ranking and jitter parameters.

FeedConfig defaults are defined here. The server may pass a dict
(e.g. from a JSON file named by FEED_CONFIG_PATH); from_dict() merges it with these defaults.
"""

from typing import Dict, Optional

from pydantic import BaseModel, model_validator


class FeedConfig(BaseModel):
    """Configuration for the adaptive boat feed."""

    # -------------------------------------------------------------------------
    # Engagement phases
    # -------------------------------------------------------------------------

    # Below this many total swipes the feed is in EXPLORATION.
    exploration_swipe_limit: int = 30
    # Likes required (together with learned preferences) to enter PERSONALIZED.
    personalized_min_likes: int = 5
    # Coarse cap applied during EXPLORATION (metres). Keeps early boats approachable.
    exploration_max_length: float = 15.0

    # -------------------------------------------------------------------------
    # Preference learning
    # -------------------------------------------------------------------------

    # Minimum accepted swipes before learned preferences are returned at all.
    learner_min_likes: int = 3
    # Bounded ledger: oldest swipes are dropped beyond this many.
    ledger_capacity: int = 500

    # -------------------------------------------------------------------------
    # Personalized filter bands
    # priceFrom = avg * (1 - price_band), priceTo = avg * (1 + price_band)
    # -------------------------------------------------------------------------

    price_band: float = 0.6
    length_band: float = 0.4
    # yearFrom = learned average year - year_relaxation (only if avg > year_floor_min_average).
    year_relaxation: int = 20
    year_floor_min_average: int = 1990

    # -------------------------------------------------------------------------
    # Fallback ladder (only when an attempt returns zero boats)
    # -------------------------------------------------------------------------

    # Step 1: near-unconstrained filter set at the same page.
    fallback_price_floor: int = 100_000
    # Step 2: no filters at a random page in [random_page_min, random_page_max].
    random_page_min: int = 1
    random_page_max: int = 20
    # When False, only PERSONALIZED empties cascade (historical behaviour).
    fallback_all_phases: bool = False

    # -------------------------------------------------------------------------
    # Ranking pipeline
    # final = base_score + uniform(0, 1) * jitter_base * jitter_factor[phase]
    # -------------------------------------------------------------------------

    jitter_base: float = 200.0
    jitter_factor_exploration: float = 1.5
    jitter_factor_default: float = 0.8
    jitter_factor_personalized: float = 0.2

    # Admission threshold on the base score (pre-jitter).
    min_score_exploration: float = 5.0
    min_score_default: float = 20.0

    # Boats returned per call.
    page_size_exploration: int = 12
    page_size_default: int = 20

    # Raw page size requested from the catalog.
    fetch_page_size: int = 50

    # -------------------------------------------------------------------------
    # Scoring
    # -------------------------------------------------------------------------

    # Returned by hard filters; must dominate any sum of soft bonuses.
    excluded_score: float = -1000.0
    # Ceiling of the per-boat diversity bonus added inside score_boat.
    diversity_bonus_max: float = 8.0

    # -------------------------------------------------------------------------
    # Caller-facing engagement limits
    # -------------------------------------------------------------------------

    daily_like_cap: int = 10
    refill_low_water_mark: int = 5

    @model_validator(mode="after")
    def check_ranges(self):
        if self.personalized_min_likes <= 0:
            raise ValueError("personalized_min_likes must be positive")
        if self.page_size_exploration < 1 or self.page_size_default < 1:
            raise ValueError("page sizes must be at least 1")
        factors = (
            self.jitter_factor_exploration,
            self.jitter_factor_default,
            self.jitter_factor_personalized,
        )
        if any(f < 0 for f in factors) or self.jitter_base < 0:
            raise ValueError("jitter parameters must be non-negative")
        if self.random_page_max < self.random_page_min or self.random_page_min < 1:
            raise ValueError(
                f"invalid random page range {self.random_page_min}..{self.random_page_max}"
            )
        if self.ledger_capacity < 1:
            raise ValueError("ledger_capacity must be at least 1")
        return self

    @classmethod
    def from_dict(cls, config_dict: Dict) -> "FeedConfig":
        """Create config from dictionary (e.g., loaded from JSON)."""
        flat = {}
        if "phases" in config_dict:
            ph = config_dict["phases"]
            if "exploration_swipes" in ph:
                flat["exploration_swipe_limit"] = ph["exploration_swipes"]
            if "personalized_likes" in ph:
                flat["personalized_min_likes"] = ph["personalized_likes"]
            if "exploration_max_length" in ph:
                flat["exploration_max_length"] = ph["exploration_max_length"]
        if "learning" in config_dict:
            flat.update(config_dict["learning"])
        if "fallback" in config_dict:
            fb = config_dict["fallback"]
            if "price_floor" in fb:
                flat["fallback_price_floor"] = fb["price_floor"]
            if "random_pages" in fb:
                low, high = fb["random_pages"]
                flat["random_page_min"] = low
                flat["random_page_max"] = high
            if "all_phases" in fb:
                flat["fallback_all_phases"] = fb["all_phases"]
        if "jitter" in config_dict:
            jt = config_dict["jitter"]
            if "base" in jt:
                flat["jitter_base"] = jt["base"]
            for phase in ("exploration", "default", "personalized"):
                if phase in jt:
                    flat[f"jitter_factor_{phase}"] = jt[phase]
        if "ranking" in config_dict:
            flat.update(config_dict["ranking"])
        if "engagement" in config_dict:
            flat.update(config_dict["engagement"])
        allowed = set(cls.model_fields)
        filtered = {k: v for k, v in flat.items() if k in allowed}
        return cls.model_validate(filtered)


DEFAULT_CONFIG = FeedConfig()


def resolve_config(config: Optional["FeedConfig"]) -> "FeedConfig":
    """Return config or DEFAULT_CONFIG when none is provided."""
    return config if config is not None else DEFAULT_CONFIG
