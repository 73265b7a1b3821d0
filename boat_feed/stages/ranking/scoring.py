"""
Per-boat scoring: hard filters, then additive soft signals.

Scores are only meaningful relative to each other. A boat caught by a hard filter gets
config.excluded_score, which sinks it below any plausible sum of soft bonuses without
removing it from the candidate list.
"""

from datetime import datetime, timezone
from typing import Dict, List, Optional

import numpy as np

from ...models.boat import Boat
from ...models.config import DEFAULT_CONFIG, FeedConfig
from ...models.preferences import DEFAULT_PREFERENCES, LearnedPreferences, UserPreferences
from ...utils.scores import days_since, exponential_decay, gaussian_fit, rank_weighted

# Brand: first-ranked brand is worth BRAND_TOP; rank i gets BRAND_TOP / (1 + i * BRAND_FALLOFF).
BRAND_TOP = 50.0
BRAND_FALLOFF = 0.25
LEARNED_BRAND_BOOST = 1.2
DISLIKED_BRAND_PENALTY = 50.0

PRICE_PEAK = 40.0
PRICE_SIGMA_FRACTION = 0.3
DEFAULT_TARGET_PRICE_FRACTION = 0.6
OVER_BUDGET_PENALTY = 30.0
UNDER_FLOOR_PENALTY = 25.0

COUNTRY_TOP = 30.0
COUNTRY_FALLOFF = 0.2

LENGTH_PEAK = 25.0
LENGTH_DECAY_METRES = 8.0
DEFAULT_TARGET_LENGTH = 20.0
OVER_LENGTH_PENALTY = 20.0

DEFAULT_TARGET_YEAR = 2020
YEAR_BONUS_CAP = 20.0
AGE_PENALTY_AFTER_YEARS = 15
UNDER_MIN_YEAR_PENALTY = 15.0


def _confident(learned: Optional[LearnedPreferences]) -> Optional[LearnedPreferences]:
    """Learned preferences whose averages and brand boost may be trusted, else None."""
    return learned if learned is not None and learned.confident else None


def _hard_filtered(boat: Boat, preferences: UserPreferences) -> bool:
    if preferences.exclude_sold and boat.sold:
        return True
    if not preferences.include_charter and boat.charter and not boat.sale:
        return True
    return False


def _brand_affinity(
    boat: Boat,
    learned: Optional[LearnedPreferences],
    preferences: UserPreferences,
) -> float:
    from_learned = bool(learned and learned.preferred_brands)
    ranking = learned.preferred_brands if from_learned else preferences.preferred_brands
    score = 0.0
    if boat.builder and boat.builder in ranking:
        bonus = rank_weighted(ranking.index(boat.builder), BRAND_TOP, BRAND_FALLOFF)
        boosted = from_learned and learned.confident
        score += bonus * (LEARNED_BRAND_BOOST if boosted else 1.0)
    if boat.builder and boat.builder in preferences.disliked_brands:
        score -= DISLIKED_BRAND_PENALTY
    return score


def _price_fit(
    boat: Boat,
    learned: Optional[LearnedPreferences],
    preferences: UserPreferences,
) -> float:
    score = 0.0
    ceiling = preferences.max_price
    if ceiling and boat.sell_price > 0:
        learned = _confident(learned)
        target = (learned.average_price if learned else 0) or ceiling * DEFAULT_TARGET_PRICE_FRACTION
        if boat.sell_price <= ceiling:
            score += gaussian_fit(boat.sell_price, target, ceiling * PRICE_SIGMA_FRACTION, PRICE_PEAK)
        else:
            score -= OVER_BUDGET_PENALTY
    if preferences.min_price and boat.sell_price < preferences.min_price:
        score -= UNDER_FLOOR_PENALTY
    return score


def _location_affinity(
    boat: Boat,
    learned: Optional[LearnedPreferences],
    preferences: UserPreferences,
) -> float:
    ranking = (learned.preferred_countries if learned else None) or preferences.preferred_countries
    country = (boat.country or "").lower()
    iso = (boat.country_iso or "").lower()
    for index, loc in enumerate(ranking):
        needle = loc.lower()
        if needle and ((country and needle in country) or (iso and needle in iso)):
            return rank_weighted(index, COUNTRY_TOP, COUNTRY_FALLOFF)
    return 0.0


def _size_fit(
    boat: Boat,
    learned: Optional[LearnedPreferences],
    preferences: UserPreferences,
) -> float:
    if not boat.length:
        return 0.0
    score = 0.0
    learned = _confident(learned)
    target = (
        (learned.average_length if learned else 0)
        or preferences.min_length
        or DEFAULT_TARGET_LENGTH
    )
    if not preferences.min_length or boat.length >= preferences.min_length:
        score += exponential_decay(boat.length - target, LENGTH_DECAY_METRES, LENGTH_PEAK)
    if preferences.max_length and boat.length > preferences.max_length:
        score -= OVER_LENGTH_PENALTY
    return score


def _year_fit(
    boat: Boat,
    learned: Optional[LearnedPreferences],
    preferences: UserPreferences,
    current_year: int,
) -> float:
    if not boat.year_built:
        return 0.0
    score = 0.0
    learned = _confident(learned)
    target = (learned.average_year if learned else 0) or DEFAULT_TARGET_YEAR
    if boat.year_built >= target:
        score += min(YEAR_BONUS_CAP, (boat.year_built - target + 1) * 2)
    age = current_year - boat.year_built
    if age > AGE_PENALTY_AFTER_YEARS:
        score -= (age - AGE_PENALTY_AFTER_YEARS) * 0.5
    if preferences.min_year and boat.year_built < preferences.min_year:
        score -= UNDER_MIN_YEAR_PENALTY
    return score


def _accommodation(boat: Boat, preferences: UserPreferences) -> float:
    score = 0.0
    if preferences.min_cabins and (boat.cabins or 0) >= preferences.min_cabins:
        score += 8
    if preferences.min_baths and (boat.baths or 0) >= preferences.min_baths:
        score += 7
    return score


def _quality_signals(boat: Boat, preferences: UserPreferences) -> float:
    score = 0.0
    if boat.is_new:
        score += 25 if preferences.only_new else 20
    if boat.highlighted:
        score += 12
    if boat.images_hq:
        score += 5
    if preferences.prefer_with_video and boat.video:
        score += 8
    if preferences.prefer_360_images and boat.images_360:
        score += 6
    if boat.sell_price_reduced:
        score += 15
    if boat.stock:
        score += 5
    return score


def _learned_category_affinity(boat: Boat, learned: Optional[LearnedPreferences]) -> float:
    if learned is None:
        return 0.0
    score = 0.0
    if boat.boat_type and boat.boat_type in learned.preferred_types:
        score += 40
    families = boat.family_tokens()
    if families and any(f in learned.preferred_families for f in families):
        score += 30
    return score


def _mechanical_signals(boat: Boat) -> float:
    score = 0.0
    engines = boat.engines_list or []
    if engines:
        total_hp = boat.total_hp()
        if total_hp > 0 and boat.length:
            power_ratio = total_hp / boat.length
            if power_ratio > 20:
                score += 8
            elif power_ratio > 10:
                score += 4
        for engine in engines:
            if engine.hours is not None:
                if engine.hours < 500:
                    score += 10
                elif engine.hours < 1000:
                    score += 5
            if engine.year_built and engine.year_built >= 2018:
                score += 3

    if boat.range_nm and boat.range_nm > 300:
        score += 8
    if boat.fuel and boat.fuel > 500:
        score += 4
    if boat.water and boat.water > 300:
        score += 2
    if boat.speed_max and boat.speed_max > 30:
        score += 5
    if boat.beam and boat.length and boat.beam / boat.length > 0.23:
        score += 4
    if boat.draft and boat.draft < 2.5:
        score += 4
    if boat.prof_use:
        score += 5
    if boat.generator:
        score += 3
    if boat.max_people and boat.max_people >= 8:
        score += 3

    if boat.hull_material:
        material = boat.hull_material.lower()
        if "carbon" in material:
            score += 10
        elif "fiberglass" in material:
            score += 2

    if boat.vintage:
        score += 6
    if boat.watercraft:
        score += 2
    return score


def _freshness(boat: Boat, now: datetime) -> float:
    if not boat.ins_date:
        return 0.0
    age = days_since(boat.ins_date, now)
    if age is None:
        return 0.0
    if age < 7:
        return 10.0
    if age < 30:
        return 5.0
    return 0.0


def score_components(
    boat: Boat,
    learned: Optional[LearnedPreferences] = None,
    preferences: UserPreferences = DEFAULT_PREFERENCES,
    now: Optional[datetime] = None,
) -> Dict[str, float]:
    """Deterministic soft-signal breakdown (no hard filters, no diversity bonus)."""
    now = now or datetime.now(timezone.utc)
    return {
        "brand": _brand_affinity(boat, learned, preferences),
        "price": _price_fit(boat, learned, preferences),
        "location": _location_affinity(boat, learned, preferences),
        "size": _size_fit(boat, learned, preferences),
        "year": _year_fit(boat, learned, preferences, now.year),
        "accommodation": _accommodation(boat, preferences),
        "quality": _quality_signals(boat, preferences),
        "learned_category": _learned_category_affinity(boat, learned),
        "mechanical": _mechanical_signals(boat),
        "freshness": _freshness(boat, now),
    }


def score_boat(
    boat: Boat,
    learned: Optional[LearnedPreferences] = None,
    preferences: UserPreferences = DEFAULT_PREFERENCES,
    config: FeedConfig = DEFAULT_CONFIG,
    rng: Optional[np.random.Generator] = None,
    now: Optional[datetime] = None,
) -> float:
    """
    Score one boat against learned (or default) preferences. Higher is better.

    Hard filters return config.excluded_score. Otherwise the soft signals are summed and a
    small diversity bonus in [0, diversity_bonus_max) is added; with rng=None the bonus is 0,
    which makes the score fully deterministic.
    """
    if _hard_filtered(boat, preferences):
        return config.excluded_score
    total = sum(score_components(boat, learned, preferences, now).values())
    if rng is not None:
        total += float(rng.uniform(0, config.diversity_bonus_max))
    return total


def score_batch(
    boats: List[Boat],
    learned: Optional[LearnedPreferences] = None,
    preferences: UserPreferences = DEFAULT_PREFERENCES,
    config: FeedConfig = DEFAULT_CONFIG,
    rng: Optional[np.random.Generator] = None,
    now: Optional[datetime] = None,
) -> List[float]:
    """score_boat over a batch, sharing one clock reading."""
    now = now or datetime.now(timezone.utc)
    return [score_boat(b, learned, preferences, config, rng, now) for b in boats]
