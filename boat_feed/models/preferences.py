"""
Preference models: the static preference policy and the snapshot learned from swipes.

UserPreferences carries the product defaults (budget, brands, countries, hard-filter policy).
LearnedPreferences is derived from the swipe ledger on every retrieval and never persisted.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class UserPreferences(BaseModel):
    """Static preference policy applied by score_boat."""

    # Budget
    min_price: Optional[float] = None
    max_price: Optional[float] = None

    # Location, ranked
    preferred_countries: List[str] = Field(default_factory=list)

    # Brands, ranked
    preferred_brands: List[str] = Field(default_factory=list)
    disliked_brands: List[str] = Field(default_factory=list)

    # Size (metres)
    min_length: Optional[float] = None
    max_length: Optional[float] = None

    # Accommodation
    min_cabins: Optional[int] = None
    min_baths: Optional[int] = None

    # Type policy
    only_new: Optional[bool] = None
    only_highlighted: Optional[bool] = None
    include_charter: bool = False
    exclude_sold: bool = True

    min_year: Optional[int] = None

    # Media
    prefer_with_video: bool = False
    prefer_360_images: bool = False


DEFAULT_PREFERENCES = UserPreferences(
    preferred_countries=["Italy", "France", "Monaco", "Croatia"],
    preferred_brands=["Azimut", "Riva", "Sunseeker", "Ferretti", "Sanlorenzo"],
    disliked_brands=[],
    max_price=5_000_000,
    min_length=15,
    exclude_sold=True,
    include_charter=False,
    prefer_with_video=True,
    prefer_360_images=True,
)


class LearnedPreferences(BaseModel):
    """
    Preferences inferred from accepted swipes.

    Ranked lists are ordered by descending frequency, ties by first observation.
    Averages are 0 when no accepted swipe carried a positive value.
    """

    preferred_brands: List[str] = Field(default_factory=list)
    preferred_types: List[str] = Field(default_factory=list)
    preferred_families: List[str] = Field(default_factory=list)
    preferred_countries: List[str] = Field(default_factory=list)
    average_price: float = 0.0
    average_length: float = 0.0
    average_year: float = 0.0
    accepted_count: int = 0
    # True once accepted_count reaches the personalization threshold. Scoring only
    # boosts learned brands and targets learned averages when set.
    confident: bool = False
