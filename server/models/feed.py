"""Feed-related Pydantic models."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from boat_feed.models.engagement import SwipeDirection

from .common import BoatCard


class NextBatchRequest(BaseModel):
    buffered: int = Field(default=0, ge=0)  # cards the UI holds but has not shown yet
    page: Optional[int] = Field(default=None, ge=1)


class FeedResponse(BaseModel):
    user_id: str
    boats: List[BoatCard]
    phase: str
    page: int
    fetched_page: Optional[int] = None
    filters: Dict[str, str] = {}
    step: str
    attempts: int
    synthetic: bool = False
    end_of_stream: bool = False
    needs_refill: bool = False


class SwipeRequest(BaseModel):
    boat_id: str
    direction: SwipeDirection

    @field_validator("direction", mode="before")
    @classmethod
    def parse_direction(cls, v):
        return SwipeDirection.parse(v)


class StatsResponse(BaseModel):
    user_id: str
    phase: str
    total_swipes: int
    likes: int
    passes: int
    like_rate: float
    likes_today: int
    remaining_likes: int


class SwipeResponse(BaseModel):
    boat_id: str
    direction: SwipeDirection
    notified: bool = False
    stats: StatsResponse
