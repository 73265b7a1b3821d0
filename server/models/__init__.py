"""Pydantic request/response models for the API."""

from .common import BoatCard
from .feed import FeedResponse, NextBatchRequest, StatsResponse, SwipeRequest, SwipeResponse
from .users import ContactIdentity, ContactResponse

__all__ = [
    "BoatCard",
    "ContactIdentity",
    "ContactResponse",
    "FeedResponse",
    "NextBatchRequest",
    "StatsResponse",
    "SwipeRequest",
    "SwipeResponse",
]
