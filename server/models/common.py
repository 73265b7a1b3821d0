"""Common Pydantic models shared across routes."""

from typing import List, Optional

from pydantic import BaseModel


class BoatCard(BaseModel):
    id: str
    builder: str
    model: str
    boat_type: Optional[str] = None
    year_built: Optional[int] = None
    length: Optional[float] = None
    price: float = 0
    price_formatted: Optional[str] = None
    currency: str = "EUR"
    country: Optional[str] = None
    city: Optional[str] = None
    image_url: Optional[str] = None
    images: List[str] = []
    badges: List[str] = []
    base_score: Optional[float] = None
    jitter: Optional[float] = None
    final_score: Optional[float] = None
    queue_position: Optional[int] = None
