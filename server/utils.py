"""Pure helpers: boat card formatting."""

from datetime import datetime
from typing import Optional

from boat_feed.models.boat import Boat
from boat_feed.models.scoring import ScoredBoat
from boat_feed.stages.ranking import get_badges

from .models import BoatCard


def to_boat_card(
    item: "Boat | ScoredBoat",
    queue_position: Optional[int] = None,
    now: Optional[datetime] = None,
) -> BoatCard:
    """Convert a Boat (or ScoredBoat from the ranking stage) to BoatCard."""
    scored = item if isinstance(item, ScoredBoat) else None
    boat = scored.boat if scored else item
    return BoatCard(
        id=boat.boat_id,
        builder=boat.builder,
        model=boat.model,
        boat_type=boat.boat_type,
        year_built=boat.year_built,
        length=boat.length,
        price=boat.sell_price,
        price_formatted=boat.sell_price_formatted,
        currency=boat.sell_price_currency,
        country=boat.country,
        city=boat.city,
        image_url=boat.image_url,
        images=[img.image_url for img in boat.images_list or []],
        badges=get_badges(boat, now),
        base_score=round(scored.base_score, 2) if scored else None,
        jitter=round(scored.jitter, 2) if scored else None,
        final_score=round(scored.final_score, 2) if scored else None,
        queue_position=queue_position,
    )
