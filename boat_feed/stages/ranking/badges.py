"""
Listing badges for boat cards (e.g. new_listing, price_reduced).

Used by the feed response to surface at most two badges per boat.
"""

from datetime import datetime
from typing import List, Optional

from ...models.boat import Boat
from ...utils.scores import days_since


def get_badges(boat: Boat, now: Optional[datetime] = None) -> List[str]:
    """
    Display badges for a boat (max 2), in priority order:
    new listing (inserted within 7 days), price reduced, highlighted, video, 360 tour.
    """
    badges = []
    age = days_since(boat.ins_date, now) if boat.ins_date else None
    if age is not None and age < 7:
        badges.append("new_listing")
    if boat.sell_price_reduced:
        badges.append("price_reduced")
    if boat.highlighted:
        badges.append("highlighted")
    if boat.video:
        badges.append("video")
    if boat.images_360:
        badges.append("tour_360")
    return badges[:2]
