"""
Record normalization: the single place where heterogeneous catalog fields are reconciled.

Display city comes from the first non-empty of City / VisibleAt / Harbor. Boats without
an images list get one synthesized from the legacy single ImageUrl, upgraded to the
high-resolution rendition.
"""

import re
from typing import List, Optional

from ...models.boat import Boat, BoatImage

HIGH_RES_SUFFIX = ".512.jpg"
_RESOLUTION_SUFFIX = re.compile(r"\.(\d+)\.jpg$", re.IGNORECASE)


def upgrade_image_url(url: Optional[str]) -> Optional[str]:
    """Replace a trailing '.<size>.jpg' token with the high-resolution suffix."""
    if not url:
        return url
    return _RESOLUTION_SUFFIX.sub(HIGH_RES_SUFFIX, url)


def _display_city(boat: Boat) -> Optional[str]:
    for candidate in (boat.city, boat.visible_at, boat.harbor):
        if candidate and candidate.strip():
            return candidate
    return None


def normalize_boat(boat: Boat) -> Boat:
    """Return a copy of boat with display city and images list filled in."""
    image_url = upgrade_image_url(boat.image_url)
    images = boat.images_list
    if images is None:
        images = [BoatImage(image_url=image_url)] if image_url else []
    return boat.model_copy(
        update={"city": _display_city(boat), "image_url": image_url, "images_list": images}
    )


def normalize_batch(boats: List[Boat]) -> List[Boat]:
    """Normalize every boat, keeping only the first record for each boat_id."""
    seen = set()
    out = []
    for boat in boats:
        if boat.boat_id in seen:
            continue
        seen.add(boat.boat_id)
        out.append(normalize_boat(boat))
    return out
