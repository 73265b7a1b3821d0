"""
Synthetic catalog: deterministic stand-in batch used when the real catalog is unreachable.

Records are generated from the boat index with a fixed linear congruence, so the same
page always yields the same boats. Output uses the catalog's own field names so it flows
through the ranking pipeline exactly like live data.
"""

from typing import Any, Dict, List

from ..models.boat import Boat
from ..models.preferences import DEFAULT_PREFERENCES, UserPreferences
from .ranking.scoring import score_boat

BRANDS = [
    "Azimut", "Sunseeker", "Ferretti", "Riva", "Princess",
    "Sanlorenzo", "Benetti", "Pershing", "Bavaria", "Jeanneau",
]
MODELS = ["Flybridge", "Grande", "Predator", "Yacht", "Sportfly", "Magellano", "Atlantis", "Superyacht"]
LOCATIONS = [
    "Viareggio, Italy", "Cannes, France", "Miami, USA", "Monaco",
    "Split, Croatia", "Athens, Greece", "Palma, Spain", "Dubai, UAE",
]
IMAGES = [
    "https://images.unsplash.com/photo-1569263979104-865ab7cd8d13?q=80&w=2000&auto=format&fit=crop",
    "https://images.unsplash.com/photo-1567899378494-47b22a2ae96a?q=80&w=2000&auto=format&fit=crop",
    "https://images.unsplash.com/photo-1605281317010-fe5ffe798166?q=80&w=2000&auto=format&fit=crop",
    "https://images.unsplash.com/photo-1544551763-46a8723ba3f9?q=80&w=2000&auto=format&fit=crop",
    "https://images.unsplash.com/photo-1621275471769-e6aa344546d5?q=80&w=2000&auto=format&fit=crop",
]


def _mock_record(index: int) -> Dict[str, Any]:
    def rand(mod: int) -> int:
        return (index * 9301 + 49297) % mod

    city, _, country = LOCATIONS[rand(len(LOCATIONS))].partition(", ")
    price = 200_000 + rand(100) * 100_000
    return {
        "BoatID": f"mock-{index}",
        "Builder": BRANDS[rand(len(BRANDS))],
        "Model": f"{MODELS[rand(len(MODELS))]} {40 + rand(60)}",
        "YearBuilt": 2010 + rand(15),
        "Length": 10 + rand(30) + rand(100) / 100,
        "Cabins": 3 + rand(3),
        "Baths": 2 + rand(3),
        "SellPrice": price,
        "SellPriceCurrency": "EUR",
        "SellPriceFormatted": f"€ {price:,}",
        "City": city,
        "Country": country or "International",
        "ImagesList": [{"ImageUrl": IMAGES[index % len(IMAGES)]}],
    }


def generate_mock_boats(
    page: int,
    page_size: int,
    preferences: UserPreferences = DEFAULT_PREFERENCES,
) -> List[Dict[str, Any]]:
    """Deterministic batch of page_size records for a 1-based page, best default match first."""
    start = (max(page, 1) - 1) * page_size
    records = [_mock_record(start + i) for i in range(page_size)]
    records.sort(
        key=lambda r: score_boat(Boat.model_validate(r), None, preferences),
        reverse=True,
    )
    return records
