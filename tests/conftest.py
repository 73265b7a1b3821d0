"""Shared fixtures: record builders, a scripted catalog and a fixed clock."""

from datetime import datetime, timezone

import pytest

from boat_feed.models.boat import Boat
from boat_feed.models.engagement import SwipeLedger

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


def build_record(boat_id, **fields) -> dict:
    """Catalog-shaped record with neutral defaults."""
    record = {
        "BoatID": boat_id,
        "Builder": "Generic",
        "Model": "Cruiser 40",
        "BoatType": "Motor",
        "SellPrice": 500_000,
        "Length": 14.0,
        "YearBuilt": 2018,
        "Country": "Greece",
    }
    record.update(fields)
    return record


class ScriptedCatalog:
    """CatalogSource that replays canned pages (or raises canned errors) and records calls."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def fetch_page(self, page, page_size, filters):
        self.calls.append((page, page_size, dict(filters)))
        response = self.responses.pop(0) if self.responses else []
        if isinstance(response, Exception):
            raise response
        return response

    def fetch_detail(self, boat_id):
        return None


@pytest.fixture
def make_record():
    return build_record


@pytest.fixture
def scripted_catalog():
    return ScriptedCatalog


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def swiped_ledger():
    """Build a ledger from (record, direction) pairs."""

    def _build(decisions, capacity=500):
        ledger = SwipeLedger(capacity=capacity)
        for i, (record, direction) in enumerate(decisions):
            ledger.record(Boat.model_validate(record), direction, timestamp=1_700_000_000_000 + i)
        return ledger

    return _build
