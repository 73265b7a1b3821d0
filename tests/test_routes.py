"""
API Route Tests

Feed, swipe, stats, reset, contact and boat detail endpoints against an in-memory
catalog, with jitter disabled.

Run:
----
    pytest tests/test_routes.py -v
"""

import pytest
from fastapi.testclient import TestClient

from server.app import app
from server.config import ServerConfig
from server.services import InMemoryCatalogSource, InMemorySwipeStore, LoggingNotifier
from server.state import AppState, set_state

BRANDS = ["Azimut", "Riva", "Sunseeker", "Ferretti", "Sanlorenzo"]


@pytest.fixture
def catalog(make_record):
    return InMemoryCatalogSource([
        make_record(f"b{i}", Builder=BRANDS[i % len(BRANDS)], Country="Italy", Length=12.0)
        for i in range(60)
    ])


@pytest.fixture
def state(catalog):
    state = AppState(
        ServerConfig(),
        catalog=catalog,
        swipe_store=InMemorySwipeStore(),
        notifier=LoggingNotifier(),
        jitter=False,
    )
    set_state(state)
    yield state
    set_state(None)


@pytest.fixture
def client(state):
    with TestClient(app) as c:
        yield c


def _next(client, user="u1", **body):
    response = client.post(f"/api/feed/{user}/next", json=body or None)
    assert response.status_code == 200
    return response.json()


class TestRoot:
    def test_root(self, client):
        data = client.get("/").json()
        assert data["catalog"] == "InMemoryCatalogSource"

    def test_health(self, client):
        data = client.get("/api/health").json()
        assert data["status"] == "healthy"
        assert data["notifier"] == "LoggingNotifier"


class TestFeedNext:
    def test_first_batch_is_exploration(self, client):
        data = _next(client)
        assert data["phase"] == "exploration"
        assert data["filters"] == {"lengthTo": "15"}
        assert data["page"] == 1
        assert len(data["boats"]) == 12
        assert data["boats"][0]["queue_position"] == 1
        assert not data["synthetic"]
        assert not data["needs_refill"]

    def test_next_page_has_new_boats(self, client):
        first = {b["id"] for b in _next(client)["boats"]}
        second = _next(client)
        assert second["page"] == 2
        assert first.isdisjoint({b["id"] for b in second["boats"]})

    def test_needs_refill_on_small_catalog(self, make_record):
        set_state(AppState(
            ServerConfig(),
            catalog=InMemoryCatalogSource([make_record(f"s{i}", Length=10.0) for i in range(3)]),
            swipe_store=InMemorySwipeStore(),
            notifier=LoggingNotifier(),
            jitter=False,
        ))
        try:
            with TestClient(app) as client:
                data = _next(client, buffered=1)
            assert len(data["boats"]) == 3
            assert data["needs_refill"]
        finally:
            set_state(None)

    def test_end_of_stream(self, client):
        data = _next(client, page=99)
        assert data["boats"] == []
        assert data["end_of_stream"]


class TestSwipe:
    def test_accept_served_boat(self, client):
        boat_id = _next(client)["boats"][0]["id"]
        response = client.post("/api/feed/u1/swipe", json={"boat_id": boat_id, "direction": "right"})

        assert response.status_code == 200
        data = response.json()
        assert data["direction"] == "accept"
        assert data["notified"] is False
        assert data["stats"]["likes"] == 1
        assert data["stats"]["likes_today"] == 1

    def test_swipe_on_unserved_boat_uses_detail(self, client):
        response = client.post("/api/feed/u1/swipe", json={"boat_id": "b5", "direction": "left"})
        assert response.status_code == 200
        assert response.json()["stats"]["passes"] == 1

    def test_unknown_boat_404(self, client):
        response = client.post("/api/feed/u1/swipe", json={"boat_id": "nope", "direction": "accept"})
        assert response.status_code == 404

    def test_invalid_direction_422(self, client):
        response = client.post("/api/feed/u1/swipe", json={"boat_id": "b1", "direction": "up"})
        assert response.status_code == 422

    def test_daily_cap(self, client):
        boats = _next(client)["boats"]
        for boat in boats[:10]:
            assert client.post("/api/feed/u1/swipe", json={"boat_id": boat["id"], "direction": "accept"}).status_code == 200

        capped = client.post("/api/feed/u1/swipe", json={"boat_id": boats[10]["id"], "direction": "accept"})
        assert capped.status_code == 429
        rejected = client.post("/api/feed/u1/swipe", json={"boat_id": boats[10]["id"], "direction": "reject"})
        assert rejected.status_code == 200
        assert rejected.json()["stats"]["remaining_likes"] == 0

    def test_notifies_broker_when_contact_known(self, client, state):
        contact = {"name": "Ada", "email": "ada@example.com", "phone": "+39 123"}
        assert client.put("/api/users/u1/contact", json=contact).status_code == 200

        boat_id = _next(client)["boats"][0]["id"]
        data = client.post("/api/feed/u1/swipe", json={"boat_id": boat_id, "direction": "accept"}).json()

        assert data["notified"] is True
        assert state.notifier.sent == [(boat_id, "ada@example.com", "info@batoo.it")]

    def test_reject_never_notifies(self, client, state):
        client.put("/api/users/u1/contact", json={"name": "Ada", "email": "ada@example.com"})
        boat_id = _next(client)["boats"][0]["id"]
        client.post("/api/feed/u1/swipe", json={"boat_id": boat_id, "direction": "reject"})
        assert state.notifier.sent == []


class TestStatsAndReset:
    def test_stats(self, client):
        boats = _next(client)["boats"]
        client.post("/api/feed/u1/swipe", json={"boat_id": boats[0]["id"], "direction": "accept"})
        client.post("/api/feed/u1/swipe", json={"boat_id": boats[1]["id"], "direction": "reject"})

        data = client.get("/api/feed/u1/stats").json()
        assert data["total_swipes"] == 2
        assert data["like_rate"] == 50.0
        assert data["phase"] == "exploration"
        assert data["remaining_likes"] == 9

    def test_reset(self, client):
        first = _next(client)["boats"]
        client.post("/api/feed/u1/swipe", json={"boat_id": first[0]["id"], "direction": "accept"})

        assert client.delete("/api/feed/u1").status_code == 200
        assert client.get("/api/feed/u1/stats").json()["total_swipes"] == 0
        again = _next(client)
        assert again["page"] == 1
        assert [b["id"] for b in again["boats"]] == [b["id"] for b in first]


class TestUsersAndBoats:
    def test_contact_round_trip(self, client):
        client.put("/api/users/u1/contact", json={"name": "Ada", "email": "ada@example.com"})
        data = client.get("/api/users/u1/contact").json()
        assert data["contact"]["email"] == "ada@example.com"

    def test_contact_requires_email(self, client):
        response = client.put("/api/users/u1/contact", json={"name": "Ada", "email": "  "})
        assert response.status_code == 422

    def test_boat_detail(self, client):
        response = client.get("/api/boats/b3")
        assert response.status_code == 200
        assert response.json()["BoatID"] == "b3"

    def test_boat_detail_404(self, client):
        assert client.get("/api/boats/missing").status_code == 404
