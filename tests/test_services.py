"""
Notifier, Swipe Store and Server Config Tests

Run:
----
    pytest tests/test_services.py -v
"""

import json
from datetime import date

import pytest
import requests

from boat_feed.models.boat import Boat
from boat_feed.models.config import DEFAULT_CONFIG, FeedConfig
from server.config import ServerConfig
from server.models import ContactIdentity
from server.services import (
    HttpBrokerNotifier,
    InMemorySwipeStore,
    JsonSwipeStore,
    LoggingNotifier,
)
from server.services import notifier as notifier_module

CONTACT = ContactIdentity(name="Ada", email="ada@example.com", phone="+39 123")


class FakePostResponse:
    def __init__(self, status_code=200):
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class TestHttpBrokerNotifier:
    def test_posts_lead_to_agency(self, monkeypatch, make_record):
        sent = []

        def fake_post(url, json=None, headers=None, timeout=None):
            sent.append((url, json, timeout))
            return FakePostResponse()

        monkeypatch.setattr(notifier_module.requests, "post", fake_post)
        boat = Boat.model_validate(make_record("7", Builder="Riva", Model="Aquarama", AgencyEmail="sales@broker.it"))
        notifier = HttpBrokerNotifier("https://contact/api", "info@batoo.it", timeout=4)

        assert notifier.notify_interest(boat, CONTACT) is True
        url, payload, timeout = sent[0]
        assert url == "https://contact/api"
        assert timeout == 4
        assert payload["brokerEmail"] == "sales@broker.it"
        assert payload["to"] == "sales@broker.it"
        assert payload["email"] == "ada@example.com"
        assert payload["interestedIn"].endswith("Riva Aquarama")
        assert "/barche/7" in payload["message"]

    def test_default_broker_when_agency_missing(self, monkeypatch, make_record):
        sent = []
        monkeypatch.setattr(
            notifier_module.requests, "post",
            lambda url, json=None, headers=None, timeout=None: sent.append(json) or FakePostResponse(),
        )
        boat = Boat.model_validate(make_record("7"))
        HttpBrokerNotifier("https://contact/api", "info@batoo.it").notify_interest(boat, CONTACT)
        assert sent[0]["brokerEmail"] == "info@batoo.it"

    @pytest.mark.parametrize("failure", ["status", "connection"])
    def test_failure_returns_false(self, monkeypatch, make_record, failure):
        def fake_post(url, json=None, headers=None, timeout=None):
            if failure == "connection":
                raise requests.ConnectionError("refused")
            return FakePostResponse(status_code=500)

        monkeypatch.setattr(notifier_module.requests, "post", fake_post)
        boat = Boat.model_validate(make_record("7"))
        assert HttpBrokerNotifier("https://contact/api", "info@batoo.it").notify_interest(boat, CONTACT) is False

    def test_logging_notifier_records(self, make_record):
        notifier = LoggingNotifier()
        assert notifier.notify_interest(Boat.model_validate(make_record("7")), CONTACT)
        assert notifier.sent == [("7", "ada@example.com", "info@batoo.it")]


class TestSwipeStores:
    def test_in_memory_creates_on_first_use(self):
        store = InMemorySwipeStore()
        activity = store.get("u1")
        assert activity.ledger.total_swipes == 0
        assert activity.daily_likes.cap == DEFAULT_CONFIG.daily_like_cap
        assert store.get("u1") is activity

    def test_reset_keeps_contact(self, make_record):
        store = InMemorySwipeStore()
        activity = store.get("u1")
        activity.ledger.record(Boat.model_validate(make_record("b1")), "accept")
        activity.daily_likes.register_like()
        activity.contact = CONTACT
        store.reset("u1")

        activity = store.get("u1")
        assert activity.ledger.total_swipes == 0
        assert activity.daily_likes.likes_today() == 0
        assert activity.contact == CONTACT

    def test_json_store_survives_restart(self, tmp_path, make_record):
        path = tmp_path / "swipes.json"
        store = JsonSwipeStore(path)
        activity = store.get("u1")
        activity.ledger.record(Boat.model_validate(make_record("b1", Builder="Riva")), "accept")
        activity.daily_likes.register_like(date(2025, 6, 1))
        activity.contact = CONTACT
        store.save("u1", activity)

        restored = JsonSwipeStore(path).get("u1")
        assert [e.boat_id for e in restored.ledger.events()] == ["b1"]
        assert restored.ledger.events()[0].boat.builder == "Riva"
        assert restored.daily_likes.likes_today(date(2025, 6, 1)) == 1
        assert restored.contact == CONTACT

    def test_json_store_applies_config(self, tmp_path):
        config = FeedConfig(ledger_capacity=2, daily_like_cap=3)
        activity = JsonSwipeStore(tmp_path / "swipes.json", config).get("u1")
        assert activity.ledger.capacity == 2
        assert activity.daily_likes.cap == 3


class TestServerConfig:
    def test_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CATALOG_SOURCE", "JSON")
        monkeypatch.setenv("CATALOG_JSON_PATH", str(tmp_path / "catalog.json"))
        monkeypatch.setenv("CATALOG_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        config = ServerConfig.from_env()

        assert config.catalog_source == "json"
        assert config.catalog_json_path == tmp_path / "catalog.json"
        assert config.catalog_timeout_seconds == 2.5
        assert config.log_level == "DEBUG"

    def test_validate_reports_missing_catalog_file(self, tmp_path):
        config = ServerConfig(catalog_source="json", catalog_json_path=tmp_path / "missing.json")
        ok, errors = config.validate()
        assert not ok
        assert any("Catalog JSON not found" in e for e in errors)

    def test_default_config_is_valid(self):
        assert ServerConfig().validate() == (True, [])

    def test_feed_config_file_merges_over_defaults(self, tmp_path):
        path = tmp_path / "feed.json"
        path.write_text(json.dumps({
            "phases": {"exploration_swipes": 10, "personalized_likes": 3},
            "fallback": {"random_pages": [2, 5], "all_phases": True},
            "jitter": {"base": 100, "personalized": 0.5},
            "engagement": {"daily_like_cap": 20},
        }))
        feed = ServerConfig(feed_config_path=path).load_feed_config()

        assert feed.exploration_swipe_limit == 10
        assert feed.personalized_min_likes == 3
        assert (feed.random_page_min, feed.random_page_max) == (2, 5)
        assert feed.fallback_all_phases is True
        assert feed.jitter_base == 100
        assert feed.jitter_factor_personalized == 0.5
        assert feed.jitter_factor_default == DEFAULT_CONFIG.jitter_factor_default
        assert feed.daily_like_cap == 20

    def test_invalid_feed_config_rejected(self):
        with pytest.raises(ValueError):
            FeedConfig.from_dict({"fallback": {"random_pages": [5, 2]}})
