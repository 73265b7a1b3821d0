"""
Ranking Pipeline Tests

normalize -> score -> jitter -> sort -> admission threshold -> truncate -> seen-set dedup.

Run:
----
    pytest tests/test_ranking.py -v
"""

import numpy as np
import pytest

from boat_feed.models.boat import Boat
from boat_feed.models.config import FeedConfig
from boat_feed.stages.phase import EngagementPhase
from boat_feed.stages.ranking import (
    jitter_magnitude,
    normalize_boat,
    rank_boats,
    upgrade_image_url,
)

BRANDS = ["Azimut", "Riva", "Sunseeker", "Ferretti", "Sanlorenzo"]


@pytest.fixture
def strong_batch(make_record):
    """Thirty boats that all clear every admission threshold."""
    return [
        make_record(f"s{i}", Builder=BRANDS[i % len(BRANDS)], Country="Italy", SellPrice=3_000_000)
        for i in range(30)
    ]


class TestJitterMagnitude:
    def test_phase_magnitudes(self):
        assert jitter_magnitude(EngagementPhase.EXPLORATION) == pytest.approx(300)
        assert jitter_magnitude(EngagementPhase.DEFAULT) == pytest.approx(160)
        assert jitter_magnitude(EngagementPhase.PERSONALIZED) == pytest.approx(40)

    @pytest.mark.parametrize("phase", list(EngagementPhase))
    def test_jitter_within_bounds(self, strong_batch, phase, now):
        ranked = rank_boats(strong_batch, None, phase, rng=np.random.default_rng(11), now=now)
        assert ranked
        for scored in ranked:
            assert 0 <= scored.jitter < jitter_magnitude(phase)

    def test_no_rng_means_no_jitter(self, strong_batch, now):
        ranked = rank_boats(strong_batch, None, EngagementPhase.EXPLORATION, now=now)
        assert all(s.jitter == 0 for s in ranked)
        scores = [s.base_score for s in ranked]
        assert scores == sorted(scores, reverse=True)


class TestAdmission:
    def test_page_limit_per_phase(self, strong_batch, now):
        assert len(rank_boats(strong_batch, None, EngagementPhase.EXPLORATION, now=now)) == 12
        assert len(rank_boats(strong_batch, None, EngagementPhase.DEFAULT, now=now)) == 20

    def test_never_empty_when_nothing_clears_threshold(self, now):
        weak = [{"BoatID": f"w{i}"} for i in range(5)]
        ranked = rank_boats(weak, None, EngagementPhase.DEFAULT, now=now)
        assert len(ranked) == 5
        assert all(s.base_score < 20 for s in ranked)

    def test_threshold_drops_weak_boats_when_strong_exist(self, strong_batch, now):
        batch = strong_batch[:3] + [{"BoatID": "weak"}]
        ranked = rank_boats(batch, None, EngagementPhase.DEFAULT, now=now)
        assert "weak" not in [s.boat.boat_id for s in ranked]

    def test_excluded_boats_sink(self, make_record, now):
        batch = [
            make_record("sold", Builder="Azimut", Sold=True),
            make_record("plain"),
        ]
        ranked = rank_boats(batch, None, EngagementPhase.DEFAULT, now=now)
        assert ranked[-1].boat.boat_id == "sold"

    @pytest.mark.parametrize("seed", [0, 7, 42])
    def test_excluded_boats_sink_under_exploration_jitter(self, make_record, seed, now):
        plain = [make_record(f"p{i}") for i in range(6)]
        sold = [make_record(f"sold{i}", Builder="Azimut", Country="Italy", Sold=True) for i in range(4)]
        # Nothing clears the threshold, so the whole sorted batch comes back
        config = FeedConfig(min_score_exploration=10_000)
        ranked = rank_boats(
            sold + plain, None, EngagementPhase.EXPLORATION,
            config=config, rng=np.random.default_rng(seed), now=now,
        )
        ids = [s.boat.boat_id for s in ranked]
        assert len(ids) == 10
        assert set(ids[-4:]) == {f"sold{i}" for i in range(4)}

    def test_empty_batch(self):
        assert rank_boats([], None, EngagementPhase.DEFAULT) == []


class TestDedup:
    def test_second_call_with_same_batch_is_empty(self, strong_batch, now):
        seen = set()
        first = rank_boats(strong_batch, None, EngagementPhase.DEFAULT, seen_ids=seen, now=now)
        second = rank_boats(strong_batch, None, EngagementPhase.DEFAULT, seen_ids=seen, now=now)

        assert len(first) == 20
        assert second == []
        assert seen == {s.boat.boat_id for s in first}

    def test_repeated_ids_in_batch_appear_once(self, make_record, now):
        batch = [make_record("dup", Builder="Riva"), make_record("dup", Builder="Azimut")]
        ranked = rank_boats(batch, None, EngagementPhase.DEFAULT, seen_ids=set(), now=now)
        assert [s.boat.boat_id for s in ranked] == ["dup"]
        assert ranked[0].boat.builder == "Riva"

    def test_malformed_records_dropped(self, make_record, now):
        batch = [make_record("ok"), {"Builder": "NoId"}, make_record("bad", SellPrice="n/a")]
        ranked = rank_boats(batch, None, EngagementPhase.DEFAULT, now=now)
        assert [s.boat.boat_id for s in ranked] == ["ok"]


class TestNormalize:
    def test_upgrade_image_url(self):
        assert upgrade_image_url("https://cdn/x/boat.256.jpg") == "https://cdn/x/boat.512.jpg"
        assert upgrade_image_url("https://cdn/x/boat.png") == "https://cdn/x/boat.png"
        assert upgrade_image_url(None) is None

    def test_images_list_synthesized(self, make_record):
        boat = normalize_boat(Boat.model_validate(make_record("b1", ImageUrl="https://cdn/b.128.jpg")))
        assert [img.image_url for img in boat.images_list] == ["https://cdn/b.512.jpg"]

    def test_existing_images_list_kept(self, make_record):
        record = make_record("b1", ImageUrl="https://cdn/b.128.jpg", ImagesList=[{"ImageUrl": "https://cdn/a.jpg"}])
        boat = normalize_boat(Boat.model_validate(record))
        assert [img.image_url for img in boat.images_list] == ["https://cdn/a.jpg"]

    def test_city_fallback_order(self, make_record):
        boat = normalize_boat(Boat.model_validate(make_record("b1", City=" ", VisibleAt="Portofino", Harbor="Genova")))
        assert boat.city == "Portofino"
        boat = normalize_boat(Boat.model_validate(make_record("b2", Harbor="Genova")))
        assert boat.city == "Genova"
