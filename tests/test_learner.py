"""
Preference Learner Tests

Learned preferences come only from accepted swipes: ranked brands/types/countries,
repeated family tags, and averages over positive values.

Run:
----
    pytest tests/test_learner.py -v
"""

import pytest

from boat_feed.models.config import FeedConfig
from boat_feed.stages.learner import learn_preferences


class TestLearnPreferences:
    def test_none_below_min_likes(self, swiped_ledger, make_record):
        ledger = swiped_ledger(
            [(make_record("a"), "accept"), (make_record("b"), "accept")]
            + [(make_record(f"r{i}"), "reject") for i in range(20)]
        )
        assert learn_preferences(ledger) is None

    def test_brand_ranking_by_frequency_ties_first_seen(self, swiped_ledger, make_record):
        ledger = swiped_ledger([
            (make_record("1", Builder="Riva"), "accept"),
            (make_record("2", Builder="Azimut"), "accept"),
            (make_record("3", Builder="Riva"), "accept"),
            (make_record("4", Builder="Azimut"), "accept"),
            (make_record("5", Builder="Sunseeker"), "accept"),
            (make_record("6", Builder="Sunseeker"), "reject"),
            (make_record("7", Builder="Sunseeker"), "reject"),
        ])
        learned = learn_preferences(ledger)
        assert learned.preferred_brands == ["Riva", "Azimut", "Sunseeker"]
        assert learned.accepted_count == 5

    def test_families_require_repeat(self, swiped_ledger, make_record):
        ledger = swiped_ledger([
            (make_record("1", BoatFamilies="Flybridge, Open"), "accept"),
            (make_record("2", BoatFamilies="Flybridge"), "accept"),
            (make_record("3", BoatFamilies="Open,Sport"), "accept"),
        ])
        learned = learn_preferences(ledger)
        assert learned.preferred_families == ["Flybridge", "Open"]

    def test_averages_ignore_missing_values(self, swiped_ledger, make_record):
        ledger = swiped_ledger([
            (make_record("1", SellPrice=0, Length=None), "accept"),
            (make_record("2", SellPrice=600_000, Length=18.0, YearBuilt=2014), "accept"),
            (make_record("3", SellPrice=1_000_000, Length=22.0, YearBuilt=2016), "accept"),
            (make_record("4", SellPrice=9_000_000), "reject"),
        ])
        learned = learn_preferences(ledger)
        assert learned.average_price == pytest.approx(800_000)
        assert learned.average_length == pytest.approx(20.0)
        assert learned.average_year == pytest.approx((2018 + 2014 + 2016) / 3)

    def test_types_and_countries(self, swiped_ledger, make_record):
        ledger = swiped_ledger([
            (make_record("1", BoatType="Sail", Country="Italy"), "accept"),
            (make_record("2", BoatType="Motor", Country="France"), "accept"),
            (make_record("3", BoatType="Motor", Country="France"), "accept"),
        ])
        learned = learn_preferences(ledger)
        assert learned.preferred_types == ["Motor", "Sail"]
        assert learned.preferred_countries == ["France", "Italy"]

    def test_confident_at_personalized_threshold(self, swiped_ledger, make_record):
        four = swiped_ledger([(make_record(str(i)), "accept") for i in range(4)])
        five = swiped_ledger([(make_record(str(i)), "accept") for i in range(5)])
        assert not learn_preferences(four).confident
        assert learn_preferences(five).confident

    def test_accepts_plain_event_list(self, swiped_ledger, make_record):
        ledger = swiped_ledger([(make_record(str(i)), "accept") for i in range(3)])
        assert learn_preferences(ledger.events()) is not None

    def test_min_likes_configurable(self, swiped_ledger, make_record):
        ledger = swiped_ledger([(make_record("1"), "accept")])
        config = FeedConfig(learner_min_likes=1)
        assert learn_preferences(ledger, config).preferred_brands == ["Generic"]
