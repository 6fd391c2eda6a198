"""
Peer-relative anomaly classifier tests
"""

import pytest

from v2v.RateTracker import RateTracker
from v2v.mechanisms.Blacklist import BlacklistStateMachine
from v2v.mechanisms.Anomaly import AnomalyClassifier


@pytest.fixture
def tracker():
    return RateTracker(3.0)


@pytest.fixture
def blacklist(tracker):
    return BlacklistStateMachine(tracker)


@pytest.fixture
def classifier(tracker, blacklist):
    return AnomalyClassifier(tracker, blacklist, anomaly_threshold=2.0)


def population(tracker, counts, start=10.0):
    t = start
    for sender_id, count in counts.items():
        for _ in range(count):
            tracker.observe(sender_id, t)
            t += 0.01
    return t


class TestAnomalyClassifier:
    """Tests for AnomalyClassifier."""

    def test_no_senders(self, classifier):
        assert classifier.mean_rate(1.0) == 0.0
        assert classifier.deviation(1, 1.0) is None
        assert not classifier.check(1, 1.0)

    def test_single_sender_is_never_anomalous(self, tracker, classifier):
        now = population(tracker, {1: 40})
        assert classifier.deviation(1, now) == 0.0
        assert not classifier.check(1, now)
        assert tracker.get(1).suspicion_level == 0

    def test_outlier_is_flagged(self, tracker, classifier):
        now = population(tracker, {1: 1, 2: 1, 3: 1, 4: 20})
        # mean over the four senders is 23/4 messages per window
        assert classifier.deviation(4, now) == pytest.approx((20 - 5.75) / 5.75)
        assert classifier.check(4, now)
        assert tracker.get(4).suspicion_level == 1

    def test_one_increment_per_call(self, tracker, classifier):
        now = population(tracker, {1: 1, 2: 1, 3: 1, 4: 20})
        for _ in range(3):
            classifier.check(4, now)
        assert tracker.get(4).suspicion_level == 3

    def test_normal_sender_not_flagged(self, tracker, classifier):
        now = population(tracker, {1: 1, 2: 1, 3: 1, 4: 20})
        assert not classifier.check(1, now)
        assert tracker.get(1).suspicion_level == 0

    def test_blacklisted_senders_are_excluded_from_mean(self, tracker, blacklist, classifier):
        now = population(tracker, {1: 2, 2: 2, 3: 40})
        blacklist.blacklist(tracker.get(3), now)
        assert classifier.mean_rate(now) == pytest.approx(2 / 3.0)

    def test_quiet_population(self, tracker, classifier):
        population(tracker, {1: 3, 2: 3}, start=0.0)
        # everything has left the window
        assert classifier.deviation(1, 100.0) is None
