"""
Blacklist state machine tests
"""

import pytest

from v2v.RateTracker import RateTracker
from v2v.mechanisms.Blacklist import BlacklistStateMachine, CLEAN, SUSPICIOUS, BLACKLISTED


@pytest.fixture
def tracker():
    return RateTracker(3.0)


@pytest.fixture
def machine(tracker):
    return BlacklistStateMachine(tracker, flood_threshold=5, blacklist_timeout=30.0, max_suspicion_level=3)


def fill(tracker, sender_id, count, start=0.0, step=0.01):
    for i in range(count):
        tracker.observe(sender_id, start + i * step)
    return start + (count - 1) * step


class TestSuspicion:
    """Tests for the CLEAN <-> SUSPICIOUS transitions."""

    def test_arms_above_threshold(self, tracker, machine):
        now = fill(tracker, 1, 6)
        state = tracker.get(1)
        machine.track_suspicion(state, now)
        assert state.suspicion_start == now
        assert machine.state_of(1, now) == SUSPICIOUS

    def test_start_is_kept_while_suspicious(self, tracker, machine):
        now = fill(tracker, 1, 6)
        state = tracker.get(1)
        machine.track_suspicion(state, now)
        tracker.observe(1, now + 0.5)
        machine.track_suspicion(state, now + 0.5)
        assert state.suspicion_start == now
        assert machine.suspicion_elapsed(state, now + 0.5) == pytest.approx(0.5)

    def test_clears_when_rate_drops(self, tracker, machine):
        now = fill(tracker, 1, 6)
        state = tracker.get(1)
        machine.track_suspicion(state, now)
        state.suspicion_level = 2

        tracker.observe(1, now + 5.0)
        machine.track_suspicion(state, now + 5.0)
        assert state.suspicion_start is None
        # only a blacklist expiry resets the level
        assert state.suspicion_level == 2
        assert machine.state_of(1, now + 5.0) == CLEAN

    def test_state_of_reads_an_evicted_window(self, tracker, machine):
        now = fill(tracker, 1, 6)
        machine.track_suspicion(tracker.get(1), now)
        assert machine.state_of(1, now + 100.0) == CLEAN
        assert tracker.get(1).suspicion_start is None

    def test_at_threshold_is_clean(self, tracker, machine):
        now = fill(tracker, 1, 5)
        state = tracker.get(1)
        machine.track_suspicion(state, now)
        assert state.suspicion_start is None

    def test_suspicion_exceeded(self, tracker, machine):
        state = tracker.state(1)
        state.suspicion_level = 3
        assert not machine.suspicion_exceeded(state)
        state.suspicion_level = 4
        assert machine.suspicion_exceeded(state)


class TestBlacklist:
    """Tests for blacklisting and timeout recovery."""

    def test_unknown_sender(self, machine):
        assert not machine.is_blacklisted(42, 0.0)

    def test_blacklist_sets_timestamp(self, tracker, machine):
        state = tracker.state(1)
        machine.blacklist(state, 10.0)
        assert state.blacklisted
        assert state.blacklisted_at == 10.0
        assert machine.state_of(1, 10.0) == BLACKLISTED

    def test_stays_blacklisted_until_timeout(self, tracker, machine):
        machine.blacklist(tracker.state(1), 10.0)
        assert machine.is_blacklisted(1, 10.0)
        assert machine.is_blacklisted(1, 25.0)
        assert machine.is_blacklisted(1, 39.999)

    def test_recovers_at_deadline(self, tracker, machine):
        fill(tracker, 1, 6, start=9.0)
        state = tracker.get(1)
        state.suspicion_start = 9.0
        state.suspicion_level = 4
        machine.blacklist(state, 10.0)

        assert not machine.is_blacklisted(1, 40.0)
        assert state.count == 0
        assert state.suspicion_start is None
        assert state.suspicion_level == 0
        assert state.blacklisted_at is None

    def test_recovery_is_idempotent(self, tracker, machine):
        machine.blacklist(tracker.state(1), 0.0)
        assert not machine.is_blacklisted(1, 31.0)
        assert not machine.is_blacklisted(1, 31.0)
        assert not machine.is_blacklisted(1, 45.0)

    def test_blacklisted_senders(self, tracker, machine):
        machine.blacklist(tracker.state(1), 0.0)
        machine.blacklist(tracker.state(2), 20.0)
        tracker.state(3)
        assert machine.blacklisted_senders(10.0) == [1, 2]
        assert machine.blacklisted_senders(35.0) == [2]
