"""
Shared fixtures for the detection and delivery tests.
"""

import pytest

from v2v.Config import Config
from v2v.DeliveryLedger import DeliveryLedger
from v2v.Detector import MisbehaviorDetector
from v2v.Message import make_beacon


class RecordingTimers:
    """Timer service stand-in that only remembers what was scheduled."""

    def __init__(self):
        self.scheduled = []
        self.cancelled = []

    def schedule(self, delay, name):
        self.scheduled.append((delay, name))

    def cancel(self, name):
        self.cancelled.append(name)

    def cancel_all(self):
        self.cancelled.append('*')


@pytest.fixture
def config() -> Config:
    """Default detection parameters with a 3 s window."""
    return Config()


@pytest.fixture
def detector(config) -> MisbehaviorDetector:
    """Detector of node 0 without an evasive action attached."""
    return MisbehaviorDetector(config, node_id=0)


@pytest.fixture
def ledger() -> DeliveryLedger:
    return DeliveryLedger()


@pytest.fixture
def timers() -> RecordingTimers:
    return RecordingTimers()


@pytest.fixture
def beacon():
    """Factory for plausible beacons sent at the current time."""
    counter = iter(range(1, 1000000))

    def make(sender_id, now, pos=(0.0, 0.0), speed=(10.0, 0.0), created_at=None):
        return make_beacon(next(counter), sender_id, now if created_at is None else created_at, pos, speed)

    return make
