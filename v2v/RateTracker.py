from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Optional


@dataclass
class SenderState:
    """
    Everything a detecting node remembers about one sender.

    Attributes:
        timestamps: arrival times inside the current detection window, oldest first
        suspicion_start: when the sender first exceeded the flood threshold
        suspicion_level: anomaly hits, only reset when a blacklisting expires
        blacklisted: whether messages from this sender are refused
        blacklisted_at: when the sender was blacklisted
    """
    timestamps: Deque[float] = field(default_factory=deque)
    suspicion_start: Optional[float] = None
    suspicion_level: int = 0
    blacklisted: bool = False
    blacklisted_at: Optional[float] = None

    @property
    def count(self):
        return len(self.timestamps)

    def evict(self, horizon):
        # timestamps are in arrival order, so eviction is a prefix trim
        while self.timestamps and self.timestamps[0] < horizon:
            self.timestamps.popleft()

    def reset_window(self):
        self.timestamps.clear()
        self.suspicion_start = None


class RateTracker(object):
    def __init__(self, detection_window = 3.0):
        self.detection_window = detection_window
        self.states = {}

    def get(self, sender_id):
        return self.states.get(sender_id)

    def state(self, sender_id):
        if sender_id not in self.states:
            self.states[sender_id] = SenderState()
        return self.states[sender_id]

    def senders(self):
        return list(self.states.keys())

    def observe(self, sender_id, now):
        state = self.state(sender_id)
        state.timestamps.append(now)
        state.evict(now - self.detection_window)
        return state.count

    def current_count(self, sender_id, now):
        state = self.states.get(sender_id)
        if state is None:
            return 0
        state.evict(now - self.detection_window)
        return state.count

    def current_rate(self, sender_id, now):
        # messages per second over the window
        return self.current_count(sender_id, now) / self.detection_window

    def prune(self, now):
        horizon = now - self.detection_window
        for state in self.states.values():
            state.evict(horizon)
