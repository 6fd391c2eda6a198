"""
Misbehaviour detection for one receiving node.

Every arriving packet goes through the same pipeline: known offenders are
refused first, then the sender's rate window is updated and the flood,
anomaly and content checks run in that order, stopping at the first hit.
"""

import logging
from dataclasses import dataclass

from v2v.RateTracker import RateTracker
from v2v.mechanisms.Blacklist import BlacklistStateMachine
from v2v.mechanisms.Burst import BurstDetector
from v2v.mechanisms.Flood import FloodClassifier
from v2v.mechanisms.Anomaly import AnomalyClassifier
from v2v.mechanisms.ContentValidator import ContentValidator

logger = logging.getLogger(__name__)

BLACKLISTED = 'BLACKLISTED'
ANOMALY = 'ANOMALY'


@dataclass
class DetectionStatistics:
    """
    Running detection counters of a node.

    Attributes:
        total_detections: every packet judged malicious, including blocked ones
        high_rate_detections: blacklistings caused by the flood classifier
        packets_blocked: packets refused because the sender was blacklisted
        false_positives: reserved, ground truth is not available in-band
    """
    total_detections: int = 0
    high_rate_detections: int = 0
    packets_blocked: int = 0
    false_positives: int = 0

    def reset(self):
        self.total_detections = 0
        self.high_rate_detections = 0
        self.packets_blocked = 0
        self.false_positives = 0


class MisbehaviorDetector(object):
    def __init__(self, config, node_id=None, evasive=None):
        self.config = config
        self.node_id = node_id
        self.evasive = evasive

        self.tracker = RateTracker(config.detection_window)
        self.blacklist = BlacklistStateMachine(
            self.tracker,
            flood_threshold=config.flood_threshold,
            blacklist_timeout=config.blacklist_timeout,
            max_suspicion_level=config.max_suspicion_level,
        )
        self.flood = FloodClassifier(
            self.blacklist,
            flood_threshold=config.flood_threshold,
            severe_flood_threshold=config.severe_flood_threshold,
            persistent_flood_duration=config.persistent_flood_duration,
            burst_detector=BurstDetector(config.min_burst_size, config.max_burst_duration, config.burst_threshold),
        )
        self.anomaly = AnomalyClassifier(self.tracker, self.blacklist, config.anomaly_threshold)
        self.validator = ContentValidator(config.max_reasonable_speed, config.max_message_age)

        self.stats = DetectionStatistics()
        self.detection_events = []

    def inspect(self, packet, now):
        """
        Decide whether a packet is accepted.

        Returns (accepted, reason); reason is None for accepted packets,
        otherwise the check that rejected it.
        """
        sender_id = packet['sender_id']

        if not self.config.detection_enabled:
            self.tracker.observe(sender_id, now)
            return True, None

        if self.blacklist.is_blacklisted(sender_id, now):
            self.stats.packets_blocked += 1
            self.record(sender_id, now, BLACKLISTED)
            self.take_evasive_action(now)
            return False, BLACKLISTED

        self.tracker.observe(sender_id, now)
        state = self.tracker.state(sender_id)
        self.blacklist.track_suspicion(state, now)

        classification = self.flood.classify(state, now)
        if self.flood.is_candidate(classification):
            self.blacklist.blacklist(state, now)
            self.stats.high_rate_detections += 1
            self.record(sender_id, now, classification)
            logger.info('DOS/FLOOD ATTACK (%s) from %s detected by %s | Rate: %d msgs/window',
                        classification, sender_id, self.node_id, state.count)
            self.take_evasive_action(now)
            return False, classification

        if self.config.entropy_based_detection_enabled and self.anomaly.check(sender_id, now):
            logger.debug('Anomalous rate from %s | suspicion level %d', sender_id, state.suspicion_level)
            if self.blacklist.suspicion_exceeded(state):
                self.blacklist.blacklist(state, now)
                self.record(sender_id, now, ANOMALY)
                logger.info('AUTO-BLACKLISTED: %s for anomalous traffic', sender_id)
                self.take_evasive_action(now)
                return False, ANOMALY

        if self.config.message_validation_enabled:
            reason = self.validator.check(packet, now)
            if reason is not None:
                self.record(sender_id, now, reason)
                logger.debug('Invalid content from %s: %s', sender_id, reason)
                return False, reason

        return True, None

    def record(self, sender_id, now, reason):
        self.stats.total_detections += 1
        self.detection_events.append({
            'detected_at': now,
            'detected_by': self.node_id,
            'detected_node': sender_id,
            'reason': reason,
            'rate': self.tracker.current_count(sender_id, now),
        })

    def prune(self, now):
        """Drop expired arrivals of every sender and disarm suspicion of senders that went quiet."""
        self.tracker.prune(now)
        for state in self.tracker.states.values():
            self.blacklist.track_suspicion(state, now)

    def take_evasive_action(self, now):
        if self.evasive is not None:
            self.evasive.trigger(now)

    def is_blacklisted(self, sender_id, now):
        return self.blacklist.is_blacklisted(sender_id, now)

    def blacklisted_senders(self, now):
        return self.blacklist.blacklisted_senders(now)
