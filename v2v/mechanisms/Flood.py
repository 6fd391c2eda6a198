from v2v.mechanisms.Burst import BurstDetector

CLEAN = 'CLEAN'
SUSPICIOUS = 'SUSPICIOUS'
BURST = 'BURST'
PERSISTENT = 'PERSISTENT'
SEVERE = 'SEVERE'

BLACKLIST_CANDIDATES = (SEVERE, BURST, PERSISTENT)


class FloodClassifier(object):
    """
    Two-level flood classification.

    A count above severe_flood_threshold is blacklisted at once. A count above
    flood_threshold only leads to blacklisting when it is packed into a burst
    or has been sustained for longer than persistent_flood_duration, so short
    legitimate peaks stay SUSPICIOUS.
    """

    def __init__(self, blacklist, flood_threshold = 50.0, severe_flood_threshold = 100.0,
                 persistent_flood_duration = 6.0, burst_detector=None):
        self.blacklist = blacklist
        self.flood_threshold = flood_threshold
        self.severe_flood_threshold = severe_flood_threshold
        self.persistent_flood_duration = persistent_flood_duration
        self.burst_detector = burst_detector or BurstDetector()

    def classify(self, state, now):
        r = state.count

        if r > self.severe_flood_threshold:
            return SEVERE

        if r <= self.flood_threshold:
            return CLEAN

        if self.burst_detector.is_burst(state.timestamps):
            return BURST

        if self.blacklist.suspicion_elapsed(state, now) > self.persistent_flood_duration:
            return PERSISTENT

        return SUSPICIOUS

    @staticmethod
    def is_candidate(classification):
        return classification in BLACKLIST_CANDIDATES
