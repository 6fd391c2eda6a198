import numpy as np


class AnomalyClassifier(object):
    def __init__(self, tracker, blacklist, anomaly_threshold = 2.0):
        self.tracker = tracker
        self.blacklist = blacklist
        self.anomaly_threshold = anomaly_threshold

    def mean_rate(self, now):
        rates = [self.tracker.current_rate(s, now) for s in self.tracker.senders()
                 if not self.blacklist.is_blacklisted(s, now)]
        if not rates:
            return 0.0
        return float(np.mean(rates))

    def deviation(self, sender_id, now):
        mean = self.mean_rate(now)
        if mean <= 0:
            return None
        rate = self.tracker.current_rate(sender_id, now)
        return abs(rate - mean) / mean

    def check(self, sender_id, now):
        """
        Compare the sender against its peers and bump its suspicion level on an
        outlier. Returns True if an anomaly was flagged.
        """
        deviation = self.deviation(sender_id, now)
        if deviation is None or deviation <= self.anomaly_threshold:
            return False

        self.tracker.state(sender_id).suspicion_level += 1
        return True
