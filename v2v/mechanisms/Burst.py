import math
from itertools import islice


class BurstDetector(object):
    def __init__(self, min_burst_size = 50, max_burst_duration = 1.0, burst_threshold = 200.0):
        self.min_burst_size = min_burst_size
        self.max_burst_duration = max_burst_duration
        self.burst_threshold = burst_threshold

    def burst_rate(self, timestamps):
        """
        Implied rate (messages per second) of the newest min_burst_size arrivals,
        or None when there are too few samples or they are spread over more
        than max_burst_duration.
        """
        if self.min_burst_size <= 0 or len(timestamps) < self.min_burst_size:
            return None

        first = next(islice(timestamps, len(timestamps) - self.min_burst_size, None))
        duration = timestamps[-1] - first

        if duration >= self.max_burst_duration:
            return None
        if duration <= 0:
            return math.inf
        return self.min_burst_size / duration

    def is_burst(self, timestamps):
        rate = self.burst_rate(timestamps)
        return rate is not None and rate > self.burst_threshold
