class ReceptionStats(object):
    def __init__(self):
        self.packets_received = 0
        self.total_delay = 0.0
        self.total_jitter = 0.0
        self.jitter_count = 0
        self.last_arrival = None
        self.last_inter_arrival = None

        # bytes since the last throughput sample
        self.bytes_received = 0
        self.total_bytes_received = 0
        self.last_throughput_time = 0.0
        self.throughput_samples = []

    def on_accept(self, now, send_time, size):
        self.packets_received += 1
        self.total_delay += now - send_time

        if self.last_arrival is not None:
            inter_arrival = now - self.last_arrival
            if self.last_inter_arrival is not None:
                self.total_jitter += abs(inter_arrival - self.last_inter_arrival)
                self.jitter_count += 1
            self.last_inter_arrival = inter_arrival
        self.last_arrival = now

        self.bytes_received += size
        self.total_bytes_received += size

    def sample_throughput(self, now):
        elapsed = now - self.last_throughput_time
        if elapsed <= 0:
            return None
        throughput = self.bytes_received * 8 / elapsed  # bit/s
        self.throughput_samples.append((now, throughput))
        self.bytes_received = 0
        self.last_throughput_time = now
        return throughput

    def average_delay(self):
        return self.total_delay / self.packets_received if self.packets_received else 0.0

    def average_jitter(self):
        return self.total_jitter / self.jitter_count if self.jitter_count else 0.0

    def average_throughput(self):
        if not self.throughput_samples:
            return 0.0
        return sum(t for _, t in self.throughput_samples) / len(self.throughput_samples)
