import math, random

import numpy as np

SPEED_OF_LIGHT = 300000000
TRANSMISSION_DELAY = 0.001


class RadioMedium(object):
    """
    Single shared broadcast channel. Every frame reaches all registered
    nodes within radio_range, each after its own propagation delay; a
    frame is lost per receiver with probability packet_error_rate.
    """

    def __init__(self, env, radio_range, per = 0):
        self.env = env
        self.radio_range = radio_range
        self.packet_error_rate = per
        self.nodes = []

        self.broadcast_delays = []
        self.frames_sent = 0
        self.packets_lost = 0

    def register(self, node):
        self.nodes.append(node)

    def neighbours(self, source):
        pos = source.get_position()
        found = []
        for n in self.nodes:
            if n.id == source.id:
                continue
            d = math.dist(pos, n.get_position())
            if d <= self.radio_range:
                found.append((d, n))
        found.sort(key=lambda tup: tup[0])
        return found

    def receive_from_upper(self, source, packet):
        self.frames_sent += 1
        receivers = self.neighbours(source)
        if receivers:
            self.env.process(self.on_transmit(packet, receivers))

    def on_transmit(self, packet, receivers):
        # receivers are sorted by distance, so waits are incremental
        elapsed = 0
        for d, node in receivers:
            delay = TRANSMISSION_DELAY + d / SPEED_OF_LIGHT
            yield self.env.timeout(max(0, delay - elapsed))
            elapsed = delay
            if random.random() < self.packet_error_rate:
                self.packets_lost += 1
            else:
                node.receive_from_lower(packet)
        self.broadcast_delays.append(elapsed)

    def average_broadcast_delay(self):
        return float(np.mean(self.broadcast_delays)) if self.broadcast_delays else 0.0
