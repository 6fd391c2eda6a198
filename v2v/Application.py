import logging
import random
from collections import defaultdict

from v2v import Attacks
from v2v.Detector import MisbehaviorDetector
from v2v.Evasive import EvasiveAction, EVASIVE_TIMER
from v2v.Message import TIMER, make_beacon, is_traffic
from v2v.ReceptionStats import ReceptionStats

logger = logging.getLogger(__name__)

BEACON_TIMER = 'beacon'
ATTACK_TIMER = 'attack'


class Application(object):
    """
    Beaconing application of one vehicle.

    The harness drives it through on_init, on_message, on_position_update and
    on_shutdown. Malicious nodes beacon like everybody else and additionally
    emit attack traffic; only benign nodes run the misbehaviour detector.
    """

    def __init__(self, env, host, config, ledger, timers):
        self.env = env
        self.host = host
        self.config = config
        self.ledger = ledger
        self.timers = timers

        self.evasive = EvasiveAction(
            timers,
            duration=config.evasive_action_duration,
            speed_limit=config.evasive_speed_limit,
            enabled=config.evasive_action_enabled,
            node_id=host.id,
        )
        self.detector = None
        if not config.malicious:
            self.detector = MisbehaviorDetector(config, host.id, self.evasive)

        self.reception = ReceptionStats()

        # Metrics
        self.attack_counter = 0
        self.normal_packets_sent = 0
        self.attack_packets_sent = 0
        self.packets_received = 0
        self.packets_dropped = 0
        self.beacons_suppressed = 0
        self.received_from = defaultdict(int)
        self.suppress_next_beacon = False

    @property
    def packets_sent(self):
        return self.normal_packets_sent + self.attack_packets_sent

    def on_init(self):
        self.reception.last_throughput_time = self.env.now
        self.timers.schedule(random.uniform(0, self.config.beacon_interval), BEACON_TIMER)

        if self.config.malicious:
            if not self.config.is_known_attack():
                logger.warning('Node %s: unknown attack type %r, falling back to unknown-attack payload',
                               self.host.id, self.config.attack_type)
            logger.warning('MALICIOUS NODE: %s | Attack type: %s | Interval: %ss',
                           self.host.id, self.config.attack_type, self.config.attack_interval)
            self.timers.schedule(self.config.attack_interval, ATTACK_TIMER)
        else:
            logger.debug('NORMAL NODE: %s', self.host.id)

    def on_message(self, msg):
        kind = msg['type']
        if kind == TIMER:
            self.handle_timer(msg['name'])
        elif is_traffic(msg):
            self.receive(msg)
        else:
            raise ValueError(f'Unknown message type: {kind}')

    def handle_timer(self, name):
        if name == BEACON_TIMER:
            self.send_beacon()
            self.timers.schedule(self.config.beacon_interval, BEACON_TIMER)
        elif name == ATTACK_TIMER:
            self.attack()
            self.timers.schedule(self.config.attack_interval, ATTACK_TIMER)
        elif name == EVASIVE_TIMER:
            self.evasive.end(self.env.now)
        else:
            raise ValueError(f'Unknown timer: {name}')

    def send_beacon(self):
        if self.suppress_next_beacon:
            self.suppress_next_beacon = False
            self.beacons_suppressed += 1
            return

        message_id = self.ledger.next_message_id()
        self.ledger.create(message_id, self.host.id, self.env.now)
        pkt = make_beacon(message_id, self.host.id, self.env.now,
                          self.host.get_position(), self.host.get_velocity())
        self.host.send(pkt)
        self.normal_packets_sent += 1

    def attack(self):
        self.attack_counter += 1
        attack_type = self.config.attack_type

        if attack_type in Attacks.SUPPRESSES_BEACON:
            self.suppress_next_beacon = True

        # attack packets draw message ids but get no ledger record
        packets = Attacks.generate(attack_type, self.ledger.next_message_id, self.host.id,
                                   self.env.now, self.host.get_position(), self.host.get_velocity())
        for pkt in packets:
            self.host.send(pkt)
            self.attack_packets_sent += 1

        logger.debug('%s ATTACK #%d sent by %s | %d packets', attack_type, self.attack_counter,
                     self.host.id, len(packets))

    def receive(self, packet):
        now = self.env.now

        if self.detector is not None:
            accepted, reason = self.detector.inspect(packet, now)
            if not accepted:
                self.packets_dropped += 1
                logger.debug('Node %s dropped packet %s from %s (%s)', self.host.id,
                             packet['message_id'], packet['sender_id'], reason)
                return

        send_time = self.ledger.add_receiver(packet['message_id'], self.host.id,
                                             packet['sender_id'], packet['created_at'])
        self.reception.on_accept(now, send_time, packet['size'])
        self.packets_received += 1
        self.received_from[packet['sender_id']] += 1

    def on_position_update(self):
        self.evasive.apply(self.host.position)
        if self.detector is not None:
            self.detector.prune(self.env.now)
        self.reception.sample_throughput(self.env.now)

    def on_shutdown(self):
        self.timers.cancel_all()
        return self.summary()

    @property
    def detection_events(self):
        return self.detector.detection_events if self.detector is not None else []

    def summary(self):
        now = self.env.now
        stats = self.detector.stats if self.detector is not None else None
        return {
            'node_id': self.host.id,
            'malicious': self.config.malicious,
            'attack_type': self.config.attack_type,
            'attack_counter': self.attack_counter,
            'normal_packets_sent': self.normal_packets_sent,
            'attack_packets_sent': self.attack_packets_sent,
            'beacons_suppressed': self.beacons_suppressed,
            'packets_received': self.packets_received,
            'packets_dropped': self.packets_dropped,
            'bytes_received': self.reception.total_bytes_received,
            'senders_heard': len(self.received_from),
            'average_throughput': self.reception.average_throughput(),
            'average_delay': self.reception.average_delay(),
            'average_jitter': self.reception.average_jitter(),
            'evasive_actions_taken': self.evasive.actions_taken,
            'total_detections': stats.total_detections if stats else 0,
            'high_rate_detections': stats.high_rate_detections if stats else 0,
            'packets_blocked': stats.packets_blocked if stats else 0,
            'blacklisted_senders': len(self.detector.blacklisted_senders(now)) if self.detector else 0,
        }
