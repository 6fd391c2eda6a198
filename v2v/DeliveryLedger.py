"""
Shared record of which nodes accepted each sent message.

One ledger is created per run and handed to every node. Senders create a
record when they send a legitimate beacon, receivers add themselves after
their detector accepted the message. Reporting reads a snapshot once all
nodes have finished.
"""

import itertools
import logging
import threading
from dataclasses import dataclass, field
from typing import Set

logger = logging.getLogger(__name__)


@dataclass
class DeliveryRecord:
    sender_id: int
    send_time: float
    receivers: Set[int] = field(default_factory=set)


class DeliveryLedger(object):
    def __init__(self):
        self.records = {}
        self.inconsistencies = 0
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def __len__(self):
        with self._lock:
            return len(self.records)

    def next_message_id(self):
        with self._lock:
            return next(self._ids)

    def create(self, message_id, sender_id, send_time):
        with self._lock:
            record = DeliveryRecord(sender_id, send_time)
            self.records[message_id] = record
            return record

    def add_receiver(self, message_id, receiver_id, sender_id=None, send_time=None):
        """
        Add receiver_id to the message's receiver set. A message without a
        record gets one built from the observed sender and time.
        Returns the record's send time.
        """
        with self._lock:
            record = self.records.get(message_id)
            if record is None:
                self.inconsistencies += 1
                logger.warning('Received packet %s not found in delivery ledger (sender %s)', message_id, sender_id)
                record = DeliveryRecord(sender_id, send_time)
                self.records[message_id] = record
            record.receivers.add(receiver_id)
            return record.send_time

    def get(self, message_id):
        with self._lock:
            r = self.records.get(message_id)
            if r is None:
                return None
            return DeliveryRecord(r.sender_id, r.send_time, frozenset(r.receivers))

    def snapshot(self):
        with self._lock:
            return {
                message_id: DeliveryRecord(r.sender_id, r.send_time, frozenset(r.receivers))
                for message_id, r in self.records.items()
            }
