"""
Traffic produced by a malicious node on each attack tick.

These payloads only exist to feed the detectors of other nodes; a type the
simulator does not know falls back to a single generic packet.
"""

import logging
import math

from v2v.Message import make_attack

logger = logging.getLogger(__name__)

FLOOD_BURST = 200
HELLO_FLOOD_BURST = 60
SYBIL_IDENTITIES = 5
SYBIL_ID_OFFSET = 100000
REPLAY_AGE = 10.0
TIMING_SKEW = 2.0

# attack types that act by withholding the node's own beacon
SUPPRESSES_BEACON = ('selective_forwarding',)


def sybil_ids(sender_id):
    base = SYBIL_ID_OFFSET + sender_id * SYBIL_IDENTITIES
    return [base + k for k in range(SYBIL_IDENTITIES)]


def generate(attack_type, next_id, sender_id, now, pos, speed):
    """
    Build the packets of one attack tick.

    next_id is called once per packet to draw a message id, pos and speed are
    the node's true kinematics at time now.
    """
    x, y = pos

    if attack_type in ('none', 'selective_forwarding'):
        return []

    if attack_type == 'flood':
        return [make_attack(next_id(), sender_id, now, pos, (150.0 + i, 0.0), 'flood', size=1400)
                for i in range(FLOOD_BURST)]

    if attack_type == 'spoof':
        # stationary vehicle far away
        return [make_attack(next_id(), sender_id, now, (7000.0, 7000.0), (0.0, 0.0), 'spoof', size=200)]

    if attack_type == 'replay':
        return [make_attack(next_id(), sender_id, now - REPLAY_AGE, (x - 500, y - 500), (100.0, 0.0), 'replay')]

    if attack_type == 'sybil':
        return [make_attack(next_id(), fake_id, now, (x + 10 * k, y), speed, 'sybil')
                for k, fake_id in enumerate(sybil_ids(sender_id))]

    if attack_type == 'timing':
        return [make_attack(next_id(), sender_id, now + TIMING_SKEW, pos, speed, 'timing')]

    if attack_type == 'hello_flood':
        return [make_attack(next_id(), sender_id, now, pos, speed, 'hello_flood', size=20)
                for _ in range(HELLO_FLOOD_BURST)]

    if attack_type == 'data_manipulation':
        return [make_attack(next_id(), sender_id, now, (math.nan, math.nan), speed, 'data_manipulation')]

    logger.debug('Unknown attack type %r, sending unknown-attack payload', attack_type)
    return [make_attack(next_id(), sender_id, now, pos, speed, 'unknown-attack', size=200)]
