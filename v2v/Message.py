"""
Message kinds exchanged between the harness and an application.

Messages are plain dicts tagged by 'type'. The set of kinds is closed:
BEACON (legitimate periodic status), ATTACK (traffic produced by a malicious
node) and TIMER (a self-event delivered by the scheduler).
"""

BEACON = 'BEACON'
ATTACK = 'ATTACK'
TIMER = 'TIMER'

BEACON_SIZE = 125  # 1000 bit


def make_beacon(message_id, sender_id, created_at, pos, speed):
    return {
        'type': BEACON,
        'message_id': message_id,
        'sender_id': sender_id,
        'created_at': created_at,
        'pos': pos,
        'speed': speed,
        'size': BEACON_SIZE,
    }


def make_attack(message_id, sender_id, created_at, pos, speed, attack_type, size=BEACON_SIZE):
    return {
        'type': ATTACK,
        'message_id': message_id,
        'sender_id': sender_id,
        'created_at': created_at,
        'pos': pos,
        'speed': speed,
        'size': size,
        'attack_type': attack_type,
    }


def make_timer(name):
    return {
        'type': TIMER,
        'name': name,
    }


def is_traffic(msg):
    return msg['type'] in (BEACON, ATTACK)
