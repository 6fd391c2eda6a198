import math

POSITION_NOT_FINITE = 'position_not_finite'
SPEED_NOT_FINITE = 'speed_not_finite'
SPEED_TOO_HIGH = 'speed_too_high'
FROM_THE_FUTURE = 'from_the_future'
TOO_OLD = 'too_old'


class ContentValidator(object):
    def __init__(self, max_reasonable_speed = 50.0, max_message_age = 5.0):
        self.max_reasonable_speed = max_reasonable_speed
        self.max_message_age = max_message_age

    def check(self, packet, now):
        """Return the first reason the packet is implausible, or None."""
        x, y = packet['pos']
        if not (math.isfinite(x) and math.isfinite(y)):
            return POSITION_NOT_FINITE

        vx, vy = packet['speed']
        speed = math.hypot(vx, vy)
        if not math.isfinite(speed):
            return SPEED_NOT_FINITE
        if speed > self.max_reasonable_speed:
            return SPEED_TOO_HIGH

        created_at = packet['created_at']
        if created_at > now:
            return FROM_THE_FUTURE
        if now - created_at > self.max_message_age:
            return TOO_OLD

        return None

    def is_valid(self, packet, now):
        return self.check(packet, now) is None
