import logging

logger = logging.getLogger(__name__)

EVASIVE_TIMER = 'evasive'


class EvasiveAction(object):
    """
    Local protective response of a node that detected an attack: slow down
    for a fixed period, then return to normal driving.
    """

    def __init__(self, timers, duration = 5.0, speed_limit = 5.0, enabled=True, node_id=None):
        self.timers = timers
        self.duration = duration
        self.speed_limit = speed_limit
        self.enabled = enabled
        self.node_id = node_id

        self.under_attack = False
        self.attack_detected_at = None
        self.actions_taken = 0

    def trigger(self, now):
        if not self.enabled or self.under_attack:
            return False

        self.under_attack = True
        self.attack_detected_at = now
        self.actions_taken += 1
        self.timers.schedule(self.duration, EVASIVE_TIMER)
        logger.info('EVASIVE ACTION: node %s taking defensive measures at %.3f', self.node_id, now)
        return True

    def end(self, now):
        if not self.under_attack:
            return
        self.under_attack = False
        logger.info('RECOVERED: node %s back to normal state at %.3f', self.node_id, now)

    def apply(self, position):
        if self.under_attack and position.speed > self.speed_limit:
            position.limit_speed(self.speed_limit)
