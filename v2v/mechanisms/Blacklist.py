import logging

logger = logging.getLogger(__name__)

CLEAN = 'CLEAN'
SUSPICIOUS = 'SUSPICIOUS'
BLACKLISTED = 'BLACKLISTED'


class BlacklistStateMachine(object):
    """
    Per sender: CLEAN -> SUSPICIOUS -> BLACKLISTED -> CLEAN.

    SUSPICIOUS is armed while the windowed count is above the flood threshold
    and falls back to CLEAN when it drops. A blacklisting expires after
    blacklist_timeout, which wipes the sender's window and suspicion so it is
    evaluated from scratch.
    """

    def __init__(self, tracker, flood_threshold = 50.0, blacklist_timeout = 30.0, max_suspicion_level = 3):
        self.tracker = tracker
        self.flood_threshold = flood_threshold
        self.blacklist_timeout = blacklist_timeout
        self.max_suspicion_level = max_suspicion_level

    def track_suspicion(self, state, now):
        if state.count > self.flood_threshold:
            if state.suspicion_start is None:
                state.suspicion_start = now
        else:
            state.suspicion_start = None

    def suspicion_elapsed(self, state, now):
        if state.suspicion_start is None:
            return 0.0
        return now - state.suspicion_start

    def suspicion_exceeded(self, state):
        return state.suspicion_level > self.max_suspicion_level

    def blacklist(self, state, now):
        state.blacklisted = True
        state.blacklisted_at = now

    def is_blacklisted(self, sender_id, now):
        state = self.tracker.get(sender_id)
        if state is None or not state.blacklisted:
            return False

        if now - state.blacklisted_at >= self.blacklist_timeout:
            self.recover(sender_id, state)
            return False

        return True

    def recover(self, sender_id, state):
        # give another chance with a fresh window
        state.blacklisted = False
        state.blacklisted_at = None
        state.suspicion_level = 0
        state.reset_window()
        logger.debug('Blacklist of sender %s expired', sender_id)

    def state_of(self, sender_id, now):
        if self.is_blacklisted(sender_id, now):
            return BLACKLISTED
        state = self.tracker.get(sender_id)
        if state is None:
            return CLEAN
        self.tracker.current_count(sender_id, now)
        self.track_suspicion(state, now)
        return SUSPICIOUS if state.suspicion_start is not None else CLEAN

    def blacklisted_senders(self, now):
        return [s for s in self.tracker.senders() if self.is_blacklisted(s, now)]
