from v2v.Application import Application
from v2v.Position import Position
from v2v.Timers import TimerService


class Node(object):
    def __init__(self, env, node_id, sim_size, pos, radio_medium, ledger, config):
        self.position = Position(env, pos, sim_size / 2)
        self.env = env
        self.id = node_id
        self.config = config
        self.radio_medium = radio_medium
        self.running = True
        self.summary = None

        self.timers = TimerService(env, self.deliver)
        self.application = Application(env, self, config, ledger, self.timers)

        # Wire up
        radio_medium.register(self)
        self.env.process(self.position_updates())
        self.application.on_init()

    def get_position(self):
        return self.position.get_position()

    def get_velocity(self):
        return self.position.get_velocity()

    def send(self, packet):
        self.radio_medium.receive_from_upper(self, packet)

    def receive_from_lower(self, packet):
        if self.running:
            self.deliver(packet)

    def deliver(self, msg):
        self.application.on_message(msg)

    def position_updates(self):
        while self.running:
            yield self.env.timeout(self.config.position_update_interval)
            if self.running:
                self.application.on_position_update()

    def shutdown(self):
        if not self.running:
            return self.summary
        self.running = False
        try:
            self.summary = self.application.on_shutdown()
        finally:
            self.timers.cancel_all()
        return self.summary
