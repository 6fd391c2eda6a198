from v2v.Message import make_timer


class Timer(object):
    def __init__(self, name, due):
        self.name = name
        self.due = due
        self.active = True


class TimerService(object):
    """
    Named self-events on top of the simpy clock. Scheduling a name that is
    already pending replaces it; a cancelled timer never fires.
    """

    def __init__(self, env, deliver):
        self.env = env
        self.deliver = deliver
        self.pending = {}

    def schedule(self, delay, name):
        self.cancel(name)
        timer = Timer(name, self.env.now + delay)
        self.pending[name] = timer
        self.env.process(self.run(timer, delay))
        return timer

    def cancel(self, name):
        timer = self.pending.pop(name, None)
        if timer is not None:
            timer.active = False

    def cancel_all(self):
        for name in list(self.pending):
            self.cancel(name)

    def is_pending(self, name):
        return name in self.pending

    def run(self, timer, delay):
        yield self.env.timeout(delay)
        if not timer.active:
            return
        timer.active = False
        if self.pending.get(timer.name) is timer:
            del self.pending[timer.name]
        self.deliver(make_timer(timer.name))
