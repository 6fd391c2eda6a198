import math, random

class Position(object):
    """
    Random-direction mobility inside a square area centred on the origin.
    A vehicle drives straight at constant speed until it hits the border,
    then picks a new heading and speed.
    """

    def __init__(self, env, initial_position, half_size, v_min = 1, v_max = 33):
        self.env = env
        self.last_pos = initial_position
        self.last_ts = env.now
        self.half_size = half_size

        self.v_min = v_min
        self.v_max = v_max  # 33 m/s ~ 120 km/h

        self.angle = 0.0
        self.speed = 0.0
        self.new_leg()

        self.env.process(self.run())

    def get_position(self):
        dt = self.env.now - self.last_ts
        vx, vy = self.get_velocity()
        return (self.last_pos[0] + vx * dt, self.last_pos[1] + vy * dt)

    def get_velocity(self):
        return (self.speed * math.cos(self.angle), self.speed * math.sin(self.angle))

    def rebase(self):
        self.last_pos = self.get_position()
        self.last_ts = self.env.now

    def limit_speed(self, limit):
        self.rebase()
        self.speed = min(self.speed, limit)

    def new_leg(self):
        self.rebase()
        self.angle = random.uniform(0, 2 * math.pi)
        self.speed = random.uniform(self.v_min, self.v_max)

    def time_to_boundary(self):
        pos = self.get_position()
        times = []
        for p, v in zip(pos, self.get_velocity()):
            if v > 0:
                times.append((self.half_size - p) / v)
            elif v < 0:
                times.append((-self.half_size - p) / v)
        return max(0, min(times)) if times else math.inf

    def run(self):
        while True:
            yield self.env.timeout(self.time_to_boundary())
            self.new_leg()
