# motion.py
"""
Closed-form one-dimensional kinematic curves used to animate the pan offset.

Times are in milliseconds, positions in pixels, velocities in pixels/ms.
Each curve is valid until `end`; past it the curve rests at its final position.
"""


def _travel(v: float, a: float, t: float) -> float:
    # Distance covered from velocity v under constant acceleration a after time t
    return v * t + a * t * t / 2.0


class Ease:
    """
    Two constant-acceleration phases from x0 (velocity v0) to x1, arriving at
    t1 with zero velocity. The interval is split at its midpoint; vmid is the
    velocity there that makes the two phases cover exactly x1 - x0.
    """
    __slots__ = ("x0", "x1", "v0", "t0", "end", "tmid", "vmid", "a0", "a1")

    def __init__(self, x0: float, x1: float, v0: float, t0: float, t1: float):
        if t1 <= t0:
            raise ValueError(f"Ease: t1 must be after t0 (t0={t0}, t1={t1})")
        dx = x1 - x0
        dt = t1 - t0
        self.x0 = x0
        self.x1 = x1
        self.v0 = v0
        self.t0 = t0
        self.end = t1
        self.tmid = t0 + dt / 2.0
        self.vmid = 2.0 * dx / dt - v0 / 2.0
        self.a0 = (self.vmid - v0) / (dt / 2.0)
        self.a1 = -self.vmid / (dt / 2.0)

    def x(self, t: float) -> float:
        if t >= self.end:
            return self.x1
        if t <= self.tmid:
            return self.x0 + _travel(self.v0, self.a0, t - self.t0)
        return (self.x0 + _travel(self.v0, self.a0, self.tmid - self.t0)
                + _travel(self.vmid, self.a1, t - self.tmid))

    def v(self, t: float) -> float:
        if t >= self.end:
            return 0.0
        if t <= self.tmid:
            return self.v0 + self.a0 * (t - self.t0)
        return self.vmid + self.a1 * (t - self.tmid)

    def __repr__(self):
        return f"Ease({self.x0:g} -> {self.x1:g}, v0={self.v0:g}, {self.t0:g}..{self.end:g})"


class Decelerate:
    """Coast from x0 with velocity v0, braking uniformly to rest at t1."""
    __slots__ = ("x0", "v0", "t0", "end", "a")

    def __init__(self, x0: float, v0: float, t0: float, t1: float):
        if t1 <= t0:
            raise ValueError(f"Decelerate: t1 must be after t0 (t0={t0}, t1={t1})")
        self.x0 = x0
        self.v0 = v0
        self.t0 = t0
        self.end = t1
        self.a = -v0 / (t1 - t0)

    def x(self, t: float) -> float:
        return self.x0 + _travel(self.v0, self.a, min(t, self.end) - self.t0)

    def v(self, t: float) -> float:
        if t >= self.end:
            return 0.0
        return self.v0 + self.a * (t - self.t0)

    def __repr__(self):
        return f"Decelerate({self.x0:g}, v0={self.v0:g}, {self.t0:g}..{self.end:g})"
