import math


def clamp(v: float, lo: float, hi: float) -> float:
    return lo if v < lo else hi if v > hi else v

def saturate(v: float) -> float: return clamp(v, 0.0, 1.0)


def snap_to_zero(v: float, eps: float) -> float:
    return 0.0 if abs(v) < eps else v


def ease_exp(current: float, target: float, rate: float, dt: float) -> float:
    """
    Framerate-independent exponential ease of `current` toward `target`.

    Each call closes (1 - e^(-rate*dt)) of the remaining gap, so a larger
    rate converges faster and splitting dt across frames gives the same
    result. dt <= 0 (or rate <= 0) returns `current` unchanged.
    """
    if dt <= 0.0 or rate <= 0.0:
        return current
    return current + (target - current) * (1.0 - math.exp(-rate * dt))
