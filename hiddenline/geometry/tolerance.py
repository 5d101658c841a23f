from __future__ import annotations

import math

# Absolute epsilon shared by every tolerant comparison (not scale-relative).
DEFAULT_EPS = 1e-3


# Full turn, used by angle normalisation.
TWO_PI = 2.0 * math.pi


def compare(x: float, y: float, eps: float = DEFAULT_EPS) -> int:
    """Three-way compare ``x`` against ``y`` within ``eps``."""
    diff = float(x) - float(y)
    if diff > eps:
        return 1
    if diff < -eps:
        return -1
    return 0


def near(x: float, y: float, eps: float = DEFAULT_EPS) -> bool:
    return compare(x, y, eps) == 0


def normalize_angle(rad: float) -> float:
    """Map an angle into [-pi, pi)."""
    return float(rad) - TWO_PI * math.floor((float(rad) + math.pi) / TWO_PI)


def angle_equal(r1: float, r2: float, eps: float = DEFAULT_EPS) -> bool:
    return near(normalize_angle(r1 - r2), 0.0, eps)
