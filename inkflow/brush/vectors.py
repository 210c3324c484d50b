"""2-D vector helpers on plain ``(x, y)`` tuples.

The outline fold works one point at a time, so these stay scalar rather
than vectorised.  ``normalize`` maps the zero vector to ``(0, 0)``: a
duplicated input point then contributes no width instead of NaN.
"""

from __future__ import annotations

import math

from inkflow.brush.types import Vec2


def dist(a: Vec2, b: Vec2) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def add(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] + b[0], a[1] + b[1])


def sub(a: Vec2, b: Vec2) -> Vec2:
    return (a[0] - b[0], a[1] - b[1])


def mul(a: Vec2, n: float) -> Vec2:
    return (a[0] * n, a[1] * n)


def perp(a: Vec2) -> Vec2:
    """Rotate by 90 degrees: ``(x, y) -> (y, -x)``."""
    return (a[1], -a[0])


def midpoint(a: Vec2, b: Vec2) -> Vec2:
    return ((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0)


def normalize(a: Vec2) -> Vec2:
    """Unit vector along ``a``; the zero vector stays ``(0, 0)``."""
    d = math.hypot(a[0], a[1])
    if d == 0:
        return (0.0, 0.0)
    return (a[0] / d, a[1] / d)


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
