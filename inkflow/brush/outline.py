"""Outline builder: point sequence -> closed stroke silhouette.

For every input point one offset is pushed to the left edge and one to
the right edge, so the polygon always has exactly ``2 * n`` vertices:

    left[0] ... left[n-1], right[n-1] ... right[0]

Two running values are folded left-to-right over the points:

    - the smoothed pressure (taper applied, then an EMA with factor 0.5)
    - the previous direction (2-tap average of consecutive tangents)

Width at a point is ``size * (1 - thinning * (1 - pressure))`` and is split
evenly between both sides.  With ``thinning = 0`` the stroke is a ribbon
of constant width ``size``.

Self-crossing strokes with sharp reversals can produce a self-intersecting
polygon; that case is not corrected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

from inkflow.brush.pressure import NEUTRAL_PRESSURE
from inkflow.brush.taper import MAX_TAPER_POINTS, taper_factor
from inkflow.brush.types import Outline, ResolvedPoint, Sample, StrokeSettings, Vec2
from inkflow.brush.vectors import add, lerp, mul, normalize, perp, sub

logger = logging.getLogger(__name__)

PRESSURE_SMOOTHING = 0.5

StrokePoint = Union[Sample, ResolvedPoint]


def stroke_width(pressure: float, size: float, thinning: float) -> float:
    """Full stroke width for a smoothed pressure value."""
    return size * (1.0 - thinning * (1.0 - pressure))


def _point_pressure(point: StrokePoint) -> float:
    return NEUTRAL_PRESSURE if point.pressure is None else point.pressure


def smoothed_pressures(
    points: Sequence[StrokePoint],
    max_taper_points: int = MAX_TAPER_POINTS,
) -> list[float]:
    """Tapered, temporally smoothed pressure for every point.

    The EMA is seeded from the first point's pressure; a missing or zero
    pressure seeds it with the neutral 0.5.
    """
    if not points:
        return []

    n = len(points)
    prev = points[0].pressure or NEUTRAL_PRESSURE
    result = []
    for i, point in enumerate(points):
        tapered = _point_pressure(point) * taper_factor(i, n, max_taper_points)
        prev = lerp(prev, tapered, PRESSURE_SMOOTHING)
        result.append(prev)
    return result


@dataclass
class _EdgeFold:
    """Accumulator for one ``build_outline`` call."""

    prev_direction: Vec2
    left: list[Vec2]
    right: list[Vec2]

    def push(self, point: Vec2, direction: Vec2, width: float) -> None:
        smooth = normalize(add(direction, self.prev_direction))
        offset = mul(perp(smooth), width / 2.0)
        self.left.append(sub(point, offset))
        self.right.append(add(point, offset))
        self.prev_direction = direction


def build_outline(
    points: Sequence[StrokePoint],
    settings: StrokeSettings,
    *,
    max_taper_points: int = MAX_TAPER_POINTS,
) -> Outline:
    """Closed polygon bounding the filled stroke.

    Parameters
    ----------
    points : Sequence[Sample | ResolvedPoint]
        Stroke points in drawing order.  Read only; a snapshot of a
        growing in-progress stroke is fine.
    settings : StrokeSettings
        ``size`` and ``thinning`` are used.
    max_taper_points : int
        Longest taper window at each end.

    Returns
    -------
    Outline
        ``2 * len(points)`` vertices, or ``[]`` for fewer than two points.
    """
    n = len(points)
    if n < 2:
        logger.debug("Skipping outline for degenerate stroke (%d points)", n)
        return []

    xy = [(p.x, p.y) for p in points]
    pressures = smoothed_pressures(points, max_taper_points)

    fold = _EdgeFold(prev_direction=normalize(sub(xy[1], xy[0])), left=[], right=[])
    for i, (point, pressure) in enumerate(zip(xy, pressures)):
        width = stroke_width(pressure, settings.size, settings.thinning)
        if i < n - 1:
            direction = normalize(sub(xy[i + 1], point))
        else:
            direction = fold.prev_direction
        fold.push(point, direction, width)

    return fold.left + fold.right[::-1]
