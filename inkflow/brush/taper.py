"""Pressure taper at both ends of a stroke.

The taper window is ``min(MAX_TAPER_POINTS, n // 3)`` points long, so short
strokes taper over their whole length and come out as rounded dots, while
long strokes only lift over their first and last few points.  Inside the
window the factor follows a cubic ease-out from 0 at the tip to 1.
"""

from __future__ import annotations

MAX_TAPER_POINTS = 5


def taper_length(total_points: int, max_points: int = MAX_TAPER_POINTS) -> int:
    return min(max_points, total_points // 3)


def ease_out_cubic(t: float) -> float:
    return 1.0 - (1.0 - t) ** 3


def taper_factor(
    index: int,
    total_points: int,
    max_points: int = MAX_TAPER_POINTS,
) -> float:
    """Multiplier in [0, 1] applied to the pressure of point ``index``.

    Parameters
    ----------
    index : int
        Position of the point in the stroke.
    total_points : int
        Number of points in the stroke.
    max_points : int
        Longest allowed taper window.

    Returns
    -------
    float
        0 at either tip, 1 outside both taper windows.
    """
    length = taper_length(total_points, max_points)
    if length == 0:
        return 1.0

    if index < length:
        return ease_out_cubic(index / length)
    if index > total_points - 1 - length:
        return ease_out_cubic((total_points - 1 - index) / length)
    return 1.0
