"""Polygon -> smooth closed curve.

Each polygon vertex after the first becomes the control point of a
quadratic segment whose anchor is the midpoint to the next vertex
(wrapping around), which rounds every corner by half the local edge
length.  An outline of ``L`` vertices yields ``L - 1`` segments plus the
implicit close back to the start.

SVG output formats coordinates with a fixed number of decimals::

    M x0 y0 Q cx cy, ax ay Q ... Z
"""

from __future__ import annotations

from typing import Sequence

from inkflow.brush.outline import StrokePoint, build_outline
from inkflow.brush.types import ClosedPath, PathSegment, StrokeSettings, Vec2
from inkflow.brush.vectors import midpoint

SVG_PRECISION = 2


def serialize_outline(outline: Sequence[Vec2]) -> ClosedPath:
    """Quadratic midpoint smoothing of a closed polygon."""
    n = len(outline)
    if n == 0:
        return ClosedPath()

    segments = []
    for i in range(1, n):
        p1 = outline[i]
        p2 = outline[(i + 1) % n]
        segments.append(PathSegment(control=p1, anchor=midpoint(p1, p2)))

    return ClosedPath(start=outline[0], segments=tuple(segments))


def path_to_svg(path: ClosedPath, precision: int = SVG_PRECISION) -> str:
    """SVG path data for ``path``; the empty path gives ``""``."""
    if path.is_empty:
        return ""

    def fmt(p: Vec2) -> str:
        return f"{p[0]:.{precision}f} {p[1]:.{precision}f}"

    parts = [f"M {fmt(path.start)}"]
    for seg in path.segments:
        parts.append(f"Q {fmt(seg.control)}, {fmt(seg.anchor)}")
    parts.append("Z")
    return " ".join(parts)


def stroke_path(points: Sequence[StrokePoint], settings: StrokeSettings) -> ClosedPath:
    return serialize_outline(build_outline(points, settings))


def stroke_to_svg_path(
    points: Sequence[StrokePoint],
    settings: StrokeSettings,
    precision: int = SVG_PRECISION,
) -> str:
    """Outline, smooth and format one stroke in a single call."""
    return path_to_svg(stroke_path(points, settings), precision)
