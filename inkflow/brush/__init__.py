"""
Brush core.

Pressure estimation, end tapering, outline generation and path smoothing.
Pure functions over immutable value types; no I/O.
"""

from inkflow.brush.outline import build_outline, smoothed_pressures, stroke_width
from inkflow.brush.path import path_to_svg, serialize_outline, stroke_path, stroke_to_svg_path
from inkflow.brush.pressure import resolve_pressure
from inkflow.brush.taper import taper_factor
from inkflow.brush.types import (
    ERASER_COLOR,
    ClosedPath,
    CompositeMode,
    Outline,
    PathSegment,
    ResolvedPoint,
    Sample,
    Stroke,
    StrokeSettings,
    Tool,
    composite_mode,
)

__all__ = [
    "ERASER_COLOR",
    "ClosedPath",
    "CompositeMode",
    "Outline",
    "PathSegment",
    "ResolvedPoint",
    "Sample",
    "Stroke",
    "StrokeSettings",
    "Tool",
    "build_outline",
    "composite_mode",
    "path_to_svg",
    "resolve_pressure",
    "serialize_outline",
    "smoothed_pressures",
    "stroke_path",
    "stroke_to_svg_path",
    "stroke_width",
    "taper_factor",
]
