"""Value types shared by the brush pipeline.

Every record is an immutable, slotted dataclass.  Coordinates are canvas
units (CSS pixels for pointer input, top-left origin, +Y down).  Times are
milliseconds on a monotonic clock.

Pipeline
--------
``Sample`` (raw pointer input) -> ``ResolvedPoint`` (pressure decided) ->
outline polygon (``list[Vec2]``) -> ``ClosedPath`` (quadratic segments).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

Vec2 = tuple[float, float]
"""Plain 2-D point / vector ``(x, y)``."""

Outline = list[Vec2]
"""Closed polygon, cyclic, no duplicated closing vertex."""

ERASER_COLOR = "eraser"
"""Sentinel color token: the stroke subtracts coverage instead of painting."""


class Tool(Enum):
    """Active drawing tool."""

    PEN = "pen"
    ERASER = "eraser"


class CompositeMode(Enum):
    """How a stroke's silhouette is combined with the canvas."""

    PAINT = "source-over"
    ERASE = "destination-out"


# ---------------------------------------------------------------------------
# Input samples
# ---------------------------------------------------------------------------


def _check_unit(name: str, value: float | None) -> None:
    if value is not None and not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be in [0, 1], got {value}")


@dataclass(frozen=True, slots=True)
class Sample:
    """One pointer sample.

    Parameters
    ----------
    x, y : float
        Position in canvas units.
    pressure : float | None
        Device pressure in [0, 1].  ``None`` when the device reports none.
    time : float | None
        Timestamp in ms.  ``None`` when unknown.
    """

    x: float
    y: float
    pressure: float | None = None
    time: float | None = None

    def __post_init__(self) -> None:
        _check_unit("Sample pressure", self.pressure)

    @property
    def xy(self) -> Vec2:
        return (self.x, self.y)


@dataclass(frozen=True, slots=True)
class ResolvedPoint:
    """A sample whose pressure has been decided (device or simulated)."""

    x: float
    y: float
    pressure: float

    def __post_init__(self) -> None:
        _check_unit("ResolvedPoint pressure", self.pressure)

    @property
    def xy(self) -> Vec2:
        return (self.x, self.y)


# ---------------------------------------------------------------------------
# Stroke records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class StrokeSettings:
    """Per-stroke brush settings.

    Parameters
    ----------
    size : float
        Full stroke width at pressure 1, in canvas units.  Must be > 0.
    thinning : float
        How strongly pressure modulates width.  0 gives a uniform width,
        1 lets width fall to zero at pressure 0.
    smoothing : float
        Reserved.  Carried through persistence but not read by the
        outline builder.
    color : str
        Opaque fill token, usually ``"#rrggbb"``.
    simulate_pressure : bool
        Derive pressure from drawing velocity when the device reports none.
    """

    size: float = 14.0
    thinning: float = 0.75
    smoothing: float = 0.5
    color: str = "#1c1917"
    simulate_pressure: bool = True

    def __post_init__(self) -> None:
        if not self.size > 0:
            raise ValueError(f"size must be > 0, got {self.size}")
        _check_unit("thinning", self.thinning)
        _check_unit("smoothing", self.smoothing)


@dataclass(frozen=True, slots=True)
class Stroke:
    """One finished pointer-down to pointer-up ink mark.

    ``color`` is either the paint color or :data:`ERASER_COLOR`.
    """

    points: tuple[Sample, ...]
    color: str
    settings: StrokeSettings

    @property
    def is_eraser(self) -> bool:
        return self.color == ERASER_COLOR


def composite_mode(stroke: Stroke) -> CompositeMode:
    """Map a stroke's color token to the compositing mode."""
    return CompositeMode.ERASE if stroke.is_eraser else CompositeMode.PAINT


# ---------------------------------------------------------------------------
# Path output
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PathSegment:
    """Quadratic curve from the current position through ``control`` to ``anchor``."""

    control: Vec2
    anchor: Vec2


@dataclass(frozen=True, slots=True)
class ClosedPath:
    """Smooth closed curve: move to ``start``, follow ``segments``, close.

    ``start`` is ``None`` for the empty path (draw nothing).
    """

    start: Vec2 | None = None
    segments: tuple[PathSegment, ...] = ()

    @property
    def is_empty(self) -> bool:
        return self.start is None
