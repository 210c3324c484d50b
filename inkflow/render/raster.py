"""Raster rendering of finished strokes.

Architecture:
    - Stroke -> outline polygon -> ClosedPath (inkflow.brush)
    - ClosedPath -> dense polyline by sampling each quadratic segment
    - Polyline -> anti-aliased coverage mask with OpenCV fillPoly
      (4 fractional bits of sub-pixel precision)
    - Coverage composited into a premultiplied RGBA float32 buffer:
        paint strokes: source-over with the stroke color
        eraser strokes: destination-out (coverage removed)

Invariants:
    - Canvas starts fully transparent; paper color is only applied on
      export (flatten_onto), so erasing reveals paper, not white
    - Colors are composited in sRGB, like a browser 2-D canvas
    - Strokes render in history order

Usage:
    from inkflow.render.raster import Canvas, export_png

    canvas = Canvas(800, 600)
    canvas.draw_strokes(history)
    export_png(history, "sketch.png", 800, 600)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

import cv2
import numpy as np

from inkflow.brush.path import stroke_path
from inkflow.brush.types import ClosedPath, CompositeMode, Stroke, composite_mode
from inkflow.utils import fs
from inkflow.utils.color import parse_hex_color

logger = logging.getLogger(__name__)

CURVE_STEPS = 8
PAPER_COLOR = "#f5f5f4"
_SHIFT = 4


def flatten_path(path: ClosedPath, steps: int = CURVE_STEPS) -> np.ndarray:
    """Sample a closed quadratic path into a polyline.

    Parameters
    ----------
    path : ClosedPath
        Output of ``serialize_outline``.
    steps : int
        Samples per quadratic segment (endpoint included).

    Returns
    -------
    np.ndarray
        (N, 2) float64 vertices starting at ``path.start``; (0, 2) for
        the empty path.  The closing edge back to the start is implicit.
    """
    if path.is_empty:
        return np.zeros((0, 2), dtype=np.float64)

    start = np.asarray(path.start, dtype=np.float64)
    if not path.segments:
        return start[None, :]

    controls = np.array([s.control for s in path.segments], dtype=np.float64)
    anchors = np.array([s.anchor for s in path.segments], dtype=np.float64)
    origins = np.vstack([start[None, :], anchors[:-1]])

    t = (np.arange(1, steps + 1, dtype=np.float64) / steps)[None, :, None]  # (1, S, 1)
    p0 = origins[:, None, :]
    c = controls[:, None, :]
    a = anchors[:, None, :]

    # Quadratic Bernstein form: (1-t)^2 p0 + 2(1-t)t c + t^2 a
    pts = (1 - t) ** 2 * p0 + 2 * (1 - t) * t * c + t ** 2 * a  # (M, S, 2)
    return np.vstack([start[None, :], pts.reshape(-1, 2)])


def coverage_mask(
    polyline: np.ndarray,
    width: int,
    height: int,
    scale: float = 1.0,
) -> np.ndarray:
    """Anti-aliased fill of a closed polyline.

    Returns
    -------
    np.ndarray
        (height, width) float32 coverage in [0, 1]
    """
    mask = np.zeros((height, width), dtype=np.uint8)
    if polyline.shape[0] < 3:
        return mask.astype(np.float32)

    fixed = np.round(polyline * scale * (1 << _SHIFT)).astype(np.int32)
    cv2.fillPoly(mask, [fixed.reshape(-1, 1, 2)], 255, lineType=cv2.LINE_AA, shift=_SHIFT)
    return mask.astype(np.float32) / 255.0


class Canvas:
    """Premultiplied RGBA raster target.

    Parameters
    ----------
    width, height : int
        Size in device pixels.
    scale : float
        Canvas units -> device pixels (device pixel ratio).
    curve_steps : int
        Samples per quadratic segment when flattening.
    """

    def __init__(
        self,
        width: int,
        height: int,
        scale: float = 1.0,
        curve_steps: int = CURVE_STEPS,
    ):
        if width <= 0 or height <= 0:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.scale = scale
        self.curve_steps = curve_steps
        self.rgb = np.zeros((height, width, 3), dtype=np.float32)
        self.alpha = np.zeros((height, width), dtype=np.float32)

    def clear(self) -> None:
        self.rgb.fill(0.0)
        self.alpha.fill(0.0)

    def draw_stroke(self, stroke: Stroke) -> bool:
        """Composite one stroke; returns False when it has no outline."""
        path = stroke_path(stroke.points, stroke.settings)
        if path.is_empty:
            logger.debug("Skipping stroke without outline (%d points)", len(stroke.points))
            return False

        cov = coverage_mask(
            flatten_path(path, self.curve_steps), self.width, self.height, self.scale
        )
        keep = 1.0 - cov

        if composite_mode(stroke) is CompositeMode.ERASE:
            self.rgb *= keep[..., None]
            self.alpha *= keep
        else:
            color = np.asarray(parse_hex_color(stroke.color), dtype=np.float32)
            self.rgb = color[None, None, :] * cov[..., None] + self.rgb * keep[..., None]
            self.alpha = cov + self.alpha * keep
        return True

    def draw_strokes(self, strokes: Iterable[Stroke]) -> int:
        """Composite strokes in order; returns how many produced ink."""
        return sum(1 for s in strokes if self.draw_stroke(s))

    def to_rgba8(self) -> np.ndarray:
        """Straight-alpha (H, W, 4) uint8 image."""
        a = self.alpha[..., None]
        rgb = np.divide(self.rgb, a, out=np.zeros_like(self.rgb), where=a > 0)
        rgba = np.concatenate([rgb, a], axis=-1)
        return (np.clip(rgba, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)

    def flatten_onto(self, background: str = PAPER_COLOR) -> np.ndarray:
        """Opaque (H, W, 3) uint8 image over a solid paper color."""
        bg = np.asarray(parse_hex_color(background), dtype=np.float32)
        rgb = self.rgb + bg[None, None, :] * (1.0 - self.alpha[..., None])
        return (np.clip(rgb, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)


def render_strokes(
    strokes: Iterable[Stroke],
    width: int,
    height: int,
    *,
    scale: float = 1.0,
    curve_steps: int = CURVE_STEPS,
) -> Canvas:
    canvas = Canvas(width, height, scale=scale, curve_steps=curve_steps)
    canvas.draw_strokes(strokes)
    return canvas


def export_png(
    strokes: Iterable[Stroke],
    path: str | Path,
    width: int,
    height: int,
    *,
    background: str | None = PAPER_COLOR,
    scale: float = 1.0,
    curve_steps: int = CURVE_STEPS,
) -> None:
    """Render strokes and save a PNG atomically.

    ``background=None`` keeps transparency (RGBA output).
    """
    canvas = render_strokes(
        strokes, width, height, scale=scale, curve_steps=curve_steps
    )
    img = canvas.to_rgba8() if background is None else canvas.flatten_onto(background)
    fs.atomic_save_image(img, path)
    logger.info("Wrote %dx%d PNG to %s", width, height, path)
