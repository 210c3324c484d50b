"""SVG document export.

Paint strokes become filled ``<path>`` elements.  An eraser stroke only
removes ink drawn before it, so everything rendered so far is wrapped in
a group masked by the eraser silhouette (white = keep, black = remove).
The paper background, when given, sits outside every mask.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable
from xml.sax.saxutils import quoteattr

from inkflow.brush.path import SVG_PRECISION, stroke_to_svg_path
from inkflow.brush.types import Stroke
from inkflow.utils import fs

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"


def strokes_to_svg(
    strokes: Iterable[Stroke],
    width: float,
    height: float,
    *,
    background: str | None = None,
    precision: int = SVG_PRECISION,
) -> str:
    """Standalone SVG document for a stroke list."""
    defs: list[str] = []
    body = ""
    mask_count = 0

    for stroke in strokes:
        d = stroke_to_svg_path(stroke.points, stroke.settings, precision)
        if not d:
            continue
        if stroke.is_eraser:
            mask_id = f"erase-{mask_count}"
            mask_count += 1
            defs.append(
                f'<mask id="{mask_id}" maskUnits="userSpaceOnUse" '
                f'x="0" y="0" width="{width}" height="{height}">'
                f'<rect width="{width}" height="{height}" fill="white"/>'
                f'<path d="{d}" fill="black"/></mask>'
            )
            body = f'<g mask="url(#{mask_id})">{body}</g>'
        else:
            body += f'<path d="{d}" fill={quoteattr(stroke.color)}/>'

    parts = [
        f'<svg xmlns="{SVG_NS}" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">'
    ]
    if defs:
        parts.append("<defs>" + "".join(defs) + "</defs>")
    if background is not None:
        parts.append(f'<rect width="{width}" height="{height}" fill={quoteattr(background)}/>')
    parts.append(body)
    parts.append("</svg>")
    return "\n".join(p for p in parts if p) + "\n"


def export_svg(
    strokes: Iterable[Stroke],
    path: str | Path,
    width: float,
    height: float,
    *,
    background: str | None = None,
    precision: int = SVG_PRECISION,
) -> None:
    """Write an SVG document atomically."""
    text = strokes_to_svg(
        strokes, width, height, background=background, precision=precision
    )
    fs.atomic_write_text(path, text)
    logger.info("Wrote SVG to %s", path)
