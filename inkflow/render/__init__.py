"""
Rendering of finished strokes: raster compositing, PNG and SVG export.
"""

from inkflow.render.raster import Canvas, export_png, flatten_path, render_strokes
from inkflow.render.svg import export_svg, strokes_to_svg

__all__ = [
    "Canvas",
    "export_png",
    "export_svg",
    "flatten_path",
    "render_strokes",
    "strokes_to_svg",
]
