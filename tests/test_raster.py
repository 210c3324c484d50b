"""Tests for raster compositing and PNG export.

Validates that:
    - Quadratic paths flatten to the expected number of vertices
    - Paint strokes cover their interior fully and leave the rest untouched
    - Eraser strokes remove earlier ink (destination-out)
    - Export flattens onto the paper color, or keeps alpha when asked
"""

from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from inkflow.brush.path import serialize_outline
from inkflow.brush.types import ERASER_COLOR, ClosedPath, Sample, Stroke, StrokeSettings
from inkflow.render.raster import Canvas, export_png, flatten_path, render_strokes


def _bar(color: str = "#ff0000") -> Stroke:
    # Horizontal ribbon, 10 units wide, centred on y = 50
    points = tuple(Sample(float(x), 50.0) for x in range(10, 100, 10))
    return Stroke(points=points, color=color, settings=StrokeSettings(size=10.0, thinning=0.0))


@pytest.fixture()
def canvas() -> Canvas:
    return Canvas(100, 100)


class TestFlattenPath:
    def test_empty(self) -> None:
        assert flatten_path(ClosedPath()).shape == (0, 2)

    def test_start_only(self) -> None:
        out = flatten_path(ClosedPath(start=(3.0, 4.0)))
        np.testing.assert_allclose(out, [[3.0, 4.0]])

    def test_vertex_count_and_endpoints(self) -> None:
        path = serialize_outline([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)])
        out = flatten_path(path, steps=4)
        assert out.shape == (1 + 3 * 4, 2)
        np.testing.assert_allclose(out[0], (0.0, 0.0))
        np.testing.assert_allclose(out[4], path.segments[0].anchor)
        np.testing.assert_allclose(out[-1], path.segments[-1].anchor)


class TestCanvas:
    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError, match="positive"):
            Canvas(0, 10)

    def test_starts_transparent(self, canvas: Canvas) -> None:
        assert canvas.alpha.max() == 0.0
        assert canvas.to_rgba8()[..., 3].max() == 0

    def test_paint_covers_interior(self, canvas: Canvas) -> None:
        assert canvas.draw_stroke(_bar()) is True
        assert canvas.alpha[50, 50] == pytest.approx(1.0, abs=1e-3)
        assert canvas.alpha[5, 5] == 0.0
        assert canvas.alpha[80, 50] == 0.0

        rgba = canvas.to_rgba8()
        assert tuple(rgba[50, 50]) == (255, 0, 0, 255)

    def test_later_paint_on_top(self, canvas: Canvas) -> None:
        canvas.draw_strokes([_bar("#ff0000"), _bar("#0000ff")])
        assert tuple(canvas.to_rgba8()[50, 50]) == (0, 0, 255, 255)

    def test_eraser_removes_ink(self, canvas: Canvas) -> None:
        canvas.draw_stroke(_bar())
        canvas.draw_stroke(_bar(ERASER_COLOR))
        assert canvas.alpha[50, 50] == pytest.approx(0.0, abs=1e-3)

    def test_eraser_on_empty_canvas_is_noop(self, canvas: Canvas) -> None:
        canvas.draw_stroke(_bar(ERASER_COLOR))
        assert canvas.alpha.max() == 0.0

    def test_degenerate_stroke_skipped(self, canvas: Canvas) -> None:
        single = Stroke(points=(Sample(5.0, 5.0),), color="#000000", settings=StrokeSettings())
        assert canvas.draw_stroke(single) is False
        assert canvas.draw_strokes([single, _bar()]) == 1

    def test_flatten_onto_paper(self, canvas: Canvas) -> None:
        canvas.draw_stroke(_bar())
        img = canvas.flatten_onto()
        assert img.shape == (100, 100, 3)
        assert tuple(img[5, 5]) == (245, 245, 244)
        assert tuple(img[50, 50]) == (255, 0, 0)

    def test_clear(self, canvas: Canvas) -> None:
        canvas.draw_stroke(_bar())
        canvas.clear()
        assert canvas.alpha.max() == 0.0

    def test_scale(self) -> None:
        canvas = render_strokes([_bar()], 200, 200, scale=2.0)
        assert canvas.alpha[100, 100] == pytest.approx(1.0, abs=1e-3)
        assert canvas.alpha[50, 50] == 0.0


class TestExportPng:
    def test_opaque(self, tmp_path) -> None:
        path = tmp_path / "sketch.png"
        export_png([_bar()], path, 100, 100)
        with Image.open(path) as img:
            assert img.mode == "RGB"
            assert img.size == (100, 100)
            assert img.getpixel((5, 5)) == (245, 245, 244)

    def test_transparent(self, tmp_path) -> None:
        path = tmp_path / "sketch.png"
        export_png([_bar()], path, 100, 100, background=None)
        with Image.open(path) as img:
            assert img.mode == "RGBA"
            assert img.getpixel((5, 5))[3] == 0
            assert img.getpixel((50, 50)) == (255, 0, 0, 255)
