"""Tests for SVG document export."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from inkflow.brush.types import ERASER_COLOR, Sample, Stroke, StrokeSettings
from inkflow.render.svg import export_svg, strokes_to_svg

NS = {"svg": "http://www.w3.org/2000/svg"}


def _stroke(y: float, color: str = "#112233") -> Stroke:
    points = tuple(Sample(float(x), y, pressure=0.8) for x in range(10, 60, 5))
    return Stroke(points=points, color=color, settings=StrokeSettings())


class TestStrokesToSvg:
    def test_empty_document(self) -> None:
        root = ET.fromstring(strokes_to_svg([], 800, 600))
        assert root.get("width") == "800"
        assert root.get("viewBox") == "0 0 800 600"
        assert list(root) == []

    def test_paint_paths_in_order(self) -> None:
        doc = strokes_to_svg([_stroke(10.0, "#aa0000"), _stroke(20.0, "#00aa00")], 100, 100)
        paths = ET.fromstring(doc).findall("svg:path", NS)
        assert [p.get("fill") for p in paths] == ["#aa0000", "#00aa00"]
        assert all(p.get("d").startswith("M ") and p.get("d").endswith(" Z") for p in paths)

    def test_background_outside_masks(self) -> None:
        doc = strokes_to_svg(
            [_stroke(10.0), _stroke(10.0, ERASER_COLOR)], 100, 100, background="#f5f5f4"
        )
        root = ET.fromstring(doc)
        rect = root.find("svg:rect", NS)
        assert rect.get("fill") == "#f5f5f4"
        group = root.find("svg:g", NS)
        assert group.get("mask") == "url(#erase-0)"
        assert group.find("svg:path", NS) is not None

    def test_eraser_masks_only_earlier_ink(self) -> None:
        doc = strokes_to_svg(
            [_stroke(10.0), _stroke(10.0, ERASER_COLOR), _stroke(30.0, "#445566")],
            100,
            100,
        )
        root = ET.fromstring(doc)
        masks = root.findall("svg:defs/svg:mask", NS)
        assert [m.get("id") for m in masks] == ["erase-0"]
        # Stroke drawn after the eraser sits outside the masked group
        top_paths = root.findall("svg:path", NS)
        assert [p.get("fill") for p in top_paths] == ["#445566"]

    def test_nested_erasers(self) -> None:
        doc = strokes_to_svg(
            [_stroke(10.0), _stroke(10.0, ERASER_COLOR), _stroke(20.0), _stroke(20.0, ERASER_COLOR)],
            100,
            100,
        )
        root = ET.fromstring(doc)
        outer = root.find("svg:g", NS)
        assert outer.get("mask") == "url(#erase-1)"
        assert outer.find("svg:g", NS).get("mask") == "url(#erase-0)"

    def test_degenerate_strokes_skipped(self) -> None:
        single = Stroke(points=(Sample(1.0, 1.0),), color="#000000", settings=StrokeSettings())
        root = ET.fromstring(strokes_to_svg([single], 10, 10))
        assert root.findall("svg:path", NS) == []

    def test_precision(self) -> None:
        doc = strokes_to_svg([_stroke(10.0)], 100, 100, precision=0)
        d = ET.fromstring(doc).find("svg:path", NS).get("d")
        assert "." not in d


def test_export_svg(tmp_path) -> None:
    path = tmp_path / "out" / "sketch.svg"
    export_svg([_stroke(10.0)], path, 100, 100)
    root = ET.parse(path).getroot()
    assert root.tag == "{http://www.w3.org/2000/svg}svg"
