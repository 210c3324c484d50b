"""Tests for persisted stroke lists (strokes.inkflow.v1)."""

from __future__ import annotations

import pytest
import yaml

from inkflow.brush.types import ERASER_COLOR, Sample, Stroke, StrokeSettings
from inkflow.session.storage import (
    load_strokes,
    parse_strokes,
    save_strokes,
    stroke_to_dict,
    strokes_to_dict,
)
from inkflow.utils.validators import STROKES_SCHEMA


@pytest.fixture()
def strokes() -> list[Stroke]:
    pen = Stroke(
        points=(
            Sample(10.0, 20.0, pressure=0.1, time=0.0),
            Sample(15.0, 22.0, pressure=0.83, time=16.0),
            Sample(21.5, 25.0),
        ),
        color="#1c1917",
        settings=StrokeSettings(size=9.0, thinning=0.5),
    )
    eraser = Stroke(
        points=(Sample(0.0, 0.0, time=5.0), Sample(40.0, 40.0, time=30.0)),
        color=ERASER_COLOR,
        settings=StrokeSettings(simulate_pressure=False),
    )
    return [pen, eraser]


class TestDicts:
    def test_absent_fields_omitted(self, strokes: list[Stroke]) -> None:
        points = stroke_to_dict(strokes[0])["points"]
        assert points[0] == {"x": 10.0, "y": 20.0, "pressure": 0.1, "time": 0.0}
        assert points[2] == {"x": 21.5, "y": 25.0}

    def test_schema_tag(self, strokes: list[Stroke]) -> None:
        assert strokes_to_dict(strokes)["schema"] == STROKES_SCHEMA


class TestRoundtrip:
    def test_save_load(self, tmp_path, strokes: list[Stroke]) -> None:
        path = tmp_path / "sketch.yaml"
        save_strokes(strokes, path)
        assert load_strokes(path) == strokes

    def test_empty_list(self, tmp_path) -> None:
        path = tmp_path / "empty.yaml"
        save_strokes([], path)
        assert load_strokes(path) == []


class TestValidation:
    def _doc(self, strokes: list[Stroke]) -> dict:
        return strokes_to_dict(strokes)

    def test_wrong_schema(self, strokes: list[Stroke]) -> None:
        doc = self._doc(strokes)
        doc["schema"] = "strokes.inkflow.v0"
        with pytest.raises(ValueError, match="Expected schema"):
            parse_strokes(doc)

    def test_single_point_stroke_rejected(self, strokes: list[Stroke]) -> None:
        doc = self._doc(strokes)
        doc["strokes"][0]["points"] = doc["strokes"][0]["points"][:1]
        with pytest.raises(ValueError):
            parse_strokes(doc)

    def test_bad_color(self, strokes: list[Stroke]) -> None:
        doc = self._doc(strokes)
        doc["strokes"][0]["color"] = "crimson"
        with pytest.raises(ValueError, match="color"):
            parse_strokes(doc)

    def test_pressure_out_of_range(self, strokes: list[Stroke]) -> None:
        doc = self._doc(strokes)
        doc["strokes"][0]["points"][1]["pressure"] = 1.4
        with pytest.raises(ValueError):
            parse_strokes(doc)

    def test_root_must_be_mapping(self) -> None:
        with pytest.raises(ValueError, match="mapping"):
            parse_strokes([1, 2, 3])

    def test_load_names_file(self, tmp_path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.safe_dump({"schema": "other", "strokes": []}))
        with pytest.raises(ValueError, match="bad.yaml"):
            load_strokes(path)

    def test_load_missing(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_strokes(tmp_path / "missing.yaml")

    def test_malformed_yaml(self, tmp_path) -> None:
        path = tmp_path / "broken.yaml"
        path.write_text("schema: [unclosed\n  - : :\n")
        with pytest.raises(ValueError, match="not valid YAML.*broken.yaml"):
            load_strokes(path)
