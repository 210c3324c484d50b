"""Persisted stroke lists (strokes.inkflow.v1 YAML).

Converts between the runtime ``Stroke`` dataclasses and the pydantic
schema in :mod:`inkflow.utils.validators`, and reads/writes the file
through :mod:`inkflow.utils.fs` (atomic writes).

Every ``Stroke`` field survives a save/load round trip, including
absent pressures and timestamps.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

import yaml

from inkflow.brush.types import Sample, Stroke, StrokeSettings
from inkflow.utils import fs
from inkflow.utils.validators import STROKES_SCHEMA, StrokesFileV1, StrokeV1

logger = logging.getLogger(__name__)


def stroke_to_dict(stroke: Stroke) -> dict[str, Any]:
    """YAML-ready mapping for one stroke."""
    s = stroke.settings
    points = []
    for p in stroke.points:
        record: dict[str, Any] = {"x": float(p.x), "y": float(p.y)}
        if p.pressure is not None:
            record["pressure"] = float(p.pressure)
        if p.time is not None:
            record["time"] = float(p.time)
        points.append(record)

    return {
        "color": stroke.color,
        "settings": {
            "size": float(s.size),
            "thinning": float(s.thinning),
            "smoothing": float(s.smoothing),
            "color": s.color,
            "simulate_pressure": bool(s.simulate_pressure),
        },
        "points": points,
    }


def stroke_from_model(model: StrokeV1) -> Stroke:
    st = model.settings
    settings = StrokeSettings(
        size=st.size,
        thinning=st.thinning,
        smoothing=st.smoothing,
        color=st.color,
        simulate_pressure=st.simulate_pressure,
    )
    points = tuple(
        Sample(p.x, p.y, pressure=p.pressure, time=p.time) for p in model.points
    )
    return Stroke(points=points, color=model.color, settings=settings)


def strokes_to_dict(strokes: Iterable[Stroke]) -> dict[str, Any]:
    return {
        "schema": STROKES_SCHEMA,
        "strokes": [stroke_to_dict(s) for s in strokes],
    }


def parse_strokes(data: Any) -> list[Stroke]:
    """Validate an already-parsed YAML document.

    Raises
    ------
    ValueError
        If the document does not match the schema.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Stroke file root must be a mapping, got {type(data).__name__}")
    try:
        model = StrokesFileV1(**data)
    except Exception as e:
        raise ValueError(f"Stroke list validation failed: {e}") from e
    return [stroke_from_model(s) for s in model.strokes]


def load_strokes(path: str | Path) -> list[Stroke]:
    """Load and validate a stroke list.

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (message names the file)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Strokes file not found: {path}")

    try:
        data = fs.load_yaml(path)
    except yaml.YAMLError as e:
        raise ValueError(f"Strokes file is not valid YAML: {path}: {e}") from e
    try:
        strokes = parse_strokes(data)
    except ValueError as e:
        raise ValueError(f"Strokes file validation failed at {path}: {e}") from e

    logger.info("Loaded %d strokes from %s", len(strokes), path)
    return strokes


def save_strokes(strokes: Iterable[Stroke], path: str | Path) -> None:
    """Write a stroke list atomically."""
    payload = strokes_to_dict(strokes)
    fs.atomic_yaml_dump(payload, path)
    logger.info("Saved %d strokes to %s", len(payload["strokes"]), path)
