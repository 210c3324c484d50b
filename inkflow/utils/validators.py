"""YAML schema validation for persisted stroke lists.

Provides pydantic models for the stroke-list file (strokes.inkflow.v1):
    - SampleV1: one pointer sample (x, y, optional pressure/time)
    - StrokeSettingsV1: brush settings captured at pointer-down
    - StrokeV1: points + color token + settings
    - StrokesFileV1: schema tag + ordered stroke list

Validation is fail-fast with actionable messages (offending field,
expected range).  Conversion to the runtime dataclasses lives in
inkflow.session.storage so this module stays free of upper-layer imports.

Units:
    - Geometry: canvas units (CSS pixels)
    - Time: milliseconds
    - Pressure, thinning, smoothing: [0.0, 1.0]
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .color import is_hex_color

STROKES_SCHEMA = "strokes.inkflow.v1"
ERASER_TOKEN = "eraser"


def _check_color(v: str) -> str:
    if v != ERASER_TOKEN and not is_hex_color(v):
        raise ValueError(f"color must be '#rrggbb', '#rgb' or '{ERASER_TOKEN}', got '{v}'")
    return v


class SampleV1(BaseModel):
    """Pointer sample."""
    x: float
    y: float
    pressure: Optional[float] = Field(None, ge=0.0, le=1.0, description="Pressure in [0, 1]")
    time: Optional[float] = Field(None, description="Timestamp (ms)")


class StrokeSettingsV1(BaseModel):
    """Brush settings snapshot."""
    size: float = Field(..., gt=0.0, description="Stroke width at full pressure")
    thinning: float = Field(..., ge=0.0, le=1.0)
    smoothing: float = Field(0.5, ge=0.0, le=1.0, description="Reserved")
    color: str
    simulate_pressure: bool = True

    @field_validator('color')
    @classmethod
    def validate_color(cls, v: str) -> str:
        return _check_color(v)


class StrokeV1(BaseModel):
    """Single finished stroke."""
    color: str
    settings: StrokeSettingsV1
    points: List[SampleV1] = Field(..., min_length=2, description="At least 2 samples")

    @field_validator('color')
    @classmethod
    def validate_color(cls, v: str) -> str:
        return _check_color(v)


class StrokesFileV1(BaseModel):
    """Container for an ordered stroke list."""
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field(STROKES_SCHEMA, alias="schema", description="Schema version")
    strokes: List[StrokeV1] = Field(default_factory=list)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != STROKES_SCHEMA:
            raise ValueError(f"Expected schema '{STROKES_SCHEMA}', got '{v}'")
        return v
