"""Pressure estimation for devices without a usable pressure sensor.

Mice and most trackpads report either 0 or the neutral 0.5 for every
event.  Those two values are treated as "no signal" and replaced by a
pressure derived from drawing velocity: slow strokes press harder and
come out thicker, fast strokes come out thinner.

Velocity is measured in canvas units per millisecond and normalised by
``MAX_VELOCITY``; pressure is its inverse, clamped to
``[MIN_PRESSURE, MAX_PRESSURE]``.

A genuine device reading of exactly 0.5 is indistinguishable from a
mouse and is simulated as well.
"""

from __future__ import annotations

from typing import Sequence

from inkflow.brush.types import Sample
from inkflow.brush.vectors import clamp, dist

NEUTRAL_PRESSURE = 0.5
MAX_VELOCITY = 2.5
MIN_PRESSURE = 0.1
MAX_PRESSURE = 1.0
START_PRESSURE = 0.1
"""Forced on the first sample of every stroke for a sharp entry tip."""

_NO_SIGNAL = (0.0, NEUTRAL_PRESSURE)


def has_device_pressure(raw_pressure: float | None) -> bool:
    """True when ``raw_pressure`` looks like a real sensor reading."""
    return raw_pressure is not None and raw_pressure not in _NO_SIGNAL


def velocity_to_pressure(
    velocity: float,
    *,
    max_velocity: float = MAX_VELOCITY,
    min_pressure: float = MIN_PRESSURE,
    max_pressure: float = MAX_PRESSURE,
) -> float:
    """Inverse-linear map from velocity to pressure."""
    normalized = clamp(velocity, 0.0, max_velocity) / max_velocity
    return clamp(1.0 - normalized, min_pressure, max_pressure)


def resolve_pressure(
    raw_pressure: float | None,
    prior_points: Sequence[Sample],
    x: float,
    y: float,
    t: float | None,
    *,
    max_velocity: float = MAX_VELOCITY,
    min_pressure: float = MIN_PRESSURE,
    max_pressure: float = MAX_PRESSURE,
) -> float:
    """Effective pressure for a new sample.

    Parameters
    ----------
    raw_pressure : float | None
        Pressure reported by the device.
    prior_points : Sequence[Sample]
        Samples already accepted into the in-progress stroke.
    x, y : float
        Position of the new sample.
    t : float | None
        Timestamp of the new sample in ms.  Missing timestamps count as 0.

    Returns
    -------
    float
        Pressure in [0, 1].  Device readings pass through unchanged;
        otherwise 0.5 for the first sample, then the velocity estimate.
    """
    if has_device_pressure(raw_pressure):
        return raw_pressure

    if not prior_points:
        return NEUTRAL_PRESSURE

    last = prior_points[-1]
    d = dist((last.x, last.y), (x, y))
    dt = max((t or 0.0) - (last.time or 0.0), 1.0)

    return velocity_to_pressure(
        d / dt,
        max_velocity=max_velocity,
        min_pressure=min_pressure,
        max_pressure=max_pressure,
    )
