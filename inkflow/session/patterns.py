"""Synthetic pointer streams.

Each generator returns a ``list[RawSample]`` -- ``(x, y, pressure, time)``
tuples as a mouse would deliver them (pressure ``None``, timestamps in
ms).  Motion is eased in and out so the simulated pressure swells in the
middle of a slow segment and thins where the hand moves fast.

Used by the demo CLI and by tests to exercise the recorder end to end.

Common parameters:

    origin : tuple[float, float]
        Start (or centre) of the pattern in canvas units.
    duration_ms : float
        Time from first to last sample.
    samples : int
        Number of pointer events, including the pointer-down.
"""

from __future__ import annotations

import math
from typing import Callable, Iterable

from inkflow.brush.types import Stroke
from inkflow.session.recorder import RawSample, StrokeRecorder


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _ease_in_out(u: float) -> float:
    return 0.5 - 0.5 * math.cos(math.pi * u)


def _timed(
    curve: Callable[[float], tuple[float, float]],
    samples: int,
    duration_ms: float,
    t0: float,
) -> list[RawSample]:
    """Sample ``curve(s)`` for s in [0, 1] at uniform times, eased in space."""
    if samples < 2:
        raise ValueError(f"Pattern requires >= 2 samples, got {samples}")
    out: list[RawSample] = []
    for i in range(samples):
        u = i / (samples - 1)
        x, y = curve(_ease_in_out(u))
        out.append((x, y, None, t0 + u * duration_ms))
    return out


# ---------------------------------------------------------------------------
# Patterns
# ---------------------------------------------------------------------------


def line(
    start: tuple[float, float] = (100.0, 300.0),
    end: tuple[float, float] = (700.0, 300.0),
    samples: int = 40,
    duration_ms: float = 400.0,
    t0: float = 0.0,
) -> list[RawSample]:
    """Straight stroke from ``start`` to ``end``."""
    (x0, y0), (x1, y1) = start, end
    return _timed(
        lambda s: (x0 + (x1 - x0) * s, y0 + (y1 - y0) * s),
        samples, duration_ms, t0,
    )


def wave(
    origin: tuple[float, float] = (100.0, 300.0),
    length: float = 600.0,
    amplitude: float = 60.0,
    periods: float = 2.0,
    samples: int = 80,
    duration_ms: float = 900.0,
    t0: float = 0.0,
) -> list[RawSample]:
    """Horizontal sine wave."""
    x0, y0 = origin
    return _timed(
        lambda s: (x0 + length * s, y0 + amplitude * math.sin(2 * math.pi * periods * s)),
        samples, duration_ms, t0,
    )


def spiral(
    origin: tuple[float, float] = (400.0, 300.0),
    turns: float = 3.0,
    radius: float = 200.0,
    samples: int = 150,
    duration_ms: float = 1500.0,
    t0: float = 0.0,
) -> list[RawSample]:
    """Archimedean spiral growing outward from ``origin``."""
    cx, cy = origin

    def curve(s: float) -> tuple[float, float]:
        angle = 2 * math.pi * turns * s
        r = radius * s
        return (cx + r * math.cos(angle), cy + r * math.sin(angle))

    return _timed(curve, samples, duration_ms, t0)


def dot(
    origin: tuple[float, float] = (400.0, 300.0),
    size: float = 4.0,
    samples: int = 6,
    duration_ms: float = 120.0,
    t0: float = 0.0,
) -> list[RawSample]:
    """Tiny slow dab; tapers over its whole length."""
    x0, y0 = origin
    return _timed(lambda s: (x0 + size * s, y0 + size * s), samples, duration_ms, t0)


PATTERNS: dict[str, Callable[..., list[RawSample]]] = {
    "line": line,
    "wave": wave,
    "spiral": spiral,
    "dot": dot,
}


def record(recorder: StrokeRecorder, samples: Iterable[RawSample]) -> Stroke | None:
    """Replay a pointer stream through ``recorder``: down, moves, up."""
    it = iter(samples)
    first = next(it, None)
    if first is None:
        return None
    x, y, p, t = first
    recorder.pointer_down(x, y, p, t)
    recorder.pointer_move_batch(it)
    return recorder.pointer_up()
