"""Pointer-event recorder for one in-progress stroke.

The recorder is the input side of the brush: it turns pointer-down /
move / up events into an ordered sample list, resolves pressure for each
accepted sample, and hands out the finished immutable ``Stroke``.

Contract
--------
- ``pointer_down`` starts a stroke.  The first sample is forced to
  ``start_pressure`` (sharp entry tip).  Settings and tool are
  snapshotted here and apply to the whole stroke.
- ``pointer_move`` / ``pointer_move_batch`` append samples while the
  pointer is down.  Samples closer than ``min_distance`` to the last
  accepted one are dropped.
- ``pointer_up`` / ``pointer_leave`` finish the stroke.  Strokes with
  fewer than two samples are discarded (``None``), which is a normal
  outcome, not an error.

The point list is only ever appended to; ``current_points`` returns a
tuple snapshot that redraws can outline safely.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from inkflow.brush.outline import build_outline
from inkflow.brush.pressure import (
    MAX_PRESSURE,
    MAX_VELOCITY,
    MIN_PRESSURE,
    NEUTRAL_PRESSURE,
    START_PRESSURE,
    resolve_pressure,
)
from inkflow.brush.taper import MAX_TAPER_POINTS
from inkflow.brush.types import ERASER_COLOR, Outline, Sample, Stroke, StrokeSettings, Tool
from inkflow.brush.vectors import dist

if TYPE_CHECKING:
    from inkflow.configs.loader import InkflowConfig

logger = logging.getLogger(__name__)

MIN_SAMPLE_DISTANCE = 1.0

RawSample = tuple[float, float, float | None, float | None]
"""``(x, y, pressure, time)`` as delivered by a pointer event."""


class StrokeRecorder:
    """Collects pointer samples into strokes.

    Parameters
    ----------
    settings : StrokeSettings
        Brush settings for the next stroke.  May be replaced between
        strokes; a stroke keeps the settings it started with.
    tool : Tool
        Pen paints with ``settings.color``; eraser tags the stroke with
        :data:`ERASER_COLOR`.
    min_distance : float
        Minimum spacing between accepted samples.
    start_pressure : float
        Pressure forced on the pointer-down sample.
    max_velocity, min_pressure, max_pressure : float
        Velocity simulation tuning, see :mod:`inkflow.brush.pressure`.
    max_taper_points : int
        Taper window used by :meth:`preview_outline`.
    """

    def __init__(
        self,
        settings: StrokeSettings | None = None,
        tool: Tool = Tool.PEN,
        *,
        min_distance: float = MIN_SAMPLE_DISTANCE,
        start_pressure: float = START_PRESSURE,
        max_velocity: float = MAX_VELOCITY,
        min_pressure: float = MIN_PRESSURE,
        max_pressure: float = MAX_PRESSURE,
        max_taper_points: int = MAX_TAPER_POINTS,
    ) -> None:
        self.settings = settings or StrokeSettings()
        self.tool = tool
        self.min_distance = min_distance
        self.start_pressure = start_pressure
        self.max_velocity = max_velocity
        self.min_pressure = min_pressure
        self.max_pressure = max_pressure
        self.max_taper_points = max_taper_points

        self._points: list[Sample] = []
        self._drawing = False
        self._stroke_settings = self.settings
        self._stroke_tool = self.tool

    @classmethod
    def from_config(cls, cfg: InkflowConfig, tool: Tool = Tool.PEN) -> StrokeRecorder:
        """Build a recorder from an :class:`~inkflow.configs.InkflowConfig`."""
        return cls(
            cfg.brush.to_settings(),
            tool,
            min_distance=cfg.recorder.min_distance,
            start_pressure=cfg.pressure.start,
            max_velocity=cfg.pressure.max_velocity,
            min_pressure=cfg.pressure.min,
            max_pressure=cfg.pressure.max,
            max_taper_points=cfg.taper.max_points,
        )

    # -- state ---------------------------------------------------------------

    @property
    def is_drawing(self) -> bool:
        return self._drawing

    @property
    def current_points(self) -> tuple[Sample, ...]:
        return tuple(self._points)

    @property
    def stroke_settings(self) -> StrokeSettings:
        """Settings of the in-progress stroke (or the next one when idle)."""
        return self._stroke_settings if self._drawing else self.settings

    # -- events --------------------------------------------------------------

    def pointer_down(
        self,
        x: float,
        y: float,
        pressure: float | None = None,
        time: float | None = None,
    ) -> None:
        """Start a new stroke at ``(x, y)``.

        The device pressure is ignored for this sample; it always starts
        at ``start_pressure``.
        """
        if self._drawing and self._points:
            logger.debug(
                "pointer_down while drawing, abandoning %d samples",
                len(self._points),
            )
        self._drawing = True
        self._stroke_settings = self.settings
        self._stroke_tool = self.tool
        self._points = [Sample(x, y, pressure=self.start_pressure, time=time)]

    def pointer_move(
        self,
        x: float,
        y: float,
        pressure: float | None = None,
        time: float | None = None,
    ) -> bool:
        """Offer one sample; returns True if it was accepted."""
        if not self._drawing:
            return False

        if self._points and dist(self._points[-1].xy, (x, y)) < self.min_distance:
            return False

        resolved = self._resolve(pressure, x, y, time)
        self._points.append(Sample(x, y, pressure=resolved, time=time))
        return True

    def pointer_move_batch(self, samples: Iterable[RawSample]) -> int:
        """Offer coalesced samples in order; returns how many were accepted."""
        return sum(1 for x, y, p, t in samples if self.pointer_move(x, y, p, t))

    def pointer_up(self) -> Stroke | None:
        """Finish the stroke.

        Returns
        -------
        Stroke | None
            The finished stroke, or ``None`` when idle or when fewer than
            two samples were collected.
        """
        if not self._drawing:
            return None

        points = tuple(self._points)
        self._drawing = False
        self._points = []

        if len(points) < 2:
            logger.debug("Discarding stroke with %d sample(s)", len(points))
            return None

        color = (
            ERASER_COLOR
            if self._stroke_tool is Tool.ERASER
            else self._stroke_settings.color
        )
        stroke = Stroke(points=points, color=color, settings=self._stroke_settings)
        logger.debug("Finished stroke: %d samples, color=%s", len(points), color)
        return stroke

    pointer_leave = pointer_up

    def cancel(self) -> None:
        """Abandon the in-progress stroke without producing anything."""
        self._drawing = False
        self._points = []

    # -- preview -------------------------------------------------------------

    def preview_outline(self) -> Outline:
        """Outline of the in-progress stroke for live redraws."""
        return build_outline(
            self.current_points,
            self.stroke_settings,
            max_taper_points=self.max_taper_points,
        )

    # -- internals -----------------------------------------------------------

    def _resolve(
        self,
        raw_pressure: float | None,
        x: float,
        y: float,
        time: float | None,
    ) -> float:
        if not self._stroke_settings.simulate_pressure:
            return NEUTRAL_PRESSURE if raw_pressure is None else raw_pressure
        return resolve_pressure(
            raw_pressure,
            self._points,
            x,
            y,
            time,
            max_velocity=self.max_velocity,
            min_pressure=self.min_pressure,
            max_pressure=self.max_pressure,
        )
