"""Tests for velocity-based pressure estimation.

Validates that:
    - Genuine device readings pass through unchanged
    - 0, 0.5 and missing pressure trigger simulation
    - Velocity maps inversely onto pressure inside [0.1, 1.0]
    - Zero distance / zero elapsed time never divides by zero
"""

from __future__ import annotations

import math

import pytest

from inkflow.brush.pressure import (
    MAX_VELOCITY,
    NEUTRAL_PRESSURE,
    has_device_pressure,
    resolve_pressure,
    velocity_to_pressure,
)
from inkflow.brush.types import Sample


# ---------------------------------------------------------------------------
# Device readings
# ---------------------------------------------------------------------------


class TestDevicePressure:
    @pytest.mark.parametrize("raw", [0.01, 0.3, 0.8, 1.0])
    def test_passthrough(self, raw: float) -> None:
        prior = [Sample(0.0, 0.0, time=0.0)]
        assert resolve_pressure(raw, prior, 100.0, 0.0, 1.0) == raw

    def test_passthrough_without_prior(self) -> None:
        assert resolve_pressure(0.7, [], 5.0, 5.0, 0.0) == 0.7

    @pytest.mark.parametrize("raw", [None, 0.0, 0.5])
    def test_sentinels_are_not_device_pressure(self, raw) -> None:
        assert not has_device_pressure(raw)

    def test_real_reading_is_device_pressure(self) -> None:
        assert has_device_pressure(0.51)


# ---------------------------------------------------------------------------
# Simulation
# ---------------------------------------------------------------------------


class TestSimulatedPressure:
    @pytest.mark.parametrize("raw", [None, 0.0, 0.5])
    def test_first_sample_is_neutral(self, raw) -> None:
        assert resolve_pressure(raw, [], 10.0, 10.0, 5.0) == NEUTRAL_PRESSURE

    def test_slow_motion_is_heavy(self) -> None:
        # 1 px in 10 ms -> v = 0.1 -> normalized 0.04
        prior = [Sample(0.0, 0.0, time=0.0)]
        assert resolve_pressure(None, prior, 1.0, 0.0, 10.0) == pytest.approx(0.96)

    def test_fast_motion_hits_floor(self) -> None:
        prior = [Sample(0.0, 0.0, time=0.0)]
        assert resolve_pressure(0.5, prior, 100.0, 0.0, 10.0) == pytest.approx(0.1)

    def test_uses_last_prior_point(self) -> None:
        prior = [Sample(-500.0, 0.0, time=-100.0), Sample(0.0, 0.0, time=0.0)]
        # 3 px in 2 ms -> v = 1.5 -> 1 - 0.6
        assert resolve_pressure(0.0, prior, 3.0, 0.0, 2.0) == pytest.approx(0.4)

    def test_missing_timestamps_use_one_ms(self) -> None:
        prior = [Sample(0.0, 0.0)]
        # d = 2, dt = max(0 - 0, 1) = 1 -> v = 2 -> 1 - 0.8
        assert resolve_pressure(None, prior, 2.0, 0.0, None) == pytest.approx(0.2)

    def test_identical_sample_is_finite(self) -> None:
        prior = [Sample(4.0, 4.0, time=7.0)]
        p = resolve_pressure(None, prior, 4.0, 4.0, 7.0)
        assert math.isfinite(p)
        assert p == pytest.approx(1.0)

    def test_backwards_clock_is_guarded(self) -> None:
        prior = [Sample(0.0, 0.0, time=50.0)]
        # dt = max(-40, 1) = 1
        assert resolve_pressure(None, prior, 1.0, 0.0, 10.0) == pytest.approx(0.6)

    def test_custom_max_velocity(self) -> None:
        prior = [Sample(0.0, 0.0, time=0.0)]
        p = resolve_pressure(None, prior, 2.5, 0.0, 1.0, max_velocity=5.0)
        assert p == pytest.approx(0.5)


class TestVelocityMapping:
    def test_zero_velocity_is_full_pressure(self) -> None:
        assert velocity_to_pressure(0.0) == 1.0

    def test_bounds(self) -> None:
        for v in [0.0, 0.5, 1.0, MAX_VELOCITY, 10.0, 1e9]:
            assert 0.1 <= velocity_to_pressure(v) <= 1.0

    def test_monotonically_non_increasing(self) -> None:
        values = [velocity_to_pressure(v / 10.0) for v in range(0, 40)]
        assert all(a >= b for a, b in zip(values, values[1:]))

    def test_custom_bounds(self) -> None:
        assert velocity_to_pressure(0.0, max_pressure=0.8) == pytest.approx(0.8)
        assert velocity_to_pressure(100.0, min_pressure=0.25) == pytest.approx(0.25)
