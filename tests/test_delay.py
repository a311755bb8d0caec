"""Tests for inter-point delay computation."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from gpxreplay import InvalidSpeedError, TrackPoint, compute_delay
from gpxreplay.constants import MAX_STEP_DELAY_MS


def _point(second: float | None) -> TrackPoint:
    timestamp = None
    if second is not None:
        timestamp = datetime(2024, 5, 1, 10, 0, 0, tzinfo=UTC) + timedelta(seconds=second)
    return TrackPoint(latitude=1.0, longitude=1.0, timestamp=timestamp)


class TestComputeDelay:
    def test_recorded_gap(self) -> None:
        assert compute_delay(_point(0), _point(5), 1.0) == timedelta(milliseconds=5000)

    def test_faster_speed(self) -> None:
        assert compute_delay(_point(0), _point(5), 2.0) == timedelta(milliseconds=2500)

    def test_slower_speed(self) -> None:
        assert compute_delay(_point(0), _point(5), 0.5) == timedelta(milliseconds=10000)

    def test_missing_timestamp_uses_cadence(self) -> None:
        assert compute_delay(_point(None), _point(5), 1.0) == timedelta(milliseconds=1000)
        assert compute_delay(_point(0), _point(None), 1.0) == timedelta(milliseconds=1000)
        assert compute_delay(_point(None), _point(None), 4.0) == timedelta(milliseconds=250)

    def test_negative_gap_clamped(self) -> None:
        assert compute_delay(_point(5), _point(0), 1.0) == timedelta(0)

    def test_zero_gap(self) -> None:
        assert compute_delay(_point(3), _point(3), 1.0) == timedelta(0)

    def test_rounds_half_up(self) -> None:
        # 1000 / 3 = 333.33 ms; 5 / 2 = 2.5 ms
        assert compute_delay(_point(None), _point(None), 3.0) == timedelta(milliseconds=333)
        assert compute_delay(_point(0), _point(0.005), 2.0) == timedelta(milliseconds=3)

    @pytest.mark.parametrize("speed", [0.0, -1.0, float("nan"), float("inf")])
    def test_invalid_speed(self, speed: float) -> None:
        with pytest.raises(InvalidSpeedError):
            compute_delay(_point(0), _point(1), speed)

    @pytest.mark.parametrize("speed", [1e-12, 1e-300, 5e-324])
    def test_tiny_speed_capped(self, speed: float) -> None:
        assert compute_delay(_point(0), _point(5), speed) == timedelta(milliseconds=MAX_STEP_DELAY_MS)

    def test_huge_gap_capped(self) -> None:
        assert compute_delay(_point(0), _point(30 * 86400), 1.0) == timedelta(milliseconds=MAX_STEP_DELAY_MS)
