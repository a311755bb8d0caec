"""Tests for the track point, fix and session models."""

from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from gpxreplay.models.fix import MockLocationFix
from gpxreplay.models.session import PlaybackSession, PlaybackState
from gpxreplay.models.track_point import TrackPoint


class TestTrackPointModel:
    def test_frozen(self) -> None:
        point = TrackPoint(latitude=1.0, longitude=2.0)
        with pytest.raises(Exception):
            point.latitude = 5.0  # type: ignore[misc]

    def test_rejects_out_of_range(self) -> None:
        with pytest.raises(ValidationError):
            TrackPoint(latitude=90.5, longitude=0.0)
        with pytest.raises(ValidationError):
            TrackPoint(latitude=0.0, longitude=181.0)

    def test_rejects_non_finite(self) -> None:
        with pytest.raises(ValidationError):
            TrackPoint(latitude=float("nan"), longitude=0.0)
        with pytest.raises(ValidationError):
            TrackPoint(latitude=0.0, longitude=float("inf"))

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
    def test_rejects_non_finite_elevation_and_bearing(self, value: float) -> None:
        with pytest.raises(ValidationError):
            TrackPoint(latitude=0.0, longitude=0.0, elevation=value)
        with pytest.raises(ValidationError):
            TrackPoint(latitude=0.0, longitude=0.0, bearing=value)

    def test_event_minimal(self) -> None:
        point = TrackPoint(latitude=1.5, longitude=-2.5)
        assert point.to_event() == {"latitude": 1.5, "longitude": -2.5}

    def test_event_full(self) -> None:
        point = TrackPoint(
            latitude=1.5,
            longitude=-2.5,
            elevation=12.0,
            timestamp=datetime(2024, 5, 1, 10, 0, 2, 123456, tzinfo=UTC),
            bearing=270.0,
        )
        assert point.to_event() == {
            "latitude": 1.5,
            "longitude": -2.5,
            "elevation": 12.0,
            "time": "2024-05-01T10:00:02.123Z",
            "bearing": 270.0,
        }


class TestMockLocationFix:
    def test_from_point(self) -> None:
        point = TrackPoint(latitude=1.0, longitude=2.0, elevation=30.0, bearing=90.0)
        fix = MockLocationFix.from_point(point, "gps")
        assert fix.provider == "gps"
        assert (fix.latitude, fix.longitude, fix.altitude) == (1.0, 2.0, 30.0)
        assert fix.bearing == 90.0
        assert fix.accuracy == 3.0
        assert fix.is_from_mock_provider is True
        assert fix.time_ms > 0
        assert fix.elapsed_realtime_ns > 0

    def test_unknown_elevation_defaults_to_zero(self) -> None:
        fix = MockLocationFix.from_point(TrackPoint(latitude=1.0, longitude=2.0), "gps")
        assert fix.altitude == 0.0
        assert fix.bearing is None


class TestPlaybackSession:
    def _points(self) -> tuple[TrackPoint, ...]:
        return (TrackPoint(latitude=1.0, longitude=1.0), TrackPoint(latitude=2.0, longitude=2.0))

    def test_initial_state(self) -> None:
        session = PlaybackSession(points=self._points(), speed_factor=1.0, provider="gps")
        assert session.cursor == 0
        assert session.running is True
        assert session.state is PlaybackState.RUNNING
        assert not session.finished

    def test_paused_sentinel(self) -> None:
        session = PlaybackSession(points=self._points(), speed_factor=0.0, provider="gps")
        assert session.paused
        assert session.state is PlaybackState.PAUSED

    def test_idle_when_not_running(self) -> None:
        session = PlaybackSession(
            points=self._points(), speed_factor=1.0, provider="gps", running=False,
        )
        assert session.state is PlaybackState.IDLE

    def test_finished(self) -> None:
        session = PlaybackSession(points=self._points(), speed_factor=1.0, provider="gps", cursor=2)
        assert session.finished
