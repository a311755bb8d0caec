"""Mock location fix handed to a location host."""

from __future__ import annotations

import time

from pydantic import BaseModel, ConfigDict

from gpxreplay.constants import (
    FIX_ACCURACY_M,
    FIX_BEARING_ACCURACY_DEG,
    FIX_SPEED_ACCURACY_MPS,
    FIX_VERTICAL_ACCURACY_M,
)
from gpxreplay.models.track_point import TrackPoint


class MockLocationFix(BaseModel):
    """A track point projected into the host's location subsystem."""

    model_config = ConfigDict(frozen=True)

    provider: str
    latitude: float
    longitude: float
    altitude: float = 0.0
    time_ms: int
    elapsed_realtime_ns: int
    accuracy: float = FIX_ACCURACY_M
    bearing: float | None = None
    bearing_accuracy_degrees: float = FIX_BEARING_ACCURACY_DEG
    speed_accuracy_mps: float = FIX_SPEED_ACCURACY_MPS
    vertical_accuracy_m: float = FIX_VERTICAL_ACCURACY_M
    is_from_mock_provider: bool = True

    @classmethod
    def from_point(cls, point: TrackPoint, provider: str) -> MockLocationFix:
        """Stamp a point with the current wall and monotonic clocks."""
        return cls(
            provider=provider,
            latitude=point.latitude,
            longitude=point.longitude,
            altitude=point.elevation if point.elevation is not None else 0.0,
            time_ms=time.time_ns() // 1_000_000,
            elapsed_realtime_ns=time.monotonic_ns(),
            bearing=point.bearing,
        )
