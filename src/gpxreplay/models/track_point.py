"""Recorded GPX track point model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from gpxreplay._timestamps import format_timestamp


class TrackPoint(BaseModel):
    """One recorded fix from a ``<trkpt>`` element."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90.0, le=90.0, allow_inf_nan=False)
    longitude: float = Field(ge=-180.0, le=180.0, allow_inf_nan=False)
    elevation: float | None = Field(default=None, allow_inf_nan=False)
    timestamp: datetime | None = None
    bearing: float | None = Field(default=None, allow_inf_nan=False)

    def to_event(self) -> dict[str, Any]:
        """Point-emission payload; optional keys are present only when known."""
        event: dict[str, Any] = {
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
        if self.elevation is not None:
            event["elevation"] = self.elevation
        if self.timestamp is not None:
            event["time"] = format_timestamp(self.timestamp)
        if self.bearing is not None:
            event["bearing"] = self.bearing
        return event


Track = tuple[TrackPoint, ...]
