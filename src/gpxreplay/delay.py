"""Inter-point delay computation."""

from __future__ import annotations

import math
from datetime import timedelta

from gpxreplay.constants import DEFAULT_CADENCE_MS, MAX_STEP_DELAY_MS
from gpxreplay.exceptions import InvalidSpeedError
from gpxreplay.models.track_point import TrackPoint


def check_speed(speed: float) -> float:
    """Return ``speed`` as a float, raising InvalidSpeedError unless finite and > 0."""
    try:
        value = float(speed)
    except (TypeError, ValueError) as exc:
        raise InvalidSpeedError(speed) from exc
    if not math.isfinite(value) or value <= 0:
        raise InvalidSpeedError(speed)
    return value


def compute_delay(current: TrackPoint, next_point: TrackPoint, speed: float) -> timedelta:
    """Wait time before emitting ``next_point`` after ``current``.

    Uses the recorded time difference when both points carry a timestamp
    (negative gaps count as zero), otherwise ``DEFAULT_CADENCE_MS``. The raw
    delay is divided by ``speed``, capped at ``MAX_STEP_DELAY_MS`` and rounded
    half-up to whole milliseconds.
    """
    speed = check_speed(speed)
    if current.timestamp is not None and next_point.timestamp is not None:
        gap = next_point.timestamp - current.timestamp
        raw_ms = max(gap / timedelta(milliseconds=1), 0.0)
    else:
        raw_ms = float(DEFAULT_CADENCE_MS)
    scaled_ms = min(raw_ms / speed, float(MAX_STEP_DELAY_MS))
    return timedelta(milliseconds=math.floor(scaled_ms + 0.5))
