"""Shared constants for GPX playback."""

from __future__ import annotations

DEFAULT_PLAYBACK_SPEED = 1.0

# Cadence used between points when either timestamp is missing
DEFAULT_CADENCE_MS = 1000

# Longest single wait between two points, below every platform's threading.TIMEOUT_MAX
MAX_STEP_DELAY_MS = 7 * 24 * 60 * 60 * 1000

DEFAULT_PROVIDER = "gps"
FALLBACK_PROVIDER = "mock_gps_provider"

# Accuracy metadata attached to every injected fix
FIX_ACCURACY_M = 3.0
FIX_BEARING_ACCURACY_DEG = 0.1
FIX_SPEED_ACCURACY_MPS = 0.01
FIX_VERTICAL_ACCURACY_M = 0.1

# Tried in order; the first format that matches wins
TIMESTAMP_FORMATS: tuple[str, ...] = (
    "%Y-%m-%dT%H:%M:%SZ",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%fZ",
    "%Y-%m-%dT%H:%M:%S.%f%z",
)

LOG_DIR_ENV = "GPXREPLAY_LOG_DIR"
