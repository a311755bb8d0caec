"""gpxreplay data models."""

from gpxreplay.models.fix import MockLocationFix
from gpxreplay.models.session import PlaybackSession, PlaybackState
from gpxreplay.models.track_point import Track, TrackPoint

__all__ = [
    "MockLocationFix",
    "PlaybackSession",
    "PlaybackState",
    "Track",
    "TrackPoint",
]
