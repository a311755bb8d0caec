"""gpxreplay — replay recorded GPX tracks as live mock location fixes."""

from gpxreplay.control import LocationMocker, MethodResult
from gpxreplay.delay import compute_delay
from gpxreplay.dispatch import Dispatcher, InlineDispatcher, QueueDispatcher
from gpxreplay.exceptions import (
    EmptyTrackError,
    GpxReplayError,
    HostConnectionError,
    HostError,
    InjectionError,
    InvalidSpeedError,
    MalformedDocumentError,
    MockLocationNotEnabledError,
    ParseError,
    PreconditionError,
    ProviderError,
)
from gpxreplay.hosts import InMemoryLocationHost, LocationHost, WebDriverLocationHost
from gpxreplay.models import MockLocationFix, PlaybackSession, PlaybackState, Track, TrackPoint
from gpxreplay.parser import parse_gpx
from gpxreplay.scheduler import PlaybackScheduler, PlaybackSubscription

__all__ = [
    "Dispatcher",
    "EmptyTrackError",
    "GpxReplayError",
    "HostConnectionError",
    "HostError",
    "InMemoryLocationHost",
    "InjectionError",
    "InlineDispatcher",
    "InvalidSpeedError",
    "LocationHost",
    "LocationMocker",
    "MalformedDocumentError",
    "MethodResult",
    "MockLocationFix",
    "MockLocationNotEnabledError",
    "ParseError",
    "PlaybackScheduler",
    "PlaybackSession",
    "PlaybackState",
    "PlaybackSubscription",
    "PreconditionError",
    "ProviderError",
    "QueueDispatcher",
    "Track",
    "TrackPoint",
    "WebDriverLocationHost",
    "compute_delay",
    "parse_gpx",
]

__version__ = "0.1.0"
