"""Public control surface for GPX location mocking."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict

from gpxreplay._logging import log_control_call
from gpxreplay.constants import DEFAULT_PLAYBACK_SPEED, DEFAULT_PROVIDER
from gpxreplay.dispatch import Dispatcher
from gpxreplay.exceptions import MockLocationNotEnabledError
from gpxreplay.hosts.base import LocationHost
from gpxreplay.models.session import PlaybackState
from gpxreplay.parser import parse_gpx
from gpxreplay.scheduler import PlaybackScheduler, PlaybackSubscription, PointSink


class MethodResult(BaseModel):
    """Outcome of a method-channel call: a value or an error code."""

    model_config = ConfigDict(frozen=True)

    success: bool
    value: Any = None
    error_code: str | None = None
    message: str | None = None

    @classmethod
    def ok(cls, value: Any) -> MethodResult:
        return cls(success=True, value=value)

    @classmethod
    def error(cls, code: str, message: str) -> MethodResult:
        return cls(success=False, error_code=code, message=message)


def _speed_argument(arguments: Mapping[str, Any], default: float | None) -> Any:
    value = arguments.get("playbackSpeed")
    return default if value is None else value


class LocationMocker:
    """Synchronous facade over the playback scheduler.

    Usage:
        with LocationMocker(InMemoryLocationHost()) as mocker:
            mocker.start_mocking_with_gpx(gpx, playback_speed=2.0)
            mocker.pause_mocking()
            mocker.resume_mocking()

        # Or through method-channel names:
        result = mocker.handle("startMockingWithGpx", {"gpxData": gpx})
    """

    def __init__(
        self,
        host: LocationHost,
        dispatcher: Dispatcher | None = None,
        provider: str = DEFAULT_PROVIDER,
    ) -> None:
        self._host = host
        self._scheduler = PlaybackScheduler(host, dispatcher=dispatcher, provider=provider)

    def __enter__(self) -> LocationMocker:
        return self

    def __exit__(self, *args: object) -> None:
        self._scheduler.stop()

    @property
    def scheduler(self) -> PlaybackScheduler:
        return self._scheduler

    @property
    def state(self) -> PlaybackState:
        return self._scheduler.state

    def add_sink(self, sink: PointSink) -> None:
        self._scheduler.add_sink(sink)

    def subscribe(self) -> PlaybackSubscription:
        return self._scheduler.subscribe()

    # ── Operations ─────────────────────────────────────────────

    @log_control_call
    def initialize(self) -> bool:
        return True

    @log_control_call
    def is_mock_location_enabled(self) -> bool:
        """Ask the host whether mock locations are allowed."""
        return self._host.is_mock_location_enabled()

    @log_control_call
    def start_mocking_with_gpx(
        self, gpx_data: str, playback_speed: float = DEFAULT_PLAYBACK_SPEED,
    ) -> bool:
        """Check the host, parse ``gpx_data`` and start playback.

        Raises:
            MockLocationNotEnabledError: Checked before the document is parsed.
            ParseError: The document is malformed or has no valid points.
            InvalidSpeedError: ``playback_speed`` is not a positive number.
        """
        if not self._host.is_mock_location_enabled():
            raise MockLocationNotEnabledError()
        track = parse_gpx(gpx_data)
        self._scheduler.start(track, playback_speed)
        return True

    @log_control_call
    def update_playback_speed(self, playback_speed: float = DEFAULT_PLAYBACK_SPEED) -> bool:
        return self._scheduler.update_speed(playback_speed)

    @log_control_call
    def stop_mocking(self) -> bool:
        self._scheduler.stop()
        return True

    @log_control_call
    def pause_mocking(self) -> bool:
        """Pause playback; False when nothing is running."""
        return self._scheduler.pause()

    @log_control_call
    def resume_mocking(self, playback_speed: float | None = None) -> bool:
        """Resume with ``playback_speed`` or the speed in use before pausing."""
        return self._scheduler.resume(playback_speed)

    @log_control_call
    def open_mock_location_settings(self) -> bool:
        self._host.open_mock_location_settings()
        return True

    # ── Method channel ─────────────────────────────────────────

    def handle(self, method: str, arguments: Mapping[str, Any] | None = None) -> MethodResult:
        """Dispatch a method-channel call and translate failures to error codes."""
        args = arguments or {}
        routes: dict[str, tuple[str, Callable[[], Any]]] = {
            "initialize": ("INIT_ERROR", self.initialize),
            "isMockLocationEnabled": ("CHECK_MOCK_ERROR", self.is_mock_location_enabled),
            "startMockingWithGpx": (
                "START_MOCK_ERROR",
                lambda: self.start_mocking_with_gpx(
                    args.get("gpxData") or "",
                    _speed_argument(args, DEFAULT_PLAYBACK_SPEED),
                ),
            ),
            "updatePlaybackSpeed": (
                "UPDATE_SPEED_ERROR",
                lambda: self.update_playback_speed(_speed_argument(args, DEFAULT_PLAYBACK_SPEED)),
            ),
            "stopMocking": ("STOP_MOCK_ERROR", self.stop_mocking),
            "openMockLocationSettings": ("OPEN_SETTINGS_ERROR", self.open_mock_location_settings),
            "pauseMocking": ("PAUSE_ERROR", self.pause_mocking),
            "resumeMocking": (
                "RESUME_ERROR",
                lambda: self.resume_mocking(_speed_argument(args, None)),
            ),
        }
        route = routes.get(method)
        if route is None:
            return MethodResult.error("NOT_IMPLEMENTED", f"Method {method!r} is not implemented")

        error_code, call = route
        try:
            return MethodResult.ok(call())
        except MockLocationNotEnabledError as exc:
            return MethodResult.error("MOCK_NOT_ENABLED", str(exc))
        except Exception as exc:
            return MethodResult.error(error_code, str(exc))
