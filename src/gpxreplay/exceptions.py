"""Custom exceptions for the GPX replay library."""

from __future__ import annotations


class GpxReplayError(Exception):
    """Base exception for all gpxreplay errors."""


class ParseError(GpxReplayError):
    """Raised when a GPX document cannot be turned into a track."""


class MalformedDocumentError(ParseError):
    """Raised when the document is not well-formed XML."""

    def __init__(self, cause: str) -> None:
        self.cause = cause
        super().__init__(f"Failed to parse GPX data: {cause}")


class EmptyTrackError(ParseError):
    """Raised when no valid track points survive parsing."""

    def __init__(self, message: str = "No valid track points found in GPX data") -> None:
        super().__init__(message)


class PreconditionError(GpxReplayError):
    """Raised when the host environment is not ready for playback."""


class MockLocationNotEnabledError(PreconditionError):
    """Raised when the host does not allow mock locations."""

    def __init__(self) -> None:
        super().__init__("Mock location is not enabled in developer options")


class InvalidSpeedError(GpxReplayError, ValueError):
    """Raised when a playback speed is not a finite positive number."""

    def __init__(self, speed: float) -> None:
        self.speed = speed
        super().__init__(f"Playback speed must be a finite number > 0, got {speed!r}")


class HostError(GpxReplayError):
    """Base exception for location host failures."""


class HostConnectionError(HostError):
    """Raised when the location host cannot be reached."""


class ProviderError(HostError):
    """Raised when the host refuses to set up a mock location provider."""


class InjectionError(HostError):
    """Raised when the host rejects a mock location fix."""
