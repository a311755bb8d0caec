"""Abstract location host that receives mock fixes."""

from __future__ import annotations

from abc import ABC, abstractmethod

from gpxreplay.models.fix import MockLocationFix


class LocationHost(ABC):
    """Platform-side collaborator that projects fixes into a location subsystem."""

    @abstractmethod
    def is_mock_location_enabled(self) -> bool: ...

    @abstractmethod
    def prepare(self, provider: str) -> str:
        """Enable a mock provider and return the name actually in use."""

    @abstractmethod
    def release(self, provider: str) -> None: ...

    @abstractmethod
    def inject(self, fix: MockLocationFix) -> None:
        """Push one fix. Raises InjectionError when the host rejects it."""

    def open_mock_location_settings(self) -> None:
        """Show the host's mock location settings, where it has any."""
