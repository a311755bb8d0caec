"""In-process location host that records injected fixes."""

from __future__ import annotations

import threading

from gpxreplay.constants import FALLBACK_PROVIDER
from gpxreplay.exceptions import InjectionError, ProviderError
from gpxreplay.hosts.base import LocationHost
from gpxreplay.models.fix import MockLocationFix


class InMemoryLocationHost(LocationHost):
    """Keeps every accepted fix in ``fixes``.

    ``fail_on`` lists zero-based injection attempts to reject, and
    ``rejected_providers`` names providers ``prepare`` refuses.
    """

    def __init__(
        self,
        mock_enabled: bool = True,
        fail_on: set[int] | None = None,
        rejected_providers: set[str] | None = None,
    ) -> None:
        self.mock_enabled = mock_enabled
        self.fail_on = set(fail_on or ())
        self.rejected_providers = set(rejected_providers or ())
        self.fixes: list[MockLocationFix] = []
        self.active_provider: str | None = None
        self.settings_opened = 0
        self._attempts = 0
        self._lock = threading.Lock()

    def is_mock_location_enabled(self) -> bool:
        return self.mock_enabled

    def prepare(self, provider: str) -> str:
        for candidate in (provider, FALLBACK_PROVIDER):
            if candidate not in self.rejected_providers:
                self.active_provider = candidate
                return candidate
        raise ProviderError(f"Failed to create test provider: {provider}")

    def release(self, provider: str) -> None:
        if self.active_provider == provider:
            self.active_provider = None

    def inject(self, fix: MockLocationFix) -> None:
        with self._lock:
            attempt = self._attempts
            self._attempts += 1
            if attempt in self.fail_on:
                raise InjectionError(f"Rejected fix #{attempt}")
            self.fixes.append(fix)

    def open_mock_location_settings(self) -> None:
        self.settings_opened += 1
