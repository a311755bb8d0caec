"""Location host backed by a WebDriver/Appium session over HTTP."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from gpxreplay.exceptions import HostConnectionError, InjectionError
from gpxreplay.hosts.base import LocationHost
from gpxreplay.models.fix import MockLocationFix

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://127.0.0.1:4723"
DEFAULT_TIMEOUT = 5.0


def _error_message(response: httpx.Response) -> str:
    """Pull the W3C ``value.message`` out of an error response, if present."""
    try:
        payload = response.json()
    except ValueError:
        return response.text
    value = payload.get("value") if isinstance(payload, dict) else None
    if isinstance(value, dict) and value.get("message"):
        return str(value["message"])
    return response.text


class WebDriverLocationHost(LocationHost):
    """Sets device geolocation through ``/session/{id}/location``.

    Usage:
        with WebDriverLocationHost(session_id="4f2c...") as host:
            mocker = LocationMocker(host)
            mocker.start_mocking_with_gpx(gpx)
    """

    def __init__(
        self,
        session_id: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.session_id = session_id
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    def __enter__(self) -> WebDriverLocationHost:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection."""
        self._client.close()

    @property
    def _location_path(self) -> str:
        return f"/session/{self.session_id}/location"

    def is_mock_location_enabled(self) -> bool:
        """True when the session accepts geolocation commands."""
        try:
            response = self._client.get(self._location_path)
        except httpx.ConnectError as exc:
            raise HostConnectionError(str(exc)) from exc
        except httpx.TimeoutException as exc:
            raise HostConnectionError(str(exc)) from exc
        if response.status_code >= 400:
            logger.debug("Geolocation not available: %s", _error_message(response))
            return False
        return True

    def prepare(self, provider: str) -> str:
        return provider

    def release(self, provider: str) -> None:
        pass

    def inject(self, fix: MockLocationFix) -> None:
        body: dict[str, Any] = {
            "location": {
                "latitude": fix.latitude,
                "longitude": fix.longitude,
                "altitude": fix.altitude,
            }
        }
        try:
            response = self._client.post(self._location_path, json=body)
        except httpx.HTTPError as exc:
            raise InjectionError(str(exc)) from exc
        if response.status_code >= 400:
            raise InjectionError(f"HTTP {response.status_code}: {_error_message(response)}")
