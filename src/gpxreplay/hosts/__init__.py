"""Location hosts that receive mock fixes."""

from gpxreplay.hosts.base import LocationHost
from gpxreplay.hosts.memory import InMemoryLocationHost
from gpxreplay.hosts.webdriver import WebDriverLocationHost

__all__ = [
    "InMemoryLocationHost",
    "LocationHost",
    "WebDriverLocationHost",
]
