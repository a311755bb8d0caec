"""Shared test fixtures and sample GPX documents."""

from __future__ import annotations

import logging
from typing import Any, Callable

import pytest

from gpxreplay import InMemoryLocationHost, PlaybackScheduler, QueueDispatcher

SAMPLE_GPX = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <trk>
    <name>Morning ride</name>
    <trkseg>
      <trkpt lat="52.5200" lon="13.4050">
        <ele>34.5</ele>
        <time>2024-05-01T10:00:00Z</time>
      </trkpt>
      <trkpt lat="52.5205" lon="13.4060" bearing="45.0">
        <ele>35.0</ele>
        <time>2024-05-01T10:00:02Z</time>
      </trkpt>
      <trkpt lat="52.5210" lon="13.4070">
        <time>2024-05-01T10:00:05Z</time>
      </trkpt>
    </trkseg>
  </trk>
</gpx>
"""

SAMPLE_GPX_BARE = """<gpx>
  <trk><trkseg>
    <trkpt lat="52.5200" lon="13.4050"><ele>34.5</ele><time>2024-05-01T10:00:00Z</time></trkpt>
    <trkpt lat="52.5205" lon="13.4060" bearing="45.0"><ele>35.0</ele><time>2024-05-01T10:00:02Z</time></trkpt>
    <trkpt lat="52.5210" lon="13.4070"><time>2024-05-01T10:00:05Z</time></trkpt>
  </trkseg></trk>
</gpx>
"""

SAMPLE_GPX_NO_TIMES = """<gpx>
  <trk><trkseg>
    <trkpt lat="1.0" lon="1.0"/>
    <trkpt lat="2.0" lon="2.0"/>
    <trkpt lat="3.0" lon="3.0"/>
  </trkseg></trk>
</gpx>
"""

SAMPLE_GPX_SINGLE = """<gpx><trk><trkseg>
  <trkpt lat="48.8566" lon="2.3522"><time>2024-05-01T10:00:00Z</time></trkpt>
</trkseg></trk></gpx>
"""


def gpx_with_offsets(*seconds: int) -> str:
    """Build a GPX document with one point per offset from 10:00:00Z."""
    rows = "\n".join(
        f'<trkpt lat="{10 + i}.0" lon="{20 + i}.0">'
        f"<time>2024-05-01T10:{s // 60:02d}:{s % 60:02d}Z</time></trkpt>"
        for i, s in enumerate(seconds)
    )
    return f"<gpx><trk><trkseg>{rows}</trkseg></trk></gpx>"


class ManualTimer:
    """Stand-in for threading.Timer that only fires when told to."""

    def __init__(self, interval: float, function: Callable[..., None], args: Any = ()) -> None:
        self.interval = interval
        self.function = function
        self.args = args
        self.name = ""
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.function(*self.args)


@pytest.fixture(autouse=True)
def _redirect_control_log(tmp_path):
    """Send the control-call log file into tmp_path."""
    import gpxreplay._logging as mod

    old_logger = mod._logger
    old_dir = mod._LOG_DIR

    named_logger = logging.getLogger(mod.LOGGER_NAME)
    named_logger.handlers.clear()

    mod._logger = None
    mod._LOG_DIR = str(tmp_path / "logs")

    yield tmp_path / "logs"

    for h in named_logger.handlers[:]:
        h.close()
        named_logger.removeHandler(h)
    named_logger.setLevel(logging.NOTSET)
    named_logger.propagate = True
    mod._logger = old_logger
    mod._LOG_DIR = old_dir


@pytest.fixture
def host() -> InMemoryLocationHost:
    return InMemoryLocationHost()


@pytest.fixture
def timers() -> list[ManualTimer]:
    return []


@pytest.fixture
def timer_factory(timers) -> Callable[..., ManualTimer]:
    def factory(interval: float, function: Callable[..., None], args: Any = ()) -> ManualTimer:
        timer = ManualTimer(interval, function, args)
        timers.append(timer)
        return timer

    return factory


@pytest.fixture
def scheduler(host, timer_factory) -> PlaybackScheduler:
    """Scheduler whose steps fire only through ``timers[-1].fire()``."""
    sched = PlaybackScheduler(host, timer_factory=timer_factory)
    yield sched
    sched.stop()


@pytest.fixture
def queue_dispatcher() -> QueueDispatcher:
    return QueueDispatcher()
