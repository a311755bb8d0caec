"""Mutable playback session state owned by the scheduler."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from gpxreplay.models.track_point import Track


class PlaybackState(str, Enum):
    """Scheduler states."""

    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


@dataclass
class PlaybackSession:
    """One playback of a track.

    ``speed_factor`` is 0.0 while paused; ``resume_speed`` keeps the speed to
    restore. ``cancelled`` is set only when the session is stopped or
    replaced, never on natural completion.
    """

    points: Track
    speed_factor: float
    provider: str
    cursor: int = 0
    running: bool = True
    resume_speed: float | None = None
    cancelled: bool = False

    @property
    def paused(self) -> bool:
        return self.running and self.speed_factor == 0.0

    @property
    def finished(self) -> bool:
        return self.cursor >= len(self.points)

    @property
    def state(self) -> PlaybackState:
        if not self.running:
            return PlaybackState.IDLE
        if self.paused:
            return PlaybackState.PAUSED
        return PlaybackState.RUNNING
