"""Time-paced playback of a track through a location host."""

from __future__ import annotations

import functools
import logging
import queue
import threading
from typing import Any, Callable

from gpxreplay.constants import DEFAULT_PLAYBACK_SPEED, DEFAULT_PROVIDER
from gpxreplay.delay import check_speed, compute_delay
from gpxreplay.dispatch import Dispatcher, InlineDispatcher
from gpxreplay.exceptions import EmptyTrackError, HostError
from gpxreplay.hosts.base import LocationHost
from gpxreplay.models.fix import MockLocationFix
from gpxreplay.models.session import PlaybackSession, PlaybackState
from gpxreplay.models.track_point import Track

logger = logging.getLogger(__name__)

PointSink = Callable[[dict[str, Any]], None]

_END = object()


class PlaybackSubscription:
    """Iterator over the emission events of one playback session.

    Iteration blocks until the next event and stops once the session
    completes, is stopped or is replaced. Subscribe again for the next one.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[Any] = queue.SimpleQueue()
        self._done = False

    def __iter__(self) -> PlaybackSubscription:
        return self

    def __next__(self) -> dict[str, Any]:
        if self._done:
            raise StopIteration
        item = self._queue.get()
        if item is _END:
            self._done = True
            raise StopIteration
        return item

    def __call__(self, event: dict[str, Any]) -> None:
        self._queue.put(event)

    def end(self) -> None:
        self._queue.put(_END)


class PlaybackScheduler:
    """Drives a track forward in time, one point per step.

    Control calls return immediately; steps fire on a ``threading.Timer``
    and at most one timer is pending at a time. Each emitted point is posted
    to the dispatcher as a single delivery that notifies the sinks and then
    injects the fix into the host. Deliveries run outside the scheduler lock,
    and the next step is scheduled once the current delivery has been posted.

    Usage:
        scheduler = PlaybackScheduler(InMemoryLocationHost())
        scheduler.add_sink(print)
        scheduler.start(parse_gpx(document), initial_speed=2.0)
        scheduler.wait_idle()
    """

    def __init__(
        self,
        host: LocationHost,
        dispatcher: Dispatcher | None = None,
        provider: str = DEFAULT_PROVIDER,
        timer_factory: Callable[..., threading.Timer] = threading.Timer,
    ) -> None:
        self._host = host
        self._dispatcher = dispatcher or InlineDispatcher()
        self._provider = provider
        self._timer_factory = timer_factory
        self._lock = threading.RLock()
        self._session: PlaybackSession | None = None
        self._timer: threading.Timer | None = None
        self._pending: object | None = None
        self._sinks: list[PointSink] = []
        self._subscriptions: list[PlaybackSubscription] = []
        self._idle = threading.Event()
        self._idle.set()

    # ── Introspection ──────────────────────────────────────────

    @property
    def session(self) -> PlaybackSession | None:
        return self._session

    @property
    def state(self) -> PlaybackState:
        with self._lock:
            if self._session is None:
                return PlaybackState.IDLE
            return self._session.state

    @property
    def cursor(self) -> int:
        with self._lock:
            return self._session.cursor if self._session is not None else 0

    @property
    def speed(self) -> float:
        """Current speed factor; 0.0 while paused or idle."""
        with self._lock:
            return self._session.speed_factor if self._session is not None else 0.0

    def wait_idle(self, timeout: float | None = None) -> bool:
        """Block until no session is active. Returns False on timeout."""
        return self._idle.wait(timeout)

    # ── Sinks ──────────────────────────────────────────────────

    def add_sink(self, sink: PointSink) -> None:
        with self._lock:
            self._sinks.append(sink)

    def remove_sink(self, sink: PointSink) -> None:
        with self._lock:
            if sink in self._sinks:
                self._sinks.remove(sink)

    def subscribe(self) -> PlaybackSubscription:
        """Subscribe to the current session, or the next one when idle."""
        subscription = PlaybackSubscription()
        with self._lock:
            self._subscriptions.append(subscription)
        return subscription

    def unsubscribe(self, subscription: PlaybackSubscription) -> None:
        with self._lock:
            if subscription in self._subscriptions:
                self._subscriptions.remove(subscription)
        subscription.end()

    # ── Control ────────────────────────────────────────────────

    def start(self, track: Track, initial_speed: float = DEFAULT_PLAYBACK_SPEED) -> None:
        """Replace any running session and start playing ``track``.

        The first point is emitted before this returns.
        """
        if not track:
            raise EmptyTrackError("Cannot start playback: track is already empty")
        speed = check_speed(initial_speed)
        with self._lock:
            self._end_session(cancelled=True)
            provider = self._host.prepare(self._provider)
            session = PlaybackSession(points=tuple(track), speed_factor=speed, provider=provider)
            self._session = session
            self._idle.clear()
            logger.info(
                "Playback started: %d points at %.2fx via %s",
                len(session.points), speed, provider,
            )
            delivery = self._take_next(session)
        self._emit_and_continue(session, delivery)

    def pause(self) -> bool:
        with self._lock:
            session = self._session
            if session is None or session.state is not PlaybackState.RUNNING:
                return False
            self._cancel_timer()
            session.resume_speed = session.speed_factor
            session.speed_factor = 0.0
            logger.info("Playback paused at point %d", session.cursor)
            return True

    def resume(self, new_speed: float | None = None) -> bool:
        with self._lock:
            session = self._session
            if session is None or session.state is not PlaybackState.PAUSED:
                return False
            if new_speed is not None:
                speed = check_speed(new_speed)
            else:
                speed = session.resume_speed or DEFAULT_PLAYBACK_SPEED
            session.speed_factor = speed
            session.resume_speed = None
            logger.info("Playback resumed at point %d, %.2fx", session.cursor, speed)
            # A step still delivering the last point ends the session itself
            if not session.finished:
                self._schedule(session)
            return True

    def update_speed(self, new_speed: float) -> bool:
        """Change the speed used from the next step on.

        The delay already pending is not rescaled. While paused, the new
        speed becomes the one restored by ``resume()``.
        """
        speed = check_speed(new_speed)
        with self._lock:
            session = self._session
            if session is None:
                return False
            if session.paused:
                session.resume_speed = speed
            else:
                session.speed_factor = speed
            logger.debug("Playback speed set to %.2fx", speed)
            return True

    def stop(self) -> None:
        """Stop playback; no point is emitted after this returns."""
        with self._lock:
            self._end_session(cancelled=True)

    # ── Internals ──────────────────────────────────────────────

    def _take_next(self, session: PlaybackSession) -> Callable[[], None]:
        point = session.points[session.cursor]
        session.cursor += 1
        fix = MockLocationFix.from_point(point, session.provider)
        sinks = [*self._sinks, *self._subscriptions]
        return functools.partial(self._deliver, session, sinks, point.to_event(), fix)

    def _emit_and_continue(self, session: PlaybackSession, delivery: Callable[[], None]) -> None:
        # Posted without the lock so control calls never wait on sinks or the host
        self._dispatcher.post(delivery)
        with self._lock:
            # A sink or another thread may have stopped, replaced or paused the session
            if self._session is not session:
                return
            if session.finished:
                logger.info("Playback finished after %d points", session.cursor)
                self._end_session(cancelled=False)
            elif not session.paused and self._pending is None:
                self._schedule(session)

    def _schedule(self, session: PlaybackSession) -> None:
        delay = compute_delay(
            session.points[session.cursor - 1],
            session.points[session.cursor],
            session.speed_factor,
        )
        self._cancel_timer()
        token = object()
        timer = self._timer_factory(delay.total_seconds(), self._step, args=(session, token))
        timer.name = "gpxreplay-step"
        timer.daemon = True
        self._timer = timer
        self._pending = token
        timer.start()

    def _step(self, session: PlaybackSession, token: object) -> None:
        with self._lock:
            if self._session is not session or self._pending is not token:
                return
            self._timer = None
            self._pending = None
            delivery = self._take_next(session)
        self._emit_and_continue(session, delivery)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._pending = None

    def _deliver(
        self,
        session: PlaybackSession,
        sinks: list[PointSink],
        event: dict[str, Any],
        fix: MockLocationFix,
    ) -> None:
        if session.cancelled:
            return
        for sink in sinks:
            try:
                sink(event)
            except Exception:
                logger.warning("Point sink %r failed", sink, exc_info=True)
        if session.cancelled:
            return
        try:
            self._host.inject(fix)
        except Exception:
            logger.warning(
                "Failed to inject fix (%.6f, %.6f)", fix.latitude, fix.longitude, exc_info=True,
            )

    def _end_session(self, cancelled: bool) -> None:
        self._cancel_timer()
        session = self._session
        if session is None:
            return
        self._session = None
        session.cancelled = cancelled
        session.running = False
        session.cursor = 0
        session.speed_factor = DEFAULT_PLAYBACK_SPEED
        session.resume_speed = None
        if cancelled:
            logger.info("Playback stopped")

        try:
            self._host.release(session.provider)
        except HostError:
            logger.warning("Failed to release provider %s", session.provider, exc_info=True)

        subscriptions, self._subscriptions = self._subscriptions, []
        for subscription in subscriptions:
            self._dispatcher.post(subscription.end)
        self._idle.set()
