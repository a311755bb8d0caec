"""Delivery of emitted points onto the thread that owns the sinks."""

from __future__ import annotations

import queue
from abc import ABC, abstractmethod
from typing import Callable

Callback = Callable[[], None]


class Dispatcher(ABC):
    """Hands a callback to the thread that should run it.

    ``post`` is called from the playback timer thread and must never wait for
    the callback to run there.
    """

    @abstractmethod
    def post(self, callback: Callback) -> None: ...


class InlineDispatcher(Dispatcher):
    """Runs callbacks immediately on the posting thread."""

    def post(self, callback: Callback) -> None:
        callback()


class QueueDispatcher(Dispatcher):
    """FIFO of callbacks drained by a foreground thread.

    Usage:
        dispatcher = QueueDispatcher()
        mocker = LocationMocker(host, dispatcher=dispatcher)
        mocker.start_mocking_with_gpx(gpx)
        while mocker.state is not PlaybackState.IDLE:
            dispatcher.run_pending(timeout=0.5)
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[Callback] = queue.SimpleQueue()

    def post(self, callback: Callback) -> None:
        self._queue.put(callback)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def run_pending(self, timeout: float | None = None) -> int:
        """Run every queued callback on the calling thread.

        With a ``timeout``, waits up to that many seconds for the first
        callback when the queue is empty. Returns the number of callbacks run.
        """
        count = 0
        if timeout is not None:
            try:
                callback = self._queue.get(timeout=timeout)
            except queue.Empty:
                return 0
            callback()
            count += 1
        while True:
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                return count
            callback()
            count += 1
