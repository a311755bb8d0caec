"""Control-call logging for the location mocker."""

from __future__ import annotations

import functools
import logging
import os
import threading
import time
from typing import Any, Callable, TypeVar

from gpxreplay.constants import LOG_DIR_ENV

F = TypeVar("F", bound=Callable[..., Any])

LOGGER_NAME = "gpxreplay.control"
LOG_FILE_NAME = "gpxreplay.log"

# Unset means control calls go through the application's own logging setup
_LOG_DIR: str | None = os.environ.get(LOG_DIR_ENV) or None

_logger: logging.Logger | None = None
_logger_lock = threading.Lock()


def _file_handler(log_dir: str) -> logging.Handler:
    os.makedirs(log_dir, exist_ok=True)
    handler = logging.FileHandler(os.path.join(log_dir, LOG_FILE_NAME), encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(message)s"))
    return handler


def _get_logger() -> logging.Logger:
    """Return the control-call logger.

    When ``GPXREPLAY_LOG_DIR`` is set, the first call attaches a file handler
    writing ``gpxreplay.log`` there and stops propagation. Otherwise records
    propagate and nothing is written to disk.
    """
    global _logger
    if _logger is not None:
        return _logger

    with _logger_lock:
        if _logger is not None:
            return _logger

        logger = logging.getLogger(LOGGER_NAME)
        if _LOG_DIR is not None:
            logger.setLevel(logging.DEBUG)
            logger.propagate = False
            if not logger.handlers:
                logger.addHandler(_file_handler(_LOG_DIR))
        _logger = logger

    return _logger


def _summarize(value: Any) -> str:
    # GPX documents are long; log their size instead of their text
    if isinstance(value, str) and len(value) > 80:
        return f"<{len(value)} chars>"
    return repr(value)


def log_control_call(fn: F) -> F:
    """Decorator that logs control-surface calls and their outcome."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = _get_logger()
        # Skip 'self'
        arg_parts = [_summarize(a) for a in args[1:]]
        arg_parts += [f"{k}={_summarize(v)}" for k, v in kwargs.items()]
        arg_str = ", ".join(arg_parts)
        logger.info("CALL: %s(%s)", fn.__qualname__, arg_str)

        start = time.monotonic()
        try:
            result = fn(*args, **kwargs)
        except Exception as exc:
            elapsed = time.monotonic() - start
            logger.error(
                "FAIL: %s(%s) -> %s: %s (%.3fs)",
                fn.__qualname__, arg_str, type(exc).__name__, exc, elapsed,
            )
            raise
        elapsed = time.monotonic() - start
        logger.info(
            "OK: %s(%s) -> %r (%.3fs)",
            fn.__qualname__, arg_str, result, elapsed,
        )
        return result

    return wrapper  # type: ignore[return-value]
