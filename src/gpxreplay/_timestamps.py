"""Timestamp parsing and formatting for GPX ``<time>`` values."""

from __future__ import annotations

from datetime import UTC, datetime

from gpxreplay.constants import TIMESTAMP_FORMATS


def parse_timestamp(text: str | None) -> datetime | None:
    """Parse a GPX timestamp, trying each accepted format in order.

    Returns an aware UTC datetime, or None when no format matches.
    """
    if not text:
        return None
    value = text.strip()
    for fmt in TIMESTAMP_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=UTC)
        return parsed.astimezone(UTC)
    return None


def format_timestamp(value: datetime) -> str:
    """Render as ISO-8601 UTC with millisecond precision, e.g. ``2024-05-01T10:00:00.000Z``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    value = value.astimezone(UTC)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"
