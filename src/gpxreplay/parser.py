"""GPX document parser producing an ordered track."""

from __future__ import annotations

import logging
import math
import re
from typing import Any

from lxml import etree
from pydantic import ValidationError

from gpxreplay._timestamps import parse_timestamp
from gpxreplay.exceptions import EmptyTrackError, MalformedDocumentError
from gpxreplay.models.track_point import Track, TrackPoint

logger = logging.getLogger(__name__)

POINT_TAG = "trkpt"

# The text is re-encoded as UTF-8, so any declared encoding no longer applies
_XML_DECLARATION = re.compile(r"\A\ufeff?\s*<\?xml\s[^>]*\?>")


def _to_float(text: str | None) -> float | None:
    if text is None:
        return None
    try:
        value = float(text.strip())
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def _local_name(element: etree._Element) -> str:
    return etree.QName(element).localname


def _read_events(document: str) -> list[tuple[str, etree._Element]]:
    """Pull-parse the whole document, failing before any point is built."""
    parser = etree.XMLPullParser(
        events=("start", "end"),
        resolve_entities=False,
        no_network=True,
    )
    try:
        parser.feed(_XML_DECLARATION.sub("", document, count=1).encode("utf-8"))
        events = list(parser.read_events())
        parser.close()
        events.extend(parser.read_events())
    except etree.XMLSyntaxError as exc:
        raise MalformedDocumentError(str(exc)) from exc
    return events


def _finish_point(fields: dict[str, Any], index: int) -> TrackPoint | None:
    if fields["latitude"] is None or fields["longitude"] is None:
        logger.debug("Dropping track point #%d: missing or non-finite lat/lon", index)
        return None
    try:
        return TrackPoint(**fields)
    except ValidationError as exc:
        logger.debug("Dropping track point #%d: %s", index, exc.errors()[0]["msg"])
        return None


def parse_gpx(document: str) -> Track:
    """Parse a GPX document into its track points, in document order.

    ``<trkpt>`` elements missing a finite ``lat``/``lon`` (or holding
    out-of-range coordinates) are skipped. A non-finite ``ele`` or ``bearing``
    is left absent. Any XML declaration is ignored since the text is already
    decoded. Element names are matched by local name, so namespaced
    documents parse the same as bare ones.

    Raises:
        MalformedDocumentError: The document is not well-formed XML.
        EmptyTrackError: No valid track point was found.
    """
    if not document.strip():
        raise EmptyTrackError()

    points: list[TrackPoint] = []
    current: dict[str, Any] | None = None
    seen = 0

    for event, element in _read_events(document):
        name = _local_name(element)
        if event == "start":
            if name == POINT_TAG:
                current = {
                    "latitude": _to_float(element.get("lat")),
                    "longitude": _to_float(element.get("lon")),
                    "bearing": _to_float(element.get("bearing")),
                    "elevation": None,
                    "timestamp": None,
                }
            continue

        if name == POINT_TAG:
            if current is not None:
                point = _finish_point(current, seen)
                if point is not None:
                    points.append(point)
                seen += 1
            current = None
        elif current is not None and element.text and element.text.strip():
            if name == "ele":
                current["elevation"] = _to_float(element.text)
            elif name == "time":
                current["timestamp"] = parse_timestamp(element.text)

    if not points:
        raise EmptyTrackError()
    logger.debug("Parsed %d of %d track points", len(points), seen)
    return tuple(points)
