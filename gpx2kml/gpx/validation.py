"""Validation and temporal ordering of raw GPX track points."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
import math
import re
from typing import Iterable, List, Optional, Tuple

from ..errors import TimeParseError
from ..models import RawTrackPoint, TrackPoint

_LOG = logging.getLogger(__name__)

_TIME_PATTERN = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{1,2}):(\d{2}):(\d{2})Z"
)
# Untimed points sort ahead of every real timestamp.
_EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def coord_valid(latitude: Optional[float], longitude: Optional[float]) -> bool:
    """Return True when both coordinates are present and finite."""

    if latitude is None or longitude is None:
        return False
    return math.isfinite(latitude) and math.isfinite(longitude)


def parse_time(text: str) -> datetime:
    """Parse a GPX UTC timestamp and return it as an aware local datetime."""

    match = _TIME_PATTERN.search(text or "")
    if match is None:
        raise TimeParseError(f"Unrecognised timestamp: {text!r}")
    try:
        utc = datetime(*(int(part) for part in match.groups()), tzinfo=timezone.utc)
        # Years at the edge of the datetime range overflow in non-UTC zones.
        return utc.astimezone()
    except (ValueError, OverflowError) as exc:
        raise TimeParseError(f"Invalid timestamp: {text!r}") from exc


def _parse_number(text: Optional[str]) -> Optional[float]:
    if text is None:
        return None
    try:
        return float(text.strip())
    except ValueError:
        return None


def to_track_point(raw: RawTrackPoint) -> Optional[TrackPoint]:
    """Convert raw markup values into a TrackPoint, or None when invalid."""

    latitude = _parse_number(raw.latitude)
    longitude = _parse_number(raw.longitude)
    if not coord_valid(latitude, longitude):
        return None
    elevation = _parse_number(raw.elevation)
    if elevation is None or not math.isfinite(elevation):
        elevation = 0.0
    timestamp: Optional[datetime] = None
    if raw.time is not None:
        try:
            timestamp = parse_time(raw.time)
        except TimeParseError as exc:
            _LOG.debug("Ignoring track point timestamp: %s", exc)
    return TrackPoint(
        latitude=latitude,
        longitude=longitude,
        elevation=elevation,
        timestamp=timestamp,
    )


def filter_and_order(
    raw_points: Iterable[RawTrackPoint],
) -> Tuple[List[TrackPoint], int]:
    """Drop invalid points and sort the rest by ascending timestamp.

    Points without a timestamp are placed first. The sort is stable, so points
    sharing a timestamp keep their document order.

    Returns:
        The ordered points and the number of points that were dropped.
    """

    points: List[TrackPoint] = []
    dropped = 0
    for raw in raw_points:
        point = to_track_point(raw)
        if point is None:
            dropped += 1
            continue
        points.append(point)
    points.sort(key=lambda p: p.timestamp or _EARLIEST)
    return points, dropped
