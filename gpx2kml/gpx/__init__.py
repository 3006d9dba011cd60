"""GPX track reading and point validation."""

from .reader import parse_document, read_track
from .validation import coord_valid, filter_and_order, parse_time, to_track_point

__all__ = [
    "parse_document",
    "read_track",
    "coord_valid",
    "filter_and_order",
    "parse_time",
    "to_track_point",
]
