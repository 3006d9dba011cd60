"""Photo discovery and geotag extraction."""

from .discovery import list_pictures
from .geotag import (
    apply_hemisphere,
    extract_geotag,
    parse_dms,
    placemark_from_tags,
)
from .metadata import ExifToolReader, MetadataReader

__all__ = [
    "list_pictures",
    "apply_hemisphere",
    "extract_geotag",
    "parse_dms",
    "placemark_from_tags",
    "ExifToolReader",
    "MetadataReader",
]
