"""Turn EXIF GPS tags into photo placemarks."""

from __future__ import annotations

from datetime import datetime
import logging
import re
from typing import AbstractSet, Mapping, Optional

from ..errors import GeotagMissingOrUnparsable, PhotoMetadataError
from ..models import PhotoPlacemark
from .metadata import MetadataReader, PathLike

LOGGER = logging.getLogger(__name__)

# exiftool prints angles as ``45 deg 30' 12.34"``; the "deg" token is optional.
_DMS_PATTERN = re.compile(r"(\d+) (?:deg )?(\d+)' (\d+\.\d+)")
_EXIF_DATETIME_FORMAT = "%Y:%m:%d %H:%M:%S"

# exiftool spells references out ("South", "West") while raw EXIF and other
# writers use the single letter; both are honoured.
SOUTH_REFS: AbstractSet[str] = frozenset({"S", "South"})
WEST_REFS: AbstractSet[str] = frozenset({"W", "West"})


def parse_dms(text: Optional[str]) -> float:
    """Convert a degrees/minutes/seconds string into unsigned decimal degrees."""

    if not text:
        raise GeotagMissingOrUnparsable("GPS coordinate is missing")
    match = _DMS_PATTERN.search(text)
    if match is None:
        raise GeotagMissingOrUnparsable(f"Unrecognised GPS coordinate: {text!r}")
    degrees, minutes, seconds = (float(part) for part in match.groups())
    return degrees + minutes / 60 + seconds / 3600


def apply_hemisphere(
    value: float, ref: Optional[str], negative_refs: AbstractSet[str]
) -> float:
    """Negate ``value`` when ``ref`` names the southern or western hemisphere."""

    if ref is not None and ref in negative_refs:
        return -value
    return value


def _parse_capture_time(text: Optional[str]) -> Optional[datetime]:
    if not text:
        return None
    try:
        return datetime.strptime(text.strip()[:19], _EXIF_DATETIME_FORMAT)
    except ValueError:
        return None


def placemark_from_tags(tags: Mapping[str, str]) -> PhotoPlacemark:
    """Build a placemark from printed metadata tags.

    Raises:
        GeotagMissingOrUnparsable: If latitude or longitude is absent or does
            not look like a DMS angle.
    """

    latitude = apply_hemisphere(
        parse_dms(tags.get("GPSLatitude")), tags.get("GPSLatitudeRef"), SOUTH_REFS
    )
    longitude = apply_hemisphere(
        parse_dms(tags.get("GPSLongitude")), tags.get("GPSLongitudeRef"), WEST_REFS
    )
    return PhotoPlacemark(
        name=tags.get("FileName", ""),
        camera_model=tags.get("Model", ""),
        longitude=longitude,
        latitude=latitude,
        captured_at=_parse_capture_time(tags.get("DateTimeOriginal")),
    )


def extract_geotag(path: PathLike, reader: MetadataReader) -> Optional[PhotoPlacemark]:
    """Return the placemark for one image, or None if it cannot be located.

    Unreadable images and images without a usable geotag are skipped; neither
    aborts the conversion.
    """

    try:
        tags = reader.read_tags(path)
    except (PhotoMetadataError, OSError) as exc:
        LOGGER.warning("Skipping photo %s: %s", path, exc)
        return None
    try:
        return placemark_from_tags(tags)
    except GeotagMissingOrUnparsable as exc:
        LOGGER.debug("Photo %s has no usable geotag: %s", path, exc)
        return None
