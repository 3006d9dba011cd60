"""GPX tracks and geotagged photos to KML."""

from .main import main
from .models import PhotoPlacemark, Track, TrackPoint
from .errors import GpxParseError, StyleCatalogExhausted

__all__ = [
    "main",
    "PhotoPlacemark",
    "Track",
    "TrackPoint",
    "GpxParseError",
    "StyleCatalogExhausted",
]
