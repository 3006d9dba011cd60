"""Central error types used across the application."""

from __future__ import annotations


class Gpx2KmlError(RuntimeError):
    """Base error for conversion failures."""


class GpxParseError(Gpx2KmlError):
    """Raised when a GPX document is malformed or has no track."""


class TimeParseError(Gpx2KmlError, ValueError):
    """Raised when a track point timestamp is not ``YYYY-MM-DDThh:mm:ssZ``."""


class GeotagMissingOrUnparsable(Gpx2KmlError, ValueError):
    """Raised when a photo lacks a usable GPS latitude or longitude."""


class PhotoMetadataError(Gpx2KmlError):
    """Raised when the metadata of an image cannot be read at all."""


class StyleCatalogExhausted(Gpx2KmlError, IndexError):
    """Raised when a strict palette is asked for more styles than it holds."""


__all__ = [
    "Gpx2KmlError",
    "GpxParseError",
    "TimeParseError",
    "GeotagMissingOrUnparsable",
    "PhotoMetadataError",
    "StyleCatalogExhausted",
]
