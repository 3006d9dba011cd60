"""KML document model, assembly and serialization."""

from .builder import DocumentAssembler, format_coordinates
from .nodes import Folder, KmlDocument, LinePlacemark, PointPlacemark
from .serializer import to_bytes, to_element

__all__ = [
    "DocumentAssembler",
    "format_coordinates",
    "Folder",
    "KmlDocument",
    "LinePlacemark",
    "PointPlacemark",
    "to_bytes",
    "to_element",
]
