"""Assemble tracks and photo placemarks into a :class:`KmlDocument`."""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..config import (
    DEFAULT_TOLERANCE,
    DOCUMENT_ATTRIBUTION,
    DOCUMENT_NAME,
    FOLDER_DESCRIPTION,
    FOLDER_NAME,
)
from ..geometry import simplify
from ..models import PhotoPlacemark, Track, TrackPoint
from ..styles import StylePalette
from .nodes import Folder, KmlDocument, LinePlacemark, PointPlacemark


def format_coordinates(points: Iterable[TrackPoint]) -> str:
    """Render points as space separated ``lon,lat,ele`` triples."""

    return " ".join(f"{p.longitude},{p.latitude},{p.elevation}" for p in points)


class DocumentAssembler:
    def __init__(
        self,
        palette: Optional[StylePalette] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.palette = palette or StylePalette()
        self._log = logger or logging.getLogger(self.__class__.__name__)

    def line_placemark(
        self, track: Track, index: int, tolerance: float
    ) -> LinePlacemark:
        style = self.palette.at(index)
        kept = simplify(track.points, tolerance)
        self._log.info(
            "Track %d '%s': kept %d of %d points (tolerance=%g, style=%s)",
            index + 1,
            track.title,
            len(kept),
            len(track.points),
            tolerance,
            style.id,
        )
        return LinePlacemark(
            name=track.title,
            description=track.description,
            style_id=style.id,
            coordinates=format_coordinates(kept),
        )

    @staticmethod
    def point_placemark(photo: PhotoPlacemark) -> PointPlacemark:
        return PointPlacemark(
            name=photo.name,
            description=photo.camera_model,
            longitude=photo.longitude,
            latitude=photo.latitude,
            when=photo.captured_at,
        )

    def build(
        self,
        tracks: Sequence[Track],
        photos: Sequence[Optional[PhotoPlacemark]] = (),
        tolerance: float = DEFAULT_TOLERANCE,
    ) -> KmlDocument:
        """Build the document tree; tracks and photos keep their input order.

        ``None`` entries in ``photos`` (images without a geotag) are skipped.

        Raises:
            StyleCatalogExhausted: If the palette is strict and there are more
                tracks than styles.
        """

        lines = tuple(
            self.line_placemark(track, index, tolerance)
            for index, track in enumerate(tracks)
        )
        points = tuple(
            self.point_placemark(photo) for photo in photos if photo is not None
        )
        folder = Folder(
            name=FOLDER_NAME,
            description=FOLDER_DESCRIPTION,
            lines=lines,
            points=points,
        )
        return KmlDocument(
            name=DOCUMENT_NAME,
            description=DOCUMENT_ATTRIBUTION,
            styles=tuple(self.palette),
            folder=folder,
        )
