"""GPX/photo to KML conversion service.

Owns a single conversion run: read every track, extract photo geotags, hand
both to :class:`DocumentAssembler` and write the serialized result. Reading
is fanned out over a thread pool while output order always follows input
order.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from contextlib import ExitStack
from dataclasses import dataclass, field
import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from ..config import DEFAULT_TOLERANCE, MAX_WORKERS
from ..gpx import read_track
from ..kml import DocumentAssembler, KmlDocument
from ..models import PhotoPlacemark, Track
from ..photos import ExifToolReader, MetadataReader, extract_geotag, list_pictures
from ..styles import StylePalette

PathLike = Union[str, Path]


def split_gpx_paths(value: str) -> List[str]:
    """Split a comma separated list of GPX paths, ignoring blanks."""

    return [part.strip() for part in (value or "").split(",") if part.strip()]


@dataclass(slots=True)
class ConversionServiceConfig:
    tolerance: float = DEFAULT_TOLERANCE
    max_workers: int = MAX_WORKERS
    palette: StylePalette = field(default_factory=StylePalette)
    # Factory for the metadata collaborator; only invoked when photos exist.
    reader_factory: Callable[[], MetadataReader] = ExifToolReader
    logger: logging.Logger | None = None


class ConversionService:
    def __init__(self, config: ConversionServiceConfig | None = None):
        self.config = config or ConversionServiceConfig()
        self._log = self.config.logger or logging.getLogger(self.__class__.__name__)
        self.assembler = DocumentAssembler(self.config.palette, logger=self._log)

    def _workers(self, count: int) -> int:
        return max(1, min(self.config.max_workers, count))

    def load_tracks(self, paths: Sequence[PathLike]) -> List[Track]:
        """Read every GPX file; the first failure aborts the whole run."""

        if not paths:
            return []
        self._log.info("Reading %d GPX files ...", len(paths))
        with ThreadPoolExecutor(max_workers=self._workers(len(paths))) as executor:
            tracks = list(executor.map(read_track, paths))
        for path, track in zip(paths, tracks):
            self._log.debug("%s -> '%s' (%d points)", path, track.title, len(track.points))
        return tracks

    def load_photos(
        self,
        paths: Sequence[PathLike],
        reader: Optional[MetadataReader] = None,
    ) -> List[PhotoPlacemark]:
        """Extract geotags, dropping photos that cannot be placed on the map."""

        if not paths:
            return []
        with ExitStack() as stack:
            if reader is None:
                reader = self.config.reader_factory()
                if hasattr(reader, "__exit__"):
                    stack.enter_context(reader)
            with ThreadPoolExecutor(max_workers=self._workers(len(paths))) as executor:
                results = list(
                    executor.map(lambda path: extract_geotag(path, reader), paths)
                )
        placemarks = [placemark for placemark in results if placemark is not None]
        skipped = len(paths) - len(placemarks)
        if skipped:
            self._log.info(
                "Skipped %d of %d photos without a usable geotag", skipped, len(paths)
            )
        return placemarks

    def convert(
        self,
        gpx_paths: Sequence[PathLike],
        photo_paths: Sequence[PathLike] = (),
    ) -> KmlDocument:
        tracks = self.load_tracks(gpx_paths)
        photos = self.load_photos(photo_paths)
        return self.assembler.build(tracks, photos, self.config.tolerance)

    def run(
        self,
        gpx_files: str,
        photo_dir: Optional[PathLike],
        output_path: Optional[PathLike],
    ) -> KmlDocument:
        """Convert ``gpx_files`` (comma separated) plus photos into KML.

        The document is written to ``output_path`` when one is given. Nothing
        is written if any GPX file fails to load.
        """

        gpx_paths = split_gpx_paths(gpx_files)
        photo_paths = list_pictures(photo_dir) if photo_dir else []
        document = self.convert(gpx_paths, photo_paths)
        if output_path is not None:
            target = document.save(output_path)
            self._log.info(
                "KML saved to %s (tracks=%d, photos=%d)",
                target,
                len(document.folder.lines),
                len(document.folder.points),
            )
        return document
