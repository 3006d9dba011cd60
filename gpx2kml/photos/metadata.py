"""Image metadata collaborators.

The geotag extractor only needs a mapping of tag name to printed value. The
default implementation shells out to exiftool through PyExifTool with print
conversion enabled, so coordinates come back as ``45 deg 30' 0.00"`` and
references as ``North``/``South``/``East``/``West``.
"""

from __future__ import annotations

import logging
from pathlib import Path
import threading
from typing import Dict, List, Mapping, Optional, Protocol, Sequence, Union

import exiftool
from exiftool.exceptions import ExifToolException

from ..config import EXIFTOOL_PATH
from ..errors import PhotoMetadataError

PathLike = Union[str, Path]

GEOTAG_TAGS: Sequence[str] = (
    "GPSLatitude",
    "GPSLongitude",
    "GPSLatitudeRef",
    "GPSLongitudeRef",
    "FileName",
    "Model",
    "DateTimeOriginal",
)


class MetadataReader(Protocol):
    def read_tags(self, path: PathLike) -> Mapping[str, str]:
        """Return printed tag values keyed by bare tag name."""
        ...


class ExifToolReader:
    """Read image metadata with one exiftool process per calling thread.

    Use as a context manager so every process started is terminated::

        with ExifToolReader() as reader:
            tags = reader.read_tags("IMG_0001.jpg")
    """

    def __init__(
        self,
        executable: Optional[str] = EXIFTOOL_PATH,
        tags: Sequence[str] = GEOTAG_TAGS,
    ) -> None:
        self.executable = executable
        self.tags = list(tags)
        self._local = threading.local()
        self._helpers: List[exiftool.ExifToolHelper] = []
        self._lock = threading.Lock()
        self._log = logging.getLogger(self.__class__.__name__)

    def __enter__(self) -> "ExifToolReader":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _helper(self) -> exiftool.ExifToolHelper:
        helper = getattr(self._local, "helper", None)
        if helper is None:
            # No -G/-n: bare tag names and human readable values.
            helper = exiftool.ExifToolHelper(executable=self.executable, common_args=[])
            helper.run()
            self._local.helper = helper
            with self._lock:
                self._helpers.append(helper)
            self._log.debug("Started exiftool for thread %s", threading.get_ident())
        return helper

    def read_tags(self, path: PathLike) -> Dict[str, str]:
        try:
            results = self._helper().get_tags([str(path)], tags=self.tags)
        except ExifToolException as exc:
            raise PhotoMetadataError(f"{path}: exiftool failed ({exc})") from exc
        if not results:
            raise PhotoMetadataError(f"{path}: exiftool returned no metadata")
        return {
            key.split(":")[-1]: str(value)
            for key, value in results[0].items()
            if value is not None
        }

    def close(self) -> None:
        with self._lock:
            helpers, self._helpers = self._helpers, []
        for helper in helpers:
            if helper.running:
                helper.terminate()
        self._local = threading.local()
