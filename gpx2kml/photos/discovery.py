"""Locate candidate images inside a photo directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Union

from ..config import PHOTO_EXTENSIONS

LOGGER = logging.getLogger(__name__)


def list_pictures(
    directory: Union[str, Path], extensions: Iterable[str] = PHOTO_EXTENSIONS
) -> List[Path]:
    """Return images directly inside ``directory``, sorted by path.

    Suffixes are matched case-insensitively. A missing directory yields an
    empty list.
    """

    root = Path(directory)
    if not root.is_dir():
        LOGGER.warning("Photo directory %s does not exist; no photos added", root)
        return []
    wanted = {f".{ext.lower().lstrip('.')}" for ext in extensions}
    pictures = sorted(
        path
        for path in root.iterdir()
        if path.is_file() and path.suffix.lower() in wanted
    )
    LOGGER.info("Found %d photos in %s", len(pictures), root)
    return pictures
