"""Central configuration for the GPX to KML converter.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Each tunable can be overridden through an environment
variable (optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_str(key: str, default: str) -> str:
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip()


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except Exception:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Simplification
# ---------------------------------------------------------------------------
# Maximum perpendicular deviation (degrees) tolerated when simplifying a track.
DEFAULT_TOLERANCE = _env_float("GPX2KML_TOLERANCE", 30e-5)


# ---------------------------------------------------------------------------
# Styles
# ---------------------------------------------------------------------------
# What to do when there are more tracks than line styles: "cycle" reuses the
# palette from the start, "strict" raises StyleCatalogExhausted.
STYLE_OVERFLOW_POLICY = _env_str("GPX2KML_STYLE_OVERFLOW", "cycle").lower()
if STYLE_OVERFLOW_POLICY not in ("cycle", "strict"):
    STYLE_OVERFLOW_POLICY = "cycle"


# ---------------------------------------------------------------------------
# Photos
# ---------------------------------------------------------------------------
# File suffixes (case-insensitive, without the dot) picked up from the photo
# directory.
PHOTO_EXTENSIONS = tuple(
    ext.strip().lower().lstrip(".")
    for ext in _env_str("GPX2KML_PHOTO_EXTENSIONS", "jpg,png").split(",")
    if ext.strip()
)

# Path to the exiftool executable. None means "look it up on PATH".
EXIFTOOL_PATH: str | None = os.getenv("GPX2KML_EXIFTOOL_PATH") or None


# ---------------------------------------------------------------------------
# Performance tuning
# ---------------------------------------------------------------------------
# Threads used when reading tracks and photo metadata.
MAX_WORKERS = max(1, _env_int("GPX2KML_MAX_WORKERS", 4))


# ---------------------------------------------------------------------------
# Output document
# ---------------------------------------------------------------------------
KML_NAMESPACE = "http://www.opengis.net/kml/2.2"
GX_NAMESPACE = "http://www.google.com/kml/ext/2.2"
ATOM_NAMESPACE = "http://www.w3.org/2005/Atom"

DOCUMENT_NAME = "Converted from GPX file"
DOCUMENT_ATTRIBUTION = (
    "<p>Converted using <b><a href='http://github.com/shakaman/gpx2kml' "
    "title='Go to gpx2kml on github'>Github</a></b></p>"
)
FOLDER_NAME = "Tracks"
FOLDER_DESCRIPTION = "A list of tracks"
OUTPUT_ENCODING = "UTF-8"
