"""Global pytest fixtures & helpers.

Adds project root to path and provides reusable GPX and photo metadata
fixtures so tests never need real devices or the exiftool binary.
"""
from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Dict, Mapping
import pytest

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from gpx2kml.errors import PhotoMetadataError


# --- Factory helpers -------------------------------------------------
def make_gpx(points, name="Morning Ride", desc="Around the lake", namespace=True):
    """Return GPX markup; ``points`` are (lat, lon, ele, time) tuples, None omits."""

    rows = []
    for lat, lon, ele, time in points:
        attrs = []
        if lat is not None:
            attrs.append(f'lat="{lat}"')
        if lon is not None:
            attrs.append(f'lon="{lon}"')
        children = ""
        if ele is not None:
            children += f"<ele>{ele}</ele>"
        if time is not None:
            children += f"<time>{time}</time>"
        rows.append(f"<trkpt {' '.join(attrs)}>{children}</trkpt>")
    xmlns = ' xmlns="http://www.topografix.com/GPX/1/1"' if namespace else ""
    header = ""
    if name is not None:
        header += f"<name>{name}</name>"
    if desc is not None:
        header += f"<desc>{desc}</desc>"
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<gpx version="1.1" creator="test"{xmlns}>'
        f"<trk>{header}<trkseg>{''.join(rows)}</trkseg></trk></gpx>"
    )


class FakeMetadataReader:
    """Metadata reader backed by a dict of path name -> tags."""

    def __init__(self, tags_by_name: Mapping[str, Mapping[str, str]]):
        self.tags_by_name = dict(tags_by_name)
        self.calls: list[str] = []

    def read_tags(self, path) -> Dict[str, str]:
        name = Path(path).name
        self.calls.append(name)
        if name not in self.tags_by_name:
            raise PhotoMetadataError(f"{path}: unreadable")
        return dict(self.tags_by_name[name])


# --- Fixtures --------------------------------------------------------
@pytest.fixture
def gpx_file(tmp_path):
    def _write(points, filename="track.gpx", **kwargs):
        path = tmp_path / filename
        path.write_text(make_gpx(points, **kwargs), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def geotagged_tags():
    return {
        "GPSLatitude": "45 deg 30' 0.00\"",
        "GPSLatitudeRef": "North",
        "GPSLongitude": "6 deg 15' 36.00\"",
        "GPSLongitudeRef": "East",
        "FileName": "IMG_0001.jpg",
        "Model": "Canon EOS 5D",
        "DateTimeOriginal": "2016:03:07 18:56:15",
    }
