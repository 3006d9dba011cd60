"""Tests for the exiftool-backed metadata reader (no exiftool binary needed)."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import threading
from typing import Any, Dict, List

import exiftool
from exiftool.exceptions import ExifToolException
import pytest

from gpx2kml.errors import PhotoMetadataError
from gpx2kml.photos import extract_geotag
from gpx2kml.photos.metadata import GEOTAG_TAGS, ExifToolReader


class FakeExifToolHelper:
    """Stand-in for ``exiftool.ExifToolHelper`` recording its lifecycle."""

    instances: List["FakeExifToolHelper"] = []
    responses: Dict[str, Any] = {}

    def __init__(self, executable=None, common_args=None, **kwargs):
        self.executable = executable
        self.common_args = common_args
        self.running = False
        self.terminated = False
        self.thread_id = threading.get_ident()
        self.requests: List[tuple] = []
        FakeExifToolHelper.instances.append(self)

    def run(self) -> None:
        self.running = True

    def get_tags(self, files, tags, params=None):
        self.requests.append((list(files), list(tags)))
        response = FakeExifToolHelper.responses[files[0]]
        if isinstance(response, Exception):
            raise response
        return response

    def terminate(self) -> None:
        self.running = False
        self.terminated = True


@pytest.fixture
def fake_helper(monkeypatch):
    FakeExifToolHelper.instances = []
    FakeExifToolHelper.responses = {}
    monkeypatch.setattr(exiftool, "ExifToolHelper", FakeExifToolHelper)
    return FakeExifToolHelper


def test_read_tags_strips_groups_and_drops_missing_values(fake_helper) -> None:
    fake_helper.responses["IMG_0001.jpg"] = [
        {
            "SourceFile": "IMG_0001.jpg",
            "EXIF:GPSLatitude": "45 deg 30' 0.00\"",
            "EXIF:GPSLatitudeRef": "South",
            "File:FileName": "IMG_0001.jpg",
            "EXIF:Model": None,
            "Composite:GPSAltitude": 12,
        }
    ]
    with ExifToolReader(executable="/opt/exiftool") as reader:
        tags = reader.read_tags("IMG_0001.jpg")

    assert tags == {
        "SourceFile": "IMG_0001.jpg",
        "GPSLatitude": "45 deg 30' 0.00\"",
        "GPSLatitudeRef": "South",
        "FileName": "IMG_0001.jpg",
        "GPSAltitude": "12",
    }
    helper = fake_helper.instances[0]
    assert helper.executable == "/opt/exiftool"
    assert helper.common_args == []
    assert helper.requests == [(["IMG_0001.jpg"], list(GEOTAG_TAGS))]


def test_exiftool_failure_becomes_metadata_error(fake_helper) -> None:
    fake_helper.responses["broken.jpg"] = ExifToolException("exit status 1")
    with ExifToolReader() as reader:
        with pytest.raises(PhotoMetadataError, match="exiftool failed"):
            reader.read_tags("broken.jpg")


def test_empty_result_becomes_metadata_error(fake_helper) -> None:
    fake_helper.responses["empty.jpg"] = []
    with ExifToolReader() as reader:
        with pytest.raises(PhotoMetadataError, match="no metadata"):
            reader.read_tags("empty.jpg")


def test_extract_geotag_skips_photo_when_exiftool_fails(fake_helper) -> None:
    fake_helper.responses["broken.jpg"] = ExifToolException("exit status 1")
    with ExifToolReader() as reader:
        assert extract_geotag("broken.jpg", reader) is None


def test_one_helper_per_thread_and_close_terminates_all(fake_helper) -> None:
    for name in ["a.jpg", "b.jpg", "c.jpg", "d.jpg"]:
        fake_helper.responses[name] = [{"File:FileName": name}]
    reader = ExifToolReader()

    reader.read_tags("a.jpg")
    reader.read_tags("b.jpg")
    assert len(fake_helper.instances) == 1

    barrier = threading.Barrier(2)

    def _read(name: str) -> str:
        # Both workers must be alive at once so each gets its own thread.
        barrier.wait(timeout=5)
        return reader.read_tags(name)["FileName"]

    with ThreadPoolExecutor(max_workers=2) as executor:
        names = list(executor.map(_read, ["c.jpg", "d.jpg"]))
    assert names == ["c.jpg", "d.jpg"]

    helpers = fake_helper.instances
    assert len(helpers) == 3
    assert len({helper.thread_id for helper in helpers}) == 3
    assert all(helper.running for helper in helpers)

    reader.close()
    assert all(helper.terminated for helper in helpers)

    # A fresh helper is started after close.
    reader.read_tags("a.jpg")
    assert len(fake_helper.instances) == 4
    reader.close()
