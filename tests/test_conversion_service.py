"""Tests for the end-to-end conversion service."""

from __future__ import annotations

import pytest

from gpx2kml.errors import GpxParseError
from gpx2kml.services import ConversionService, ConversionServiceConfig, split_gpx_paths
from gpx2kml.styles import StylePalette

from conftest import FakeMetadataReader


def _service(reader=None, **kwargs) -> ConversionService:
    config = ConversionServiceConfig(**kwargs)
    if reader is not None:
        config.reader_factory = lambda: reader
    return ConversionService(config)


def test_split_gpx_paths() -> None:
    assert split_gpx_paths("a.gpx, b.gpx,,c.gpx ") == ["a.gpx", "b.gpx", "c.gpx"]
    assert split_gpx_paths("") == []


def test_load_tracks_preserves_input_order(gpx_file) -> None:
    paths = [
        gpx_file([(45.0 + i, 6.0, 0, None)], filename=f"t{i}.gpx", name=f"Track {i}")
        for i in range(5)
    ]
    tracks = _service(max_workers=3).load_tracks(paths)
    assert [t.title for t in tracks] == [f"Track {i}" for i in range(5)]


def test_load_tracks_aborts_on_malformed_gpx(gpx_file, tmp_path) -> None:
    good = gpx_file([(45.0, 6.0, 0, None)])
    bad = tmp_path / "bad.gpx"
    bad.write_text("<gpx>", encoding="utf-8")
    with pytest.raises(GpxParseError):
        _service().load_tracks([good, bad])


def test_load_photos_keeps_order_and_skips_unusable(tmp_path, geotagged_tags) -> None:
    reader = FakeMetadataReader(
        {
            "a.jpg": dict(geotagged_tags, FileName="a.jpg"),
            "b.jpg": {"FileName": "b.jpg"},
            "d.jpg": dict(geotagged_tags, FileName="d.jpg"),
        }
    )
    paths = [tmp_path / name for name in ["a.jpg", "b.jpg", "c.jpg", "d.jpg"]]
    photos = _service(reader, max_workers=4).load_photos(paths)
    assert [p.name for p in photos] == ["a.jpg", "d.jpg"]


def test_load_photos_does_not_start_reader_without_photos() -> None:
    def _explode():
        raise AssertionError("reader must not be created")

    config = ConversionServiceConfig(reader_factory=_explode)
    assert ConversionService(config).load_photos([]) == []


def test_run_writes_kml(gpx_file, tmp_path, geotagged_tags) -> None:
    track_a = gpx_file(
        [
            (0.0, 0.0, 1, "2021-06-05T07:00:00Z"),
            (0.0004, 0.001, 2, "2021-06-05T07:01:00Z"),
            (0.0, 0.002, 3, "2021-06-05T07:02:00Z"),
        ],
        filename="a.gpx",
        name="A",
    )
    track_b = gpx_file([(1.0, 1.0, 0, None)], filename="b.gpx", name="B")
    photo_dir = tmp_path / "photos"
    photo_dir.mkdir()
    (photo_dir / "IMG_0001.jpg").write_bytes(b"")
    (photo_dir / "no_gps.png").write_bytes(b"")
    reader = FakeMetadataReader({"IMG_0001.jpg": geotagged_tags, "no_gps.png": {}})
    output = tmp_path / "out.kml"

    document = _service(reader, tolerance=50e-5).run(
        f"{track_a},{track_b}", photo_dir, output
    )

    assert output.exists()
    text = output.read_text(encoding="utf-8")
    assert text == document.to_text()
    assert [line.name for line in document.folder.lines] == ["A", "B"]
    assert document.folder.lines[0].coordinates == "0.0,0.0,1.0 0.002,0.0,3.0"
    assert [p.name for p in document.folder.points] == ["IMG_0001.jpg"]
    assert sorted(reader.calls) == ["IMG_0001.jpg", "no_gps.png"]


def test_run_without_photo_dir_or_output(gpx_file) -> None:
    path = gpx_file([(45.0, 6.0, 0, None)])
    document = _service().run(str(path), None, None)
    assert len(document.folder.lines) == 1
    assert document.folder.points == ()


def test_run_writes_nothing_when_a_track_is_missing(gpx_file, tmp_path) -> None:
    good = gpx_file([(45.0, 6.0, 0, None)])
    output = tmp_path / "out.kml"
    with pytest.raises(OSError):
        _service().run(f"{good},{tmp_path / 'missing.gpx'}", None, output)
    assert not output.exists()


def test_strict_palette_applies_to_run(gpx_file, tmp_path) -> None:
    paths = [str(gpx_file([(1.0, 1.0, 0, None)], filename=f"t{i}.gpx")) for i in range(8)]
    service = _service(palette=StylePalette(overflow="strict"))
    with pytest.raises(IndexError):
        service.run(",".join(paths), None, tmp_path / "out.kml")
    assert not (tmp_path / "out.kml").exists()
