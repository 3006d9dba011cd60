"""Read a GPX document into a validated, time-ordered :class:`Track`."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from lxml import etree

from ..errors import GpxParseError
from ..models import RawTrackPoint, Track
from .validation import filter_and_order

GpxSource = Union[str, Path, BinaryIO]

LOGGER = logging.getLogger(__name__)


def _build_parser() -> etree.XMLParser:
    # GPX files come from arbitrary devices; never expand entities or fetch DTDs.
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


def _source_label(source: GpxSource) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    return getattr(source, "name", "<stream>")


def _strip_namespaces(root: etree._Element) -> None:
    """Drop namespaces so GPX 1.0 and 1.1 documents share the same paths."""

    for element in root.iter():
        if isinstance(element.tag, str):
            element.tag = etree.QName(element).localname
    etree.cleanup_namespaces(root)


def _iter_raw_points(root: etree._Element) -> Iterator[RawTrackPoint]:
    for trkpt in root.xpath("/gpx/trk/trkseg/trkpt"):
        yield RawTrackPoint(
            latitude=trkpt.get("lat"),
            longitude=trkpt.get("lon"),
            elevation=trkpt.findtext("ele"),
            time=trkpt.findtext("time"),
        )


def parse_document(source: GpxSource) -> etree._Element:
    """Parse GPX markup and return its namespace-free root element.

    Raises:
        GpxParseError: If the markup is not well formed or holds no track.
        OSError: If the file cannot be opened.
    """

    label = _source_label(source)
    if isinstance(source, Path):
        source = str(source)
    try:
        tree = etree.parse(source, _build_parser())
    except etree.XMLSyntaxError as exc:
        raise GpxParseError(f"{label}: malformed GPX ({exc})") from exc
    root = tree.getroot()
    _strip_namespaces(root)
    if root.tag != "gpx":
        raise GpxParseError(f"{label}: root element is <{root.tag}>, expected <gpx>")
    if root.find("trk") is None:
        raise GpxParseError(f"{label}: document contains no <trk> element")
    return root


def read_track(source: GpxSource) -> Track:
    """Read a GPX file or binary stream into a :class:`Track`.

    Every ``trkpt`` of every track segment is collected in document order,
    invalid points are dropped and the remainder sorted by timestamp. Title and
    description come from the first ``trk`` element.
    """

    root = parse_document(source)
    points, dropped = filter_and_order(_iter_raw_points(root))
    if dropped:
        LOGGER.warning(
            "Dropped %d track points without valid coordinates from %s",
            dropped,
            _source_label(source),
        )
    track = Track(
        title=(root.findtext("trk/name") or "").strip(),
        description=(root.findtext("trk/desc") or "").strip(),
        points=points,
        dropped_points=dropped,
    )
    LOGGER.debug(
        "Read track '%s' with %d points from %s",
        track.title,
        len(track.points),
        _source_label(source),
    )
    return track
