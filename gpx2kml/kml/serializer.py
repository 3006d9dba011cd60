"""Render :mod:`gpx2kml.kml.nodes` trees as KML markup with lxml."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from lxml import etree

from ..config import ATOM_NAMESPACE, GX_NAMESPACE, KML_NAMESPACE, OUTPUT_ENCODING

if TYPE_CHECKING:  # pragma: no cover
    from .nodes import Folder, KmlDocument, LinePlacemark, PointPlacemark
    from ..models import LineStyle

NSMAP = {None: KML_NAMESPACE, "gx": GX_NAMESPACE, "atom": ATOM_NAMESPACE}


def _tag(name: str) -> str:
    return f"{{{KML_NAMESPACE}}}{name}"


def _sub(parent: etree._Element, name: str, text: Optional[object] = None) -> etree._Element:
    element = etree.SubElement(parent, _tag(name))
    if text is not None:
        element.text = text if isinstance(text, str) else str(text)
    return element


def _flag(value: bool) -> str:
    return "1" if value else "0"


def _style(parent: etree._Element, style: "LineStyle") -> None:
    element = _sub(parent, "Style")
    element.set("id", style.id)
    line = _sub(element, "LineStyle")
    _sub(line, "color", style.color)
    _sub(line, "width", style.width)


def _line_placemark(parent: etree._Element, placemark: "LinePlacemark") -> None:
    element = _sub(parent, "Placemark")
    _sub(element, "visibility", _flag(placemark.visible))
    _sub(element, "open", _flag(placemark.open))
    _sub(element, "styleUrl", f"#{placemark.style_id}")
    _sub(element, "name", placemark.name)
    _sub(element, "description", placemark.description)
    line = _sub(element, "LineString")
    _sub(line, "extrude", _flag(placemark.extrude))
    _sub(line, "tessellate", _flag(placemark.tessellate))
    _sub(line, "altitudeMode", placemark.altitude_mode)
    _sub(line, "coordinates", placemark.coordinates)


def _point_placemark(parent: etree._Element, placemark: "PointPlacemark") -> None:
    element = _sub(parent, "Placemark")
    _sub(element, "name", placemark.name)
    _sub(element, "description", placemark.description)
    if placemark.when is not None:
        stamp = _sub(element, "TimeStamp")
        _sub(stamp, "when", placemark.when.isoformat())
    point = _sub(element, "Point")
    _sub(point, "coordinates", placemark.coordinates)


def _folder(parent: etree._Element, folder: "Folder") -> None:
    element = _sub(parent, "Folder")
    _sub(element, "name", folder.name)
    _sub(element, "description", folder.description)
    _sub(element, "visibility", _flag(folder.visible))
    _sub(element, "open", _flag(folder.open))
    for line in folder.lines:
        _line_placemark(element, line)
    for point in folder.points:
        _point_placemark(element, point)


def to_element(document: "KmlDocument") -> etree._Element:
    """Build the ``<kml>`` element tree for ``document``."""

    root = etree.Element(_tag("kml"), nsmap=NSMAP)
    doc = _sub(root, "Document")
    _sub(doc, "name", document.name)
    description = _sub(doc, "description")
    description.text = etree.CDATA(document.description)
    _sub(doc, "visibility", _flag(document.visible))
    _sub(doc, "open", _flag(document.open))
    for style in document.styles:
        _style(doc, style)
    _folder(doc, document.folder)
    return root


def to_bytes(document: "KmlDocument") -> bytes:
    """Serialize ``document`` as UTF-8 KML with an XML declaration."""

    return etree.tostring(
        to_element(document),
        xml_declaration=True,
        encoding=OUTPUT_ENCODING,
        pretty_print=True,
    )
