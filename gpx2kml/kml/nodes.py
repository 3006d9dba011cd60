"""Typed nodes of an assembled KML document."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple, Union

from ..models import LineStyle
from . import serializer


@dataclass(frozen=True)
class LinePlacemark:
    name: str
    description: str
    style_id: str
    coordinates: str
    visible: bool = False
    open: bool = False
    extrude: bool = True
    tessellate: bool = True
    altitude_mode: str = "clampToGround"


@dataclass(frozen=True)
class PointPlacemark:
    name: str
    description: str
    longitude: float
    latitude: float
    when: Optional[datetime] = None

    @property
    def coordinates(self) -> str:
        return f"{self.longitude},{self.latitude}"


@dataclass(frozen=True)
class Folder:
    name: str
    description: str
    lines: Tuple[LinePlacemark, ...] = ()
    points: Tuple[PointPlacemark, ...] = ()
    visible: bool = True
    open: bool = False


@dataclass(frozen=True)
class KmlDocument:
    """Root of the output document; serialized only on demand."""

    name: str
    description: str
    styles: Tuple[LineStyle, ...]
    folder: Folder
    visible: bool = True
    open: bool = True

    def to_bytes(self) -> bytes:
        return serializer.to_bytes(self)

    def to_text(self) -> str:
        return self.to_bytes().decode("utf-8")

    def save(self, path: Union[str, Path]) -> Path:
        """Serialize the whole document, then write it to ``path``."""

        payload = self.to_bytes()
        target = Path(path)
        target.write_bytes(payload)
        return target
