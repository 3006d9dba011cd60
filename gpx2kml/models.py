from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass(frozen=True)
class TrackPoint:
    latitude: float
    longitude: float
    elevation: float = 0.0
    timestamp: Optional[datetime] = None


@dataclass(frozen=True)
class RawTrackPoint:
    # Attribute/element text exactly as found in the GPX document
    latitude: Optional[str] = None
    longitude: Optional[str] = None
    elevation: Optional[str] = None
    time: Optional[str] = None


@dataclass
class Track:
    title: str = ""
    description: str = ""
    points: List[TrackPoint] = field(default_factory=list)
    # Number of raw points rejected by validation
    dropped_points: int = 0


@dataclass(frozen=True)
class LineStyle:
    id: str
    color: str
    width: int = 4


@dataclass(frozen=True)
class PhotoPlacemark:
    name: str
    camera_model: str
    longitude: float
    latitude: float
    captured_at: Optional[datetime] = None
