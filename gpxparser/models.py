"""
gpxparser — GPX Object Model
Data models: GPX, Metadata, Author, Copyright, Link, Bounds, Waypoint,
Route, Track, TrackSegment

One canonical shape for both GPX 1.0 and 1.1 documents. Instances are
built by the state machine in machine.py and read by the serializer.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from enum import Enum


class GPXVersion(Enum):
    V1_0 = "1.0"
    V1_1 = "1.1"

    @classmethod
    def from_attribute(cls, value: Optional[str]) -> Optional[GPXVersion]:
        """Version for a raw ``version`` attribute, None if absent or unknown."""
        if value is None:
            return None
        try:
            return cls(value.strip())
        except ValueError:
            return None


@dataclass
class Link:
    """A link to an external resource."""
    href: Optional[str] = None
    text: Optional[str] = None
    type: Optional[str] = None


@dataclass
class Author:
    name: Optional[str] = None
    email: Optional[str] = None
    link: Optional[Link] = None


@dataclass
class Copyright:
    """Copyright holder and license. ``author`` is a plain name string."""
    author: Optional[str] = None
    year: Optional[str] = None
    license: Optional[str] = None


@dataclass
class Bounds:
    """Bounding rectangle. All four edges are required."""
    min_lat: float
    min_lon: float
    max_lat: float
    max_lon: float


@dataclass
class Metadata:
    name: Optional[str] = None
    desc: Optional[str] = None
    author: Optional[Author] = None
    copyright: Optional[Copyright] = None
    links: List[Link] = field(default_factory=list)
    time: Optional[datetime] = None
    keywords: Optional[str] = None
    bounds: Optional[Bounds] = None


@dataclass
class Waypoint:
    """A single point. Used for waypoints, route points and trackpoints."""
    latitude: float
    longitude: float
    elevation: Optional[float] = None
    time: Optional[datetime] = None
    magnetic_variation: Optional[float] = None
    geoid_height: Optional[float] = None
    name: Optional[str] = None
    cmt: Optional[str] = None
    desc: Optional[str] = None
    src: Optional[str] = None
    links: List[Link] = field(default_factory=list)
    sym: Optional[str] = None
    type: Optional[str] = None
    fix: Optional[str] = None
    sat: Optional[int] = None
    hdop: Optional[float] = None
    vdop: Optional[float] = None
    pdop: Optional[float] = None
    age_of_dgps_data: Optional[float] = None
    dgps_id: Optional[int] = None


@dataclass
class Route:
    name: Optional[str] = None
    cmt: Optional[str] = None
    desc: Optional[str] = None
    src: Optional[str] = None
    links: List[Link] = field(default_factory=list)
    number: Optional[int] = None
    type: Optional[str] = None
    route_points: List[Waypoint] = field(default_factory=list)


@dataclass
class TrackSegment:
    trackpoints: List[Waypoint] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.trackpoints)


@dataclass
class Track:
    name: Optional[str] = None
    cmt: Optional[str] = None
    desc: Optional[str] = None
    src: Optional[str] = None
    links: List[Link] = field(default_factory=list)
    number: Optional[int] = None
    type: Optional[str] = None
    segments: List[TrackSegment] = field(default_factory=list)

    def point_count(self) -> int:
        """Total trackpoints over all segments."""
        return sum(len(segment) for segment in self.segments)


@dataclass
class GPX:
    """Root of a parsed document.

    ``version`` records the source schema version; serialization always
    writes 1.1.
    """
    version: Optional[GPXVersion] = None
    creator: Optional[str] = None
    metadata: Optional[Metadata] = None
    waypoints: List[Waypoint] = field(default_factory=list)
    routes: List[Route] = field(default_factory=list)
    tracks: List[Track] = field(default_factory=list)
