"""
gpxparser — GPX 1.0/1.1 reader, canonical GPX 1.1 writer
==========================================
Parses GPS Exchange Format documents of either schema version into one
object model and writes them back as indented GPX 1.1.

Quick start:
    gpxparser track.gpx --info          # CLI
    gpxparser old.gpx new.gpx           # Rewrite as GPX 1.1

Library:
    from gpxparser import parse_file, serialize
    gpx = parse_file("track.gpx")
    print(len(gpx.tracks[0].segments[0].trackpoints))
    text = serialize(gpx)
"""

from .models import (
    GPX, GPXVersion, Metadata, Author, Copyright, Link, Bounds,
    Waypoint, Route, Track, TrackSegment,
)
from .errors import GPXParserError, InitializationError, ParsingError, GeneralError
from .machine import GPXStateMachine
from .legacy import GPX10EventAdapter
from .tokenizer import feed_events
from .formatter import format_xml
from .formats import parse, parse_file, serialize, to_xml, write_file, convert

__version__ = "1.0.0"
__all__ = [
    "GPX", "GPXVersion", "Metadata", "Author", "Copyright", "Link", "Bounds",
    "Waypoint", "Route", "Track", "TrackSegment",
    "GPXParserError", "InitializationError", "ParsingError", "GeneralError",
    "GPXStateMachine", "GPX10EventAdapter", "feed_events", "format_xml",
    "parse", "parse_file", "serialize", "to_xml", "write_file", "convert",
]
