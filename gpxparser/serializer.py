"""
gpxparser — GPX 1.1 serializer

Walks a GPX object graph depth-first and produces unindented GPX 1.1 XML
with a fixed element order. Always declares version="1.1", whatever
version the graph was parsed from. Indentation is done afterwards by
formatter.py.
"""

from __future__ import annotations
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional

from .constants import OUTPUT_VERSION, TIME_OUTPUT_FORMAT, XML_DECLARATION
from .models import (
    GPX, Metadata, Author, Copyright, Link, Bounds, Waypoint, Route, Track,
    TrackSegment,
)


def format_time(value: datetime) -> str:
    """UTC timestamp text. Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(TIME_OUTPUT_FORMAT)


def _format_value(value) -> str:
    if isinstance(value, datetime):
        return format_time(value)
    if isinstance(value, float):
        # shortest exact digits, never in exponent form (xsd:decimal)
        return format(Decimal(repr(value)), "f")
    return str(value)


def _leaf(parent: ET.Element, tag: str, value) -> Optional[ET.Element]:
    """Append <tag>value</tag> unless value is None or empty."""
    if value is None or value == "":
        return None
    el = ET.SubElement(parent, tag)
    el.text = _format_value(value)
    return el


def _write_link(parent: ET.Element, link: Link):
    el = ET.SubElement(parent, "link")
    if link.href is not None:
        el.set("href", link.href)
    _leaf(el, "text", link.text)
    _leaf(el, "type", link.type)


def _write_author(parent: ET.Element, author: Author):
    el = ET.SubElement(parent, "author")
    _leaf(el, "name", author.name)
    _leaf(el, "email", author.email)
    if author.link is not None:
        _write_link(el, author.link)


def _write_copyright(parent: ET.Element, copyright: Copyright):
    el = ET.SubElement(parent, "copyright")
    # author is required by the schema
    el.set("author", copyright.author or "")
    _leaf(el, "year", copyright.year)
    _leaf(el, "license", copyright.license)


def _write_bounds(parent: ET.Element, bounds: Bounds):
    el = ET.SubElement(parent, "bounds")
    el.set("minlat", _format_value(bounds.min_lat))
    el.set("minlon", _format_value(bounds.min_lon))
    el.set("maxlat", _format_value(bounds.max_lat))
    el.set("maxlon", _format_value(bounds.max_lon))


def _write_metadata(parent: ET.Element, metadata: Metadata):
    el = ET.SubElement(parent, "metadata")
    _leaf(el, "name", metadata.name)
    _leaf(el, "desc", metadata.desc)
    if metadata.author is not None:
        _write_author(el, metadata.author)
    if metadata.copyright is not None:
        _write_copyright(el, metadata.copyright)
    for link in metadata.links:
        _write_link(el, link)
    _leaf(el, "time", metadata.time)
    _leaf(el, "keywords", metadata.keywords)
    if metadata.bounds is not None:
        _write_bounds(el, metadata.bounds)


def _write_point(parent: ET.Element, tag: str, pt: Waypoint):
    el = ET.SubElement(parent, tag)
    el.set("lat", _format_value(pt.latitude))
    el.set("lon", _format_value(pt.longitude))
    _leaf(el, "ele", pt.elevation)
    _leaf(el, "time", pt.time)
    _leaf(el, "magvar", pt.magnetic_variation)
    _leaf(el, "geoidheight", pt.geoid_height)
    _leaf(el, "name", pt.name)
    _leaf(el, "cmt", pt.cmt)
    _leaf(el, "desc", pt.desc)
    _leaf(el, "src", pt.src)
    for link in pt.links:
        _write_link(el, link)
    _leaf(el, "sym", pt.sym)
    _leaf(el, "type", pt.type)
    _leaf(el, "fix", pt.fix)
    _leaf(el, "sat", pt.sat)
    _leaf(el, "hdop", pt.hdop)
    _leaf(el, "vdop", pt.vdop)
    _leaf(el, "pdop", pt.pdop)
    _leaf(el, "ageofdgpsdata", pt.age_of_dgps_data)
    _leaf(el, "dgpsid", pt.dgps_id)


def _write_path_header(el: ET.Element, path):
    """Fields shared by <rte> and <trk>."""
    _leaf(el, "name", path.name)
    _leaf(el, "cmt", path.cmt)
    _leaf(el, "desc", path.desc)
    _leaf(el, "src", path.src)
    for link in path.links:
        _write_link(el, link)
    _leaf(el, "number", path.number)
    _leaf(el, "type", path.type)


def _write_route(parent: ET.Element, route: Route):
    el = ET.SubElement(parent, "rte")
    _write_path_header(el, route)
    for pt in route.route_points:
        _write_point(el, "rtept", pt)


def _write_segment(parent: ET.Element, segment: TrackSegment):
    el = ET.SubElement(parent, "trkseg")
    for pt in segment.trackpoints:
        _write_point(el, "trkpt", pt)


def _write_track(parent: ET.Element, track: Track):
    el = ET.SubElement(parent, "trk")
    _write_path_header(el, track)
    for segment in track.segments:
        _write_segment(el, segment)


def build_tree(gpx: GPX) -> ET.Element:
    root = ET.Element("gpx")
    root.set("version", OUTPUT_VERSION)
    if gpx.creator is not None:
        root.set("creator", gpx.creator)

    if gpx.metadata is not None:
        _write_metadata(root, gpx.metadata)
    for wpt in gpx.waypoints:
        _write_point(root, "wpt", wpt)
    for route in gpx.routes:
        _write_route(root, route)
    for track in gpx.tracks:
        _write_track(root, track)
    return root


def serialize_raw(gpx: GPX) -> str:
    """Declaration plus single-line GPX 1.1 XML for ``gpx``."""
    body = ET.tostring(build_tree(gpx), encoding="unicode")
    return XML_DECLARATION + body
