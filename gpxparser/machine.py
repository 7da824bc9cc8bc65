"""
gpxparser — Parsing state machine

Consumes ordered element-start / character-data / element-end events and
builds the GPX object graph as it goes. Only GPX 1.1 shapes are handled
here; GPX 1.0 documents are rewritten into 1.1 events by legacy.py first.

All in-progress state lives in a ParserState, so separate machines never
share anything.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .elements import (
    ElementKind, CONTAINER_KINDS, POINT_KINDS, leaf_route, safe_float,
)
from .models import (
    GPX, GPXVersion, Metadata, Waypoint, Route, Track, TrackSegment,
    Link, Author, Copyright, Bounds,
)

logger = logging.getLogger(__name__)

K = ElementKind

# (parent kind, child kind) -> (field on parent, appends to a list?)
ATTACH_FIELDS: Dict[Tuple[ElementKind, ElementKind], Tuple[str, bool]] = {
    (K.GPX, K.METADATA): ("metadata", False),
    (K.GPX, K.WPT): ("waypoints", True),
    (K.GPX, K.RTE): ("routes", True),
    (K.GPX, K.TRK): ("tracks", True),
    (K.METADATA, K.AUTHOR): ("author", False),
    (K.METADATA, K.COPYRIGHT): ("copyright", False),
    (K.METADATA, K.LINK): ("links", True),
    (K.METADATA, K.BOUNDS): ("bounds", False),
    (K.AUTHOR, K.LINK): ("link", False),
    (K.WPT, K.LINK): ("links", True),
    (K.RTEPT, K.LINK): ("links", True),
    (K.TRKPT, K.LINK): ("links", True),
    (K.RTE, K.LINK): ("links", True),
    (K.RTE, K.RTEPT): ("route_points", True),
    (K.TRK, K.LINK): ("links", True),
    (K.TRK, K.TRKSEG): ("segments", True),
    (K.TRKSEG, K.TRKPT): ("trackpoints", True),
}


@dataclass
class Frame:
    """One open container. ``builder`` is None when the element's required
    attributes were unusable; its children are then discarded."""
    kind: ElementKind
    builder: Any = None


@dataclass
class ParserState:
    gpx: GPX = field(default_factory=GPX)
    stack: List[Frame] = field(default_factory=list)
    text: List[str] = field(default_factory=list)
    leaf_attrs: Dict[str, str] = field(default_factory=dict)
    root_seen: bool = False

    @property
    def top(self) -> Optional[Frame]:
        return self.stack[-1] if self.stack else None


def _build_point(attrs: Dict[str, str]) -> Optional[Waypoint]:
    lat = safe_float(attrs.get("lat"))
    lon = safe_float(attrs.get("lon"))
    if lat is None or lon is None:
        return None
    return Waypoint(latitude=lat, longitude=lon)


def _build_bounds(attrs: Dict[str, str]) -> Optional[Bounds]:
    edges = [safe_float(attrs.get(name)) for name in ("minlat", "minlon", "maxlat", "maxlon")]
    if any(edge is None for edge in edges):
        return None
    return Bounds(*edges)


class GPXStateMachine:
    """Event handler that assembles a GPX object graph.

    Usage::

        machine = GPXStateMachine()
        feed_events(xml, GPX10EventAdapter(machine))
        gpx = machine.finish()
    """

    def __init__(self):
        self.state = ParserState()

    # ─── events ──────────────────────────────────────────────

    def on_element_start(self, name: str, attrs: Dict[str, str]) -> None:
        state = self.state
        kind = ElementKind.from_tag(name)
        state.text = []

        if kind not in CONTAINER_KINDS:
            state.leaf_attrs = attrs if kind is K.EMAIL else {}
            return

        state.stack.append(Frame(kind, self._new_builder(kind, attrs)))

    def on_character_data(self, text: str) -> None:
        self.state.text.append(text)

    def on_element_end(self, name: str) -> None:
        state = self.state
        kind = ElementKind.from_tag(name)

        if kind in CONTAINER_KINDS:
            top = state.top
            if top is None or top.kind is not kind:
                logger.debug("Unbalanced </%s> ignored", name)
                return
            state.stack.pop()
            self._attach(top)
        elif kind is not K.IGNORED:
            self._route_leaf(kind)

        state.text = []

    def finish(self) -> GPX:
        """Return the root object. Unclosed frames are dropped."""
        if self.state.stack:
            logger.debug("%d element(s) left open at end of document", len(self.state.stack))
        return self.state.gpx

    # ─── helpers ─────────────────────────────────────────────

    def _new_builder(self, kind: ElementKind, attrs: Dict[str, str]) -> Any:
        state = self.state

        if kind is K.GPX:
            if state.root_seen or state.stack:
                logger.debug("Nested <gpx> ignored")
                return None
            state.root_seen = True
            state.gpx.version = GPXVersion.from_attribute(attrs.get("version"))
            state.gpx.creator = attrs.get("creator")
            return state.gpx

        if kind in POINT_KINDS:
            point = _build_point(attrs)
            if point is None:
                logger.debug("<%s> without numeric lat/lon dropped: %r", kind.value, attrs)
            return point

        if kind is K.BOUNDS:
            bounds = _build_bounds(attrs)
            if bounds is None:
                logger.debug("Incomplete <bounds> dropped: %r", attrs)
            return bounds

        if kind is K.METADATA:
            return Metadata()
        if kind is K.LINK:
            return Link(href=attrs.get("href"))
        if kind is K.AUTHOR:
            return Author()
        if kind is K.COPYRIGHT:
            return Copyright(author=attrs.get("author"))
        if kind is K.RTE:
            return Route()
        if kind is K.TRK:
            return Track()
        if kind is K.TRKSEG:
            return TrackSegment()
        return None

    def _attach(self, frame: Frame) -> None:
        if frame.kind is K.GPX or frame.builder is None:
            return
        parent = self.state.top
        if parent is None or parent.builder is None:
            return
        target = ATTACH_FIELDS.get((parent.kind, frame.kind))
        if target is None:
            logger.debug("<%s> not allowed in <%s>", frame.kind.value, parent.kind.value)
            return
        field_name, is_list = target
        if is_list:
            getattr(parent.builder, field_name).append(frame.builder)
        else:
            setattr(parent.builder, field_name, frame.builder)

    def _route_leaf(self, kind: ElementKind) -> None:
        state = self.state
        parent = state.top
        if parent is None or parent.builder is None:
            return
        route = leaf_route(parent.kind, kind)
        if route is None:
            return

        raw = "".join(state.text).strip()
        if kind is K.EMAIL and not raw:
            user, domain = state.leaf_attrs.get("id"), state.leaf_attrs.get("domain")
            if user and domain:
                raw = f"{user}@{domain}"

        field_name, convert = route
        value = convert(raw)
        if value is not None:
            setattr(parent.builder, field_name, value)
