"""
gpxparser — Element kinds and leaf routing

Every tag the parser understands is an ElementKind; anything else is
ElementKind.IGNORED. Leaf values are routed through LEAF_FIELDS, keyed by
(parent kind, leaf kind), because the same leaf name means different things
under different parents.
"""

from __future__ import annotations
import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Optional, Tuple, Any

from .constants import TIME_INPUT_FORMAT

logger = logging.getLogger(__name__)


class ElementKind(Enum):
    GPX = "gpx"
    METADATA = "metadata"
    WPT = "wpt"
    RTE = "rte"
    RTEPT = "rtept"
    TRK = "trk"
    TRKSEG = "trkseg"
    TRKPT = "trkpt"
    LINK = "link"
    AUTHOR = "author"
    COPYRIGHT = "copyright"
    BOUNDS = "bounds"
    # leaves
    NAME = "name"
    DESC = "desc"
    CMT = "cmt"
    SRC = "src"
    TIME = "time"
    TYPE = "type"
    NUMBER = "number"
    ELE = "ele"
    MAGVAR = "magvar"
    GEOIDHEIGHT = "geoidheight"
    SYM = "sym"
    FIX = "fix"
    SAT = "sat"
    HDOP = "hdop"
    VDOP = "vdop"
    PDOP = "pdop"
    AGEOFDGPSDATA = "ageofdgpsdata"
    DGPSID = "dgpsid"
    YEAR = "year"
    LICENSE = "license"
    EMAIL = "email"
    TEXT = "text"
    KEYWORDS = "keywords"
    # GPX 1.0 only, rewritten by legacy.py
    URL = "url"
    URLNAME = "urlname"
    IGNORED = ""

    @classmethod
    def from_tag(cls, tag: str) -> ElementKind:
        if not tag:
            return cls.IGNORED
        try:
            return cls(tag)
        except ValueError:
            return cls.IGNORED


POINT_KINDS = frozenset({ElementKind.WPT, ElementKind.RTEPT, ElementKind.TRKPT})

# Kinds that get a frame on the context stack.
CONTAINER_KINDS = frozenset({
    ElementKind.GPX,
    ElementKind.METADATA,
    ElementKind.WPT,
    ElementKind.RTEPT,
    ElementKind.TRKPT,
    ElementKind.LINK,
    ElementKind.RTE,
    ElementKind.TRK,
    ElementKind.TRKSEG,
    ElementKind.AUTHOR,
    ElementKind.COPYRIGHT,
    ElementKind.BOUNDS,
})


# ─────────────────────────────────────────────────────────────
# Value converters. Each returns None when the text is unusable.
# ─────────────────────────────────────────────────────────────

def _text(s: str) -> Optional[str]:
    return s if s else None


def safe_float(s: Optional[str]) -> Optional[float]:
    if s is None:
        return None
    try:
        return float(s.strip())
    except (ValueError, TypeError):
        logger.debug("Not a number: %r", s)
        return None


def safe_int(s: Optional[str]) -> Optional[int]:
    if s is None:
        return None
    try:
        return int(s.strip())
    except (ValueError, TypeError):
        logger.debug("Not an integer: %r", s)
        return None


def parse_time(s: Optional[str]) -> Optional[datetime]:
    """Parse a GPX timestamp; None if it does not match the fixed format."""
    if not s:
        return None
    try:
        return datetime.strptime(s.strip(), TIME_INPUT_FORMAT)
    except ValueError:
        logger.debug("Unparsable timestamp: %r", s)
        return None


Converter = Callable[[str], Any]
LeafRoute = Tuple[str, Converter]


def _build_leaf_fields() -> Dict[Tuple[ElementKind, ElementKind], LeafRoute]:
    K = ElementKind
    table: Dict[Tuple[ElementKind, ElementKind], LeafRoute] = {
        (K.METADATA, K.NAME): ("name", _text),
        (K.METADATA, K.DESC): ("desc", _text),
        (K.METADATA, K.TIME): ("time", parse_time),
        (K.METADATA, K.KEYWORDS): ("keywords", _text),

        (K.AUTHOR, K.NAME): ("name", _text),
        (K.AUTHOR, K.EMAIL): ("email", _text),

        (K.COPYRIGHT, K.YEAR): ("year", _text),
        (K.COPYRIGHT, K.LICENSE): ("license", _text),

        (K.LINK, K.TEXT): ("text", _text),
        (K.LINK, K.TYPE): ("type", _text),
    }

    point_fields = {
        K.ELE: ("elevation", safe_float),
        K.TIME: ("time", parse_time),
        K.MAGVAR: ("magnetic_variation", safe_float),
        K.GEOIDHEIGHT: ("geoid_height", safe_float),
        K.NAME: ("name", _text),
        K.CMT: ("cmt", _text),
        K.DESC: ("desc", _text),
        K.SRC: ("src", _text),
        K.SYM: ("sym", _text),
        K.TYPE: ("type", _text),
        K.FIX: ("fix", _text),
        K.SAT: ("sat", safe_int),
        K.HDOP: ("hdop", safe_float),
        K.VDOP: ("vdop", safe_float),
        K.PDOP: ("pdop", safe_float),
        K.AGEOFDGPSDATA: ("age_of_dgps_data", safe_float),
        K.DGPSID: ("dgps_id", safe_int),
    }
    for parent in POINT_KINDS:
        for leaf, route in point_fields.items():
            table[(parent, leaf)] = route

    path_fields = {
        K.NAME: ("name", _text),
        K.CMT: ("cmt", _text),
        K.DESC: ("desc", _text),
        K.SRC: ("src", _text),
        K.NUMBER: ("number", safe_int),
        K.TYPE: ("type", _text),
    }
    for parent in (K.RTE, K.TRK):
        for leaf, route in path_fields.items():
            table[(parent, leaf)] = route

    return table


LEAF_FIELDS = _build_leaf_fields()


def leaf_route(parent: ElementKind, leaf: ElementKind) -> Optional[LeafRoute]:
    """(field name, converter) for a leaf under a parent, None if unrouted."""
    return LEAF_FIELDS.get((parent, leaf))
