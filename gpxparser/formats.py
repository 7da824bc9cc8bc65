"""
gpxparser — GPX read & write entry points

    gpx = parse(xml_text_or_bytes)
    gpx = parse_file("track.gpx")
    text = to_xml(gpx)
    write_file("out.gpx", gpx)
    convert("in.gpx", "out.gpx")

Reading accepts GPX 1.0 and 1.1; writing always produces GPX 1.1.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import Union

from .constants import OUTPUT_ENCODING
from .errors import InitializationError
from .formatter import format_xml
from .legacy import GPX10EventAdapter
from .machine import GPXStateMachine
from .models import GPX
from .serializer import serialize_raw
from .tokenizer import Source, feed_events

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


# ─────────────────────────────────────────────────────────────
# Reading
# ─────────────────────────────────────────────────────────────

def parse(source: Source) -> GPX:
    """Parse GPX text, bytes or a file-like object into a GPX object.

    Raises InitializationError, ParsingError or GeneralError on fatal
    tokenizer failures; no partial result is returned in that case.
    """
    machine = GPXStateMachine()
    handler = GPX10EventAdapter(machine)
    feed_events(source, handler)
    gpx = handler.finish()
    logger.debug("Parsed GPX %s: %d waypoints, %d routes, %d tracks",
                  gpx.version.value if gpx.version else "?",
                  len(gpx.waypoints), len(gpx.routes), len(gpx.tracks))
    return gpx


def parse_file(filepath: PathLike) -> GPX:
    """Read and parse a .gpx file."""
    try:
        with open(filepath, "rb") as f:
            data = f.read()
    except OSError as e:
        raise InitializationError(f"Unable to open {filepath}: {e}") from e
    return parse(data)


# ─────────────────────────────────────────────────────────────
# Writing
# ─────────────────────────────────────────────────────────────

def serialize(gpx: GPX) -> str:
    """Canonical, tab-indented GPX 1.1 text."""
    return format_xml(serialize_raw(gpx))


def to_xml(gpx: GPX, pretty: bool = True) -> str:
    if pretty:
        return serialize(gpx)
    return serialize_raw(gpx)


def write_file(filepath: PathLike, gpx: GPX, pretty: bool = True):
    """Write ``gpx`` as GPX 1.1 to ``filepath``."""
    with open(filepath, "w", encoding=OUTPUT_ENCODING) as f:
        f.write(to_xml(gpx, pretty))


def convert(input_path: PathLike, output_path: PathLike, pretty: bool = True) -> GPX:
    """Rewrite a GPX 1.0 or 1.1 file as canonical GPX 1.1."""
    gpx = parse_file(input_path)
    write_file(output_path, gpx, pretty)
    return gpx
