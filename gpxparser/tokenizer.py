"""
gpxparser — Tokenizer adapter

Drives xml.etree.ElementTree.XMLParser with a target object and forwards its
callbacks as element-start / character-data / element-end events to a
handler (see machine.py / legacy.py).

Tags in the GPX namespaces are reduced to their local name. Tags in any
other namespace keep their "{uri}local" form so they never match a GPX
element, and everything inside <extensions> is skipped.
"""

from __future__ import annotations
import logging
import xml.etree.ElementTree as ET
from typing import Dict, Union, IO

from .constants import GPX_NAMESPACES
from .errors import GPXParserError, InitializationError, ParsingError, GeneralError

logger = logging.getLogger(__name__)

Source = Union[str, bytes, IO]


def local_name(tag: str) -> str:
    if tag.startswith("{"):
        uri, _, name = tag[1:].partition("}")
        if uri in GPX_NAMESPACES:
            return name
        return tag
    return tag


def _plain_attributes(attrib: Dict[str, str]) -> Dict[str, str]:
    # namespaced attributes such as xsi:schemaLocation are not GPX data
    return {k: v for k, v in attrib.items() if not k.startswith("{")}


class _EventTarget:
    """ElementTree parser target that relays events to a handler."""

    def __init__(self, handler, gpx_only: bool = True):
        self._handler = handler
        self._gpx_only = gpx_only
        self._skip_depth = 0

    def start(self, tag, attrib):
        if not self._gpx_only:
            self._handler.on_element_start(tag, dict(attrib))
            return
        if self._skip_depth:
            self._skip_depth += 1
            return
        name = local_name(tag)
        if name == "extensions":
            self._skip_depth = 1
            return
        self._handler.on_element_start(name, _plain_attributes(attrib))

    def end(self, tag):
        if not self._gpx_only:
            self._handler.on_element_end(tag)
            return
        if self._skip_depth:
            self._skip_depth -= 1
            return
        self._handler.on_element_end(local_name(tag))

    def data(self, text):
        if not self._skip_depth:
            self._handler.on_character_data(text)

    def close(self):
        return None


def _read_source(source: Source) -> Union[str, bytes]:
    if isinstance(source, (str, bytes)):
        return source
    if isinstance(source, bytearray):
        return bytes(source)
    read = getattr(source, "read", None)
    if read is None:
        raise InitializationError(f"Unsupported source type: {type(source).__name__}")
    try:
        return read()
    except (OSError, UnicodeDecodeError) as e:
        raise InitializationError(f"Unable to read source: {e}") from e


def feed_events(source: Source, handler, gpx_only: bool = True) -> None:
    """Tokenize ``source`` and deliver its events to ``handler`` in order.

    With ``gpx_only`` off, tags and attributes are passed through as the
    XML parser reports them and <extensions> is not skipped.

    Raises InitializationError, ParsingError or GeneralError. The handler
    sees no further events after a failure.
    """
    data = _read_source(source)
    try:
        parser = ET.XMLParser(target=_EventTarget(handler, gpx_only))
    except Exception as e:
        raise InitializationError(f"Unable to create XML parser: {e}") from e

    try:
        parser.feed(data)
        parser.close()
    except ET.ParseError as e:
        line, column = getattr(e, "position", (0, 0))
        logger.debug("XML syntax error at line %s, column %s", line, column)
        raise ParsingError(str(e)) from e
    except GPXParserError:
        raise
    except Exception as e:
        raise GeneralError(f"{type(e).__name__}: {e}") from e
