"""
gpxparser — XML formatter

Re-tokenizes XML text and writes it back with one tab per nesting level and
one element per line. Elements holding only text stay on one line, empty
elements are self-closed, whitespace-only text is dropped. The leading XML
declaration is kept verbatim.

Cosmetic only: input that cannot be tokenized, or that uses namespaces,
is returned unchanged.
"""

from __future__ import annotations
import logging
import re
from typing import List, Optional
from xml.sax.saxutils import escape

from .constants import INDENT
from .errors import GPXParserError
from .tokenizer import feed_events

logger = logging.getLogger(__name__)

_DECLARATION_RE = re.compile(r"^\s*(<\?xml.*?\?>)", re.DOTALL)


def _quote(value: str) -> str:
    return '"' + escape(value, {'"': "&quot;", "\n": "&#10;", "\t": "&#9;", "\r": "&#13;"}) + '"'


class _Element:
    __slots__ = ("name", "has_children", "text")

    def __init__(self, name: str):
        self.name = name
        self.has_children = False
        self.text: List[str] = []


class XMLFormatter:
    """Event handler that rebuilds indented XML text."""

    def __init__(self, declaration: Optional[str] = None, indent: str = INDENT):
        self.indent = indent
        self.lines: List[str] = [declaration] if declaration else []
        self._open: List[_Element] = []

    def on_element_start(self, name: str, attrs):
        if name.startswith("{") or any(key.startswith("{") for key in attrs):
            # expanded by the XML parser, the source prefix is lost
            raise ValueError(f"cannot re-emit namespaced element {name}")
        if self._open:
            self._flush_open_tag(self._open[-1])
        attributes = "".join(f" {key}={_quote(value)}" for key, value in attrs.items())
        self.lines.append(f"{self.indent * len(self._open)}<{name}{attributes}>")
        self._open.append(_Element(name))

    def on_character_data(self, text: str):
        if self._open:
            self._open[-1].text.append(text)

    def on_element_end(self, name: str):
        el = self._open.pop()
        text = "".join(el.text)
        if el.has_children:
            self.lines.append(f"{self.indent * len(self._open)}</{name}>")
        elif text.strip():
            self.lines[-1] += f"{escape(text)}</{name}>"
        else:
            # <tag attrs> -> <tag attrs/>
            self.lines[-1] = self.lines[-1][:-1] + "/>"

    def _flush_open_tag(self, el: _Element):
        """Mixed content: write pending text of ``el`` on its own line."""
        if not el.has_children:
            el.has_children = True
            text = "".join(el.text).strip()
            if text:
                self.lines.append(f"{self.indent * len(self._open)}{escape(text)}")
        el.text = []

    def result(self) -> str:
        return "\n".join(self.lines) + "\n"


def format_xml(xml: str) -> str:
    """Indented copy of ``xml``, or ``xml`` itself if it cannot be tokenized."""
    match = _DECLARATION_RE.match(xml)
    declaration = match.group(1) if match else None
    formatter = XMLFormatter(declaration)
    try:
        feed_events(xml, formatter, gpx_only=False)
    except GPXParserError as e:
        logger.warning("XML formatting failed, returning unformatted output: %s", e)
        return xml
    return formatter.result()
