"""
gpxparser — GPX 1.0 event rewriting

GPX 1.0 keeps the document header (name, desc, author, email, url, urlname,
time, keywords, bounds) directly under <gpx> and describes links with
<url>/<urlname> leaves. GPX10EventAdapter sits between the tokenizer and the
state machine and rewrites those shapes into GPX 1.1 events:

    <gpx version="1.0">               <gpx version="1.0">
      <name>N</name>                    <wpt ...>
      <author>A</author>                  <link href="W"><text>T</text></link>
      <url>U</url>             -->      </wpt>
      <wpt ...>                         <metadata>
        <url>W</url>                      <name>N</name>
        <urlname>T</urlname>              <author><name>A</name>
      </wpt>                                <link href="U"/></author>
    </gpx>                              </metadata>
                                      </gpx>

Header elements are buffered wherever they appear under <gpx> and replayed
as one <metadata> block before </gpx>, in document order.

Documents of any other version pass through untouched.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Tuple

from .elements import ElementKind, POINT_KINDS
from .models import GPXVersion

logger = logging.getLogger(__name__)

K = ElementKind

# Top-level 1.0 elements that map one-to-one onto <metadata> children.
HEADER_PASSTHROUGH = frozenset({K.NAME, K.DESC, K.TIME, K.KEYWORDS, K.BOUNDS})
# Top-level 1.0 elements that become <metadata><author>.
HEADER_AUTHOR = frozenset({K.AUTHOR, K.EMAIL, K.URL, K.URLNAME})
# Elements that may carry <url>/<urlname> in 1.0.
LINK_OWNERS = POINT_KINDS | {K.RTE, K.TRK}

Event = Tuple[str, Tuple[Any, ...]]


class _Capture:
    """A swallowed subtree. Its text is stored under ``key`` in ``sink``
    when the subtree closes."""

    def __init__(self, sink: Dict[ElementKind, str], key: ElementKind):
        self.sink = sink
        self.key = key
        self.depth = 1
        self.chunks: List[str] = []

    def finish(self):
        self.sink[self.key] = "".join(self.chunks).strip()


class _Record:
    """A subtree held back as events, replayed later."""

    def __init__(self, events: List[Event]):
        self.events = events
        self.depth = 0


class GPX10EventAdapter:
    """Event handler that rewrites GPX 1.0 events for ``downstream``."""

    def __init__(self, downstream):
        self.downstream = downstream
        self.legacy = False
        self._path: List[ElementKind] = []
        self._capture: Optional[_Capture] = None
        self._record: Optional[_Record] = None
        self._header: Dict[ElementKind, str] = {}
        self._header_events: List[Event] = []
        # path depth of a link owner -> its collected url/urlname
        self._owner_links: Dict[int, Dict[ElementKind, str]] = {}

    # ─── events ──────────────────────────────────────────────

    def on_element_start(self, name: str, attrs: Dict[str, str]) -> None:
        if self._capture is not None:
            self._capture.depth += 1
            return
        if self._record is not None:
            self._record.depth += 1
            self._record.events.append(("on_element_start", (name, attrs)))
            return

        kind = ElementKind.from_tag(name)
        parent = self._path[-1] if self._path else None

        if kind is K.GPX and parent is None:
            self.legacy = GPXVersion.from_attribute(attrs.get("version")) is GPXVersion.V1_0
            self._forward_start(kind, name, attrs)
            return

        if not self.legacy:
            self._forward_start(kind, name, attrs)
            return

        if parent is K.GPX:
            if kind in HEADER_AUTHOR:
                self._capture = _Capture(self._header, kind)
                return
            if kind in HEADER_PASSTHROUGH:
                self._record = _Record(self._header_events)
                self.on_element_start(name, attrs)
                return

        if kind in (K.URL, K.URLNAME) and parent in LINK_OWNERS:
            owner = self._owner_links.setdefault(len(self._path), {})
            self._capture = _Capture(owner, kind)
            return

        self._forward_start(kind, name, attrs)

    def on_character_data(self, text: str) -> None:
        if self._capture is not None:
            self._capture.chunks.append(text)
            return
        if self._record is not None:
            self._record.events.append(("on_character_data", (text,)))
            return
        self.downstream.on_character_data(text)

    def on_element_end(self, name: str) -> None:
        capture = self._capture
        if capture is not None:
            capture.depth -= 1
            if capture.depth == 0:
                capture.finish()
                self._capture = None
            return
        record = self._record
        if record is not None:
            record.depth -= 1
            record.events.append(("on_element_end", (name,)))
            if record.depth == 0:
                self._record = None
            return

        kind = self._path.pop() if self._path else ElementKind.from_tag(name)

        if self.legacy:
            depth = len(self._path) + 1
            collected = self._owner_links.pop(depth, None)
            if collected and kind in LINK_OWNERS:
                self._emit_link(collected.get(K.URL), collected.get(K.URLNAME))
            if kind is K.GPX and not self._path:
                self._emit_metadata()

        self.downstream.on_element_end(name)

    def finish(self):
        return self.downstream.finish()

    # ─── helpers ─────────────────────────────────────────────

    def _forward_start(self, kind: ElementKind, name: str, attrs: Dict[str, str]) -> None:
        self._path.append(kind)
        self.downstream.on_element_start(name, attrs)

    def _emit_leaf(self, kind: ElementKind, text: Optional[str]) -> None:
        if not text:
            return
        self.downstream.on_element_start(kind.value, {})
        self.downstream.on_character_data(text)
        self.downstream.on_element_end(kind.value)

    def _emit_link(self, href: Optional[str], text: Optional[str]) -> None:
        if not href and not text:
            return
        attrs = {"href": href} if href else {}
        self.downstream.on_element_start(K.LINK.value, attrs)
        self._emit_leaf(K.TEXT, text)
        self.downstream.on_element_end(K.LINK.value)

    def _emit_metadata(self) -> None:
        """Replay the buffered header as <metadata>. Later duplicates
        overwrite earlier ones downstream."""
        logger.debug("GPX 1.0 header replayed as <metadata>: %d events, author fields %s",
                     len(self._header_events), sorted(k.value for k in self._header))
        self.downstream.on_element_start(K.METADATA.value, {})
        for method, args in self._header_events:
            getattr(self.downstream, method)(*args)
        self._header_events = []
        header = self._header
        if any(header.get(kind) for kind in HEADER_AUTHOR):
            self.downstream.on_element_start(K.AUTHOR.value, {})
            self._emit_leaf(K.NAME, header.get(K.AUTHOR))
            self._emit_leaf(K.EMAIL, header.get(K.EMAIL))
            self._emit_link(header.get(K.URL), header.get(K.URLNAME))
            self.downstream.on_element_end(K.AUTHOR.value)
        self.downstream.on_element_end(K.METADATA.value)
