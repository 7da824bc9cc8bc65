"""Tests for GPX 1.0 normalization into the 1.1 shape."""

import textwrap
from datetime import datetime, timezone

from gpxparser import parse, GPX10EventAdapter, GPXVersion, Link, Author, Bounds


def _gpx10(body: str) -> str:
    return textwrap.dedent(f"""\
        <?xml version="1.0" encoding="UTF-8"?>
        <gpx version="1.0" creator="legacy"
             xmlns="http://www.topografix.com/GPX/1/0">
          {body}
        </gpx>
    """)


class Recorder:
    """Handler that records the events it receives."""

    def __init__(self):
        self.events = []

    def on_element_start(self, name, attrs):
        self.events.append(("start", name, attrs))

    def on_character_data(self, text):
        self.events.append(("data", text))

    def on_element_end(self, name):
        self.events.append(("end", name))

    def finish(self):
        return self.events


def test_waypoint_url_becomes_link():
    legacy = parse(_gpx10("""
        <wpt lat="1" lon="2">
            <name>W</name>
            <url>http://sample-link.com</url>
            <urlname>Sample Link</urlname>
        </wpt>
    """))
    modern = parse("""
        <gpx version="1.1">
            <wpt lat="1" lon="2">
                <name>W</name>
                <link href="http://sample-link.com"><text>Sample Link</text></link>
            </wpt>
        </gpx>
    """)
    assert legacy.waypoints[0].links == [Link(href="http://sample-link.com", text="Sample Link")]
    assert legacy.waypoints == modern.waypoints


def test_links_on_routes_tracks_and_their_points():
    gpx = parse(_gpx10("""
        <rte>
            <url>http://route</url>
            <rtept lat="1" lon="2"><urlname>only text</urlname></rtept>
        </rte>
        <trk>
            <urlname>Track page</urlname>
            <url>http://track</url>
            <trkseg><trkpt lat="3" lon="4"><url>http://point</url></trkpt></trkseg>
        </trk>
    """))
    assert gpx.routes[0].links == [Link(href="http://route")]
    assert gpx.routes[0].route_points[0].links == [Link(text="only text")]
    assert gpx.tracks[0].links == [Link(href="http://track", text="Track page")]
    assert gpx.tracks[0].segments[0].trackpoints[0].links == [Link(href="http://point")]


def test_header_becomes_metadata():
    gpx = parse(_gpx10("""
        <name>Old file</name>
        <desc>From a 1.0 logger</desc>
        <author>Jane Doe</author>
        <email>jane@example.com</email>
        <url>http://example.com</url>
        <urlname>Jane's site</urlname>
        <time>2023-08-06T12:00:00Z</time>
        <keywords>legacy</keywords>
        <bounds minlat="1" minlon="2" maxlat="3" maxlon="4"/>
        <wpt lat="1" lon="2"/>
    """))
    assert gpx.version is GPXVersion.V1_0
    md = gpx.metadata
    assert md.name == "Old file"
    assert md.desc == "From a 1.0 logger"
    assert md.author == Author(
        name="Jane Doe", email="jane@example.com",
        link=Link(href="http://example.com", text="Jane's site"),
    )
    assert md.time == datetime(2023, 8, 6, 12, tzinfo=timezone.utc)
    assert md.keywords == "legacy"
    assert md.bounds == Bounds(1.0, 2.0, 3.0, 4.0)
    assert len(gpx.waypoints) == 1


def test_header_without_body():
    gpx = parse(_gpx10("<name>Empty</name><author>Jane</author>"))
    assert gpx.metadata.name == "Empty"
    assert gpx.metadata.author == Author(name="Jane")


def test_metadata_always_present_for_1_0():
    gpx = parse(_gpx10('<wpt lat="1" lon="2"/>'))
    assert gpx.metadata is not None
    assert gpx.metadata.author is None


def test_header_after_body_reaches_metadata():
    gpx = parse(_gpx10("""
        <name>First</name>
        <wpt lat="1" lon="2"><name>W</name></wpt>
        <time>2023-08-06T12:00:00Z</time>
        <bounds minlat="1" minlon="2" maxlat="3" maxlon="4"/>
        <name>Late</name>
        <author>Late author</author>
        <trk><name>T</name></trk>
        <email>late@example.com</email>
    """))
    md = gpx.metadata
    assert md.name == "Late"
    assert md.time == datetime(2023, 8, 6, 12, tzinfo=timezone.utc)
    assert md.bounds == Bounds(1.0, 2.0, 3.0, 4.0)
    assert md.author == Author(name="Late author", email="late@example.com")
    assert gpx.waypoints[0].name == "W"
    assert gpx.tracks[0].name == "T"


def test_repeated_header_author_last_wins():
    gpx = parse(_gpx10("""
        <author>Early</author>
        <wpt lat="1" lon="2"/>
        <author>Later</author>
    """))
    assert gpx.metadata.author == Author(name="Later")


def test_url_in_1_1_document_is_ignored():
    gpx = parse('<gpx version="1.1"><wpt lat="1" lon="2"><url>http://x</url></wpt></gpx>')
    assert gpx.waypoints[0].links == []


def test_event_rewriting():
    recorder = Recorder()
    adapter = GPX10EventAdapter(recorder)
    adapter.on_element_start("gpx", {"version": "1.0"})
    adapter.on_element_start("author", {})
    adapter.on_character_data("Jane")
    adapter.on_element_end("author")
    adapter.on_element_start("wpt", {"lat": "1", "lon": "2"})
    adapter.on_element_start("url", {})
    adapter.on_character_data("http://x")
    adapter.on_element_end("url")
    adapter.on_element_end("wpt")
    adapter.on_element_start("name", {})
    adapter.on_character_data("N")
    adapter.on_element_end("name")
    adapter.on_element_end("gpx")

    assert adapter.finish() == [
        ("start", "gpx", {"version": "1.0"}),
        ("start", "wpt", {"lat": "1", "lon": "2"}),
        ("start", "link", {"href": "http://x"}),
        ("end", "link"),
        ("end", "wpt"),
        ("start", "metadata", {}),
        ("start", "name", {}),
        ("data", "N"),
        ("end", "name"),
        ("start", "author", {}),
        ("start", "name", {}),
        ("data", "Jane"),
        ("end", "name"),
        ("end", "author"),
        ("end", "metadata"),
        ("end", "gpx"),
    ]


def test_1_1_events_pass_through():
    recorder = Recorder()
    adapter = GPX10EventAdapter(recorder)
    adapter.on_element_start("gpx", {"version": "1.1"})
    adapter.on_element_start("url", {})
    adapter.on_character_data("http://x")
    adapter.on_element_end("url")
    adapter.on_element_end("gpx")

    assert not adapter.legacy
    assert recorder.events == [
        ("start", "gpx", {"version": "1.1"}),
        ("start", "url", {}),
        ("data", "http://x"),
        ("end", "url"),
        ("end", "gpx"),
    ]
