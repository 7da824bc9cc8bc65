"""Tests for the gpxparser command line."""

import pytest

from gpxparser import parse_file
from gpxparser.cli import main
from gpxparser.constants import DEFAULT_CREATOR, XML_DECLARATION

SAMPLE = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.0">
  <name>Loop</name>
  <author>Jane</author>
  <wpt lat="46.0" lon="14.5"><name>Start</name></wpt>
  <rte><name>Plan</name><rtept lat="46.0" lon="14.5"/><rtept lat="46.1" lon="14.6"/></rte>
  <trk><name>Walk</name><trkseg><trkpt lat="46.1" lon="14.6"/></trkseg></trk>
</gpx>
"""


@pytest.fixture
def sample_path(tmp_path):
    path = tmp_path / "loop.gpx"
    path.write_text(SAMPLE, encoding="utf-8")
    return path


def test_summary(sample_path, capsys):
    assert main([str(sample_path)]) == 0
    out = capsys.readouterr().out
    assert "GPX 1.0: 1 waypoints, 1 routes, 1 tracks, 4 points" in out


def test_info(sample_path, capsys):
    assert main([str(sample_path), "--info"]) == 0
    out = capsys.readouterr().out
    assert "GPX version: 1.0" in out
    assert "Name: Loop" in out
    assert "Author: Jane" in out
    assert "Route [1] Plan: 2 points" in out
    assert "Track [1] Walk: 1 segments, 1 points" in out


def test_convert_to_file(sample_path, tmp_path):
    out = tmp_path / "out.gpx"
    assert main([str(sample_path), str(out)]) == 0
    text = out.read_text(encoding="utf-8")
    assert text.startswith(XML_DECLARATION)
    assert f'<gpx version="1.1" creator="{DEFAULT_CREATOR}">' in text
    gpx = parse_file(out)
    assert gpx.metadata.author.name == "Jane"
    assert len(gpx.routes[0].route_points) == 2


def test_creator_override_and_stdout(sample_path, capsys):
    assert main([str(sample_path), "-", "--creator", "Me", "--raw"]) == 0
    out = capsys.readouterr().out
    assert out.startswith(XML_DECLARATION + '<gpx version="1.1" creator="Me">')
    assert "\n" not in out.strip()


def test_missing_input(tmp_path, capsys):
    assert main([str(tmp_path / "nope.gpx")]) == 1
    assert "Initialization error" in capsys.readouterr().err


def test_malformed_input(tmp_path, capsys):
    bad = tmp_path / "bad.gpx"
    bad.write_text("<gpx><wpt></gpx>", encoding="utf-8")
    assert main([str(bad)]) == 1
    assert "Parsing error" in capsys.readouterr().err
