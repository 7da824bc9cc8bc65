"""Tests for the XML formatter."""

import logging

from gpxparser import format_xml
from gpxparser.formatter import XMLFormatter

DECL = '<?xml version="1.0" encoding="UTF-8"?>'


def test_indents_with_tabs_and_keeps_declaration():
    raw = DECL + '<a x="1"><b>t</b><c><d/></c><e></e></a>'
    assert format_xml(raw) == (
        DECL + "\n"
        '<a x="1">\n'
        "\t<b>t</b>\n"
        "\t<c>\n"
        "\t\t<d/>\n"
        "\t</c>\n"
        "\t<e/>\n"
        "</a>\n"
    )


def test_declaration_is_verbatim():
    decl = "<?xml version='1.0' encoding='utf-8' standalone='yes'?>"
    assert format_xml(decl + "<a/>").splitlines()[0] == decl


def test_no_declaration():
    assert format_xml("<a><b>x</b></a>") == "<a>\n\t<b>x</b>\n</a>\n"


def test_whitespace_only_text_is_dropped():
    raw = "<a>\n    <b> padded </b>\n    \n</a>"
    assert format_xml(raw) == "<a>\n\t<b> padded </b>\n</a>\n"


def test_content_is_escaped_again():
    raw = '<a t="&quot;q&quot; &amp; &lt;">&lt;x&amp;y&gt;</a>'
    assert format_xml(raw) == '<a t="&quot;q&quot; &amp; &lt;">&lt;x&amp;y&gt;</a>\n'


def test_mixed_content_keeps_text():
    assert format_xml("<a>lead<b/></a>") == "<a>\n\tlead\n\t<b/>\n</a>\n"


def test_malformed_input_is_returned_unchanged(caplog):
    raw = DECL + "<a><b></a>"
    with caplog.at_level(logging.WARNING, logger="gpxparser.formatter"):
        assert format_xml(raw) == raw
    assert "unformatted" in caplog.text


def test_namespaced_input_is_returned_unchanged():
    raw = '<gpx xmlns="http://www.topografix.com/GPX/1/1"><wpt lat="1" lon="2"/></gpx>'
    assert format_xml(raw) == raw


def test_empty_input_is_returned_unchanged():
    assert format_xml("") == ""


def test_custom_indent():
    formatter = XMLFormatter(indent="  ")
    formatter.on_element_start("a", {})
    formatter.on_element_start("b", {"k": "v"})
    formatter.on_character_data("x")
    formatter.on_element_end("b")
    formatter.on_element_end("a")
    assert formatter.result() == '<a>\n  <b k="v">x</b>\n</a>\n'
