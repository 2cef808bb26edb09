"""Tests for value formatting and escaping."""
import html
import re

import pytest

from show_advance.formatting import escape_html, format_value, value_or_placeholder
from show_advance.types import PlaceholderPolicy

SPAN_BODY_RE = re.compile(r"<span[^>]*>(.*)</span>", re.S)


def _body(markup: str) -> str:
    return SPAN_BODY_RE.match(markup).group(1)


@pytest.mark.parametrize("raw", [
    "Tom & Jerry",
    "<b>bold</b>",
    'He said "hi"',
    "Rock 'n' roll",
    "&lt;already escaped&gt;",
    "a & b < c > d \" e ' f",
])
def test_special_characters_are_escaped_and_round_trip(raw):
    body = _body(value_or_placeholder(raw, multiline=False))
    for char in "<>\"'":
        assert char not in body
    assert re.search(r"&(?!amp;|lt;|gt;|quot;|#039;)", body) is None
    assert html.unescape(body) == raw


def test_ampersand_escaped_first():
    assert escape_html("<&>") == "&lt;&amp;&gt;"
    assert escape_html("&lt;") == "&amp;lt;"


@pytest.mark.parametrize("raw", ["", "   ", "\n\t", None])
def test_blank_values_become_placeholder(raw):
    unit = format_value(raw)
    assert unit.kind == "placeholder"
    assert unit.text == "TBD"
    assert value_or_placeholder(raw) == '<span class="value-text">TBD</span>'


def test_blank_slot_policy():
    unit = format_value("  ", policy=PlaceholderPolicy.BLANK)
    assert unit.kind == "blank"
    assert value_or_placeholder("", policy=PlaceholderPolicy.BLANK) == (
        '<span class="value-text blank-line"></span>'
    )


def test_custom_placeholder_text():
    assert format_value("", placeholder="N/A").text == "N/A"


@pytest.mark.parametrize("raw", ["n/a", "N/A", " na ", "NA", "Not Applicable", "not applicable"])
def test_not_applicable_tokens_normalize(raw):
    unit = format_value(raw)
    assert unit.text == "N/A"
    assert value_or_placeholder(raw) == '<span class="value-text">N/A</span>'


def test_multiline_uses_line_breaks():
    markup = value_or_placeholder("Line one\nLine <two>")
    assert markup == '<span class="value-text multiline">Line one<br />Line &lt;two&gt;</span>'


def test_single_line_collapses_newlines():
    unit = format_value("Line one\r\n   Line two", multiline=False)
    assert unit.text == "Line one Line two"
    assert "<br />" not in value_or_placeholder("a\nb", multiline=False)


def test_value_is_trimmed():
    assert format_value("  Main Stage  ").text == "Main Stage"


def test_large_is_presentation_only():
    small = format_value("Headline", multiline=False)
    large = format_value("Headline", multiline=False, large=True)
    assert small.text == large.text
    assert "large" in value_or_placeholder("Headline", multiline=False, large=True)
