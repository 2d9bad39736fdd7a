"""Unit tests for core/presentation.py -- sanitize()."""

import pytest

from core.presentation import sanitize


def test_none_becomes_empty_string():
    assert sanitize(None) == ""


def test_plain_text_unchanged():
    assert sanitize("Just a lamp & a chair") == "Just a lamp & a chair"


def test_script_tag_escaped():
    assert sanitize('<script>alert("xss");</script>') == '&lt;script&gt;alert("xss");&lt;/script&gt;'


def test_event_handler_attribute_stripped():
    raw = '<img src="https://example.com/a.png" onerror="alert(document.cookie);">'
    assert sanitize(raw) == '<img src="https://example.com/a.png">'


def test_allowed_formatting_kept():
    assert sanitize("not <strong>all</strong> bad") == "not <strong>all</strong> bad"


@pytest.mark.parametrize("url", ["javascript:alert(1)", "JavaScript:alert(1)", "java\tscript:alert(1)"])
def test_javascript_url_dropped(url):
    assert sanitize(f'<a href="{url}">click</a>') == "<a>click</a>"


def test_safe_link_kept_and_attribute_escaped():
    assert sanitize('<a href="https://example.com/?a=1&b=2" title="x">go</a>') == (
        '<a href="https://example.com/?a=1&amp;b=2" title="x">go</a>'
    )


def test_comments_removed():
    assert sanitize("before<!-- <script>x</script> -->after") == "beforeafter"


def test_unknown_tag_escaped_with_attributes():
    assert sanitize('<iframe src="https://evil.example"></iframe>') == (
        '&lt;iframe src="https://evil.example"&gt;&lt;/iframe&gt;'
    )


@pytest.mark.parametrize(
    "text",
    [
        "AT&T rocks",
        "AT&T",
        "ask R&D",
        "R&D team",
        "Ben &Jerry",
        "fish&chips!",
        "&copy 2024",
        "Tom &amp; Jerry",
        "caf&#233; and caf&#xe9",
        "line one\nR&D on line two &amp; more",
    ],
)
def test_ampersands_and_references_kept_as_written(text):
    assert sanitize(text) == text


def test_reference_after_escaped_tag_kept_as_written():
    assert sanitize("<script>x</script> AT&T") == "&lt;script&gt;x&lt;/script&gt; AT&T"
