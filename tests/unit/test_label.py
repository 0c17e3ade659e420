"""Tests for mermaid_fallback.syntax.label."""

import pytest

from mermaid_fallback.syntax.label import has_emphasis, has_non_ascii, has_special_chars, sanitize


def test_plain_label_unchanged():
    assert sanitize("Start") == "Start"


def test_empty_label():
    assert sanitize("") == ""


def test_bold_and_italic_removed():
    assert sanitize("**Bold** and *italic*") == "Bold and italic"


def test_underscore_emphasis_removed_snake_case_kept():
    assert sanitize("_emph_ and snake_case") == "emph and snake_case"
    assert sanitize("__init__") == "init"


def test_line_breaks_collapse():
    assert sanitize("line one\nline two") == "line one line two"
    assert sanitize("a  \r\n   b") == "a b"


def test_non_ascii_dropped():
    assert sanitize("Emoji 🎯") == "Emoji"
    assert sanitize("café") == "caf"


def test_special_characters_dropped():
    assert sanitize('call(x) <b> "quoted"') == "callx b quoted"
    assert sanitize("a[b]{c}|d`") == "abcd"


def test_truncation():
    assert sanitize("a" * 50) == "a" * 40
    assert sanitize("a" * 50, max_length=10) == "a" * 10


def test_truncation_trims_trailing_blank():
    assert sanitize("x" * 39 + " yz") == "x" * 39


def test_no_truncation_when_disabled():
    assert sanitize("a" * 50, max_length=None) == "a" * 50


@pytest.mark.parametrize(
    "raw",
    [
        "**Bold** _x_ (y)",
        "a_\nb",
        "   spaced   out   ",
        "🎯🎯🎯",
        "x" * 39 + "_y",
        "mixed *emph* with snake_case and <tags>",
        "a\t_b",
    ],
)
def test_idempotent(raw):
    once = sanitize(raw)
    assert sanitize(once) == once


def test_output_is_single_line_printable_ascii():
    out = sanitize("multi\nline\ttext 🎯 ünïcode")
    assert "\n" not in out
    assert all(" " <= ch <= "~" for ch in out)


def test_classifiers():
    assert has_emphasis("**x**")
    assert has_emphasis("_x_")
    assert not has_emphasis("snake_case")
    assert has_non_ascii("🎯")
    assert not has_non_ascii("plain")
    assert has_special_chars("f(x)")
    assert not has_special_chars("plain text")
