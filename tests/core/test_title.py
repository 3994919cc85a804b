"""Tests for tab title normalisation."""

from __future__ import annotations

from vulpes.core.title import MAX_TITLE_CHARS, clean_title


def test_uses_first_non_blank_line() -> None:
    assert clean_title("\n\nWelcome\nSecond line", "https://example.com") == "Welcome"


def test_strips_site_suffix_after_pipe() -> None:
    assert clean_title("Release notes | Example Docs\nBody", "https://x.org") == "Release notes"


def test_separator_priority_follows_fixed_order() -> None:
    # " | " is checked before " - ", even though " - " appears first
    assert clean_title("A - B | C", "https://x.org") == "A - B"


def test_em_dash_separator() -> None:
    assert clean_title("Story — The Paper", "https://x.org") == "Story"


def test_collapses_internal_whitespace() -> None:
    assert clean_title("Hello \t  there", "https://x.org") == "Hello there"


def test_control_characters_are_removed() -> None:
    assert clean_title("\x07\x1b\nTi\x00tle", "https://x.org") == "Title"


def test_falls_back_to_url_host() -> None:
    assert clean_title("", "https://news.example.com/path?q=1") == "news.example.com"
    assert clean_title(" \n \n", "http://EXAMPLE.org:8080/") == "example.org"


def test_falls_back_to_raw_url_without_host() -> None:
    assert clean_title("", "not a url") == "not a url"


def test_truncates_long_titles() -> None:
    title = clean_title("word " * 30, "https://x.org")
    assert len(title) <= MAX_TITLE_CHARS
    assert title == title.strip()
    assert title.startswith("word word")
