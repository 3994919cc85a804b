"""Heuristic cleanup of page text into short, readable tab titles."""

from __future__ import annotations

import re
from urllib.parse import urlparse

MAX_TITLE_CHARS = 48

# Checked in order; the first separator present wins.
_SEPARATORS: tuple[str, ...] = (" | ", " — ", " - ", " · ", " :: ", " : ")
_CONTROL_CHARS = re.compile(r"[\x00-\x1f]")
_WHITESPACE_RUN = re.compile(r"\s+")


def clean_title(text: str, url: str) -> str:
    """Derive a tab title from extracted page text.

    Uses the first non-blank line of ``text``, falling back to the URL host
    when the page has no text. Site-name suffixes after common separators
    ("Article | Site") are dropped and the result is capped at 48 characters.

    Args:
        text: Extracted page text, lines separated by ``\\n``.
        url: Page URL, used when the text has no meaningful line.

    Returns:
        A short single-line title (may be empty only if ``url`` is empty).
    """
    first_line = _first_meaningful_line(text)
    base = first_line or _host_from_url(url)
    return _normalize(base)


def _first_meaningful_line(text: str) -> str:
    for raw_line in text.split("\n"):
        cleaned = _CONTROL_CHARS.sub("", raw_line).strip()
        if cleaned:
            return cleaned
    return ""


def _normalize(title: str) -> str:
    result = title
    for separator in _SEPARATORS:
        head, found, _ = result.partition(separator)
        if found:
            result = head
            break
    result = _WHITESPACE_RUN.sub(" ", result).strip()
    if len(result) > MAX_TITLE_CHARS:
        result = result[:MAX_TITLE_CHARS].strip()
    return result


def _host_from_url(url: str) -> str:
    host = urlparse(url).hostname
    return host or url
