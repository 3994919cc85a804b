"""Single-pass extraction of readable text from raw HTML bytes.

The extractor never builds a tree. It walks the buffer once, left to right,
and sorts every byte into tag markup, a character reference, or literal text:

- content of skip tags (``<script>``, ``<style>``, ``<head>`` ...) is dropped
- block tags (``<p>``, ``<div>``, ``<h1>`` ...) become line boundaries
- runs of ASCII whitespace collapse to a single space
- character references are decoded, unknown ones vanish

Malformed markup degrades instead of raising: an unterminated ``<`` is dropped,
an unterminated ``&`` is kept literally, and an unclosed skip tag hides the rest
of the document. Bytes outside the ASCII structural set are copied through
untouched, so invalid UTF-8 in the input stays invalid in the output.
"""

from __future__ import annotations

import re
from typing import TypeAlias

HtmlBuffer: TypeAlias = bytes | bytearray | memoryview

SKIP_TAGS: frozenset[bytes] = frozenset(
    {
        b"script",
        b"style",
        b"head",
        b"meta",
        b"link",
        b"title",
        b"noscript",
        b"template",
        b"svg",
        b"math",
    }
)

BLOCK_TAGS: frozenset[bytes] = frozenset(
    {
        b"p",
        b"div",
        b"br",
        b"h1",
        b"h2",
        b"h3",
        b"h4",
        b"h5",
        b"h6",
        b"li",
        b"tr",
        b"hr",
        b"blockquote",
        b"pre",
        b"section",
        b"article",
        b"header",
        b"footer",
        b"nav",
        b"aside",
        b"main",
    }
)

ENTITIES: dict[bytes, str] = {
    b"nbsp": " ",
    b"amp": "&",
    b"lt": "<",
    b"gt": ">",
    b"quot": '"',
    b"apos": "'",
    b"copy": "©",
    b"reg": "®",
    b"mdash": "—",
    b"ndash": "–",
    b"bull": "•",
    b"middot": "·",
    b"hellip": "…",
}

# Maximum distance from "&" to ";" for a run to count as a reference.
MAX_REFERENCE_SPAN = 10

_WHITESPACE = b" \t\r\n"
_COLLAPSIBLE_REFERENCES = frozenset({" ", "\t", "\n"})
_SPACE = 0x20
_NEWLINE = 0x0A
_LT = 0x3C
_AMP = 0x26

_TEXT_RUN = re.compile(rb"[^<& \t\r\n]+")
_SPACE_RUN = re.compile(rb"[ \t\r\n]+")
_NAME_END = re.compile(rb"[ \t\n/>]")
_DECIMAL = re.compile(rb"[0-9]+")
_HEX = re.compile(rb"[0-9A-Fa-f]+")


def tag_name(interior: bytes) -> bytes:
    """Return the tag name at the start of a tag interior.

    The name runs up to the first space, tab, newline, ``/`` or ``>``. Callers
    strip the leading ``/`` of a closing tag before calling this.
    """
    match = _NAME_END.search(interior)
    if match is None:
        return interior
    return interior[: match.start()]


def decode_reference(reference: bytes) -> str | None:
    """Decode the interior of a character reference (the part between & and ;).

    Numeric references (``#38``, ``#x26``) decode to any Unicode scalar value;
    NUL, surrogates and values beyond U+10FFFF are rejected. Named references
    are looked up in the fixed ``ENTITIES`` table, case-sensitively.

    Returns:
        The decoded character, or None when the reference cannot be resolved.
    """
    if len(reference) > 1 and reference[:1] == b"#":
        if reference[1:2] in (b"x", b"X"):
            digits, pattern, base = reference[2:], _HEX, 16
        else:
            digits, pattern, base = reference[1:], _DECIMAL, 10
        if pattern.fullmatch(digits) is None:
            return None
        value = int(digits, base)
        if value == 0 or value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
            return None
        return chr(value)
    return ENTITIES.get(reference)


class _TextExtractor:
    """Scanner state for one extraction; discarded when ``run`` returns."""

    def __init__(self, html: HtmlBuffer) -> None:
        self._html = bytes(html)
        self._out = bytearray()
        self._skip_until: bytes | None = None
        # True at start so the output never opens with a space.
        self._last_was_space = True
        # Past this index no ">" exists, so no "<" can open a tag.
        self._last_gt = self._html.rfind(b">")

    def run(self) -> bytes:
        html = self._html
        end = len(html)
        i = 0
        while i < end:
            byte = html[i]
            if byte == _LT:
                i = self._handle_tag(i)
            elif self._skip_until is not None:
                i = self._next_tag_start(i)
            elif byte == _AMP:
                i = self._handle_reference(i)
            elif byte in _WHITESPACE:
                self._emit_space()
                i = _SPACE_RUN.match(html, i).end()  # type: ignore[union-attr]
            else:
                run_end = _TEXT_RUN.match(html, i).end()  # type: ignore[union-attr]
                self._emit(html[i:run_end])
                i = run_end
        return bytes(self._out.rstrip(_WHITESPACE))

    def _handle_tag(self, start: int) -> int:
        if start >= self._last_gt:
            return start + 1
        close = self._html.find(b">", start + 1)
        interior = self._html[start + 1 : close]

        if interior[:1] == b"/":
            name = tag_name(interior[1:]).lower()
            if self._skip_until is not None:
                if name == self._skip_until:
                    self._skip_until = None
            elif name in BLOCK_TAGS:
                self._boundary()
            return close + 1

        # Opening tags are classified even inside a skip region; a nested
        # skip tag replaces the marker, there is no stack.
        name = tag_name(interior).lower()
        if name in SKIP_TAGS:
            self._skip_until = name
        if name in BLOCK_TAGS:
            self._boundary()
        if name == b"br":
            self._line_break()
        return close + 1

    def _next_tag_start(self, start: int) -> int:
        lt = self._html.find(b"<", start)
        return len(self._html) if lt == -1 else lt

    def _handle_reference(self, start: int) -> int:
        semicolon = self._html.find(b";", start + 1, start + MAX_REFERENCE_SPAN + 1)
        if semicolon == -1:
            self._emit(b"&")
            return start + 1

        decoded = decode_reference(self._html[start + 1 : semicolon])
        if decoded is None:
            pass
        elif decoded in _COLLAPSIBLE_REFERENCES:
            self._emit_space()
        else:
            self._emit(decoded.encode("utf-8"))
        return semicolon + 1

    def _emit(self, chunk: bytes) -> None:
        self._out += chunk
        self._last_was_space = False

    def _emit_space(self) -> None:
        if not self._last_was_space:
            self._out.append(_SPACE)
            self._last_was_space = True

    def _boundary(self) -> None:
        out = self._out
        if out and out[-1] == _SPACE:
            out.pop()
        if out and out[-1] != _NEWLINE:
            out.append(_NEWLINE)
            self._last_was_space = True

    def _line_break(self) -> None:
        out = self._out
        if out and out[-1] == _SPACE:
            out.pop()
        if out:
            out.append(_NEWLINE)
            self._last_was_space = True


def extract_text(html: HtmlBuffer) -> bytes:
    """Extract readable text from an HTML byte buffer in a single pass.

    Args:
        html: Raw HTML bytes, not necessarily well-formed or valid UTF-8.

    Returns:
        Normalized text: no leading or trailing whitespace, whitespace runs
        collapsed to one space, and block boundaries marked with ``\\n``.
    """
    return _TextExtractor(html).run()


def html_to_text(html_body: str) -> str:
    """Strip HTML tags and decode references in a ``str`` document.

    Args:
        html_body: HTML document or fragment.

    Returns:
        Plain-text extraction with script/style/head content removed.
    """
    text = extract_text(html_body.encode("utf-8", errors="replace"))
    return text.decode("utf-8", errors="replace")
