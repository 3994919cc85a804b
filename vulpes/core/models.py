"""
Core data models for vulpes.

These are plain dataclasses with no external dependencies beyond the standard
library. They carry fetched documents between the network adapter, the
extractor and whatever presents the text.
"""

from __future__ import annotations

from dataclasses import dataclass

_HTML_MEDIA_TYPES = frozenset({"text/html", "application/xhtml+xml"})


@dataclass
class FetchResponse:
    """A response body as delivered by a fetcher (already decompressed)."""

    url: str  # final URL after redirects
    status: int
    body: bytes
    content_type: str = ""
    truncated: bool = False  # body was cut at the configured size cap

    @property
    def media_type(self) -> str:
        return self.content_type.split(";", 1)[0].strip().lower()

    @property
    def is_html(self) -> bool:
        """True for HTML media types, and for responses without a content type."""
        media_type = self.media_type
        return not media_type or media_type in _HTML_MEDIA_TYPES

    @property
    def charset(self) -> str:
        for param in self.content_type.split(";")[1:]:
            key, _, value = param.partition("=")
            if key.strip().lower() == "charset" and value.strip():
                return value.strip().strip('"').lower()
        return "utf-8"


@dataclass
class Page:
    """A loaded page with its extracted text, title and timings."""

    url: str
    status: int
    text: str
    title: str
    body_bytes: int = 0
    truncated: bool = False
    fetch_ms: float = 0.0
    extract_ms: float = 0.0
