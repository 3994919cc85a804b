"""Tests for PageLoader and response_text."""

from __future__ import annotations

import pytest

from vulpes.core.models import FetchResponse
from vulpes.core.page import PageLoader, response_text


class FakeFetcher:
    def __init__(self, response: FetchResponse) -> None:
        self.response = response
        self.requested: list[str] = []

    async def fetch(self, url: str) -> FetchResponse:
        self.requested.append(url)
        return self.response


def _response(body: bytes, content_type: str = "text/html; charset=utf-8") -> FetchResponse:
    return FetchResponse(
        url="https://example.com/final", status=200, body=body, content_type=content_type
    )


class TestPageLoader:
    async def test_load_extracts_html(self) -> None:
        fetcher = FakeFetcher(
            _response(
                b"<html><head><title>Hidden</title></head>"
                b"<body><h1>Docs | Example</h1><p>Hello &amp; welcome</p></body></html>"
            )
        )
        page = await PageLoader(fetcher).load("https://example.com/start")

        assert fetcher.requested == ["https://example.com/start"]
        assert page.url == "https://example.com/final"
        assert page.status == 200
        assert page.text == "Docs | Example\nHello & welcome"
        assert page.title == "Docs"
        assert page.body_bytes == len(fetcher.response.body)
        assert page.fetch_ms >= 0
        assert page.extract_ms >= 0

    async def test_load_empty_page_titles_with_host(self) -> None:
        fetcher = FakeFetcher(_response(b"<script>only()</script>"))
        page = await PageLoader(fetcher).load("https://example.com/")

        assert page.text == ""
        assert page.title == "example.com"

    async def test_load_keeps_truncation_flag(self) -> None:
        response = _response(b"<p>partial")
        response.truncated = True
        page = await PageLoader(FakeFetcher(response)).load("https://example.com/")

        assert page.truncated
        assert page.text == "partial"

    async def test_load_rejects_binary_content(self) -> None:
        fetcher = FakeFetcher(_response(b"\x89PNG", content_type="image/png"))
        with pytest.raises(ValueError, match="unsupported content-type 'image/png'"):
            await PageLoader(fetcher).load("https://example.com/logo.png")


class TestResponseText:
    def test_plain_text_is_shown_verbatim(self) -> None:
        response = _response(b"  <p>not markup</p>\n", content_type="text/plain")
        assert response_text(response) == "<p>not markup</p>"

    def test_plain_text_honours_charset(self) -> None:
        response = _response("café".encode("latin-1"), content_type="text/plain; charset=latin-1")
        assert response_text(response) == "café"

    def test_unknown_charset_falls_back_to_utf8(self) -> None:
        response = _response("café".encode(), content_type="text/plain; charset=x-bogus")
        assert response_text(response) == "café"

    def test_missing_content_type_is_treated_as_html(self) -> None:
        response = _response(b"<p>Hi</p>", content_type="")
        assert response_text(response) == "Hi"

    def test_invalid_utf8_is_replaced(self) -> None:
        response = _response(b"<p>a\xffb</p>")
        assert response_text(response) == "a�b"
