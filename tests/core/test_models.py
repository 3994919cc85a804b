from __future__ import annotations

from vulpes.core.models import FetchResponse, Page


def test_fetch_response_defaults():
    response = FetchResponse(url="https://example.com/", status=200, body=b"<p>x</p>")
    assert response.content_type == ""
    assert response.truncated is False
    assert response.is_html


def test_fetch_response_media_type_ignores_parameters():
    response = FetchResponse(
        url="https://example.com/", status=200, body=b"", content_type="Text/HTML; charset=UTF-8"
    )
    assert response.media_type == "text/html"
    assert response.is_html
    assert response.charset == "utf-8"


def test_fetch_response_xhtml_is_html():
    response = FetchResponse(
        url="https://example.com/", status=200, body=b"", content_type="application/xhtml+xml"
    )
    assert response.is_html


def test_fetch_response_plain_text_is_not_html():
    response = FetchResponse(
        url="https://example.com/a.txt",
        status=200,
        body=b"",
        content_type='text/plain; charset="ISO-8859-1"',
    )
    assert not response.is_html
    assert response.charset == "iso-8859-1"

