"""Page loading: fetch a URL, extract its text and derive a tab title."""

from __future__ import annotations

from time import perf_counter

from loguru import logger

from vulpes.core.models import FetchResponse, Page
from vulpes.core.ports import FetcherPort
from vulpes.core.text_extract import extract_text
from vulpes.core.title import clean_title


class PageLoader:
    """Glue between a fetcher and the text extractor."""

    def __init__(self, fetcher: FetcherPort) -> None:
        self._fetcher = fetcher

    async def load(self, url: str) -> Page:
        """
        Fetch ``url`` and turn the response into displayable text.

        HTML bodies go through the extractor; other textual bodies are shown
        verbatim.

        Raises:
            ValueError: If the URL cannot be fetched or the body is not text.
        """
        fetch_start = perf_counter()
        response = await self._fetcher.fetch(url)
        fetch_ms = (perf_counter() - fetch_start) * 1000.0

        extract_start = perf_counter()
        text = response_text(response)
        extract_ms = (perf_counter() - extract_start) * 1000.0

        page = Page(
            url=response.url,
            status=response.status,
            text=text,
            title=clean_title(text, response.url),
            body_bytes=len(response.body),
            truncated=response.truncated,
            fetch_ms=fetch_ms,
            extract_ms=extract_ms,
        )
        logger.info(
            "page: {} status={} body={}B text={}c fetch={:.1f}ms extract={:.1f}ms",
            page.url,
            page.status,
            page.body_bytes,
            len(page.text),
            page.fetch_ms,
            page.extract_ms,
        )
        return page


def response_text(response: FetchResponse) -> str:
    """Return the displayable text of a fetched response.

    Raises:
        ValueError: If the response media type is neither HTML nor text.
    """
    if response.is_html:
        return extract_text(response.body).decode("utf-8", errors="replace")
    if not response.media_type.startswith("text/"):
        raise ValueError(f"unsupported content-type '{response.media_type}'")
    try:
        return response.body.decode(response.charset, errors="replace").strip()
    except LookupError:
        logger.debug("page: unknown charset '{}', decoding as utf-8", response.charset)
        return response.body.decode("utf-8", errors="replace").strip()
