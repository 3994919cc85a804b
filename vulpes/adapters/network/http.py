"""HTTP(S) fetcher backed by httpx.

Redirects are followed manually so that each hop is validated and logged, and
the response body is streamed and cut at a configured size cap. httpx handles
TLS and content decoding (gzip/deflate, brotli/zstd when their codecs are
installed).
"""

from __future__ import annotations

from urllib.parse import urljoin, urlparse

import httpx
from loguru import logger

from vulpes.config.schema import FetchConfig
from vulpes.core.models import FetchResponse

_REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})


class HttpFetcher:
    """Fetch documents over HTTP(S) within the configured limits."""

    def __init__(
        self,
        config: FetchConfig | None = None,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config or FetchConfig()
        self._client = client

    async def fetch(self, url: str) -> FetchResponse:
        """Fetch ``url`` following redirects.

        Args:
            url: Absolute http or https URL.

        Returns:
            The final response; non-2xx statuses are returned, not raised.

        Raises:
            ValueError: On unsupported URLs, broken redirects or redirect loops.
            httpx.HTTPError: On transport failures and timeouts.
        """
        current_url = str(_parse_and_validate_url(url.strip()))

        client = self._client
        if client is not None:
            return await self._fetch_with_client(client, current_url)

        async with httpx.AsyncClient(
            timeout=self._config.timeout_seconds, follow_redirects=False
        ) as transient_client:
            return await self._fetch_with_client(transient_client, current_url)

    async def _fetch_with_client(self, client: httpx.AsyncClient, url: str) -> FetchResponse:
        config = self._config
        headers = {"User-Agent": config.user_agent}
        current_url = url
        for _ in range(config.max_redirects + 1):
            parsed = _parse_and_validate_url(current_url)
            logger.debug("fetch: GET {}", parsed)

            async with client.stream(
                "GET", parsed, headers=headers, timeout=config.timeout_seconds
            ) as response:
                if response.status_code in _REDIRECT_STATUSES:
                    location = response.headers.get("location")
                    if not location:
                        raise ValueError("redirect response without Location header")
                    current_url = urljoin(str(response.request.url), location)
                    logger.debug("fetch: {} redirect -> {}", response.status_code, current_url)
                    continue

                body, truncated = await _read_body_limited(
                    response, max_bytes=config.max_body_bytes
                )
                if truncated:
                    logger.warning(
                        "fetch: body of {} truncated at {} bytes", parsed, config.max_body_bytes
                    )
                return FetchResponse(
                    url=str(response.request.url),
                    status=response.status_code,
                    body=body,
                    content_type=response.headers.get("content-type", ""),
                    truncated=truncated,
                )

        raise ValueError(f"too many redirects (>{config.max_redirects})")


def _parse_and_validate_url(url: str) -> httpx.URL:
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"}:
        raise ValueError("only http and https URLs are allowed")
    if not parsed.netloc:
        raise ValueError("URL host is required")
    return httpx.URL(url)


async def _read_body_limited(response: httpx.Response, *, max_bytes: int) -> tuple[bytes, bool]:
    chunks: list[bytes] = []
    total = 0
    async for chunk in response.aiter_bytes():
        if not chunk:
            continue
        remaining = max_bytes - total
        if len(chunk) > remaining:
            chunks.append(chunk[:remaining])
            return b"".join(chunks), True
        chunks.append(chunk)
        total += len(chunk)
    return b"".join(chunks), False
