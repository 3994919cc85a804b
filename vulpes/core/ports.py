"""
Port interfaces for vulpes.

These are Python Protocol classes defining the contracts that adapters must satisfy.
The core imports ONLY from this file (and models.py) for any external dependency.

Adapters implement these protocols without inheriting from them (structural subtyping).
mypy verifies conformance statically.
"""

from __future__ import annotations

from typing import Protocol

from vulpes.core.models import FetchResponse


class FetcherPort(Protocol):
    """
    Interface for network retrieval of documents.

    A fetcher resolves redirects, terminates TLS and decompresses the body.
    It returns non-2xx responses instead of raising, so error pages can be shown.
    """

    async def fetch(self, url: str) -> FetchResponse:
        """
        Retrieve a URL.

        Args:
            url: Absolute http or https URL.

        Returns:
            The final response, with the URL it was served from.

        Raises:
            ValueError: If the URL is not fetchable or redirects are exhausted.
        """
        ...
