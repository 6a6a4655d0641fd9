"""
Downstream Document Fetcher

Fetches swagger documents from backend services over HTTP.
"""

from __future__ import annotations

import httpx
import structlog

from docs_gateway.errors import FetchError

logger = structlog.get_logger()


class DocumentFetcher:
    """
    Fetch downstream documents with a per-call HTTP client.

    Static headers from configuration are attached to every request. No
    retries are performed.
    """

    def __init__(
        self,
        headers: dict[str, str] | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize document fetcher.

        Args:
            headers: Static headers sent with every document request
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.headers = dict(headers or {})
        self.timeout = timeout
        self._transport = transport

    async def fetch(self, url: str) -> str:
        """
        GET a document and return its text.

        Args:
            url: Absolute downstream document URL

        Returns:
            Response body as text

        Raises:
            FetchError: On network errors or non-success status codes
        """
        async with httpx.AsyncClient(
            headers=self.headers,
            timeout=self.timeout,
            transport=self._transport,
        ) as client:
            try:
                response = await client.get(url)
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.warning(
                    "Downstream document fetch failed",
                    url=url,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise FetchError(url, e) from e

        logger.debug(
            "Downstream document fetched",
            url=url,
            status_code=response.status_code,
            size=len(response.content),
        )
        return response.text
