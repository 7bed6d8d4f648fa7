"""HTTP image fetcher.

This module provides the client that retrieves raw image bytes for a URL.

Architecture Pattern:
    Simple HTTP client wrapper - no retry logic (every URL is requested once)
    Async-only interface using httpx.AsyncClient

Behavior:
    - Any non-2xx status or transport error raises FetchError
    - Redirects are followed
    - Content-Type is not checked; the image codec decides what is an image
    - No timeout unless one is configured; a hung request only stalls the
      worker that issued it

Usage:
    from thumbnailer.clients.http_fetcher import HttpFetcher

    async with HttpFetcher() as fetcher:
        data = await fetcher.fetch("https://example.com/a.png")
"""

import httpx

from thumbnailer.exceptions import FetchError
from thumbnailer.utils.logging import get_logger

log = get_logger(__name__)


class HttpFetcher:
    """Fetch image bytes over HTTP.

    Attributes:
        client: Async HTTP client used for every request

    Example:
        >>> fetcher = HttpFetcher(timeout=30.0)
        >>> data = await fetcher.fetch("https://example.com/a.png")
        >>> await fetcher.close()
    """

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float | None = None):
        """Initialize fetcher.

        Args:
            client: Pre-configured client (e.g., with a mock transport in tests).
                The fetcher does not close a client it was given.
            timeout: Request timeout in seconds for a client created here
                (None disables timeouts)
        """
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    async def fetch(self, url: str) -> bytes:
        """Retrieve the body of ``url``.

        Args:
            url: Absolute http(s) URL

        Returns:
            Response body bytes.

        Raises:
            FetchError: On transport errors or non-2xx responses.
        """
        try:
            response = await self.client.get(url)
        except httpx.HTTPError as e:
            raise FetchError(url, f"Request failed: {e.__class__.__name__}: {e}") from e

        if not response.is_success:
            raise FetchError(
                url,
                f"Unexpected HTTP status {response.status_code}",
                status_code=response.status_code,
            )

        log.info("image_downloaded", url=url, size_bytes=len(response.content))
        return response.content

    async def close(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "HttpFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
