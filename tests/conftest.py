"""Shared pytest fixtures for the thumbnail pipeline tests.

This module provides reusable fixtures for the image store (SQLite through
aiosqlite), an HTTP fetcher backed by httpx.MockTransport, and a pipeline
config rooted in a temporary directory.
"""

from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_asyncio

from thumbnailer.clients.http_fetcher import HttpFetcher
from tests.support.factories import (
    Routes,
    create_image_bytes,
    create_pipeline_config,
    mock_fetchers,
)


@pytest.fixture
def pipeline_config(tmp_path):
    """PipelineConfig with 2 workers and a 100x100 target under tmp_path."""
    return create_pipeline_config(tmp_path)


@pytest.fixture
def png_bytes() -> bytes:
    """A 50x50 PNG image."""
    return create_image_bytes(50, 50, "PNG")


@pytest_asyncio.fixture
async def make_fetcher() -> AsyncGenerator[Callable[[Routes], HttpFetcher], None]:
    """Factory for HttpFetchers that serve canned responses by URL.

    See tests.support.factories.http_factory.mock_fetchers for route values.
    Clients are closed at teardown.

    Example:
        fetcher = make_fetcher({"http://images.test/a.png": png_bytes})
    """
    async with mock_fetchers() as make:
        yield make


@pytest.fixture
def image_routes(png_bytes) -> Callable[[list[str]], dict[str, bytes]]:
    """Build a route table serving ``png_bytes`` for every given URL."""

    def _routes(urls: list[str]) -> dict[str, bytes]:
        return {url: png_bytes for url in urls}

    return _routes


# Import additional fixtures from fixtures/ package
from tests.fixtures.database import (  # noqa: F401, E402
    async_engine,
    image_store,
    session_factory,
    sqlite_url,
)
