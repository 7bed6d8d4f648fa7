"""Work item construction: URL selection and destination naming.

URLs for a search come from an external collaborator (a ``UrlSource``).
This module turns them into WorkItems with structurally unique destination
names, so concurrent workers never share a file path:

    {run_prefix}-{counter:06d}.jpg

The counter is monotonic per namer and the prefix is a random run id by
default, so names also do not collide with raw files left over from
earlier runs. Tests pass a fixed prefix for deterministic names.
"""

import itertools
import uuid
from collections.abc import Iterable
from pathlib import Path
from typing import Protocol
from urllib.parse import urlsplit

from thumbnailer.constants import IMAGE_EXTENSION
from thumbnailer.schemas.pipeline import WorkItem
from thumbnailer.schemas.search_input import SearchInput
from thumbnailer.utils.filesystem import validate_file_name
from thumbnailer.utils.logging import get_logger

log = get_logger(__name__)

_ALLOWED_SCHEMES = ("http", "https")


class UrlSource(Protocol):
    """Collaborator that collects candidate image URLs for a search."""

    async def collect(self, search: SearchInput) -> list[str]: ...


class StaticUrlSource:
    """UrlSource that returns the URLs listed on the search input itself."""

    async def collect(self, search: SearchInput) -> list[str]:
        if not search.image_urls:
            log.warning(
                "search_has_no_image_urls",
                search_query=search.search_query,
            )
        return list(search.image_urls)


class SequentialNamer:
    """Hands out unique destination names from a monotonic counter.

    Attributes:
        prefix: Run identifier prepended to every name
    """

    def __init__(self, prefix: str | None = None, start: int = 1):
        self.prefix = prefix or uuid.uuid4().hex[:8]
        validate_file_name(self.prefix)
        self._counter = itertools.count(start)

    def next_name(self) -> str:
        return f"{self.prefix}-{next(self._counter):06d}{IMAGE_EXTENSION}"


def is_fetchable_url(url: str) -> bool:
    """Whether ``url`` is an absolute http(s) URL with a host."""
    parts = urlsplit(url.strip())
    return parts.scheme.lower() in _ALLOWED_SCHEMES and bool(parts.netloc)


def build_work_items(
    urls: Iterable[str],
    working_directory: Path,
    namer: SequentialNamer | None = None,
    limit: int | None = None,
) -> list[WorkItem]:
    """Build WorkItems for the fetchable URLs in ``urls``.

    Args:
        urls: Candidate image URLs in collection order
        working_directory: Directory raw downloads are written to
        namer: Name generator (a fresh SequentialNamer when omitted)
        limit: Maximum number of items to build (None = no limit)

    Returns:
        WorkItems in URL order. Non-http(s) URLs are skipped and do not count
        toward ``limit``.
    """
    namer = namer or SequentialNamer()
    items: list[WorkItem] = []
    skipped = 0

    for url in urls:
        if limit is not None and len(items) >= limit:
            break
        if not is_fetchable_url(url):
            skipped += 1
            continue
        items.append(
            WorkItem(
                source_url=url.strip(),
                destination_name=namer.next_name(),
                working_directory=Path(working_directory),
            )
        )

    if skipped:
        log.info("non_http_urls_skipped", skipped=skipped)

    return items
