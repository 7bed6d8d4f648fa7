"""Command-line entry point for the thumbnail pipeline.

Loads configuration, connects the image store, and runs the dispatcher once
per search input from the inputs file.

Usage:
    python -m thumbnailer.runner
    python -m thumbnailer.runner --inputs searches.json --env-file .env.local

Exit Codes:
    0: All searches processed (individual image failures are logged only)
    1: Fatal error (invalid configuration, inputs file, directories, or
       database unreachable)
"""

import argparse
import asyncio
import sys
from collections.abc import Sequence
from pathlib import Path

import structlog
from dotenv import load_dotenv

from thumbnailer.clients.http_fetcher import HttpFetcher
from thumbnailer.config import (
    get_database_echo,
    get_database_url,
    get_fetch_timeout,
    get_inputs_file,
    load_pipeline_config,
)
from thumbnailer.exceptions import ConfigurationError, FilesystemError, StoreError
from thumbnailer.schemas.pipeline import PipelineConfig, RunResult
from thumbnailer.schemas.search_input import SearchInput, load_search_inputs
from thumbnailer.services.dispatcher import Dispatcher
from thumbnailer.services.image_store import ImageStore
from thumbnailer.services.work_items import (
    SequentialNamer,
    StaticUrlSource,
    UrlSource,
    build_work_items,
)

log = structlog.get_logger()


async def run_searches(
    searches: Sequence[SearchInput],
    config: PipelineConfig,
    store: ImageStore,
    url_source: UrlSource,
    fetcher: HttpFetcher | None = None,
    namer: SequentialNamer | None = None,
) -> list[RunResult]:
    """Run the pipeline once per search input, in order.

    Args:
        searches: Search inputs from the inputs file
        config: Validated pipeline config
        store: Image store with its schema already ensured
        url_source: Collaborator that supplies image URLs per search
        fetcher: Shared HTTP fetcher (the dispatcher creates one if None)
        namer: Destination name generator shared across searches

    Returns:
        One RunResult per search input.
    """
    namer = namer or SequentialNamer()
    dispatcher = Dispatcher(config, store, fetcher=fetcher)
    results: list[RunResult] = []

    for search in searches:
        urls = await url_source.collect(search)
        items = build_work_items(
            urls,
            config.working_directory,
            namer=namer,
            limit=search.max_images,
        )
        log.info(
            "search_started",
            search_query=search.search_query,
            candidate_urls=len(urls),
            items=len(items),
        )

        result = await dispatcher.run(items)
        results.append(result)

        log.info("search_complete", search_query=search.search_query, **result.summary())

    return results


async def run(inputs_file: Path) -> int:
    """Run every search in ``inputs_file``.

    Returns:
        Process exit code.
    """
    try:
        config = load_pipeline_config()
        database_url = get_database_url()
        searches = load_search_inputs(inputs_file)
    except ConfigurationError as e:
        log.error("configuration_load_failed", error=str(e))
        return 1

    # Redact credentials when logging
    database_host = database_url.split("@")[-1].split("/")[0] if "@" in database_url else "local"
    log.info(
        "pipeline_configuration_loaded",
        database_url_host=database_host,
        parallelism=config.parallelism,
        width=config.target_width,
        height=config.target_height,
        searches=len(searches),
    )

    store = ImageStore.from_url(database_url, echo=get_database_echo())
    try:
        await store.ensure_schema()

        async with HttpFetcher(timeout=get_fetch_timeout()) as fetcher:
            results = await run_searches(searches, config, store, StaticUrlSource(), fetcher)

        log.info(
            "pipeline_complete",
            searches=len(results),
            attempted=sum(r.attempted for r in results),
            succeeded=sum(r.succeeded for r in results),
            failed=sum(r.failed for r in results),
            stored_rows=await store.count(),
        )
        return 0

    except StoreError as e:
        log.error("image_store_unavailable", error=str(e))
        return 1
    except (ConfigurationError, FilesystemError) as e:
        log.error("pipeline_precondition_failed", error=str(e), error_type=type(e).__name__)
        return 1
    finally:
        await store.close()


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Download, resize and store image thumbnails for search inputs"
    )
    parser.add_argument(
        "--inputs",
        type=Path,
        default=None,
        help="Search inputs JSON file (default: INPUTS_FILE or inputs.json)",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=Path(".env"),
        help="dotenv file to load before reading configuration (default: .env)",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point."""
    args = parse_args(argv)

    if not load_dotenv(args.env_file):
        log.warning("env_file_not_loaded", path=str(args.env_file))

    inputs_file = args.inputs or get_inputs_file()

    try:
        return asyncio.run(run(inputs_file))
    except KeyboardInterrupt:
        log.info("pipeline_interrupted_by_user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
