"""Dispatcher: owns the bounded worker pool for one pipeline run.

Architecture Pattern:
    - Fixed pool of ``config.parallelism`` PipelineWorker coroutines
    - One shared WorkQueue; the dispatcher is its single producer
    - Closing the queue is the only termination signal for workers
    - ``run`` blocks until every worker has returned

Run sequence:
    1. Validate config (ConfigurationError before anything is touched)
    2. Return immediately for an empty item list
    3. Create working/output directories (FilesystemError is fatal)
    4. Start workers, push every item, close the queue
    5. Await all workers, return the aggregate RunResult

Items may complete in any order. Every item is attempted exactly once.

Usage:
    from thumbnailer.services.dispatcher import run_pipeline

    result = await run_pipeline(items, config, store)
    print(result.summary())
"""

import asyncio
from collections.abc import Sequence

from thumbnailer.clients.http_fetcher import HttpFetcher
from thumbnailer.schemas.pipeline import PipelineConfig, RunResult, WorkItem
from thumbnailer.services.image_store import ImageStore
from thumbnailer.utils.filesystem import ensure_directory
from thumbnailer.utils.logging import get_logger
from thumbnailer.utils.work_queue import WorkQueue
from thumbnailer.workers.pipeline_worker import PipelineWorker

log = get_logger(__name__)


class Dispatcher:
    """Runs WorkItems through a fixed-size pool of PipelineWorkers.

    Attributes:
        config: Run-wide pipeline settings
        store: Image store shared by all workers
        fetcher: HTTP fetcher shared by all workers (created per run if None)
    """

    def __init__(
        self,
        config: PipelineConfig,
        store: ImageStore,
        fetcher: HttpFetcher | None = None,
    ):
        self.config = config
        self.store = store
        self.fetcher = fetcher

    async def run(self, items: Sequence[WorkItem]) -> RunResult:
        """Process every item and wait for the pool to drain.

        Args:
            items: Work items to process (may be empty)

        Returns:
            Aggregate RunResult with one outcome per item.

        Raises:
            ConfigurationError: If the config is invalid (nothing is started).
            FilesystemError: If the working or output directory cannot be
                created (no worker is started).
        """
        self.config.validate()

        result = RunResult()
        if not items:
            log.info("dispatcher_no_items")
            return result

        ensure_directory(self.config.working_directory)
        ensure_directory(self.config.output_directory)
        for item in items:
            if item.working_directory != self.config.working_directory:
                ensure_directory(item.working_directory)

        owns_fetcher = self.fetcher is None
        fetcher = self.fetcher or HttpFetcher()

        log.info(
            "dispatcher_started",
            items=len(items),
            parallelism=self.config.parallelism,
            width=self.config.target_width,
            height=self.config.target_height,
        )

        queue: WorkQueue[WorkItem] = WorkQueue()
        workers = [
            PipelineWorker(worker_id, self.config, fetcher, self.store, result)
            for worker_id in range(1, self.config.parallelism + 1)
        ]
        tasks = [asyncio.create_task(worker.run(queue)) for worker in workers]

        try:
            for item in items:
                await queue.put(item)
            await queue.close()
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        finally:
            if owns_fetcher:
                await fetcher.close()

        log.info("dispatcher_finished", **result.summary())
        return result


async def run_pipeline(
    items: Sequence[WorkItem],
    config: PipelineConfig,
    store: ImageStore,
    fetcher: HttpFetcher | None = None,
) -> RunResult:
    """Run ``items`` through the pipeline with a fresh Dispatcher."""
    return await Dispatcher(config, store, fetcher=fetcher).run(items)
