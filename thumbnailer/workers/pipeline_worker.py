"""Pipeline Worker.

This module implements the worker that drives one image at a time through
the thumbnail pipeline. Several workers share one WorkQueue; each runs until
the queue is closed and drained.

Per-item steps (each attempted at most once):
    1. fetch    - download bytes for item.source_url
    2. write    - persist raw bytes to working_directory/destination_name
    3. resize   - decode, resize (Lanczos), encode JPEG to output_directory
    4. store    - read the resized file and hand it to ImageStore.put
    5. cleanup  - delete the resized file (and the raw file when
                  remove_raw_files is set), regardless of the store outcome

Error Handling:
    - A failure at any step abandons only the current item; the worker moves
      on to the next queue item
    - Every failure is logged with url, filename, step and cause and recorded
      on the shared RunResult
    - Cleanup failures are logged, never escalated
    - When resizing fails the raw file is left on disk for diagnosis
    - asyncio.CancelledError is never swallowed
"""

import asyncio
from pathlib import Path

from thumbnailer.clients.http_fetcher import HttpFetcher
from thumbnailer.exceptions import FilesystemError, PipelineError
from thumbnailer.schemas.pipeline import (
    ItemOutcome,
    PipelineConfig,
    PipelineStep,
    RunResult,
    WorkItem,
)
from thumbnailer.services import image_codec
from thumbnailer.services.image_store import ImageStore
from thumbnailer.utils.filesystem import remove_file, validate_file_name, write_file
from thumbnailer.utils.logging import StructuredLogger, get_logger
from thumbnailer.utils.work_queue import WorkQueue

log = get_logger(__name__)


class PipelineWorker:
    """Consumes WorkItems from a shared queue and processes them one by one.

    Attributes:
        worker_id: Identifier used in log context
        config: Run-wide pipeline settings (read-only)
        fetcher: HTTP fetcher shared by all workers
        store: Image store shared by all workers
        result: Aggregate result every outcome is recorded on
    """

    def __init__(
        self,
        worker_id: int,
        config: PipelineConfig,
        fetcher: HttpFetcher,
        store: ImageStore,
        result: RunResult,
    ):
        self.worker_id = worker_id
        self.config = config
        self.fetcher = fetcher
        self.store = store
        self.result = result
        self.log = log.bind(worker_id=worker_id)

    async def run(self, queue: WorkQueue[WorkItem]) -> int:
        """Process items until the queue is closed and drained.

        Returns:
            Number of items this worker attempted.
        """
        processed = 0
        self.log.debug("worker_started")

        async for item in queue:
            outcome = await self.process_item(item)
            self.result.record(outcome)
            processed += 1

        self.log.debug("worker_stopped", processed=processed)
        return processed

    async def process_item(self, item: WorkItem) -> ItemOutcome:
        """Run every pipeline step for one item.

        Args:
            item: Work item to process

        Returns:
            ItemOutcome with the failed step (None on success).

        Raises:
            No exceptions for per-item failures (caught, logged and recorded).
        """
        outcome = ItemOutcome(item=item)
        item_log = self.log.bind(url=item.source_url, filename=item.destination_name)
        raw_path = item.raw_path
        resized_path = self.config.resized_path(item)

        # Name validation guards the raw write against path traversal
        step = PipelineStep.WRITE
        try:
            validate_file_name(item.destination_name)

            step = PipelineStep.FETCH
            data = await self.fetcher.fetch(item.source_url)

            step = PipelineStep.WRITE
            write_file(raw_path, data)

            step = PipelineStep.RESIZE
            await asyncio.to_thread(
                image_codec.resize_file,
                raw_path,
                resized_path,
                self.config.target_width,
                self.config.target_height,
                self.config.jpeg_quality,
            )

            step = PipelineStep.STORE
            try:
                await self._store_resized(item, resized_path)
            finally:
                outcome.cleanup_error = self._cleanup(raw_path, resized_path, item_log)

        except (PipelineError, ValueError) as e:
            outcome.failed_step = step
            outcome.error = str(e)
            item_log.error(
                f"image_{step.value}_failed",
                step=step.value,
                error=str(e),
                error_type=type(e).__name__,
            )

        except Exception as e:
            outcome.failed_step = step
            outcome.error = f"Unexpected error: {e!s}"
            item_log.error(
                "image_unexpected_error",
                step=step.value,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )

        else:
            item_log.info("image_stored")

        return outcome

    async def _store_resized(self, item: WorkItem, resized_path: Path) -> None:
        try:
            data = resized_path.read_bytes()
        except OSError as e:
            raise FilesystemError(resized_path, f"Cannot read resized image: {e}") from e

        await self.store.put(item.destination_name, data)

    def _cleanup(
        self, raw_path: Path, resized_path: Path, item_log: StructuredLogger
    ) -> str | None:
        """Best-effort removal of per-item files.

        Returns:
            Error message of the first failed removal, or None.
        """
        paths = [resized_path]
        if self.config.remove_raw_files:
            paths.append(raw_path)

        first_error: str | None = None
        for path in paths:
            try:
                remove_file(path)
            except FilesystemError as e:
                item_log.warning("cleanup_failed", path=str(path), error=str(e))
                first_error = first_error or str(e)

        return first_error
