"""Data contracts for the thumbnail pipeline.

WorkItem and PipelineConfig are immutable once constructed: a WorkItem is
created by the producer before queueing and consumed by exactly one worker,
and a PipelineConfig is built once per run and only read afterwards.

ItemOutcome and RunResult carry per-item success/failure signals back to the
caller of the dispatcher.
"""

import enum
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from thumbnailer.constants import DEFAULT_JPEG_QUALITY, MAX_JPEG_QUALITY, MIN_JPEG_QUALITY
from thumbnailer.exceptions import ConfigurationError


class PipelineStep(enum.Enum):
    """Per-item pipeline steps, in execution order."""

    FETCH = "fetch"
    WRITE = "write"
    RESIZE = "resize"
    STORE = "store"


@dataclass(frozen=True)
class WorkItem:
    """One unit of pipeline work.

    Attributes:
        source_url: URL the raw image is downloaded from
        destination_name: File name used for the raw file, the resized file
            and the stored row (e.g., "run1-000001.jpg")
        working_directory: Directory the raw download is written to
    """

    source_url: str
    destination_name: str
    working_directory: Path

    @property
    def raw_path(self) -> Path:
        """Path of the raw downloaded file for this item."""
        return Path(self.working_directory) / self.destination_name


@dataclass(frozen=True)
class PipelineConfig:
    """Run-wide pipeline settings.

    Attributes:
        parallelism: Number of concurrent workers (>= 1)
        target_width: Thumbnail width in pixels (>= 1)
        target_height: Thumbnail height in pixels (>= 1)
        working_directory: Directory for raw downloads
        output_directory: Directory for resized files before they are stored
        jpeg_quality: JPEG encoder quality (1-95)
        remove_raw_files: Delete the raw download once the item is resized
    """

    parallelism: int
    target_width: int
    target_height: int
    working_directory: Path
    output_directory: Path
    jpeg_quality: int = DEFAULT_JPEG_QUALITY
    remove_raw_files: bool = True

    def validate(self) -> None:
        """Check invariants that must hold before a run starts.

        Raises:
            ConfigurationError: If any numeric setting is out of range.
        """
        for name in ("parallelism", "target_width", "target_height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")

        if not MIN_JPEG_QUALITY <= self.jpeg_quality <= MAX_JPEG_QUALITY:
            raise ConfigurationError(
                f"jpeg_quality must be between {MIN_JPEG_QUALITY} and {MAX_JPEG_QUALITY}, "
                f"got {self.jpeg_quality!r}"
            )

    def resized_path(self, item: WorkItem) -> Path:
        """Path of the resized file for an item."""
        return Path(self.output_directory) / item.destination_name


@dataclass
class ItemOutcome:
    """Result of processing a single WorkItem.

    ``failed_step`` is None when the item was stored successfully. Cleanup
    failures do not fail an item; they are tracked on ``cleanup_error``.
    """

    item: WorkItem
    failed_step: PipelineStep | None = None
    error: str | None = None
    cleanup_error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.failed_step is None


@dataclass
class RunResult:
    """Aggregate result of one dispatcher run."""

    outcomes: list[ItemOutcome] = field(default_factory=list)
    failures_by_step: Counter = field(default_factory=Counter)
    cleanup_failures: int = 0

    def record(self, outcome: ItemOutcome) -> None:
        """Add a finished item to the aggregate."""
        self.outcomes.append(outcome)
        if outcome.failed_step is not None:
            self.failures_by_step[outcome.failed_step] += 1
        if outcome.cleanup_error is not None:
            self.cleanup_failures += 1

    @property
    def attempted(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for outcome in self.outcomes if outcome.succeeded)

    @property
    def failed(self) -> int:
        return self.attempted - self.succeeded

    def summary(self) -> dict[str, Any]:
        """Flat dict of counters, suitable for structured logging."""
        summary: dict[str, Any] = {
            "attempted": self.attempted,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "cleanup_failures": self.cleanup_failures,
        }
        for step in PipelineStep:
            summary[f"{step.value}_failed"] = self.failures_by_step.get(step, 0)
        return summary
