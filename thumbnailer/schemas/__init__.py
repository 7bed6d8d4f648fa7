"""Data contracts and Pydantic schemas for the pipeline."""

from thumbnailer.schemas.pipeline import (
    ItemOutcome,
    PipelineConfig,
    PipelineStep,
    RunResult,
    WorkItem,
)
from thumbnailer.schemas.search_input import SearchInput, load_search_inputs

__all__ = [
    "ItemOutcome",
    "PipelineConfig",
    "PipelineStep",
    "RunResult",
    "SearchInput",
    "WorkItem",
    "load_search_inputs",
]
