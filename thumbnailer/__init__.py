"""Image thumbnail pipeline.

Downloads images for a set of search inputs, resizes each one to a fixed
thumbnail size, and stores the JPEG bytes in a relational table using a
bounded pool of concurrent asyncio workers.
"""

from thumbnailer.schemas.pipeline import PipelineConfig, RunResult, WorkItem
from thumbnailer.services.dispatcher import Dispatcher, run_pipeline
from thumbnailer.services.image_store import ImageStore

__all__ = [
    "Dispatcher",
    "ImageStore",
    "PipelineConfig",
    "RunResult",
    "WorkItem",
    "run_pipeline",
]
