"""Business logic services for the thumbnail pipeline."""

from thumbnailer.services.dispatcher import Dispatcher, run_pipeline
from thumbnailer.services.image_store import ImageStore
from thumbnailer.services.work_items import (
    SequentialNamer,
    StaticUrlSource,
    UrlSource,
    build_work_items,
)

__all__ = [
    "Dispatcher",
    "ImageStore",
    "SequentialNamer",
    "StaticUrlSource",
    "UrlSource",
    "build_work_items",
    "run_pipeline",
]
