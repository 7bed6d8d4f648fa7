"""Pipeline workers."""

from thumbnailer.workers.pipeline_worker import PipelineWorker

__all__ = ["PipelineWorker"]
