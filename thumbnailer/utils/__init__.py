"""Cross-cutting utilities for the thumbnail pipeline.

This package contains helper functions used across multiple modules.
Utilities should be pure functions or small primitives without business
logic.

Modules:
    filesystem: Directory creation, file writes and removal with FilesystemError.
    logging: Structured JSON logging.
    work_queue: Closeable FIFO channel for asyncio workers.
"""
