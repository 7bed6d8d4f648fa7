"""Shared exceptions for the thumbnail pipeline.

This module contains exception classes used across the fetch, codec and
store layers so that the worker can classify failures without importing
httpx, Pillow or SQLAlchemy error types.

Taxonomy:
    ConfigurationError: Invalid or missing configuration (fatal for a run)
    PipelineError: Base class for per-item failures
        FetchError: Network or HTTP protocol failure
        FilesystemError: Directory or file create/write/delete failure
        DecodeError: Corrupt or unsupported image bytes
        EncodeError: Resize or re-encode failure
        StoreError: Persistence write failure
"""

from pathlib import Path


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid.

    This error indicates a problem that prevents a run from starting
    (e.g., parallelism below 1, no database URL, unreadable inputs file).
    """

    pass


class PipelineError(Exception):
    """Base class for errors raised by a single pipeline step."""

    pass


class FetchError(PipelineError):
    """Raised when an image URL cannot be retrieved.

    Attributes:
        url: URL that was requested.
        status_code: HTTP status code for non-2xx responses, None for
            transport errors.
    """

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)

    def __str__(self) -> str:
        base_message = super().__str__()
        if self.status_code is not None:
            return f"{base_message} (url={self.url}, status={self.status_code})"
        return f"{base_message} (url={self.url})"


class FilesystemError(PipelineError):
    """Raised when a file or directory cannot be created, written or removed.

    Attributes:
        path: Filesystem path involved in the failed operation.
    """

    def __init__(self, path: Path | str, message: str):
        self.path = Path(path)
        super().__init__(message)

    def __str__(self) -> str:
        return f"{super().__str__()} (path={self.path})"


class DecodeError(PipelineError):
    """Raised when bytes cannot be decoded as a raster image."""

    pass


class EncodeError(PipelineError):
    """Raised when an image cannot be resized or re-encoded."""

    pass


class StoreError(PipelineError):
    """Raised when the image store cannot be initialized or written to."""

    pass
