"""Configuration management for the thumbnail pipeline.

This module provides centralized configuration loading from environment
variables. A ``.env`` file is loaded by the runner before any getter is
called.

Environment Variables:
    DATABASE_URL: Full database URL (takes precedence over DB_* variables)
    DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME: PostgreSQL connection parts
    DOWNLOAD_DIR: Directory for raw downloads (default: ./images)
    RESIZED_DIR: Directory for resized files (default: ./resized_images)
    MAX_IMAGE_WORKERS: Worker pool size (default: 5)
    RESIZE_WIDTH, RESIZE_HEIGHT: Thumbnail size (default: 100x100)
    JPEG_QUALITY: JPEG encoder quality (default: 75)
    REMOVE_RAW_FILES: Delete raw downloads after resizing (default: true)
    FETCH_TIMEOUT_SECONDS: HTTP timeout (default: unset, no timeout)
    INPUTS_FILE: Search inputs JSON file (default: inputs.json)

Usage:
    from thumbnailer.config import get_database_url, load_pipeline_config

    db_url = get_database_url()  # Raises if no database configured
    config = load_pipeline_config()
"""

import os
from functools import lru_cache
from pathlib import Path
from urllib.parse import quote

import structlog

from thumbnailer.constants import (
    DEFAULT_DB_PORT,
    DEFAULT_DOWNLOAD_DIR,
    DEFAULT_INPUTS_FILE,
    DEFAULT_JPEG_QUALITY,
    DEFAULT_MAX_IMAGE_WORKERS,
    DEFAULT_RESIZE_HEIGHT,
    DEFAULT_RESIZE_WIDTH,
    DEFAULT_RESIZED_DIR,
    MAX_JPEG_QUALITY,
    MIN_JPEG_QUALITY,
)
from thumbnailer.exceptions import ConfigurationError
from thumbnailer.schemas.pipeline import PipelineConfig

log = structlog.get_logger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _get_int(name: str, default: int) -> int:
    """Read an integer environment variable, falling back on bad values."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        log.warning("invalid_integer_setting", name=name, value=raw, using_default=default)
        return default


def _get_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    log.warning("invalid_boolean_setting", name=name, value=raw, using_default=default)
    return default


def _to_asyncpg(url: str) -> str:
    # Plain postgresql:// URLs need the async driver for SQLAlchemy
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    return url


@lru_cache
def get_database_url() -> str:
    """Get database URL from environment.

    Uses DATABASE_URL when set, otherwise composes a PostgreSQL URL from
    DB_HOST, DB_PORT, DB_USER, DB_PASSWORD and DB_NAME. Converts
    postgresql:// to postgresql+asyncpg:// for async SQLAlchemy.

    Returns:
        Database URL with async driver.

    Raises:
        ConfigurationError: If neither DATABASE_URL nor DB_HOST/DB_NAME are set.
    """
    url = os.getenv("DATABASE_URL")
    if url:
        return _to_asyncpg(url)

    host = os.getenv("DB_HOST")
    dbname = os.getenv("DB_NAME")
    if not host or not dbname:
        raise ConfigurationError(
            "DATABASE_URL or DB_HOST and DB_NAME environment variables are required"
        )

    port = _get_int("DB_PORT", DEFAULT_DB_PORT)
    user = quote(os.getenv("DB_USER", ""), safe="")
    password = quote(os.getenv("DB_PASSWORD", ""), safe="")

    credentials = ""
    if user:
        credentials = f"{user}:{password}@" if password else f"{user}@"

    return f"postgresql+asyncpg://{credentials}{host}:{port}/{dbname}"


def get_database_echo() -> bool:
    """Whether SQLAlchemy should echo SQL statements (DATABASE_ECHO)."""
    return _get_bool("DATABASE_ECHO", False)


def get_download_dir() -> Path:
    return Path(os.getenv("DOWNLOAD_DIR", str(DEFAULT_DOWNLOAD_DIR)))


def get_resized_dir() -> Path:
    return Path(os.getenv("RESIZED_DIR", str(DEFAULT_RESIZED_DIR)))


def get_inputs_file() -> Path:
    return Path(os.getenv("INPUTS_FILE", str(DEFAULT_INPUTS_FILE)))


def get_max_image_workers() -> int:
    """Get worker pool size.

    Environment Variable:
        MAX_IMAGE_WORKERS: Number of concurrent pipeline workers (default: 5)

    Returns:
        Configured worker count. Values below 1 are returned unchanged so that
        PipelineConfig.validate() reports them as a configuration error.
    """
    return _get_int("MAX_IMAGE_WORKERS", DEFAULT_MAX_IMAGE_WORKERS)


def get_resize_dimensions() -> tuple[int, int]:
    """Get thumbnail (width, height) from RESIZE_WIDTH and RESIZE_HEIGHT."""
    return (
        _get_int("RESIZE_WIDTH", DEFAULT_RESIZE_WIDTH),
        _get_int("RESIZE_HEIGHT", DEFAULT_RESIZE_HEIGHT),
    )


def get_jpeg_quality() -> int:
    """Get JPEG quality, clamped to the range Pillow recommends (1-95)."""
    quality = _get_int("JPEG_QUALITY", DEFAULT_JPEG_QUALITY)
    return max(MIN_JPEG_QUALITY, min(MAX_JPEG_QUALITY, quality))


def get_remove_raw_files() -> bool:
    return _get_bool("REMOVE_RAW_FILES", True)


def get_fetch_timeout() -> float | None:
    """Get HTTP fetch timeout in seconds.

    Environment Variable:
        FETCH_TIMEOUT_SECONDS: Timeout for a single image request

    Returns:
        Timeout in seconds, or None (no timeout) when unset or invalid.
    """
    raw = os.getenv("FETCH_TIMEOUT_SECONDS")
    if not raw:
        return None
    try:
        timeout = float(raw)
    except ValueError:
        log.warning("invalid_fetch_timeout", value=raw, using_default=None)
        return None
    return timeout if timeout > 0 else None


def load_pipeline_config() -> PipelineConfig:
    """Assemble and validate the PipelineConfig for a run.

    Returns:
        Validated PipelineConfig.

    Raises:
        ConfigurationError: If a numeric setting is out of range.
    """
    width, height = get_resize_dimensions()
    config = PipelineConfig(
        parallelism=get_max_image_workers(),
        target_width=width,
        target_height=height,
        working_directory=get_download_dir(),
        output_directory=get_resized_dir(),
        jpeg_quality=get_jpeg_quality(),
        remove_raw_files=get_remove_raw_files(),
    )
    config.validate()
    return config
