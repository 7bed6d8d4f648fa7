"""Structured Logging Configuration.

This module provides structured logging with JSON output and context binding.
Every log line carries an event name plus keyword context so pipeline runs
can be grepped by url, filename or worker id.

Configuration:
- JSON output format (one object per event)
- Context binding support (worker ids, run ids, etc.)
- Log levels: DEBUG, INFO, WARNING, ERROR
- LOG_LEVEL environment variable overrides the default INFO level
"""

import json
import logging
import os
import sys
from typing import Any


class StructuredLogger:
    """Wrapper around standard Logger with structured JSON logging support.

    Provides structured logging methods (info, error, warning, debug) that
    accept keyword arguments and output JSON format. Context bound with
    ``bind()`` is merged into every entry.
    """

    def __init__(self, logger: logging.Logger, context: dict[str, Any] | None = None):
        self._logger = logger
        self._context = dict(context or {})

    def bind(self, **kwargs: Any) -> "StructuredLogger":
        """Return a new logger with additional context fields."""
        return StructuredLogger(self._logger, {**self._context, **kwargs})

    def _format_json(self, event: str, **kwargs: Any) -> str:
        """Format log entry as JSON with event and context fields."""
        log_entry = {"event": event, **self._context, **kwargs}
        return json.dumps(log_entry, default=str)

    def _log(self, level: int, event: str, **kwargs: Any) -> None:
        exc_info = kwargs.pop("exc_info", False)
        self._logger.log(level, self._format_json(event, **kwargs), exc_info=exc_info)

    def info(self, event: str, **kwargs: Any) -> None:
        """Log info message with structured context as JSON."""
        self._log(logging.INFO, event, **kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        """Log error message with structured context as JSON."""
        self._log(logging.ERROR, event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        """Log warning message with structured context as JSON."""
        self._log(logging.WARNING, event, **kwargs)

    def debug(self, event: str, **kwargs: Any) -> None:
        """Log debug message with structured context as JSON."""
        self._log(logging.DEBUG, event, **kwargs)


def get_logger(name: str) -> StructuredLogger:
    """Get a structured logger instance for the given module.

    Args:
        name: Module name (typically __name__)

    Returns:
        Configured StructuredLogger instance
    """
    logger = logging.getLogger(name)

    # Configure basic logging if not already configured
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.setLevel(os.getenv("LOG_LEVEL", "INFO").upper())

    return StructuredLogger(logger)
