"""Filesystem helpers for the thumbnail pipeline workspace.

The pipeline uses two directories:

    {DOWNLOAD_DIR}/{destination_name}   raw downloads
    {RESIZED_DIR}/{destination_name}    resized JPEGs, removed once stored

Security:
    Destination names are validated before they are joined to a directory:
    only alphanumerics, dots, underscores and dashes are allowed, so a name
    can never escape its directory.
"""

import re
from pathlib import Path

from thumbnailer.exceptions import FilesystemError

__all__ = [
    "ensure_directory",
    "remove_file",
    "validate_file_name",
    "write_file",
]

# Validation pattern: alphanumeric, dots, underscores, dashes only
_NAME_PATTERN = re.compile(r"[a-zA-Z0-9._-]+")


def validate_file_name(name: str) -> None:
    """Validate a destination file name to prevent path traversal.

    Args:
        name: File name without directory components

    Raises:
        ValueError: If the name is empty, a relative path marker, or contains
            characters other than alphanumerics, dots, underscores and dashes.
    """
    if not name:
        raise ValueError("File name cannot be empty")

    if name in (".", "..") or not _NAME_PATTERN.fullmatch(name):
        raise ValueError(
            f"Invalid file name: '{name}'. "
            f"Only alphanumeric characters, dots, underscores, and dashes are allowed."
        )


def ensure_directory(path: Path) -> Path:
    """Create ``path`` (and parents) if it does not exist.

    Returns:
        The directory path.

    Raises:
        FilesystemError: If the directory cannot be created or ``path``
            exists and is not a directory.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FilesystemError(path, f"Cannot create directory: {e}") from e
    return path


def write_file(path: Path, data: bytes) -> Path:
    """Write ``data`` to ``path``, replacing any existing file.

    Raises:
        FilesystemError: If the file cannot be written.
    """
    try:
        path.write_bytes(data)
    except OSError as e:
        raise FilesystemError(path, f"Cannot write file: {e}") from e
    return path


def remove_file(path: Path) -> bool:
    """Delete a file.

    Returns:
        True if the file was removed, False if it did not exist.

    Raises:
        FilesystemError: If the file exists but cannot be removed.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise FilesystemError(path, f"Cannot remove file: {e}") from e
    return True
