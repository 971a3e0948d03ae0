"""Filesystem checks for firmware directories and image files.

Every directory used as a working directory and every file opened by
motoflash passes through these checks first:
- Firmware directory exists and is a directory (symlinks resolved)
- Image file exists, is a regular file, and is readable
"""

import logging
import os
from pathlib import Path

from motoflash.errors import (
    NOT_A_DIRECTORY,
    NOT_A_FILE,
    NOT_READABLE,
    PATH_NOT_FOUND,
    MotoflashError,
)

logger = logging.getLogger(__name__)


class PathGuardError(MotoflashError):
    """Base exception for path validation errors."""

    def __init__(self, message: str, error_code: str, path: Path) -> None:
        super().__init__(message, error_code=error_code)
        self.path = path


class PathNotFoundError(PathGuardError):
    """Path does not exist."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Path not found: {path}", PATH_NOT_FOUND, path)


class NotADirectoryPathError(PathGuardError):
    """Path exists but is not a directory."""

    def __init__(self, path: Path) -> None:
        super().__init__(f"Not a directory: {path}", NOT_A_DIRECTORY, path)


class NotAFilePathError(PathGuardError):
    """Path exists but is not a regular file."""

    def __init__(self, path: Path) -> None:
        super().__init__(f'"{path}" is not a file', NOT_A_FILE, path)


class NotReadableError(PathGuardError):
    """File exists but cannot be read."""

    def __init__(self, path: Path) -> None:
        super().__init__(f'"{path}" is not a readable file', NOT_READABLE, path)


def ensure_directory(path: str | Path) -> Path:
    """Resolve a directory to its canonical absolute path and check it.

    Args:
        path: Directory path, possibly relative or through symlinks.

    Returns:
        Resolved absolute path.

    Raises:
        PathNotFoundError: Resolved path does not exist.
        NotADirectoryPathError: Resolved path is not a directory.
    """
    resolved = Path(path).expanduser().resolve()
    if not resolved.exists():
        raise PathNotFoundError(resolved)
    if not resolved.is_dir():
        raise NotADirectoryPathError(resolved)
    logger.debug("Directory OK: %s", resolved)
    return resolved


def ensure_file(path: str | Path) -> Path:
    """Check that a path is an existing, readable regular file.

    The path is used as given; callers join it against the firmware
    directory beforehand.

    Args:
        path: File path.

    Returns:
        The same path.

    Raises:
        PathNotFoundError: Path does not exist.
        NotAFilePathError: Path is not a regular file.
        NotReadableError: File lacks read permission.
    """
    path = Path(path)
    if not path.exists():
        raise PathNotFoundError(path)
    if not path.is_file():
        raise NotAFilePathError(path)
    if not os.access(path, os.R_OK):
        raise NotReadableError(path)
    logger.debug("File OK: %s", path)
    return path


__all__ = [
    "NotADirectoryPathError",
    "NotAFilePathError",
    "NotReadableError",
    "PathGuardError",
    "PathNotFoundError",
    "ensure_directory",
    "ensure_file",
]
