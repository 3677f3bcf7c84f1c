"""Errors raised at the filesystem capability boundary.

Parsing and path algebra never raise; only capability calls that touch
the real filesystem do, and they always raise one of these.
"""

from __future__ import annotations

import errno
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from os import PathLike

__all__ = [
    "ConfigError",
    "FileSystemError",
    "PathExistsError",
    "PathNotADirectoryError",
    "PathNotFoundError",
    "PathPermissionError",
    "translate_os_error",
]


class FileSystemError(Exception):
    """Unstructured I/O failure during a filesystem operation."""

    def __init__(self, message: str, path: str | PathLike[str] | None = None) -> None:
        super().__init__(message)
        self.path = path


class PathNotFoundError(FileSystemError):
    """The path does not exist."""


class PathPermissionError(FileSystemError):
    """The operation is not permitted on the path."""


class PathNotADirectoryError(FileSystemError):
    """A directory was required but the path is something else."""


class PathExistsError(FileSystemError):
    """The path already exists."""


class ConfigError(ValueError):
    """Settings file could not be read or is invalid."""

    pass


_ERRNO_MAP: dict[int, type[FileSystemError]] = {
    errno.ENOENT: PathNotFoundError,
    errno.EACCES: PathPermissionError,
    errno.EPERM: PathPermissionError,
    errno.ENOTDIR: PathNotADirectoryError,
    errno.EEXIST: PathExistsError,
}


def translate_os_error(exc: OSError, path: str | PathLike[str] | None = None) -> FileSystemError:
    """Map an OSError onto the pathkit error taxonomy.

    Args:
        exc: Error raised by the operating system.
        path: Path the failing operation was applied to.

    Returns:
        The matching FileSystemError subclass instance.
    """
    error_class = _ERRNO_MAP.get(exc.errno or 0, FileSystemError)
    if error_class is FileSystemError:
        if isinstance(exc, FileNotFoundError):
            error_class = PathNotFoundError
        elif isinstance(exc, PermissionError):
            error_class = PathPermissionError
        elif isinstance(exc, NotADirectoryError):
            error_class = PathNotADirectoryError
        elif isinstance(exc, FileExistsError):
            error_class = PathExistsError
    message = exc.strerror or str(exc)
    target = path if path is not None else exc.filename
    return error_class(f"{message}: {target}" if target is not None else message, target)
