"""Cross-platform path values with a pure path algebra."""

__version__ = "0.1.0"

# Export the path types and capability interfaces for type hints and dependency injection
from pathkit.context import PathContext, create_context, get_default_context, set_default_context
from pathkit.errors import (
    FileSystemError,
    PathExistsError,
    PathNotADirectoryError,
    PathNotFoundError,
    PathPermissionError,
)
from pathkit.globbing import glob
from pathkit.path import Path, PosixPath, WindowsPath
from pathkit.protocols import FileSystem, FileSystemInfo, WorkingDirectory

__all__ = [
    "__version__",
    "FileSystem",
    "FileSystemError",
    "FileSystemInfo",
    "Path",
    "PathContext",
    "PathExistsError",
    "PathNotADirectoryError",
    "PathNotFoundError",
    "PathPermissionError",
    "PosixPath",
    "WindowsPath",
    "WorkingDirectory",
    "create_context",
    "get_default_context",
    "glob",
    "set_default_context",
]
