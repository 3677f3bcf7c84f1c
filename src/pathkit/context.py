"""Capability context for dependency injection.

Path operations that need ambient state or real I/O receive a PathContext
instead of reaching for globals. Production code uses the default context;
tests construct PathContext directly with test doubles.

Dependencies are typed using Protocols (abstract interfaces) rather than
concrete implementations, so test doubles can be injected without
inheritance.
"""

from __future__ import annotations

import logging
import pathlib
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from pathkit.config import ConfigManager, Settings
from pathkit.protocols import FileSystem, FileSystemInfo, WorkingDirectory

if TYPE_CHECKING:
    from pathkit.path import Path

logger = logging.getLogger(__name__)


def _default_filesystem() -> FileSystem:
    """Create the default filesystem implementation."""
    from pathkit.filesystem import RealFileSystem

    return RealFileSystem()


def _default_filesystem_info() -> FileSystemInfo:
    """Create the default case-sensitivity probe."""
    from pathkit.filesystem import RealFileSystemInfo

    return RealFileSystemInfo()


def _default_directories() -> WorkingDirectory:
    """Create the default ambient directory provider."""
    from pathkit.filesystem import ProcessWorkingDirectory

    return ProcessWorkingDirectory()


@dataclass
class PathContext:
    """Container for the capabilities path operations depend on.

    The current directory behind ``directories`` is process-wide state.
    PathContext does not lock it: changing it from several threads at once
    is undefined and left to the caller.
    """

    filesystem: FileSystem = field(default_factory=_default_filesystem)
    filesystem_info: FileSystemInfo = field(default_factory=_default_filesystem_info)
    directories: WorkingDirectory = field(default_factory=_default_directories)
    settings: Settings = field(default_factory=Settings)

    @contextmanager
    def chdir(self, path: Path) -> Iterator[Path]:
        """Temporarily change the current directory.

        The previous directory is restored on every exit path, including
        exceptions raised inside the block, before they propagate.

        Args:
            path: Directory to switch to.

        Yields:
            The directory switched to.
        """
        previous = self.directories.get_current_directory()
        self.directories.set_current_directory(path)
        logger.debug("Entered %s (was %s)", path, previous)
        try:
            yield path
        finally:
            self.directories.set_current_directory(previous)
            logger.debug("Restored %s", previous)


_default_context: PathContext | None = None


def get_default_context() -> PathContext:
    """Process-wide context used when an operation is given none."""
    global _default_context
    if _default_context is None:
        _default_context = PathContext()
    return _default_context


def resolve_context(context: PathContext | None) -> PathContext:
    """Return the given context or the process-wide default."""
    return context if context is not None else get_default_context()


def set_default_context(context: PathContext | None) -> None:
    """Replace the process-wide context; None resets to a fresh default."""
    global _default_context
    _default_context = context


def create_context(config_dir: pathlib.Path | None = None) -> PathContext:
    """Factory for a context wired from the settings file.

    Use this in production entry points. For tests, construct PathContext
    directly with test doubles.

    Args:
        config_dir: Override settings directory (for testing).

    Returns:
        Configured PathContext.

    Raises:
        ConfigError: If the settings file is invalid.
    """
    from pathkit.filesystem import (
        FixedFileSystemInfo,
        ProcessWorkingDirectory,
        RealFileSystem,
        RealFileSystemInfo,
    )
    from pathkit.path import path_class_for

    manager = ConfigManager.create(config_dir) if config_dir else ConfigManager.create_default()
    settings = manager.load()

    filesystem_info: FileSystemInfo
    if settings.case_sensitive is None:
        filesystem_info = RealFileSystemInfo()
    else:
        filesystem_info = FixedFileSystemInfo(settings.case_sensitive)

    return PathContext(
        filesystem=RealFileSystem(),
        filesystem_info=filesystem_info,
        directories=ProcessWorkingDirectory(path_class_for(settings.grammar)),
        settings=settings,
    )
