"""Protocol definitions for filesystem capabilities.

The path algebra never talks to the operating system directly. Anything
that needs ambient state or real I/O goes through one of these
interfaces, so that:
- Path values stay pure and deterministic
- Test doubles can stand in for the real filesystem
- The current directory is an explicit, injectable value

All concrete implementations satisfy these protocols structurally (duck typing).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from pathkit.path import Path


@runtime_checkable
class WorkingDirectory(Protocol):
    """Protocol for the ambient directories paths are resolved against.

    The current directory is process-wide state. Implementations do not
    serialize access to it; changing it from several threads at once is
    the caller's responsibility.
    """

    def get_current_directory(self) -> Path:
        """Get the current working directory.

        Returns:
            Absolute path of the current directory.
        """
        ...

    def set_current_directory(self, path: Path) -> None:
        """Change the current working directory.

        Args:
            path: New current directory.

        Raises:
            PathNotFoundError: If the directory does not exist.
            PathNotADirectoryError: If the path is not a directory.
        """
        ...

    def get_home_directory(self) -> Path:
        """Get the user's home directory.

        Returns:
            Absolute path of the home directory.
        """
        ...

    def get_temporary_directory(self) -> Path:
        """Get the directory for temporary files.

        Returns:
            Absolute path of the temporary directory.
        """
        ...


@runtime_checkable
class FileSystemInfo(Protocol):
    """Protocol for filesystem policy queries."""

    def is_case_sensitive(self, path: Path) -> bool:
        """Check whether names are case-sensitive on the filesystem holding a path.

        Args:
            path: Path whose filesystem is queried. Need not exist.

        Returns:
            True if the filesystem distinguishes names differing only in case.
        """
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for filesystem operations.

    Every failing call raises a FileSystemError subclass from pathkit.errors.
    Nothing is retried.
    """

    def list_directory(self, path: Path) -> list[Path]:
        """List the immediate entries of a directory.

        Args:
            path: Directory to list.

        Returns:
            Paths of the entries, excluding ``.`` and ``..``.

        Raises:
            PathNotFoundError: If the directory does not exist.
            PathNotADirectoryError: If the path is not a directory.
        """
        ...

    def exists(self, path: Path) -> bool:
        """Check if a path exists.

        Args:
            path: Path to check.

        Returns:
            True if path exists, False otherwise.
        """
        ...

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory, following symlinks."""
        ...

    def is_file(self, path: Path) -> bool:
        """Check if a path is a regular file, following symlinks."""
        ...

    def is_symlink(self, path: Path) -> bool:
        """Check if a path is a symbolic link."""
        ...

    def is_readable(self, path: Path) -> bool:
        """Check if the current user may read a path."""
        ...

    def is_writable(self, path: Path) -> bool:
        """Check if the current user may write a path."""
        ...

    def is_executable(self, path: Path) -> bool:
        """Check if the current user may execute a path."""
        ...

    def is_deletable(self, path: Path) -> bool:
        """Check if the current user may delete a path."""
        ...

    def read_bytes(self, path: Path) -> bytes:
        """Read the content of a file.

        Args:
            path: Path to the file.

        Returns:
            File content.

        Raises:
            PathNotFoundError: If file does not exist.
        """
        ...

    def write_bytes(self, path: Path, content: bytes) -> None:
        """Write content to a file, replacing any existing content.

        Args:
            path: Path to the file.
            content: Content to write.
        """
        ...

    def delete(self, path: Path) -> None:
        """Remove a file, symlink or directory tree.

        Args:
            path: Path to remove.
        """
        ...

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory.

        Args:
            path: Path to create.
            parents: Create parent directories if needed.
            exist_ok: Don't raise if directory exists.
        """
        ...

    def move(self, source: Path, destination: Path) -> None:
        """Move a file or directory.

        Raises:
            PathExistsError: If destination already exists.
        """
        ...

    def copy(self, source: Path, destination: Path) -> None:
        """Copy a file or directory tree.

        Raises:
            PathExistsError: If destination already exists.
        """
        ...

    def link(self, source: Path, destination: Path) -> None:
        """Create a hard link to source at destination."""
        ...

    def symlink(self, path: Path, target: Path) -> None:
        """Create a symbolic link at path pointing to target."""
        ...

    def read_link(self, path: Path) -> str:
        """Read the raw target of a symbolic link.

        Args:
            path: Path of the link.

        Returns:
            Target exactly as stored in the link.
        """
        ...
