"""Production implementations of the filesystem capabilities.

RealFileSystem, RealFileSystemInfo and ProcessWorkingDirectory wrap the
standard library os, shutil and tempfile modules and satisfy the protocols
in pathkit.protocols structurally. Every OSError is translated into the
pathkit.errors taxonomy.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from pathkit.errors import PathExistsError, translate_os_error
from pathkit.path import Path

logger = logging.getLogger(__name__)


@contextmanager
def _translated(path: Path) -> Iterator[None]:
    """Re-raise OSError as the matching FileSystemError."""
    try:
        yield
    except OSError as e:
        raise translate_os_error(e, path) from e


class RealFileSystem:
    """Production filesystem implementation.

    Wraps standard library os and shutil operations.
    Satisfies the FileSystem protocol structurally.
    """

    def list_directory(self, path: Path) -> list[Path]:
        """List the immediate entries of a directory."""
        logger.debug("Listing %s", path)
        with _translated(path):
            names = os.listdir(path)
        return [path.child(name) for name in names]

    def exists(self, path: Path) -> bool:
        """Check if a path exists."""
        return os.path.exists(path)

    def is_dir(self, path: Path) -> bool:
        """Check if a path is a directory."""
        return os.path.isdir(path)

    def is_file(self, path: Path) -> bool:
        """Check if a path is a regular file."""
        return os.path.isfile(path)

    def is_symlink(self, path: Path) -> bool:
        """Check if a path is a symbolic link."""
        return os.path.islink(path)

    def is_readable(self, path: Path) -> bool:
        """Check if a path is readable."""
        return os.access(path, os.R_OK)

    def is_writable(self, path: Path) -> bool:
        """Check if a path is writable."""
        return os.access(path, os.W_OK)

    def is_executable(self, path: Path) -> bool:
        """Check if a path is executable."""
        return os.access(path, os.X_OK)

    def is_deletable(self, path: Path) -> bool:
        """Check if a path exists and its directory allows removing entries."""
        if not os.path.lexists(path):
            return False
        parent = os.path.dirname(os.path.abspath(path))
        return os.access(parent, os.W_OK | os.X_OK)

    def read_bytes(self, path: Path) -> bytes:
        """Read binary content from a file."""
        with _translated(path), open(path, "rb") as handle:
            return handle.read()

    def write_bytes(self, path: Path, content: bytes) -> None:
        """Write binary content to a file."""
        logger.debug("Writing %d bytes to %s", len(content), path)
        with _translated(path), open(path, "wb") as handle:
            handle.write(content)

    def delete(self, path: Path) -> None:
        """Remove a file, symlink or directory tree."""
        logger.debug("Deleting %s", path)
        with _translated(path):
            if os.path.isdir(path) and not os.path.islink(path):
                shutil.rmtree(path)
            else:
                os.remove(path)

    def mkdir(self, path: Path, parents: bool = False, exist_ok: bool = False) -> None:
        """Create a directory."""
        logger.debug("Creating directory %s", path)
        with _translated(path):
            if parents:
                os.makedirs(path, exist_ok=exist_ok)
            elif not (exist_ok and os.path.isdir(path)):
                os.mkdir(path)

    def move(self, source: Path, destination: Path) -> None:
        """Move a file or directory."""
        self._require_absent(destination)
        logger.debug("Moving %s to %s", source, destination)
        with _translated(source):
            shutil.move(os.fspath(source), os.fspath(destination))

    def copy(self, source: Path, destination: Path) -> None:
        """Copy a file or directory tree."""
        self._require_absent(destination)
        logger.debug("Copying %s to %s", source, destination)
        with _translated(source):
            if os.path.isdir(source):
                shutil.copytree(source, destination, symlinks=True)
            else:
                shutil.copy2(source, destination)

    def link(self, source: Path, destination: Path) -> None:
        """Create a hard link to source at destination."""
        with _translated(destination):
            os.link(source, destination)

    def symlink(self, path: Path, target: Path) -> None:
        """Create a symbolic link at path pointing to target."""
        logger.debug("Linking %s -> %s", path, target)
        with _translated(path):
            os.symlink(target, path, target_is_directory=os.path.isdir(target))

    def read_link(self, path: Path) -> str:
        """Read the raw target of a symbolic link."""
        with _translated(path):
            return os.readlink(path)

    @staticmethod
    def _require_absent(path: Path) -> None:
        if os.path.lexists(path):
            raise PathExistsError(f"File exists: {path}", path)


class RealFileSystemInfo:
    """Probes case sensitivity of the filesystem holding a path.

    The probe walks up to the nearest existing component containing a
    cased character and looks for its case-swapped name. When no such
    component exists the platform default is used.
    """

    def is_case_sensitive(self, path: Path) -> bool:
        """Check whether the filesystem holding a path is case-sensitive."""
        current = os.path.abspath(os.path.expanduser(os.fspath(path)))
        while True:
            head, tail = os.path.split(current)
            if tail.swapcase() != tail and os.path.exists(current):
                swapped = os.path.join(head, tail.swapcase())
                if not os.path.exists(swapped):
                    return True
                try:
                    return not os.path.samefile(current, swapped)
                except OSError:
                    return True
            if head == current:
                break
            current = head
        sensitive = os.path.normcase("A") == "A"
        logger.debug("No probe candidate for %s, assuming case_sensitive=%s", path, sensitive)
        return sensitive


@dataclass(frozen=True)
class FixedFileSystemInfo:
    """Case-sensitivity policy fixed by configuration instead of probing."""

    case_sensitive: bool = True

    def is_case_sensitive(self, path: Path) -> bool:
        """Return the configured policy."""
        return self.case_sensitive


class ProcessWorkingDirectory:
    """Ambient directories of the running process.

    Wraps os.getcwd, os.chdir, the user's home directory and the
    tempfile temporary directory. Satisfies the WorkingDirectory
    protocol structurally.
    """

    def __init__(self, path_class: type[Path] = Path) -> None:
        """Initialize the provider.

        Args:
            path_class: Path class used for returned directories.
        """
        self.path_class = path_class

    def get_current_directory(self) -> Path:
        """Get the current working directory."""
        with _translated(self.path_class(".")):
            return self.path_class(os.getcwd())

    def set_current_directory(self, path: Path) -> None:
        """Change the current working directory."""
        logger.debug("Changing directory to %s", path)
        with _translated(path):
            os.chdir(path)

    def get_home_directory(self) -> Path:
        """Get the user's home directory."""
        return self.path_class(os.path.expanduser("~"))

    def get_temporary_directory(self) -> Path:
        """Get the temporary directory."""
        return self.path_class(tempfile.gettempdir())
