"""Shared test fixtures."""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass, field
from unittest.mock import MagicMock

import pytest

from pathkit.context import PathContext, set_default_context
from pathkit.filesystem import FixedFileSystemInfo, ProcessWorkingDirectory, RealFileSystem
from pathkit.path import Path, PosixPath


@dataclass
class FakeDirectories:
    """In-memory WorkingDirectory double.

    Every directory change is recorded so tests can assert on the sequence.
    """

    current: Path = field(default_factory=lambda: PosixPath("/work"))
    home: Path = field(default_factory=lambda: PosixPath("/home/alice"))
    temporary: Path = field(default_factory=lambda: PosixPath("/tmp"))
    changes: list[Path] = field(default_factory=list)

    def get_current_directory(self) -> Path:
        return self.current

    def set_current_directory(self, path: Path) -> None:
        self.changes.append(path)
        self.current = path

    def get_home_directory(self) -> Path:
        return self.home

    def get_temporary_directory(self) -> Path:
        return self.temporary


@pytest.fixture(autouse=True)
def reset_default_context():
    """Keep the process-wide context from leaking between tests."""
    yield
    set_default_context(None)


@pytest.fixture
def fake_directories() -> FakeDirectories:
    """Ambient directories rooted in a fake POSIX tree."""
    return FakeDirectories()


@pytest.fixture
def mock_filesystem() -> MagicMock:
    """Create a mock FileSystem for testing.

    The mock tracks all filesystem operations without touching real files.
    """
    fs = MagicMock()
    fs.exists.return_value = False
    fs.is_dir.return_value = False
    fs.is_symlink.return_value = False
    fs.list_directory.return_value = []
    return fs


@pytest.fixture
def fake_context(fake_directories: FakeDirectories, mock_filesystem: MagicMock) -> PathContext:
    """Context with fake directories, a mock filesystem and case-sensitive names."""
    return PathContext(
        filesystem=mock_filesystem,
        filesystem_info=FixedFileSystemInfo(case_sensitive=True),
        directories=fake_directories,
    )


# ============================================================================
# Real Filesystem Fixtures
# ============================================================================


@pytest.fixture
def real_context(tmp_path: pathlib.Path) -> PathContext:
    """Context backed by the real filesystem, with home set to tmp_path."""
    directories = ProcessWorkingDirectory()
    return PathContext(
        filesystem=RealFileSystem(),
        filesystem_info=FixedFileSystemInfo(case_sensitive=True),
        directories=FakeDirectories(
            current=directories.get_current_directory(),
            home=Path(tmp_path),
            temporary=Path(tmp_path),
        ),
    )


@pytest.fixture
def fixtures(tmp_path: pathlib.Path) -> Path:
    """Create the sample tree used by the filesystem tests.

    Layout::

        hello                      "Hello World\\n"
        file                       empty
        directory/child
        directory/.hiddenFile
        directory/subdirectory/child
        permissions/{executable,readable,writable,deletable}
        symlinks/                  empty, see symlink_fixtures
    """
    root = tmp_path / "fixtures"
    (root / "directory" / "subdirectory").mkdir(parents=True)
    (root / "permissions").mkdir()
    (root / "symlinks").mkdir()

    (root / "hello").write_bytes(b"Hello World\n")
    (root / "file").write_bytes(b"")
    (root / "directory" / "child").write_bytes(b"")
    (root / "directory" / ".hiddenFile").write_bytes(b"")
    (root / "directory" / "subdirectory" / "child").write_bytes(b"")
    for name in ("executable", "readable", "writable", "deletable"):
        (root / "permissions" / name).write_bytes(b"")
    os.chmod(root / "permissions" / "executable", 0o755)

    return Path(root)


@pytest.fixture
def symlink_fixtures(fixtures: Path) -> Path:
    """Add symlinks/{file,directory,swift} to the sample tree.

    Skips the test where symbolic links cannot be created.
    """
    links = pathlib.Path(os.fspath(fixtures)) / "symlinks"
    try:
        os.symlink(os.path.join("..", "file"), links / "file")
        os.symlink(os.path.join("..", "directory"), links / "directory", target_is_directory=True)
        os.symlink("/usr/bin/swift", links / "swift")
    except (OSError, NotImplementedError):
        pytest.skip("symbolic links are not supported here")
    return fixtures
