"""Depth-first traversal of a directory tree."""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathkit.path import Path
    from pathkit.protocols import FileSystem


class DirectoryWalker:
    """Iterates over every descendant of a directory, depth first.

    A directory's entries are yielded right after the directory itself.
    Calling :meth:`skip_descendants` after a directory was yielded keeps
    the walker out of it. Symlinked directories are yielded but not
    entered, and a root that is not a directory yields nothing.

    Example:
        walker = root.iterate_children()
        for path in walker:
            if path.last_component == ".git":
                walker.skip_descendants()
    """

    def __init__(self, root: Path, filesystem: FileSystem, skip_hidden: bool = False) -> None:
        self.root = root
        self.filesystem = filesystem
        self.skip_hidden = skip_hidden
        self._pending: list[Iterator[Path]] = []
        self._last: Path | None = None
        self._skip = False
        if filesystem.is_dir(root):
            self._pending.append(iter(filesystem.list_directory(root)))

    def __iter__(self) -> DirectoryWalker:
        return self

    def __next__(self) -> Path:
        self._descend()
        while self._pending:
            try:
                path = next(self._pending[-1])
            except StopIteration:
                self._pending.pop()
                continue
            if self.skip_hidden and path.last_component.startswith("."):
                continue
            self._last = path
            return path
        raise StopIteration

    def skip_descendants(self) -> None:
        """Do not descend into the most recently yielded directory."""
        self._skip = True

    def _descend(self) -> None:
        last, self._last = self._last, None
        skip, self._skip = self._skip, False
        if last is None or skip:
            return
        if self.filesystem.is_dir(last) and not self.filesystem.is_symlink(last):
            self._pending.append(iter(self.filesystem.list_directory(last)))
