"""Wildcard expansion over path components.

A pattern is split into components like any other path. Literal
components are appended without consulting the filesystem; each wildcard
component lists the directory resolved so far and recurses into every
matching entry.
"""

from __future__ import annotations

import fnmatch
import logging
import os
import re
from typing import TYPE_CHECKING

from pathkit.context import resolve_context

if TYPE_CHECKING:
    from pathkit.context import PathContext
    from pathkit.path import Path
    from pathkit.protocols import FileSystem

logger = logging.getLogger(__name__)

_MAGIC = re.compile(r"[*?\[]")


def has_magic(component: str) -> bool:
    """Check whether a component needs matching rather than direct lookup."""
    return _MAGIC.search(component) is not None


class GlobEngine:
    """Expands absolute wildcard paths against a filesystem."""

    def __init__(self, filesystem: FileSystem, include_hidden: bool = False) -> None:
        """Initialize the engine.

        Args:
            filesystem: Capability used for listing and existence checks.
            include_hidden: Let wildcards match names starting with a dot.
        """
        self.filesystem = filesystem
        self.include_hidden = include_hidden

    def expand(self, pattern: Path) -> list[Path]:
        """Expand an absolute, normalized pattern path.

        Args:
            pattern: Pattern whose components may contain wildcards.

        Returns:
            Matching paths. Empty when nothing matches.
        """
        results: list[Path] = []
        self._expand(pattern.anchor, list(pattern.parts), results, verified=True)
        logger.debug("Pattern %s matched %d path(s)", pattern, len(results))
        return results

    def _expand(self, current: Path, remaining: list[str], results: list[Path], verified: bool) -> None:
        if not remaining:
            if verified or self.filesystem.exists(current):
                results.append(current)
            return

        component, rest = remaining[0], remaining[1:]
        if not has_magic(component):
            self._expand(current.child(component), rest, results, verified=False)
            return

        if not self.filesystem.is_dir(current):
            return
        for entry in self.filesystem.list_directory(current):
            name = entry.last_component
            if self._hidden(name, component):
                continue
            if fnmatch.fnmatchcase(name, component):
                self._expand(entry, rest, results, verified=True)

    def _hidden(self, name: str, component: str) -> bool:
        if self.include_hidden:
            return False
        return name.startswith(".") and not component.startswith(".")


def glob(
    pattern: str | os.PathLike[str],
    base: Path | None = None,
    context: PathContext | None = None,
) -> list[Path]:
    """Expand a wildcard pattern into existing paths.

    Args:
        pattern: Pattern such as ``src/*/test_*.py``. Relative patterns are
            resolved against ``base``.
        base: Directory the pattern is relative to. Defaults to the current
            directory.
        context: Capabilities to use. Defaults to the process-wide context.

    Returns:
        Absolute, normalized paths. Order follows the directory listings;
        sort before comparing.

    Raises:
        FileSystemError: If listing a directory fails.
    """
    ctx = resolve_context(context)
    if base is None:
        base = ctx.directories.get_current_directory()
    target = base.append(pattern).absolute(ctx).normalize()
    engine = GlobEngine(ctx.filesystem, include_hidden=ctx.settings.include_hidden)
    return engine.expand(target)
