"""Immutable path values and the path algebra.

A Path is a root marker plus a sequence of components. Construction and
every algebra operation are pure: any string is accepted and each
operation returns a new Path. Operations that need ambient state (current
directory, home directory, case sensitivity) or touch the filesystem take
an optional PathContext and fall back to the process-wide default.
"""

from __future__ import annotations

import fnmatch
import functools
import os
import uuid
from typing import TYPE_CHECKING, ClassVar

from pathkit.grammar import (
    CURRENT,
    GRAMMARS,
    HOME_MARKER,
    PARENT,
    SEPARATOR,
    PathGrammar,
    Root,
    RootKind,
    host_grammar,
)
from pathkit.parser import join_components, parse, render, render_internal
from pathkit.types import ParsedPath

if TYPE_CHECKING:
    from collections.abc import Iterable
    from contextlib import AbstractContextManager

    from pathkit.context import PathContext
    from pathkit.walk import DirectoryWalker

__all__ = ["Path", "PosixPath", "WindowsPath", "path_class_for"]


def _resolve_context(context: PathContext | None) -> PathContext:
    """Return the given context or the process-wide default."""
    from pathkit.context import resolve_context

    return resolve_context(context)


def _split_extension(name: str) -> tuple[str, str | None]:
    """Split a component into stem and extension."""
    if name in (CURRENT, PARENT):
        return name, None
    index = name.rfind(".")
    if index <= 0:
        return name, None
    return name[:index], name[index + 1 :] or None


@functools.total_ordering
class Path:
    """An immutable filesystem path.

    Paths compare and hash by their canonical string, case-sensitively,
    regardless of the filesystem's own case policy. Ordering is the
    lexicographic order of the canonical strings.

    ``+`` and ``/`` both append (see :meth:`append`); ``str(path)`` gives
    the display form with ``/`` separators and ``os.fspath(path)`` the
    native form handed to the operating system.

    Example:
        >>> PosixPath("/usr/./local/../bin/swift").normalize()
        PosixPath('/usr/bin/swift')
    """

    __slots__ = ("_parsed", "_string")

    grammar: ClassVar[PathGrammar] = host_grammar()

    def __init__(self, raw: str | os.PathLike[str] = "") -> None:
        """Parse a path string.

        Args:
            raw: Path string, os.PathLike or another Path. Never rejected.
        """
        if isinstance(raw, Path):
            if raw.grammar is self.grammar:
                parsed = raw._parsed
            else:
                parsed = parse(raw.string, self.grammar)
        else:
            parsed = parse(os.fspath(raw), self.grammar)
        self._parsed = parsed
        self._string = render_internal(parsed)

    @classmethod
    def from_components(cls, components: Iterable[str]) -> Path:
        """Build a path from components such as ``["/", "usr", "bin"]``.

        An empty sequence gives ``.``.
        """
        return cls(join_components(components, cls.grammar))

    @classmethod
    def _from_parsed(cls, parsed: ParsedPath) -> Path:
        path = cls.__new__(cls)
        path._parsed = parsed
        path._string = render_internal(parsed)
        return path

    def _build(self, parsed: ParsedPath) -> Path:
        if parsed.root.kind is RootKind.NONE and not parsed.parts:
            parsed = parsed.with_parts((CURRENT,))
        return self._from_parsed(parsed)

    def _coerce(self, other: str | os.PathLike[str]) -> Path:
        if isinstance(other, Path) and other.grammar is self.grammar:
            return other
        return type(self)(other)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def root(self) -> Root:
        return self._parsed.root

    @property
    def parts(self) -> tuple[str, ...]:
        """Components after the root."""
        return self._parsed.parts

    @property
    def string(self) -> str:
        """Display form, always using ``/``."""
        return render(self._parsed)

    @property
    def unified(self) -> str:
        """Canonical POSIX-style form; disk designators appear as ``/C:``."""
        return self._string

    @property
    def native(self) -> str:
        """Form handed to the operating system."""
        return self.grammar.to_native(self.string, self.root)

    @property
    def components(self) -> list[str]:
        """Decomposition with the root token first.

        ``/a/b`` gives ``["/", "a", "b"]``, ``C:/a`` gives ``["C:", "a"]``
        and ``~/a`` gives ``["~", "a"]``.
        """
        if self.root.kind is RootKind.NONE:
            return list(self.parts)
        return [self.root.token, *self.parts]

    @property
    def unified_components(self) -> list[str]:
        """Decomposition of the unified form (``["/", "C:", "a"]``)."""
        if self.root.kind is RootKind.DISK:
            return [SEPARATOR, *self.components]
        return self.components

    @property
    def last_component(self) -> str:
        components = self.components
        return components[-1] if components else ""

    @property
    def last_component_without_extension(self) -> str:
        return _split_extension(self.last_component)[0]

    @property
    def extension(self) -> str | None:
        """Suffix after the final ``.`` of the last component.

        None when there is no suffix: no dot, a leading dot only
        (``.bashrc``), a trailing dot (``archive.``), or ``.``/``..``.
        """
        return _split_extension(self.last_component)[1]

    @property
    def is_absolute(self) -> bool:
        """True when rooted at ``/`` or a disk designator.

        ``~`` paths are relative: they still need resolving against the
        home directory.
        """
        return self.root.is_absolute

    @property
    def is_relative(self) -> bool:
        return not self.is_absolute

    @property
    def is_rooted(self) -> bool:
        """True for absolute paths and ``~`` paths."""
        return self.root.kind is not RootKind.NONE

    @property
    def anchor(self) -> Path:
        """The root alone (``/``, ``C:``, ``~``), or ``.`` for a relative path."""
        return self._build(self._parsed.with_parts(()))

    # ------------------------------------------------------------------
    # Algebra
    # ------------------------------------------------------------------

    def append(self, other: str | os.PathLike[str]) -> Path:
        """Compose two paths left to right.

        A rooted ``other`` replaces this path entirely. Otherwise ``.``
        components are dropped from both sides and each leading ``..`` of
        ``other`` removes the last component of this path. A root is never
        removed; once a relative path runs out of components the ``..`` is
        kept instead.

        Args:
            other: Path to append.

        Returns:
            The composed path.
        """
        other_path = self._coerce(other)
        if other_path.is_rooted:
            return other_path

        left = [part for part in self.parts if part != CURRENT]
        right = [part for part in other_path.parts if part != CURRENT]
        while right and right[0] == PARENT:
            if left and left[-1] != PARENT:
                left.pop()
            elif left or not self.is_absolute:
                break
            right.pop(0)
        return self._build(self._parsed.with_parts(left + right))

    def child(self, name: str) -> Path:
        """Append a directory entry name literally.

        Unlike :meth:`append`, names such as ``~`` or ``..`` get no special
        meaning.
        """
        names = [part for part in self.grammar.unify(name).split(SEPARATOR) if part]
        return self._build(self._parsed.with_parts(self.parts + tuple(names)))

    def normalize(self) -> Path:
        """Resolve ``.`` and ``..`` components without touching the filesystem."""
        if self.root.kind is RootKind.NONE and not self.parts:
            return self
        parts: list[str] = []
        for part in self.parts:
            if part == CURRENT:
                continue
            if part == PARENT:
                if parts and parts[-1] != PARENT:
                    parts.pop()
                    continue
                if self.is_absolute:
                    continue
            parts.append(part)
        return self._build(self._parsed.with_parts(parts))

    def parent(self) -> Path:
        return self.append(PARENT)

    def absolute(self, context: PathContext | None = None) -> Path:
        """Resolve against the home or current directory.

        Absolute paths are returned unchanged. A leading ``~`` is replaced
        by the home directory; any other relative path is appended to the
        current directory.

        Args:
            context: Capabilities supplying the ambient directories.

        Returns:
            An absolute path.
        """
        if self.is_absolute:
            return self
        ctx = _resolve_context(context)
        if self.root.kind is RootKind.HOME:
            return self._expand_home(ctx)
        return self._coerce(ctx.directories.get_current_directory()).append(self)

    def _expand_home(self, ctx: PathContext) -> Path:
        if self.root.kind is not RootKind.HOME:
            return self
        home = self._coerce(ctx.directories.get_home_directory())
        return self._from_parsed(home._parsed.with_parts(home.parts + self.parts))

    def abbreviate(self, context: PathContext | None = None) -> Path:
        """Replace a leading home directory with ``~``.

        Only a prefix ending on a component boundary is replaced. The
        comparison honours the case sensitivity reported for this path.

        Args:
            context: Capabilities supplying home directory and case policy.

        Returns:
            The abbreviated path, or this path if it is not under home.
        """
        ctx = _resolve_context(context)
        home = self._coerce(ctx.directories.get_home_directory()).string
        own = self.string
        if not home or len(own) < len(home):
            return self

        prefix, remainder = own[: len(home)], own[len(home) :]
        if ctx.filesystem_info.is_case_sensitive(self):
            matched = prefix == home
        else:
            matched = prefix.casefold() == home.casefold()
        if not matched:
            return self

        if not remainder:
            return type(self)(HOME_MARKER)
        if remainder.startswith(SEPARATOR):
            return type(self)(HOME_MARKER + remainder)
        if home.endswith(SEPARATOR):
            return type(self)(HOME_MARKER + SEPARATOR + remainder)
        return self

    def match(self, pattern: str) -> bool:
        """Match the display string against a shell-style pattern."""
        return fnmatch.fnmatchcase(self.string, pattern)

    def matches(self, pattern: str | os.PathLike[str], context: PathContext | None = None) -> bool:
        """Pattern-match against another path (the ``~=`` operator).

        True when both are equal, or when both normalize to the same path
        after expanding a leading ``~``.
        """
        other = self._coerce(pattern)
        if self == other:
            return True
        left, right = self, other
        if RootKind.HOME in (self.root.kind, other.root.kind):
            ctx = _resolve_context(context)
            left, right = self._expand_home(ctx), other._expand_home(ctx)
        return left.normalize() == right.normalize()

    # ------------------------------------------------------------------
    # Operators
    # ------------------------------------------------------------------

    def __add__(self, other: object) -> Path:
        if not isinstance(other, (str, os.PathLike)):
            return NotImplemented
        return self.append(other)

    def __radd__(self, other: object) -> Path:
        if not isinstance(other, (str, os.PathLike)):
            return NotImplemented
        return self._coerce(other).append(self)

    __truediv__ = __add__
    __rtruediv__ = __radd__

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self.grammar.name == other.grammar.name and self._string == other._string

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._string < other._string

    def __hash__(self) -> int:
        return hash((self.grammar.name, self._string))

    def __str__(self) -> str:
        return self.string

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.string!r})"

    def __fspath__(self) -> str:
        return self.native

    def __reduce__(self) -> tuple[type[Path], tuple[str]]:
        return type(self), (self.string,)

    # ------------------------------------------------------------------
    # Ambient directories
    # ------------------------------------------------------------------

    @classmethod
    def cwd(cls, context: PathContext | None = None) -> Path:
        """Current working directory."""
        return cls(_resolve_context(context).directories.get_current_directory())

    @classmethod
    def home(cls, context: PathContext | None = None) -> Path:
        return cls(_resolve_context(context).directories.get_home_directory())

    @classmethod
    def temporary(cls, context: PathContext | None = None) -> Path:
        return cls(_resolve_context(context).directories.get_temporary_directory())

    @classmethod
    def unique_temporary(cls, context: PathContext | None = None) -> Path:
        """Create and return a fresh directory under the temporary directory."""
        ctx = _resolve_context(context)
        process_dir = cls.temporary(ctx).child(f"pathkit-{os.getpid()}")
        process_dir.mkpath(ctx)
        path = process_dir.child(uuid.uuid4().hex)
        path.mkdir(ctx)
        return path

    def chdir(self, context: PathContext | None = None) -> AbstractContextManager[Path]:
        """Make this the current directory for the duration of a ``with`` block.

        The previous directory is restored on every exit path.
        """
        return _resolve_context(context).chdir(self)

    # ------------------------------------------------------------------
    # Filesystem
    # ------------------------------------------------------------------

    def exists(self, context: PathContext | None = None) -> bool:
        return _resolve_context(context).filesystem.exists(self)

    def is_dir(self, context: PathContext | None = None) -> bool:
        return _resolve_context(context).filesystem.is_dir(self)

    def is_file(self, context: PathContext | None = None) -> bool:
        return _resolve_context(context).filesystem.is_file(self)

    def is_symlink(self, context: PathContext | None = None) -> bool:
        return _resolve_context(context).filesystem.is_symlink(self)

    def is_readable(self, context: PathContext | None = None) -> bool:
        return _resolve_context(context).filesystem.is_readable(self)

    def is_writable(self, context: PathContext | None = None) -> bool:
        return _resolve_context(context).filesystem.is_writable(self)

    def is_executable(self, context: PathContext | None = None) -> bool:
        return _resolve_context(context).filesystem.is_executable(self)

    def is_deletable(self, context: PathContext | None = None) -> bool:
        return _resolve_context(context).filesystem.is_deletable(self)

    def read_bytes(self, context: PathContext | None = None) -> bytes:
        return _resolve_context(context).filesystem.read_bytes(self)

    def read_text(self, encoding: str = "utf-8", context: PathContext | None = None) -> str:
        return self.read_bytes(context).decode(encoding)

    def write(
        self,
        content: bytes | str,
        encoding: str = "utf-8",
        context: PathContext | None = None,
    ) -> None:
        """Write bytes, or text encoded with ``encoding``, replacing the file."""
        data = content.encode(encoding) if isinstance(content, str) else content
        _resolve_context(context).filesystem.write_bytes(self, data)

    def delete(self, context: PathContext | None = None) -> None:
        """Remove a file, symlink or whole directory tree."""
        _resolve_context(context).filesystem.delete(self)

    def mkdir(self, context: PathContext | None = None) -> None:
        _resolve_context(context).filesystem.mkdir(self)

    def mkpath(self, context: PathContext | None = None) -> None:
        """Create this directory and any missing parents."""
        _resolve_context(context).filesystem.mkdir(self, parents=True, exist_ok=True)

    def move(self, destination: str | os.PathLike[str], context: PathContext | None = None) -> None:
        _resolve_context(context).filesystem.move(self, self._coerce(destination))

    def copy(self, destination: str | os.PathLike[str], context: PathContext | None = None) -> None:
        _resolve_context(context).filesystem.copy(self, self._coerce(destination))

    def link(self, destination: str | os.PathLike[str], context: PathContext | None = None) -> None:
        """Create a hard link to this file at ``destination``."""
        _resolve_context(context).filesystem.link(self, self._coerce(destination))

    def symlink(self, target: str | os.PathLike[str], context: PathContext | None = None) -> None:
        """Create a symbolic link at this path pointing to ``target``."""
        _resolve_context(context).filesystem.symlink(self, self._coerce(target))

    def symlink_destination(self, context: PathContext | None = None) -> Path:
        """Target of this symbolic link.

        Relative targets are resolved against the directory holding the link.
        """
        target = self._coerce(_resolve_context(context).filesystem.read_link(self))
        if target.is_rooted:
            return target
        return self.parent().append(target)

    def children(self, context: PathContext | None = None) -> list[Path]:
        """Immediate entries of this directory."""
        return [self._coerce(child) for child in _resolve_context(context).filesystem.list_directory(self)]

    def iterate_children(
        self, skip_hidden: bool = False, context: PathContext | None = None
    ) -> DirectoryWalker:
        """Depth-first iterator over all descendants."""
        from pathkit.walk import DirectoryWalker

        return DirectoryWalker(self, _resolve_context(context).filesystem, skip_hidden=skip_hidden)

    def recursive_children(self, context: PathContext | None = None) -> list[Path]:
        return list(self.iterate_children(context=context))

    def glob(self, pattern: str, context: PathContext | None = None) -> list[Path]:
        """Expand a wildcard pattern relative to this directory."""
        from pathkit.globbing import glob

        return glob(pattern, base=self, context=context)


class PosixPath(Path):
    """Path using the POSIX grammar on any host."""

    __slots__ = ()

    grammar = GRAMMARS["posix"]


class WindowsPath(Path):
    """Path using the Windows grammar on any host."""

    __slots__ = ()

    grammar = GRAMMARS["windows"]


def path_class_for(grammar_name: str) -> type[Path]:
    """Path class for a grammar name (``auto``, ``posix`` or ``windows``).

    Raises:
        ValueError: If the grammar is not supported.
    """
    classes: dict[str, type[Path]] = {"auto": Path, "posix": PosixPath, "windows": WindowsPath}
    if grammar_name not in classes:
        raise ValueError(f"Unknown grammar: {grammar_name}. Supported: {list(classes)}")
    return classes[grammar_name]
