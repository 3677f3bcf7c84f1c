"""Component model and platform path grammars.

A grammar knows which separators a platform accepts, whether disk
designators exist, and how the unified POSIX-style form maps back to the
string the operating system expects. All path algebra runs on the unified
form, so the grammars only differ at the edges.

Pattern: Template Method - PathGrammar implements the shared steps,
subclasses supply separators and designator support.
"""

from __future__ import annotations

import os
from abc import ABC
from dataclasses import dataclass
from enum import Enum

SEPARATOR = "/"
HOME_MARKER = "~"
CURRENT = "."
PARENT = ".."

__all__ = [
    "CURRENT",
    "HOME_MARKER",
    "PARENT",
    "SEPARATOR",
    "GRAMMARS",
    "PathGrammar",
    "PosixGrammar",
    "Root",
    "RootKind",
    "WindowsGrammar",
    "get_grammar",
    "host_grammar",
    "is_disk_designator",
]


class RootKind(Enum):
    """What anchors a path."""

    NONE = "none"
    POSIX = "posix"
    DISK = "disk"
    HOME = "home"


@dataclass(frozen=True)
class Root:
    """Root component of a path.

    Attributes:
        kind: Which root syntax anchors the path.
        designator: Disk designator (e.g. ``C:``) when kind is DISK.
    """

    kind: RootKind = RootKind.NONE
    designator: str = ""

    @classmethod
    def disk(cls, designator: str) -> Root:
        """Create a disk designator root."""
        return cls(RootKind.DISK, designator)

    @property
    def token(self) -> str:
        """Component used for this root in the public decomposition."""
        if self.kind is RootKind.POSIX:
            return SEPARATOR
        if self.kind is RootKind.DISK:
            return self.designator
        if self.kind is RootKind.HOME:
            return HOME_MARKER
        return ""

    @property
    def is_absolute(self) -> bool:
        """True for roots that anchor a path without further resolution."""
        return self.kind in (RootKind.POSIX, RootKind.DISK)


def is_disk_designator(value: str) -> bool:
    """Check whether a string is exactly a disk designator such as ``C:``.

    Args:
        value: Candidate component.

    Returns:
        True if value is one ASCII letter followed by a colon.
    """
    return len(value) == 2 and value[1] == ":" and value[0].isascii() and value[0].isalpha()


class PathGrammar(ABC):
    """Platform-specific separator and root rules."""

    name: str
    native_separator: str
    alternate_separators: tuple[str, ...] = ()
    supports_disk_designators: bool = False

    def unify(self, raw: str) -> str:
        """Replace every accepted separator with ``/``.

        Args:
            raw: String as supplied by the caller.

        Returns:
            The string using only the unified separator.
        """
        for separator in (self.native_separator, *self.alternate_separators):
            if separator != SEPARATOR:
                raw = raw.replace(separator, SEPARATOR)
        return raw

    def to_native(self, display: str, root: Root) -> str:
        """Convert a display string into the form handed to the OS.

        Args:
            display: Display rendering of a path.
            root: Root of the same path.

        Returns:
            String using the native separator.
        """
        if self.native_separator == SEPARATOR:
            return display
        native = display.replace(SEPARATOR, self.native_separator)
        if root.kind is RootKind.DISK and native == root.designator:
            # A bare designator means "current directory on that drive".
            native += self.native_separator
        return native

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class PosixGrammar(PathGrammar):
    """Paths rooted at ``/``."""

    name = "posix"
    native_separator = "/"


class WindowsGrammar(PathGrammar):
    """Paths rooted at a disk designator, accepting both separators."""

    name = "windows"
    native_separator = "\\"
    alternate_separators = ("/",)
    supports_disk_designators = True


GRAMMARS: dict[str, PathGrammar] = {
    "posix": PosixGrammar(),
    "windows": WindowsGrammar(),
}


def get_grammar(name: str) -> PathGrammar:
    """Get a grammar by name.

    Args:
        name: Grammar name (posix, windows) or ``auto`` for the host grammar.

    Returns:
        Grammar instance.

    Raises:
        ValueError: If the grammar is not supported.
    """
    if name == "auto":
        return host_grammar()
    if name not in GRAMMARS:
        raise ValueError(f"Unknown grammar: {name}. Supported: {['auto', *GRAMMARS]}")
    return GRAMMARS[name]


def host_grammar() -> PathGrammar:
    """Grammar of the running platform."""
    return GRAMMARS["windows"] if os.name == "nt" else GRAMMARS["posix"]
