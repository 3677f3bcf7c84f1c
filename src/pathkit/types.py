"""Shared data types for pathkit."""

from __future__ import annotations

from dataclasses import dataclass

from pathkit.grammar import SEPARATOR, Root

__all__ = ["ParsedPath"]


@dataclass(frozen=True)
class ParsedPath:
    """A path decomposed into its root and remaining components.

    Attributes:
        root: Root marker (none, POSIX root, disk designator or home).
        parts: Components after the root, in order.
    """

    root: Root
    parts: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants."""
        for part in self.parts:
            if not part:
                raise ValueError("path components cannot be empty")
            if SEPARATOR in part:
                raise ValueError(f"path component contains a separator: {part!r}")

    def with_parts(self, parts: tuple[str, ...] | list[str]) -> ParsedPath:
        """Return a copy sharing the root with different components."""
        return ParsedPath(self.root, tuple(parts))
