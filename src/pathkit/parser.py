"""Conversion between path strings and component sequences.

Every string is accepted. Redundant and trailing separators are dropped;
everything else survives a parse/render round trip.

Windows strings are unified into POSIX-style form first: backslashes
become ``/`` and a leading disk designator is folded into the root, so
``C:\\Windows`` is handled as ``/C:/Windows``.
"""

from __future__ import annotations

from collections.abc import Iterable

from pathkit.grammar import (
    HOME_MARKER,
    SEPARATOR,
    PathGrammar,
    Root,
    RootKind,
    is_disk_designator,
)
from pathkit.types import ParsedPath

__all__ = [
    "join_components",
    "parse",
    "render",
    "render_internal",
    "to_unix_path",
]


def parse(raw: str, grammar: PathGrammar) -> ParsedPath:
    """Parse a path string into its root and components.

    Args:
        raw: Path string in any accepted separator style.
        grammar: Grammar deciding separators and designator support.

    Returns:
        ParsedPath for the string. Never raises.
    """
    unified = grammar.unify(raw)
    segments = unified.split(SEPARATOR)
    first = segments[0]

    if grammar.supports_disk_designators and is_disk_designator(first):
        root, rest = Root.disk(first), segments[1:]
    elif unified.startswith(SEPARATOR):
        rest = segments[1:]
        # Unified form of a Windows path: "/C:/Windows"
        if grammar.supports_disk_designators and rest and is_disk_designator(rest[0]):
            root, rest = Root.disk(rest[0]), rest[1:]
        else:
            root = Root(RootKind.POSIX)
    elif first == HOME_MARKER:
        root, rest = Root(RootKind.HOME), segments[1:]
    else:
        root, rest = Root(), segments

    return ParsedPath(root, tuple(segment for segment in rest if segment))


def render(parsed: ParsedPath) -> str:
    """Render the display string of a parsed path.

    Disk designators are shown without the unification prefix
    (``C:/Windows``); separators are always ``/``.
    """
    body = SEPARATOR.join(parsed.parts)
    kind = parsed.root.kind
    if kind is RootKind.POSIX:
        return SEPARATOR + body
    if kind is RootKind.NONE:
        return body
    token = parsed.root.token
    return f"{token}{SEPARATOR}{body}" if body else token


def render_internal(parsed: ParsedPath) -> str:
    """Render the unified POSIX-style string used for equality and ordering."""
    display = render(parsed)
    if parsed.root.kind is RootKind.DISK:
        return SEPARATOR + display
    return display


def join_components(components: Iterable[str], grammar: PathGrammar) -> str:
    """Join components into a path string ready for parsing.

    An empty sequence yields ``.``. A leading ``/`` followed by more
    components is not doubled, and a leading disk designator gets the
    unification prefix.

    Args:
        components: Components such as ``["/", "usr", "bin"]``.
        grammar: Grammar used to recognize designators.

    Returns:
        Joined path string.
    """
    items = list(components)
    if not items:
        return "."
    if grammar.supports_disk_designators and is_disk_designator(items[0]):
        items.insert(0, SEPARATOR)
    if items[0] == SEPARATOR and len(items) > 1:
        return SEPARATOR + SEPARATOR.join(items[1:])
    return SEPARATOR.join(items)


def to_unix_path(raw: str, grammar: PathGrammar) -> str:
    """Convert a platform path string to its unified POSIX-style form.

    Example:
        >>> from pathkit.grammar import get_grammar
        >>> to_unix_path("c:\\\\Temp\\\\", get_grammar("windows"))
        '/c:/Temp'
    """
    return render_internal(parse(raw, grammar))
