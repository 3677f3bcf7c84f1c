"""CLI commands using Typer."""

from __future__ import annotations

import logging
from functools import reduce
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.logging import RichHandler

from pathkit import __version__
from pathkit.config import ConfigManager
from pathkit.context import create_context
from pathkit.display import Display
from pathkit.errors import ConfigError, FileSystemError
from pathkit.globbing import glob
from pathkit.path import path_class_for

if TYPE_CHECKING:
    from pathkit.context import PathContext
    from pathkit.path import Path

app = typer.Typer(
    name="pathkit",
    help="Cross-platform path algebra toolkit",
    no_args_is_help=True,
)

config_app = typer.Typer(help="Configuration commands")

app.add_typer(config_app, name="config")

console = Console()
display = Display(console)

_verbose = False


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"pathkit v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log debug output")] = False,
) -> None:
    """Cross-platform path algebra toolkit."""
    global _verbose
    _verbose = verbose
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


# ============================================================================
# Helpers
# ============================================================================


def _get_context(context: PathContext | None) -> PathContext:
    """Return the injected context or build one from the settings file.

    Raises:
        typer.Exit: If the settings file is invalid.
    """
    if context is not None:
        return context
    try:
        ctx = create_context()
    except ConfigError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e
    if not _verbose:
        logging.getLogger("pathkit").setLevel(ctx.settings.log_level)
    return ctx


def _make_path(ctx: PathContext, raw: str) -> Path:
    """Parse a command line argument with the configured grammar."""
    return path_class_for(ctx.settings.grammar)(raw)


# ============================================================================
# Path Algebra Commands
# ============================================================================


@app.command("normalize")
def normalize(
    path: Annotated[str, typer.Argument(help="Path to normalize")],
    _context=None,
) -> None:
    """Resolve '.' and '..' components without touching the filesystem."""
    ctx = _get_context(_context)
    display.show_path(_make_path(ctx, path).normalize())


@app.command("absolute")
def absolute(
    path: Annotated[str, typer.Argument(help="Path to resolve")],
    normalized: Annotated[
        bool, typer.Option("--normalize", "-n", help="Normalize the result")
    ] = False,
    _context=None,
) -> None:
    """Resolve a path against the home or current directory."""
    ctx = _get_context(_context)
    try:
        result = _make_path(ctx, path).absolute(ctx)
    except FileSystemError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e
    display.show_path(result.normalize() if normalized else result)


@app.command("abbreviate")
def abbreviate(
    path: Annotated[str, typer.Argument(help="Path to abbreviate")],
    _context=None,
) -> None:
    """Replace a leading home directory with '~'."""
    ctx = _get_context(_context)
    display.show_path(_make_path(ctx, path).abbreviate(ctx))


@app.command("components")
def components(
    path: Annotated[str, typer.Argument(help="Path to split")],
    _context=None,
) -> None:
    """Print each component of a path on its own line."""
    ctx = _get_context(_context)
    for component in _make_path(ctx, path).components:
        console.print(component, markup=False, highlight=False)


@app.command("join")
def join(
    base: Annotated[str, typer.Argument(help="Base path")],
    others: Annotated[list[str], typer.Argument(help="Paths appended left to right")],
    _context=None,
) -> None:
    """Append paths left to right."""
    ctx = _get_context(_context)
    result = reduce(lambda left, right: left.append(right), others, _make_path(ctx, base))
    display.show_path(result)


@app.command("info")
def info(
    path: Annotated[str, typer.Argument(help="Path to describe")],
    _context=None,
) -> None:
    """Show the decomposition of a path."""
    ctx = _get_context(_context)
    display.show_info(_make_path(ctx, path))


@app.command("match")
def match(
    path: Annotated[str, typer.Argument(help="Path to test")],
    pattern: Annotated[str, typer.Argument(help="Path or shell pattern")],
    use_fnmatch: Annotated[
        bool, typer.Option("--fnmatch", "-f", help="Treat pattern as a shell-style wildcard")
    ] = False,
    _context=None,
) -> None:
    """Check whether a path matches a pattern (exit status 1 if not)."""
    ctx = _get_context(_context)
    subject = _make_path(ctx, path)
    matched = subject.match(pattern) if use_fnmatch else subject.matches(pattern, ctx)
    if not matched:
        display.show_error(f"{subject} does not match {pattern}")
        raise typer.Exit(1)
    display.show_success(f"{subject} matches {pattern}")


# ============================================================================
# Filesystem Commands
# ============================================================================


@app.command("glob")
def glob_command(
    pattern: Annotated[str, typer.Argument(help="Wildcard pattern")],
    base: Annotated[
        str | None, typer.Option("--base", "-b", help="Directory the pattern is relative to")
    ] = None,
    _context=None,
) -> None:
    """Expand a wildcard pattern into existing paths."""
    ctx = _get_context(_context)
    base_path = _make_path(ctx, base) if base else None
    try:
        matches = glob(pattern, base=base_path, context=ctx)
    except FileSystemError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e
    display.show_paths(sorted(matches), empty_message=f"No matches for {pattern}")


@app.command("ls")
def list_children(
    path: Annotated[str, typer.Argument(help="Directory to list")] = ".",
    recursive: Annotated[bool, typer.Option("--recursive", "-r", help="Include descendants")] = False,
    show_all: Annotated[bool, typer.Option("--all", "-a", help="Include hidden entries")] = False,
    _context=None,
) -> None:
    """List the entries of a directory."""
    ctx = _get_context(_context)
    directory = _make_path(ctx, path)
    try:
        if recursive:
            entries = list(directory.iterate_children(skip_hidden=not show_all, context=ctx))
        else:
            entries = [
                child
                for child in directory.children(ctx)
                if show_all or not child.last_component.startswith(".")
            ]
    except FileSystemError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e
    display.show_paths(sorted(entries), empty_message=f"{directory} is empty")


# ============================================================================
# Config Commands
# ============================================================================


@config_app.command("show")
def config_show(
    _config=None,
) -> None:
    """Show current configuration."""
    manager = _config or ConfigManager.create_default()
    try:
        settings = manager.load()
    except ConfigError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e
    display.show_settings(settings, str(manager.config_file))


@config_app.command("set")
def config_set(
    key: Annotated[str, typer.Argument(help="Configuration key")],
    value: Annotated[str, typer.Argument(help="Configuration value")],
    _config=None,
) -> None:
    """Set a configuration value."""
    manager = _config or ConfigManager.create_default()
    try:
        manager.set_value(key, value)
    except ConfigError as e:
        display.show_error(str(e))
        raise typer.Exit(1) from e
    display.show_success(f"Set {key} to {value}")
