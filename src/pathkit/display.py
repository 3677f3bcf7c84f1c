"""Rich console output for the command line."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

if TYPE_CHECKING:
    from pathkit.config import Settings
    from pathkit.path import Path


class Display:
    """Console rendering for pathkit commands (non-interactive)."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize display.

        Args:
            console: Console to print to. Defaults to standard output.
        """
        self.console = console or Console()

    def show_path(self, path: Path) -> None:
        """Print one path verbatim, without markup or wrapping."""
        self.console.print(str(path), markup=False, highlight=False, soft_wrap=True)

    def show_paths(self, paths: Iterable[Path], empty_message: str = "No paths") -> None:
        """Print paths one per line.

        Args:
            paths: Paths to print.
            empty_message: Shown when there is nothing to print.
        """
        items = list(paths)
        if not items:
            self.console.print(f"[yellow]{escape(empty_message)}[/yellow]")
            return
        for path in items:
            self.show_path(path)

    def show_info(self, path: Path) -> None:
        """Display the decomposition of a path.

        Args:
            path: Path to describe.
        """
        table = Table(title="Path", show_header=False)
        table.add_column("Property", style="cyan")
        table.add_column("Value")

        extension = path.extension
        rows = [
            ("String", path.string),
            ("Native", path.native),
            ("Components", ", ".join(path.components) or "-"),
            ("Last component", path.last_component or "-"),
            ("Stem", path.last_component_without_extension or "-"),
            ("Extension", extension if extension is not None else "-"),
            ("Absolute", "yes" if path.is_absolute else "no"),
            ("Normalized", path.normalize().string),
            ("Parent", path.parent().string),
        ]
        for name, value in rows:
            table.add_row(name, Text(value))

        self.console.print(table)

    def show_settings(self, settings: Settings, config_file: str) -> None:
        """Display current settings.

        Args:
            settings: Loaded settings.
            config_file: Location of the settings file.
        """
        case_policy = "probe" if settings.case_sensitive is None else str(settings.case_sensitive).lower()
        self.console.print("\n[bold]Configuration[/bold]")
        self.console.print(f"  Config file: {config_file}", markup=False)
        self.console.print(f"  Grammar: {settings.grammar}")
        self.console.print(f"  Case sensitive: {case_policy}")
        self.console.print(f"  Include hidden: {str(settings.include_hidden).lower()}")
        self.console.print(f"  Log level: {settings.log_level}")

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]\u2713[/green] {escape(message)}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]\u2717[/red] {escape(message)}")
