"""Tests for CLI commands using context injection.

Commands accept a _context (or _config) parameter for dependency injection,
so they can be exercised without touching the user's settings or home.
"""

from __future__ import annotations

import pathlib

import pytest
import typer
from typer.testing import CliRunner

from pathkit import __version__, cli
from pathkit.config import ConfigManager, Settings
from pathkit.context import PathContext
from pathkit.errors import PathPermissionError
from pathkit.path import Path


@pytest.fixture
def posix_context(fake_context: PathContext) -> PathContext:
    """Fake context parsing arguments with the POSIX grammar."""
    fake_context.settings = Settings(grammar="posix")
    return fake_context


def _lines(capsys: pytest.CaptureFixture[str]) -> list[str]:
    return capsys.readouterr().out.splitlines()


class TestAlgebraCommands:
    """Tests for commands that only compute paths."""

    def test_normalize(self, posix_context: PathContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test normalize prints the normalized path."""
        cli.normalize(path="/usr/./local/../bin/swift", _context=posix_context)

        assert _lines(capsys) == ["/usr/bin/swift"]

    def test_absolute(self, posix_context: PathContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test absolute resolves against the injected directories."""
        cli.absolute(path="~/notes", _context=posix_context)
        cli.absolute(path="src/../docs", normalized=True, _context=posix_context)

        assert _lines(capsys) == ["/home/alice/notes", "/work/docs"]

    def test_abbreviate(self, posix_context: PathContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test abbreviate replaces the home prefix."""
        cli.abbreviate(path="/home/alice/notes", _context=posix_context)

        assert _lines(capsys) == ["~/notes"]

    def test_components(self, posix_context: PathContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test components prints one component per line."""
        cli.components(path="/a/b/c.d", _context=posix_context)

        assert _lines(capsys) == ["/", "a", "b", "c.d"]

    def test_join(self, posix_context: PathContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test join appends left to right."""
        cli.join(base="a/b/c", others=["../d", "e"], _context=posix_context)

        assert _lines(capsys) == ["a/b/d/e"]

    def test_windows_grammar(self, fake_context: PathContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test the configured grammar decides how arguments are parsed."""
        fake_context.settings = Settings(grammar="windows")

        cli.join(base="C:\\Users", others=["..\\Public"], _context=fake_context)

        assert _lines(capsys) == ["C:/Public"]

    def test_info(self, posix_context: PathContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test info shows the decomposition."""
        cli.info(path="/a/b/c.tar.gz", _context=posix_context)

        output = capsys.readouterr().out
        assert "Extension" in output
        assert "gz" in output
        assert "c.tar" in output

    def test_info_with_brackets(self, posix_context: PathContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test bracket characters in a path are shown literally."""
        cli.info(path="a/[/x]", _context=posix_context)

        assert "a/[/x]" in capsys.readouterr().out

    def test_match_success(self, posix_context: PathContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test a matching path reports success."""
        cli.match(path="/home/alice/..", pattern="~/..", _context=posix_context)

        assert "matches" in capsys.readouterr().out

    def test_match_failure(self, posix_context: PathContext) -> None:
        """Test a non-matching path exits with status 1."""
        with pytest.raises(typer.Exit) as exc_info:
            cli.match(path="/var", pattern="~", _context=posix_context)

        assert exc_info.value.exit_code == 1

    def test_match_fnmatch(self, posix_context: PathContext, capsys: pytest.CaptureFixture[str]) -> None:
        """Test --fnmatch uses shell-style patterns."""
        cli.match(path="/a/b.txt", pattern="*.txt", use_fnmatch=True, _context=posix_context)

        assert "matches" in capsys.readouterr().out


class TestFilesystemCommands:
    """Tests for commands that read the filesystem."""

    def test_glob(
        self, fixtures: Path, real_context: PathContext, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test glob prints sorted matches."""
        cli.glob_command(pattern="permissions/*able", base=fixtures.string, _context=real_context)

        lines = _lines(capsys)
        assert len(lines) == 4
        assert lines == sorted(lines)
        assert lines[0].endswith("deletable")

    def test_glob_no_matches(
        self, fixtures: Path, real_context: PathContext, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test glob reports an empty result."""
        cli.glob_command(pattern="*.swift", base=fixtures.string, _context=real_context)

        assert "No matches" in capsys.readouterr().out

    def test_glob_bracket_pattern_without_matches(
        self, posix_context: PathContext, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test bracket characters in an unmatched pattern are printed literally."""
        cli.glob_command(pattern="/nope/[ab]z", _context=posix_context)
        cli.glob_command(pattern="/nope/x[/]y", _context=posix_context)

        output = capsys.readouterr().out
        assert "No matches for /nope/[ab]z" in output
        assert "No matches for /nope/x[/]y" in output

    def test_glob_error(self, posix_context: PathContext) -> None:
        """Test listing failures exit with status 1."""
        posix_context.filesystem.is_dir.return_value = True
        posix_context.filesystem.list_directory.side_effect = PathPermissionError("denied", "/")

        with pytest.raises(typer.Exit) as exc_info:
            cli.glob_command(pattern="/*", _context=posix_context)

        assert exc_info.value.exit_code == 1

    def test_ls(
        self, fixtures: Path, real_context: PathContext, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test ls hides dot entries by default."""
        cli.list_children(path=(fixtures + "directory").string, _context=real_context)

        names = [line.rsplit("/", 1)[-1] for line in _lines(capsys)]
        assert names == ["child", "subdirectory"]

    def test_ls_all_recursive(
        self, fixtures: Path, real_context: PathContext, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test ls --all --recursive lists every descendant."""
        cli.list_children(
            path=(fixtures + "directory").string,
            recursive=True,
            show_all=True,
            _context=real_context,
        )

        assert len(_lines(capsys)) == 4

    def test_ls_missing(self, fixtures: Path, real_context: PathContext) -> None:
        """Test listing a missing directory exits with status 1."""
        with pytest.raises(typer.Exit) as exc_info:
            cli.list_children(path=(fixtures + "missing").string, _context=real_context)

        assert exc_info.value.exit_code == 1


class TestConfigCommands:
    """Tests for the config sub-commands."""

    def test_show(self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test config show prints the settings."""
        manager = ConfigManager.create(tmp_path)

        cli.config_show(_config=manager)

        output = capsys.readouterr().out
        assert "Grammar: auto" in output
        assert "Case sensitive: probe" in output

    def test_set(self, tmp_path: pathlib.Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test config set persists the value."""
        manager = ConfigManager.create(tmp_path)

        cli.config_set(key="include-hidden", value="true", _config=manager)

        assert manager.load().include_hidden is True
        assert "Set include-hidden to true" in capsys.readouterr().out

    def test_set_invalid(self, tmp_path: pathlib.Path) -> None:
        """Test invalid values exit with status 1."""
        manager = ConfigManager.create(tmp_path)

        with pytest.raises(typer.Exit) as exc_info:
            cli.config_set(key="grammar", value="vms", _config=manager)

        assert exc_info.value.exit_code == 1

    def test_show_invalid_file(self, tmp_path: pathlib.Path) -> None:
        """Test a broken settings file exits with status 1."""
        (tmp_path / "config.yaml").write_text("- not a mapping\n")

        with pytest.raises(typer.Exit) as exc_info:
            cli.config_show(_config=ConfigManager.create(tmp_path))

        assert exc_info.value.exit_code == 1


class TestApp:
    """Tests for the Typer application."""

    def test_version(self) -> None:
        """Test --version prints the version."""
        result = CliRunner().invoke(cli.app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_version_short_flag(self) -> None:
        """Test -v is the short form of --version."""
        result = CliRunner().invoke(cli.app, ["-v"])

        assert result.exit_code == 0
        assert __version__ in result.output
