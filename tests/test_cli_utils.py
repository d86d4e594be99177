"""Tests for transcheck CLI utility functions."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
import typer
from rich.logging import RichHandler
from typer.testing import CliRunner

from transcheck.cli_utils import (
    EXIT_SUCCESS,
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    configure_logging,
    error,
    resolve_paths,
    split_names,
    warning,
    wire_config,
)
from transcheck.config import TranscheckConfig

# Default CliRunner - note that stderr is mixed into stdout by default
runner = CliRunner()


class TestErrorFormatting:
    """Tests for error formatting helpers."""

    def test_error_exits_with_user_error_code_by_default(self) -> None:
        """Test that error() exits with EXIT_USER_ERROR by default."""
        app = typer.Typer()

        @app.command()
        def cmd() -> None:
            error("Test error message")

        result = runner.invoke(app, [])
        assert result.exit_code == EXIT_USER_ERROR
        assert "Error:" in result.output
        assert "Test error message" in result.output

    def test_error_exits_with_custom_exit_code(self) -> None:
        """Test that error() can use a custom exit code."""
        app = typer.Typer()

        @app.command()
        def cmd() -> None:
            error("System error", exit_code=EXIT_SYSTEM_ERROR)

        result = runner.invoke(app, [])
        assert result.exit_code == EXIT_SYSTEM_ERROR

    def test_warning_does_not_exit(self) -> None:
        """Test that warning() does not exit the program."""
        app = typer.Typer()

        @app.command()
        def cmd() -> None:
            warning("This is a warning")
            typer.echo("Continued execution")

        result = runner.invoke(app, [])
        assert result.exit_code == EXIT_SUCCESS
        assert "Warning:" in result.output
        assert "Continued execution" in result.output


class TestSplitNames:
    """Tests for comma-separated option parsing."""

    def test_not_given(self) -> None:
        """Test that missing options stay None."""
        assert split_names(None) is None
        assert split_names([]) is None

    def test_comma_separated_and_repeated(self) -> None:
        """Test comma-separated and repeated values are flattened."""
        assert split_names(["mismatch, encoding", "key-count"]) == ["mismatch", "encoding", "key-count"]

    def test_empty_names_dropped(self) -> None:
        """Test stray commas do not produce empty names."""
        assert split_names(["mismatch,,", ","]) == ["mismatch"]


class TestResolvePaths:
    """Tests for path resolution."""

    def test_relative_paths_use_base(self, tmp_path: Path) -> None:
        """Test relative paths are joined to the base path."""
        assert resolve_paths(["translations"], tmp_path) == [tmp_path / "translations"]

    def test_absolute_paths_kept(self, tmp_path: Path) -> None:
        """Test absolute paths are returned unchanged."""
        absolute = tmp_path / "lang"
        assert resolve_paths([str(absolute)], Path("/elsewhere")) == [absolute]

    def test_default_base_is_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test the working directory is the default base."""
        monkeypatch.chdir(tmp_path)
        assert resolve_paths(["translations"]) == [Path.cwd() / "translations"]


class TestWireConfig:
    """Tests for wiring CLI options into the configuration."""

    def test_defaults(self, tmp_path: Path) -> None:
        """Test no options yields the default configuration."""
        assert wire_config(start_dir=tmp_path) == TranscheckConfig()

    def test_options_override(self, tmp_path: Path) -> None:
        """Test given options are applied."""
        config = wire_config(
            paths=["translations"],
            only=["mismatch"],
            file_detector="suffix",
            dry_run=True,
            output_format="json",
            verbose=2,
            start_dir=tmp_path,
        )
        assert config.paths == ["translations"]
        assert config.only == ["mismatch"]
        assert config.file_detector == "suffix"
        assert config.dry_run is True
        assert config.format == "json"
        assert config.verbose == 2

    def test_unset_flags_keep_file_values(self, tmp_path: Path) -> None:
        """Test flags left at None do not override the config file."""
        (tmp_path / "transcheck.yaml").write_text("strict: true\n")

        config = wire_config(strict=None, start_dir=tmp_path)
        assert config.strict is True

    def test_invalid_configuration_exits(self, tmp_path: Path) -> None:
        """Test invalid values exit with EXIT_USER_ERROR."""
        with pytest.raises(typer.Exit) as exc_info:
            wire_config(output_format="xml", start_dir=tmp_path)
        assert exc_info.value.exit_code == EXIT_USER_ERROR


class TestConfigureLogging:
    """Tests for log routing."""

    @pytest.fixture(autouse=True)
    def _restore_logger(self) -> Generator[None, None, None]:
        logger = logging.getLogger("transcheck")
        handlers = list(logger.handlers)
        level = logger.level
        yield
        logger.handlers = handlers
        logger.setLevel(level)

    @pytest.mark.parametrize(
        ("verbose", "level"),
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_levels(self, verbose: int, level: int) -> None:
        """Test each -v raises the log verbosity."""
        configure_logging(verbose)
        assert logging.getLogger("transcheck").level == level

    def test_single_rich_handler(self) -> None:
        """Test repeated setup does not stack handlers."""
        configure_logging(0)
        configure_logging(1)
        handlers = [h for h in logging.getLogger("transcheck").handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
