"""CLI utility functions for transcheck.

Provides helper functions for:
- Config wiring: Extracting Typer CLI options and passing to load_config
- Logging setup: Routing library logs to stderr through rich
- Error formatting: Consistent user-friendly error messages with exit codes
- Option parsing: Comma-separated validator lists
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

from transcheck.config import TranscheckConfig, load_config

# Exit code conventions
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # User error (bad input, unknown validator, invalid config)
EXIT_SYSTEM_ERROR = 2  # System error (permissions, I/O, etc.)

# Log level per --verbose count
_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


# -----------------------------------------------------------------------------
# Error Formatting Helpers
# -----------------------------------------------------------------------------


def error(msg: str, *, exit_code: int = EXIT_USER_ERROR) -> NoReturn:
    """Print an error message and exit with the given exit code.

    Args:
        msg: The error message to display.
        exit_code: Exit code to use (default: EXIT_USER_ERROR=1).

    Raises:
        typer.Exit: Always raises to exit the program.
    """
    styled_prefix = typer.style("Error:", fg=typer.colors.RED, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)
    raise typer.Exit(code=exit_code)


def warning(msg: str) -> None:
    """Print a warning message to stderr.

    Args:
        msg: The warning message to display.
    """
    styled_prefix = typer.style("Warning:", fg=typer.colors.YELLOW, bold=True)
    typer.echo(f"{styled_prefix} {msg}", err=True)


# -----------------------------------------------------------------------------
# Logging
# -----------------------------------------------------------------------------


def configure_logging(verbose: int = 0) -> None:
    """Route transcheck logs to stderr through a rich handler.

    Args:
        verbose: 0 shows warnings, 1 adds info, 2 or more adds debug.
    """
    level = _LOG_LEVELS[min(max(verbose, 0), len(_LOG_LEVELS) - 1)]
    logger = logging.getLogger("transcheck")
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbose > 1,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)


# -----------------------------------------------------------------------------
# Option Parsing
# -----------------------------------------------------------------------------


def split_names(values: Iterable[str] | None) -> list[str] | None:
    """Split repeatable, comma-separated option values into names.

    Example:
        >>> split_names(["mismatch,encoding", "key-count"])
        ['mismatch', 'encoding', 'key-count']

    Returns:
        The names, or None when the option was not given.
    """
    if not values:
        return None
    names = [name.strip() for value in values for name in value.split(",")]
    return [name for name in names if name]


def resolve_paths(paths: Iterable[str], base_path: Path | None = None) -> list[Path]:
    """Resolve paths relative to a base directory (default: cwd)."""
    base = base_path or Path.cwd()
    return [Path(p) if Path(p).is_absolute() else base / p for p in paths]


# -----------------------------------------------------------------------------
# Config Wiring Helper
# -----------------------------------------------------------------------------


def wire_config(
    paths: list[str] | None = None,
    only: list[str] | None = None,
    skip: list[str] | None = None,
    exclude: list[str] | None = None,
    file_detector: str | None = None,
    strict: bool | None = None,
    dry_run: bool | None = None,
    recursive: bool | None = None,
    output_format: str | None = None,
    verbose: int | None = None,
    config_file: Path | None = None,
    start_dir: Path | None = None,
) -> TranscheckConfig:
    """Wire CLI options to load_config with appropriate overrides.

    Options left at None (flags not given) do not override lower
    precedence sources.

    Args:
        paths: Paths to validate.
        only: Validators to run exclusively.
        skip: Validators to skip.
        exclude: File name glob patterns to ignore.
        file_detector: Detector name.
        strict: Fail on warnings.
        dry_run: Never fail on errors.
        recursive: Search subdirectories.
        output_format: Output format name.
        verbose: Verbosity level.
        config_file: Explicit config file.
        start_dir: Directory to start searching for config files.

    Returns:
        Fully resolved TranscheckConfig instance.

    Raises:
        typer.Exit: If configuration is invalid.
    """
    cli_overrides: dict[str, Any] = {
        "paths": paths,
        "only": only,
        "skip": skip,
        "exclude": exclude,
        "file_detector": file_detector,
        "strict": strict,
        "dry_run": dry_run,
        "recursive": recursive,
        "format": output_format,
        "verbose": verbose,
    }

    try:
        return load_config(cli_overrides=cli_overrides, start_dir=start_dir, config_file=config_file)
    except ValueError as e:
        error(f"Invalid configuration: {e}", exit_code=EXIT_USER_ERROR)


# -----------------------------------------------------------------------------
# Typer Option Factory Functions
# -----------------------------------------------------------------------------
# These factory functions create fresh Typer Option instances for each command.
# This is necessary because Typer consumes Option objects when decorating commands,
# so the same Option instance cannot be reused across multiple commands.


def format_option() -> Any:
    """Create a Typer Option for --format / -f.

    Returns:
        Typer Option with default None and appropriate help text.
    """
    return typer.Option(
        None,
        "--format",
        "-f",
        help="Output format: cli, json or github (default: cli).",
    )


def only_option() -> Any:
    """Create a Typer Option for --only / -o.

    Returns:
        Typer Option with default None and appropriate help text.
    """
    return typer.Option(
        None,
        "--only",
        "-o",
        help="Run only these validators (comma-separated, repeatable).",
    )


def skip_option() -> Any:
    """Create a Typer Option for --skip / -s.

    Returns:
        Typer Option with default None and appropriate help text.
    """
    return typer.Option(
        None,
        "--skip",
        "-s",
        help="Skip these validators (comma-separated, repeatable).",
    )


def exclude_option() -> Any:
    """Create a Typer Option for --exclude / -e.

    Returns:
        Typer Option with default None and appropriate help text.
    """
    return typer.Option(
        None,
        "--exclude",
        "-e",
        help="Ignore files whose name matches this glob pattern (repeatable).",
    )


def detector_option() -> Any:
    """Create a Typer Option for --detector / -d.

    Returns:
        Typer Option with default None and appropriate help text.
    """
    return typer.Option(
        None,
        "--detector",
        "-d",
        help="File detector: prefix, suffix or directory (default: auto-detect).",
    )


def config_option() -> Any:
    """Create a Typer Option for --config / -c.

    Returns:
        Typer Option with default None and appropriate help text.
    """
    return typer.Option(
        None,
        "--config",
        "-c",
        help="Config file to use instead of the auto-detected one.",
    )
