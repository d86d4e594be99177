"""transcheck CLI - Main entry point."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from transcheck import __version__
from transcheck.cli_utils import (
    EXIT_SUCCESS,
    EXIT_SYSTEM_ERROR,
    EXIT_USER_ERROR,
    config_option,
    configure_logging,
    detector_option,
    error,
    exclude_option,
    format_option,
    only_option,
    resolve_paths,
    skip_option,
    split_names,
    warning,
    wire_config,
)
from transcheck.discovery import Collector, UnknownDetectorError, get_detector
from transcheck.renderers import create_renderer
from transcheck.validators.registry import VALIDATORS, UnknownValidatorError, resolve_validators
from transcheck.validators.runner import ValidationRun, create_file_sets

app = typer.Typer(
    name="transcheck",
    help="transcheck - Consistency checks for translation files (XLIFF, YAML, JSON, PHP).",
    add_completion=False,
)

# Rich console for output
console = Console(emoji=False)


# -----------------------------------------------------------------------------
# Version and Main Callbacks
# -----------------------------------------------------------------------------


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"transcheck version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """transcheck - Consistency checks for translation files (XLIFF, YAML, JSON, PHP)."""
    pass


# -----------------------------------------------------------------------------
# Validate Command
# -----------------------------------------------------------------------------


@app.command()
def validate(
    paths: list[str] | None = typer.Argument(
        None,
        help="Directories (or files) to validate. Defaults to 'paths' from the config file.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Report errors without failing.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail on warnings too.",
    ),
    output_format: str | None = format_option(),
    only: list[str] | None = only_option(),
    skip: list[str] | None = skip_option(),
    exclude: list[str] | None = exclude_option(),
    recursive: bool = typer.Option(
        False,
        "--recursive",
        "-r",
        help="Search subdirectories.",
    ),
    detector: str | None = detector_option(),
    config_file: Path | None = config_option(),
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Show details (-v) and debug logs (-vv).",
    ),
) -> None:
    """Validate translation files.

    Files are grouped into translation sets (e.g. messages.en.yaml and
    messages.de.yaml) and every validator checks each set.

    Exit codes:
      0 - no issues, only warnings, or --dry-run
      1 - errors found, warnings with --strict, or invalid usage
    """
    # Flags only override lower precedence sources when given
    config = wire_config(
        paths=paths or None,
        only=split_names(only),
        skip=split_names(skip),
        exclude=exclude or None,
        file_detector=detector,
        strict=strict or None,
        dry_run=dry_run or None,
        recursive=recursive or None,
        output_format=output_format,
        verbose=verbose or None,
        config_file=config_file,
    )
    configure_logging(config.verbose)

    if not config.paths:
        error("No paths given. Pass directories to validate or set 'paths' in a config file.")

    try:
        validator_classes = resolve_validators(config.only, config.skip)
        file_detector = get_detector(config.file_detector) if config.file_detector else None
    except (UnknownValidatorError, UnknownDetectorError) as e:
        error(str(e), exit_code=EXIT_USER_ERROR)

    collector = Collector(exclude=config.exclude, recursive=config.recursive, detector=file_detector)
    try:
        collected = collector.collect(resolve_paths(config.paths))
    except OSError as e:
        error(f"Could not read translation files: {e}", exit_code=EXIT_SYSTEM_ERROR)
    file_sets = create_file_sets(collected)
    if not file_sets:
        warning("No translation files found in the given paths.")
        raise typer.Exit(code=EXIT_SUCCESS)

    result = ValidationRun(config.validator_settings).execute(file_sets, validator_classes)

    renderer = create_renderer(
        config.format,
        console=console,
        dry_run=config.dry_run,
        strict=config.strict,
        verbose=config.verbose,
    )
    raise typer.Exit(code=renderer.render(result))


# -----------------------------------------------------------------------------
# Validators Command
# -----------------------------------------------------------------------------


@app.command("validators")
def list_validators(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output as JSON.",
    ),
) -> None:
    """List the available validators."""
    entries: list[dict[str, Any]] = [
        {
            "name": name,
            "class": validator_class.__name__,
            "severity": validator_class.failure_severity.label,
            "parsers": sorted(validator_class.supported_parsers),
        }
        for name, validator_class in VALIDATORS.items()
    ]

    if json_output:
        console.print_json(json.dumps(entries))
        return

    table = Table(title="Validators")
    table.add_column("Name", style="cyan")
    table.add_column("Class")
    table.add_column("Severity")
    table.add_column("Parsers")
    for entry in entries:
        color = VALIDATORS[entry["name"]].failure_severity.color
        table.add_row(
            entry["name"],
            entry["class"],
            f"[{color}]{entry['severity']}[/{color}]",
            ", ".join(entry["parsers"]),
        )
    console.print(table)


if __name__ == "__main__":
    app()
