"""Renderer selection by output format."""

from __future__ import annotations

from enum import Enum

from rich.console import Console

from transcheck.renderers.base import BaseRenderer
from transcheck.renderers.cli_renderer import CliRenderer
from transcheck.renderers.github_renderer import GitHubRenderer
from transcheck.renderers.json_renderer import JsonRenderer


class FormatType(str, Enum):
    """Supported output formats."""

    CLI = "cli"
    JSON = "json"
    GITHUB = "github"

    @classmethod
    def from_string(cls, value: str) -> FormatType:
        """Look up a format by name.

        Raises:
            ValueError: If the format is unknown.
        """
        try:
            return cls(value.lower())
        except ValueError:
            available = ", ".join(f.value for f in cls)
            raise ValueError(f"Unknown output format '{value}'. Available formats: {available}") from None


_RENDERERS: dict[FormatType, type[BaseRenderer]] = {
    FormatType.CLI: CliRenderer,
    FormatType.JSON: JsonRenderer,
    FormatType.GITHUB: GitHubRenderer,
}


def create_renderer(
    output_format: FormatType | str,
    console: Console | None = None,
    dry_run: bool = False,
    strict: bool = False,
    verbose: int = 0,
) -> BaseRenderer:
    """Instantiate the renderer for an output format.

    Raises:
        ValueError: If the format is unknown.
    """
    format_type = output_format if isinstance(output_format, FormatType) else FormatType.from_string(output_format)
    return _RENDERERS[format_type](console=console, dry_run=dry_run, strict=strict, verbose=verbose)
