"""Renderers writing validation results as console text, JSON or GitHub annotations."""

from transcheck.renderers.base import BaseRenderer, GroupedIssues, ValidatorIssues, normalize_path
from transcheck.renderers.cli_renderer import CliRenderer
from transcheck.renderers.factory import FormatType, create_renderer
from transcheck.renderers.github_renderer import GitHubRenderer, escape_data, escape_property
from transcheck.renderers.json_renderer import JsonRenderer

__all__ = [
    # Base types
    "BaseRenderer",
    "GroupedIssues",
    "ValidatorIssues",
    "normalize_path",
    # Renderers
    "CliRenderer",
    "GitHubRenderer",
    "JsonRenderer",
    "escape_data",
    "escape_property",
    # Factory
    "FormatType",
    "create_renderer",
]
