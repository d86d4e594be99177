"""Base renderer shared by all output formats."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console

from transcheck.validators.base import BaseValidator, Issue, Severity
from transcheck.validators.runner import ValidationResult

MESSAGE_SUCCEEDED = "Language validation succeeded."
MESSAGE_FAILED = "Language validation failed."


@dataclass
class ValidatorIssues:
    """Issues of one validator displayed under one file."""

    validator: BaseValidator
    issues: list[Issue] = field(default_factory=list)

    @property
    def severity(self) -> Severity:
        return self.validator.failure_severity


# file path -> validator name -> issues
GroupedIssues = dict[str, dict[str, ValidatorIssues]]


def normalize_path(file_path: str) -> str:
    """Display form of a path: relative to the working directory when below it."""
    if not file_path:
        return file_path
    try:
        resolved = Path(file_path).resolve()
    except OSError:
        resolved = Path(file_path)
    try:
        return str(resolved.relative_to(Path.cwd().resolve()))
    except ValueError:
        return str(resolved).rstrip(os.sep)


class BaseRenderer(ABC):
    """Abstract base class for result renderers.

    Attributes:
        console: Rich console to write to.
        dry_run: Never fail on errors.
        strict: Fail on warnings.
        verbose: Verbosity level.
    """

    def __init__(
        self,
        console: Console | None = None,
        dry_run: bool = False,
        strict: bool = False,
        verbose: int = 0,
    ) -> None:
        self.console = console or Console(emoji=False)
        self.dry_run = dry_run
        self.strict = strict
        self.verbose = verbose

    @abstractmethod
    def render(self, result: ValidationResult) -> int:
        """Write the result and return the process exit code."""

    def exit_code(self, result: ValidationResult) -> int:
        return result.overall_result.resolve_exit_code(dry_run=self.dry_run, strict=self.strict)

    def generate_message(self, result: ValidationResult) -> str:
        """One-sentence summary of the run, depending on mode and severity."""
        severity = result.overall_result
        if not severity.not_fully_successful():
            return MESSAGE_SUCCEEDED

        if self.dry_run and severity is Severity.ERROR:
            return "Language validation failed with errors in dry-run mode."
        if self.dry_run and severity is Severity.WARNING:
            return "Language validation completed with warnings in dry-run mode."
        if self.strict and severity is Severity.WARNING:
            return "Language validation failed with warnings in strict mode."
        if severity is Severity.ERROR:
            return "Language validation failed with errors."
        if severity is Severity.WARNING:
            return "Language validation completed with warnings."
        return MESSAGE_FAILED

    def group_issues_by_file(self, result: ValidationResult) -> GroupedIssues:
        """Group issues by display path and validator.

        Each validator decides under which files its issues appear through
        ``distribute_issues``, so file set level issues show up under every
        file involved.
        """
        grouped: GroupedIssues = {}
        for pair in result.pairs:
            validator = pair.validator
            if not validator.has_issues():
                continue
            for file_path, issues in validator.distribute_issues(pair.file_set).items():
                by_validator = grouped.setdefault(normalize_path(file_path), {})
                entry = by_validator.setdefault(validator.name, ValidatorIssues(validator=validator))
                entry.issues.extend(issues)
        return grouped

    def format_statistics(self, result: ValidationResult) -> dict[str, Any]:
        if result.statistics is None:
            return {}
        return result.statistics.to_dict()
