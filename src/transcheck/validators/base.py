"""Base validator classes and models for the transcheck validation engine.

Provides the severity algebra, the issue and file set models, and the
lifecycle every catalog validator follows: ``process_file`` once per file
of a file set, in order, then ``post_process`` once for cross-file checks.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar, Union

from transcheck.parsers.base import BaseParser, ParserError
from transcheck.parsers.cache import ParserCache
from transcheck.parsers.registry import ALL_PARSER_KINDS

if TYPE_CHECKING:
    from rich.table import Table

logger = logging.getLogger(__name__)

# Process exit codes derived from a severity
EXIT_SUCCESS = 0
EXIT_FAILURE = 1

IssueData = dict[str, Any]
ProcessResult = Union[IssueData, list[IssueData], None]


class Severity(IntEnum):
    """Ordered outcome of a validation: SUCCESS < WARNING < ERROR."""

    SUCCESS = 0
    WARNING = 1
    ERROR = 2

    def join(self, other: Severity) -> Severity:
        """Return the higher of two severities."""
        return self if self >= other else other

    @classmethod
    def combine(cls, severities: Iterable[Severity]) -> Severity:
        """Fold severities with join. An empty iterable yields SUCCESS."""
        result = cls.SUCCESS
        for severity in severities:
            result = result.join(severity)
        return result

    def not_fully_successful(self) -> bool:
        return self is not Severity.SUCCESS

    def resolve_exit_code(self, dry_run: bool = False, strict: bool = False) -> int:
        """Translate the severity into a process exit code.

        Errors fail the run unless in dry-run mode. Warnings only fail the
        run in strict mode.

        Args:
            dry_run: Never fail on errors.
            strict: Fail on warnings.

        Returns:
            EXIT_FAILURE or EXIT_SUCCESS.
        """
        if self is Severity.ERROR and not dry_run:
            return EXIT_FAILURE
        if self is Severity.WARNING and strict:
            return EXIT_FAILURE
        return EXIT_SUCCESS

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @property
    def color(self) -> str:
        return _SEVERITY_COLORS[self]


_SEVERITY_COLORS = {
    Severity.SUCCESS: "green",
    Severity.WARNING: "yellow",
    Severity.ERROR: "red",
}


@dataclass(frozen=True)
class Issue:
    """A single finding produced by a validator.

    Attributes:
        file: Path of the file the finding belongs to. Empty for findings
            that concern a whole file set (e.g. a key missing somewhere).
        details: Validator-defined structured payload.
        parser: Parser kind of the file set (e.g. "xliff").
        validator: Registry name of the validator that produced the issue.
    """

    file: str
    details: dict[str, Any]
    parser: str
    validator: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "issues": self.details,
            "parser": self.parser,
            "type": self.validator,
        }


@dataclass(frozen=True)
class FileSet:
    """Files that are translations of one another.

    Attributes:
        parser: Parser kind shared by all files (e.g. "yaml").
        path: Directory the files were discovered in.
        set_key: Logical group key (e.g. "messages").
        files: File paths in discovery order.
    """

    parser: str
    path: str
    set_key: str
    files: tuple[str, ...] = field(default_factory=tuple)


class BaseValidator(ABC):
    """Abstract base class for all catalog validators.

    A validator instance checks exactly one file set and is discarded
    afterwards, so subclasses may keep private accumulators on ``self``.

    Attributes:
        name: Registry name of the validator (e.g. "duplicate-keys").
        failure_severity: Severity reported when the validator finds issues.
        supported_parsers: Parser kinds the validator can check.
        settings: Per-validator settings from the configuration.
    """

    name: ClassVar[str] = ""
    failure_severity: ClassVar[Severity] = Severity.ERROR
    supported_parsers: ClassVar[frozenset[str]] = ALL_PARSER_KINDS

    def __init__(self, settings: Mapping[str, Any] | None = None) -> None:
        """Initialize validator.

        Args:
            settings: Validator settings, e.g. ``{"threshold": 500}``.
        """
        self.settings: dict[str, Any] = dict(settings or {})
        self._issues: list[Issue] = []
        self._parser_kind = ""
        self.current_file = ""
        self.reset()

    @classmethod
    def supports_parser(cls, kind: str) -> bool:
        return kind in cls.supported_parsers

    def validate(
        self,
        files: Sequence[str],
        parser_kind: str | None = None,
        parser_cache: ParserCache | None = None,
    ) -> list[Issue]:
        """Run the validator over the files of one file set.

        Args:
            files: File paths in file set order.
            parser_kind: Parser kind of the file set. Resolved per file from
                the extension when omitted.
            parser_cache: Run-scoped parser cache. A private cache is used
                when omitted.

        Returns:
            All issues found, in the order they were produced.
        """
        cache = parser_cache if parser_cache is not None else ParserCache()
        self.reset()
        self._parser_kind = parser_kind or ""
        logger.debug("Checking for %s ...", self.name)

        for file_path in files:
            try:
                parsed = cache.get(file_path, parser_kind)
            except ParserError as e:
                logger.warning("Skipping %s for %s: %s", file_path, self.name, e)
                continue

            if not self.supports_parser(parsed.kind):
                logger.debug("%s does not support %s files, skipping %s", self.name, parsed.kind, file_path)
                continue

            self._parser_kind = parsed.kind
            self.current_file = file_path
            logger.debug("Checking %s", parsed.file_path)
            self._collect(file_path, parsed.kind, self.process_file(parsed))

        self.post_process()
        return list(self._issues)

    def _collect(self, file_path: str, parser_kind: str, result: ProcessResult) -> None:
        if not result:
            return
        entries = result if isinstance(result, list) else [result]
        for details in entries:
            self.add_issue(Issue(file=file_path, details=details, parser=parser_kind, validator=self.name))

    @abstractmethod
    def process_file(self, parsed: BaseParser) -> ProcessResult:
        """Check one file.

        Returns:
            A dict for a single finding, a list of dicts for several findings,
            or an empty value when the file is fine or only feeds accumulators.
        """

    def post_process(self) -> None:
        """Run cross-file checks after every file was processed."""

    def reset(self) -> None:
        """Drop the issues and accumulators of a previous validate() call."""
        self._issues = []

    def keys_of(self, parsed: BaseParser) -> list[str] | None:
        """Extract keys, logging files that cannot be parsed."""
        keys = parsed.extract_keys()
        if keys is None:
            logger.error("The source file %s is not valid: %s", parsed.file_name, parsed.error)
        return keys

    def add_issue(self, issue: Issue) -> None:
        self._issues.append(issue)

    def add_group_issue(self, details: IssueData) -> None:
        """Record a finding that concerns the whole file set."""
        self.add_issue(Issue(file="", details=details, parser=self._parser_kind, validator=self.name))

    def has_issues(self) -> bool:
        return bool(self._issues)

    @property
    def issues(self) -> list[Issue]:
        return list(self._issues)

    def format_issue_message(self, issue: Issue) -> str:
        """Render an issue as plain text, one line per finding."""
        return str(issue.details.get("message", "Validation error"))

    def distribute_issues(self, file_set: FileSet | None = None) -> dict[str, list[Issue]]:
        """Group issues by the file they should be displayed under.

        Issues without a file are dropped here. Validators producing file set
        level issues override this to fan them out to the files involved.
        """
        distribution: dict[str, list[Issue]] = {}
        for issue in self._issues:
            if not issue.file:
                continue
            distribution.setdefault(issue.file, []).append(issue)
        return distribution

    def detail_table(self, issues: Sequence[Issue]) -> Table | None:
        """Build a side-by-side table of the affected values for verbose output."""
        return None

    def _fan_out(self, files_of: Callable[[Issue], Iterable[str]]) -> dict[str, list[Issue]]:
        """Copy each file set level issue to every file it mentions.

        Args:
            files_of: Callable returning the file paths mentioned by an issue.
        """
        distribution: dict[str, list[Issue]] = {}
        for issue in self._issues:
            for file_path in files_of(issue):
                if not file_path:
                    continue
                distribution.setdefault(file_path, []).append(
                    Issue(file=file_path, details=issue.details, parser=issue.parser, validator=issue.validator)
                )
        return distribution


def display_name(file_path: str) -> str:
    return Path(file_path).name
