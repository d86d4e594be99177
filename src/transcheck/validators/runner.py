"""Validation runner for orchestrating validators over file sets.

Every (file set, validator kind) pair gets a fresh validator instance, so no
state leaks between file sets or between validators. Instances that found
issues are kept in the result together with their file set, and the overall
severity is the join of their failure severities.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from transcheck.parsers.base import ParserError
from transcheck.parsers.cache import ParserCache
from transcheck.validators.base import BaseValidator, FileSet, Severity

logger = logging.getLogger(__name__)

# parser kind -> path -> group key -> files
FileMapping = Mapping[str, Mapping[str, Mapping[str, Sequence[str]]]]


def create_file_sets(mapping: FileMapping) -> list[FileSet]:
    """Flatten a discovery mapping into file sets, preserving order at every level.

    Args:
        mapping: Three-level mapping ``parser kind -> path -> group key -> files``.

    Returns:
        One FileSet per innermost file list.
    """
    file_sets: list[FileSet] = []
    for parser_kind, paths in mapping.items():
        for path, groups in paths.items():
            for set_key, files in groups.items():
                file_sets.append(FileSet(parser=parser_kind, path=path, set_key=set_key, files=tuple(files)))
    return file_sets


@dataclass
class ValidationStatistics:
    """Figures about one validation run.

    Attributes:
        execution_time: Wall-clock duration in seconds.
        files_checked: Number of files across all file sets.
        keys_checked: Number of keys in all parseable files.
        validators_run: Number of validator kinds requested.
        parsers_cached: Number of parser instances created during the run.
    """

    execution_time: float = 0.0
    files_checked: int = 0
    keys_checked: int = 0
    validators_run: int = 0
    parsers_cached: int = 0

    @property
    def execution_time_formatted(self) -> str:
        if self.execution_time < 1.0:
            return f"{round(self.execution_time * 1000)}ms"
        return f"{self.execution_time:.2f}s"

    def to_dict(self) -> dict[str, Any]:
        return {
            "execution_time": self.execution_time,
            "execution_time_formatted": self.execution_time_formatted,
            "files_checked": self.files_checked,
            "keys_checked": self.keys_checked,
            "validators_run": self.validators_run,
            "parsers_cached": self.parsers_cached,
        }


@dataclass
class ValidatorFileSetPair:
    """A validator instance that found issues and the file set it checked."""

    validator: BaseValidator
    file_set: FileSet


@dataclass
class ValidationResult:
    """Aggregated outcome of a validation run.

    Attributes:
        validators: Validator instances that found issues.
        overall_result: Join of the failure severities of ``validators``.
        pairs: Each retained validator with the file set it checked.
        statistics: Run statistics, if collected.
    """

    validators: list[BaseValidator] = field(default_factory=list)
    overall_result: Severity = Severity.SUCCESS
    pairs: list[ValidatorFileSetPair] = field(default_factory=list)
    statistics: ValidationStatistics | None = None

    def has_issues(self) -> bool:
        return bool(self.validators)


class ValidationRun:
    """Runs validator kinds against file sets.

    Supports:
    - Per-validator settings, passed to every instance of that kind
    - Fail-soft execution: a crashing validator is logged and skipped
    - Run statistics
    """

    def __init__(self, validator_settings: Mapping[str, Mapping[str, Any]] | None = None) -> None:
        """Initialize validation run.

        Args:
            validator_settings: Settings per validator name, e.g.
                ``{"key-count": {"threshold": 500}}``.
        """
        self.validator_settings = dict(validator_settings or {})

    def execute(
        self,
        file_sets: Sequence[FileSet],
        validator_classes: Sequence[type[BaseValidator]],
    ) -> ValidationResult:
        """Run every validator kind against every file set.

        Args:
            file_sets: File sets to check, in order.
            validator_classes: Validator kinds to run, in order.

        Returns:
            ValidationResult combining all outcomes.
        """
        start = time.perf_counter()
        cache = ParserCache()
        result = ValidationResult()
        files_checked = 0

        for file_set in file_sets:
            files_checked += len(file_set.files)
            for validator_class in validator_classes:
                if not validator_class.supports_parser(file_set.parser):
                    logger.debug(
                        "Skipping %s for %s files in %s", validator_class.name, file_set.parser, file_set.path
                    )
                    continue

                validator = self._run_validator(validator_class, file_set, cache)
                if validator is None or not validator.has_issues():
                    continue

                result.validators.append(validator)
                result.pairs.append(ValidatorFileSetPair(validator=validator, file_set=file_set))
                result.overall_result = result.overall_result.join(validator.failure_severity)

        result.statistics = ValidationStatistics(
            execution_time=time.perf_counter() - start,
            files_checked=files_checked,
            keys_checked=self._count_keys(file_sets, cache),
            validators_run=len(validator_classes),
            parsers_cached=len(cache),
        )
        return result

    def _run_validator(
        self,
        validator_class: type[BaseValidator],
        file_set: FileSet,
        cache: ParserCache,
    ) -> BaseValidator | None:
        try:
            validator = validator_class(self.validator_settings.get(validator_class.name))
            validator.validate(file_set.files, file_set.parser, cache)
        except Exception:
            logger.exception(
                "Validator %s failed on file set '%s' in %s, skipping it",
                validator_class.name,
                file_set.set_key,
                file_set.path,
            )
            return None
        return validator

    def _count_keys(self, file_sets: Sequence[FileSet], cache: ParserCache) -> int:
        keys_checked = 0
        for file_set in file_sets:
            for file_path in file_set.files:
                try:
                    keys = cache.get(file_path, file_set.parser).extract_keys()
                except ParserError:
                    continue
                if keys is not None:
                    keys_checked += len(keys)
        return keys_checked
