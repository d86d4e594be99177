"""Duplicate keys validator."""

from __future__ import annotations

from collections import Counter

from transcheck.parsers.base import BaseParser
from transcheck.validators.base import BaseValidator, Issue, ProcessResult, Severity


class DuplicateKeysValidator(BaseValidator):
    """Reports translation keys that occur more than once within one file.

    The finding maps each duplicated key to its number of occurrences, e.g.
    keys ``[a, b, a, c, b]`` yield ``{"a": 2, "b": 2}``.
    """

    name = "duplicate-keys"
    failure_severity = Severity.ERROR

    def process_file(self, parsed: BaseParser) -> ProcessResult:
        keys = self.keys_of(parsed)
        if keys is None:
            return None

        counts = Counter(keys)
        return {key: count for key, count in counts.items() if count > 1}

    def format_issue_message(self, issue: Issue) -> str:
        return "\n".join(
            f"the translation key `{key}` occurs multiple times ({count}x)"
            for key, count in issue.details.items()
            if isinstance(count, int)
        )
