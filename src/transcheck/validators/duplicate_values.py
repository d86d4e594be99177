"""Duplicate values validator."""

from __future__ import annotations

from typing import Any

from transcheck.parsers.base import BaseParser
from transcheck.validators.base import BaseValidator, Issue, ProcessResult, Severity


class DuplicateValuesValidator(BaseValidator):
    """Reports values that are shared by several distinct keys of one file.

    Often a hint at copy-paste mistakes or at keys that should be merged.
    """

    name = "duplicate-values"
    failure_severity = Severity.WARNING

    def reset(self) -> None:
        super().reset()
        # file -> value -> keys in document order
        self._keys_by_value: dict[str, dict[str, list[str]]] = {}

    def process_file(self, parsed: BaseParser) -> ProcessResult:
        keys = self.keys_of(parsed)
        if keys is None:
            return None

        by_value = self._keys_by_value.setdefault(self.current_file, {})
        for key in keys:
            value = parsed.get_content_by_key(key)
            if value is None:
                continue
            by_value.setdefault(value, []).append(key)
        return None

    def post_process(self) -> None:
        for file_path, by_value in self._keys_by_value.items():
            duplicates: dict[str, Any] = {}
            for value, keys in by_value.items():
                unique_keys = list(dict.fromkeys(keys))
                if len(unique_keys) > 1:
                    duplicates[value] = unique_keys
            if duplicates:
                self.add_issue(
                    Issue(file=file_path, details=duplicates, parser=self._parser_kind, validator=self.name)
                )

    def format_issue_message(self, issue: Issue) -> str:
        return "\n".join(
            f"the translation value `{value}` occurs in multiple keys (`{'`, `'.join(keys)}`)"
            for value, keys in issue.details.items()
            if isinstance(keys, list)
        )
