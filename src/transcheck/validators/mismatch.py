"""Mismatch validator.

Checks that every file of a file set contains the same translation keys.
"""

from __future__ import annotations

from collections.abc import Sequence

from rich.markup import escape
from rich.table import Table

from transcheck.parsers.base import BaseParser
from transcheck.validators.base import (
    BaseValidator,
    FileSet,
    Issue,
    ProcessResult,
    Severity,
    display_name,
)


class MismatchValidator(BaseValidator):
    """Reports keys that exist in some files of a file set but not in others.

    Keys are collected per file during processing. After all files were seen,
    the union of keys (in first-seen order) is compared against each file.
    Every key missing from at least one file yields one issue listing the
    value of the key in each file, or None where it is absent.
    """

    name = "mismatch"
    failure_severity = Severity.ERROR

    def reset(self) -> None:
        super().reset()
        self._values_by_file: dict[str, dict[str, str]] = {}

    def process_file(self, parsed: BaseParser) -> ProcessResult:
        keys = self.keys_of(parsed)
        if keys is None:
            return None

        values = self._values_by_file.setdefault(self.current_file, {})
        for key in keys:
            values[key] = parsed.get_content_by_key(key) or ""
        return None

    def post_process(self) -> None:
        all_keys = dict.fromkeys(key for values in self._values_by_file.values() for key in values)
        for key in all_keys:
            if all(key in values for values in self._values_by_file.values()):
                continue
            self.add_group_issue(
                {
                    "key": key,
                    "files": [
                        {"file": file_path, "value": values.get(key)}
                        for file_path, values in self._values_by_file.items()
                    ],
                }
            )

    def format_issue_message(self, issue: Issue) -> str:
        key = issue.details.get("key", "unknown")
        files = issue.details.get("files", [])
        missing = [display_name(f["file"]) for f in files if f["value"] is None]
        present = [display_name(f["file"]) for f in files if f["value"] is not None]

        if not issue.file:
            return f"the translation key `{key}` is missing from `{'`, `'.join(missing)}`"

        current = next((f for f in files if f["file"] == issue.file), None)
        if current is not None and current["value"] is not None:
            return (
                f"the translation key `{key}` is missing from other translation files "
                f"(`{'`, `'.join(missing)}`)"
            )
        return (
            f"the translation key `{key}` is missing but present in other translation files "
            f"(`{'`, `'.join(present)}`)"
        )

    def distribute_issues(self, file_set: FileSet | None = None) -> dict[str, list[Issue]]:
        return self._fan_out(lambda issue: [f["file"] for f in issue.details.get("files", [])])

    def detail_table(self, issues: Sequence[Issue]) -> Table | None:
        if not issues:
            return None

        file_order = [f["file"] for f in issues[0].details.get("files", [])]
        table = Table(show_header=True, header_style="bold")
        table.add_column("Translation Key")
        for file_path in file_order:
            table.add_column(display_name(file_path))

        seen: set[str] = set()
        for issue in issues:
            key = issue.details.get("key", "unknown")
            if key in seen:
                continue
            seen.add(key)
            values = {f["file"]: f["value"] for f in issue.details.get("files", [])}
            table.add_row(escape(key), *[_cell(values.get(file_path)) for file_path in file_order])
        return table


def _cell(value: str | None) -> str:
    if value is None:
        return "[red]<missing>[/red]"
    return escape(value)
