"""Shared machinery for validators comparing one key's value across files.

The first file of a file set that contains a key is the reference. Every
other file containing the key is compared against it.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from typing import Any

from rich.markup import escape
from rich.table import Table

from transcheck.parsers.base import BaseParser
from transcheck.validators.base import (
    BaseValidator,
    FileSet,
    Issue,
    ProcessResult,
    display_name,
)


class CrossFileValueValidator(BaseValidator):
    """Base class for per-key comparisons between the files of a file set.

    Subclasses analyze each value into a structure (``analyze``) and describe
    how a file differs from the reference (``compare``).

    Attributes:
        analysis_field: Name under which the analysis of a value is stored in
            the per-file issue details.
        issue_label: Short noun used in messages (e.g. "placeholder").
    """

    analysis_field = "analysis"
    issue_label = "value"

    def reset(self) -> None:
        super().reset()
        # key -> file -> {"value": ..., analysis_field: ...}
        self._key_data: dict[str, dict[str, dict[str, Any]]] = {}

    @abstractmethod
    def analyze(self, value: str) -> Any:
        """Extract the structure compared between files from a value."""

    @abstractmethod
    def compare(self, file_name: str, reference: Any, current: Any) -> tuple[list[str], dict[str, Any]]:
        """Compare a file's analysis against the reference analysis.

        Returns:
            Human-readable inconsistencies and a structured difference record
            (empty when the file agrees with the reference).
        """

    def highlight(self, value: str) -> str:
        """Return rich markup for a value in the detail table."""
        return escape(value)

    def process_file(self, parsed: BaseParser) -> ProcessResult:
        keys = self.keys_of(parsed)
        if keys is None:
            return None

        for key in keys:
            value = parsed.get_content_by_key(key)
            if value is None:
                continue
            self._key_data.setdefault(key, {})[self.current_file] = {
                "value": value,
                self.analysis_field: self.analyze(value),
            }
        return None

    def post_process(self) -> None:
        for key, file_data in self._key_data.items():
            if len(file_data) < 2:
                continue

            file_paths = list(file_data)
            reference = file_data[file_paths[0]][self.analysis_field]
            inconsistencies: list[str] = []
            differences: dict[str, Any] = {}
            for file_path in file_paths[1:]:
                messages, difference = self.compare(
                    display_name(file_path), reference, file_data[file_path][self.analysis_field]
                )
                inconsistencies.extend(messages)
                if difference:
                    differences[file_path] = difference

            if inconsistencies:
                self.add_group_issue(
                    {
                        "key": key,
                        "files": file_data,
                        "inconsistencies": inconsistencies,
                        "differences": differences,
                    }
                )

    def format_issue_message(self, issue: Issue) -> str:
        key = issue.details.get("key", "unknown")
        text = "; ".join(issue.details.get("inconsistencies", []))
        return f"{self.issue_label} inconsistency in translation key `{key}` - {text}"

    def distribute_issues(self, file_set: FileSet | None = None) -> dict[str, list[Issue]]:
        return self._fan_out(lambda issue: list(issue.details.get("files", {})))

    def detail_table(self, issues: Sequence[Issue]) -> Table | None:
        if not issues:
            return None

        file_order = list(issues[0].details.get("files", {}))
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
            files = issue.details.get("files", {})
            row = [self.highlight(files.get(path, {}).get("value", "")) for path in file_order]
            table.add_row(escape(key), *row)
        return table


def list_difference(left: Sequence[str], right: Sequence[str]) -> list[str]:
    """Items of ``left`` that do not occur in ``right``, in order."""
    right_items = set(right)
    return [item for item in left if item not in right_items]
