"""Machine readable JSON output."""

from __future__ import annotations

import json
from typing import Any

from transcheck.renderers.base import BaseRenderer
from transcheck.validators.runner import ValidationResult


class JsonRenderer(BaseRenderer):
    """Renders results as one JSON document.

    Shape::

        {
          "status": <exit code>,
          "message": "...",
          "issues": {file: {validator: {"type": "Error", "issues": [{"message", "details"}]}}},
          "statistics": {...}
        }
    """

    def render(self, result: ValidationResult) -> int:
        exit_code = self.exit_code(result)
        document = json.dumps(self.build_document(result, exit_code), indent=2, ensure_ascii=False, default=str)
        # soft_wrap keeps long lines intact instead of cropping them to the terminal width
        self.console.print(document, markup=False, emoji=False, highlight=False, soft_wrap=True)
        return exit_code

    def build_document(self, result: ValidationResult, exit_code: int) -> dict[str, Any]:
        issues: dict[str, dict[str, Any]] = {}
        for file_path, by_validator in self.group_issues_by_file(result).items():
            issues[file_path] = {
                name: {
                    "type": entry.severity.label,
                    "issues": [
                        {"message": entry.validator.format_issue_message(issue), "details": issue.details}
                        for issue in entry.issues
                    ],
                }
                for name, entry in by_validator.items()
            }
        return {
            "status": exit_code,
            "message": self.generate_message(result),
            "issues": issues,
            "statistics": self.format_statistics(result),
        }
