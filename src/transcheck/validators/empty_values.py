"""Empty values validator."""

from __future__ import annotations

from transcheck.parsers.base import BaseParser
from transcheck.validators.base import BaseValidator, Issue, ProcessResult, Severity


class EmptyValuesValidator(BaseValidator):
    """Reports keys whose value is missing, empty or whitespace only."""

    name = "empty-values"
    failure_severity = Severity.WARNING

    def process_file(self, parsed: BaseParser) -> ProcessResult:
        keys = self.keys_of(parsed)
        if keys is None:
            return None

        empty: dict[str, str] = {}
        for key in keys:
            value = parsed.get_content_by_key(key)
            if value is None or not value.strip():
                empty[key] = value or ""
        return empty

    def format_issue_message(self, issue: Issue) -> str:
        messages = []
        for key, value in issue.details.items():
            description = "empty" if value == "" else "whitespace only"
            messages.append(f"the translation key `{key}` has an {description} value")
        return "\n".join(messages)
