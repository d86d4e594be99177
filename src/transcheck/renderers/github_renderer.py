"""GitHub Actions workflow command output."""

from __future__ import annotations

from transcheck.renderers.base import BaseRenderer
from transcheck.validators.base import Issue, Severity
from transcheck.validators.runner import ValidationResult

_ANNOTATION_TYPES = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
}


def escape_data(value: str) -> str:
    """Escape a workflow command message."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A").replace(":", "%3A")


def escape_property(value: str) -> str:
    """Escape a workflow command property value."""
    return escape_data(value).replace(",", "%2C").replace(" ", "%20")


class GitHubRenderer(BaseRenderer):
    """Renders issues as ``::error file=...::message`` annotations."""

    def render(self, result: ValidationResult) -> int:
        exit_code = self.exit_code(result)
        for file_path, by_validator in self.group_issues_by_file(result).items():
            for entry in by_validator.values():
                for issue in entry.issues:
                    message = entry.validator.format_issue_message(issue)
                    self._write(self.annotation(issue, file_path, entry.severity, message))
        self._render_summary(result, exit_code)
        return exit_code

    def annotation(self, issue: Issue, file_path: str, severity: Severity, message: str) -> str:
        details = issue.details
        params = [f"file={escape_property(file_path)}"]
        if details.get("line") is not None:
            params.append(f"line={details['line']}")
        if details.get("column") is not None:
            params.append(f"col={details['column']}")
        if details.get("title") is not None:
            params.append(f"title={escape_property(str(details['title']))}")
        annotation_type = _ANNOTATION_TYPES.get(severity, "notice")
        return f"::{annotation_type} {','.join(params)}::{escape_data(message)}"

    def _render_summary(self, result: ValidationResult, exit_code: int) -> None:
        severity = result.overall_result
        if exit_code == 0 or (severity is Severity.WARNING and not self.strict):
            summary_type = "notice"
        else:
            summary_type = "error"
        self._write(f"::{summary_type}::{self.generate_message(result)}")

        statistics = self.format_statistics(result)
        if statistics:
            self._write(
                "::notice::Validation completed in {} - Files: {}, Keys: {}, Validators: {}".format(
                    statistics["execution_time_formatted"],
                    statistics["files_checked"],
                    statistics["keys_checked"],
                    statistics["validators_run"],
                )
            )

    def _write(self, line: str) -> None:
        self.console.print(line, markup=False, emoji=False, highlight=False, soft_wrap=True)
