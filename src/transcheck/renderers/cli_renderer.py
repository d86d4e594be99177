"""Human readable console output using rich."""

from __future__ import annotations

from rich.markup import escape

from transcheck.renderers.base import BaseRenderer, GroupedIssues, ValidatorIssues
from transcheck.validators.base import Severity
from transcheck.validators.runner import ValidationResult


def _error_first(entry: ValidatorIssues) -> int:
    return 0 if entry.severity is Severity.ERROR else 1


class CliRenderer(BaseRenderer):
    """Renders results for a terminal.

    Compact mode lists issues only when at least one error-level validator
    reported something, so warning-only runs stay quiet. Verbose mode lists
    every file and validator, adds detail tables and statistics.
    """

    def render(self, result: ValidationResult) -> int:
        grouped = self.group_issues_by_file(result)
        if self.verbose:
            self._render_verbose(grouped)
        else:
            self._render_compact(grouped)

        self._render_summary(result)
        if self.verbose:
            self._render_statistics(result)
        return self.exit_code(result)

    def _render_compact(self, grouped: GroupedIssues) -> None:
        has_errors = any(
            entry.severity is Severity.ERROR for by_validator in grouped.values() for entry in by_validator.values()
        )
        if not has_errors:
            return

        for file_path, by_validator in grouped.items():
            self.console.print(f"[cyan]{escape(file_path)}[/cyan]", emoji=False)
            self.console.print()
            for entry in sorted(by_validator.values(), key=_error_first):
                prefix = f"- [{entry.severity.color}]{entry.severity.label}[/{entry.severity.color}]"
                for issue in entry.issues:
                    lines = entry.validator.format_issue_message(issue).splitlines()
                    for index, line in enumerate(lines):
                        if not line.strip():
                            continue
                        if index == 0:
                            self.console.print(f"{prefix} ({entry.validator.name}) {escape(line)}", emoji=False)
                        else:
                            self.console.print(escape(line), emoji=False)
            self.console.print()

    def _render_verbose(self, grouped: GroupedIssues) -> None:
        self.console.rule("[bold]Translation validation[/bold]")
        self.console.print(
            "Validating translation files (XLIFF, YAML, JSON and PHP) for mismatches, "
            "duplicates, placeholder consistency and schema compliance."
        )
        self.console.print()

        for file_path, by_validator in grouped.items():
            self.console.print(f"[cyan]{escape(file_path)}[/cyan]", emoji=False)
            self.console.print()
            for entry in sorted(by_validator.values(), key=_error_first):
                color = entry.severity.color
                self.console.print(f"  [bold]{entry.validator.name}[/bold]")
                for issue in entry.issues:
                    lines = entry.validator.format_issue_message(issue).splitlines()
                    for index, line in enumerate(lines):
                        if not line.strip():
                            continue
                        if index == 0:
                            self.console.print(
                                f"    - [{color}]{entry.severity.label}[/{color}] {escape(line)}", emoji=False
                            )
                        else:
                            self.console.print(f"    {escape(line)}", emoji=False)

                table = entry.validator.detail_table(entry.issues)
                if table is not None:
                    self.console.print()
                    self.console.print(table)
                self.console.print()

    def _render_summary(self, result: ValidationResult) -> None:
        severity = result.overall_result
        message = self.generate_message(result)

        if not severity.not_fully_successful():
            self.console.print(f"[green]{message}[/green]")
            return

        if not self.verbose:
            message += " See more details with the `-v` verbose option."
            if severity is Severity.WARNING and not self.strict:
                message += " Use `--strict` to treat warnings as errors."

        if self.dry_run or (severity is Severity.WARNING and not self.strict):
            self.console.print(f"[yellow]{escape(message)}[/yellow]", emoji=False)
        else:
            self.console.print(f"[bold red]{escape(message)}[/bold red]", emoji=False)

    def _render_statistics(self, result: ValidationResult) -> None:
        statistics = self.format_statistics(result)
        if not statistics:
            return
        self.console.print()
        self.console.print(f"[dim]Execution time: {statistics['execution_time_formatted']}[/dim]")
        self.console.print(f"[dim]Files checked: {statistics['files_checked']}[/dim]")
        self.console.print(f"[dim]Keys checked: {statistics['keys_checked']}[/dim]")
        self.console.print(f"[dim]Validators run: {statistics['validators_run']}[/dim]")
        self.console.print(f"[dim]Parsers cached: {statistics['parsers_cached']}[/dim]")
