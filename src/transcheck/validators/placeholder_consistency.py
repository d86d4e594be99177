"""Placeholder consistency validator.

Recognized placeholder syntaxes (all are extracted, they are not exclusive):

- ``%name%`` (Symfony)
- ``{name}`` (ICU MessageFormat)
- ``{{ name }}`` (Twig)
- ``%s``, ``%d``, ``%1$s`` (printf)
- ``:name`` (Laravel)
"""

from __future__ import annotations

import re
from typing import Any

from rich.markup import escape

from transcheck.validators.base import Severity
from transcheck.validators.cross_file import CrossFileValueValidator, list_difference

_PLACEHOLDER_PATTERNS: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"%([a-zA-Z_][a-zA-Z0-9_]*)%"), "%{}%"),
    (re.compile(r"\{([a-zA-Z_][a-zA-Z0-9_]*)\}"), "{{{}}}"),
    (re.compile(r"\{\{\s*([a-zA-Z_][a-zA-Z0-9_]*)\s*\}\}"), "{{{{ {} }}}}"),
    (re.compile(r"%(?:\d+\$)?[sdcoxXeEfFgGaA]"), ""),
    (re.compile(r":([a-zA-Z_][a-zA-Z0-9_]*)"), ":{}"),
]


def extract_placeholders(value: str) -> list[str]:
    """Extract the unique placeholders of a value in syntax order.

    Example:
        >>> extract_placeholders("Hello %name%, you have %d new {type}")
        ['%name%', '{type}', '%d']
    """
    placeholders: list[str] = []
    for pattern, template in _PLACEHOLDER_PATTERNS:
        for match in pattern.finditer(value):
            placeholders.append(template.format(match.group(1)) if template else match.group(0))
    return list(dict.fromkeys(placeholders))


class PlaceholderConsistencyValidator(CrossFileValueValidator):
    """Reports keys whose placeholders differ between the files of a file set."""

    name = "placeholders"
    failure_severity = Severity.WARNING
    analysis_field = "placeholders"
    issue_label = "placeholder"

    def analyze(self, value: str) -> list[str]:
        return extract_placeholders(value)

    def compare(self, file_name: str, reference: Any, current: Any) -> tuple[list[str], dict[str, Any]]:
        missing = list_difference(reference, current)
        extra = list_difference(current, reference)

        messages = []
        if missing:
            messages.append(f"File '{file_name}' is missing placeholders: {', '.join(missing)}")
        if extra:
            messages.append(f"File '{file_name}' has extra placeholders: {', '.join(extra)}")

        if not messages:
            return [], {}
        return messages, {"missing": missing, "extra": extra}

    def highlight(self, value: str) -> str:
        highlighted = escape(value)
        for placeholder in extract_placeholders(value):
            escaped = escape(placeholder)
            highlighted = highlighted.replace(escaped, f"[yellow]{escaped}[/yellow]")
        return highlighted
