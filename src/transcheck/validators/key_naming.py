"""Key naming convention validator.

With a configured convention (or custom regular expression) every key is
checked against it and a corrected key is suggested. Without configuration
the validator detects the conventions used in a file and reports keys that
deviate from the dominant one.

Settings:
    convention: One of snake_case, camelCase, kebab-case, PascalCase.
    custom_pattern: Python regular expression, overrides ``convention``.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

from transcheck.parsers.base import BaseParser
from transcheck.validators.base import BaseValidator, Issue, ProcessResult, Severity

logger = logging.getLogger(__name__)

MIXED_CONVENTIONS = "mixed_conventions"
UNKNOWN_CONVENTION = "unknown"


class KeyNamingConvention(Enum):
    """Supported key naming conventions."""

    SNAKE_CASE = "snake_case"
    CAMEL_CASE = "camelCase"
    KEBAB_CASE = "kebab-case"
    PASCAL_CASE = "PascalCase"
    DOT_NOTATION = "dot.notation"

    @property
    def pattern(self) -> str:
        return _CONVENTION_PATTERNS[self]

    @property
    def description(self) -> str:
        return _CONVENTION_DESCRIPTIONS[self]

    def matches(self, key: str) -> bool:
        return re.fullmatch(self.pattern, key) is not None

    @classmethod
    def configurable(cls) -> list[KeyNamingConvention]:
        """Conventions that may be configured. dot.notation is detection only."""
        return [c for c in cls if c is not cls.DOT_NOTATION]

    @classmethod
    def from_string(cls, value: str) -> KeyNamingConvention:
        """Look up a configurable convention by name.

        Raises:
            ValueError: If the name is unknown or not configurable.
        """
        available = ", ".join(c.value for c in cls.configurable())
        try:
            convention = cls(value)
        except ValueError:
            raise ValueError(f'Unknown convention "{value}". Available conventions: {available}') from None
        if convention is cls.DOT_NOTATION:
            raise ValueError(f'Convention "{value}" is not configurable. Available conventions: {available}')
        return convention


_CONVENTION_PATTERNS = {
    KeyNamingConvention.SNAKE_CASE: r"[a-z]([a-z0-9]|_[a-z0-9])*",
    KeyNamingConvention.CAMEL_CASE: r"[a-z][a-zA-Z0-9]*",
    KeyNamingConvention.KEBAB_CASE: r"[a-z][a-z0-9-]*[a-z0-9]|[a-z]",
    KeyNamingConvention.PASCAL_CASE: r"[A-Z][a-zA-Z0-9]*",
    KeyNamingConvention.DOT_NOTATION: r"[a-z][a-z0-9]*(\.[a-z][a-z0-9]*)*",
}

_CONVENTION_DESCRIPTIONS = {
    KeyNamingConvention.SNAKE_CASE: "snake_case (lowercase with underscores)",
    KeyNamingConvention.CAMEL_CASE: "camelCase (first letter lowercase)",
    KeyNamingConvention.KEBAB_CASE: "kebab-case (lowercase with hyphens)",
    KeyNamingConvention.PASCAL_CASE: "PascalCase (first letter uppercase)",
    KeyNamingConvention.DOT_NOTATION: "dot.notation (lowercase with dots)",
}


# -----------------------------------------------------------------------------
# Key conversion
# -----------------------------------------------------------------------------


def _split_words(key: str) -> list[str]:
    return [part for part in re.split(r"[_\-.]+", key) if part]


def to_snake_case(key: str) -> str:
    result = re.sub(r"([a-z])([A-Z])", r"\1_\2", key)
    return result.replace("-", "_").replace(".", "_").lower()


def to_camel_case(key: str) -> str:
    if re.search(r"[A-Z]", key):
        return key[:1].lower() + key[1:]
    words = _split_words(key)
    if not words:
        return key
    return words[0].lower() + "".join(word.lower().capitalize() for word in words[1:])


def to_kebab_case(key: str) -> str:
    result = re.sub(r"([a-z])([A-Z])", r"\1-\2", key)
    return result.replace("_", "-").replace(".", "-").lower()


def to_pascal_case(key: str) -> str:
    if re.search(r"[A-Z]", key):
        return key[:1].upper() + key[1:]
    return "".join(word.lower().capitalize() for word in _split_words(key)) or key


def to_dot_notation(key: str) -> str:
    result = re.sub(r"([a-z])([A-Z])", r"\1.\2", key)
    return result.replace("_", ".").replace("-", ".").lower()


_CONVERTERS = {
    KeyNamingConvention.SNAKE_CASE: to_snake_case,
    KeyNamingConvention.CAMEL_CASE: to_camel_case,
    KeyNamingConvention.KEBAB_CASE: to_kebab_case,
    KeyNamingConvention.PASCAL_CASE: to_pascal_case,
    KeyNamingConvention.DOT_NOTATION: to_dot_notation,
}


def convert_key(key: str, convention: KeyNamingConvention) -> str:
    """Rewrite a key in a convention, segment by segment for dotted keys."""
    converter = _CONVERTERS[convention]
    if "." in key and convention is not KeyNamingConvention.DOT_NOTATION:
        return ".".join(converter(segment) for segment in key.split("."))
    return converter(key)


# -----------------------------------------------------------------------------
# Convention detection
# -----------------------------------------------------------------------------


def detect_segment_conventions(segment: str) -> list[str]:
    """Conventions matched by a key segment, or ``["unknown"]``."""
    matching = [c.value for c in KeyNamingConvention if c.matches(segment)]
    return matching or [UNKNOWN_CONVENTION]


def detect_key_conventions(key: str) -> list[str]:
    """Conventions matched by a whole key.

    A dotted key matches dot.notation when the whole key does, plus every
    convention that all of its segments match. A dotted key matching nothing
    is classified as mixed_conventions.
    """
    if "." not in key:
        return detect_segment_conventions(key)

    matching: list[str] = []
    if KeyNamingConvention.DOT_NOTATION.matches(key):
        matching.append(KeyNamingConvention.DOT_NOTATION.value)

    common: list[str] | None = None
    for segment in key.split("."):
        segment_matches = [
            c for c in detect_segment_conventions(segment) if c != KeyNamingConvention.DOT_NOTATION.value
        ]
        common = segment_matches if common is None else [c for c in common if c in segment_matches]

    if common and UNKNOWN_CONVENTION not in common:
        matching.extend(common)

    if not matching:
        return [MIXED_CONVENTIONS]
    return list(dict.fromkeys(matching))


class KeyNamingConventionValidator(BaseValidator):
    """Checks translation keys against a naming convention."""

    name = "key-naming"
    failure_severity = Severity.WARNING

    def __init__(self, settings: Mapping[str, Any] | None = None) -> None:
        super().__init__(settings)
        self.convention: KeyNamingConvention | None = None
        self.custom_pattern: re.Pattern[str] | None = None
        self._load_settings()

    def _load_settings(self) -> None:
        convention = self.settings.get("convention")
        if isinstance(convention, str):
            try:
                self.convention = KeyNamingConvention.from_string(convention)
            except ValueError as e:
                logger.warning("Invalid convention in config: %s. %s", convention, e)

        custom_pattern = self.settings.get("custom_pattern")
        if isinstance(custom_pattern, str):
            try:
                self.custom_pattern = re.compile(custom_pattern)
            except re.error as e:
                logger.warning("Invalid custom pattern in config: %s. %s", custom_pattern, e)
            else:
                self.convention = None

    @property
    def auto_detection(self) -> bool:
        return self.convention is None and self.custom_pattern is None

    def process_file(self, parsed: BaseParser) -> ProcessResult:
        keys = self.keys_of(parsed)
        if keys is None:
            return None

        if self.auto_detection:
            return self._analyze_consistency(keys, parsed.file_name)

        issues = []
        for key in keys:
            if self._matches_configuration(key):
                continue
            issues.append(
                {
                    "key": key,
                    "file": parsed.file_name,
                    "expected_convention": self.convention.value if self.convention else "custom pattern",
                    "pattern": self._active_pattern(),
                    "suggestion": convert_key(key, self.convention) if self.convention else key,
                }
            )
        return issues

    def _matches_configuration(self, key: str) -> bool:
        if self.custom_pattern is not None:
            return self.custom_pattern.search(key) is not None
        if self.convention is None:
            return True
        return all(self.convention.matches(segment) for segment in key.split("."))

    def _active_pattern(self) -> str | None:
        if self.custom_pattern is not None:
            return self.custom_pattern.pattern
        return self.convention.pattern if self.convention else None

    def _analyze_consistency(self, keys: list[str], file_name: str) -> list[dict[str, Any]]:
        if not keys:
            return []

        key_conventions: dict[str, list[str]] = {}
        counts: dict[str, int] = {}
        for key in keys:
            matching = detect_key_conventions(key)
            key_conventions[key] = matching
            for convention in matching:
                counts[convention] = counts.get(convention, 0) + 1

        if len(counts) <= 1:
            return []

        # Ties keep the convention that was counted first
        dominant = next(iter(counts))
        for convention, count in counts.items():
            if count > counts[dominant]:
                dominant = convention

        all_found = list(counts)
        inconsistencies = [
            {
                "key": key,
                "file": file_name,
                "detected_conventions": key_conventions[key],
                "dominant_convention": dominant,
                "all_conventions_found": all_found,
                "inconsistency_type": MIXED_CONVENTIONS,
            }
            for key in keys
            if dominant not in key_conventions[key]
        ]
        # The configuration tip goes with the first inconsistency of the file set
        if inconsistencies and not self.has_issues():
            inconsistencies[0]["config_hint"] = True
        return inconsistencies

    def format_issue_message(self, issue: Issue) -> str:
        details = issue.details
        key = details.get("key", "unknown")

        if details.get("inconsistency_type") == MIXED_CONVENTIONS:
            detected = ", ".join(details.get("detected_conventions", []))
            dominant = details.get("dominant_convention", UNKNOWN_CONVENTION)
            message = (
                f"key naming inconsistency: `{key}` uses {detected} convention, "
                f"but this file predominantly uses {dominant}"
            )
            try:
                suggestion = convert_key(key, KeyNamingConvention(dominant))
            except ValueError:
                message += ". Consider standardizing all keys to use the same naming convention"
            else:
                if suggestion != key:
                    message += f". Consider: `{suggestion}`"

            if details.get("config_hint"):
                available = ", ".join(c.value for c in KeyNamingConvention.configurable())
                message += (
                    "\n  Tip: Configure a specific naming convention in a configuration file to avoid "
                    f"inconsistencies. Available conventions: {available}."
                )
            return message

        convention = details.get("expected_convention", "custom pattern")
        suggestion = details.get("suggestion", "")
        message = f"key naming convention violation: `{key}` does not follow the configured {convention} convention"
        if suggestion and suggestion != key:
            message += f". Suggested: `{suggestion}`"
        return message
