"""Threshold validators: file size in keys and key nesting depth."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from transcheck.parsers.base import BaseParser
from transcheck.validators.base import BaseValidator, Issue, ProcessResult, Severity

logger = logging.getLogger(__name__)

KEY_DEPTH_SEPARATORS = (".", "_", "-", ":")


def read_threshold(settings: Mapping[str, Any], default: int, validator_name: str) -> int:
    """Read a positive integer ``threshold`` setting, falling back to the default."""
    value = settings.get("threshold", default)
    try:
        threshold = int(value)
    except (TypeError, ValueError):
        logger.warning("Invalid threshold %r for %s, using %d", value, validator_name, default)
        return default
    if isinstance(value, bool) or threshold <= 0:
        logger.warning("Invalid threshold %r for %s, using %d", value, validator_name, default)
        return default
    return threshold


def key_depth(key: str) -> int:
    """Nesting depth of a key: one more than the count of its most used separator.

    Example:
        >>> key_depth("user.profile.settings")
        3
    """
    if not key:
        return 0
    return max([1] + [key.count(sep) + 1 for sep in KEY_DEPTH_SEPARATORS if sep in key])


class KeyCountValidator(BaseValidator):
    """Warns about files holding more keys than a threshold (default 300)."""

    name = "key-count"
    failure_severity = Severity.WARNING
    default_threshold = 300

    def __init__(self, settings: Mapping[str, Any] | None = None) -> None:
        super().__init__(settings)
        self.threshold = read_threshold(self.settings, self.default_threshold, self.name)

    def process_file(self, parsed: BaseParser) -> ProcessResult:
        keys = self.keys_of(parsed)
        if keys is None:
            return None

        if len(keys) <= self.threshold:
            return None
        return {
            "message": (
                f"File contains {len(keys)} translation keys, which exceeds the threshold "
                f"of {self.threshold} keys"
            ),
            "key_count": len(keys),
            "threshold": self.threshold,
        }


class KeyDepthValidator(BaseValidator):
    """Warns about keys nested deeper than a threshold (default 8)."""

    name = "key-depth"
    failure_severity = Severity.WARNING
    default_threshold = 8

    def __init__(self, settings: Mapping[str, Any] | None = None) -> None:
        super().__init__(settings)
        self.threshold = read_threshold(self.settings, self.default_threshold, self.name)

    def process_file(self, parsed: BaseParser) -> ProcessResult:
        keys = self.keys_of(parsed)
        if keys is None:
            return None

        violating: list[dict[str, Any]] = []
        for key in keys:
            depth = key_depth(key)
            if depth > self.threshold:
                violating.append({"key": key, "depth": depth, "threshold": self.threshold})
        if not violating:
            return None

        plural = "" if len(violating) == 1 else "s"
        return {
            "message": (
                f"Found {len(violating)} translation key{plural} with nesting depth "
                f"exceeding threshold of {self.threshold}"
            ),
            "violating_keys": violating,
            "threshold": self.threshold,
        }

    def format_issue_message(self, issue: Issue) -> str:
        lines = [str(issue.details.get("message", ""))]
        for entry in issue.details.get("violating_keys", []):
            lines.append(f"  `{entry['key']}` (depth {entry['depth']})")
        return "\n".join(lines)
