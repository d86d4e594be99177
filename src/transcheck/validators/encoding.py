"""Encoding validator.

Works on the raw bytes of a file rather than on parsed keys, so it also
catches problems that a parser silently tolerates.
"""

from __future__ import annotations

import json
import logging
import re
import unicodedata
from pathlib import Path

from transcheck.parsers.base import BaseParser
from transcheck.validators.base import BaseValidator, Issue, ProcessResult, Severity

logger = logging.getLogger(__name__)

UTF8_BOM = b"\xef\xbb\xbf"

INVISIBLE_CHARACTERS = {
    "\u200b": "Zero-width space",
    "\u200c": "Zero-width non-joiner",
    "\u200d": "Zero-width joiner",
    "\u2060": "Word joiner",
    "\ufeff": "Zero-width no-break space",
    "\u200e": "Left-to-right mark",
    "\u200f": "Right-to-left mark",
    "\u00ad": "Soft hyphen",
}

# C0 controls and DEL, except tab, line feed and carriage return
_CONTROL_CHARACTERS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


def find_invisible_characters(text: str) -> list[str]:
    """Names of the invisible or control characters contained in a text."""
    found = [name for char, name in INVISIBLE_CHARACTERS.items() if char in text]
    if _CONTROL_CHARACTERS_RE.search(text):
        found.append("Control characters")
    return found


class EncodingValidator(BaseValidator):
    """Checks UTF-8 validity, BOM, invisible characters and NFC normalization.

    JSON catalogs are additionally checked for raw syntax errors.
    """

    name = "encoding"
    failure_severity = Severity.WARNING

    def process_file(self, parsed: BaseParser) -> ProcessResult:
        try:
            content = Path(parsed.file_path).read_bytes()
        except OSError as e:
            logger.error("Could not read file content of %s: %s", parsed.file_name, e)
            return None

        if not content:
            return None

        try:
            text = content.decode("utf-8")
        except UnicodeDecodeError:
            return {"encoding": "File is not valid UTF-8 encoded"}

        issues: dict[str, str] = {}
        if content.startswith(UTF8_BOM):
            issues["bom"] = "File contains UTF-8 Byte Order Mark (BOM)"
            text = text[1:]

        invisible = find_invisible_characters(text)
        if invisible:
            issues["invisible_chars"] = f"File contains invisible characters: {', '.join(invisible)}"

        if unicodedata.normalize("NFC", text) != text:
            issues["unicode_normalization"] = "File contains non-NFC normalized Unicode characters"

        if parsed.path.suffix.lower() == ".json":
            try:
                json.loads(text)
            except json.JSONDecodeError as e:
                issues["json_syntax"] = f"File contains invalid JSON syntax: {e.msg} (line {e.lineno})"

        return issues

    def format_issue_message(self, issue: Issue) -> str:
        return "\n".join(
            f"encoding issue: {message}" for message in issue.details.values() if isinstance(message, str)
        )
