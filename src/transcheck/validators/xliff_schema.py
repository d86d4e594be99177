"""XLIFF schema validator.

Validates XLIFF documents against bundled XSD schemas with lxml. Each
schema violation reported by libxml2 becomes one issue carrying its line,
column, level and error code.
"""

from __future__ import annotations

import importlib.resources
import logging
from functools import lru_cache
from typing import Any

from lxml import etree

from transcheck.parsers.base import BaseParser
from transcheck.validators.base import BaseValidator, Issue, ProcessResult, Severity

logger = logging.getLogger(__name__)

SCHEMA_FILES = {
    "1.2": "xliff-core-1.2-subset.xsd",
    "2.0": "xliff-core-2.0-subset.xsd",
}


@lru_cache(maxsize=None)
def load_schema(version: str) -> etree.XMLSchema:
    """Load the bundled XSD for an XLIFF version.

    Raises:
        KeyError: If no schema is bundled for the version.
    """
    resource = importlib.resources.files("transcheck") / "schemas" / SCHEMA_FILES[version]
    with resource.open("rb") as f:
        return etree.XMLSchema(etree.parse(f))


class XliffSchemaValidator(BaseValidator):
    """Checks XLIFF 1.2 and 2.0 files against the XLIFF schema.

    Other XLIFF versions cannot be validated; they are skipped with a notice
    rather than reported as violations.
    """

    name = "xliff-schema"
    failure_severity = Severity.ERROR
    supported_parsers = frozenset({"xliff"})

    def process_file(self, parsed: BaseParser) -> ProcessResult:
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            document = etree.parse(parsed.file_path, parser)
        except (etree.XMLSyntaxError, OSError) as e:
            logger.error("Schema validation of %s failed, the file is not well-formed: %s", parsed.file_name, e)
            return None

        version = document.getroot().get("version") or ""
        if version not in SCHEMA_FILES:
            logger.info("Skipping schema validation of %s: unsupported XLIFF version '%s'", parsed.file_name, version)
            return None

        schema = load_schema(version)
        if schema.validate(document):
            return None

        errors: list[dict[str, Any]] = []
        for entry in schema.error_log:
            errors.append(
                {
                    "message": entry.message,
                    "line": entry.line,
                    "column": entry.column,
                    "level": entry.level_name,
                    "code": entry.type,
                }
            )
        return errors

    def format_issue_message(self, issue: Issue) -> str:
        details = issue.details
        message = str(details.get("message", "Schema validation error"))
        if details.get("line") is not None:
            message += f" (Line: {details['line']})"
        if details.get("code") is not None:
            message += f" (Code: {details['code']})"
        return message
