"""HTML tag consistency validator."""

from __future__ import annotations

import re
from typing import Any

from rich.markup import escape

from transcheck.validators.base import Severity
from transcheck.validators.cross_file import CrossFileValueValidator, list_difference

_TAG_RE = re.compile(r"<(/?)([\w\-]+)([^>]*)>")
_ATTRIBUTE_RE = re.compile(r"""(\w+)=(["'])([^"']*)\2""")


def analyze_html(value: str) -> dict[str, Any]:
    """Analyze the markup embedded in a translation value.

    Tags are matched with a stack. A closing tag that does not close the
    innermost open tag is unmatched, tags left open at the end are unclosed.

    Returns:
        Dict with ``tags`` (opening and self-closing tag names in order),
        ``self_closing_tags``, ``attributes`` (per tag name, last occurrence
        wins) and ``structure_errors``.
    """
    structure: dict[str, Any] = {
        "tags": [],
        "self_closing_tags": [],
        "attributes": {},
        "structure_errors": [],
    }
    stack: list[str] = []

    for match in _TAG_RE.finditer(value):
        is_closing = bool(match.group(1))
        tag_name = match.group(2).lower()
        attributes = match.group(3).strip()

        if is_closing:
            if not stack or stack[-1] != tag_name:
                structure["structure_errors"].append(f"Unmatched closing tag: </{tag_name}>")
            else:
                stack.pop()
            continue

        if attributes.endswith("/"):
            structure["self_closing_tags"].append(tag_name)
            attributes = attributes.rstrip(" /")
        else:
            stack.append(tag_name)

        structure["tags"].append(tag_name)
        if attributes:
            structure["attributes"][tag_name] = {
                attr.group(1): attr.group(3) for attr in _ATTRIBUTE_RE.finditer(attributes)
            }

    for tag_name in stack:
        structure["structure_errors"].append(f"Unclosed tag: <{tag_name}>")
    return structure


class HtmlTagValidator(CrossFileValueValidator):
    """Reports keys whose embedded HTML differs between the files of a file set.

    Compared against the reference file: the sequence of tags, structural
    errors (unclosed or unmatched tags) in the compared file, and ``class``
    attributes of tags present in both.
    """

    name = "html-tags"
    failure_severity = Severity.WARNING
    analysis_field = "html_structure"
    issue_label = "HTML tag"

    def analyze(self, value: str) -> dict[str, Any]:
        return analyze_html(value)

    def compare(self, file_name: str, reference: Any, current: Any) -> tuple[list[str], dict[str, Any]]:
        messages: list[str] = []
        difference: dict[str, Any] = {}

        if reference["tags"] != current["tags"]:
            missing = list_difference(reference["tags"], current["tags"])
            extra = list_difference(current["tags"], reference["tags"])
            if missing:
                messages.append(
                    f"File '{file_name}' is missing HTML tags: " + ", ".join(f"<{t}>" for t in missing)
                )
                difference["missing_tags"] = missing
            if extra:
                messages.append(
                    f"File '{file_name}' has extra HTML tags: " + ", ".join(f"<{t}>" for t in extra)
                )
                difference["extra_tags"] = extra

        errors = current["structure_errors"]
        if errors:
            messages.append(f"File '{file_name}' has HTML structure errors: " + "; ".join(errors))
            difference["structure_errors"] = errors

        current_attributes = current["attributes"]
        for tag_name, reference_attrs in reference["attributes"].items():
            current_attrs = current_attributes.get(tag_name)
            if current_attrs is None:
                continue
            ref_class = reference_attrs.get("class")
            cur_class = current_attrs.get("class")
            if ref_class is not None and cur_class is not None and ref_class != cur_class:
                messages.append(
                    f"File '{file_name}' has different class attribute for <{tag_name}>: "
                    f"'{cur_class}' vs '{ref_class}'"
                )
                difference.setdefault("class_mismatches", {})[tag_name] = {
                    "expected": ref_class,
                    "actual": cur_class,
                }

        return messages, difference

    def highlight(self, value: str) -> str:
        parts: list[str] = []
        last = 0
        for match in _TAG_RE.finditer(value):
            parts.append(escape(value[last : match.start()]))
            color = "magenta" if match.group(1) else "cyan"
            parts.append(f"[{color}]{escape(match.group(0))}[/{color}]")
            last = match.end()
        parts.append(escape(value[last:]))
        return "".join(parts)
