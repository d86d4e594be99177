"""Registry mapping parser kinds and file extensions to parser classes."""

from __future__ import annotations

from pathlib import Path

from transcheck.parsers.base import BaseParser, ParserError
from transcheck.parsers.json_parser import JsonParser
from transcheck.parsers.php_parser import PhpParser
from transcheck.parsers.xliff_parser import XliffParser
from transcheck.parsers.yaml_parser import YamlParser

PARSERS: dict[str, type[BaseParser]] = {
    "xliff": XliffParser,
    "yaml": YamlParser,
    "json": JsonParser,
    "php": PhpParser,
}

ALL_PARSER_KINDS = frozenset(PARSERS)


def resolve_parser_kind(file_path: str | Path) -> str | None:
    """Resolve the parser kind for a file from its extension.

    Args:
        file_path: Path of the catalog file.

    Returns:
        Parser kind, or None if no parser handles the extension.
    """
    extension = Path(file_path).suffix.lower().lstrip(".")
    for kind, parser_class in PARSERS.items():
        if extension in parser_class.extensions:
            return kind
    return None


def create_parser(file_path: str | Path, kind: str | None = None) -> BaseParser:
    """Instantiate the parser for a file.

    Args:
        file_path: Path of the catalog file.
        kind: Parser kind to use. Resolved from the extension when omitted.

    Returns:
        A parser instance for the file.

    Raises:
        ParserError: If no parser matches or the file cannot be opened.
    """
    resolved = kind or resolve_parser_kind(file_path)
    if resolved is None or resolved not in PARSERS:
        raise ParserError(f"No parser available for {file_path}")
    return PARSERS[resolved](file_path)
