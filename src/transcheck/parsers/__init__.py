"""Format readers for translation catalogs (XLIFF, YAML, JSON, PHP arrays)."""

from __future__ import annotations

from transcheck.parsers.base import BaseParser, ParserError
from transcheck.parsers.cache import ParserCache
from transcheck.parsers.json_parser import JsonParser
from transcheck.parsers.php_parser import PhpParser
from transcheck.parsers.registry import (
    ALL_PARSER_KINDS,
    PARSERS,
    create_parser,
    resolve_parser_kind,
)
from transcheck.parsers.xliff_parser import XliffParser
from transcheck.parsers.yaml_parser import YamlParser

__all__ = [
    # Base types
    "BaseParser",
    "ParserError",
    # Parsers
    "JsonParser",
    "PhpParser",
    "XliffParser",
    "YamlParser",
    # Registry
    "ALL_PARSER_KINDS",
    "PARSERS",
    "ParserCache",
    "create_parser",
    "resolve_parser_kind",
]
