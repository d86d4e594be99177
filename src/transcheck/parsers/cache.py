"""Run-scoped cache of parser instances."""

from __future__ import annotations

from pathlib import Path

from transcheck.parsers.base import BaseParser
from transcheck.parsers.registry import create_parser, resolve_parser_kind


class ParserCache:
    """Shares one parser per (file, parser kind) between validators.

    A cache belongs to a single validation run. Parsers are read-only views,
    so handing the same instance to several validators is safe.
    """

    def __init__(self) -> None:
        """Initialize an empty cache."""
        self._parsers: dict[tuple[str, str], BaseParser] = {}

    def get(self, file_path: str | Path, kind: str | None = None) -> BaseParser:
        """Get the cached parser for a file, creating it on first use.

        Raises:
            ParserError: If the parser cannot be created.
        """
        resolved = kind or resolve_parser_kind(file_path) or ""
        cache_key = (str(file_path), resolved)
        parser = self._parsers.get(cache_key)
        if parser is None:
            parser = create_parser(file_path, resolved or None)
            self._parsers[cache_key] = parser
        return parser

    def clear(self) -> None:
        self._parsers.clear()

    def __len__(self) -> int:
        return len(self._parsers)
