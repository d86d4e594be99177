"""JSON catalog parser."""

from __future__ import annotations

import json
from typing import Any

from transcheck.parsers.base import BaseParser, OrderedPairs, ParserError, flatten_pairs


class JsonParser(BaseParser):
    """Parser for JSON catalogs.

    Objects are decoded into OrderedPairs so that a key repeated inside one
    object shows up twice in ``extract_keys()``.
    """

    kind = "json"
    extensions = ("json",)

    def _load_entries(self) -> list[tuple[str, Any]]:
        try:
            data = json.loads(self.read_text(), object_pairs_hook=OrderedPairs)
        except json.JSONDecodeError as e:
            raise ParserError(f"Invalid JSON in {self.file_name}: {e}") from e

        if not isinstance(data, OrderedPairs):
            raise ParserError(f"Top level of {self.file_name} must be a JSON object")
        return flatten_pairs(data)
