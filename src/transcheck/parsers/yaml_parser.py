"""YAML catalog parser."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import yaml

from transcheck.parsers.base import BaseParser, ParserError, flatten_pairs


class YamlParser(BaseParser):
    """Parser for YAML catalogs such as Symfony ``messages.en.yaml`` files."""

    kind = "yaml"
    extensions = ("yaml", "yml")

    def _load_entries(self) -> list[tuple[str, Any]]:
        try:
            data = yaml.safe_load(self.read_text())
        except yaml.YAMLError as e:
            raise ParserError(f"Invalid YAML in {self.file_name}: {e}") from e

        if data is None:
            return []
        if not isinstance(data, Mapping):
            raise ParserError(f"Top level of {self.file_name} must be a mapping")
        return flatten_pairs(data.items())
