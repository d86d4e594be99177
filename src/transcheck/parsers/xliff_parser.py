"""XLIFF catalog parser.

Reads XLIFF 1.2 ``trans-unit`` and XLIFF 2.0 ``unit`` elements with lxml.
Element names are matched by local name so that files with or without the
OASIS namespace declaration are both accepted.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from lxml import etree

from transcheck.parsers.base import BaseParser, ParserError


def _local_name(element: Any) -> str:
    if not isinstance(element.tag, str):
        # Comments and processing instructions
        return ""
    return etree.QName(element).localname


def _text_of(element: Any) -> str:
    return "".join(element.itertext())


class XliffParser(BaseParser):
    """Parser for XLIFF 1.2 and 2.0 files.

    The content of a unit is its ``target`` when present and its ``source``
    otherwise.
    """

    kind = "xliff"
    extensions = ("xlf", "xliff")

    def __init__(self, file_path: str | Path) -> None:
        super().__init__(file_path)
        self.version: str | None = None

    def _parse_tree(self) -> Any:
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        try:
            return etree.parse(self.file_path, parser)
        except (etree.XMLSyntaxError, OSError) as e:
            raise ParserError(f"Invalid XML in {self.file_name}: {e}") from e

    def _load_entries(self) -> list[tuple[str, Any]]:
        root = self._parse_tree().getroot()
        if _local_name(root) != "xliff":
            raise ParserError(f"Root element of {self.file_name} is not <xliff>")
        self.version = root.get("version")

        entries: list[tuple[str, Any]] = []
        for element in root.iter():
            name = _local_name(element)
            if name == "trans-unit":
                entries.append(self._read_unit_12(element))
            elif name == "unit":
                entries.append(self._read_unit_20(element))
        return entries

    def _read_unit_12(self, unit: Any) -> tuple[str, str | None]:
        source = None
        target = None
        for child in unit:
            name = _local_name(child)
            if name == "source":
                source = _text_of(child)
            elif name == "target":
                target = _text_of(child)
        return unit.get("id", ""), target if target is not None else source

    def _read_unit_20(self, unit: Any) -> tuple[str, str | None]:
        sources: list[str] = []
        targets: list[str] = []
        for segment in unit:
            if _local_name(segment) not in ("segment", "ignorable"):
                continue
            for child in segment:
                name = _local_name(child)
                if name == "source":
                    sources.append(_text_of(child))
                elif name == "target":
                    targets.append(_text_of(child))
        if targets:
            return unit.get("id", ""), "".join(targets)
        if sources:
            return unit.get("id", ""), "".join(sources)
        return unit.get("id", ""), None
