"""Base parser classes for translation catalog files.

Every format reader exposes the same small contract to the validation
engine: an ordered list of translation keys (``None`` when the file cannot
be parsed) and the string content stored under a key. Nested formats are
flattened so that ``{"user": {"name": "Name"}}`` yields the key
``user.name``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, ClassVar

logger = logging.getLogger(__name__)

KEY_SEPARATOR = "."


class ParserError(Exception):
    """Raised when a file cannot be read or parsed by a parser."""


class OrderedPairs(list):  # type: ignore[type-arg]
    """Key/value pairs of one mapping in document order, duplicates included.

    Used by readers whose source format allows a key to appear twice in the
    same mapping, so that duplicate detection still sees every occurrence.
    """


def flatten_pairs(pairs: Iterable[tuple[Any, Any]], prefix: str = "") -> list[tuple[str, Any]]:
    """Flatten nested mappings into dotted keys.

    Args:
        pairs: Iterable of (key, value) tuples. Values that are mappings or
            OrderedPairs are descended into.
        prefix: Key prefix of the enclosing mapping.

    Returns:
        List of (dotted key, leaf value) tuples in document order.
    """
    entries: list[tuple[str, Any]] = []
    for key, value in pairs:
        full_key = f"{prefix}{KEY_SEPARATOR}{key}" if prefix else str(key)
        if isinstance(value, OrderedPairs):
            entries.extend(flatten_pairs(value, full_key))
        elif isinstance(value, Mapping):
            entries.extend(flatten_pairs(value.items(), full_key))
        else:
            entries.append((full_key, value))
    return entries


class BaseParser(ABC):
    """Abstract base class for all catalog parsers.

    Content is loaded lazily on first access. A failed load is remembered in
    ``error`` and turns ``extract_keys()`` into ``None`` instead of raising.

    Attributes:
        kind: Registry key of the parser (e.g. "xliff").
        extensions: File extensions handled by the parser, without the dot.
        path: Path of the parsed file.
        error: Reason the file could not be parsed, once loading failed.
    """

    kind: ClassVar[str] = ""
    extensions: ClassVar[tuple[str, ...]] = ()

    def __init__(self, file_path: str | Path) -> None:
        """Initialize parser for a file.

        Args:
            file_path: Path to the catalog file.

        Raises:
            ParserError: If the file does not exist or has an unsupported extension.
        """
        path = Path(file_path)
        if not path.is_file():
            raise ParserError(f"File does not exist: {path}")
        if path.suffix.lower().lstrip(".") not in self.extensions:
            raise ParserError(
                f"File extension '{path.suffix}' is not supported by {type(self).__name__}: {path}"
            )

        self.path = path
        self.error: str | None = None
        self._entries: list[tuple[str, Any]] | None = None
        self._values: dict[str, Any] = {}
        self._loaded = False

    @property
    def file_name(self) -> str:
        return self.path.name

    @property
    def file_path(self) -> str:
        return str(self.path)

    @property
    def file_directory(self) -> str:
        return str(self.path.parent)

    def read_text(self) -> str:
        """Read the file as UTF-8 text.

        Raises:
            ParserError: If the file cannot be read or is not valid UTF-8.
        """
        try:
            return self.path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as e:
            raise ParserError(f"Could not read {self.path}: {e}") from e

    @abstractmethod
    def _load_entries(self) -> list[tuple[str, Any]]:
        """Parse the file into flattened (key, value) pairs.

        Returns:
            Pairs in document order. Duplicate keys are kept.

        Raises:
            ParserError: If the content cannot be parsed.
        """

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._loaded = True
        try:
            self._entries = self._load_entries()
        except ParserError as e:
            self.error = str(e)
            logger.debug("Parsing %s failed: %s", self.file_path, e)
            return
        # Later occurrences of a key win for lookups
        self._values = dict(self._entries)

    def extract_keys(self) -> list[str] | None:
        """Return the translation keys in document order.

        Returns:
            List of keys (duplicates included), or None if the file could not
            be parsed.
        """
        self._ensure_loaded()
        if self._entries is None:
            return None
        return [key for key, _ in self._entries]

    def get_content_by_key(self, key: str) -> str | None:
        """Return the string stored under a key, or None if absent or not a string."""
        self._ensure_loaded()
        value = self._values.get(key)
        return value if isinstance(value, str) else None
