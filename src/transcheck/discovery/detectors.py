"""File detectors grouping catalog files into translation sets.

A detector maps a flat list of files to ``{group key: [files]}``. Files of
one group are translations of each other, e.g. ``de.messages.xlf`` and
``messages.xlf`` both belong to the group ``messages.xlf``.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import ClassVar

LANGUAGE_CODE = r"[a-z]{2}(?:[-_][A-Z]{2})?"
LANGUAGE_DIR_RE = re.compile(rf"^{LANGUAGE_CODE}$")


class UnknownDetectorError(KeyError):
    """Raised when a file detector name is not registered."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown file detector '{self.name}'. Available detectors: {', '.join(DETECTORS)}"


class BaseDetector(ABC):
    """Abstract base class for file detectors."""

    name: ClassVar[str] = ""

    def map_translation_set(self, files: Sequence[str]) -> dict[str, list[str]]:
        """Group files by translation set.

        Args:
            files: File paths to group.

        Returns:
            Mapping of group key to the files of the group, in input order.
            Files that match no pattern of the detector are left out.
        """
        groups: dict[str, list[str]] = {}
        for file_path in files:
            key = self.group_key(Path(file_path))
            if key is not None:
                groups.setdefault(key, []).append(file_path)
        return groups

    @abstractmethod
    def group_key(self, path: Path) -> str | None:
        """Return the group key of a file, or None if the file does not fit."""


class PrefixFileDetector(BaseDetector):
    """Language prefix naming: ``de.locallang.xlf`` next to ``locallang.xlf``.

    Unprefixed source files are grouped under their own name when they look
    like catalogs, configuration files excluded.
    """

    name = "prefix"

    _PREFIXED = re.compile(rf"^({LANGUAGE_CODE})\.(.+)$", re.IGNORECASE)
    _KNOWN_NAMES = re.compile(r"^(locallang|messages|validation|errors|labels|translations?|test)\.")
    _GENERIC = re.compile(r"^[^.]+\.(xlf|xliff|json|ya?ml|php)$", re.IGNORECASE)
    _NOT_CATALOG = re.compile(r"(config|validator|setting)")

    def group_key(self, path: Path) -> str | None:
        basename = path.name
        match = self._PREFIXED.match(basename)
        if match:
            return match.group(2)
        if self._KNOWN_NAMES.match(basename):
            return basename
        if self._GENERIC.match(basename) and not self._NOT_CATALOG.search(basename):
            return basename
        return None


class SuffixFileDetector(BaseDetector):
    """Language suffix naming: ``messages.en.yaml``, ``messages.de_DE.json``."""

    name = "suffix"

    _SUFFIXED = re.compile(
        r"^([^.]+)\.[a-z]{2}([-_][A-Z]{2})?(\.ya?ml|\.xlf|\.xliff|\.json|\.php)?$",
        re.IGNORECASE,
    )

    def group_key(self, path: Path) -> str | None:
        match = self._SUFFIXED.match(path.name)
        return match.group(1) if match else None


class DirectoryFileDetector(BaseDetector):
    """One directory per language: ``lang/en/auth.php``, ``lang/de/auth.php``."""

    name = "directory"

    _FILE = re.compile(r"^([^.]+)\.(php|json|ya?ml|xlf|xliff)$", re.IGNORECASE)

    def group_key(self, path: Path) -> str | None:
        if not LANGUAGE_DIR_RE.match(path.parent.name):
            return None
        match = self._FILE.match(path.name)
        return match.group(1) if match else None


# Detectors in the order they are tried during auto-detection
DETECTORS: dict[str, type[BaseDetector]] = {
    detector_class.name: detector_class
    for detector_class in (PrefixFileDetector, SuffixFileDetector, DirectoryFileDetector)
}


def get_detector(name: str) -> BaseDetector:
    """Instantiate a detector by name.

    Raises:
        UnknownDetectorError: If the name is not registered.
    """
    try:
        return DETECTORS[name]()
    except KeyError:
        raise UnknownDetectorError(name) from None
