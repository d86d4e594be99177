"""Collect catalog files from paths and group them into translation sets."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from transcheck.discovery.detectors import (
    DETECTORS,
    LANGUAGE_DIR_RE,
    BaseDetector,
    DirectoryFileDetector,
)
from transcheck.discovery.path_filter import is_excluded, iter_files
from transcheck.parsers.registry import resolve_parser_kind

logger = logging.getLogger(__name__)

# parser kind -> path -> group key -> files
CollectedFiles = dict[str, dict[str, dict[str, list[str]]]]


class Collector:
    """Finds catalog files and groups them by parser kind, path and set key.

    Without an explicit detector, files are grouped per directory and every
    detector is tried on each directory. The grouping that covers the most
    files with the fewest sets wins, ties going to the earlier detector
    (prefix, suffix, directory). Directories named like a language code (``en``, ``de_DE``) are
    grouped by their parent so that ``lang/en/auth.php`` and
    ``lang/de/auth.php`` land in the same set.
    """

    def __init__(
        self,
        exclude: Sequence[str] = (),
        recursive: bool = False,
        detector: BaseDetector | None = None,
    ) -> None:
        """Initialize collector.

        Args:
            exclude: Glob patterns matched against file basenames.
            recursive: Search subdirectories.
            detector: Detector to use for every path. Auto-detected per
                directory when omitted.
        """
        self.exclude = list(exclude)
        self.recursive = recursive
        self.detector = detector

    def collect(self, paths: Iterable[str | Path]) -> CollectedFiles:
        """Collect and group the catalog files below the given paths.

        Args:
            paths: Directories (or single files) to search.

        Returns:
            Mapping ``parser kind -> path -> set key -> files``. Paths that
            do not exist are logged and skipped.
        """
        collected: CollectedFiles = {}
        for raw_path in paths:
            path = Path(raw_path)
            if not path.exists():
                logger.error("Path %s does not exist, skipping it", raw_path)
                continue

            by_kind = self._find_files(path)
            for kind, files in by_kind.items():
                if self.detector is not None:
                    groups = self.detector.map_translation_set(files)
                    if groups:
                        _merge_groups(collected.setdefault(kind, {}), str(raw_path), groups)
                    continue
                for group_path, groups in self._auto_detect(files).items():
                    _merge_groups(collected.setdefault(kind, {}), group_path, groups)

        if not collected:
            logger.debug("No translation files found in %s", ", ".join(str(p) for p in paths))
        return collected

    def _find_files(self, path: Path) -> dict[str, list[str]]:
        candidates = [path] if path.is_file() else iter_files(path, self.recursive)
        by_kind: dict[str, list[str]] = {}
        for file_path in candidates:
            kind = resolve_parser_kind(file_path)
            if kind is None or is_excluded(file_path, self.exclude):
                continue
            by_kind.setdefault(kind, []).append(str(file_path))
        return by_kind

    def _auto_detect(self, files: list[str]) -> dict[str, dict[str, list[str]]]:
        by_directory: dict[str, list[str]] = {}
        by_language_parent: dict[str, list[str]] = {}
        for file_path in files:
            parent = Path(file_path).parent
            if LANGUAGE_DIR_RE.match(parent.name):
                by_language_parent.setdefault(str(parent.parent), []).append(file_path)
            else:
                by_directory.setdefault(str(parent), []).append(file_path)

        result: dict[str, dict[str, list[str]]] = {}
        for directory, directory_files in sorted(by_directory.items()):
            groups = self._best_grouping(directory_files)
            if groups:
                result[directory] = groups
            else:
                logger.debug("No file detector matched the files in %s", directory)

        directory_detector = DirectoryFileDetector()
        for parent, parent_files in sorted(by_language_parent.items()):
            groups = directory_detector.map_translation_set(parent_files)
            if groups:
                _merge_groups(result, parent, groups)
        return result

    @staticmethod
    def _best_grouping(files: list[str]) -> dict[str, list[str]]:
        # Most files covered, then fewest groups; ties keep registry order
        best: dict[str, list[str]] = {}
        best_score = (0, 0)
        for detector_class in DETECTORS.values():
            groups = detector_class().map_translation_set(files)
            if not groups:
                continue
            score = (sum(len(group) for group in groups.values()), -len(groups))
            if not best or score > best_score:
                best, best_score = groups, score
        return best


def _merge_groups(
    target: dict[str, dict[str, list[str]]], group_path: str, groups: dict[str, list[str]]
) -> None:
    """Add groups under group_path, extending sets that already exist there.

    Several input paths can map to the same group path (``lang/en`` and
    ``lang/de`` both group under ``lang``). Files keep their first-seen order
    and are listed once.
    """
    existing = target.setdefault(group_path, {})
    for group_key, files in groups.items():
        group_files = existing.setdefault(group_key, [])
        for file_path in files:
            if file_path not in group_files:
                group_files.append(file_path)
