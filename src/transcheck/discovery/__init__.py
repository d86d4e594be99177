"""Discovery of catalog files and their grouping into translation sets."""

from transcheck.discovery.collector import CollectedFiles, Collector
from transcheck.discovery.detectors import (
    DETECTORS,
    BaseDetector,
    DirectoryFileDetector,
    PrefixFileDetector,
    SuffixFileDetector,
    UnknownDetectorError,
    get_detector,
)
from transcheck.discovery.path_filter import IGNORED_DIRS, is_excluded, iter_files

__all__ = [
    # Collection
    "CollectedFiles",
    "Collector",
    # Detectors
    "DETECTORS",
    "BaseDetector",
    "DirectoryFileDetector",
    "PrefixFileDetector",
    "SuffixFileDetector",
    "UnknownDetectorError",
    "get_detector",
    # Path filtering
    "IGNORED_DIRS",
    "is_excluded",
    "iter_files",
]
