"""Path filtering utilities for catalog discovery.

Provides functions to list candidate files while filtering out directories
that never hold project catalogs (virtual environments, caches, VCS data)
and files matching user exclude patterns.
"""

from __future__ import annotations

import fnmatch
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

# Directories to exclude when scanning recursively
IGNORED_DIRS = frozenset(
    {
        ".venv",
        "venv",
        "node_modules",
        "vendor",
        "__pycache__",
        ".git",
        ".hg",
        ".svn",
        ".tox",
        ".nox",
        ".mypy_cache",
        ".pytest_cache",
        ".ruff_cache",
        "site-packages",
    }
)


def should_skip_dir(name: str) -> bool:
    """Check if a directory should be skipped during recursive scanning.

    Args:
        name: Directory name (not a full path).

    Returns:
        True if the directory should be skipped.
    """
    return name in IGNORED_DIRS


def is_excluded(file_path: str | Path, patterns: Iterable[str]) -> bool:
    """Check if a file's basename matches any glob pattern.

    Args:
        file_path: Path of the file.
        patterns: Glob patterns such as ``*.backup.*`` or ``test_*``.

    Returns:
        True if the file should be excluded.
    """
    name = Path(file_path).name
    return any(fnmatch.fnmatch(name, pattern) for pattern in patterns)


def iter_files(root: Path, recursive: bool = False) -> Iterator[Path]:
    """Yield the files below a directory in sorted order.

    Filters out, when recursing:
    - .venv/, venv/, node_modules/, vendor/, __pycache__/
    - VCS directories (.git/, .hg/, .svn/)
    - tool caches (.tox/, .nox/, .mypy_cache/, .pytest_cache/, .ruff_cache/)

    Args:
        root: Directory to scan.
        recursive: Descend into subdirectories.

    Yields:
        File paths.
    """
    if not recursive:
        yield from sorted(p for p in root.iterdir() if p.is_file())
        return

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not should_skip_dir(d))
        for filename in sorted(filenames):
            yield Path(dirpath) / filename
