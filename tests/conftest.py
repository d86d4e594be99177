"""Pytest configuration and fixtures for transcheck tests."""

import os
from collections.abc import Generator

import pytest

# Set a fixed terminal width to prevent line wrapping issues in CI
# This must be set before any Rich imports
os.environ.setdefault("COLUMNS", "200")
os.environ.setdefault("LINES", "50")
# Disable Rich's terminal detection to ensure consistent output
os.environ.setdefault("TERM", "dumb")

TRANSCHECK_ENV_VARS = (
    "TRANSCHECK_FORMAT",
    "TRANSCHECK_STRICT",
    "TRANSCHECK_DRY_RUN",
    "TRANSCHECK_RECURSIVE",
    "TRANSCHECK_FILE_DETECTOR",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep TRANSCHECK_* variables of the calling shell out of the tests."""
    for var in TRANSCHECK_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    yield
