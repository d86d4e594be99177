"""Configuration management for the transcheck CLI tool.

Handles configuration loading from multiple sources with precedence:
CLI args > environment variables > project config file > pyproject.toml > defaults

The project config file is either given explicitly (``--config``) or found
by searching upward for ``transcheck.yaml``, ``transcheck.yml``,
``transcheck.json`` or ``.transcheckrc`` (TOML).
"""

from __future__ import annotations

import importlib.resources
import json
import os
import sys
from dataclasses import dataclass, field, fields
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema
import yaml

# tomllib is only available in Python 3.11+
if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found]

OUTPUT_FORMATS = ("cli", "json", "github")
FILE_DETECTORS = ("prefix", "suffix", "directory")

# Auto-detected project config files, in lookup order
PROJECT_CONFIG_FILES = ("transcheck.yaml", "transcheck.yml", "transcheck.json", ".transcheckrc")

_LIST_FIELDS = ("paths", "only", "skip", "exclude")
_BOOL_FIELDS = ("strict", "dry_run", "recursive")

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


class ConfigError(ValueError):
    """Raised when a configuration source cannot be read or is invalid."""


@dataclass
class TranscheckConfig:
    """Configuration for the transcheck CLI tool.

    Attributes:
        paths: Directories to search for catalogs.
        only: Run only these validators (registry keys).
        skip: Skip these validators (registry keys).
        exclude: Glob patterns of file names to ignore.
        file_detector: Detector name, auto-detected per directory if None.
        strict: Fail on warnings.
        dry_run: Never fail on errors.
        recursive: Search subdirectories.
        format: Output format (cli, json, github).
        verbose: Verbosity level.
        validator_settings: Settings per validator registry key.
    """

    paths: list[str] = field(default_factory=list)
    only: list[str] = field(default_factory=list)
    skip: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)
    file_detector: str | None = None
    strict: bool = False
    dry_run: bool = False
    recursive: bool = False
    format: str = "cli"
    verbose: int = 0
    validator_settings: dict[str, dict[str, Any]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If any configuration value is invalid.
        """
        for name in _LIST_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, list) or not all(isinstance(item, str) and item for item in value):
                raise ValueError(f"{name} must be a list of non-empty strings")

        for name in _BOOL_FIELDS:
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be a boolean")

        if self.format not in OUTPUT_FORMATS:
            raise ValueError(f"format must be one of: {', '.join(OUTPUT_FORMATS)}")

        if self.file_detector is not None and self.file_detector not in FILE_DETECTORS:
            raise ValueError(f"file_detector must be one of: {', '.join(FILE_DETECTORS)}")

        if isinstance(self.verbose, bool) or not isinstance(self.verbose, int) or self.verbose < 0:
            raise ValueError("verbose must be a non-negative integer")

        if not isinstance(self.validator_settings, dict) or not all(
            isinstance(settings, dict) for settings in self.validator_settings.values()
        ):
            raise ValueError("validator_settings must map validator names to tables of settings")


def _get_config_field_names() -> set[str]:
    """Get the set of valid configuration field names.

    Returns:
        Set of field names from TranscheckConfig.
    """
    return {f.name for f in fields(TranscheckConfig)}


def _normalize_keys(data: dict[str, Any]) -> dict[str, Any]:
    """Map kebab-case file keys (``dry-run``) to field names (``dry_run``).

    Unknown keys are dropped.
    """
    valid_fields = _get_config_field_names()
    result: dict[str, Any] = {}
    for key, value in data.items():
        name = key.replace("-", "_")
        if name in valid_fields:
            result[name] = value
    return result


def _parse_bool(value: str, name: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got '{value}'")


def _search_upward(filenames: tuple[str, ...], start_dir: Path | None) -> Path | None:
    directory = (start_dir or Path.cwd()).resolve()
    for candidate_dir in (directory, *directory.parents):
        for filename in filenames:
            config_path = candidate_dir / filename
            if config_path.is_file():
                return config_path
    return None


def find_config_file(filename: str, start_dir: Path | None = None) -> Path | None:
    """Find a file in ``start_dir`` (default: cwd) or the nearest parent holding it.

    Args:
        filename: Name of the file, e.g. "pyproject.toml".
        start_dir: First directory to look in.

    Returns:
        Path to the file, or None when no directory up to the root has it.
    """
    return _search_upward((filename,), start_dir)


def find_project_config(start_dir: Path | None = None) -> Path | None:
    """Find the nearest project config file.

    Each directory is checked for all candidate names before moving up, so
    a file closer to ``start_dir`` always wins.
    """
    return _search_upward(PROJECT_CONFIG_FILES, start_dir)


def _load_toml_file(path: Path) -> dict[str, Any]:
    """Load a TOML file and return its contents.

    Args:
        path: Path to the TOML file.

    Returns:
        Dictionary containing the parsed TOML content.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    with open(path, "rb") as f:
        result: dict[str, Any] = tomllib.load(f)
        return result


@lru_cache(maxsize=None)
def _config_schema() -> dict[str, Any]:
    resource = importlib.resources.files("transcheck") / "schemas" / "config.schema.json"
    schema: dict[str, Any] = json.loads(resource.read_text(encoding="utf-8"))
    return schema


def validate_config_data(data: dict[str, Any], source: str) -> None:
    """Validate raw config file data against the bundled JSON Schema.

    Args:
        data: Parsed file content with kebab-case keys.
        source: File name used in the error message.

    Raises:
        ConfigError: Listing every violation as ``[path] message``.
    """
    validator = jsonschema.Draft202012Validator(_config_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    if not errors:
        return
    lines = []
    for e in errors:
        location = "/".join(str(part) for part in e.absolute_path) or "root"
        lines.append(f"[{location}] {e.message}")
    raise ConfigError(f"{source} does not match the configuration schema:\n" + "\n".join(lines))


def read_config_file(path: Path) -> dict[str, Any]:
    """Read and validate a project config file.

    The format follows the extension: ``.yaml``/``.yml`` (PyYAML),
    ``.json``, anything else is read as TOML.

    Args:
        path: Path to the config file.

    Returns:
        Configuration values keyed by field name.

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
    """
    try:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        elif path.suffix == ".json":
            data = json.loads(path.read_text(encoding="utf-8"))
        else:
            data = _load_toml_file(path)
    except OSError as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Could not parse config file {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping at the top level")

    validate_config_data(data, path.name)
    return _normalize_keys(data)


def _load_from_pyproject(start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from pyproject.toml [tool.transcheck] section.

    Args:
        start_dir: Directory to start searching from.

    Returns:
        Dictionary containing configuration from pyproject.toml, or empty dict if not found.
    """
    config_path = find_config_file("pyproject.toml", start_dir)
    if config_path is None:
        return {}

    try:
        data = _load_toml_file(config_path)
        tool_section = data.get("tool", {})
        transcheck_section = tool_section.get("transcheck", {})
        return _normalize_keys(transcheck_section)
    except (tomllib.TOMLDecodeError, OSError):
        return {}


def _load_from_project_file(config_file: Path | None = None, start_dir: Path | None = None) -> dict[str, Any]:
    """Load configuration from the explicit or auto-detected project config file.

    Args:
        config_file: Explicit config file, replaces auto-detection.
        start_dir: Directory to start searching from.

    Returns:
        Configuration values, or empty dict if no file was found.

    Raises:
        ConfigError: If an explicit file does not exist or any file is invalid.
    """
    if config_file is not None:
        if not config_file.is_file():
            raise ConfigError(f"Config file not found: {config_file}")
        return read_config_file(config_file)

    config_path = find_project_config(start_dir)
    if config_path is None:
        return {}
    return read_config_file(config_path)


def _load_from_env() -> dict[str, Any]:
    """Load configuration from environment variables.

    Environment variables are prefixed with TRANSCHECK_ and use uppercase names.
    For example: TRANSCHECK_FORMAT, TRANSCHECK_STRICT, TRANSCHECK_FILE_DETECTOR

    Returns:
        Dictionary containing configuration from environment variables.

    Raises:
        ConfigError: If a boolean variable holds an unrecognized value.
    """
    env_mapping = {
        "TRANSCHECK_FORMAT": "format",
        "TRANSCHECK_STRICT": "strict",
        "TRANSCHECK_DRY_RUN": "dry_run",
        "TRANSCHECK_RECURSIVE": "recursive",
        "TRANSCHECK_FILE_DETECTOR": "file_detector",
    }

    result: dict[str, Any] = {}
    for env_var, config_key in env_mapping.items():
        value = os.environ.get(env_var)
        if value is None:
            continue
        result[config_key] = _parse_bool(value, env_var) if config_key in _BOOL_FIELDS else value

    return result


def _merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge multiple configuration dictionaries.

    Later dictionaries take precedence over earlier ones.

    Args:
        *configs: Configuration dictionaries to merge, in order of increasing precedence.

    Returns:
        Merged configuration dictionary.
    """
    result: dict[str, Any] = {}
    for config in configs:
        for key, value in config.items():
            if value is not None:
                result[key] = value
    return result


def load_config(
    cli_overrides: dict[str, Any] | None = None,
    start_dir: Path | None = None,
    config_file: Path | None = None,
) -> TranscheckConfig:
    """Load configuration with full precedence chain.

    Loads configuration from multiple sources and merges them with the following
    precedence (highest to lowest):
    1. CLI arguments (cli_overrides)
    2. Environment variables (TRANSCHECK_*)
    3. Project config file (explicit ``config_file`` or auto-detected)
    4. pyproject.toml [tool.transcheck] section
    5. Default values

    Args:
        cli_overrides: Configuration overrides from CLI arguments.
        start_dir: Directory to start searching for config files.
        config_file: Explicit project config file.

    Returns:
        Fully resolved TranscheckConfig instance.

    Raises:
        ValueError: If a source is unreadable or the resulting configuration
            is invalid (ConfigError is a ValueError).
    """
    # Load from each source (in order of increasing precedence)
    pyproject_config = _load_from_pyproject(start_dir)
    project_config = _load_from_project_file(config_file, start_dir)
    env_config = _load_from_env()
    cli_config = cli_overrides or {}

    # Filter CLI overrides to only valid fields
    valid_fields = _get_config_field_names()
    cli_config = {k: v for k, v in cli_config.items() if k in valid_fields and v is not None}

    merged = _merge_configs(
        pyproject_config,
        project_config,
        env_config,
        cli_config,
    )

    # Create config instance (defaults are applied by the dataclass)
    return TranscheckConfig(**merged)
