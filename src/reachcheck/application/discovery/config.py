"""Analysis configuration discovery.

Searched in order (first found wins):
    .reachcheckrc          JSON
    .reachcheckrc.json     JSON
    package.json           "reachcheck" field
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Final

from loguru import logger

from reachcheck.domain.exceptions.configuration import ConfigurationError
from reachcheck.domain.model.configuration import AnalysisConfig

CONFIG_FILE_NAMES: Final = (".reachcheckrc", ".reachcheckrc.json")
PACKAGE_JSON_FIELD: Final = "reachcheck"

# File key -> AnalysisConfig field
_KEY_MAP: Final = {
    "maxReexportDepth": "max_reexport_depth",
    "ignorePatterns": "ignore_patterns",
    "useIgnoreFile": "use_ignore_file",
    "workers": "workers",
    "ecosystem": "ecosystem",
    "detectWorkspaces": "detect_workspaces",
}


def find_config_file(source_root: Path) -> Path | None:
    """First config source present in source_root, or None."""
    for name in CONFIG_FILE_NAMES:
        candidate = source_root / name
        if candidate.is_file():
            return candidate

    package_json = source_root / "package.json"
    if package_json.is_file():
        data = _load_json(package_json)
        if isinstance(data, dict) and PACKAGE_JSON_FIELD in data:
            return package_json
    return None


def load_config(source_root: Path, config_file: Path | None = None) -> AnalysisConfig:
    """Load analysis configuration for a source root.

    Args:
        source_root: Project directory searched for config sources
        config_file: Explicit config file (skips the search)

    Returns:
        AnalysisConfig (defaults when no source is found)

    Raises:
        ConfigurationError: If the source is invalid JSON, not an object,
            contains unknown keys or invalid values
    """
    source = config_file if config_file is not None else find_config_file(source_root)
    if source is None:
        return AnalysisConfig()

    data = _load_json(source)
    if source.name == "package.json" and isinstance(data, dict):
        data = data.get(PACKAGE_JSON_FIELD)

    if not isinstance(data, dict):
        raise ConfigurationError("configuration must be a JSON object", source)

    logger.debug(f"Loaded configuration from {source}")
    return config_from_mapping(data, source)


def config_from_mapping(data: dict[str, Any], source: Path | None = None) -> AnalysisConfig:
    """Build AnalysisConfig from camelCase (or snake_case) keys.

    Raises:
        ConfigurationError: On unknown keys or values AnalysisConfig rejects
    """
    snake_keys = frozenset(_KEY_MAP.values())
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        field_name = _KEY_MAP.get(key, key if key in snake_keys else None)
        if field_name is None:
            raise ConfigurationError(f"unknown key {key!r}", source)
        kwargs[field_name] = value

    if "ignore_patterns" in kwargs:
        patterns = kwargs["ignore_patterns"]
        if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            raise ConfigurationError("ignorePatterns must be a list of strings", source)
        kwargs["ignore_patterns"] = tuple(patterns)

    try:
        return AnalysisConfig(**kwargs)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(str(e), source) from e


def _load_json(path: Path) -> object:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"invalid JSON: {e}", path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"cannot read file: {e}", path) from e
