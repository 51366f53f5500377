"""
Configuration loader — project root discovery and scaffold.yml.

The destination root of a generator is the nearest ancestor directory
holding the storage marker file. The optional scaffold.yml in that root
provides project-level defaults for options and hooks.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

# Marker file; also the backing file of generator storage.
MARKER_FILE = ".scaffold-rc.json"

# Project-level defaults consulted by Generator.default_for
PROJECT_CONFIG_FILE = "scaffold.yml"


class ConfigError(Exception):
    """Raised when project configuration is invalid."""


def find_project_root(start_dir: Path | None = None) -> Path:
    """Walk up from ``start_dir`` looking for the marker file.

    This allows running generators from subdirectories and still
    writing relative to the project root.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        The nearest directory containing the marker, or ``start_dir``
        itself (resolved) when none is found.
    """
    start = (start_dir or Path.cwd()).resolve()
    current = start

    for _ in range(20):  # safety limit
        if (current / MARKER_FILE).is_file():
            if current != start:
                logger.debug("Found %s in %s", MARKER_FILE, current)
            return current
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return start


def load_project_config(root: Path) -> dict[str, Any]:
    """Load scaffold.yml from a project root.

    Args:
        root: Project root directory.

    Returns:
        The parsed mapping; empty when the file does not exist.

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping.
    """
    path = root / PROJECT_CONFIG_FILE
    if not path.is_file():
        return {}

    logger.debug("Loading project config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    return data


def lookup(config: dict[str, Any], name: str) -> Any:
    """Resolve a dotted name (``"generators.app.style"``) in a config mapping.

    Returns None when any segment is missing. An exact top-level key wins
    over the dotted interpretation.
    """
    if name in config:
        return config[name]

    node: Any = config
    for part in name.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node
