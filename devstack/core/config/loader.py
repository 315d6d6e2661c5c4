"""
Configuration loader: reads devstack.yml into the config model.

The file is optional.  Without one, every run uses the built-in tool
catalog and default paths.  An explicitly requested file that does
not exist is an error.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from devstack.core.models.config import DevstackConfig

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "devstack.yml"


class ConfigError(Exception):
    """Raised when devstack configuration is invalid or missing."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for devstack.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to devstack.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / CONFIG_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_config(path: Path | None = None) -> DevstackConfig:
    """Load and validate devstack configuration.

    Args:
        path: Explicit path to devstack.yml.  If None, searches upward
            and falls back to defaults when nothing is found.

    Returns:
        Validated DevstackConfig model.

    Raises:
        ConfigError: If an explicit file is missing, or any file is invalid.
    """
    if path is None:
        path = find_config_file()
        if path is None:
            logger.debug("No %s found, using defaults", CONFIG_FILE)
            return DevstackConfig()

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    # An empty file is a valid, all-defaults config
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = DevstackConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config from %s with %d tools", path, len(config.tools))
    return config


def check_config(path: Path | None = None) -> dict:
    """Validate the configuration and report the result without raising.

    Returns::

        {"valid": True, "path": "/repo/devstack.yml", "tools": [...], "errors": []}
    """
    resolved = path or find_config_file()
    try:
        config = load_config(resolved)
    except ConfigError as e:
        return {
            "valid": False,
            "path": str(resolved) if resolved else None,
            "tools": [],
            "errors": [str(e)],
        }
    return {
        "valid": True,
        "path": str(resolved) if resolved else None,
        "tools": config.tools,
        "errors": [],
    }
