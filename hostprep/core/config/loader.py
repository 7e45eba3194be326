"""
Configuration loader — reads hostprep.yml into a Settings model.

The file is optional. When present it is parsed as YAML, validated
against the Pydantic schema, and relative paths in it are anchored to
the directory the file lives in.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from hostprep.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "hostprep.yml"


class ConfigError(Exception):
    """Raised when hostprep.yml exists but is invalid or unreadable."""


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for hostprep.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to hostprep.yml, or None if not found.
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


def load_settings(path: Path | None = None) -> Settings:
    """Load and validate settings.

    Args:
        path: Explicit path to hostprep.yml. If None, searches upward
            and falls back to defaults when nothing is found.

    Returns:
        Validated Settings model.

    Raises:
        ConfigError: If an explicit path is missing, or the file is invalid.
    """
    explicit = path is not None
    if path is None:
        path = find_config_file()

    if path is None:
        logger.debug("No %s found — using defaults", CONFIG_FILE)
        return Settings()

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        return Settings()

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The file may wrap everything under a "hostprep" key or be flat
    settings_data = data.get("hostprep", data)
    if not isinstance(settings_data, dict):
        raise ConfigError(f"Expected a mapping under 'hostprep' in {path}")

    try:
        settings = Settings.model_validate(
            {**settings_data, "base_dir": path.parent.resolve()},
        )
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded settings from %s", path)
    return settings
