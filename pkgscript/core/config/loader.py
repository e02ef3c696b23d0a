"""
Configuration loader — reads the task table into a ScriptsConfig.

Two sources are understood:

    package.json    → the "pkgscript" section
    pkgscript.yml   → flat, or wrapped under a "pkgscript:" key

Both are validated against the same Pydantic schema. Task entries stay
raw until selection time.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from pkgscript.core.errors import ConfigError, summarize_validation_error
from pkgscript.core.models.config import ScriptsConfig

logger = logging.getLogger(__name__)

# Config section name inside package.json / wrapped YAML
CONFIG_SECTION = "pkgscript"

# Candidate filenames, checked in this order in each directory
CONFIG_FILES: tuple[str, ...] = ("pkgscript.yml", "pkgscript.yaml", "package.json")


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Search for a config file starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to the first config file found, or None.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        for name in CONFIG_FILES:
            candidate = current / name
            if candidate.is_file():
                return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def _parse(path: Path, raw: str) -> Any:
    if path.suffix == ".json":
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e


def load_config(path: Path | None = None) -> ScriptsConfig:
    """Load and validate the scripts configuration.

    Args:
        path: Explicit config path. If None, searches upward from cwd.

    Returns:
        Validated ScriptsConfig.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    if path is None:
        path = find_config_file()

    if path is None:
        raise ConfigError(
            f"No configuration found (looked for {', '.join(CONFIG_FILES)})."
        )

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading scripts config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    data = _parse(path, raw)

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")

    # package.json must carry the section; YAML may be flat or wrapped
    if path.suffix == ".json" or CONFIG_SECTION in data:
        section = data.get(CONFIG_SECTION)
        if section is None:
            # no tasks declared: every lookup ends in TaskNotFound
            logger.debug("No '%s' section in %s", CONFIG_SECTION, path)
            section = {}
    else:
        section = data

    if not isinstance(section, dict):
        raise ConfigError(
            f"Expected '{CONFIG_SECTION}' to be a mapping in {path}, got {type(section).__name__}"
        )

    try:
        config = ScriptsConfig.model_validate(section)
    except ValidationError as e:
        raise ConfigError(
            f"Invalid {CONFIG_SECTION} configuration in {path}: {summarize_validation_error(e)}"
        ) from e

    logger.info("Loaded %d task(s) from %s", len(config.scripts), path)
    return config
