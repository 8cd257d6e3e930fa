"""Configuration loading with fail-fast behavior and layered merging.

Two layers are merged, later overriding earlier:
1. Global user config (~/.clipkeep/config.json)
2. Project local config (<cwd>/.clipkeep/config.json)

With no config files at all, the Pydantic defaults are used.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from clipkeep.config.schema import Config
from clipkeep.core.constants import CLIPKEEP_DIR_NAME, get_default_config_path
from clipkeep.core.errors import ConfigError

logger = logging.getLogger(__name__)


def load_config(
    path: Path | None = None,
    cwd: Path | None = None,
    home_dir: Path | None = None,
) -> Config:
    """Load configuration from file with layered merging.

    Args:
        path: Explicit config file path. If provided, skips layered loading.
        cwd: Working directory for the local layer. Defaults to Path.cwd().
        home_dir: Global config directory override (for testing).

    Returns:
        Validated Config object.

    Raises:
        ConfigError: If any config file contains invalid JSON or the merged
            config fails validation.
    """
    if path is not None:
        return _load_from_path(path)

    effective_cwd = cwd or Path.cwd()
    global_path = (
        home_dir / CLIPKEEP_DIR_NAME / "config.json"
        if home_dir is not None
        else get_default_config_path()
    )
    layers = [
        global_path,
        effective_cwd / CLIPKEEP_DIR_NAME / "config.json",
    ]

    merged: dict[str, Any] = {}
    loaded_from: list[Path] = []

    for layer in layers:
        # cwd may be the home directory; don't load the same file twice
        if layer.resolve() in (p.resolve() for p in loaded_from):
            continue
        if not layer.is_file():
            logger.debug("No config layer at %s", layer)
            continue
        data = _read_layer(layer)
        if data:
            merged = _merge_sections(merged, data)
            loaded_from.append(layer)

    if loaded_from:
        logger.info("Config loaded from: %s", [str(p) for p in loaded_from])
    else:
        logger.debug("No config files found, using Pydantic defaults")
        return Config()

    try:
        return Config.model_validate(merged)
    except ValidationError as e:
        sources = ", ".join(str(p) for p in loaded_from)
        raise ConfigError(f"Config validation failed (merged from {sources}): {e}") from e


def _load_from_path(path: Path) -> Config:
    """Load and validate config from a specific path.

    Raises:
        ConfigError: If file doesn't exist, contains invalid JSON, or fails validation.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        return Config.model_validate(_read_layer(path))
    except ValidationError as e:
        raise ConfigError(f"Config validation failed for {path}: {e}") from e


def _read_layer(path: Path) -> dict[str, Any]:
    """Parse one config.json. Blank files count as an empty layer.

    Raises:
        ConfigError: If the file can't be read or isn't a JSON object.
    """
    try:
        # utf-8-sig: editors on Windows save config.json with a BOM
        content = path.read_text(encoding="utf-8-sig").strip()
    except OSError as e:
        raise ConfigError(f"Failed to read config file {path}: {e}") from e

    if not content:
        return {}

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected object in {path}, got {type(data).__name__}")
    return data


def _merge_sections(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Overlay one layer on another, field by field within each section.

    Sections (analysis, storage, capture, logging) hold only scalars, so one
    level of merging is all the schema needs. Anything that is not a dict
    on both sides is replaced outright and left for validation to judge.
    """
    result = dict(base)
    for section, fields in override.items():
        current = result.get(section)
        if isinstance(current, dict) and isinstance(fields, dict):
            result[section] = {**current, **fields}
        else:
            result[section] = fields
    return result
