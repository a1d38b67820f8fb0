"""
Configuration management for the field mapper.

Handles persistent configuration including:
- hit-testing tolerances for the connection editor
- location of the field catalog file

Config is stored in config.json next to the executable/project root.
Environment variables (FIELDMAP_*) take priority over the file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from fieldmap.connect.controller import Tolerances
from fieldmap.paths import get_config_path, get_default_catalog_path

logger = logging.getLogger(__name__)

# config.json key -> environment variable
_TOLERANCE_ENV = {
    'hint_radius': 'FIELDMAP_HINT_RADIUS',
    'hover_radius': 'FIELDMAP_HOVER_RADIUS',
    'drop_hit_margin': 'FIELDMAP_DROP_HIT_MARGIN',
    'click_slop': 'FIELDMAP_CLICK_SLOP',
}
CATALOG_ENV = 'FIELDMAP_CATALOG'


def load_config(config_path: Optional[Path] = None) -> dict:
    """Load configuration from config.json."""
    config_path = config_path or get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning(f"Ignoring unreadable config {config_path}: {e}")
            return {}
    return {}


def _as_float(value: Any, name: str) -> Optional[float]:
    try:
        result = float(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-numeric setting {name}={value!r}")
        return None
    if result < 0:
        logger.warning(f"Ignoring negative setting {name}={value!r}")
        return None
    return result


def get_tolerances(config: Optional[dict] = None) -> Tolerances:
    """
    Get hit-testing tolerances.

    Priority:
    1. Environment variables FIELDMAP_HINT_RADIUS etc.
    2. "tolerances" section of config.json
    3. Defaults from fieldmap.connect.constants
    """
    if config is None:
        config = load_config()
    section = config.get('tolerances') or {}

    values = {}
    for key, env_name in _TOLERANCE_ENV.items():
        raw = os.environ.get(env_name)
        name = env_name
        if raw is None:
            raw = section.get(key)
            name = f"tolerances.{key}"
        if raw is None:
            continue
        value = _as_float(raw, name)
        if value is not None:
            values[key] = value
    return Tolerances(**values)


def get_catalog_path(config: Optional[dict] = None) -> Optional[Path]:
    """
    Get the catalog file to load, or None to use the built-in demo catalogs.

    Priority:
    1. Environment variable FIELDMAP_CATALOG
    2. "catalog" in config.json
    3. catalog.json next to the app, if it exists
    """
    env_path = os.environ.get(CATALOG_ENV)
    if env_path:
        return Path(env_path)

    if config is None:
        config = load_config()
    if config.get('catalog'):
        return Path(config['catalog'])

    default = get_default_catalog_path()
    return default if default.exists() else None
