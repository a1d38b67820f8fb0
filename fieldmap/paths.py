"""
Where the field mapper looks for its files on disk.

config.json and catalog.json sit side by side in one directory. A frozen
build keeps them beside the executable rather than inside the bundle.
"""

import os
import sys
from pathlib import Path

HOME_ENV = 'FIELDMAP_HOME'


def get_app_dir() -> Path:
    """
    Directory holding config.json and catalog.json.

    FIELDMAP_HOME wins when set. Otherwise a frozen build uses the folder of
    the executable and a source checkout uses the repository root.
    """
    home = os.environ.get(HOME_ENV)
    if home:
        return Path(home).expanduser()
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parents[1]


def get_config_path() -> Path:
    return get_app_dir() / "config.json"


def get_default_catalog_path() -> Path:
    """Catalog picked up when neither FIELDMAP_CATALOG nor config.json names one."""
    return get_app_dir() / "catalog.json"
