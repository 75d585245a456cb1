"""
Catalogs package for the camera metadata resolution engine.

Holds the catalog loader and the process-wide default index. The default
index is built at most once, even when several threads ask for it at the
same time; applications should build it eagerly at startup with
``configure_default_index``.
"""

import logging
import threading
from typing import Optional

from .catalog_index import (
    CatalogIndex,
    SensorIndex,
    ReleaseIndex,
    ClassicIndex,
    LoadReport,
    DATA_DIRECTORY,
    DEFAULT_CATALOG_FILES,
    read_catalog_file,
)
from .config import DEFAULT_CONFIG_PATH, load_config, config_section
from .exceptions import CatalogError

logger = logging.getLogger(__name__)

_default_index: Optional[CatalogIndex] = None
_default_lock = threading.Lock()


def configure_default_index(config_path: Optional[str] = DEFAULT_CONFIG_PATH) -> CatalogIndex:
    """
    Build the default index from configuration, unless one already exists.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        The process-wide CatalogIndex
    """
    global _default_index
    with _default_lock:
        if _default_index is None:
            _default_index = CatalogIndex.from_config(config_path)
        else:
            logger.debug("Default catalog index already built, keeping it")
        return _default_index


def get_default_index() -> CatalogIndex:
    """Return the process-wide index, loading the bundled catalogs on first use."""
    global _default_index
    index = _default_index
    if index is not None:
        return index
    with _default_lock:
        if _default_index is None:
            _default_index = CatalogIndex.load()
        return _default_index


__all__ = [
    'CatalogIndex',
    'SensorIndex',
    'ReleaseIndex',
    'ClassicIndex',
    'LoadReport',
    'CatalogError',
    'DATA_DIRECTORY',
    'DEFAULT_CATALOG_FILES',
    'DEFAULT_CONFIG_PATH',
    'read_catalog_file',
    'load_config',
    'config_section',
    'configure_default_index',
    'get_default_index',
]
