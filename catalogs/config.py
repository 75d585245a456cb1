"""
Configuration loading.

Reads the YAML configuration shared by the catalog index, the upload gate,
the EXIF reader and the CLI.
"""

import os
import logging
from typing import Any, Dict, Optional

import yaml

from .exceptions import CatalogError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = 'config.yaml'


def load_config(config_path: Optional[str] = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load the YAML configuration file.

    A missing file is not an error: every setting has a default, so an empty
    configuration is returned instead.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Configuration dictionary (empty when the file does not exist)

    Raises:
        CatalogError: If the document's top level is not a mapping
    """
    if not config_path or not os.path.exists(config_path):
        logger.info(f"No configuration file at {config_path!r}, using defaults")
        return {}

    with open(config_path, 'r') as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise CatalogError(f"Configuration {config_path} must be a mapping, got {type(config).__name__}")
    return config


def config_section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return a named configuration section, treating a missing one as empty."""
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise CatalogError(f"Configuration section '{name}' must be a mapping")
    return section
