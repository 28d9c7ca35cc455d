#!/usr/bin/env python3
"""
Configuration management for texmaps CLI tools.

This module provides functions for loading, saving, and accessing the
configuration file holding the default generation parameters.
"""

import copy
import json
import logging
import os
from pathlib import Path
from typing import Dict, Any

from texmaps.config import ProcessorSettings
from texmaps.exceptions import TexMapsConfigError

logger = logging.getLogger(__name__)

# Output options plus one section of generation defaults per map type
DEFAULT_CONFIG = {
    "image_format": "png",
    "debug_mode": False,
    **ProcessorSettings().as_dict(),
}

def get_config_path() -> Path:
    """Get the path to the configuration file."""
    override = os.environ.get("TEXMAPS_CONFIG")
    if override:
        return Path(override)
    return Path.home() / ".texmaps_config.json"

def _merge_defaults(config: Dict[str, Any], defaults: Dict[str, Any]) -> Dict[str, Any]:
    """Fill missing keys, including inside nested sections."""
    for key, value in defaults.items():
        if key not in config:
            config[key] = copy.deepcopy(value)
        elif isinstance(value, dict) and isinstance(config[key], dict):
            _merge_defaults(config[key], value)
    return config

def load_config() -> Dict[str, Any]:
    """
    Read the configuration file, writing the defaults when it does not exist.

    Returns:
        Configuration with every default key present, nested sections included.
    """
    config_path = get_config_path()
    try:
        if config_path.exists():
            with open(config_path, 'r') as f:
                config = json.load(f)
            return _merge_defaults(config, DEFAULT_CONFIG)
        else:
            # Create default config
            save_config(DEFAULT_CONFIG)
            return copy.deepcopy(DEFAULT_CONFIG)
    except (OSError, ValueError) as e:
        logger.warning(f"Could not load config file: {e}")
        return copy.deepcopy(DEFAULT_CONFIG)

def save_config(config: Dict[str, Any]) -> None:
    """Write the configuration as indented JSON; failures are only logged."""
    config_path = get_config_path()
    try:
        with open(config_path, 'w') as f:
            json.dump(config, f, indent=2)
    except OSError as e:
        logger.warning(f"Could not save config file: {e}")

def parse_value(value: str) -> Any:
    """
    Interpret a command-line string as a JSON value when possible.

    "true", "3", "0.5" and "[1, 2]" become typed values; anything else stays a string.
    """
    try:
        return json.loads(value)
    except ValueError:
        return value

def get_config_value(key: str, default: Any = None) -> Any:
    """
    Get a value from the config, falling back to a default if not found.

    Args:
        key: Configuration key, dotted for nested sections (e.g. "normal.strength")
        default: Default value to return if key is not found

    Returns:
        The configuration value
    """
    node: Any = load_config()
    for part in key.split('.'):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node

def set_config_value(key: str, value: Any) -> None:
    """
    Set a configuration value and save the config.

    Args:
        key: Configuration key, dotted for nested sections
        value: Value to set
    """
    config = load_config()
    parts = key.split('.')
    node = config
    for part in parts[:-1]:
        node = node.setdefault(part, {})
    node[parts[-1]] = value
    save_config(config)

def reset_config() -> None:
    """Reset configuration to default values."""
    save_config(copy.deepcopy(DEFAULT_CONFIG))

def load_settings() -> ProcessorSettings:
    """
    Build processor settings from the configuration file.

    Raises:
        TexMapsConfigError: If a configured value is invalid
    """
    try:
        return ProcessorSettings.from_dict(load_config())
    except (TypeError, ValueError) as e:
        raise TexMapsConfigError(f"Invalid configuration in {get_config_path()}: {e}") from e
