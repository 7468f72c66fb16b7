"""
Configuration Loader

Loads YAML configuration files for storage/API settings, the default
session, and the value-to-code maps used when generating SKU codes.
"""

from pathlib import Path
from typing import Any, Dict

import yaml


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'settings.yaml')

    Returns:
        Parsed YAML content as dictionary (empty dict for an empty file)

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def load_settings() -> Dict[str, Any]:
    """
    Load application settings.

    Returns:
        Dictionary with 'storage', 'api' and 'session' sections

    Example:
        {
            'storage': {'path': 'data/pos-store.json', 'store_key': 'fashion-pos-store', ...},
            'api': {'base_url': 'https://...', 'timeout': 30, ...},
            'session': {'tenant_id': 'demo-tenant', ...},
        }
    """
    return load_config('settings.yaml')


def load_code_map() -> Dict[str, str]:
    """
    Load the value-to-code maps used in SKU generation.

    The color, size and unit sections are merged into one lookup keyed by
    lowercase value. Earlier sections win on conflicts.

    Returns:
        Dictionary mapping lowercase attribute/unit value to its code

    Example:
        {'đỏ': 'RED', 'red': 'RED', 'nhỏ': 'S', 'hộp': 'HOP', ...}
    """
    config = load_config('code_maps.yaml')
    merged: Dict[str, str] = {}
    for section in ('colors', 'sizes', 'units'):
        for value, code in (config.get(section) or {}).items():
            merged.setdefault(str(value).lower().strip(), str(code))
    return merged
