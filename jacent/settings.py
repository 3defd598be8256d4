"""
Settings Module for the Jacent puzzle core

Holds the tunable search and generator defaults and lets tools persist
overrides in a JSON file. Settings are stored in config.json by default.

The move limit min(2 x tiles, 50) is a tuned heuristic, not a proven
bound: it only caps how deep the searches go.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Union

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "move_limit_multiplier": 2,
    "move_limit_cap": 50,
    "default_strategy": "dfs",
    "min_value": 1,
    "max_value": 6,
    "max_attempts": 300,
}


def load_settings(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    Args:
        path: Settings file, defaults to SETTINGS_FILE

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE

    if not settings_file.exists():
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            logger.warning(f"Settings file {settings_file} is not an object, using defaults")
            return DEFAULT_SETTINGS.copy()

        # Merge with defaults to handle missing keys
        result = DEFAULT_SETTINGS.copy()
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()


def save_settings(settings: Dict[str, Any], path: Optional[Union[str, Path]] = None) -> None:
    """
    Save settings to a JSON file.

    Args:
        settings: Settings dictionary to save
        path: Settings file, defaults to SETTINGS_FILE
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE
    try:
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")


def default_move_limit(tile_count: int, settings: Optional[Dict[str, Any]] = None) -> int:
    """
    Default search depth for a grid with tile_count tiles.

    Args:
        tile_count: Occupied cells on the grid
        settings: Settings to read the multiplier and cap from,
                  defaults to DEFAULT_SETTINGS

    Returns:
        min(multiplier x tile_count, cap)
    """
    source = settings if settings is not None else DEFAULT_SETTINGS
    multiplier = source.get("move_limit_multiplier", DEFAULT_SETTINGS["move_limit_multiplier"])
    cap = source.get("move_limit_cap", DEFAULT_SETTINGS["move_limit_cap"])
    return min(multiplier * tile_count, cap)
