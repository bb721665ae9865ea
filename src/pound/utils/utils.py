# pound/utils/utils.py
"""
pound.utils.utils
=================

Core utility functions for the Pound editor.

Key functionalities include:
- Robust Configuration Loading: an embedded default configuration is
  recursively merged with the user's settings from
  `~/.config/pound/config.toml`, so the editor always has a complete,
  runnable configuration even when the user file is missing or broken.
- Helper Utilities: deep-merging dictionaries and converting hex colours to
  xterm-256 indices for the paint collaborator.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import toml

logger = logging.getLogger("pound")

# --- Constants ---
WHITE_FG_IDX = 255
XTERM_CUBE_BLACK = 16
XTERM_CUBE_WHITE = 231
XTERM_GREY_BASE = 232

CONFIG_DIR = Path.home() / ".config" / "pound"
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Embedded defaults; the ultimate fallback so the application can always start.
DEFAULT_CONFIG: Dict[str, Any] = {
    "editor": {"tab_stop": 8, "quit_times": 2},
    "logging": {
        "file_level": "DEBUG",
        "console_level": "WARNING",
        "log_to_console": False,
        "separate_error_log": False,
    },
    "colors": {
        "number": "#00cdcd",
        "string": "#cdcd00",
        "char_literal": "#808000",
        "comment": "#7f7f7f",
        "block_comment": "#7f7f7f",
        "search_match": "#0000ee",
    },
    # User highlight profiles: [syntax.<name>] tables, see HighlightProfile.
    "syntax": {},
}


def deep_merge(base: Dict, override: Dict) -> Dict:
    """
    Returns a new dictionary with `override` layered over `base`.

    Tables present on both sides are merged key by key; any other value from
    `override` replaces the one in `base`. Nested tables are copied, so the
    result never shares a dict with either argument and editing a loaded
    configuration cannot leak into `DEFAULT_CONFIG`.
    """
    merged = {key: _copy_table(value) for key, value in base.items()}
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = _copy_table(value)
    return merged


def _copy_table(value: Any) -> Any:
    return deep_merge(value, {}) if isinstance(value, dict) else value


def load_config(path: Optional[Union[str, os.PathLike]] = None) -> Dict[str, Any]:
    """
    Loads the embedded defaults and merges the user's TOML configuration on top.

    Args:
        path: Configuration file to read. Defaults to `~/.config/pound/config.toml`.

    Returns:
        The merged configuration. A missing or unparsable user file is logged
        and the defaults are returned.
    """
    final_config = deep_merge({}, DEFAULT_CONFIG)
    logger.debug("Loaded embedded default configuration.")

    user_config_path = Path(path) if path is not None else CONFIG_FILE
    if user_config_path.is_file():
        try:
            user_config = toml.load(user_config_path)
            final_config = deep_merge(final_config, user_config)
            logger.info(f"Successfully loaded and merged user config from {user_config_path}")
        except (toml.TomlDecodeError, OSError) as e:
            logger.error(f"Could not parse user config '{user_config_path}': {e}. Using defaults.")

    return final_config


def _cube_level(channel: int) -> int:
    """Nearest of the six levels of the xterm colour cube for a 0-255 channel."""
    return round(channel / 255 * 5)


def hex_to_xterm(hex_color: str) -> int:
    """
    Converts an ``#rrggbb`` colour (leading ``#`` optional) to an xterm-256 index.

    Pure greys use the 24-step grey ramp, with near-black and near-white
    snapped to the cube corners; other colours map to the 6x6x6 cube.
    Anything that is not three hex bytes yields `WHITE_FG_IDX`.
    """
    try:
        rgb = bytes.fromhex(hex_color.lstrip("#"))
    except ValueError:
        return WHITE_FG_IDX
    if len(rgb) != 3:
        return WHITE_FG_IDX

    r, g, b = rgb
    if r == g == b:
        if r < 8:
            return XTERM_CUBE_BLACK
        if r > 248:
            return XTERM_CUBE_WHITE
        return XTERM_GREY_BASE + round((r - 8) / 247 * 24)
    return XTERM_CUBE_BLACK + 36 * _cube_level(r) + 6 * _cube_level(g) + _cube_level(b)
