#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Configuration file handling for upclean.
"""

from __future__ import annotations

import copy
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from upclean.constants import DEFAULT_LOG_FILE
from upclean.logging_setup import logger


def config_dir() -> Path:
    return Path("~/.config/upclean").expanduser()


def config_file_path() -> Path:
    return config_dir() / "config.toml"


def default_config() -> Dict[str, Any]:
    """Return default configuration."""
    return {
        "log": {
            "file": DEFAULT_LOG_FILE,
        },
        "execute": {
            "skip_warnings": False,
            "skip_unsafe": False,
            "auto_approve_warnings": False,
            "auto_approve_unsafe": False,
        },
    }


def merge_config(base: Dict[str, Any], loaded: Dict[str, Any]) -> Dict[str, Any]:
    """
    Overlay loaded sections on the defaults, one table level deep.

    A key that has a default must keep the default's type; a mismatched
    value (``"false"`` for a boolean, a number for a path) is ignored
    with a warning and the default stays in place.
    """
    merged = copy.deepcopy(base)
    for section, values in loaded.items():
        if isinstance(merged.get(section), dict):
            if not isinstance(values, dict):
                logger.warning(f"Ignoring config entry '{section}': expected a table")
                continue
            for key, value in values.items():
                default = merged[section].get(key)
                if default is not None and type(value) is not type(default):
                    logger.warning(
                        f"Ignoring config entry '{section}.{key}': expected "
                        f"{type(default).__name__}, got {type(value).__name__}"
                    )
                    continue
                merged[section][key] = value
        else:
            merged[section] = values
    return merged


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from config.toml or return defaults."""
    config_path = path or config_file_path()

    if not config_path.exists():
        logger.debug("Config file not found, using defaults")
        return default_config()

    try:
        with open(config_path, "rb") as f:
            config = tomllib.load(f)
        logger.debug(f"Loaded config from {config_path}")
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Error loading config {config_path}: {e}")
        return default_config()
    return merge_config(default_config(), config)
