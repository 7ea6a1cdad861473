"""
Configuration management for the breadboard editor.

Handles persistent configuration including:
- Document file extension and default save name
- Input poll interval
- Delete confirmation and demo seeding
- Log file location and level

Config is stored in config.json next to the executable/project root.
Environment variables (BREADBOARD_*) override the file; app.py loads a .env
file into the environment before calling load_config().
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from breadboard.paths import get_config_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "BREADBOARD_"

DEFAULT_CONFIG: Dict[str, Any] = {
    "file_extension": ".yaml",
    "default_filename": "breadboard.yaml",
    "poll_interval_ms": 16,
    "confirm_delete": True,
    "seed_demo": True,
    "log_file": "breadboard.log",
    "log_level": "INFO",
}


def _coerce(value: str, default: Any) -> Any:
    """Convert an environment string to the type of the default value."""
    if isinstance(default, bool):
        return value.strip().lower() in ("1", "true", "yes", "on")
    if isinstance(default, int):
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Ignoring non-integer value {value!r}")
            return default
    return value


def _valid_stored_values(stored: Dict[str, Any], config_path: Path) -> Dict[str, Any]:
    """Known keys whose value has the same type as the default; others are logged and dropped."""
    valid = {}
    for key, value in stored.items():
        if key not in DEFAULT_CONFIG:
            continue
        default = DEFAULT_CONFIG[key]
        # bool is an int subclass, so compare exact types
        if type(value) is not type(default):
            logger.warning(f"Ignoring {key}={value!r} in {config_path}: expected {type(default).__name__}")
            continue
        valid[key] = value
    return valid


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load configuration.

    Priority (highest first):
    1. Environment variables BREADBOARD_<KEY> (e.g. BREADBOARD_LOG_LEVEL)
    2. Values stored in config.json
    3. DEFAULT_CONFIG

    A missing or unreadable config.json is not an error; defaults are used.
    """
    config = dict(DEFAULT_CONFIG)
    config_path = path or get_config_path()

    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                stored = json.load(f)
            if isinstance(stored, dict):
                config.update(_valid_stored_values(stored, config_path))
            else:
                logger.warning(f"Ignoring config file {config_path}: expected an object")
        except (json.JSONDecodeError, UnicodeDecodeError, IOError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")

    for key, default in DEFAULT_CONFIG.items():
        env_value = os.environ.get(ENV_PREFIX + key.upper())
        if env_value is not None:
            config[key] = _coerce(env_value, default)

    extension = config["file_extension"]
    if extension and not extension.startswith("."):
        config["file_extension"] = "." + extension

    return config


def save_config(config: Dict[str, Any], path: Optional[Path] = None) -> None:
    """Save configuration to config.json."""
    config_path = path or get_config_path()
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)
