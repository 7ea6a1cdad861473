"""
Path utilities for the breadboard editor.

Handles path resolution for both development mode and frozen (PyInstaller) executables.
- In development: paths are relative to the project root
- When frozen: paths are relative to the executable location

Breadboard documents are NOT stored here: they live in the working directory
the editor was started from. Only config.json and the log file sit next to the app.
"""

import sys
from pathlib import Path


def get_app_dir() -> Path:
    """
    Get the application directory.

    - In development: the project root (parent of breadboard/)
    - When frozen: the directory containing the executable
    """
    if getattr(sys, 'frozen', False):
        return Path(sys.executable).parent
    else:
        return Path(__file__).parent.parent


def get_config_path() -> Path:
    """Get the path to the config file."""
    return get_app_dir() / "config.json"


def get_log_path(filename: str = "breadboard.log") -> Path:
    """Get the path to the log file. Absolute filenames are returned unchanged."""
    path = Path(filename)
    if path.is_absolute():
        return path
    return get_app_dir() / path


def get_working_dir() -> Path:
    """Directory scanned for breadboard documents (the current working directory)."""
    return Path.cwd()
