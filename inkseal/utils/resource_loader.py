"""
Per-user directories for settings and scratch files.
"""
import os
import sys
from pathlib import Path

APP_NAME = "InksealPDF"


def get_config_dir(app_name: str = APP_NAME) -> Path:
    """
    Get the configuration directory for storing settings.

    Args:
        app_name: Name of the application

    Returns:
        Path to the config directory
    """
    if os.name == 'nt':  # Windows
        base_dir = Path(os.environ.get('APPDATA', os.path.expanduser('~')))
        config_dir = base_dir / app_name / "config"
    elif sys.platform == 'darwin':  # macOS
        config_dir = Path.home() / "Library" / "Preferences" / app_name
    else:  # Linux
        base_dir = os.environ.get('XDG_CONFIG_HOME') or str(Path.home() / ".config")
        config_dir = Path(base_dir) / app_name

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_settings_path(app_name: str = APP_NAME) -> Path:
    """Path of the JSON settings file inside the config directory."""
    return get_config_dir(app_name) / "settings.json"
