"""
Application settings.

Defaults live on :class:`AppConfig`; a ``settings.json`` in the user's config
directory may override any of them. The log level can additionally be set
through the ``INKSEAL_LOG_LEVEL`` environment variable.
"""
import json
import logging
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional

from inkseal.utils.resource_loader import get_settings_path

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "INKSEAL_LOG_LEVEL"


@dataclass
class AppConfig:
    """Tunables for placement, interaction, rendering and uploads."""

    # Placement of new annotations (render-space pixels)
    default_annotation_width: float = 150.0
    min_display_edge: float = 30.0
    max_display_edge: float = 300.0
    default_offset_x: float = 100.0
    default_offset_y: float = 100.0

    # Pointer interaction
    min_resize_width: float = 30.0
    handle_size: float = 14.0
    release_guard_seconds: float = 0.1

    # Rendering
    max_render_scale: float = 1.5
    viewport_max_height: float = 600.0
    viewport_padding: float = 40.0
    fallback_container_width: float = 800.0
    thumbnail_scale: float = 0.2

    # Uploads
    upload_max_bytes: int = 5 * 1024 * 1024
    upload_max_edge: int = 300

    undo_depth: int = 50
    log_level: str = "INFO"

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "AppConfig":
        """
        Load settings from JSON, falling back to defaults.

        Args:
            path: Settings file; defaults to the per-user settings path

        Returns:
            The merged configuration
        """
        config = cls()
        if path is None:
            path = get_settings_path()

        if path.exists():
            try:
                with open(path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                config = cls.from_dict(data)
            except (OSError, ValueError, TypeError) as e:
                logger.warning("Ignoring unreadable settings file %s: %s", path, e)
                config = cls()

        env_level = os.environ.get(LOG_LEVEL_ENV)
        if env_level:
            config.log_level = env_level.upper()
        return config

    @classmethod
    def from_dict(cls, data: dict) -> "AppConfig":
        if not isinstance(data, dict):
            raise TypeError("settings must be a JSON object")
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                logger.debug("Unknown setting %r ignored", key)
                continue
            values[key] = value
        return cls(**values)

    def save(self, path: Optional[Path] = None) -> None:
        if path is None:
            path = get_settings_path()
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(asdict(self), f, indent=2)


def ensure_settings_file(path: Optional[Path] = None) -> Path:
    """
    Write the default settings when no settings file exists yet, so there
    is a file to edit.

    Returns:
        Path of the settings file
    """
    if path is None:
        path = get_settings_path()
    if not path.exists():
        try:
            AppConfig().save(path)
            logger.info("Wrote default settings to %s", path)
        except OSError as e:
            logger.warning("Could not write default settings to %s: %s", path, e)
    return path


def configure_logging(config: AppConfig) -> None:
    """Configure the root logger once for the application."""
    level = getattr(logging, str(config.log_level).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
