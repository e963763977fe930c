"""Configuration module for postshelf."""

from .settings import Settings, load_settings, get_settings, reset_settings
from .loader import init_local_config, get_config_paths, ConfigPaths

__all__ = [
    "Settings",
    "load_settings",
    "get_settings",
    "reset_settings",
    "init_local_config",
    "get_config_paths",
    "ConfigPaths",
]
