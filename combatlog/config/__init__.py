"""
Configuration module for the combat log reader.

Provides reader settings from environment variables and YAML overrides.
"""

from .settings import ReaderSettings, get_settings, reload_settings
from .loader import ConfigLoader, load_settings

__all__ = [
    "ReaderSettings",
    "get_settings",
    "reload_settings",
    "ConfigLoader",
    "load_settings",
]
