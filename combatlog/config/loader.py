"""
Configuration loader for reader settings.

Allows users to override reader settings via YAML configuration files.
"""

import yaml
import logging
from dataclasses import fields, replace
from pathlib import Path
from typing import Dict, Optional, Any

from .settings import ReaderSettings

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "combatlog.yaml"

# Expected type for each recognised key
_SETTING_TYPES = {f.name: f.type for f in fields(ReaderSettings)}
_CASTS = {"str": str, "int": int, "bool": bool, str: str, int: int, bool: bool}


class ConfigLoader:
    """Loads reader configuration from YAML files."""

    @staticmethod
    def search_paths(config_path: Optional[str] = None):
        """
        Paths checked for a configuration file, in order.

        Args:
            config_path: Explicit path, checked first when given
        """
        paths = [
            Path(CONFIG_FILENAME),
            Path("config") / CONFIG_FILENAME,
            Path.home() / ".combatlog" / CONFIG_FILENAME,
        ]
        if config_path:
            paths.insert(0, Path(config_path))
        return paths

    @staticmethod
    def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to custom config file. If None, looks for:
                        1. combatlog.yaml in current directory
                        2. config/combatlog.yaml
                        3. ~/.combatlog/combatlog.yaml

        Returns:
            Configuration dictionary
        """
        if config_path and not Path(config_path).exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        for path in ConfigLoader.search_paths(config_path):
            if path.exists():
                with open(path, "r") as f:
                    config = yaml.safe_load(f) or {}
                if not isinstance(config, dict):
                    raise ValueError(f"Configuration in {path} must be a mapping")
                logger.info(f"Loaded configuration from {path}")
                return config

        logger.debug("No configuration file found, using defaults")
        return {}

    @staticmethod
    def apply_config(config: Dict[str, Any], base: Optional[ReaderSettings] = None) -> ReaderSettings:
        """
        Overlay configuration values onto reader settings.

        Args:
            config: Configuration dictionary from YAML
            base: Settings to start from (defaults to a fresh ReaderSettings)

        Returns:
            New ReaderSettings with recognised keys applied
        """
        base = base or ReaderSettings()
        overrides = {}

        for key, value in config.items():
            if key not in _SETTING_TYPES:
                logger.warning(f"Ignoring unknown configuration key: {key}")
                continue

            cast = _CASTS[_SETTING_TYPES[key]]
            if cast is bool and not isinstance(value, bool):
                logger.warning(f"Invalid value for {key}: {value!r} (expected true/false)")
                continue
            try:
                overrides[key] = cast(value)
                logger.debug(f"Applied configuration: {key} = {overrides[key]!r}")
            except (ValueError, TypeError) as e:
                logger.warning(f"Invalid value for {key}: {value!r} ({e})")

        return replace(base, **overrides)


def load_settings(config_path: Optional[str] = None) -> ReaderSettings:
    """
    Build validated settings from the environment and an optional YAML file.

    Args:
        config_path: Optional path to custom config file
    """
    loader = ConfigLoader()
    config = loader.load_config(config_path)
    result = loader.apply_config(config, ReaderSettings.from_env())
    result.validate()
    return result
