# src/rargs/core/managers/config_manager.py
import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from rargs.core.utils.path_utils import PathUtils

logger = logging.getLogger(__name__)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Returns ``base`` updated with ``override``, merging nested dictionaries."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """
    A singleton class to manage the application's configuration.
    It loads the packaged settings, overlays the user's settings file, and
    allows for in-memory modifications.
    """
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        self._config: Dict[str, Any] = {}
        self.reset()
        logger.debug("ConfigManager initialized.")

    def get_all(self) -> Dict[str, Any]:
        """Returns the entire current configuration dictionary."""
        return self._config

    def get_nested(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Safely retrieves a nested value from the configuration.
        e.g., 'defaults.separator'.
        """
        keys = key_path.split('.')
        value = self._config
        for key in keys:
            if isinstance(value, dict):
                value = value.get(key)
            else:
                return default
        return value if value is not None else default

    def set_nested(self, key_path: str, value: Any) -> bool:
        """
        Sets a nested value in the in-memory configuration.
        e.g., 'debug.level', 'INFO'
        """
        keys = key_path.split('.')
        d = self._config
        for key in keys[:-1]:
            d = d.setdefault(key, {})
            if not isinstance(d, dict):
                logger.error("Cannot set value: '%s' is not a dictionary.", key)
                return False

        # Keep the type of an existing value where the new one can be cast
        original_value = d.get(keys[-1])
        if original_value is not None:
            try:
                value = type(original_value)(value)
            except (ValueError, TypeError):
                logger.warning(
                    "Could not cast new value for '%s' to type %s. Storing as given.",
                    key_path, type(original_value).__name__
                )

        d[keys[-1]] = value
        logger.debug("Configuration updated: %s = %s", key_path, value)
        return True

    @staticmethod
    def _read_settings(path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.error("Failed to load %s: %s", path, e)
            return {}
        if not isinstance(data, dict):
            logger.error("Ignoring %s: top level must be a JSON object.", path)
            return {}
        return data

    def reset(self):
        """Reloads the configuration from the packaged and user settings files."""
        default_path = PathUtils.get_default_settings_file()
        if not default_path.exists():
            logger.warning("settings.json not found at %s. Using empty config.", default_path)
        config = self._read_settings(default_path)

        user_path = PathUtils.get_user_settings_file()
        user_config = self._read_settings(user_path)
        if user_config:
            logger.debug("Applying user settings from %s", user_path)
            config = _deep_merge(config, user_config)

        self._config = config


# The global singleton instance that the entire application will use.
config_manager = ConfigManager()
