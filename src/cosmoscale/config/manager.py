"""Configuration manager for Cosmoscale.

Handles loading, saving, and accessing configuration values.
Configuration is stored as JSON and organized into groups. Values read
from disk are coerced to the type of their default so a hand-edited
`"damping": 1` still arrives as a float.
"""

import json
import copy
from pathlib import Path
from typing import Any

from loguru import logger
from platformdirs import user_config_dir

from cosmoscale.config.defaults import DEFAULT_CONFIG


def _coerce(default: Any, value: Any) -> Any:
    """Convert a user value to the type of its default, or raise ValueError."""
    if default is None:
        return value
    if isinstance(default, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("true", "false"):
            return value.lower() == "true"
        raise ValueError(f"expected a boolean, got {value!r}")
    if isinstance(default, (int, float)):
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError(f"expected a number, got {value!r}")
        try:
            return type(default)(value)
        except ValueError:
            raise ValueError(f"expected a number, got {value!r}") from None
    if isinstance(value, type(default)):
        return value
    raise ValueError(f"expected {type(default).__name__}, got {value!r}")


class ConfigManager:
    """Manages application configuration with grouped settings."""

    CONFIG_FILENAME = "cosmoscale_config.json"

    def __init__(self, config_dir: str | Path | None = None):
        if config_dir is None:
            self._config_dir = Path(user_config_dir("Cosmoscale", "Cosmoscale"))
        else:
            self._config_dir = Path(config_dir)

        self._config_path = self._config_dir / self.CONFIG_FILENAME
        self._data: dict[str, dict[str, Any]] = {}
        self._listeners: list = []

    def load(self):
        """Load configuration from disk, merging with defaults."""
        self._data = copy.deepcopy(DEFAULT_CONFIG)

        if not self._config_path.exists():
            logger.info("No config file found, using defaults.")
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                user_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load config, using defaults: {e}")
            return

        if not isinstance(user_data, dict):
            logger.warning("Config file is not a JSON object, using defaults.")
            return

        for group, values in user_data.items():
            if not isinstance(values, dict):
                logger.warning(f"Ignoring config group '{group}': not an object")
                continue
            self._merge_group(group, values)

        logger.info(f"Configuration loaded from {self._config_path}")

    def _merge_group(self, group: str, values: dict[str, Any]):
        """Merge user values over a group, skipping values of the wrong type."""
        defaults = self._data.setdefault(group, {})
        for key, value in values.items():
            if key not in defaults:
                defaults[key] = value
                continue
            try:
                defaults[key] = _coerce(defaults[key], value)
            except ValueError as e:
                logger.warning(f"Ignoring {group}.{key}: {e}")

    def save(self):
        """Save current configuration to disk."""
        self._config_dir.mkdir(parents=True, exist_ok=True)

        save_data = {group: self.get_group(group) for group in self._data}

        with open(self._config_path, "w", encoding="utf-8") as f:
            json.dump(save_data, f, indent=2)

        logger.info(f"Configuration saved to {self._config_path}")

    def get(self, group: str, key: str, default: Any = None) -> Any:
        """Get a configuration value."""
        return self._data.get(group, {}).get(key, default)

    def set(self, group: str, key: str, value: Any):
        """Set a configuration value and notify listeners."""
        if group not in self._data:
            self._data[group] = {}
        old_value = self._data[group].get(key)
        self._data[group][key] = value
        if old_value != value:
            self._notify_listeners(group, key, value, old_value)

    def get_group(self, group: str) -> dict[str, Any]:
        """Get a copy of all values in a configuration group."""
        return dict(self._data.get(group, {}))

    def add_listener(self, callback):
        """Register a callback for config changes: callback(group, key, new_value, old_value)."""
        self._listeners.append(callback)

    def _notify_listeners(self, group: str, key: str, new_value: Any, old_value: Any):
        for listener in self._listeners:
            try:
                listener(group, key, new_value, old_value)
            except Exception as e:
                logger.error(f"Config listener error: {e}")
