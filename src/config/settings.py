#!/usr/bin/env python3
"""
Settings store for the advisor.

Hierarchical values addressed with dot notation (e.g. "advisor.equity.trials"),
persisted to JSON on `update` and `reset`. Components register their tunables
with a default when they are constructed and read them back with `get`; values
already present in the settings file win over the registered defaults.
Registering defaults never touches the disk.

Usage:
    from src.config.settings import Settings

    settings = Settings()
    settings.create("advisor.equity.trials", default=2000)
    trials = settings.get("advisor.equity.trials")

    settings.update("advisor.equity.trials", 5000)
    settings.reset("advisor.equity.trials")
    equity_settings = settings.get_group("advisor.equity")
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional
from box import Box

logger = logging.getLogger(__name__)

SETTINGS_VERSION = "1.0"


def _empty_box() -> Box:
    return Box(default_box=True, box_dots=True)


class Settings:
    """
    Hierarchical settings manager with JSON persistence.

    Thread-safe singleton: every component calling Settings() shares the same
    values. Tests reset `Settings._instance` to start from a clean store.
    """

    _instance = None
    _lock = Lock()

    def __new__(cls, settings_file: Optional[Path] = None):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(Settings, cls).__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self, settings_file: Optional[Path] = None):
        """
        Initialize the settings manager.

        Args:
            settings_file: Path to settings JSON file. Defaults to data/settings.json
        """
        if self._initialized:
            return

        self._initialized = True

        if settings_file is None:
            self.settings_file = Path(__file__).parent.parent.parent / "data" / "settings.json"
        else:
            self.settings_file = Path(settings_file)

        self._settings = _empty_box()
        self._defaults = _empty_box()

        self._load_from_file()

        logger.info(f"Settings initialized from {self.settings_file}")

    def create(self, setting_name: str, default: Any) -> None:
        """
        Register a setting with its default value.

        A value already loaded from the settings file is kept. Defaults live in
        memory only; the file is written by `update` and `reset`.

        Args:
            setting_name: Dot-notation path (e.g., "advisor.equity.trials")
            default: Default value for the setting
        """
        self._set_nested(self._defaults, setting_name, default)

        existing_value = self._get_nested(self._settings, setting_name)
        if existing_value is None:
            self._set_nested(self._settings, setting_name, default)
            logger.debug(f"Created setting '{setting_name}' with default value: {default}")
        else:
            logger.debug(f"Setting '{setting_name}' already exists with value: {existing_value} (default: {default})")

    def update(self, setting_name: str, value: Any) -> None:
        """
        Update an existing setting's value.

        Args:
            setting_name: Dot-notation path
            value: New value for the setting

        Raises:
            KeyError: If the setting doesn't exist
        """
        old_value = self._get_nested(self._settings, setting_name)
        if old_value is None:
            raise KeyError(f"Setting '{setting_name}' does not exist. Use create() first.")

        self._set_nested(self._settings, setting_name, value)
        self._save_to_file()

        logger.debug(f"Updated setting '{setting_name}': {old_value} -> {value}")

    def get(self, setting_name: str, fallback: Any = None) -> Any:
        """
        Get a setting's value.

        Args:
            setting_name: Dot-notation path
            fallback: Value to return if setting doesn't exist

        Returns:
            The setting's value, else the fallback, else the registered default
        """
        value = self._get_nested(self._settings, setting_name)
        if value is not None:
            return value

        if fallback is not None:
            return fallback

        return self._get_nested(self._defaults, setting_name)

    def get_group(self, group_path: str) -> Dict[str, Any]:
        """
        Get all settings within a group.

        Args:
            group_path: Dot-notation path to group (e.g., "advisor.preflop")

        Returns:
            Dictionary of the group's settings, empty when the group is missing
        """
        group_data = self._get_nested(self._settings, group_path)

        if group_data is None:
            logger.warning(f"Group '{group_path}' not found")
            return {}

        if isinstance(group_data, Box):
            return group_data.to_dict()

        return group_data if isinstance(group_data, dict) else {}

    def reset(self, setting_name: str) -> None:
        """
        Reset a setting to its registered default.

        Raises:
            KeyError: If the setting has no default
        """
        default_value = self._get_nested(self._defaults, setting_name)

        if default_value is None:
            raise KeyError(f"Setting '{setting_name}' has no default value")

        self._set_nested(self._settings, setting_name, default_value)
        self._save_to_file()

        logger.info(f"Reset setting '{setting_name}' to default: {default_value}")

    def exists(self, setting_name: str) -> bool:
        """True if the setting has a value."""
        return self._get_nested(self._settings, setting_name) is not None

    def _get_nested(self, data: Box, path: str) -> Any:
        """Get a value by dot path; missing keys and empty groups give None."""
        current = data
        for key in path.split('.'):
            if not isinstance(current, dict):
                return None
            current = current.get(key)
            if current is None:
                return None

        if isinstance(current, dict) and len(current) == 0:
            return None

        return current

    def _set_nested(self, data: Box, path: str, value: Any) -> None:
        """Set a value by dot path, creating intermediate groups."""
        keys = path.split('.')
        current = data

        for key in keys[:-1]:
            if key not in current or not isinstance(current[key], dict):
                current[key] = _empty_box()
            current = current[key]

        current[keys[-1]] = value

    def _load_from_file(self) -> None:
        """Load settings from the JSON file, starting empty when it is missing or unreadable."""
        if not self.settings_file.exists():
            logger.info(f"Settings file not found, using defaults: {self.settings_file}")
            return

        try:
            with open(self.settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse settings file: {e}")
            logger.warning("Using empty settings")
            return

        settings_data = data.get("settings", data) if isinstance(data, dict) else {}
        self._settings = Box(settings_data, default_box=True, box_dots=True)

        logger.info(f"Loaded settings from {self.settings_file}")

    def _save_to_file(self) -> None:
        """Write current settings, with metadata, to the JSON file."""
        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)

            data = {
                "settings": self._settings.to_dict(),
                "metadata": {
                    "version": SETTINGS_VERSION,
                    "last_modified": datetime.now().isoformat()
                }
            }

            with open(self.settings_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)

            logger.debug(f"Settings saved to {self.settings_file}")

        except PermissionError as e:
            logger.error(f"Permission denied writing settings file: {e}")
            raise
