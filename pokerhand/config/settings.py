#!/usr/bin/env python3
"""
Settings management for pokerhand.

Hierarchical settings addressed with dot notation (e.g. "deck.api_base"),
persisted to a JSON file, with per-setting defaults.

Usage:
    from pokerhand.config.settings import Settings

    # Initialize settings (do this once at app startup)
    settings = Settings()

    # Create settings with defaults
    settings.create("deck.request_timeout", default=10)
    settings.create("display.reveal_delay", default=0.3)

    # Update and read
    settings.update("deck.deck_id", "3p40paa87x90")
    deck_id = settings.get("deck.deck_id")

    # Get all settings in a group
    deck_settings = settings.get_group("deck")

    # Reset to default
    settings.reset("display.reveal_delay")
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from threading import Lock
from typing import Any, Dict, Optional

from box import Box

logger = logging.getLogger(__name__)


class Settings:
    """
    Hierarchical settings manager with JSON persistence.

    Settings are stored in dot notation ("group.setting") inside a
    python-box Box and written to settings.json on every change.

    Thread-safe singleton implementation.
    """

    _instance = None
    _lock = Lock()

    def __new__(cls, settings_file: Optional[Path] = None):
        """Singleton pattern to ensure only one Settings instance exists."""
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

        if settings_file is None:
            self.settings_file = Path(__file__).parent.parent.parent / "data" / "settings.json"
        else:
            self.settings_file = Path(settings_file)

        self.settings_file.parent.mkdir(parents=True, exist_ok=True)

        # Storage for settings values and defaults
        self._settings = Box(default_box=True, box_dots=True)
        self._defaults = Box(default_box=True, box_dots=True)

        self._load_from_file()
        self._initialized = True

        logger.info(f"Settings initialized from {self.settings_file}")

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton so the next Settings() call reloads from disk."""
        with cls._lock:
            cls._instance = None

    def create(self, setting_name: str, default: Any) -> None:
        """
        Create a setting with a default value.

        A value already present in the JSON file is preserved; otherwise the
        default is stored and saved.

        Args:
            setting_name: Dot-notation path (e.g., "deck.api_base")
            default: Default value for the setting
        """
        self._set_nested(self._defaults, setting_name, default)

        existing_value = self._get_nested(self._settings, setting_name)

        if existing_value is None:
            self._set_nested(self._settings, setting_name, default)
            self._save_to_file()
            logger.debug(f"Created setting '{setting_name}' with default value: {default}")
        else:
            logger.debug(f"Setting '{setting_name}' already exists with value: {existing_value} (default: {default})")

    def update(self, setting_name: str, value: Any) -> None:
        """
        Update an existing setting's value.

        Args:
            setting_name: Dot-notation path (e.g., "deck.deck_id")
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
            setting_name: Dot-notation path (e.g., "display.reveal_delay")
            fallback: Value to return if the setting and its default don't exist

        Returns:
            The setting's value, its default, or fallback
        """
        value = self._get_nested(self._settings, setting_name)

        if value is None:
            if fallback is not None:
                return fallback
            default = self._get_nested(self._defaults, setting_name)
            return default if default is not None else fallback

        return value

    def get_group(self, group_path: str) -> Dict[str, Any]:
        """
        Get all settings within a group.

        Args:
            group_path: Dot-notation path to group (e.g., "deck")

        Returns:
            Dictionary containing all settings in the group
        """
        group_data = self._get_nested(self._settings, group_path)

        if group_data is None:
            logger.warning(f"Group '{group_path}' not found")
            return {}

        if isinstance(group_data, Box):
            return group_data.to_dict()

        return group_data if isinstance(group_data, dict) else {}

    def get_all(self) -> Dict[str, Any]:
        """Get all settings as a dictionary."""
        return self._settings.to_dict()

    def reset(self, setting_name: str) -> None:
        """
        Reset a setting to its default value.

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
        """Check if a setting exists."""
        return self._get_nested(self._settings, setting_name) is not None

    def delete(self, setting_name: str) -> None:
        """Delete a setting and its default."""
        self._delete_nested(self._settings, setting_name)
        self._delete_nested(self._defaults, setting_name)
        self._save_to_file()

        logger.info(f"Deleted setting '{setting_name}'")

    def _get_nested(self, data: Box, path: str) -> Any:
        """Get a value from nested dictionary using dot notation."""
        current = data
        for key in path.split('.'):
            if not isinstance(current, dict) or key not in current:
                return None
            current = current[key]

        # An empty Box/dict is an auto-created group, not a value
        if current is None or (isinstance(current, dict) and len(current) == 0):
            return None

        return current

    def _set_nested(self, data: Box, path: str, value: Any) -> None:
        """Set a value in nested dictionary using dot notation."""
        keys = path.split('.')
        current = data

        for key in keys[:-1]:
            if key not in current or not isinstance(current[key], dict):
                current[key] = Box(default_box=True, box_dots=True)
            current = current[key]

        current[keys[-1]] = value

    def _delete_nested(self, data: Box, path: str) -> None:
        """Delete a value from nested dictionary using dot notation."""
        keys = path.split('.')
        current = data

        for key in keys[:-1]:
            if not isinstance(current, dict) or key not in current:
                return
            current = current[key]

        if isinstance(current, dict) and keys[-1] in current:
            del current[keys[-1]]

    def _load_from_file(self) -> None:
        """Load settings from JSON file."""
        if not self.settings_file.exists():
            logger.info(f"Settings file not found, creating new: {self.settings_file}")
            self._save_to_file()
            return

        try:
            with open(self.settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse settings file: {e}")
            logger.warning("Using empty settings")
            return

        if isinstance(data, dict) and "settings" in data:
            data = data["settings"]

        self._settings = Box(data if isinstance(data, dict) else {}, default_box=True, box_dots=True)
        logger.info(f"Loaded settings from {self.settings_file}")

    def _save_to_file(self) -> None:
        """Save current settings to file."""
        data = {
            "settings": self._settings.to_dict(),
            "metadata": {
                "version": "1.0",
                "last_modified": datetime.now().isoformat()
            }
        }

        try:
            self.settings_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.settings_file, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to save settings: {e}")
            raise

        logger.debug(f"Settings saved to {self.settings_file}")
