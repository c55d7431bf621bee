"""Settings persistence for per-document editor state.

Stores small per-document values (currently the last cursor position) in a
JSON file in the OS-appropriate config directory, keyed by the absolute path
of the document.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs

logger = logging.getLogger(__name__)


class SettingsPersistence:
    """Manages persistent storage of per-document settings."""

    def __init__(self, config_dir: Optional[Path] = None):
        """Initialize settings persistence.

        Args:
            config_dir: Directory for the settings file. Defaults to the
                platform's user config directory.
        """
        self._config_dir = config_dir or Path(platformdirs.user_config_dir("modex"))
        self._settings_file = self._config_dir / "settings.json"
        self._settings_cache: Optional[Dict[str, Dict[str, Any]]] = None

    def _ensure_config_dir(self) -> None:
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.warning(f"Could not create config directory {self._config_dir}: {e}")

    def _load_all_settings(self) -> Dict[str, Dict[str, Any]]:
        """Load all settings from disk.

        Returns:
            Dictionary mapping document paths to their settings.
            Returns empty dict if file doesn't exist or can't be read.
        """
        if self._settings_cache is not None:
            return self._settings_cache

        if not self._settings_file.exists():
            self._settings_cache = {}
            return self._settings_cache

        try:
            with open(self._settings_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Could not load settings from {self._settings_file}: {e}")
            self._settings_cache = {}
            return self._settings_cache

        if not isinstance(data, dict):
            logger.warning("Settings file has invalid format (not a dict), ignoring")
            data = {}
        self._settings_cache = data
        return self._settings_cache

    def _save_all_settings(self, settings: Dict[str, Dict[str, Any]]) -> bool:
        """Save all settings to disk atomically (temp file + rename)."""
        self._ensure_config_dir()
        temp_file = self._settings_file.with_suffix('.tmp')

        try:
            with open(temp_file, 'w', encoding='utf-8') as f:
                json.dump(settings, f, indent=2)
            temp_file.replace(self._settings_file)
            self._settings_cache = settings
            return True
        except OSError as e:
            logger.warning(f"Could not save settings to {self._settings_file}: {e}")
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                pass
            return False

    def load_settings(self, document_path: Optional[str]) -> Dict[str, Any]:
        """Load settings for a specific document.

        Returns:
            A copy of the document's settings, or an empty dict if there are
            none or document_path is empty.
        """
        if not document_path:
            return {}

        abs_path = os.path.abspath(document_path)
        doc_settings = self._load_all_settings().get(abs_path, {})
        if not isinstance(doc_settings, dict):
            logger.warning(f"Settings for {abs_path} are not a dict, ignoring")
            return {}
        return doc_settings.copy()

    def save_settings(self, document_path: Optional[str], settings: Dict[str, Any]) -> bool:
        """Save settings for a specific document.

        Returns:
            True if save was successful, False otherwise.
        """
        if not document_path:
            return False

        all_settings = dict(self._load_all_settings())
        all_settings[os.path.abspath(document_path)] = settings
        return self._save_all_settings(all_settings)

    def clear_cache(self) -> None:
        """Clear the in-memory cache of settings."""
        self._settings_cache = None


# Global instance
_persistence: Optional[SettingsPersistence] = None


def get_persistence() -> SettingsPersistence:
    """Get the global settings persistence instance."""
    global _persistence
    if _persistence is None:
        _persistence = SettingsPersistence()
    return _persistence
