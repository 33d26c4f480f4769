# reelview/core/settings_manager.py
"""
Centralized settings management with per-section namespaces.
Also serves as the durable key-value store behind the favorites list.
"""

from PyQt6.QtCore import QSettings
from typing import Any, Optional

# Application constants
APP_NAME = "ReelView"
APP_ORGANIZATION = "reelview"


class SettingsManager:
    """
    Centralized settings management with per-section namespaces
    and type-safe access.
    """
    def __init__(self, path: Optional[str] = None):
        if path:
            self.qsettings = QSettings(path, QSettings.Format.IniFormat)
        else:
            self.qsettings = QSettings(APP_ORGANIZATION, APP_NAME)

    def get_section_setting(self, section: str, key: str, default: Any = None) -> Any:
        """
        Gets a namespaced setting.
        Type is inferred from the default value.
        """
        return self._coerce(self.qsettings.value(f"{section}/{key}", default), default)

    def set_section_setting(self, section: str, key: str, value: Any):
        self.qsettings.setValue(f"{section}/{key}", value)

    def get_global_setting(self, key: str, default: Any = None) -> Any:
        """
        Gets a global (application-level) setting.
        Type is inferred from the default value.
        """
        return self._coerce(self.qsettings.value(key, default), default)

    def set_global_setting(self, key: str, value: Any):
        self.qsettings.setValue(key, value)

    @staticmethod
    def _coerce(value: Any, default: Any) -> Any:
        # INI and registry backends hand everything back as strings
        if isinstance(default, bool) and isinstance(value, str):
            return value.lower() == 'true'
        if isinstance(default, int) and not isinstance(default, bool) and isinstance(value, str):
            try:
                return int(value)
            except ValueError:
                return default
        return value

    # --- Key-value store used by FavoritesStore ---

    def load(self, key: str) -> Optional[str]:
        """
        Returns the raw string stored under key, or None if absent.
        """
        if not self.qsettings.contains(key):
            return None
        value = self.qsettings.value(key)
        return value if isinstance(value, str) else None

    def save(self, key: str, value: str):
        self.qsettings.setValue(key, value)
        self.qsettings.sync()

    def has_any_settings(self) -> bool:
        """
        Check if any settings have been saved (for first-run detection).
        """
        return bool(self.qsettings.allKeys())
