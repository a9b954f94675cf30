"""Settings for device access tools."""

import json
import os
from pathlib import Path
from dataclasses import dataclass, asdict, fields
from typing import Any, Optional
import logging

logger = logging.getLogger(__name__)

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def validate_setting(name: str, value: Any) -> Any:
    """Check a setting value, returning it in normalized form.

    Args:
        name: Setting name
        value: Proposed value

    Returns:
        The value to store

    Raises:
        KeyError: If there is no such setting
        ValueError: If the value has the wrong type or range
    """
    if name == "log_level":
        if not isinstance(value, str) or value.upper() not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value.upper()

    if name == "call_timeout":
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
            raise ValueError("call_timeout must be a positive number of seconds or null")
        return float(value)

    if name == "declaration_header":
        if not isinstance(value, str):
            raise ValueError("declaration_header must be a string")
        return value

    if name == "indent":
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ValueError("indent must be a positive integer")
        return value

    raise KeyError(name)


@dataclass
class AccessSettings:
    """Settings with defaults."""

    # Logging
    log_level: str = "INFO"

    # Blocking accessor
    call_timeout: Optional[float] = 10.0  # seconds, None waits forever

    # Declaration writer
    declaration_header: str = "# Generated by device-access"
    indent: int = 4

    @classmethod
    def from_dict(cls, data: dict) -> "AccessSettings":
        """Build settings from stored values.

        Unknown names and invalid values are skipped with a warning, so the
        default applies for them.
        """
        known = {f.name for f in fields(cls)}
        values = {}
        for key, value in data.items():
            if key not in known:
                logger.warning(f"Unknown setting: {key}")
                continue
            try:
                values[key] = validate_setting(key, value)
            except ValueError as e:
                logger.warning(f"Invalid setting ignored: {e}")
        return cls(**values)


class SettingsManager:
    """Manages settings persistence."""

    def __init__(self, app_name: str = "DeviceAccess"):
        """Initialize the settings manager.

        Args:
            app_name: Name of the application (used for config directory)
        """
        self._app_name = app_name
        self._settings_dir = self._get_settings_dir()
        self._settings_file = self._settings_dir / "settings.json"
        self._settings: Optional[AccessSettings] = None

    def _get_settings_dir(self) -> Path:
        """Get the appropriate settings directory for the platform."""
        if os.name == "nt":  # Windows
            base = Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
        else:  # Linux/Mac
            base = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))

        return base / self._app_name

    def load(self) -> AccessSettings:
        """Load settings from disk or return defaults.

        Returns:
            The loaded or default settings
        """
        if self._settings is not None:
            return self._settings

        if self._settings_file.exists():
            try:
                with open(self._settings_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise TypeError("settings file must hold a JSON object")
                self._settings = AccessSettings.from_dict(data)
                logger.info(f"Settings loaded from {self._settings_file}")
            except (json.JSONDecodeError, TypeError) as e:
                logger.warning(f"Failed to load settings, using defaults: {e}")
                self._settings = AccessSettings()
        else:
            self._settings = AccessSettings()
            logger.debug("No settings file found, using defaults")

        return self._settings

    def save(self, settings: Optional[AccessSettings] = None) -> None:
        """Save settings to disk.

        Args:
            settings: Settings to save (uses current if None)
        """
        if settings is not None:
            self._settings = settings

        if self._settings is None:
            return

        self._settings_dir.mkdir(parents=True, exist_ok=True)

        try:
            with open(self._settings_file, "w", encoding="utf-8") as f:
                json.dump(asdict(self._settings), f, indent=2)
            logger.info(f"Settings saved to {self._settings_file}")
        except IOError as e:
            logger.error(f"Failed to save settings: {e}")

    def update(self, **kwargs) -> AccessSettings:
        """Update specific settings and save.

        Args:
            **kwargs: Setting names and values to update

        Returns:
            The updated settings
        """
        settings = self.load()

        for key, value in kwargs.items():
            try:
                setattr(settings, key, validate_setting(key, value))
            except KeyError:
                logger.warning(f"Unknown setting: {key}")
            except ValueError as e:
                logger.warning(f"Invalid setting ignored: {e}")

        self.save(settings)
        return settings

    @property
    def settings_dir(self) -> Path:
        """Get the settings directory path."""
        return self._settings_dir

    @property
    def settings_file(self) -> Path:
        return self._settings_file
