"""Storage and persistence layer."""

from .settings import SettingsManager, AccessSettings

__all__ = ["SettingsManager", "AccessSettings"]
