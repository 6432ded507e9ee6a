"""
Settings package for railmap.

Provides type-safe configuration management on top of Qt's QSettings.

Usage:
    from railmap.settings import AppSettings

    settings = AppSettings()
    result = settings.validate()
"""

from .core import AppSettings
from .types import CONFIG_VERSION, ConfigError, ValidationResult
from .viewport import ViewportSettings
from .minimap import MinimapSettings
from .logging import LoggingSettings

__all__ = [
    "AppSettings",
    "CONFIG_VERSION",
    "ConfigError",
    "ValidationResult",
    "ViewportSettings",
    "MinimapSettings",
    "LoggingSettings",
]
