"""
Core settings management for railmap.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QSettings

from .types import CONFIG_VERSION, ValidationResult
from .validation import SettingsValidator
from .viewport import ViewportSettings
from .minimap import MinimapSettings
from .logging import LoggingSettings

logger = logging.getLogger(__name__)


class AppSettings:
    """
    Configuration management using QSettings.

    Provides type-safe access to application settings with automatic
    cross-platform storage and validation.
    """

    def __init__(
        self,
        profile: str = "default",
        settings_file: Optional[Union[str, Path]] = None,
    ):
        """Initialize settings with organization, application name, and profile.

        Args:
            profile: Settings profile name (default: "default")
            settings_file: Optional INI file to use instead of the native store
        """
        if settings_file is not None:
            self.settings = QSettings(str(settings_file), QSettings.Format.IniFormat)
        else:
            self.settings = QSettings("railmap", "railmap")
        self.profile = profile

        # Profile is a group: railmap/railmap/default/...
        self.settings.beginGroup(profile)

        self._validator = SettingsValidator(self)
        self._viewport = ViewportSettings(self.settings)
        self._minimap = MinimapSettings(self.settings)
        self._logging = LoggingSettings(self.settings)

        if self.settings.value("app/version") is None:
            self.settings.setValue("app/version", CONFIG_VERSION)
            self.settings.sync()

        logger.debug(
            f"Settings initialized for profile '{profile}', stored at: {self.settings.fileName()}"
        )

    # === SUBSYSTEM ACCESS ===

    @property
    def viewport(self) -> ViewportSettings:
        """Access viewport settings subsystem."""
        return self._viewport

    @property
    def minimap(self) -> MinimapSettings:
        """Access minimap settings subsystem."""
        return self._minimap

    @property
    def logging(self) -> LoggingSettings:
        """Access logging settings subsystem."""
        return self._logging

    @property
    def version(self) -> str:
        """Get configuration version."""
        value = self.settings.value("app/version", CONFIG_VERSION)
        return str(value) if value is not None else CONFIG_VERSION

    # === LOGGING SETTINGS (DELEGATED) ===

    @property
    def console_logging(self) -> bool:
        return self._logging.console_logging

    @property
    def console_log_level(self) -> str:
        return self._logging.console_log_level

    @property
    def console_use_colors(self) -> bool:
        return self._logging.console_use_colors

    @property
    def file_logging(self) -> bool:
        return self._logging.file_logging

    @property
    def log_file_path(self) -> str:
        return self._logging.log_file_path

    # === VALIDATION ===

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    def get_settings_file_path(self) -> str:
        """Get the path where settings are stored."""
        return self.settings.fileName()
