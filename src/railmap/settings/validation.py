"""
Settings validation system for railmap.
"""

import logging
from typing import List, TYPE_CHECKING

from .logging import VALID_LEVELS
from .types import ValidationResult

if TYPE_CHECKING:
    from .core import AppSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates configuration settings."""

    def __init__(self, settings: "AppSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        viewport = self.settings.viewport
        min_zoom = viewport.min_zoom
        max_zoom = viewport.max_zoom

        if min_zoom <= 0:
            errors.append(f"Minimum zoom must be positive: {min_zoom}")
        if min_zoom > max_zoom:
            errors.append(
                f"Minimum zoom {min_zoom} is greater than maximum zoom {max_zoom}"
            )
        elif not min_zoom <= viewport.overlay_zoom <= max_zoom:
            warnings.append(
                f"Overlay zoom {viewport.overlay_zoom} is outside [{min_zoom}, {max_zoom}] "
                "and will be clamped"
            )

        if viewport.zoom_button_step <= 1:
            errors.append(
                f"Zoom button step must be greater than 1: {viewport.zoom_button_step}"
            )

        if self.settings.logging.console_log_level.upper() not in VALID_LEVELS:
            warnings.append(
                f"Unknown console log level: {self.settings.logging.console_log_level}"
            )

        result = ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
        logger.debug(
            f"Settings validated: {len(errors)} error(s), {len(warnings)} warning(s)"
        )
        return result
