"""
Viewport and camera settings for railmap.
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings

logger = logging.getLogger(__name__)

DEFAULT_MIN_ZOOM = 0.5
DEFAULT_MAX_ZOOM = 100.0
DEFAULT_OVERLAY_ZOOM = 20.0
DEFAULT_ZOOM_BUTTON_STEP = 1.3


class ViewportSettings:
    """Manages zoom limits and zoom step settings."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_float(self, key: str, default: float) -> float:
        """Type-safe float retrieval from settings."""
        value = self.settings.value(key, default)
        try:
            return float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            logger.warning(f"Invalid value for {key}: {value!r}, using {default}")
            return default

    @property
    def min_zoom(self) -> float:
        """Smallest zoom level relative to the fit-to-screen level."""
        return self._get_float("viewport/min_zoom", DEFAULT_MIN_ZOOM)

    @min_zoom.setter
    def min_zoom(self, value: float) -> None:
        self.settings.setValue("viewport/min_zoom", float(value))
        self.settings.sync()

    @property
    def max_zoom(self) -> float:
        """Largest zoom level relative to the fit-to-screen level."""
        return self._get_float("viewport/max_zoom", DEFAULT_MAX_ZOOM)

    @max_zoom.setter
    def max_zoom(self, value: float) -> None:
        self.settings.setValue("viewport/max_zoom", float(value))
        self.settings.sync()

    @property
    def overlay_zoom(self) -> float:
        """Zoom level used when the application starts as an overlay."""
        return self._get_float("viewport/overlay_zoom", DEFAULT_OVERLAY_ZOOM)

    @overlay_zoom.setter
    def overlay_zoom(self, value: float) -> None:
        self.settings.setValue("viewport/overlay_zoom", float(value))
        self.settings.sync()

    @property
    def zoom_button_step(self) -> float:
        """Factor applied by the zoom in/out buttons."""
        return self._get_float("viewport/zoom_button_step", DEFAULT_ZOOM_BUTTON_STEP)

    @zoom_button_step.setter
    def zoom_button_step(self, value: float) -> None:
        self.settings.setValue("viewport/zoom_button_step", float(value))
        self.settings.sync()
