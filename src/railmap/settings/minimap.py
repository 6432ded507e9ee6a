"""
Minimap (overlay) settings for railmap.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PySide6.QtCore import QSettings


class MinimapSettings:
    """Manages settings of the overlay minimap."""

    def __init__(self, settings: "QSettings"):
        self.settings = settings

    def _get_bool(self, key: str, default: bool = False) -> bool:
        """Type-safe boolean retrieval from settings."""
        value = self.settings.value(key, default)
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("true", "1", "yes")
        return bool(value) if value is not None else default

    @property
    def transparent(self) -> bool:
        """Whether the minimap draws over a transparent background."""
        return self._get_bool("minimap/transparent", False)

    @transparent.setter
    def transparent(self, value: bool) -> None:
        self.settings.setValue("minimap/transparent", bool(value))
        self.settings.sync()
