"""Display mode state driven by the host's mode broadcast."""

import logging
from enum import Enum
from typing import Any, Optional, Union

from PySide6.QtCore import QObject, Signal


class DisplayMode(str, Enum):
    """How the map is presented."""

    NORMAL = "normal"
    MAP = "map"
    """Full-map mode: the whole world is shown and the camera does not follow."""
    MINIMAP = "minimap"


class ModeStateStore(QObject):
    """Holds the current display mode and transparency flag.

    The store subscribes to one external channel, a Qt signal carrying
    ``(mode: str, transparent: bool)``, and re-emits changes as
    ``modeChanged(DisplayMode, bool)``.
    """

    modeChanged = Signal(object, bool)

    def __init__(
        self,
        mode: DisplayMode = DisplayMode.NORMAL,
        transparent: bool = False,
        parent: Optional[QObject] = None,
    ):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self._mode = DisplayMode(mode)
        self._transparent = bool(transparent)
        self._channel: Any = None

    @classmethod
    def for_startup(cls, overlay: bool, transparent: bool = False) -> "ModeStateStore":
        """Initial store: overlay launches start as a minimap."""
        if overlay:
            return cls(DisplayMode.MINIMAP, transparent)
        return cls(DisplayMode.NORMAL, False)

    @property
    def mode(self) -> DisplayMode:
        return self._mode

    @property
    def transparent(self) -> bool:
        return self._transparent

    @property
    def is_minimap(self) -> bool:
        return self._mode is DisplayMode.MINIMAP

    @property
    def is_full_map(self) -> bool:
        return self._mode is DisplayMode.MAP

    def set_mode(self, mode: Union[DisplayMode, str], transparent: bool) -> None:
        """Update mode and transparency; unknown modes are ignored."""
        try:
            new_mode = DisplayMode(mode)
        except ValueError:
            self.logger.warning(f"Ignoring unknown display mode: {mode!r}")
            return

        transparent = bool(transparent)
        if new_mode is self._mode and transparent == self._transparent:
            return

        self._mode = new_mode
        self._transparent = transparent
        self.logger.info(f"Display mode: {new_mode.value} (transparent: {transparent})")
        self.modeChanged.emit(new_mode, transparent)

    def attach(self, channel: Any) -> None:
        """Subscribe to a mode broadcast signal."""
        if self._channel is channel:
            return
        self.detach()
        channel.connect(self.set_mode)
        self._channel = channel

    def detach(self) -> None:
        """Unsubscribe from the broadcast channel. Safe to call repeatedly."""
        channel, self._channel = self._channel, None
        if channel is None:
            return
        try:
            channel.disconnect(self.set_mode)
        except (RuntimeError, TypeError):
            # Sender already gone
            pass
