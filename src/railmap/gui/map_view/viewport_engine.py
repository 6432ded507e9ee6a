"""Pan and zoom engine for the map canvas.

The engine owns the viewport transform. Canvas content of edge
``content_size`` is shown on the host at::

    screen = content * real_zoom + pan

where ``real_zoom = zoom * fit_scale`` and ``fit_scale`` is the scale that
fits the whole content into the host. Zoom levels are therefore relative
to fit-to-screen: ``zoom == 1`` shows the whole map.

The engine never touches widgets. It measures the host through a callable
and publishes transform changes through ``transformChanged``; the view
applies them to its scene.
"""

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional

from PySide6.QtCore import QObject, Signal

from railmap.settings.types import ConfigError
from railmap.settings.viewport import DEFAULT_MAX_ZOOM, DEFAULT_MIN_ZOOM

Point = tuple[float, float]


@dataclass(frozen=True)
class BoundingBox:
    """Axis aligned box in screen space."""

    left: float
    top: float
    width: float
    height: float

    @property
    def center(self) -> Point:
        return (self.left + self.width / 2, self.top + self.height / 2)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class ViewportState:
    """Snapshot of the engine state."""

    zoom: float
    pan_x: float
    pan_y: float
    pan_enabled: bool = True
    zoom_enabled: bool = True


class ViewportEngine(QObject):
    """Stateful pan/zoom engine over a measurable host."""

    # real zoom, pan x, pan y
    transformChanged = Signal(float, float, float)

    def __init__(
        self,
        content_size: float,
        measure_host: Callable[[], Optional[BoundingBox]],
        min_zoom: float = DEFAULT_MIN_ZOOM,
        max_zoom: float = DEFAULT_MAX_ZOOM,
        parent: Optional[QObject] = None,
    ):
        """Initialize the engine fitted and centered in the host.

        Args:
            content_size: Edge of the square content in canvas units
            measure_host: Returns the host box, or None while it is not laid out
            min_zoom: Smallest zoom relative to fit-to-screen
            max_zoom: Largest zoom relative to fit-to-screen
            parent: Optional Qt parent

        Raises:
            ConfigError: If content size or zoom range is invalid
        """
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

        if content_size <= 0:
            raise ConfigError(f"Content size must be positive: {content_size}")
        if min_zoom <= 0 or min_zoom > max_zoom:
            raise ConfigError(f"Invalid zoom range: [{min_zoom}, {max_zoom}]")

        self.content_size = content_size
        self.min_zoom = min_zoom
        self.max_zoom = max_zoom
        self._measure_host = measure_host

        self._host = BoundingBox(0, 0, content_size, content_size)
        self._fit_scale = 1.0
        self._state = ViewportState(zoom=1.0, pan_x=0.0, pan_y=0.0)
        self._teardowns: list[Callable[[], None]] = []
        self._destroyed = False

        self._update_host()
        self.fit_and_center()

    # === QUERIES ===

    @property
    def state(self) -> ViewportState:
        return self._state

    @property
    def zoom_level(self) -> float:
        return self._state.zoom

    @property
    def real_zoom(self) -> float:
        return self._state.zoom * self._fit_scale

    @property
    def pan(self) -> Point:
        return (self._state.pan_x, self._state.pan_y)

    @property
    def host(self) -> BoundingBox:
        """Host box as of the last resize()."""
        return self._host

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    def is_pan_enabled(self) -> bool:
        return self._state.pan_enabled

    def is_zoom_enabled(self) -> bool:
        return self._state.zoom_enabled

    def measure_host(self) -> Optional[BoundingBox]:
        """Measure the host now, without touching cached bookkeeping."""
        box = self._measure_host()
        if box is None or box.is_empty:
            return None
        return box

    def screen_to_content(self, point: Point) -> Point:
        """Convert a host-local point to content coordinates."""
        real_zoom = self.real_zoom
        return (
            (point[0] - self._state.pan_x) / real_zoom,
            (point[1] - self._state.pan_y) / real_zoom,
        )

    def content_to_screen(self, point: Point) -> Point:
        """Convert a content point to host-local coordinates."""
        real_zoom = self.real_zoom
        return (
            point[0] * real_zoom + self._state.pan_x,
            point[1] * real_zoom + self._state.pan_y,
        )

    # === CAPABILITIES ===

    def enable_pan(self) -> None:
        self._state = replace(self._state, pan_enabled=True)

    def disable_pan(self) -> None:
        self._state = replace(self._state, pan_enabled=False)

    def enable_zoom(self) -> None:
        self._state = replace(self._state, zoom_enabled=True)

    def disable_zoom(self) -> None:
        self._state = replace(self._state, zoom_enabled=False)

    # === TRANSFORM OPERATIONS ===

    def fit_and_center(self) -> None:
        """Show the whole content centered in the host."""
        if self._destroyed:
            return
        size = self.content_size * self._fit_scale
        self._set_transform(
            1.0,
            (self._host.width - size) / 2,
            (self._host.height - size) / 2,
        )

    def zoom(self, level: float) -> None:
        """Set an absolute zoom level, anchored at the host center."""
        if level <= 0:
            self.logger.warning(f"Invalid zoom level: {level}")
            return
        self._zoom_at(level / self._state.zoom, self._host_center())

    def zoom_by(self, factor: float) -> None:
        """Multiply the zoom level, anchored at the host center."""
        self._zoom_at(factor, self._host_center())

    def zoom_at_point(self, factor: float, point: Point) -> None:
        """Multiply the zoom level keeping ``point`` (host-local) in place."""
        self._zoom_at(factor, point)

    def pan_by(self, dx: float, dy: float, force: bool = False) -> None:
        """Translate the view by a screen-space delta.

        Ignored while panning is disabled unless ``force`` is set. The
        follow camera pans with ``force`` since it owns panning while active.
        """
        if self._destroyed:
            return
        if not self._state.pan_enabled and not force:
            return
        self._set_transform(
            self._state.zoom, self._state.pan_x + dx, self._state.pan_y + dy
        )

    def resize(self) -> None:
        """Re-measure the host after a layout change.

        The on-screen transform is kept; only the fit scale and the relative
        zoom level are recomputed against the new host size. If the kept
        transform falls outside the zoom range, the level is clamped around
        the new host center.
        """
        if self._destroyed:
            return
        real_zoom = self.real_zoom
        if not self._update_host():
            return
        zoom = real_zoom / self._fit_scale
        clamped = min(self.max_zoom, max(self.min_zoom, zoom))
        if clamped == zoom:
            self._state = replace(self._state, zoom=zoom)
            return

        self.logger.debug(f"Zoom {zoom:.3f} out of range after resize, clamping to {clamped}")
        ratio = clamped / zoom
        center_x, center_y = self._host_center()
        self._set_transform(
            clamped,
            center_x - (center_x - self._state.pan_x) * ratio,
            center_y - (center_y - self._state.pan_y) * ratio,
        )

    # === LIFECYCLE ===

    def add_teardown(self, callback: Callable[[], None]) -> None:
        """Register a callback run once by destroy()."""
        if self._destroyed:
            callback()
            return
        self._teardowns.append(callback)

    def destroy(self) -> None:
        """Release listeners and registered resources. Safe to call twice."""
        if self._destroyed:
            return
        self._destroyed = True

        teardowns, self._teardowns = self._teardowns, []
        for callback in reversed(teardowns):
            try:
                callback()
            except Exception as e:
                self.logger.warning(f"Viewport teardown failed: {e}")

        try:
            self.transformChanged.disconnect()
        except (RuntimeError, TypeError):
            # Nothing connected
            pass

        self.logger.debug("Viewport engine destroyed")

    # === INTERNALS ===

    def _host_center(self) -> Point:
        return (self._host.width / 2, self._host.height / 2)

    def _update_host(self) -> bool:
        box = self.measure_host()
        if box is None:
            self.logger.debug("Host not measurable, keeping previous size")
            return False
        self._host = box
        self._fit_scale = min(box.width, box.height) / self.content_size
        return True

    def _zoom_at(self, factor: float, point: Point) -> None:
        if self._destroyed or not self._state.zoom_enabled:
            return
        if factor <= 0:
            self.logger.warning(f"Invalid zoom factor: {factor}")
            return

        old_zoom = self._state.zoom
        new_zoom = min(self.max_zoom, max(self.min_zoom, old_zoom * factor))
        ratio = new_zoom / old_zoom

        # Keep the content point under `point` fixed
        pan_x = point[0] - (point[0] - self._state.pan_x) * ratio
        pan_y = point[1] - (point[1] - self._state.pan_y) * ratio
        self._set_transform(new_zoom, pan_x, pan_y)

    def _set_transform(self, zoom: float, pan_x: float, pan_y: float) -> None:
        self._state = replace(self._state, zoom=zoom, pan_x=pan_x, pan_y=pan_y)
        self.transformChanged.emit(self.real_zoom, pan_x, pan_y)
