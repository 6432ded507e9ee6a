"""Mouse wheel to zoom translation.

Wheel deltas are turned into zoom factors with logarithmic scaling and a
time based damping divider: events arriving in quick succession (fast
scrolling, inertial trackpads) get a larger divider and thus a smaller
zoom step.
"""

import logging
import math
import time
from typing import TYPE_CHECKING, Any, Callable, Optional

import shiboken6
from PySide6.QtCore import QEvent, QObject

from .viewport_engine import Point

if TYPE_CHECKING:
    from PySide6.QtWidgets import QWidget
    from .viewport_engine import ViewportEngine

ZOOM_BASE = 1.1
LINEAR_DELTA_LIMIT = 0.3
BASE_DIVIDER = 3
DAMPING_WINDOW_MS = 30

# Qt reports wheel rotation in eighths of a degree, 120 per notch.
# Browsers report ~100 pixels per notch with the opposite sign.
ANGLE_UNITS_PER_NOTCH = 120
PIXELS_PER_NOTCH = 100


def _now_ms() -> float:
    return time.monotonic() * 1000


def damping_divider(time_delta_ms: float) -> float:
    """Divider in [3, 33]; events closer than 30ms are damped."""
    return BASE_DIVIDER + max(0.0, DAMPING_WINDOW_MS - time_delta_ms)


def normalize_wheel_delta(delta: float, divider: float) -> float:
    """Scale a raw wheel delta to a zoom exponent.

    Tiny deltas are taken as already normalized to avoid the log blowing
    up around zero.
    """
    if -LINEAR_DELTA_LIMIT < delta < LINEAR_DELTA_LIMIT:
        return delta
    sign = 1 if delta > 0 else -1
    return sign * math.log(abs(delta) + 10) / divider


def zoom_factor_for(delta: float, time_delta_ms: float) -> float:
    """Zoom factor for a raw wheel delta; positive deltas zoom out."""
    normalized = normalize_wheel_delta(delta, damping_divider(time_delta_ms))
    return math.pow(ZOOM_BASE, -normalized)


class WheelGestureTranslator:
    """Drives a ViewportEngine from raw wheel deltas."""

    def __init__(
        self,
        engine: "ViewportEngine",
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Args:
            engine: Engine receiving the zoom
            clock: Millisecond clock, monotonic by default
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.engine = engine
        self._clock = clock or _now_ms
        self._last_event_time = self._clock()

    @property
    def last_event_time(self) -> float:
        return self._last_event_time

    def handle_wheel(self, delta_y: float, point: Point) -> Optional[float]:
        """Apply one wheel event.

        Args:
            delta_y: Browser-style vertical delta, positive when scrolling down
            point: Pointer position in host-local coordinates

        Returns:
            The zoom factor applied, or None if zoom is disabled
        """
        if not self.engine.is_zoom_enabled():
            return None

        delta = delta_y or 1
        now = self._clock()
        time_delta = now - self._last_event_time
        self._last_event_time = now

        factor = zoom_factor_for(delta, time_delta)

        if self.engine.is_pan_enabled():
            self.engine.zoom_at_point(factor, point)
        else:
            # Camera owns the center while panning is locked
            self.engine.zoom_by(factor)
        return factor


def wheel_delta_from_event(event: Any) -> float:
    """Browser-style vertical delta of a QWheelEvent."""
    pixel_delta = event.pixelDelta()
    if not pixel_delta.isNull():
        return float(-pixel_delta.y())
    return -event.angleDelta().y() / ANGLE_UNITS_PER_NOTCH * PIXELS_PER_NOTCH


class WheelEventFilter(QObject):
    """Event filter feeding wheel events of a widget to a translator.

    Installed with install() and removed with uninstall(); both are safe
    to repeat and uninstall tolerates a widget that is already deleted.
    """

    def __init__(self, translator: WheelGestureTranslator, parent: Optional[QObject] = None):
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.translator = translator
        self._target: Optional["QWidget"] = None

    @property
    def is_installed(self) -> bool:
        return self._target is not None

    def install(self, widget: "QWidget") -> None:
        if self._target is widget:
            return
        self.uninstall()
        widget.installEventFilter(self)
        self._target = widget
        self.logger.debug("Wheel listener installed")

    def uninstall(self) -> None:
        target, self._target = self._target, None
        if target is None:
            return
        if shiboken6.isValid(target):
            target.removeEventFilter(self)
        self.logger.debug("Wheel listener removed")

    def eventFilter(self, watched: Any, event: Any) -> bool:
        if event.type() != QEvent.Type.Wheel:
            return False
        if not self.translator.engine.is_zoom_enabled():
            return False

        position = event.position()
        self.translator.handle_wheel(
            wheel_delta_from_event(event), (position.x(), position.y())
        )
        # Consumed, so the view does not scroll
        return True
