"""Event handlers for MapView.

This module provides event handling functionality for MapView,
including drag panning, keyboard shortcuts, and resize events.
"""

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeyEvent, QMouseEvent, QResizeEvent


class MapViewEventHandlers:
    """Mixin class for MapView event handling.

    Handles:
    - Drag panning (left or middle button) while the engine allows panning
    - Keyboard shortcuts (+/- zoom, F follow toggle, 0 fit)
    - Resize (scene rect, overlay UI, engine bookkeeping, resized signal)
    """

    def resizeEvent(self, event: QResizeEvent) -> None:
        """Handle widget resize."""
        super().resizeEvent(event)  # type: ignore

        viewport = self.viewport()  # type: ignore
        self.setSceneRect(0, 0, viewport.width(), viewport.height())  # type: ignore
        self._position_overlay_ui()  # type: ignore

        self.engine.resize()  # type: ignore
        self._ensure_initial_view()  # type: ignore
        self.resized.emit()  # type: ignore

    def mousePressEvent(self, event: QMouseEvent) -> None:
        """Start drag panning."""
        if event.button() in (Qt.MouseButton.LeftButton, Qt.MouseButton.MiddleButton) \
                and self.engine.is_pan_enabled():  # type: ignore
            self._is_panning = True  # type: ignore
            self._pan_start_x = event.position().x()  # type: ignore
            self._pan_start_y = event.position().y()  # type: ignore
            self.setCursor(Qt.CursorShape.ClosedHandCursor)  # type: ignore
            event.accept()
        else:
            super().mousePressEvent(event)  # type: ignore

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        """Pan by the pointer movement."""
        if self._is_panning:  # type: ignore
            delta_x = event.position().x() - self._pan_start_x  # type: ignore
            delta_y = event.position().y() - self._pan_start_y  # type: ignore

            self._pan_start_x = event.position().x()  # type: ignore
            self._pan_start_y = event.position().y()  # type: ignore

            # No-op if the camera took over panning mid-drag
            self.engine.pan_by(delta_x, delta_y)  # type: ignore
            event.accept()
        else:
            super().mouseMoveEvent(event)  # type: ignore

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        """Stop drag panning."""
        if self._is_panning:  # type: ignore
            self._is_panning = False  # type: ignore
            self.setCursor(Qt.CursorShape.ArrowCursor)  # type: ignore
            event.accept()
        else:
            super().mouseReleaseEvent(event)  # type: ignore

    def keyPressEvent(self, event: QKeyEvent) -> None:
        """Handle key press events for view control."""
        key = event.key()
        if key in (Qt.Key.Key_Plus, Qt.Key.Key_Equal):
            self.zoom_in()  # type: ignore
        elif key == Qt.Key.Key_Minus:
            self.zoom_out()  # type: ignore
        elif key == Qt.Key.Key_F:
            self.toggle_following()  # type: ignore
        elif key == Qt.Key.Key_0:
            self.engine.fit_and_center()  # type: ignore
        else:
            super().keyPressEvent(event)  # type: ignore
            return
        event.accept()
