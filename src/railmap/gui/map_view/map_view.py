"""Main view widget for map rendering.

This module provides the MapView widget that wires the viewport engine,
the wheel gesture translator, the follow camera and the world renderer
to a QGraphicsView.

The scene rect always equals the viewport, so scene coordinates are
viewport pixels. All map content lives under one root item whose
transform is driven by the engine.
"""

import logging
from typing import Optional

import qtawesome as qta  # type: ignore
from PySide6.QtCore import QRectF, Qt, Signal
from PySide6.QtGui import QPainter, QTransform
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsRectItem,
    QGraphicsScene,
    QGraphicsView,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from railmap.settings import AppSettings
from railmap.world import WorldData

from .context import MapContext
from .coord_mapper import CanvasMetrics, compute_canvas_metrics
from .events import MapViewEventHandlers
from .follow_camera import FollowCameraController, FollowKind, FollowTarget
from .mode_store import DisplayMode, ModeStateStore
from .viewport_engine import BoundingBox, ViewportEngine
from .wheel_gesture import WheelEventFilter, WheelGestureTranslator
from .world_renderer import WorldRenderer

BACKGROUND_STYLE = "background-color: #fefef2;"
OVERLAY_BACKGROUND_STYLE = "background: transparent;"


class MapView(MapViewEventHandlers, QGraphicsView):
    """Graphics view showing the world map with pan, zoom and follow camera."""

    resized = Signal()

    def __init__(
        self,
        settings: AppSettings,
        mode_store: ModeStateStore,
        overlay: bool = False,
        metrics: Optional[CanvasMetrics] = None,
        parent: Optional[QWidget] = None,
    ):
        """Initialize the map view.

        Args:
            settings: Application settings (zoom limits, zoom step)
            mode_store: Display mode shared with the host window
            overlay: Whether the app runs as an overlay; starts zoomed in
                and following the first player
            metrics: Canvas metrics, computed from default bounds if omitted
            parent: Parent widget
        """
        super().__init__(parent)

        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.settings = settings
        self.mode_store = mode_store
        self.overlay = overlay
        self.metrics = metrics or compute_canvas_metrics()

        self._scene = QGraphicsScene(self)
        self.setScene(self._scene)

        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setTransformationAnchor(QGraphicsView.ViewportAnchor.NoAnchor)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setStyleSheet(OVERLAY_BACKGROUND_STYLE if overlay else BACKGROUND_STYLE)
        self.setSceneRect(0, 0, self.viewport().width(), self.viewport().height())

        self._is_panning = False
        self._pan_start_x = 0.0
        self._pan_start_y = 0.0
        self._initial_view_done = False
        self._shut_down = False

        # Map image; parent of every drawn item
        size = self.metrics.image_size
        self.map_root = QGraphicsRectItem(QRectF(0, 0, size, size))
        self._scene.addItem(self.map_root)

        viewport_settings = settings.viewport
        self.engine = ViewportEngine(
            size,
            self._measure_viewport,
            min_zoom=viewport_settings.min_zoom,
            max_zoom=viewport_settings.max_zoom,
            parent=self,
        )
        self.engine.transformChanged.connect(self._apply_transform)
        self._apply_transform(self.engine.real_zoom, *self.engine.pan)

        self.wheel_translator = WheelGestureTranslator(self.engine)
        self.wheel_filter = WheelEventFilter(self.wheel_translator, self)
        self.wheel_filter.install(self.viewport())
        self.engine.add_teardown(self.wheel_filter.uninstall)

        self.camera = FollowCameraController(self.engine, mode_store, self.resized, self)
        self.context = MapContext(self.camera, mode_store)

        self.renderer = WorldRenderer(self, self.map_root, self.metrics, self.context)
        self.camera.followingChanged.connect(self.renderer.refresh_follow)
        self.camera.followingChanged.connect(self._update_follow_button)
        self.mode_store.modeChanged.connect(self._on_mode_changed)

        self._setup_overlay_ui()

        if overlay:
            self.camera.start_following(FollowTarget(FollowKind.PLAYER, 0))

        self.logger.debug("Map view initialized")

    # === OVERLAY UI ===

    def _setup_overlay_ui(self) -> None:
        """Zoom and follow buttons in the top-right corner."""
        self.overlay_container = QWidget(self)
        layout = QVBoxLayout(self.overlay_container)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)
        layout.setSizeConstraint(QVBoxLayout.SizeConstraint.SetFixedSize)

        self.zoom_in_button = self._create_overlay_button("mdi.magnify-plus-outline", "Zoom In [ + ]")
        self.zoom_in_button.clicked.connect(self.zoom_in)
        layout.addWidget(self.zoom_in_button)

        self.zoom_out_button = self._create_overlay_button("mdi.magnify-minus-outline", "Zoom Out [ - ]")
        self.zoom_out_button.clicked.connect(self.zoom_out)
        layout.addWidget(self.zoom_out_button)

        self.follow_button = self._create_overlay_button("mdi.crosshairs-gps", "Follow Player [ F ]")
        self.follow_button.clicked.connect(self.toggle_following)
        layout.addWidget(self.follow_button)

        self._update_overlay_visibility()
        self.overlay_container.raise_()

    def _create_overlay_button(self, icon_name: str, tooltip: str) -> QPushButton:
        button = QPushButton("", self.overlay_container)
        button.setIcon(qta.icon(icon_name))  # type: ignore[arg-type]
        button.setFixedSize(32, 32)
        button.setFlat(True)
        button.setToolTip(tooltip)
        button.setProperty("class", "map-overlay-button")
        return button

    def _position_overlay_ui(self) -> None:
        margin = 20
        self.overlay_container.adjustSize()
        self.overlay_container.move(
            self.width() - self.overlay_container.width() - margin, margin
        )

    def _update_overlay_visibility(self) -> None:
        self.overlay_container.setVisible(not self.mode_store.is_minimap)
        has_players = self.renderer.world is not None and len(self.renderer.world.players) > 0
        self.follow_button.setVisible(has_players)

    def _update_follow_button(self, target: Optional[FollowTarget]) -> None:
        if target is not None:
            self.follow_button.setIcon(qta.icon("mdi.cancel"))  # type: ignore[arg-type]
            self.follow_button.setToolTip("Stop Following [ F ]")
        else:
            self.follow_button.setIcon(qta.icon("mdi.crosshairs-gps"))  # type: ignore[arg-type]
            self.follow_button.setToolTip("Follow Player [ F ]")

    # === PUBLIC API ===

    def set_world(self, world: WorldData) -> None:
        """Draw a world snapshot; repeated calls update positions."""
        self.renderer.render(world)
        self._update_overlay_visibility()

    def zoom_in(self) -> None:
        self.engine.zoom_by(self.settings.viewport.zoom_button_step)

    def zoom_out(self) -> None:
        self.engine.zoom_by(1 / self.settings.viewport.zoom_button_step)

    def toggle_following(self) -> None:
        self.camera.toggle_following(FollowKind.PLAYER, 0)

    def shutdown(self) -> None:
        """Release camera subscriptions and the engine. Safe to call twice."""
        if self._shut_down:
            return
        self._shut_down = True
        try:
            self.camera.shutdown()
            try:
                self.mode_store.modeChanged.disconnect(self._on_mode_changed)
            except (RuntimeError, TypeError):
                pass
        finally:
            self.engine.destroy()
        self.logger.debug("Map view shut down")

    # === INTERNALS ===

    def _measure_viewport(self) -> Optional[BoundingBox]:
        viewport = self.viewport()
        if viewport is None:
            return None
        return BoundingBox(0, 0, viewport.width(), viewport.height())

    def _apply_transform(self, real_zoom: float, pan_x: float, pan_y: float) -> None:
        self.map_root.setTransform(QTransform(real_zoom, 0, 0, real_zoom, pan_x, pan_y))

    def _ensure_initial_view(self) -> None:
        """Fit the map once the viewport has its first real size.

        An active camera recenters on the resized signal that follows.
        """
        if self._initial_view_done or self.engine.measure_host() is None:
            return
        self._initial_view_done = True
        self.engine.fit_and_center()
        if self.overlay:
            self.engine.zoom(self.settings.viewport.overlay_zoom)

    def _on_mode_changed(self, mode: DisplayMode, transparent: bool) -> None:
        self.renderer.apply_style()
        self._update_overlay_visibility()
