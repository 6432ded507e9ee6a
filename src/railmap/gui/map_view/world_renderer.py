"""Drawing of world snapshots into the map viewport.

Splines are drawn as polylines, players and frames as markers. The
renderer is also where follow requests get their on-canvas element: when
the followed entity is drawn, its marker is handed to the camera together
with the latest entity data, which triggers a recenter.
"""

import logging
from typing import TYPE_CHECKING, Optional, Union

import shiboken6
from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QPainterPath, QPen
from PySide6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsPathItem,
    QGraphicsRectItem,
)

from railmap.world import Frame, Player, WorldData

from .coord_mapper import CanvasMetrics
from .follow_camera import FollowKind
from .viewport_engine import BoundingBox

if TYPE_CHECKING:
    from PySide6.QtWidgets import QGraphicsView
    from .context import MapContext

PLAYER_COLOR = QColor("#d32f2f")
FRAME_COLOR = QColor("#1565c0")
TRACK_COLOR = QColor("#3e2723")
MAP_COLOR = QColor("#e8e4d0")
TRANSPARENT_MAP_COLOR = QColor(0, 0, 0, 60)

# Marker sizes in canvas units
PLAYER_RADIUS = 12.0
FRAME_LENGTH = 30.0
FRAME_WIDTH = 10.0
MINIMAP_MARKER_SCALE = 0.5

MarkerItem = Union[QGraphicsEllipseItem, QGraphicsRectItem]


class SceneItemRef:
    """Non-owning reference to a scene item, measured in view coordinates."""

    def __init__(self, view: "QGraphicsView", item: QGraphicsItem):
        self._view = view
        self._item = item

    def bounding_box(self) -> Optional[BoundingBox]:
        item = self._item
        if not shiboken6.isValid(item) or not shiboken6.isValid(self._view):
            return None
        if item.scene() is None or not item.isVisible():
            return None
        rect = self._view.mapFromScene(item.sceneBoundingRect()).boundingRect()
        if rect.isEmpty():
            return None
        return BoundingBox(rect.x(), rect.y(), rect.width(), rect.height())


class WorldRenderer:
    """Keeps scene items in sync with the latest world snapshot."""

    def __init__(
        self,
        view: "QGraphicsView",
        root: QGraphicsRectItem,
        metrics: CanvasMetrics,
        context: "MapContext",
    ):
        """
        Args:
            view: View the items are shown in, used for measuring
            root: Map image item; everything is parented to it
            metrics: Canvas metrics for world to canvas conversion
            context: Map context for follow requests and minimap flag
        """
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.view = view
        self.root = root
        self.metrics = metrics
        self.context = context

        self.world: Optional[WorldData] = None
        self._spline_items: list[QGraphicsPathItem] = []
        self._markers: dict[FollowKind, list[MarkerItem]] = {
            FollowKind.PLAYER: [],
            FollowKind.FRAME: [],
        }
        self._refs: dict[int, SceneItemRef] = {}

        self.apply_style()

    # === PUBLIC ===

    def render(self, world: WorldData) -> None:
        """Draw a new snapshot, moving existing markers where possible."""
        if self.world is None or self.world.splines != world.splines:
            self._draw_splines(world)

        self._sync_markers(FollowKind.PLAYER, world.players)
        self._sync_markers(FollowKind.FRAME, world.frames)
        self.world = world

        self.refresh_follow()

    def refresh_follow(self, *args: object) -> None:
        """Hand the followed entity's marker and data to the camera."""
        target = self.context.following
        if target is None or self.world is None:
            return

        markers = self._markers[target.kind]
        entity = self.world.get_entity(target.kind.value, target.index)
        if entity is None or target.index >= len(markers):
            self.logger.debug(
                f"No {target.kind.value} #{target.index} on the map to follow"
            )
            return

        element = self._ref_for(markers[target.index])
        if target.element is element and target.data is entity:
            return
        self.context.follow_element(target.kind, target.index, element, entity)

    def apply_style(self) -> None:
        """Update colors and marker sizes for the current display mode."""
        self.root.setBrush(
            QBrush(TRANSPARENT_MAP_COLOR if self.context.transparent else MAP_COLOR)
        )
        scale = MINIMAP_MARKER_SCALE if self.context.minimap else 1.0
        for markers in self._markers.values():
            for marker in markers:
                marker.setScale(scale)

    # === INTERNALS ===

    def _ref_for(self, item: MarkerItem) -> SceneItemRef:
        ref = self._refs.get(id(item))
        if ref is None:
            ref = SceneItemRef(self.view, item)
            self._refs[id(item)] = ref
        return ref

    def _draw_splines(self, world: WorldData) -> None:
        scene = self.root.scene()
        for item in self._spline_items:
            if scene is not None:
                scene.removeItem(item)
        self._spline_items.clear()

        pen = QPen(TRACK_COLOR)
        pen.setCosmetic(True)
        pen.setWidthF(1.5)

        for spline in world.splines:
            path = QPainterPath()
            for segment in spline.segments:
                if not segment.visible:
                    continue
                path.moveTo(QPointF(*self.metrics.world_to_canvas(segment.start.x, segment.start.y)))
                path.lineTo(QPointF(*self.metrics.world_to_canvas(segment.end.x, segment.end.y)))
            item = QGraphicsPathItem(path, self.root)
            item.setPen(pen)
            self._spline_items.append(item)

    def _sync_markers(
        self, kind: FollowKind, entities: tuple[Union[Player, Frame], ...]
    ) -> None:
        markers = self._markers[kind]
        scene = self.root.scene()

        while len(markers) > len(entities):
            item = markers.pop()
            self._refs.pop(id(item), None)
            if scene is not None:
                scene.removeItem(item)

        while len(markers) < len(entities):
            markers.append(self._create_marker(kind))

        for marker, entity in zip(markers, entities):
            x, y = self.metrics.world_to_canvas(entity.location.x, entity.location.y)
            marker.setPos(x, y)
            marker.setRotation(entity.rotation.y)
            marker.setToolTip(_describe(entity))

    def _create_marker(self, kind: FollowKind) -> MarkerItem:
        marker: MarkerItem
        if kind is FollowKind.PLAYER:
            marker = QGraphicsEllipseItem(
                QRectF(-PLAYER_RADIUS, -PLAYER_RADIUS, PLAYER_RADIUS * 2, PLAYER_RADIUS * 2),
                self.root,
            )
            marker.setBrush(QBrush(PLAYER_COLOR))
            marker.setZValue(2)
        else:
            marker = QGraphicsRectItem(
                QRectF(-FRAME_LENGTH / 2, -FRAME_WIDTH / 2, FRAME_LENGTH, FRAME_WIDTH),
                self.root,
            )
            marker.setBrush(QBrush(FRAME_COLOR))
            marker.setZValue(1)
        marker.setPen(QPen(Qt.PenStyle.NoPen))
        if self.context.minimap:
            marker.setScale(MINIMAP_MARKER_SCALE)
        return marker


def _describe(entity: Union[Player, Frame]) -> str:
    if isinstance(entity, Player):
        return entity.name
    label = entity.name or entity.type
    return f"{label} {entity.number}".strip()
