"""Map view package.

This package provides the components behind the map canvas:
- CoordinateMapper: world bounds to canvas metrics (coord_mapper)
- ViewportEngine: pan/zoom state of the canvas
- WheelGestureTranslator: damped wheel-to-zoom translation
- FollowCameraController: keeps a followed entity centered
- ModeStateStore: display mode and transparency
- MapContext: what renderers can read and request
- WorldRenderer: draws world snapshots
- MapView: the widget wiring everything together
"""

from .coord_mapper import (
    CanvasMetrics,
    DEFAULT_WORLD_BOUNDS,
    IMAGE_SIZE,
    WorldBounds,
    compute_canvas_metrics,
)
from .viewport_engine import BoundingBox, ViewportEngine, ViewportState
from .wheel_gesture import (
    WheelEventFilter,
    WheelGestureTranslator,
    damping_divider,
    normalize_wheel_delta,
    wheel_delta_from_event,
    zoom_factor_for,
)
from .mode_store import DisplayMode, ModeStateStore
from .follow_camera import (
    ElementRef,
    FollowCameraController,
    FollowKind,
    FollowState,
    FollowTarget,
)
from .context import MapContext
from .world_renderer import SceneItemRef, WorldRenderer
from .map_view import MapView

__all__ = [
    "CanvasMetrics",
    "DEFAULT_WORLD_BOUNDS",
    "IMAGE_SIZE",
    "WorldBounds",
    "compute_canvas_metrics",
    "BoundingBox",
    "ViewportEngine",
    "ViewportState",
    "WheelEventFilter",
    "WheelGestureTranslator",
    "damping_divider",
    "normalize_wheel_delta",
    "wheel_delta_from_event",
    "zoom_factor_for",
    "DisplayMode",
    "ModeStateStore",
    "ElementRef",
    "FollowCameraController",
    "FollowKind",
    "FollowState",
    "FollowTarget",
    "MapContext",
    "SceneItemRef",
    "WorldRenderer",
    "MapView",
]
