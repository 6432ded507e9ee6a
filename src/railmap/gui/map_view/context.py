"""Map context handed to renderers."""

from typing import Any, Optional, Union

from .follow_camera import ElementRef, FollowCameraController, FollowKind, FollowTarget
from .mode_store import ModeStateStore


class MapContext:
    """What renderers may read and request from the map.

    Renderers ask the camera to follow their element and read the current
    follow target and minimap flag to adjust their own drawing.
    """

    def __init__(self, camera: FollowCameraController, mode_store: ModeStateStore):
        self._camera = camera
        self._mode_store = mode_store

    def follow_element(
        self,
        kind: Union[FollowKind, str],
        index: int,
        element: Optional[ElementRef] = None,
        data: Any = None,
    ) -> None:
        self._camera.follow_element(kind, index, element, data)

    def stop_following(self) -> None:
        self._camera.stop_following()

    @property
    def following(self) -> Optional[FollowTarget]:
        return self._camera.target

    @property
    def minimap(self) -> bool:
        return self._mode_store.is_minimap

    @property
    def transparent(self) -> bool:
        return self._mode_store.transparent
