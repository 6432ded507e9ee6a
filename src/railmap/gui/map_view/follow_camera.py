"""Follow camera keeping a tracked entity centered in the view.

While a target with an on-canvas element is set and the display is not in
full-map mode, the camera owns panning: user panning is disabled and the
view is recentered on activation, on every host resize, and whenever the
target's element or data changes. The element is a non-owning reference
that is measured again on every recenter.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Protocol, Union

from PySide6.QtCore import QObject, Signal

from .mode_store import DisplayMode, ModeStateStore
from .viewport_engine import BoundingBox, ViewportEngine


class FollowKind(str, Enum):
    """Kinds of entities the camera can follow."""

    PLAYER = "player"
    FRAME = "frame"


class FollowState(Enum):
    IDLE = "idle"
    FOLLOWING = "following"


class ElementRef(Protocol):
    """Something drawn on the canvas that can be measured on demand."""

    def bounding_box(self) -> Optional[BoundingBox]:
        """Current box in host-local coordinates, or None if not laid out."""
        ...


@dataclass(frozen=True, eq=False)
class FollowTarget:
    """Entity requested by the user or the overlay startup."""

    kind: FollowKind
    index: int
    element: Optional[ElementRef] = None
    data: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", FollowKind(self.kind))
        if self.index < 0:
            raise ValueError(f"Follow index must be non-negative: {self.index}")

    def matches(self, kind: Union[FollowKind, str], index: int) -> bool:
        return self.kind is FollowKind(kind) and self.index == index


class FollowCameraController(QObject):
    """Recenters a ViewportEngine on the followed element."""

    followingChanged = Signal(object)
    recentered = Signal(float, float)

    def __init__(
        self,
        engine: ViewportEngine,
        mode_store: ModeStateStore,
        resize_signal: Any,
        parent: Optional[QObject] = None,
    ):
        """
        Args:
            engine: Engine to pan
            mode_store: Display mode; full-map mode suspends following
            resize_signal: Qt signal emitted when the host is resized
            parent: Optional Qt parent
        """
        super().__init__(parent)
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.engine = engine
        self.mode_store = mode_store
        self._resize_signal = resize_signal

        self._target: Optional[FollowTarget] = None
        # Element, data and mode the active camera was set up for
        self._active_key: Optional[tuple[Any, Any, DisplayMode]] = None

        self.mode_store.modeChanged.connect(self._on_mode_changed)

    # === STATE ===

    @property
    def target(self) -> Optional[FollowTarget]:
        return self._target

    @property
    def state(self) -> FollowState:
        return FollowState.IDLE if self._target is None else FollowState.FOLLOWING

    @property
    def is_active(self) -> bool:
        """True while the camera is actually recentering."""
        return self._active_key is not None

    # === OPERATIONS ===

    def start_following(self, target: FollowTarget) -> None:
        previous = self._target
        self._target = target
        if previous is None or not previous.matches(target.kind, target.index):
            self.logger.info(f"Following {target.kind.value} #{target.index}")
            self.followingChanged.emit(target)
        self._sync()

    def follow_element(
        self,
        kind: Union[FollowKind, str],
        index: int,
        element: Optional[ElementRef] = None,
        data: Any = None,
    ) -> None:
        self.start_following(FollowTarget(FollowKind(kind), index, element, data))

    def stop_following(self) -> None:
        if self._target is None:
            return
        self.logger.info("Stopped following")
        self._target = None
        self._sync()
        self.followingChanged.emit(None)

    def toggle_following(
        self, kind: FollowKind = FollowKind.PLAYER, index: int = 0
    ) -> None:
        """Stop following, or follow the given entity when idle."""
        if self._target is not None:
            self.stop_following()
        else:
            self.start_following(FollowTarget(kind, index))

    def recenter(self) -> bool:
        """Pan so the followed element sits at the host center.

        Returns:
            False if the camera is inactive or nothing can be measured right now
        """
        if self._active_key is None or self._target is None or self._target.element is None:
            return False

        # May re-anchor the transform, so measure afterwards
        self.engine.resize()
        host = self.engine.measure_host()
        element = self._target.element.bounding_box()
        if host is None or element is None:
            self.logger.debug("Followed element not measurable, skipping recenter")
            return False

        element_x, element_y = element.center
        left = element_x - host.left
        top = element_y - host.top
        dx = host.width / 2 - left
        dy = host.height / 2 - top

        self.engine.pan_by(dx, dy, force=True)
        self.recentered.emit(dx, dy)
        return True

    def shutdown(self) -> None:
        """Release subscriptions; the target is kept but no longer tracked."""
        self._deactivate()
        try:
            self.mode_store.modeChanged.disconnect(self._on_mode_changed)
        except (RuntimeError, TypeError):
            pass

    # === INTERNALS ===

    def _on_mode_changed(self, mode: DisplayMode, transparent: bool) -> None:
        self._sync()

    def _on_resize(self, *args: Any) -> None:
        self.recenter()

    def _wanted_key(self) -> Optional[tuple[Any, Any, DisplayMode]]:
        target = self._target
        if target is None or target.element is None:
            return None
        if self.mode_store.is_full_map or self.engine.is_destroyed:
            return None
        return (target.element, target.data, self.mode_store.mode)

    def _sync(self) -> None:
        wanted = self._wanted_key()
        current = self._active_key
        if (
            wanted is not None
            and current is not None
            and all(a is b for a, b in zip(wanted, current))
        ):
            return

        self._deactivate()
        if wanted is not None:
            self._activate(wanted)

    def _activate(self, key: tuple[Any, Any, DisplayMode]) -> None:
        self._active_key = key
        self._resize_signal.connect(self._on_resize)
        self.engine.disable_pan()
        self.recenter()

    def _deactivate(self) -> None:
        if self._active_key is None:
            return
        self._active_key = None
        try:
            self._resize_signal.disconnect(self._on_resize)
        except (RuntimeError, TypeError):
            pass
        self.engine.enable_pan()
