"""Shared fixtures for railmap tests."""

import os
from typing import Optional

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtCore import QObject, QPoint, QPointF, Qt, Signal
from PySide6.QtGui import QWheelEvent
from PySide6.QtWidgets import QApplication

from railmap.gui.map_view import BoundingBox, ModeStateStore, ViewportEngine
from railmap.settings import AppSettings


class FakeHost:
    """Host element whose size the test controls."""

    def __init__(self, width: float = 800, height: float = 600):
        self.box: Optional[BoundingBox] = BoundingBox(0, 0, width, height)

    def set_size(self, width: float, height: float) -> None:
        self.box = BoundingBox(0, 0, width, height)

    def __call__(self) -> Optional[BoundingBox]:
        return self.box


class ContentElement:
    """Element drawn at a fixed content point, so it moves with the view."""

    def __init__(self, engine: ViewportEngine, x: float, y: float, size: float = 10):
        self.engine = engine
        self.point = (x, y)
        self.size = size
        self.measurable = True

    def bounding_box(self) -> Optional[BoundingBox]:
        if not self.measurable:
            return None
        cx, cy = self.engine.content_to_screen(self.point)
        half = self.size / 2
        return BoundingBox(cx - half, cy - half, self.size, self.size)


class ResizeSource(QObject):
    resized = Signal()


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def advance(self, ms: float) -> None:
        self.now += ms

    def __call__(self) -> float:
        return self.now


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


@pytest.fixture
def host() -> FakeHost:
    return FakeHost()


@pytest.fixture
def engine(host: FakeHost) -> ViewportEngine:
    return ViewportEngine(8000, host)


@pytest.fixture
def resize_source() -> ResizeSource:
    return ResizeSource()


@pytest.fixture
def mode_store() -> ModeStateStore:
    return ModeStateStore()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(1000.0)


@pytest.fixture
def make_element(engine: ViewportEngine):
    def factory(x: float = 1000, y: float = 2000) -> ContentElement:
        return ContentElement(engine, x, y)
    return factory


@pytest.fixture
def wheel_event():
    """Builds vertical QWheelEvents at a host-local position."""
    def factory(angle_y: int = 0, pixel_y: int = 0, x: float = 400, y: float = 300) -> QWheelEvent:
        point = QPointF(x, y)
        return QWheelEvent(
            point,
            point,
            QPoint(0, pixel_y),
            QPoint(0, angle_y),
            Qt.MouseButton.NoButton,
            Qt.KeyboardModifier.NoModifier,
            Qt.ScrollPhase.NoScrollPhase,
            False,
        )
    return factory


@pytest.fixture
def app_settings(tmp_path) -> AppSettings:
    return AppSettings(settings_file=tmp_path / "railmap.ini")
