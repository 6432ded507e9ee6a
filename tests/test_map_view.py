"""Smoke tests of the MapView widget on the offscreen platform."""

import pytest
from PySide6.QtWidgets import QApplication

from railmap.gui.map_view import DisplayMode, FollowKind, MapView, ModeStateStore
from railmap.world import build_demo_world


@pytest.fixture
def view(qapp, app_settings):
    store = ModeStateStore()
    widget = MapView(app_settings, store)
    widget.resize(800, 600)
    widget.show()
    qapp.processEvents()
    widget.set_world(build_demo_world())
    yield widget
    widget.shutdown()
    widget.close()


def _viewport_center(view: MapView) -> tuple:
    return (view.viewport().width() / 2, view.viewport().height() / 2)


class TestMapView:
    def test_initial_view_fits_map(self, view: MapView) -> None:
        assert view.engine.zoom_level == pytest.approx(1)
        assert view.wheel_filter.is_installed

    def test_zoom_buttons(self, view: MapView, app_settings) -> None:
        view.zoom_in()
        assert view.engine.zoom_level == pytest.approx(app_settings.viewport.zoom_button_step)

        view.zoom_out()
        assert view.engine.zoom_level == pytest.approx(1)

    def test_wheel_down_zooms_out_and_is_consumed(self, view: MapView, wheel_event) -> None:
        anchor = view.engine.screen_to_content((300, 200))

        handled = QApplication.sendEvent(view.viewport(), wheel_event(angle_y=-120, x=300, y=200))

        assert handled
        assert view.engine.zoom_level < 1
        assert view.engine.screen_to_content((300, 200)) == pytest.approx(anchor)

    def test_wheel_up_zooms_in(self, view: MapView, wheel_event) -> None:
        QApplication.sendEvent(view.viewport(), wheel_event(angle_y=120))

        assert view.engine.zoom_level > 1

    def test_wheel_passes_through_when_zoom_disabled(self, view: MapView, wheel_event) -> None:
        view.engine.disable_zoom()
        last = view.wheel_translator.last_event_time
        event = wheel_event(angle_y=120)

        assert not view.wheel_filter.eventFilter(view.viewport(), event)

        QApplication.sendEvent(view.viewport(), event)
        assert view.engine.zoom_level == pytest.approx(1)
        assert view.wheel_translator.last_event_time == last

    def test_follow_centers_player_marker(self, view: MapView) -> None:
        view.toggle_following()

        target = view.context.following
        assert target is not None
        assert target.kind is FollowKind.PLAYER
        assert target.element is not None
        assert view.camera.is_active
        assert not view.engine.is_pan_enabled()

        box = target.element.bounding_box()
        assert box is not None
        center_x, center_y = box.center
        expected_x, expected_y = _viewport_center(view)
        assert center_x == pytest.approx(expected_x, abs=2)
        assert center_y == pytest.approx(expected_y, abs=2)

        view.toggle_following()
        assert view.context.following is None
        assert view.engine.is_pan_enabled()

    def test_minimap_hides_overlay_buttons(self, view: MapView) -> None:
        view.mode_store.set_mode(DisplayMode.MINIMAP, False)
        assert view.context.minimap
        assert view.overlay_container.isHidden()

    def test_shutdown_is_idempotent(self, view: MapView) -> None:
        view.shutdown()
        view.shutdown()

        assert view.engine.is_destroyed
        assert not view.wheel_filter.is_installed


def test_overlay_starts_following(qapp, app_settings) -> None:
    store = ModeStateStore.for_startup(overlay=True)
    view = MapView(app_settings, store, overlay=True)
    try:
        view.resize(400, 300)
        view.show()
        qapp.processEvents()
        view.set_world(build_demo_world())

        assert view.context.following is not None
        assert view.camera.is_active
        assert view.engine.zoom_level == pytest.approx(20, rel=0.01)
    finally:
        view.shutdown()
        view.close()


def test_first_resize_recenters_once(qapp, app_settings) -> None:
    view = MapView(app_settings, ModeStateStore())
    try:
        view.set_world(build_demo_world())
        view.toggle_following()
        recenters = []
        resizes = []
        view.camera.recentered.connect(lambda dx, dy: recenters.append((dx, dy)))
        view.resized.connect(lambda: resizes.append(None))

        view.resize(800, 600)
        view.show()
        qapp.processEvents()

        assert view.camera.is_active
        assert resizes
        assert len(recenters) == len(resizes)
    finally:
        view.shutdown()
        view.close()
