"""Tests for settings, validation and logging setup."""

import logging

from railmap.settings import CONFIG_VERSION, AppSettings


class TestAppSettings:
    def test_defaults(self, app_settings: AppSettings) -> None:
        assert app_settings.viewport.min_zoom == 0.5
        assert app_settings.viewport.max_zoom == 100
        assert app_settings.viewport.overlay_zoom == 20
        assert app_settings.viewport.zoom_button_step == 1.3
        assert app_settings.minimap.transparent is False
        assert app_settings.version == "1.0"

    def test_version_written_on_first_use(self, app_settings: AppSettings) -> None:
        assert app_settings.settings.value("app/version") == CONFIG_VERSION

    def test_values_persist(self, tmp_path) -> None:
        path = tmp_path / "persist.ini"
        first = AppSettings(settings_file=path)
        first.viewport.max_zoom = 50
        first.minimap.transparent = True

        second = AppSettings(settings_file=path)
        assert second.viewport.max_zoom == 50
        assert second.minimap.transparent is True

    def test_garbage_value_falls_back(self, app_settings: AppSettings) -> None:
        app_settings.settings.setValue("viewport/max_zoom", "lots")

        assert app_settings.viewport.max_zoom == 100


class TestValidation:
    def test_defaults_are_valid(self, app_settings: AppSettings) -> None:
        result = app_settings.validate()

        assert result.is_valid
        assert result.errors == []

    def test_inverted_zoom_range(self, app_settings: AppSettings) -> None:
        app_settings.viewport.min_zoom = 10
        app_settings.viewport.max_zoom = 2

        result = app_settings.validate()
        assert not result.is_valid

    def test_zoom_step_must_grow(self, app_settings: AppSettings) -> None:
        app_settings.viewport.zoom_button_step = 1.0

        assert not app_settings.validate().is_valid

    def test_overlay_zoom_outside_range_warns(self, app_settings: AppSettings) -> None:
        app_settings.viewport.overlay_zoom = 500

        result = app_settings.validate()
        assert result.is_valid
        assert len(result.warnings) == 1


class TestLoggingSetup:
    def test_logging_setup_with_settings(self, app_settings: AppSettings, tmp_path) -> None:
        from railmap.utils.logging_config import setup_logging

        log_file = tmp_path / "logs" / "railmap.csv"
        app_settings.logging.file_logging = True
        app_settings.logging.log_file_path = str(log_file)

        setup_logging(settings=app_settings)
        logging.getLogger("railmap.test").info('quoted "message"')
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert logging.getLogger("railmap").level == logging.DEBUG
        content = log_file.read_text(encoding="utf-8")
        assert '"quoted ""message"""' in content

        for handler in list(logging.getLogger().handlers):
            handler.close()
            logging.getLogger().removeHandler(handler)
