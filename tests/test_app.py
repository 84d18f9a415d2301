"""Tests for app.py - startup wiring."""

from unittest.mock import patch

import pytest

pytest.importorskip("PyQt6.QtWebSockets")

from roompresets.app import RoomPresetsApp  # noqa: E402
from roompresets.config.settings import Preset  # noqa: E402


@pytest.fixture
def app(settings, gateway):
    presets_app = RoomPresetsApp(settings, gateway)
    yield presets_app
    presets_app.shutdown()


class TestStartup:
    """Tests for RoomPresetsApp.start()."""

    def test_renders_panel_without_match(self, app, gateway):
        app.start()

        assert 'room-presets' in gateway.panels
        assert app.session.active_index is None
        assert gateway.call_names().count('save_panel') == 1

    def test_remembers_active_layout(self, app, gateway):
        gateway.active_layout = 'Grid'
        app.start()
        assert app.session.current_layout == 'Grid'

    def test_layout_read_failure_is_tolerated(self, app, gateway):
        gateway.failing.add('get_active_layout')
        app.start()
        assert app.session.current_layout is None
        assert 'room-presets' in gateway.panels

    def test_matching_device_is_highlighted(self, settings, gateway):
        settings.presets.append(Preset(
            name='Current',
            displays={'outputRoles': ['Auto', 'Auto', 'Auto'], 'monitorRole': 'Auto'},
            camera={'defaultSource': 1, 'speakerTrack': 'Auto'},
        ))
        presets_app = RoomPresetsApp(settings, gateway)
        try:
            presets_app.start()
        finally:
            presets_app.shutdown()

        assert presets_app.session.active_index == 2
        assert gateway.widget_values['room-preset2'] == 'active'
        assert gateway.call_names().count('save_panel') == 2


class TestScheduleStart:
    """Tests for the delayed start."""

    def test_waits_configured_delay(self, settings, gateway):
        settings.startup_delay_ms = 250
        presets_app = RoomPresetsApp(settings, gateway)
        try:
            with patch('roompresets.app.QTimer') as timer:
                presets_app.schedule_start()
        finally:
            presets_app.shutdown()

        timer.singleShot.assert_called_once_with(250, presets_app.start)
        assert gateway.calls == []
