"""Shared fixtures for roompresets tests."""

import threading
from typing import List, Optional

import pytest

from roompresets.config.settings import Preset, Settings
from roompresets.core.session import Session
from roompresets.device.base import CameraPreset, DeviceGateway, GatewayError
from roompresets.presets.applier import PresetApplier
from roompresets.ui.controller import UIController


class FakeGateway(DeviceGateway):
    """In-memory device that records every call in order.

    Methods named in ``failing`` raise GatewayError instead of acting.
    """

    def __init__(self, connectors: int = 3):
        self.output_roles = {i: 'Auto' for i in range(1, connectors + 1)}
        self.monitors = 'Auto'
        self.speaker_track_mode = 'Auto'
        self.active_layout: Optional[str] = None
        self.camera_presets = {}
        self.panels = {}
        self.widget_values = {}
        self.calls: List[tuple] = []
        self.failing = set()
        self._lock = threading.Lock()

    def _record(self, name, *args):
        with self._lock:
            self.calls.append((name, *args))
        if name in self.failing:
            raise GatewayError(f"{name} failed")

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]

    def get_output_roles(self):
        self._record('get_output_roles')
        return [self.output_roles[i] for i in sorted(self.output_roles)]

    def set_output_role(self, connector_id, role):
        self._record('set_output_role', connector_id, role)
        self.output_roles[connector_id] = role

    def get_monitors(self):
        self._record('get_monitors')
        return self.monitors

    def set_monitors(self, value):
        self._record('set_monitors', value)
        self.monitors = value

    def get_speaker_track_mode(self):
        self._record('get_speaker_track_mode')
        return self.speaker_track_mode

    def get_active_layout(self):
        self._record('get_active_layout')
        return self.active_layout

    def set_main_video_source(self, connector_id):
        self._record('set_main_video_source', connector_id)

    def activate_speaker_track(self):
        self._record('activate_speaker_track')

    def deactivate_speaker_track(self):
        self._record('deactivate_speaker_track')

    def activate_speaker_track_background(self):
        self._record('activate_speaker_track_background')

    def list_camera_presets(self, camera_id):
        self._record('list_camera_presets', camera_id)
        return list(self.camera_presets.get(camera_id, []))

    def activate_camera_preset(self, preset_id):
        self._record('activate_camera_preset', preset_id)

    def save_panel(self, panel_id, panel_xml):
        self._record('save_panel', panel_id)
        self.panels[panel_id] = panel_xml

    def set_widget_value(self, widget_id, value):
        self._record('set_widget_value', widget_id, value)
        self.widget_values[widget_id] = value


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def presets():
    """Instructor (Deactivate, shows camera presets) and Meeting (Activate)."""
    return [
        Preset(
            name='Instructor',
            guide='🟩🟩🔲',
            displays={'outputRoles': ['PresentationOnly', 'PresentationOnly', 'Recorder']},
            camera={
                'inputSource': 3,
                'speakerTrackBackground': 'Deactivate',
                'showPresets': True,
                'defaultPreset': 2,
            },
        ),
        Preset(
            name='Meeting',
            guide='🔳🔳🔲',
            displays={'outputRoles': ['Auto', 'Auto', 'Recorder']},
            camera={'inputSource': 1, 'speakerTrackBackground': 'Activate'},
        ),
    ]


@pytest.fixture
def settings(presets, tmp_path):
    return Settings(presets=presets, _config_path=str(tmp_path / "settings.yaml"))


@pytest.fixture
def session():
    return Session()


@pytest.fixture
def ui(gateway, settings):
    return UIController(gateway, settings)


@pytest.fixture
def applier(gateway):
    applier = PresetApplier(gateway)
    yield applier
    applier.shutdown()


@pytest.fixture
def camera_presets():
    return [CameraPreset(id=1, name='Wide'), CameraPreset(id=2, name='Close')]
