"""Tests for config/settings.py - preset table loading and validation."""

from pathlib import Path

import pytest
import yaml

from roompresets.config.settings import (
    CameraSettings,
    DeviceConfig,
    LoggingSettings,
    MAX_PRESETS,
    Preset,
    Settings,
)

EXAMPLE_CONFIG = """
device:
  host: 10.0.0.20
  username: integrator
  password: secret
button_name: Classroom
foot_note: ''
camera_control: false
startup_delay_ms: 250
logging:
  directory: ~/roompresets-logs
  level: debug
  device_log: false
presets:
  - name: Lecture
    guide: '🟩🔲'
    displays:
      outputRoles: [PresentationOnly, Recorder]
      monitorRole: Dual
  - name: Discussion
    displays:
      outputRoles: [Auto, Auto]
    camera:
      inputSource: 2
      speakerTrackBackground: Activate
"""


class TestPreset:
    """Tests for Preset.from_dict() and accessors."""

    def test_from_dict(self):
        preset = Preset.from_dict({
            'name': 'Meeting',
            'guide': 'g',
            'displays': {'outputRoles': ['Auto', 'Recorder']},
            'camera': {'inputSource': 1, 'speakerTrackBackground': 'Activate',
                       'showPresets': True, 'defaultPreset': 4},
        })
        assert preset.output_roles == ['Auto', 'Recorder']
        assert preset.monitor_role is None
        assert preset.camera_settings == CameraSettings(
            input_source=1, speaker_track_background='Activate',
            show_presets=True, default_preset=4)

    def test_declared_blocks_kept_verbatim(self):
        displays = {'outputRoles': ['Auto'], 'monitorRole': 'Single'}
        preset = Preset.from_dict({'name': 'P', 'displays': displays})
        assert preset.displays == displays
        assert preset.displays is not displays

    def test_no_camera(self):
        preset = Preset.from_dict({'name': 'P', 'displays': {'outputRoles': ['Auto']}})
        assert preset.camera is None
        assert preset.camera_settings is None

    @pytest.mark.parametrize("data,message", [
        ({'displays': {'outputRoles': ['Auto']}}, 'missing a name'),
        ({'name': 'P'}, 'outputRoles'),
        ({'name': 'P', 'displays': {'outputRoles': 'Auto'}}, 'outputRoles'),
        ({'name': 'P', 'displays': {'outputRoles': ['Sideways']}}, 'unknown output role'),
        ({'name': 'P', 'displays': {'outputRoles': ['Auto']}, 'camera': 3}, 'mapping'),
        ({'name': 'P', 'displays': {'outputRoles': ['Auto']},
          'camera': {'speakerTrackBackground': 'Maybe'}}, 'speakerTrackBackground'),
    ])
    def test_invalid_presets_rejected(self, data, message):
        with pytest.raises(ValueError, match=message):
            Preset.from_dict(data)

    def test_to_dict_round_trip(self, presets):
        assert Preset.from_dict(presets[0].to_dict()) == presets[0]


class TestDeviceConfig:
    """Tests for DeviceConfig URLs."""

    def test_https_urls(self):
        config = DeviceConfig(host='codec.local')
        assert config.get_base_url() == 'https://codec.local'
        assert config.get_websocket_url() == 'wss://codec.local/ws'

    def test_http_with_port(self):
        config = DeviceConfig(host='10.0.0.5', port=8080, use_https=False)
        assert config.get_base_url() == 'http://10.0.0.5:8080'
        assert config.get_websocket_url() == 'ws://10.0.0.5:8080/ws'


class TestSettings:
    """Tests for Settings load/save."""

    def test_defaults(self):
        settings = Settings()
        assert [p.name for p in settings.presets] == ['Instructor', 'Meeting']
        assert settings.camera_control is True
        assert settings.startup_delay_ms == 1000
        assert settings.foot_note

    def test_load_example(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text(EXAMPLE_CONFIG, encoding='utf-8')

        settings = Settings.load(path)

        assert settings.device.host == '10.0.0.20'
        assert settings.device.username == 'integrator'
        assert settings.button_name == 'Classroom'
        assert settings.foot_note == ''
        assert settings.camera_control is False
        assert settings.startup_delay_ms == 250
        assert [p.name for p in settings.presets] == ['Lecture', 'Discussion']
        assert settings.presets[0].monitor_role == 'Dual'
        assert settings.config_path == path

    def test_missing_file_uses_defaults(self, tmp_path):
        path = tmp_path / 'absent.yaml'
        settings = Settings.load(path)
        assert [p.name for p in settings.presets] == ['Instructor', 'Meeting']
        assert settings.config_path == path

    def test_invalid_file_falls_back_to_defaults(self, tmp_path, caplog):
        path = tmp_path / 'settings.yaml'
        path.write_text("presets:\n  - name: Broken\n    displays: {}\n", encoding='utf-8')

        settings = Settings.load(path)

        assert [p.name for p in settings.presets] == ['Instructor', 'Meeting']
        assert 'Error loading settings' in caplog.text

    def test_too_many_presets_rejected(self):
        data = {'presets': [{'name': f'P{i}', 'displays': {'outputRoles': ['Auto']}}
                            for i in range(MAX_PRESETS + 1)]}
        with pytest.raises(ValueError, match='At most'):
            Settings.from_dict(data)

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / 'nested' / 'settings.yaml'
        settings = Settings(_config_path=str(path))
        settings.device.host = 'codec.local'
        settings.save()

        data = yaml.safe_load(path.read_text(encoding='utf-8'))
        assert data['device']['host'] == 'codec.local'
        assert data['presets'][0]['camera']['defaultPreset'] == 2

        reloaded = Settings.load(path)
        assert reloaded.presets == settings.presets
        assert reloaded.foot_note == settings.foot_note

    def test_get_preset(self, settings):
        assert settings.get_preset(1).name == 'Meeting'
        assert settings.get_preset(2) is None
        assert settings.get_preset(-1) is None

    def test_logging_block(self, tmp_path):
        path = tmp_path / 'settings.yaml'
        path.write_text(EXAMPLE_CONFIG, encoding='utf-8')

        logs = Settings.load(path).logs

        assert logs.level == 'DEBUG'
        assert logs.console_level == 'WARNING'
        assert logs.device_log is False
        assert logs.get_log_dir() == Path.home() / 'roompresets-logs'

    def test_logging_defaults(self):
        logs = Settings.from_dict({}).logs
        assert logs == LoggingSettings()
        assert logs.get_log_dir() is None

    def test_unknown_log_level_rejected(self):
        with pytest.raises(ValueError, match='Unknown log level'):
            Settings.from_dict({'logging': {'level': 'chatty'}})
