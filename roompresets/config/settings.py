"""
Configuration management for RoomPresets

The preset table is authored by the operator in YAML and loaded once at
startup. The declared ``displays`` and ``camera`` mappings are kept verbatim
because the state matcher compares them key for key with the device.
"""
import copy
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..core.logging_config import resolve_level

logger = logging.getLogger(__name__)

# Video Output Connector MonitorRole values accepted by RoomOS
OUTPUT_ROLES = ('Auto', 'First', 'Second', 'Third', 'PresentationOnly', 'Recorder')

SPEAKER_TRACK_MODES = ('Activate', 'Deactivate')

# Widget ids carry the preset index as a single trailing digit
MAX_PRESETS = 10

DEFAULT_FOOT_NOTE = '🔳 = Auto | 🟩 = Presentation | 🔲 = Recorder'


@dataclass
class CameraSettings:
    """Typed view of a preset's camera block"""
    input_source: Optional[int] = None
    speaker_track_background: Optional[str] = None
    show_presets: bool = False
    default_preset: Optional[int] = None


@dataclass
class Preset:
    """A named room preset"""
    name: str
    displays: Dict[str, Any]
    guide: str = ""
    camera: Optional[Dict[str, Any]] = None

    @property
    def output_roles(self) -> List[str]:
        return list(self.displays.get('outputRoles', []))

    @property
    def monitor_role(self) -> Optional[str]:
        return self.displays.get('monitorRole')

    @property
    def camera_settings(self) -> Optional[CameraSettings]:
        if self.camera is None:
            return None
        return CameraSettings(
            input_source=self.camera.get('inputSource'),
            speaker_track_background=self.camera.get('speakerTrackBackground'),
            show_presets=bool(self.camera.get('showPresets', False)),
            default_preset=self.camera.get('defaultPreset'),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Preset':
        """
        Build a preset from its YAML mapping.

        Raises:
            ValueError: if the mapping is incomplete or uses unknown values
        """
        name = data.get('name')
        if not name:
            raise ValueError("Preset is missing a name")

        displays = data.get('displays')
        if not isinstance(displays, dict) or not isinstance(displays.get('outputRoles'), list):
            raise ValueError(f"Preset '{name}' needs displays.outputRoles as a list")
        for role in displays['outputRoles']:
            if role not in OUTPUT_ROLES:
                raise ValueError(f"Preset '{name}' has unknown output role '{role}'")

        camera = data.get('camera')
        if camera is not None:
            if not isinstance(camera, dict):
                raise ValueError(f"Preset '{name}' camera block must be a mapping")
            mode = camera.get('speakerTrackBackground')
            if mode is not None and mode not in SPEAKER_TRACK_MODES:
                raise ValueError(f"Preset '{name}' has unknown speakerTrackBackground '{mode}'")

        return cls(
            name=str(name),
            displays=copy.deepcopy(displays),
            guide=str(data.get('guide') or ""),
            camera=copy.deepcopy(camera),
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'name': self.name}
        if self.guide:
            data['guide'] = self.guide
        data['displays'] = copy.deepcopy(self.displays)
        if self.camera is not None:
            data['camera'] = copy.deepcopy(self.camera)
        return data


def default_presets() -> List[Preset]:
    """Example presets used when no configuration file exists"""
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
            camera={
                'inputSource': 1,
                'speakerTrackBackground': 'Activate',
            },
        ),
    ]


@dataclass
class DeviceConfig:
    """Connection details for the RoomOS endpoint"""
    host: str = ""
    port: Optional[int] = None
    username: str = "admin"
    password: str = ""
    use_https: bool = True
    verify_ssl: bool = False
    timeout: float = 5.0

    def get_base_url(self) -> str:
        """Get HTTP(S) base URL for the XML API"""
        scheme = "https" if self.use_https else "http"
        port = f":{self.port}" if self.port else ""
        return f"{scheme}://{self.host}{port}"

    def get_websocket_url(self) -> str:
        """Get JSON-RPC WebSocket URL used for feedback"""
        scheme = "wss" if self.use_https else "ws"
        port = f":{self.port}" if self.port else ""
        return f"{scheme}://{self.host}{port}/ws"


@dataclass
class LoggingSettings:
    """Where and how much to log"""
    directory: str = ""
    level: str = "INFO"
    console_level: str = "WARNING"
    device_log: bool = True

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'LoggingSettings':
        """
        Build logging settings from the YAML `logging` block.

        Raises:
            ValueError: if a level is not a standard logging level name
        """
        settings = cls(
            directory=str(data.get('directory') or ""),
            level=str(data.get('level', 'INFO')).upper(),
            console_level=str(data.get('console_level', 'WARNING')).upper(),
            device_log=bool(data.get('device_log', True)),
        )
        for name in (settings.level, settings.console_level):
            resolve_level(name)
        return settings

    def get_log_dir(self) -> Optional[Path]:
        return Path(self.directory).expanduser() if self.directory else None


@dataclass
class Settings:
    """Main application settings"""
    device: DeviceConfig = field(default_factory=DeviceConfig)
    button_name: str = "Room Presets"
    foot_note: str = DEFAULT_FOOT_NOTE
    camera_control: bool = True
    startup_delay_ms: int = 1000
    presets: List[Preset] = field(default_factory=default_presets)
    logs: LoggingSettings = field(default_factory=LoggingSettings)

    _config_path: str = field(default="", repr=False)

    @property
    def config_path(self) -> Path:
        """Path this configuration was loaded from or will be saved to"""
        return Path(self._config_path) if self._config_path else self.get_config_path()

    @classmethod
    def get_config_path(cls) -> Path:
        """Get the configuration file path"""
        config_dir = Path.home() / ".config" / "roompresets"
        config_dir.mkdir(parents=True, exist_ok=True)
        return config_dir / "settings.yaml"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Settings':
        """
        Build settings from a parsed YAML mapping.

        Raises:
            ValueError: if the preset table is invalid
        """
        device_data = data.get('device') or {}
        device = DeviceConfig(
            host=device_data.get('host', ''),
            port=device_data.get('port'),
            username=device_data.get('username', 'admin'),
            password=device_data.get('password', ''),
            use_https=device_data.get('use_https', True),
            verify_ssl=device_data.get('verify_ssl', False),
            timeout=float(device_data.get('timeout', 5.0)),
        )

        if 'presets' in data:
            presets = [Preset.from_dict(p) for p in data.get('presets') or []]
        else:
            presets = default_presets()
        if len(presets) > MAX_PRESETS:
            raise ValueError(f"At most {MAX_PRESETS} presets are supported, got {len(presets)}")

        return cls(
            device=device,
            button_name=data.get('button_name', 'Room Presets'),
            foot_note=data.get('foot_note', DEFAULT_FOOT_NOTE) or '',
            camera_control=data.get('camera_control', True),
            startup_delay_ms=int(data.get('startup_delay_ms', 1000)),
            presets=presets,
            logs=LoggingSettings.from_dict(data.get('logging') or {}),
        )

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> 'Settings':
        """Load settings from file, falling back to defaults"""
        if config_path is None:
            config_path = cls.get_config_path()

        if config_path.exists():
            try:
                with open(config_path, 'r', encoding='utf-8') as f:
                    data = yaml.safe_load(f) or {}
                settings = cls.from_dict(data)
                settings._config_path = str(config_path)
                logger.info(f"Loaded {len(settings.presets)} presets from {config_path}")
                return settings
            except (yaml.YAMLError, ValueError, TypeError, AttributeError) as e:
                logger.error(f"Error loading settings from {config_path}: {e}")

        settings = cls()
        settings._config_path = str(config_path)
        return settings

    def save(self):
        """Save settings to file"""
        config_path = self.config_path
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False,
                           allow_unicode=True, sort_keys=False)

    def get_preset(self, index: int) -> Optional[Preset]:
        """Get preset by position"""
        if 0 <= index < len(self.presets):
            return self.presets[index]
        return None

    def to_dict(self) -> dict:
        """Convert settings to a YAML-ready dictionary"""
        return {
            'device': {
                'host': self.device.host,
                'port': self.device.port,
                'username': self.device.username,
                'password': self.device.password,
                'use_https': self.device.use_https,
                'verify_ssl': self.device.verify_ssl,
                'timeout': self.device.timeout,
            },
            'button_name': self.button_name,
            'foot_note': self.foot_note,
            'camera_control': self.camera_control,
            'startup_delay_ms': self.startup_delay_ms,
            'presets': [preset.to_dict() for preset in self.presets],
            'logging': {
                'directory': self.logs.directory,
                'level': self.logs.level,
                'console_level': self.logs.console_level,
                'device_log': self.logs.device_log,
            },
        }
