from .settings import (
    MAX_PRESETS,
    OUTPUT_ROLES,
    CameraSettings,
    DeviceConfig,
    LoggingSettings,
    Preset,
    Settings,
)

__all__ = [
    'MAX_PRESETS',
    'OUTPUT_ROLES',
    'CameraSettings',
    'DeviceConfig',
    'LoggingSettings',
    'Preset',
    'Settings',
]
